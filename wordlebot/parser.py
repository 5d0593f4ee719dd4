from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

LOGGER = logging.getLogger(__name__)

FAILURE_MARKERS = frozenset({"X", "x"})
MAX_ATTEMPTS = 6

# "Wordle 1,234 3/6", "Wordle 987 🎉 2/6", "Wordle 1,234 X/6"
WORDLE_PATTERN = re.compile(
    r"Wordle (?P<round>\d{1,3}(?:,\d{3})+|\d+) (?:🎉 ?)?(?P<attempts>[Xx1-6])/6",
    re.ASCII,
)

Attempts = Union[int, str]


@dataclass(frozen=True)
class ParsedResult:
    player_id: int
    display_name: str
    round_number: int
    attempts: Attempts

    def __post_init__(self):
        if self.round_number < 1:
            raise ValueError(f"Invalid round number {self.round_number}")
        if isinstance(self.attempts, str):
            if self.attempts not in FAILURE_MARKERS:
                raise ValueError(f"Invalid failure marker {self.attempts!r}")
        elif not 1 <= self.attempts <= MAX_ATTEMPTS:
            raise ValueError(f"Attempts out of range: {self.attempts}")

    @property
    def failed(self) -> bool:
        return isinstance(self.attempts, str)

    def share_line(self) -> str:
        return f"Wordle {self.round_number:,} {self.attempts}/{MAX_ATTEMPTS}"


def parse_round_number(raw: str) -> int:
    return int(raw.replace(",", ""))


def parse_attempts(raw: str) -> Attempts:
    if raw in FAILURE_MARKERS:
        return raw
    return int(raw)


def parse_result(
    text: str | None, player_id: int, display_name: str
) -> Optional[ParsedResult]:
    """Extract a Wordle share result from free text, or ``None`` when absent."""
    match = WORDLE_PATTERN.search(text or "")
    if not match:
        return None
    round_number = parse_round_number(match.group("round"))
    if round_number < 1:
        LOGGER.debug("Ignoring Wordle share with round %s", round_number)
        return None
    return ParsedResult(
        player_id=player_id,
        display_name=display_name,
        round_number=round_number,
        attempts=parse_attempts(match.group("attempts")),
    )
