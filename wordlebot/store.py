from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .parser import ParsedResult

LOGGER = logging.getLogger(__name__)


class ResultStore:
    """Process-lifetime results, keyed by round and kept in submission order.

    The first submission for a (player, round) pair wins; later ones are
    dropped. Mutation never awaits, so a single event loop needs no lock.
    """

    def __init__(self):
        self._rounds: Dict[int, List[ParsedResult]] = {}

    def __len__(self) -> int:
        return sum(len(results) for results in self._rounds.values())

    def contains(self, player_id: int, round_number: int) -> bool:
        return any(
            existing.player_id == player_id
            for existing in self._rounds.get(round_number, [])
        )

    def add(self, result: ParsedResult) -> List[ParsedResult]:
        if self.contains(result.player_id, result.round_number):
            LOGGER.debug(
                "Result already exists: %s - %s",
                result.round_number,
                result.display_name,
            )
        else:
            self._rounds.setdefault(result.round_number, []).append(result)
        return self.results_for(result.round_number)

    def results_for(self, round_number: int) -> List[ParsedResult]:
        return list(self._rounds.get(round_number, []))

    def rounds(self) -> List[int]:
        return sorted(self._rounds)

    def latest_round(self) -> Optional[int]:
        return max(self._rounds) if self._rounds else None
