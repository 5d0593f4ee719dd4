from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

from .parser import ParsedResult

LOGGER = logging.getLogger(__name__)

SendFunc = Callable[[str], Awaitable[object]]


def mention(player_id: int) -> str:
    return f"<@{player_id}>"


def format_announcement(winners: List[ParsedResult]) -> str:
    if not winners:
        raise ValueError("Cannot announce an empty winner set")
    first = winners[0]
    attempts = int(first.attempts)
    winner_label = "Winners" if len(winners) > 1 else "Winner"
    attempt_label = "attempt" if attempts == 1 else "attempts"
    tags = ", ".join(mention(winner.player_id) for winner in winners)
    return (
        f"Current {winner_label} for Wordle {first.round_number:,} "
        f"with {attempts} {attempt_label}: {tags}"
    )


async def announce(winners: List[ParsedResult], send: SendFunc) -> Optional[str]:
    if not winners:
        return None
    message = format_announcement(winners)
    LOGGER.info("Announcing winners: %s", message)
    await send(message)
    return message
