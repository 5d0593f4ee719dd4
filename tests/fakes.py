import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from wordlebot.tracker import ChatMessage


@dataclass
class FakeChannel:
    id: int = 100
    sent: List[str] = field(default_factory=list)
    should_fail: bool = False
    delay: float = 0.0

    async def send(self, content=None, **kwargs):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.should_fail:
            raise RuntimeError("simulated send failure")
        self.sent.append(content)


@dataclass
class FakeAuthor:
    id: int
    name: str
    bot: bool = False


@dataclass
class FakeMessage:
    content: str
    author: FakeAuthor
    channel: FakeChannel


class FakeRepository:
    def __init__(self, fail_on: Optional[set] = None, raise_for: Optional[set] = None):
        self.fail_on = fail_on or set()
        self.raise_for = raise_for or set()
        self.wordles: List[int] = []
        self.players: List[Tuple[int, str]] = []
        self.scores: List[tuple] = []
        self.standings: List[Tuple[int, List[int]]] = []

    def create_wordle(self, game_number: int) -> bool:
        self.wordles.append(game_number)
        return "wordle" not in self.fail_on

    def create_player(self, discord_id: int, discord_name: str) -> bool:
        if discord_id in self.raise_for:
            raise RuntimeError(f"simulated database error for {discord_id}")
        self.players.append((discord_id, discord_name))
        return "player" not in self.fail_on

    def create_score(
        self, discord_id, game_number, attempts, is_win=False, is_tie=False
    ) -> bool:
        self.scores.append((discord_id, game_number, attempts, is_win, is_tie))
        return "score" not in self.fail_on

    def update_round_standings(self, game_number, winner_ids) -> bool:
        self.standings.append((game_number, list(winner_ids)))
        return "standings" not in self.fail_on


def make_message(
    content: str, author_id: int = 1, name: str = "player", channel=None
) -> ChatMessage:
    channel = channel or FakeChannel()
    return ChatMessage(
        content=content,
        author_id=author_id,
        author_name=name,
        reply=channel.send,
        channel_id=channel.id,
    )
