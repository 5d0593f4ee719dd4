from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from .notifier import SendFunc, announce
from .parser import ParsedResult, parse_result
from .store import ResultStore
from .winners import determine_winners

LOGGER = logging.getLogger(__name__)


class ScoreRepositoryLike(Protocol):
    def create_wordle(self, game_number: int) -> bool: ...

    def create_player(self, discord_id: int, discord_name: str) -> bool: ...

    def create_score(
        self,
        discord_id: int,
        game_number: int,
        attempts: str,
        is_win: bool = False,
        is_tie: bool = False,
    ) -> bool: ...

    def update_round_standings(self, game_number: int, winner_ids: List[int]) -> bool: ...


@dataclass
class ChatMessage:
    """The parts of an inbound chat message the tracker relies on."""

    content: str
    author_id: int
    author_name: str
    reply: SendFunc
    channel_id: Optional[int] = None


@dataclass
class PersistJob:
    result: ParsedResult


class WordleTracker:
    def __init__(
        self,
        repository: ScoreRepositoryLike | None = None,
        store: ResultStore | None = None,
    ):
        self.repository = repository
        self.store = store if store is not None else ResultStore()
        self.persist_queue: asyncio.Queue[PersistJob] = asyncio.Queue()

    async def handle_message(self, message: ChatMessage) -> Optional[str]:
        """Run one message through parse, store, resolve and announce.

        Returns the announcement text when one was sent.
        """
        result = parse_result(message.content, message.author_id, message.author_name)
        if result is None:
            LOGGER.debug("Message was determined to not be intended for the bot")
            return None
        if self.store.contains(result.player_id, result.round_number):
            LOGGER.debug(
                "Duplicate Wordle %s submission from %s (%s) ignored",
                result.round_number,
                result.display_name,
                result.player_id,
            )
            return None

        round_results = self.store.add(result)
        LOGGER.info(
            "Accepted Wordle %s result %s/6 from %s (%s)",
            result.round_number,
            result.attempts,
            result.display_name,
            result.player_id,
        )

        self.enqueue_persistence(result)
        try:
            winners = determine_winners(round_results)
            return await announce(winners, message.reply)
        except Exception as exc:
            LOGGER.exception("Error processing Wordle result: %s", exc)
            return None

    def current_winners(
        self, round_number: int | None = None
    ) -> Tuple[Optional[int], List[ParsedResult]]:
        if round_number is None:
            round_number = self.store.latest_round()
        if round_number is None:
            return None, []
        return round_number, determine_winners(self.store.results_for(round_number))

    def enqueue_persistence(self, result: ParsedResult) -> bool:
        if self.repository is None:
            return False
        job = PersistJob(result=result)
        self.persist_queue.put_nowait(job)
        return True

    async def persist(self, job: PersistJob) -> bool:
        repo = self.repository
        if repo is None:
            return False
        result = job.result
        # Standings come from the store at write time; jobs may run out of order.
        winner_ids = [
            winner.player_id
            for winner in determine_winners(self.store.results_for(result.round_number))
        ]
        is_win = result.player_id in winner_ids
        outcomes = {
            "wordle": repo.create_wordle(result.round_number),
            "player": repo.create_player(result.player_id, result.display_name),
            "score": repo.create_score(
                result.player_id,
                result.round_number,
                str(result.attempts),
                is_win=is_win,
                is_tie=is_win and len(winner_ids) > 1,
            ),
            "standings": repo.update_round_standings(
                result.round_number, winner_ids
            ),
        }
        failed = [name for name, ok in outcomes.items() if not ok]
        if failed:
            LOGGER.warning(
                "Persistence failed for Wordle %s result from %s (%s); "
                "in-memory result kept: %s",
                result.round_number,
                result.display_name,
                result.player_id,
                ", ".join(failed),
            )
            return False
        return True

    async def flush_persistence(self) -> int:
        processed = 0
        while not self.persist_queue.empty():
            job = self.persist_queue.get_nowait()
            try:
                await self.persist(job)
            except Exception as exc:
                LOGGER.exception("Persistence job failed: %s", exc)
            finally:
                self.persist_queue.task_done()
            processed += 1
        return processed

    async def run_persistence_worker(self):
        while True:
            job = await self.persist_queue.get()
            try:
                await self.persist(job)
            except Exception as exc:
                LOGGER.exception("Persistence job failed: %s", exc)
            finally:
                self.persist_queue.task_done()

