from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from peewee import (
    AutoField,
    CharField,
    DateTimeField,
    IntegerField,
    Model,
    SqliteDatabase,
)

LOGGER = logging.getLogger(__name__)

database = SqliteDatabase(None)


def utcnow_naive() -> datetime:
    """Return current UTC time without tzinfo for SQLite storage."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(Model):
    created_at = DateTimeField(default=utcnow_naive)
    updated_at = DateTimeField(default=utcnow_naive)

    def save(self, *args, **kwargs):  # type: ignore[override]
        self.updated_at = utcnow_naive()
        return super().save(*args, **kwargs)

    class Meta:
        database = database


class Wordle(BaseModel):
    game_number = IntegerField(primary_key=True)


class Player(BaseModel):
    discord_id = IntegerField(primary_key=True)
    discord_name = CharField()


class Score(BaseModel):
    id = AutoField()
    discord_id = IntegerField()
    game_number = IntegerField()
    attempts = CharField(max_length=1)
    is_win = IntegerField(default=0)
    is_tie = IntegerField(default=0)

    class Meta:
        indexes = ((("discord_id", "game_number"), True),)


def init_db(path: str) -> SqliteDatabase:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    database.init(path)
    database.connect(reuse_if_open=True)
    database.create_tables([Wordle, Player, Score])
    return database


def close_db():
    if not database.is_closed():
        database.close()


def create_wordle(game_number: int) -> bool:
    try:
        Wordle.insert(game_number=game_number).on_conflict_ignore().execute()
        return True
    except Exception as exc:
        LOGGER.exception("Failed to record Wordle %s: %s", game_number, exc)
        return False


def create_player(discord_id: int, discord_name: str) -> bool:
    try:
        Player.insert(
            discord_id=discord_id, discord_name=discord_name
        ).on_conflict_ignore().execute()
        return True
    except Exception as exc:
        LOGGER.exception("Failed to record player %s: %s", discord_id, exc)
        return False


def create_score(
    discord_id: int,
    game_number: int,
    attempts: str,
    is_win: bool = False,
    is_tie: bool = False,
) -> bool:
    try:
        Score.insert(
            discord_id=discord_id,
            game_number=game_number,
            attempts=str(attempts),
            is_win=int(is_win),
            is_tie=int(is_tie),
        ).on_conflict_ignore().execute()
        return True
    except Exception as exc:
        LOGGER.exception(
            "Failed to record score for %s on Wordle %s: %s",
            discord_id,
            game_number,
            exc,
        )
        return False


def update_round_standings(game_number: int, winner_ids: Iterable[int]) -> bool:
    winners = list(winner_ids)
    tie = int(len(winners) > 1)
    try:
        with database.atomic():
            Score.update(is_win=0, is_tie=0, updated_at=utcnow_naive()).where(
                Score.game_number == game_number
            ).execute()
            if winners:
                Score.update(is_win=1, is_tie=tie, updated_at=utcnow_naive()).where(
                    (Score.game_number == game_number)
                    & (Score.discord_id.in_(winners))
                ).execute()
        return True
    except Exception as exc:
        LOGGER.exception(
            "Failed to update standings for Wordle %s: %s", game_number, exc
        )
        return False


class SqliteScoreRepository:
    create_wordle = staticmethod(create_wordle)
    create_player = staticmethod(create_player)
    create_score = staticmethod(create_score)
    update_round_standings = staticmethod(update_round_standings)
