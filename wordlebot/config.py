import os
from dataclasses import dataclass, field
from typing import Any, List

import yaml

CONFIG_ENV_KEY = "CONFIG_PATH"
TOKEN_ENV_KEY = "DISCORD_BOT_TOKEN"
DEFAULT_CONFIG_PATH = "config.yml"
DEFAULT_DATABASE_PATH = "wordle.db"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class BotConfig:
    token: str
    log_level: str
    database_path: str
    channel_ids: List[int] = field(default_factory=list)


def _read_token(data: dict) -> str:
    # The config file wins; the env var keeps the token out of checked-in YAML.
    token = str(data.get("token") or os.environ.get(TOKEN_ENV_KEY) or "").strip()
    if not token:
        raise ValueError(f"No bot token: set 'token' or {TOKEN_ENV_KEY}")
    return token


def _read_log_level(value: Any) -> str:
    level = str(value or "INFO").upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log_level {level!r}; expected one of {LOG_LEVELS}")
    return level


def _read_channel_ids(value: Any) -> List[int]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("'channel_ids' must be a list of channel ids")
    try:
        return [int(channel_id) for channel_id in value]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid channel id in 'channel_ids': {exc}") from exc


def load_config(path: str | None = None) -> BotConfig:
    config_path = path or os.environ.get(CONFIG_ENV_KEY, DEFAULT_CONFIG_PATH)
    with open(config_path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping of settings")

    return BotConfig(
        token=_read_token(data),
        log_level=_read_log_level(data.get("log_level")),
        database_path=str(data.get("database_path") or DEFAULT_DATABASE_PATH),
        channel_ids=_read_channel_ids(data.get("channel_ids")),
    )
