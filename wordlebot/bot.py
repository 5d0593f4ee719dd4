from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import discord
from discord import app_commands
from discord.ext import commands

from .config import BotConfig, load_config
from .models import SqliteScoreRepository, close_db, init_db
from .notifier import format_announcement
from .tracker import ChatMessage, WordleTracker

# Default to INFO until the configured level is applied at startup
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s"
)
LOGGER = logging.getLogger(__name__)


def chat_message_from_discord(message: Any) -> ChatMessage:
    author = message.author
    channel = message.channel
    return ChatMessage(
        content=message.content or "",
        author_id=int(author.id),
        author_name=getattr(author, "name", None) or str(author.id),
        reply=channel.send,
        channel_id=getattr(channel, "id", None),
    )


def winners_reply(tracker: WordleTracker, round_number: Optional[int] = None) -> str:
    tracked = tracker.store.rounds()
    if not tracked:
        return "No Wordle results tracked yet."
    if round_number is not None and round_number not in tracked:
        labels = ", ".join(f"{number:,}" for number in tracked)
        return f"No results tracked for Wordle {round_number:,}. Tracked rounds: {labels}"
    resolved_round, winners = tracker.current_winners(round_number)
    if not winners:
        return f"No winners yet for Wordle {resolved_round:,}."
    return format_announcement(winners)


class WordleBot(commands.Bot):
    def __init__(self, config: BotConfig, tracker: WordleTracker | None = None):
        intents = discord.Intents.default()
        intents.guilds = True
        intents.message_content = True
        super().__init__(command_prefix="!", intents=intents)
        self.config = config
        self.watched_channel_ids = set(config.channel_ids)
        if tracker is None:
            init_db(config.database_path)
            tracker = WordleTracker(repository=SqliteScoreRepository())
        self.tracker = tracker
        self.persist_worker_task: asyncio.Task[None] | None = None

    async def setup_hook(self) -> None:
        await self.tree.sync()
        self._start_workers()

    def _start_workers(self):
        if self.persist_worker_task:
            return
        self.persist_worker_task = self.loop.create_task(
            self.tracker.run_persistence_worker()
        )

    async def close(self) -> None:
        if self.persist_worker_task:
            self.persist_worker_task.cancel()
            try:
                await self.persist_worker_task
            except asyncio.CancelledError:
                pass
        pending = await self.tracker.flush_persistence()
        if pending:
            LOGGER.info("Flushed %s pending persistence jobs on shutdown", pending)
        close_db()
        await super().close()

    async def on_ready(self):
        LOGGER.info("Bot ready as %s", self.user)
        if self.watched_channel_ids:
            LOGGER.info("Watching channels %s", sorted(self.watched_channel_ids))

    def should_track(self, message: Any) -> bool:
        author = getattr(message, "author", None)
        if author is None or getattr(author, "bot", False):
            return False
        if self.user is not None and author.id == self.user.id:
            return False
        if self.watched_channel_ids:
            channel_id = getattr(getattr(message, "channel", None), "id", None)
            return channel_id in self.watched_channel_ids
        return True

    async def on_message(self, message: discord.Message):
        if not self.should_track(message):
            return
        await self.tracker.handle_message(chat_message_from_discord(message))


async def setup_commands(bot: WordleBot):
    tree = bot.tree

    @tree.error
    async def on_app_command_error(
        interaction: discord.Interaction, error: app_commands.AppCommandError
    ):
        LOGGER.exception("App command error: %s", error)
        message = f"Command failed: {error}"
        try:
            if interaction.response.is_done():
                await interaction.followup.send(message, ephemeral=True)
            else:
                await interaction.response.send_message(message, ephemeral=True)
        except Exception as exc:
            LOGGER.warning("Failed sending error response for command: %s", exc)

    @tree.command(name="winners", description="Show the current Wordle winners")
    @app_commands.describe(
        round_number="Wordle number; defaults to the latest tracked round"
    )
    async def winners(
        interaction: discord.Interaction,
        round_number: Optional[app_commands.Range[int, 1]] = None,
    ):
        LOGGER.info(
            "/winners by %s (%s) for round %s",
            interaction.user,
            getattr(interaction.user, "id", None),
            round_number or "latest",
        )
        await interaction.response.send_message(
            winners_reply(bot.tracker, round_number), ephemeral=True
        )


async def main():
    bot_config = load_config()
    logging.getLogger().setLevel(bot_config.log_level)
    LOGGER.setLevel(bot_config.log_level)
    bot = WordleBot(bot_config)
    await setup_commands(bot)
    async with bot:
        await bot.start(bot_config.token)


if __name__ == "__main__":
    asyncio.run(main())
