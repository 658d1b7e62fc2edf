"""Cog that ties the update poll loop to the bot lifecycle.

The poll loop is started on the first ``on_ready`` and cancelled when the cog
is unloaded. Reconnects fire ``on_ready`` again; the scheduler ignores the
second start.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from patchping.configuration.app_configuration import app_config
from patchping.scheduler.update_poll_scheduler import UpdatePollScheduler
from patchping.util.logger import get_logger

logger = get_logger("update_poll_cog")


class UpdatePollCog(commands.Cog):
    """Starts and stops the news poll loop."""

    def __init__(self, bot: discord.Bot, scheduler: UpdatePollScheduler | None = None) -> None:
        self.bot = bot
        self.scheduler = scheduler or UpdatePollScheduler.from_config(app_config)
        logger.info("[UPDATE POLL] Update poll cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self) -> None:
        if self.bot.user:
            logger.info("Bot connected as %s (ID: %s)", self.bot.user, self.bot.user.id)
        else:
            logger.warning("[UPDATE POLL] Bot partially connected, user info not yet available.")

        if not self.scheduler.is_running():
            self.scheduler.start(self.bot)

    def cog_unload(self) -> None:
        self.scheduler.cancel()
        logger.info("[UPDATE POLL] Stopped")


def setup(bot: discord.Bot) -> None:
    """Register the UpdatePollCog with the bot."""
    bot.add_cog(UpdatePollCog(bot))
