"""Routes a new patch item to each guild's configured channels."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Mapping, Sequence

import discord

from patchping.configuration.guild_channels import GuildChannelConfig
from patchping.datatypes.discord_datatypes import ChannelID, GuildID
from patchping.datatypes.errors import ResolutionError
from patchping.datatypes.news_datatypes import GuildNotifyOutcome, InterestedUser, NewsItem
from patchping.notification import dispatcher
from patchping.util.logger import get_logger

logger = get_logger("guild_router")


class GuildNotificationRouter:
    """
    Resolves per-guild destinations and hands messages to the dispatcher.

    Args:
        guild_channels: Read-only table of guild id to channel config.
        game_name: Display name of the game used in alert messages.
    """

    def __init__(self, guild_channels: Mapping[GuildID, GuildChannelConfig], game_name: str) -> None:
        self._guild_channels = guild_channels
        self.game_name = game_name

    def resolve_channels(self, guild: discord.Guild) -> tuple[discord.abc.Messageable, discord.abc.Messageable]:
        """Return the live (alert, announcement) channels for ``guild``.

        Raises:
            ResolutionError: If the guild has no config or a channel is missing.
        """
        guild_id = GuildID.from_guild(guild)
        config = self._guild_channels.get(guild_id)
        if config is None:
            raise ResolutionError(f"No channels configured for guild {guild_id}")

        alert_channel = self._get_channel(guild, config.alert_channel_id, "alert")
        announcement_channel = self._get_channel(guild, config.announcement_channel_id, "announcement")
        return alert_channel, announcement_channel

    @staticmethod
    def _get_channel(guild: discord.Guild, channel_id: ChannelID, label: str) -> discord.abc.Messageable:
        channel = guild.get_channel(channel_id.to_int())
        if channel is None:
            raise ResolutionError(f"No {label} channel found for guild {guild.id} (should be under ID {channel_id})")
        return channel

    async def notify(
        self,
        guild: discord.Guild,
        item: NewsItem,
        interested: Sequence[InterestedUser],
    ) -> GuildNotifyOutcome:
        """Send the alert and announcement for one guild.

        Resolution failures skip the guild. Delivery failures are logged by the
        dispatcher and recorded in the outcome.
        """
        outcome = GuildNotifyOutcome(guild_id=GuildID.from_guild(guild))
        try:
            alert_channel, announcement_channel = self.resolve_channels(guild)
        except ResolutionError as exc:
            logger.warning("[ROUTER] %s; skipping guild", exc)
            outcome.skipped_reason = str(exc)
            return outcome

        outcome.alert_sent = await dispatcher.send_alert(alert_channel, interested, self.game_name)
        outcome.announcement_sent = await dispatcher.send_announcement(announcement_channel, item)
        return outcome

    async def notify_all(
        self,
        bot: discord.Bot,
        item: NewsItem,
        interested_by_guild: Mapping[GuildID, Sequence[InterestedUser]],
    ) -> List[GuildNotifyOutcome]:
        """Notify every guild concurrently, returning outcomes in input order.

        An exception in one guild is logged and recorded; it never cancels the
        other guilds.
        """
        guild_ids = list(interested_by_guild)
        results = await asyncio.gather(
            *(self._notify_by_id(bot, guild_id, item, interested_by_guild[guild_id]) for guild_id in guild_ids),
            return_exceptions=True,
        )

        outcomes: List[GuildNotifyOutcome] = []
        for guild_id, result in zip(guild_ids, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.error("[ROUTER] Unexpected error notifying guild %s: %s", guild_id, result)
                outcomes.append(GuildNotifyOutcome(guild_id=guild_id, skipped_reason=f"error: {result}"))
            else:
                outcomes.append(result)
        return outcomes

    async def _notify_by_id(
        self,
        bot: discord.Bot,
        guild_id: GuildID,
        item: NewsItem,
        interested: Sequence[InterestedUser],
    ) -> GuildNotifyOutcome:
        guild = bot.get_guild(guild_id.to_int())
        if guild is None:
            reason = f"Guild {guild_id} not found in cache"
            logger.warning("[ROUTER] %s; skipping guild", reason)
            return GuildNotifyOutcome(guild_id=guild_id, skipped_reason=reason)
        return await self.notify(guild, item, interested)


def summarize_outcomes(outcomes: Sequence[GuildNotifyOutcome]) -> Dict[str, int]:
    """Count alerts, announcements and skipped guilds for the cycle log line."""
    return {
        "alerts": sum(1 for o in outcomes if o.alert_sent),
        "announcements": sum(1 for o in outcomes if o.announcement_sent),
        "skipped": sum(1 for o in outcomes if o.skipped_reason),
    }
