"""
Per-guild alert/announcement channel table.

The table is read once from the ``guild_channels`` section of the app config
and is read-only afterwards, so lookups need no locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from patchping.datatypes.discord_datatypes import ChannelID, GuildID
from patchping.util.logger import get_logger

logger = get_logger("guild_channels")


@dataclass(frozen=True, slots=True)
class GuildChannelConfig:
    """Where a guild wants its pings and its announcement embeds."""

    guild_id: GuildID
    alert_channel_id: ChannelID
    announcement_channel_id: ChannelID


def load_guild_channels(raw: Any) -> Dict[GuildID, GuildChannelConfig]:
    """Build the channel table from the raw YAML mapping.

    Accepts either ``{guild_id: {alert_channel_id, announcement_channel_id}}``
    or ``{guild_id: [alert_channel_id, announcement_channel_id]}``. Invalid
    entries are logged and dropped so one typo does not disable every guild.
    """
    if not raw:
        return {}
    if not isinstance(raw, Mapping):
        logger.error("[GUILD CHANNELS] 'guild_channels' must be a mapping, got %s", type(raw).__name__)
        return {}

    table: Dict[GuildID, GuildChannelConfig] = {}
    for raw_guild_id, entry in raw.items():
        try:
            guild_id = GuildID(raw_guild_id)
            if isinstance(entry, Mapping):
                alert = entry["alert_channel_id"]
                announcement = entry["announcement_channel_id"]
            elif isinstance(entry, (list, tuple)) and len(entry) == 2:
                alert, announcement = entry
            else:
                raise ValueError(f"unsupported entry {entry!r}")
            table[guild_id] = GuildChannelConfig(
                guild_id=guild_id,
                alert_channel_id=ChannelID(alert),
                announcement_channel_id=ChannelID(announcement),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("[GUILD CHANNELS] Ignoring invalid entry for guild %r: %s", raw_guild_id, exc)

    logger.debug("[GUILD CHANNELS] Loaded channel config for %d guilds", len(table))
    return table
