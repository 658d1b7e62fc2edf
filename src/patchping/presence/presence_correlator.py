"""Find guild members who are currently running the tracked game.

Relies on the member and presence caches that Py-Cord fills when the
``members`` and ``presences`` intents are enabled. Nothing here makes an
API call.
"""

from __future__ import annotations

from typing import Dict, List

import discord

from patchping.datatypes.discord_datatypes import GuildID, UserID
from patchping.datatypes.news_datatypes import InterestedUser
from patchping.util.logger import get_logger

logger = get_logger("presence_correlator")


def is_playing(member: discord.Member, game_name: str) -> bool:
    """Return True if any of the member's activities mentions ``game_name``."""
    needle = game_name.lower()
    for activity in member.activities or ():
        name = getattr(activity, "name", None)
        if name and needle in name.lower():
            return True
    return False


def interested_users_in_guild(guild: discord.Guild, game_name: str) -> List[InterestedUser]:
    """Return the non-bot members of ``guild`` who are playing ``game_name``.

    Members whose cached data cannot be read are logged and left out.
    """
    interested: List[InterestedUser] = []
    for member in guild.members:
        try:
            if member.bot or not is_playing(member, game_name):
                continue
            interested.append(InterestedUser(user_id=UserID.from_user(member), display_handle=member.display_name))
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning(
                "[PRESENCE] Could not read member %s in guild %s: %s",
                getattr(member, "id", "<unknown>"),
                guild.id,
                exc,
            )
    return interested


def interested_users_by_guild(bot: discord.Bot, game_name: str) -> Dict[GuildID, List[InterestedUser]]:
    """Map every joined guild to the members currently playing ``game_name``.

    Guilds that are unavailable (outage or stale cache) are logged and
    excluded. Guilds with no players map to an empty list.
    """
    result: Dict[GuildID, List[InterestedUser]] = {}
    for guild in bot.guilds:
        if getattr(guild, "unavailable", False):
            logger.warning("[PRESENCE] Guild %s is unavailable; skipping presence check", guild.id)
            continue
        players = interested_users_in_guild(guild, game_name)
        result[GuildID.from_guild(guild)] = players
        logger.debug("[PRESENCE] %d member(s) playing %s in guild %s", len(players), game_name, guild.id)
    return result
