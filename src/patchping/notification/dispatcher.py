"""
Message formatting and sending for patch notifications.

Two messages go out per guild: a plain-text alert that mentions every member
currently playing, and an embed announcing the update. Each send is attempted
on its own and failures are logged, never raised.
"""

from __future__ import annotations

import random
from typing import Sequence

import discord

from patchping.datatypes.errors import DeliveryError
from patchping.datatypes.news_datatypes import InterestedUser, NewsItem
from patchping.util.logger import get_logger

logger = get_logger("dispatcher")

MAX_EMBED_COLOR = 0xFFFFFF


def format_mentions(users: Sequence[InterestedUser]) -> str:
    """Join user mentions: ``A``, ``A and B``, ``A , B , C and D``."""
    mentions = [user.mention for user in users]
    if not mentions:
        return ""
    if len(mentions) == 1:
        return mentions[0]
    return " , ".join(mentions[:-1]) + " and " + mentions[-1]


def format_alert_message(users: Sequence[InterestedUser], game_name: str) -> str | None:
    """Return the alert text for ``users``, or None when nobody is playing."""
    if not users:
        return None
    return f"Attention {format_mentions(users)} : You need to restart {game_name}. There is an update!"


def random_embed_color() -> discord.Color:
    """Pick a random accent colour for the announcement embed."""
    return discord.Color(random.randint(0, MAX_EMBED_COLOR))


def build_announcement_embed(item: NewsItem) -> discord.Embed:
    """Create the announcement embed for ``item``."""
    embed = discord.Embed(
        title=item.title,
        url=item.url,
        description=f"A new update is available! Please see [here]({item.url}) for more information.",
        color=random_embed_color(),
        timestamp=item.published_at,
    )
    embed.set_author(name=item.author)
    return embed


async def _deliver(channel: discord.abc.Messageable, label: str, **kwargs) -> bool:
    try:
        await channel.send(**kwargs)
    except Exception as exc:
        error = DeliveryError(f"Failed to send {label} message to channel {getattr(channel, 'id', '?')}: {exc}")
        logger.error("[DISPATCH] %s", error)
        return False
    return True


async def send_alert(
    channel: discord.abc.Messageable,
    users: Sequence[InterestedUser],
    game_name: str,
) -> bool:
    """Ping ``users`` in ``channel``. Returns True only if a message was sent."""
    content = format_alert_message(users, game_name)
    if content is None:
        return False
    sent = await _deliver(channel, "alert", content=content)
    if sent:
        logger.info("[DISPATCH] Pinged %d user(s) in channel %s", len(users), getattr(channel, "id", "?"))
    return sent


async def send_announcement(channel: discord.abc.Messageable, item: NewsItem) -> bool:
    """Post the announcement embed for ``item`` in ``channel``."""
    sent = await _deliver(channel, "announcement", embed=build_announcement_embed(item))
    if sent:
        logger.info("[DISPATCH] Announced '%s' in channel %s", item.title, getattr(channel, "id", "?"))
    return sent
