"""
Pytest configuration and fixtures for Patchping tests.
"""

import datetime
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def make_raw_item(gid="1001", date=1_700_000_000, tags=("patchnotes",), **overrides):
    """Build a raw Steam news item as returned by GetNewsForApp."""
    item = {
        "gid": gid,
        "title": f"Gameplay Update {gid}",
        "author": "Valve",
        "url": f"https://store.steampowered.com/news/{gid}",
        "date": date,
    }
    if tags is not None:
        item["tags"] = list(tags)
    item.update(overrides)
    return item


def make_member(member_id, *activity_names, bot=False, display_name=None):
    return SimpleNamespace(
        id=member_id,
        bot=bot,
        display_name=display_name or f"user{member_id}",
        activities=[SimpleNamespace(name=name) for name in activity_names],
    )


def make_channel(channel_id, *, fail=False):
    send = AsyncMock(side_effect=RuntimeError("Missing Permissions")) if fail else AsyncMock()
    return SimpleNamespace(id=channel_id, send=send)


def make_guild(guild_id, members=(), channels=(), unavailable=False):
    by_id = {channel.id: channel for channel in channels}
    return SimpleNamespace(
        id=guild_id,
        members=list(members),
        unavailable=unavailable,
        get_channel=lambda channel_id: by_id.get(channel_id),
    )


def make_bot(*guilds):
    by_id = {guild.id: guild for guild in guilds}
    return SimpleNamespace(
        guilds=list(guilds),
        get_guild=lambda guild_id: by_id.get(guild_id),
        wait_until_ready=AsyncMock(),
    )


@pytest.fixture
def raw_item_factory():
    return make_raw_item
