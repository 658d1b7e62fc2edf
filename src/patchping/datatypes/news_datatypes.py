"""
Data types for the update-polling pipeline.

- NewsItem: one parsed, patch-notes tagged feed entry.
- FreshnessState: timestamp and id of the most recently accepted item.
- InterestedUser: a guild member currently running the tracked game.
- NoNewItem / NewItem / FetchError / ParseError: outcome of one poll cycle.
- GuildNotifyOutcome: what was delivered to a single guild.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import FrozenSet, Union

from patchping.datatypes.discord_datatypes import GuildID, UserID


@dataclass(frozen=True, slots=True)
class NewsItem:
    """An immutable patch announcement parsed from the news feed."""

    identifier: str
    title: str
    author: str
    url: str
    published_at: datetime.datetime
    tags: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(slots=True)
class FreshnessState:
    """Most recently accepted item. Only the freshness tracker mutates this."""

    last_accepted_at: datetime.datetime
    last_accepted_id: str = ""

    @classmethod
    def starting_now(cls) -> "FreshnessState":
        return cls(last_accepted_at=datetime.datetime.now(datetime.timezone.utc))


@dataclass(frozen=True, slots=True)
class InterestedUser:
    """A non-bot member whose presence shows the tracked game."""

    user_id: UserID
    display_handle: str

    @property
    def mention(self) -> str:
        return f"<@{self.user_id}>"


# --------------------------------------------------------------------------
# Poll cycle results
# --------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NoNewItem:
    """The feed was read but nothing newer than the freshness state was found."""


@dataclass(frozen=True, slots=True)
class NewItem:
    """A new patch item was accepted this cycle."""

    item: NewsItem


@dataclass(frozen=True, slots=True)
class FetchError:
    """The feed could not be retrieved (``kind`` is e.g. ``"network"``)."""

    kind: str


@dataclass(frozen=True, slots=True)
class ParseError:
    """The feed was retrieved but could not be understood (``"decode"``/``"schema"``)."""

    kind: str


PollCycleResult = Union[NoNewItem, NewItem, FetchError, ParseError]


@dataclass(slots=True)
class GuildNotifyOutcome:
    """Per-guild delivery record returned by the notification router."""

    guild_id: GuildID
    alert_sent: bool = False
    announcement_sent: bool = False
    skipped_reason: str | None = None
