"""Exception hierarchy for the update-polling pipeline.

Feed errors are raised by :mod:`patchping.feed.feed_client` and turned into a
``FetchError`` cycle result by the poll scheduler. The remaining classes mark
failures that are logged where they happen and never leave their component.
"""

from __future__ import annotations


class PatchpingError(Exception):
    """Base class for all Patchping errors."""


class FeedError(PatchpingError):
    """Base class for failures while retrieving the news feed."""

    kind = "feed"


class FeedNetworkError(FeedError):
    """Transport failure, DNS failure, timeout or non-success HTTP status."""

    kind = "network"


class FeedDecodeError(FeedError):
    """The response body was not valid JSON."""

    kind = "decode"


class FeedSchemaError(FeedError):
    """The JSON body lacks ``appnews``/``newsitems`` or they have the wrong type."""

    kind = "schema"


class ItemError(PatchpingError):
    """A single feed item is missing a field or has a field of the wrong type."""

    kind = "item"


class ResolutionError(PatchpingError):
    """A guild, channel or member could not be resolved from config or cache."""


class DeliveryError(PatchpingError):
    """A message could not be sent to a channel."""
