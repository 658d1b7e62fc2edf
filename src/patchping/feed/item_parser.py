"""Filtering and typed parsing of raw Steam news items.

Each item is handled on its own: a malformed entry is logged and skipped and
never stops the rest of the batch from being parsed.
"""

from __future__ import annotations

import datetime
from typing import Any, Iterable, List

from jsonschema import Draft7Validator

from patchping.configuration.feed_settings import DEFAULT_PATCH_TAG
from patchping.datatypes.errors import ItemError
from patchping.datatypes.news_datatypes import NewsItem
from patchping.util.logger import get_logger

logger = get_logger("item_parser")


ITEM_SCHEMA = {
    "type": "object",
    "required": ["gid", "title", "author", "url", "date"],
    "properties": {
        "gid": {"type": "string"},
        "title": {"type": "string"},
        "author": {"type": "string"},
        "url": {"type": "string"},
        "date": {"type": "integer"},
        "tags": {"type": "array"},
    },
}

_item_validator = Draft7Validator(ITEM_SCHEMA)


def has_patch_tag(raw: dict, patch_tag: str = DEFAULT_PATCH_TAG) -> bool:
    """Return True if the item's tag list contains ``patch_tag``.

    Items without a tag list, or with a non-list ``tags`` value, are not
    patch notes.
    """
    tags = raw.get("tags")
    if tags is None:
        logger.debug("[PARSE] Item %r has no tags", raw.get("gid"))
        return False
    if not isinstance(tags, list):
        logger.warning("[PARSE] Item %r has non-list tags: %r", raw.get("gid"), tags)
        return False
    return any(isinstance(tag, str) and tag == patch_tag for tag in tags)


def build_news_item(raw: dict) -> NewsItem:
    """Convert a raw item into a :class:`NewsItem`.

    Raises:
        ItemError: If a required field is missing or has the wrong type.
    """
    errors = sorted(_item_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        raise ItemError("; ".join(error.message for error in errors))
    # jsonschema's "integer" also admits floats with a zero fraction
    if not isinstance(raw["date"], int):
        raise ItemError(f"date {raw['date']!r} is not an integer")

    try:
        published_at = datetime.datetime.fromtimestamp(int(raw["date"]), tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ItemError(f"date {raw['date']!r} is out of range") from exc

    return NewsItem(
        identifier=raw["gid"],
        title=raw["title"],
        author=raw["author"],
        url=raw["url"],
        published_at=published_at,
        tags=frozenset(tag for tag in raw.get("tags", []) if isinstance(tag, str)),
    )


def parse_news_item(raw: Any, patch_tag: str = DEFAULT_PATCH_TAG) -> NewsItem | None:
    """Return a NewsItem for a well-formed patch-notes item, otherwise None."""
    if not isinstance(raw, dict):
        logger.warning("[PARSE] Skipping non-object news item: %r", raw)
        return None
    if not has_patch_tag(raw, patch_tag):
        return None
    try:
        return build_news_item(raw)
    except ItemError as exc:
        logger.warning("[PARSE] Skipping malformed news item %r: %s", raw.get("gid"), exc)
        return None


def parse_news_items(raw_items: Iterable[Any], patch_tag: str = DEFAULT_PATCH_TAG) -> List[NewsItem]:
    """Parse a whole batch, keeping only well-formed patch-notes items in feed order."""
    items: List[NewsItem] = []
    for raw in raw_items:
        item = parse_news_item(raw, patch_tag)
        if item is not None:
            items.append(item)
    logger.debug("[PARSE] Parsed %d patch-notes items", len(items))
    return items
