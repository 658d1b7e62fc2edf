"""HTTP client for the Steam news feed.

Performs exactly one GET per call and validates the top-level shape of the
response. Filtering and parsing of individual items lives in
:mod:`patchping.feed.item_parser`.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import jsonschema
import requests
from jsonschema import ValidationError

from patchping.configuration.feed_settings import FeedSettings
from patchping.datatypes.errors import FeedDecodeError, FeedNetworkError, FeedSchemaError
from patchping.util.logger import get_logger

logger = get_logger("feed_client")


RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["appnews"],
    "properties": {
        "appnews": {
            "type": "object",
            "required": ["newsitems"],
            "properties": {
                "newsitems": {"type": "array"},
            },
        },
    },
}


class FeedClient:
    """Fetches raw news items for one Steam app.

    Args:
        settings: Feed settings supplying the endpoint, query and timeout.
    """

    def __init__(self, settings: FeedSettings) -> None:
        self.settings = settings

    def fetch(self) -> List[Dict[str, Any]]:
        """Fetch the feed and return its raw ``newsitems`` list.

        This blocks the calling thread; use :meth:`fetch_async` from the event loop.

        Raises:
            FeedNetworkError: On transport failure, timeout or non-2xx status.
            FeedDecodeError: If the body is not valid JSON.
            FeedSchemaError: If ``appnews.newsitems`` is missing or not a list.
        """
        logger.debug("[FEED] Requesting %s (appid=%s)", self.settings.url, self.settings.app_id)
        try:
            response = requests.get(
                self.settings.url,
                params=self.settings.query_params(),
                timeout=self.settings.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FeedNetworkError(f"Request to news feed failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise FeedDecodeError(f"News feed returned invalid JSON: {exc}") from exc

        return extract_news_items(payload)

    async def fetch_async(self) -> List[Dict[str, Any]]:
        """Run :meth:`fetch` in a worker thread so the event loop stays free."""
        return await asyncio.to_thread(self.fetch)


def extract_news_items(payload: Any) -> List[Dict[str, Any]]:
    """Validate the response envelope and return the unfiltered item list.

    Raises:
        FeedSchemaError: If the payload does not match :data:`RESPONSE_SCHEMA`.
    """
    try:
        jsonschema.validate(instance=payload, schema=RESPONSE_SCHEMA)
    except ValidationError as exc:
        raise FeedSchemaError(f"Unexpected news feed shape: {exc.message}") from exc

    items = payload["appnews"]["newsitems"]
    logger.debug("[FEED] Received %d raw news items", len(items))
    return items
