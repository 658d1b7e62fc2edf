from typing import Any, Dict

DEFAULT_FEED_URL = "http://api.steampowered.com/ISteamNews/GetNewsForApp/v0002/"
DEFAULT_APP_ID = 570
DEFAULT_PATCH_TAG = "patchnotes"


class FeedSettings:
    """Typed accessors for the ``feed`` section of the app config.

    Mirrors the query parameters sent to the Steam news endpoint. Values that
    cannot be coerced fall back to their defaults.
    """

    def __init__(self, data: Dict[str, Any] | None = None) -> None:
        self.data: Dict[str, Any] = data or {}

    def _int(self, key: str, default: int) -> int:
        try:
            return int(self.data.get(key, default))
        except (TypeError, ValueError):
            return default

    @property
    def url(self) -> str:
        return str(self.data.get("url") or DEFAULT_FEED_URL)

    @property
    def app_id(self) -> int:
        return self._int("app_id", DEFAULT_APP_ID)

    @property
    def count(self) -> int:
        return self._int("count", 10)

    @property
    def max_length(self) -> int:
        return self._int("max_length", 300)

    @property
    def timeout_seconds(self) -> float:
        try:
            return float(self.data.get("timeout_seconds", 30.0))
        except (TypeError, ValueError):
            return 30.0

    @property
    def patch_tag(self) -> str:
        return str(self.data.get("patch_tag") or DEFAULT_PATCH_TAG)

    def query_params(self) -> Dict[str, Any]:
        """Return the fixed query string sent with every fetch."""
        return {
            "appid": self.app_id,
            "count": self.count,
            "maxlength": self.max_length,
            "format": "json",
        }
