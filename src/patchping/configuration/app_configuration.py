from __future__ import annotations
from pathlib import Path
import fcntl
from typing import Any, Dict
import yaml

from patchping.configuration.feed_settings import FeedSettings
from patchping.configuration.guild_channels import GuildChannelConfig, load_guild_channels
from patchping.datatypes.discord_datatypes import GuildID
from patchping.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_POLL_INTERVAL = 60.0
DEFAULT_GAME_NAME = "Dota"


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    The class caches the contents of ``./config/app_config.yml`` and exposes
    typed shortcuts for the feed, polling, tracked game and guild channel
    sections. A missing or malformed file yields an empty mapping so every
    shortcut falls back to its default.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self._guild_channels: Dict[GuildID, GuildChannelConfig] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
            return {}
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.error("[APP CONFIGURATION] Config %s must be a mapping, got %s", self.config_path, type(data).__name__)
            return {}
        return data

    def _section(self, key: str) -> Dict[str, Any]:
        value = self._data.get(key, {})
        return value if isinstance(value, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping.

        The guild channel table is rebuilt from the fresh data.
        """
        self._data = self.load_from_disk()
        self._guild_channels = load_guild_channels(self._data.get("guild_channels"))
        return self._data

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def feed(self) -> FeedSettings:
        """Return the feed settings wrapped in a FeedSettings helper.

        The timeout is clamped to the poll interval so a hung request can
        never stall the loop for longer than one cycle.
        """
        settings = dict(self._section("feed"))
        interval = self.poll_interval
        if FeedSettings(settings).timeout_seconds > interval:
            logger.warning(
                "[APP CONFIGURATION] feed.timeout_seconds exceeds poll interval; clamping to %.1fs", interval
            )
            settings["timeout_seconds"] = interval
        return FeedSettings(settings)

    @property
    def poll_interval(self) -> float:
        """Return the delay between poll cycles in seconds. Default is 60."""
        try:
            interval = float(self._section("poll").get("interval_seconds", DEFAULT_POLL_INTERVAL))
        except (TypeError, ValueError):
            return DEFAULT_POLL_INTERVAL
        return interval if interval > 0 else DEFAULT_POLL_INTERVAL

    @property
    def game_name(self) -> str:
        """Display name of the tracked game, used in alert messages."""
        return str(self._section("game").get("name") or DEFAULT_GAME_NAME)

    @property
    def activity_match(self) -> str:
        """Case-insensitive substring looked for in member activity names."""
        value = self._section("game").get("activity_match") or self.game_name
        return str(value).lower()

    @property
    def guild_channels(self) -> Dict[GuildID, GuildChannelConfig]:
        """Return the per-guild alert/announcement channel table."""
        return self._guild_channels


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
