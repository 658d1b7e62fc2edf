from pathlib import Path

import pytest

from patchping.configuration.app_configuration import AppConfig
from patchping.configuration.feed_settings import DEFAULT_FEED_URL, FeedSettings
from patchping.configuration.guild_channels import load_guild_channels
from patchping.datatypes.discord_datatypes import ChannelID, GuildID


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "app_config.yml"


def test_app_config_parses_yaml(config_path: Path) -> None:
    config_path.write_text(
        """
feed:
  app_id: 730
  count: 5
  max_length: 100
  timeout_seconds: 20
  patch_tag: hotfix
poll:
  interval_seconds: 120
game:
  name: Counter-Strike
guild_channels:
  "434511133383065620":
    alert_channel_id: 999205229067259934
    announcement_channel_id: 999205213783208016
  983098809733226577: [983098809733226580, 999215240464052294]
""",
        encoding="utf-8",
    )

    config = AppConfig(config_path)

    assert config.feed.query_params() == {"appid": 730, "count": 5, "maxlength": 100, "format": "json"}
    assert config.feed.timeout_seconds == 20
    assert config.feed.patch_tag == "hotfix"
    assert config.poll_interval == 120
    assert config.game_name == "Counter-Strike"
    assert config.activity_match == "counter-strike"

    channels = config.guild_channels
    assert set(channels) == {GuildID(434511133383065620), GuildID(983098809733226577)}
    first = channels[GuildID("434511133383065620")]
    assert first.alert_channel_id == ChannelID(999205229067259934)
    assert first.announcement_channel_id == ChannelID(999205213783208016)
    assert channels[GuildID(983098809733226577)].alert_channel_id == 983098809733226580


def test_app_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    config = AppConfig(tmp_path / "does_not_exist.yml")

    assert config.reload() == {}
    assert config.poll_interval == 60.0
    assert config.game_name == "Dota"
    assert config.activity_match == "dota"
    assert config.guild_channels == {}
    assert config.feed.url == DEFAULT_FEED_URL
    assert config.feed.query_params() == {"appid": 570, "count": 10, "maxlength": 300, "format": "json"}
    assert config.feed.patch_tag == "patchnotes"


def test_app_config_malformed_file_returns_defaults(config_path: Path) -> None:
    config_path.write_text("- just\n- a\n- list\n", encoding="utf-8")
    assert AppConfig(config_path).reload() == {}

    config_path.write_text("feed: [unclosed", encoding="utf-8")
    assert AppConfig(config_path).reload() == {}


def test_timeout_is_clamped_to_poll_interval(config_path: Path) -> None:
    config_path.write_text("feed:\n  timeout_seconds: 300\npoll:\n  interval_seconds: 45\n", encoding="utf-8")
    assert AppConfig(config_path).feed.timeout_seconds == 45


def test_invalid_poll_interval_falls_back(config_path: Path) -> None:
    config_path.write_text("poll:\n  interval_seconds: -5\n", encoding="utf-8")
    assert AppConfig(config_path).poll_interval == 60.0


def test_reload_picks_up_changes(config_path: Path) -> None:
    config_path.write_text("game:\n  name: Dota\n", encoding="utf-8")
    config = AppConfig(config_path)
    config_path.write_text("game:\n  name: Deadlock\n", encoding="utf-8")

    config.reload()

    assert config.game_name == "Deadlock"


def test_feed_settings_bad_values_use_defaults() -> None:
    settings = FeedSettings({"app_id": "not-a-number", "timeout_seconds": None})
    assert settings.app_id == 570
    assert settings.timeout_seconds == 30.0


def test_load_guild_channels_drops_invalid_entries() -> None:
    table = load_guild_channels(
        {
            "1": {"alert_channel_id": 11, "announcement_channel_id": 12},
            "2": {"alert_channel_id": 21},
            "three": [31, 32],
            "4": [41],
            "5": "41,42",
        }
    )
    assert list(table) == [GuildID(1)]


def test_load_guild_channels_rejects_non_mapping() -> None:
    assert load_guild_channels([1, 2, 3]) == {}
    assert load_guild_channels(None) == {}
