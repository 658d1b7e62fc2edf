"""
Configuration management for Patchping.

- **app_configuration.py**: YAML loader for ``config/app_config.yml`` exposing
  feed, polling and tracked-game settings. Falls back to defaults on missing
  or malformed files.

- **feed_settings.py**: Typed accessors for the Steam news feed query.

- **guild_channels.py**: Read-only table mapping each guild to its alert and
  announcement channels.
"""
