"""
Plain data types shared across Patchping.

- **discord_datatypes.py**: Snowflake wrappers (GuildID, ChannelID, UserID).
- **news_datatypes.py**: NewsItem, FreshnessState, InterestedUser, poll cycle
  results and per-guild notification outcomes.
- **errors.py**: Exception hierarchy for feed, item, resolution and delivery failures.
"""
