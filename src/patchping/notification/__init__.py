"""
Patch notification delivery.

- **guild_router.py**: Looks up each guild's alert and announcement channels
  and fans notifications out across guilds with isolated failures.
- **dispatcher.py**: Builds the mention alert and announcement embed and sends
  them, logging delivery failures.
"""
