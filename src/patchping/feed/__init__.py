"""
Steam news feed access.

- **feed_client.py**: One GET per poll, mapped onto network, decode and
  schema errors.
- **item_parser.py**: Patch-notes tag filter and per-item typed parsing.
"""
