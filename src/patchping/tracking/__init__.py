"""
Deduplication of feed items.

- **freshness_tracker.py**: Lock-guarded "latest accepted item" state and the
  acceptance rule used to decide what gets announced.
"""
