"""
Background tasks.

- **update_poll_scheduler.py**: The fixed-interval news poll loop. Waits for
  the Discord session once, then runs fetch/dedup/notify cycles forever,
  absorbing every per-cycle failure.
"""
