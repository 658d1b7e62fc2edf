"""
Shared utilities for Patchping.

- **logger.py**: Per-module loggers with a prompt_toolkit console handler and
  a rotating per-session log file under ``logs/``.
"""
