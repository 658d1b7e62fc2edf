"""
Presence correlation.

- **presence_correlator.py**: Maps each joined guild to the non-bot members
  whose current activities show the tracked game.
"""
