"""
Patchping - Discord patch-notes pinger

Patchping polls the Steam news feed of a game and, when a new patch-notes
entry appears, pings every guild member who is currently playing and posts an
announcement embed in each configured guild.

Core Components:

- **Feed**: Fetches the Steam news feed and parses patch-notes items
- **Tracking**: Remembers the last announced item so nothing is posted twice
- **Presence**: Finds non-bot members whose activity shows the game
- **Notification**: Resolves each guild's channels and sends the alert and embed
- **Scheduler**: Fixed-interval poll loop started once the bot is ready

Usage:
    from patchping.main import main
    main()
"""
