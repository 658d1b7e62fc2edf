"""Background loop that polls the news feed and announces new patches.

One cycle is: fetch -> parse -> dedup -> correlate presences -> notify guilds.
Every failure inside a cycle is logged and treated as "no new item"; the loop
then sleeps for the fixed interval and tries again. Only cancellation stops it.
"""

from __future__ import annotations

import asyncio

import discord

from patchping.configuration.app_configuration import AppConfig
from patchping.datatypes.errors import FeedError, FeedNetworkError
from patchping.datatypes.news_datatypes import (
    FetchError,
    NewItem,
    NoNewItem,
    ParseError,
    PollCycleResult,
)
from patchping.feed.feed_client import FeedClient
from patchping.feed.item_parser import parse_news_items
from patchping.notification.guild_router import GuildNotificationRouter, summarize_outcomes
from patchping.presence.presence_correlator import interested_users_by_guild
from patchping.tracking.freshness_tracker import FreshnessTracker
from patchping.util.logger import get_logger

logger = get_logger("update_poll_scheduler")


class UpdatePollScheduler:
    """
    Owns the freshness tracker, feed client and router for the poll loop.

    Args:
        feed_client: Client used to fetch raw news items.
        tracker: Freshness tracker deciding which items are new.
        router: Router delivering notifications to guilds.
        patch_tag: Tag an item must carry to be considered.
        activity_match: Substring looked for in member activity names.
        interval_seconds: Delay between the end of one cycle and the next.
    """

    def __init__(
        self,
        feed_client: FeedClient,
        tracker: FreshnessTracker,
        router: GuildNotificationRouter,
        *,
        patch_tag: str,
        activity_match: str,
        interval_seconds: float = 60.0,
    ) -> None:
        self.feed_client = feed_client
        self.tracker = tracker
        self.router = router
        self.patch_tag = patch_tag
        self.activity_match = activity_match
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    @classmethod
    def from_config(cls, config: AppConfig) -> "UpdatePollScheduler":
        """Build a scheduler with fresh state from the application config."""
        feed_settings = config.feed
        return cls(
            FeedClient(feed_settings),
            FreshnessTracker(),
            GuildNotificationRouter(config.guild_channels, config.game_name),
            patch_tag=feed_settings.patch_tag,
            activity_match=config.activity_match,
            interval_seconds=config.poll_interval,
        )

    async def run_cycle(self, bot: discord.Bot) -> PollCycleResult:
        """Run one full poll cycle and report what happened."""
        try:
            raw_items = await self.feed_client.fetch_async()
        except FeedNetworkError as exc:
            logger.error("[POLL] Error checking for updates: %s", exc)
            return FetchError(exc.kind)
        except FeedError as exc:
            logger.error("[POLL] Could not understand news feed response: %s", exc)
            return ParseError(exc.kind)

        items = parse_news_items(raw_items, self.patch_tag)
        newest = await self.tracker.select_newest(items)
        if newest is None:
            logger.debug("[POLL] No new update among %d patch-notes item(s)", len(items))
            return NoNewItem()

        interested = interested_users_by_guild(bot, self.activity_match)
        outcomes = await self.router.notify_all(bot, newest, interested)
        counts = summarize_outcomes(outcomes)
        logger.info(
            "[POLL] Announced '%s' to %d guild(s): %d alert(s), %d announcement(s), %d skipped",
            newest.title,
            len(outcomes),
            counts["alerts"],
            counts["announcements"],
            counts["skipped"],
        )
        return NewItem(newest)

    async def _run_loop(self, bot: discord.Bot) -> None:
        """Wait for the session once, then cycle and sleep forever."""
        await bot.wait_until_ready()
        logger.info("[POLL] Starting update polling (interval=%.1fs)", self.interval_seconds)
        try:
            while True:
                try:
                    await self.run_cycle(bot)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    logger.exception("[POLL] Unexpected error during poll cycle: %s", exc)
                await asyncio.sleep(self.interval_seconds)
        except asyncio.CancelledError:
            logger.info("[POLL] Update polling cancelled")
            raise

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, bot: discord.Bot) -> None:
        """Start the background poll task if not already running."""
        if self.is_running():
            logger.warning("[POLL] Poll task already running")
            return
        self._task = asyncio.create_task(self._run_loop(bot))
        logger.info("[POLL] Created update poll task")

    def cancel(self) -> None:
        """Request cancellation without waiting (for synchronous callers)."""
        if self._task and not self._task.done():
            self._task.cancel()
            logger.info("[POLL] Poll task cancellation requested")

    async def shutdown(self) -> None:
        """Cancel the poll task and wait for it to finish."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("[POLL] Scheduler shutdown complete")
