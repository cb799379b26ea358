"""APScheduler interval job that keeps the draw store in sync with a remote feed."""

from collections.abc import Awaitable, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from pick3_lottery.config import settings
from pick3_lottery.scraper.remote_client import fetch_draw_text, parse_feed
from pick3_lottery.services.lottery_service import LotteryService

Fetcher = Callable[[], Awaitable[str]]

_scheduler: AsyncIOScheduler | None = None


def _default_fetcher() -> Fetcher:
    async def fetch() -> str:
        return await fetch_draw_text(settings.SYNC_URL)
    return fetch


async def sync_once(service: LotteryService, fetch: Fetcher | None = None) -> int:
    """Fetch the feed once and merge it; returns the number of draws merged.

    Errors are logged and reported as zero so a failing feed never stops the job.
    """
    fetch = fetch or _default_fetcher()
    try:
        text = await fetch()
    except Exception as e:
        logger.error("Draw sync failed: {}", e)
        return 0

    merged = service.merge(parse_feed(text))
    if merged:
        logger.info("Draw sync merged {} draws ({} stored)", merged, len(service.store))
    return merged


def start_scheduler(service: LotteryService, fetch: Fetcher | None = None):
    """Start the interval sync job."""
    global _scheduler
    if _scheduler is not None:
        return

    _scheduler = AsyncIOScheduler()
    _scheduler.add_job(
        sync_once, "interval",
        args=[service, fetch],
        seconds=settings.SYNC_INTERVAL_SECONDS,
        id="draw_sync",
        max_instances=1,
        coalesce=True,
    )
    _scheduler.start()
    logger.info("Draw sync scheduled every {}s from {}", settings.SYNC_INTERVAL_SECONDS, settings.SYNC_URL)


def stop_scheduler():
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Draw sync scheduler stopped")
