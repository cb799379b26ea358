"""HTTP client for a remote draw feed.

The feed is expected to return the plain-text import format, one
`period hundred ten one` line per draw.
"""

import aiohttp
from loguru import logger

from pick3_lottery.config import settings
from pick3_lottery.schemas.lottery import Draw
from pick3_lottery.store.draw_store import parse_draw_line


async def fetch_draw_text(url: str, timeout: float | None = None) -> str:
    """Download the raw feed body."""
    timeout = aiohttp.ClientTimeout(total=timeout or settings.SYNC_TIMEOUT_SECONDS)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.get(url) as response:
            response.raise_for_status()
            return await response.text()


def parse_feed(text: str) -> list[Draw]:
    draws = []
    skipped = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        draw = parse_draw_line(line)
        if draw is None:
            skipped += 1
            continue
        draws.append(draw)
    if skipped:
        logger.warning("Feed contained {} unparseable lines", skipped)
    return draws
