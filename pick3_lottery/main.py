"""FastAPI application entry point."""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from pick3_lottery.config import settings
from pick3_lottery.services.lottery_service import LotteryService

# Configure loguru
logger.remove()
logger.add(sys.stderr, level="DEBUG" if settings.DEBUG else "INFO")
logger.add(settings.LOG_DIR / "app.log", rotation="10 MB", retention="7 days", level="INFO")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("Starting {} ...", settings.APP_NAME)

    service = LotteryService()
    if settings.PERSIST_ENABLED and settings.DATA_FILE.exists():
        try:
            service.load(settings.DATA_FILE)
        except ValueError as e:
            logger.warning("Ignoring unreadable snapshot {}: {}", settings.DATA_FILE, e)
    app.state.service = service

    if settings.SYNC_ENABLED and settings.SYNC_URL:
        from pick3_lottery.scraper.scheduler import start_scheduler
        start_scheduler(service)

    yield

    # Shutdown
    if settings.SYNC_ENABLED and settings.SYNC_URL:
        from pick3_lottery.scraper.scheduler import stop_scheduler
        stop_scheduler()

    if settings.PERSIST_ENABLED:
        service.save(settings.DATA_FILE)
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Three-digit lottery feature analysis and next-draw prediction",
    lifespan=lifespan,
)

# Include API routers
from pick3_lottery.api.v1.router import api_router  # noqa: E402
app.include_router(api_router, prefix="/api/v1")
