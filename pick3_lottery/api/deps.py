"""Dependency injection for FastAPI."""

from fastapi import Request

from pick3_lottery.services.lottery_service import LotteryService

_service: LotteryService | None = None


def get_service(request: Request) -> LotteryService:
    """Service bound to the running app, falling back to a process-wide instance."""
    global _service
    service = getattr(request.app.state, "service", None)
    if service is not None:
        return service
    if _service is None:
        _service = LotteryService()
    return _service
