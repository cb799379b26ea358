"""Feature API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from pick3_lottery.api.deps import get_service
from pick3_lottery.config import settings
from pick3_lottery.schemas.features import FullFeatures
from pick3_lottery.services.lottery_service import LotteryService

router = APIRouter()


@router.get("", response_model=FullFeatures)
async def get_features(
    window: int | None = Query(None, ge=settings.MIN_WINDOW, le=settings.MAX_WINDOW),
    service: LotteryService = Depends(get_service),
):
    """Basic, positional and composite features of the latest draw."""
    result = service.get_features(window)
    if result is None:
        raise HTTPException(status_code=404, detail="Not enough draws for the requested window")
    return result
