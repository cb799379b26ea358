"""Runtime settings API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from pick3_lottery.api.deps import get_service
from pick3_lottery.schemas.lottery import WindowUpdate
from pick3_lottery.services.lottery_service import LotteryService

router = APIRouter()


@router.get("/window", response_model=WindowUpdate)
async def get_window(service: LotteryService = Depends(get_service)):
    return WindowUpdate(window_size=service.window_size)


@router.put("/window", response_model=WindowUpdate)
async def set_window(payload: WindowUpdate, service: LotteryService = Depends(get_service)):
    try:
        return WindowUpdate(window_size=service.set_window_size(payload.window_size))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
