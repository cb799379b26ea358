"""Statistics API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from pick3_lottery.api.deps import get_service
from pick3_lottery.schemas.ml import BacktestRequest, ValidationRecord
from pick3_lottery.schemas.statistics import BacktestSummary, StatisticsSummary
from pick3_lottery.services.lottery_service import LotteryService

router = APIRouter()


@router.get("/summary", response_model=StatisticsSummary)
async def summary(service: LotteryService = Depends(get_service)):
    return service.statistics()


@router.get("/validations", response_model=list[ValidationRecord])
async def validations(service: LotteryService = Depends(get_service)):
    return service.validations


@router.post("/backtest", response_model=BacktestSummary)
async def backtest(request: BacktestRequest, service: LotteryService = Depends(get_service)):
    """Walk-forward backtest over the stored history."""
    try:
        return service.backtest(request.window_size, request.test_size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
