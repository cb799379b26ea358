"""Prediction API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from pick3_lottery.api.deps import get_service
from pick3_lottery.config import settings
from pick3_lottery.schemas.lottery import Draw
from pick3_lottery.schemas.ml import PredictRequest, Prediction, ValidateRequest, ValidationRecord
from pick3_lottery.services.lottery_service import LotteryService

router = APIRouter()


@router.post("", response_model=Prediction)
async def generate(
    request: PredictRequest | None = None,
    service: LotteryService = Depends(get_service),
):
    """Predict the next period from the stored history."""
    window = request.window_size if request else None
    prediction = service.generate_prediction(window)
    if prediction is None:
        raise HTTPException(
            status_code=422,
            detail=f"At least {settings.MIN_DRAWS} draws are required",
        )
    return prediction


@router.get("/current", response_model=Prediction)
async def current(service: LotteryService = Depends(get_service)):
    if service.current_prediction is None:
        raise HTTPException(status_code=404, detail="No prediction yet")
    return service.current_prediction


@router.get("/history", response_model=list[Prediction])
async def history(service: LotteryService = Depends(get_service)):
    return service.predictions


@router.post("/validate", response_model=ValidationRecord)
async def validate(request: ValidateRequest, service: LotteryService = Depends(get_service)):
    """Score the current prediction against an actual result."""
    actual = Draw(
        id=f"manual_{request.period}",
        period=request.period,
        hundred=request.hundred,
        ten=request.ten,
        one=request.one,
    )
    record = service.validate(actual)
    if record is None:
        raise HTTPException(status_code=404, detail="No prediction to validate")
    return record
