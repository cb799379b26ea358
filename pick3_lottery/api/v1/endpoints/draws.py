"""Draw history API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from pick3_lottery.api.deps import get_service
from pick3_lottery.schemas.lottery import Draw, DrawIn, ImportRequest, ImportResult
from pick3_lottery.services.lottery_service import LotteryService

router = APIRouter()


@router.get("", response_model=list[Draw])
async def list_draws(service: LotteryService = Depends(get_service)):
    """All draws, oldest period first."""
    return list(service.draws)


@router.post("", response_model=Draw, status_code=201)
async def add_draw(payload: DrawIn, service: LotteryService = Depends(get_service)):
    return service.add_draw(
        payload.period, payload.hundred, payload.ten, payload.one,
        draw_date=payload.draw_date,
    )


@router.post("/import", response_model=ImportResult)
async def import_draws(payload: ImportRequest, service: LotteryService = Depends(get_service)):
    """Bulk import of `period hundred ten one` lines."""
    return service.import_text(payload.text)


@router.get("/export", response_class=PlainTextResponse)
async def export_draws(service: LotteryService = Depends(get_service)):
    return service.store.export_text()


@router.delete("/{draw_id}", status_code=204)
async def delete_draw(draw_id: str, service: LotteryService = Depends(get_service)):
    if not service.remove_draw(draw_id):
        raise HTTPException(status_code=404, detail="Draw not found")


@router.delete("", status_code=204)
async def clear_all(service: LotteryService = Depends(get_service)):
    """Clear draws, predictions and validations."""
    service.clear()
