"""Aggregate API v1 router."""

from fastapi import APIRouter

from pick3_lottery.api.v1.endpoints import (
    draws,
    features,
    predictions,
    statistics,
    settings,
)

api_router = APIRouter()

api_router.include_router(draws.router, prefix="/draws", tags=["draws"])
api_router.include_router(features.router, prefix="/features", tags=["features"])
api_router.include_router(predictions.router, prefix="/predictions", tags=["predictions"])
api_router.include_router(statistics.router, prefix="/stats", tags=["statistics"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
