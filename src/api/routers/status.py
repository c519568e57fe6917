from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_counter
from api.schemas import ConversionCount, HealthStatus
from core.pdf_imager.counter import ConversionCounter

router = APIRouter(tags=["status"])
health_router = APIRouter(tags=["health"])


@router.get("/", summary="Number of conversions since start")
def conversion_count(counter: ConversionCounter = Depends(get_counter)) -> ConversionCount:
    return ConversionCount(count_conversions=counter.value)


@health_router.get("/health", summary="Health check")
def health() -> HealthStatus:
    return HealthStatus(status="ok")


__all__ = ["router", "health_router"]
