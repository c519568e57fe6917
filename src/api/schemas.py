from __future__ import annotations

from pydantic import BaseModel


class ProblemDetail(BaseModel):
    type: str = "about:blank"
    title: str
    status: int
    detail: str | None = None
    instance: str | None = None


class ConversionCount(BaseModel):
    count_conversions: int


class HealthStatus(BaseModel):
    status: str
