"""FastAPI dependency providers for application services."""

from __future__ import annotations

import secrets

from fastapi import HTTPException, Request, status

from core.pdf_imager.config import AppConfig
from core.pdf_imager.core import ConversionService
from core.pdf_imager.counter import ConversionCounter

AUTH_SCHEME = "token"


def get_config(request: Request) -> AppConfig:
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(status_code=503, detail="CONFIG_UNAVAILABLE")
    return config


def get_service(request: Request) -> ConversionService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="SERVICE_UNAVAILABLE")
    return service


def get_counter(request: Request) -> ConversionCounter:
    return get_service(request).counter


def require_token(request: Request) -> None:
    """Reject the request unless it carries ``Authorization: token <secret>``."""

    config = get_config(request)
    if not config.auth_enabled:
        return
    expected = f"{AUTH_SCHEME} {config.runtime.auth_token}"
    provided = request.headers.get("authorization", "")
    if not secrets.compare_digest(provided.encode(), expected.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="UNAUTHORIZED")


__all__ = ["get_config", "get_service", "get_counter", "require_token"]
