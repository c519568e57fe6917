from __future__ import annotations

from pathlib import Path

from fastapi import Depends, FastAPI

from core.pdf_imager.config import AppConfig, load_config
from core.pdf_imager.core import ConversionService
from core.pdf_imager.counter import ConversionCounter
from core.pdf_imager.engine import EngineLoader
from core.settings import Settings, get_settings

from .dependencies import require_token
from .routers import convert, status


def create_app(
    config: AppConfig | None = None,
    *,
    config_path: Path | None = None,
    engine_loader: EngineLoader | None = None,
    counter: ConversionCounter | None = None,
) -> FastAPI:
    if config is None:
        config = _prepare_config(get_settings(), config_path)

    app = FastAPI(title="PDF Imager", version="0.1.0")
    app.state.config = config
    app.state.service = ConversionService(config, engine_loader=engine_loader, counter=counter)

    guarded = [Depends(require_token)]
    app.include_router(status.health_router)
    app.include_router(status.router, dependencies=guarded)
    app.include_router(convert.router, dependencies=guarded)
    return app


def _prepare_config(settings: Settings, config_path: Path | None = None) -> AppConfig:
    config = load_config(config_path or settings.config_path)
    if settings.port is not None:
        config.api.port = settings.port
    if settings.auth_token is not None:
        config.runtime.auth_token = settings.auth_token
    if settings.log_level is not None:
        config.runtime.log_level = settings.log_level.upper()
    return config


__all__ = ["create_app"]
