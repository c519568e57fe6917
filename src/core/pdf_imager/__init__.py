"""Render uploaded PDF documents into raster images."""

from .config import AppConfig, load_config
from .core import ConversionService
from .counter import ConversionCounter
from .models import ConvertParameters, OutputFormat

__all__ = [
    "AppConfig",
    "load_config",
    "ConversionCounter",
    "ConversionService",
    "ConvertParameters",
    "OutputFormat",
]
