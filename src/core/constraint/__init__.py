from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config.toml")
ENV_PREFIX = "HPI_"
PDF_MAGIC = b"%PDF"
PDF_MEDIA_TYPE = "application/pdf"

__all__ = ["DEFAULT_CONFIG_PATH", "ENV_PREFIX", "PDF_MAGIC", "PDF_MEDIA_TYPE"]
