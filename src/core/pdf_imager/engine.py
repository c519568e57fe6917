from __future__ import annotations

import importlib
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol

from PIL import Image

from .errors import DocumentLoadError, LibraryLoadError, PageRenderError
from .utils import round_half_up

ENGINE_MODULE = "pypdfium2"


class PageHandle(Protocol):
    index: int
    width_points: float
    height_points: float


class EngineDocument(Protocol):
    def pages(self) -> Iterator[PageHandle]:  # pragma: no cover - interface
        ...

    def close(self) -> None:  # pragma: no cover - interface
        ...


class RenderingEngine(Protocol):
    def open_document(self, source: Path) -> EngineDocument:  # pragma: no cover - interface
        ...

    def render_page(self, page: PageHandle, target_width: int) -> Image.Image:  # pragma: no cover - interface
        ...


EngineLoader = Callable[[], RenderingEngine]


def target_height_for(page: PageHandle, target_width: int) -> int:
    """Height that keeps the page aspect ratio at ``target_width`` pixels."""

    return max(1, round_half_up(page.height_points * target_width / page.width_points))


@dataclass(slots=True)
class PdfiumPage:
    index: int
    width_points: float
    height_points: float
    raw: Any


class PdfiumDocument:
    def __init__(self, pdfium: ModuleType, document: Any) -> None:
        self._pdfium = pdfium
        self._document = document

    def pages(self) -> Iterator[PdfiumPage]:
        for index in range(len(self._document)):
            try:
                raw = self._document[index]
                width, height = raw.get_size()
            except self._pdfium.PdfiumError as exc:
                raise PageRenderError(f"page {index}: {exc}") from exc
            try:
                yield PdfiumPage(index=index, width_points=width, height_points=height, raw=raw)
            finally:
                raw.close()

    def close(self) -> None:
        self._document.close()


class PdfiumEngine:
    """PDFium-backed rendering engine via the ``pypdfium2`` binding."""

    def __init__(self, pdfium: ModuleType) -> None:
        self._pdfium = pdfium

    @classmethod
    def load(cls) -> PdfiumEngine:
        try:
            pdfium = importlib.import_module(ENGINE_MODULE)
        except (ImportError, OSError) as exc:
            raise LibraryLoadError(str(exc)) from exc
        return cls(pdfium)

    def open_document(self, source: Path) -> PdfiumDocument:
        try:
            document = self._pdfium.PdfDocument(str(source))
        except (self._pdfium.PdfiumError, OSError) as exc:
            raise DocumentLoadError(str(exc)) from exc
        return PdfiumDocument(self._pdfium, document)

    def render_page(self, page: PdfiumPage, target_width: int) -> Image.Image:
        if target_width <= 0 or page.width_points <= 0:
            raise PageRenderError(
                f"page {page.index}: cannot render {page.width_points}pt wide page at {target_width}px"
            )
        scale = target_width / page.width_points
        size = (target_width, target_height_for(page, target_width))
        try:
            bitmap = page.raw.render(scale=scale)
            image = bitmap.to_pil().convert("RGB")
        except (self._pdfium.PdfiumError, ValueError, OSError) as exc:
            raise PageRenderError(f"page {page.index}: {exc}") from exc
        # PDFium rounds the canvas up; pin it to the requested geometry.
        if image.size != size:
            image = image.resize(size)
        return image


__all__ = [
    "PageHandle",
    "EngineDocument",
    "RenderingEngine",
    "EngineLoader",
    "PdfiumEngine",
    "target_height_for",
]
