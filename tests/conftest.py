from __future__ import annotations

import io
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from api.app import create_app
from core.pdf_imager.config import AppConfig, RuntimeConfig
from core.pdf_imager.counter import ConversionCounter
from core.pdf_imager.engine import EngineLoader, target_height_for
from core.pdf_imager.errors import DocumentLoadError, PageRenderError

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


@dataclass
class FakePage:
    index: int
    width_points: float
    height_points: float
    color: tuple[int, int, int] = RED


@dataclass
class FakeDocument:
    pages_: list[FakePage]
    closed: bool = False

    def pages(self) -> Iterator[FakePage]:
        yield from self.pages_

    def close(self) -> None:
        self.closed = True


@dataclass
class FakeEngine:
    """Paints each page in a flat colour at the requested size."""

    pages: list[FakePage]
    fail_open: bool = False
    fail_render_at: int | None = None
    rendered_widths: list[int] = field(default_factory=list)
    documents: list[FakeDocument] = field(default_factory=list)

    def open_document(self, source: Path) -> FakeDocument:
        if self.fail_open:
            raise DocumentLoadError("broken cross-reference table")
        document = FakeDocument(list(self.pages))
        self.documents.append(document)
        return document

    def render_page(self, page: FakePage, target_width: int) -> Image.Image:
        if page.index == self.fail_render_at:
            raise PageRenderError(f"page {page.index}: bitmap allocation failed")
        self.rendered_widths.append(target_width)
        size = (target_width, target_height_for(page, target_width))
        return Image.new("RGB", size, page.color)


def make_pages(*sizes: tuple[float, float]) -> list[FakePage]:
    colors = (RED, GREEN, BLUE)
    return [
        FakePage(index, width, height, colors[index % len(colors)])
        for index, (width, height) in enumerate(sizes)
    ]


def open_image(payload: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(payload))
    image.load()
    return image


@pytest.fixture()
def scratch_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture()
def app_config(scratch_dir: Path) -> AppConfig:
    return AppConfig(runtime=RuntimeConfig(temp_dir=scratch_dir))


@pytest.fixture()
def client_factory(app_config: AppConfig) -> Callable[..., TestClient]:
    def _create(
        engine: FakeEngine | None = None,
        *,
        loader: EngineLoader | None = None,
        config: AppConfig | None = None,
        counter: ConversionCounter | None = None,
    ) -> TestClient:
        if loader is None and engine is not None:
            loader = lambda: engine  # noqa: E731
        app = create_app(config or app_config, engine_loader=loader, counter=counter)
        return TestClient(app)

    return _create


@pytest.fixture()
def pdf_factory() -> Callable[[Sequence[tuple[float, float]]], bytes]:
    from pypdf import PdfWriter

    def _create(sizes: Sequence[tuple[float, float]]) -> bytes:
        writer = PdfWriter()
        for width, height in sizes:
            writer.add_blank_page(width=width, height=height)
        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    return _create


PDF_STUB = b"%PDF-1.7\n%stub body for fake engines\n"
PDF_HEADERS = {"Content-Type": "application/pdf"}
