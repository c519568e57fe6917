from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from .combine import combine_artifacts, encode_image
from .engine import EngineDocument, EngineLoader, PageHandle, RenderingEngine
from .models import (
    ConversionOutcome,
    ConvertParameters,
    EmptyOutcome,
    MultipleOutcome,
    PageArtifact,
    SingleOutcome,
)
from .utils import SCRATCH_PREFIX, ScratchSpace, points_to_pixels

logger = logging.getLogger(__name__)


class PageConverter:
    """Render every page of a PDF and reduce the pages to a single outcome.

    A fresh engine is obtained from ``engine_loader`` on every call. Any page
    failure aborts the whole conversion; scratch files created so far are
    released by the caller's :class:`ScratchSpace`.
    """

    def __init__(self, engine_loader: EngineLoader) -> None:
        self._engine_loader = engine_loader

    def convert(
        self,
        source: Path,
        params: ConvertParameters,
        scratch: ScratchSpace,
    ) -> ConversionOutcome:
        engine = self._engine_loader()
        document = engine.open_document(source)
        try:
            artifacts = self._render_pages(engine, document, params, scratch)
        finally:
            document.close()
        logger.debug("Rendered %d page(s) from %s", len(artifacts), source.name)
        return self._reduce(artifacts, params, scratch)

    def _render_pages(
        self,
        engine: RenderingEngine,
        document: EngineDocument,
        params: ConvertParameters,
        scratch: ScratchSpace,
    ) -> list[PageArtifact]:
        artifacts: list[PageArtifact] = []
        for page in document.pages():
            image = self._render_page(engine, page, params.dpi)
            artifacts.append(self._persist_page(page.index, image, params, scratch))
        return artifacts

    def _render_page(self, engine: RenderingEngine, page: PageHandle, dpi: int) -> Image.Image:
        target_width = points_to_pixels(page.width_points, dpi)
        return engine.render_page(page, target_width).convert("RGB")

    def _persist_page(
        self,
        index: int,
        image: Image.Image,
        params: ConvertParameters,
        scratch: ScratchSpace,
    ) -> PageArtifact:
        destination = scratch.new_file(
            prefix=f"{index}-{SCRATCH_PREFIX}", suffix=params.output_format.extension
        )
        encode_image(image, destination, params.output_format)
        return PageArtifact(index=index, path=destination)

    def _reduce(
        self,
        artifacts: list[PageArtifact],
        params: ConvertParameters,
        scratch: ScratchSpace,
    ) -> ConversionOutcome:
        if not artifacts:
            return EmptyOutcome()
        if params.archive_requested:
            return MultipleOutcome(artifacts=tuple(artifacts))
        if len(artifacts) == 1:
            return SingleOutcome(artifact=artifacts[0])
        combined = combine_artifacts(artifacts, params.output_format, scratch)
        for artifact in artifacts:
            artifact.path.unlink(missing_ok=True)
        return SingleOutcome(artifact=combined)


__all__ = ["PageConverter"]
