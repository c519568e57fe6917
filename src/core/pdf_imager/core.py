from __future__ import annotations

import logging
from pathlib import Path

from .archive import write_archive
from .config import AppConfig
from .converter import PageConverter
from .counter import ConversionCounter
from .engine import EngineLoader, PdfiumEngine
from .models import ConversionOutcome, ConvertParameters, MultipleOutcome, SingleOutcome
from .utils import SCRATCH_PREFIX, ScratchSpace

logger = logging.getLogger(__name__)


class ConversionService:
    def __init__(
        self,
        config: AppConfig,
        *,
        engine_loader: EngineLoader | None = None,
        counter: ConversionCounter | None = None,
    ) -> None:
        self._config = config
        self._converter = PageConverter(engine_loader or PdfiumEngine.load)
        self._counter = counter or ConversionCounter()

    @property
    def counter(self) -> ConversionCounter:
        return self._counter

    def scratch_space(self) -> ScratchSpace:
        return ScratchSpace(self._config.runtime.temp_dir)

    def convert(
        self, source: Path, params: ConvertParameters, scratch: ScratchSpace
    ) -> ConversionOutcome:
        """Run the page conversion; the counter moves whether it succeeds or not."""

        try:
            return self._converter.convert(source, params, scratch)
        finally:
            self._counter.increment()

    def result_path(self, outcome: SingleOutcome | MultipleOutcome, scratch: ScratchSpace) -> Path:
        """Return the file holding the final response payload."""

        if isinstance(outcome, SingleOutcome):
            return outcome.artifact.path
        destination = scratch.new_file(prefix=SCRATCH_PREFIX, suffix=".zip")
        write_archive(destination, outcome.artifacts)
        logger.debug("Packed %d page(s) into %s", len(outcome.artifacts), destination.name)
        return destination


__all__ = ["ConversionService"]
