"""Domain models for PDF to image conversion."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union


class OutputFormat(str, Enum):
    PNG = "png"
    GIF = "gif"
    JPEG = "jpeg"
    WEBP = "webp"

    @property
    def extension(self) -> str:
        if self is OutputFormat.JPEG:
            return ".jpg"
        return f".{self.value}"

    @property
    def pil_format(self) -> str:
        return self.value.upper()

    @property
    def media_type(self) -> str:
        return f"image/{self.value}"


@dataclass(frozen=True, slots=True)
class ConvertParameters:
    """Effective parameters for a single conversion request.

    ``preserve_alpha`` and ``background_color`` are accepted and logged but do
    not influence rendering or combination.
    """

    output_format: OutputFormat = OutputFormat.PNG
    archive_requested: bool = False
    dpi: int = 72
    preserve_alpha: bool = False
    background_color: str = "white"

    def describe(self) -> str:
        mode = "Multi page to ZIP" if self.archive_requested else "Multi page to image"
        alpha = "Preserve alpha" if self.preserve_alpha else "Remove alpha"
        return (
            f"Type: {self.output_format.extension}, {mode}, DPI {self.dpi}, "
            f"{alpha}, background: {self.background_color}"
        )


@dataclass(frozen=True, slots=True)
class PageArtifact:
    """One rendered page persisted to a scratch file."""

    index: int
    path: Path

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True, slots=True)
class EmptyOutcome:
    pass


@dataclass(frozen=True, slots=True)
class SingleOutcome:
    artifact: PageArtifact


@dataclass(frozen=True, slots=True)
class MultipleOutcome:
    artifacts: tuple[PageArtifact, ...]


ConversionOutcome = Union[EmptyOutcome, SingleOutcome, MultipleOutcome]


__all__ = [
    "OutputFormat",
    "ConvertParameters",
    "PageArtifact",
    "EmptyOutcome",
    "SingleOutcome",
    "MultipleOutcome",
    "ConversionOutcome",
]
