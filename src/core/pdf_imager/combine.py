from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from PIL import Image

from .errors import ImageDecodeError, ImageEncodeError
from .models import OutputFormat, PageArtifact
from .utils import SCRATCH_PREFIX, ScratchSpace


def decode_artifact(artifact: PageArtifact) -> Image.Image:
    try:
        with Image.open(artifact.path) as image:
            return image.convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"{artifact.name}: {exc}") from exc


def encode_image(image: Image.Image, destination: Path, output_format: OutputFormat) -> None:
    try:
        image.save(destination, format=output_format.pil_format)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageEncodeError(f"{destination.name}: {exc}") from exc


def combine_artifacts(
    artifacts: Sequence[PageArtifact],
    output_format: OutputFormat,
    scratch: ScratchSpace,
) -> PageArtifact:
    """Stack page images top-to-bottom, left aligned, into one image."""

    images = [decode_artifact(artifact) for artifact in artifacts]
    width = max(image.width for image in images)
    height = sum(image.height for image in images)

    canvas = Image.new("RGB", (width, height))
    offset_y = 0
    for image in images:
        canvas.paste(image, (0, offset_y))
        offset_y += image.height

    destination = scratch.new_file(prefix=SCRATCH_PREFIX, suffix=output_format.extension)
    encode_image(canvas, destination, output_format)
    return PageArtifact(index=0, path=destination)


__all__ = ["combine_artifacts", "decode_artifact", "encode_image"]
