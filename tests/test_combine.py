from pathlib import Path

import pytest
from PIL import Image

from core.pdf_imager.combine import combine_artifacts
from core.pdf_imager.errors import ImageDecodeError
from core.pdf_imager.models import OutputFormat, PageArtifact
from core.pdf_imager.utils import ScratchSpace

from conftest import BLUE, GREEN, RED


def _artifact(scratch: ScratchSpace, index: int, size: tuple[int, int], color) -> PageArtifact:
    path = scratch.new_file(prefix=f"{index}-hpi", suffix=".png")
    Image.new("RGB", size, color).save(path, format="PNG")
    return PageArtifact(index=index, path=path)


def test_pages_are_stacked_top_to_bottom_left_aligned(tmp_path: Path) -> None:
    with ScratchSpace(tmp_path) as scratch:
        artifacts = [
            _artifact(scratch, 0, (40, 10), RED),
            _artifact(scratch, 1, (60, 20), GREEN),
            _artifact(scratch, 2, (20, 5), BLUE),
        ]
        combined = combine_artifacts(artifacts, OutputFormat.PNG, scratch)
        with Image.open(combined.path) as image:
            assert image.format == "PNG"
            assert image.size == (60, 35)
            assert image.getpixel((0, 0)) == RED
            assert image.getpixel((0, 10)) == GREEN
            assert image.getpixel((59, 29)) == GREEN
            assert image.getpixel((0, 30)) == BLUE
            # uncovered canvas stays blank
            assert image.getpixel((50, 0)) == (0, 0, 0)
            assert image.getpixel((30, 34)) == (0, 0, 0)


@pytest.mark.parametrize(
    ("output_format", "pil_name"),
    [(OutputFormat.GIF, "GIF"), (OutputFormat.JPEG, "JPEG"), (OutputFormat.WEBP, "WEBP")],
)
def test_composite_uses_requested_format(tmp_path: Path, output_format, pil_name) -> None:
    with ScratchSpace(tmp_path) as scratch:
        artifacts = [_artifact(scratch, 0, (8, 8), RED), _artifact(scratch, 1, (8, 8), BLUE)]
        combined = combine_artifacts(artifacts, output_format, scratch)
        assert combined.path.suffix == output_format.extension
        with Image.open(combined.path) as image:
            assert image.format == pil_name
            assert image.size == (8, 16)


def test_undecodable_page_raises_decode_error(tmp_path: Path) -> None:
    with ScratchSpace(tmp_path) as scratch:
        good = _artifact(scratch, 0, (8, 8), RED)
        broken = PageArtifact(index=1, path=scratch.write_file(b"not an image", suffix=".png"))
        with pytest.raises(ImageDecodeError):
            combine_artifacts([good, broken], OutputFormat.PNG, scratch)


def test_oversized_page_is_a_decode_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with ScratchSpace(tmp_path) as scratch:
        artifacts = [_artifact(scratch, 0, (40, 40), RED), _artifact(scratch, 1, (40, 40), GREEN)]
        with pytest.raises(ImageDecodeError):
            combine_artifacts(artifacts, OutputFormat.PNG, scratch)
