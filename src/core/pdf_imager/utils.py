from __future__ import annotations

import math
import tempfile
from contextlib import ExitStack
from pathlib import Path
from types import TracebackType

from .errors import TemporaryStorageError

SCRATCH_PREFIX = "hpi"


class ScratchSpace:
    """Arena of temporary files removed together when the space is closed.

    Every file handed out by :meth:`new_file` stays on disk until :meth:`close`
    runs, which happens on every exit path when used as a context manager.
    """

    def __init__(self, directory: Path | None = None) -> None:
        self._directory = directory
        self._stack = ExitStack()
        self._paths: list[Path] = []

    def __enter__(self) -> ScratchSpace:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._paths)

    def new_file(self, prefix: str = SCRATCH_PREFIX, suffix: str = "") -> Path:
        try:
            with tempfile.NamedTemporaryFile(
                delete=False, prefix=prefix, suffix=suffix, dir=self._directory
            ) as tmp:
                path = Path(tmp.name)
        except OSError as exc:
            raise TemporaryStorageError(f"Unable to create temporary file: {exc}") from exc
        self._paths.append(path)
        self._stack.callback(path.unlink, missing_ok=True)
        return path

    def write_file(self, payload: bytes, prefix: str = SCRATCH_PREFIX, suffix: str = "") -> Path:
        path = self.new_file(prefix=prefix, suffix=suffix)
        try:
            path.write_bytes(payload)
        except OSError as exc:
            raise TemporaryStorageError(f"Unable to write temporary file {path.name}: {exc}") from exc
        return path

    def close(self) -> None:
        self._stack.close()
        self._paths.clear()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def points_to_pixels(points: float, dpi: int) -> int:
    """Convert a PDF length in points (1/72 inch) to pixels at ``dpi``."""

    return round_half_up(points / 72.0 * dpi)


__all__ = [
    "SCRATCH_PREFIX",
    "ScratchSpace",
    "round_half_up",
    "points_to_pixels",
]
