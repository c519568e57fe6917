"""Bundle rendered pages into a ZIP archive."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from zipfile import ZIP_DEFLATED, BadZipFile, LargeZipFile, ZipFile

from .errors import ArchiveCreateError, ArchiveLibraryError, ArchiveReadError, ArchiveWriteError
from .models import PageArtifact

_LIBRARY_ERRORS = (BadZipFile, LargeZipFile, ValueError)


def write_archive(destination: Path, artifacts: Iterable[PageArtifact]) -> Path:
    """Write one deflated entry per artifact, named by its file basename, in order."""

    try:
        archive = ZipFile(destination, "w", compression=ZIP_DEFLATED)
    except OSError as exc:
        raise ArchiveCreateError(str(exc)) from exc

    with archive:
        for artifact in artifacts:
            payload = _read_artifact(artifact)
            _write_entry(archive, artifact.name, payload)
        try:
            archive.close()
        except _LIBRARY_ERRORS as exc:
            raise ArchiveLibraryError(str(exc)) from exc
        except OSError as exc:
            raise ArchiveWriteError(str(exc)) from exc
    return destination


def _read_artifact(artifact: PageArtifact) -> bytes:
    try:
        return artifact.path.read_bytes()
    except OSError as exc:
        raise ArchiveReadError(f"{artifact.name}: {exc}") from exc


def _write_entry(archive: ZipFile, name: str, payload: bytes) -> None:
    try:
        archive.writestr(name, payload)
    except _LIBRARY_ERRORS as exc:
        raise ArchiveLibraryError(f"{name}: {exc}") from exc
    except OSError as exc:
        raise ArchiveWriteError(f"{name}: {exc}") from exc


__all__ = ["write_archive"]
