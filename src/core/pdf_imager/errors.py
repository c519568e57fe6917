"""Failure taxonomy for the conversion and archive pipeline."""

from __future__ import annotations


class ConversionError(RuntimeError):
    code = "CONVERSION"


class LibraryLoadError(ConversionError):
    code = "LIBRARY_LOAD"


class DocumentLoadError(ConversionError):
    code = "DOCUMENT_LOAD"


class PageRenderError(ConversionError):
    code = "PAGE_RENDER"


class ImageEncodeError(ConversionError):
    code = "IMAGE_ENCODE"


class ImageDecodeError(ConversionError):
    code = "IMAGE_DECODE"


class TemporaryStorageError(ConversionError):
    code = "TEMP_FILE"


class ArchiveError(RuntimeError):
    code = "ARCHIVE"


class ArchiveCreateError(ArchiveError):
    code = "ARCHIVE_CREATE"


class ArchiveReadError(ArchiveError):
    code = "ARCHIVE_READ"


class ArchiveWriteError(ArchiveError):
    code = "ARCHIVE_WRITE"


class ArchiveLibraryError(ArchiveError):
    code = "ARCHIVE_LIBRARY"


class ParameterError(ValueError):
    """Raised when the query string cannot be parsed into conversion parameters."""


__all__ = [
    "ConversionError",
    "LibraryLoadError",
    "DocumentLoadError",
    "PageRenderError",
    "ImageEncodeError",
    "ImageDecodeError",
    "TemporaryStorageError",
    "ArchiveError",
    "ArchiveCreateError",
    "ArchiveReadError",
    "ArchiveWriteError",
    "ArchiveLibraryError",
    "ParameterError",
]
