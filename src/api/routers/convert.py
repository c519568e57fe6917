from __future__ import annotations

import logging
import mimetypes

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from api.dependencies import get_service
from api.schemas import ProblemDetail
from api.utils import run_sync
from core.constraint import PDF_MAGIC, PDF_MEDIA_TYPE
from core.pdf_imager.core import ConversionService
from core.pdf_imager.errors import (
    ArchiveCreateError,
    ArchiveError,
    ArchiveLibraryError,
    ArchiveReadError,
    ArchiveWriteError,
    ConversionError,
    DocumentLoadError,
    ImageDecodeError,
    ImageEncodeError,
    LibraryLoadError,
    PageRenderError,
    ParameterError,
    TemporaryStorageError,
)
from core.pdf_imager.models import EmptyOutcome
from core.pdf_imager.parameters import resolve_parameters

logger = logging.getLogger(__name__)

router = APIRouter(tags=["conversion"])

REQUEST_ERROR = "Request error"
CONVERT_ERROR = "PDF convert error"
ARCHIVE_ERROR = "ZIP write error"

# exception type -> (log message, response detail template)
_CONVERSION_DETAILS: dict[type[ConversionError], tuple[str, str]] = {
    LibraryLoadError: ("PDFium library load error", "Failed loading the PDFium library: {cause}"),
    DocumentLoadError: ("PDFium document load error", "Failed loading the document binary: {cause}"),
    PageRenderError: ("PDFium page render error", "Failed rendering the PDF page: {cause}"),
    ImageEncodeError: ("Image write error", "Failed writing the PDF page as image: {cause}"),
    ImageDecodeError: ("Image read error", "Failed read image: {cause}"),
    TemporaryStorageError: (
        "Error when creating the temporary image file",
        "Unknown file write error",
    ),
}

_ARCHIVE_DETAILS: dict[type[ArchiveError], tuple[str, str]] = {
    ArchiveCreateError: ("IO error when creating ZIP archive", "ZIP IO error: {cause}"),
    ArchiveWriteError: ("IO error when writing image buffer to ZIP", "ZIP write error: {cause}"),
    ArchiveReadError: ("IO error when reading image file to buffer", "ZIP read to buffer error: {cause}"),
    ArchiveLibraryError: ("ZIP library error", "ZIP write error: {cause}"),
}


@router.post("/", summary="Render a PDF document into images")
async def convert_document(
    request: Request,
    service: ConversionService = Depends(get_service),
) -> Response:
    if _media_type(request.headers.get("content-type")) != PDF_MEDIA_TYPE:
        return _request_error(
            status.HTTP_406_NOT_ACCEPTABLE,
            'The Content-Type of request must be "application/pdf"',
        )

    try:
        params = resolve_parameters(request.query_params, request.headers.get("accept"))
    except ParameterError as exc:
        logger.info("Rejected query %r: %s", str(request.query_params), exc.__cause__ or exc)
        return _request_error(status.HTTP_400_BAD_REQUEST, "Bad query params")

    body = await request.body()
    if not body.startswith(PDF_MAGIC):
        return _request_error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "The uploaded file does not seem to be a PDF file",
        )

    logger.info("%s", params.describe())

    with service.scratch_space() as scratch:
        try:
            source = scratch.write_file(body, suffix=".pdf")
        except ConversionError as exc:
            return _conversion_error(exc)
        logger.info("Wrote request body to %s", source)

        try:
            outcome = await run_sync(service.convert, source, params, scratch)
        except ConversionError as exc:
            return _conversion_error(exc)

        if isinstance(outcome, EmptyOutcome):
            return _request_error(
                status.HTTP_400_BAD_REQUEST,
                "No pages could be extracted from the PDF. Is it empty?",
            )

        try:
            result = await run_sync(service.result_path, outcome, scratch)
        except ArchiveError as exc:
            return _archive_error(exc)
        except ConversionError as exc:
            return _conversion_error(exc)

        payload = await run_sync(result.read_bytes)
        media_type, _ = mimetypes.guess_type(result.name)

    return Response(content=payload, media_type=media_type)


def _media_type(content_type: str | None) -> str | None:
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower()


def problem_response(status_code: int, title: str, detail: str) -> JSONResponse:
    problem = ProblemDetail(title=title, status=status_code, detail=detail)
    return JSONResponse(status_code=status_code, content=problem.model_dump())


def _request_error(status_code: int, detail: str) -> JSONResponse:
    return problem_response(status_code, REQUEST_ERROR, detail)


def _conversion_error(exc: ConversionError) -> JSONResponse:
    log_message, template = _CONVERSION_DETAILS.get(
        type(exc), ("Conversion error", "Failed converting the PDF: {cause}")
    )
    logger.error("%s: %s", log_message, exc, exc_info=exc)
    return problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, CONVERT_ERROR, template.format(cause=exc)
    )


def _archive_error(exc: ArchiveError) -> JSONResponse:
    log_message, template = _ARCHIVE_DETAILS.get(type(exc), ("ZIP error", "ZIP write error: {cause}"))
    logger.error("%s: %s", log_message, exc, exc_info=exc)
    return problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, ARCHIVE_ERROR, template.format(cause=exc)
    )


__all__ = ["router", "problem_response"]
