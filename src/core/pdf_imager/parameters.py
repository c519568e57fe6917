"""Derive conversion parameters from the query string and ``Accept`` header."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ParameterError
from .models import ConvertParameters, OutputFormat

DEFAULT_ACCEPT = "image/png"
ARCHIVE_MEDIA_TYPE = "application/zip"

# Order matters: the first media type found in the header wins.
ACCEPT_PRIORITY: tuple[tuple[str, OutputFormat], ...] = (
    ("image/gif", OutputFormat.GIF),
    ("image/jpeg", OutputFormat.JPEG),
    ("image/webp", OutputFormat.WEBP),
)

MAX_DPI = 2**32 - 1


class ConvertQuery(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    dpi: int = Field(72, ge=0, le=MAX_DPI)
    preserve_alpha: bool = Field(
        False, validation_alias=AliasChoices("preserveAlpha", "preserve_alpha")
    )
    background_color: str = Field(
        "white", validation_alias=AliasChoices("backgroundColor", "background_color")
    )

    @field_validator("preserve_alpha", mode="before")
    @classmethod
    def _literal_bool(cls, value: object) -> object:
        if isinstance(value, str) and value not in ("true", "false"):
            raise ValueError("expected `true` or `false`")
        return value


def parse_query(query: Mapping[str, str]) -> ConvertQuery:
    try:
        return ConvertQuery.model_validate(dict(query))
    except ValidationError as exc:
        raise ParameterError(f"Bad query params: {exc.error_count()} invalid field(s)") from exc


def resolve_accept(accept: str | None) -> tuple[OutputFormat, bool]:
    """Return the output format and whether an archive was requested."""

    value = accept or DEFAULT_ACCEPT
    archive_requested = ARCHIVE_MEDIA_TYPE in value
    for media_type, output_format in ACCEPT_PRIORITY:
        if media_type in value:
            return output_format, archive_requested
    return OutputFormat.PNG, archive_requested


def resolve_parameters(query: Mapping[str, str], accept: str | None) -> ConvertParameters:
    parsed = parse_query(query)
    output_format, archive_requested = resolve_accept(accept)
    return ConvertParameters(
        output_format=output_format,
        archive_requested=archive_requested,
        dpi=parsed.dpi,
        preserve_alpha=parsed.preserve_alpha,
        background_color=parsed.background_color,
    )


__all__ = [
    "ConvertQuery",
    "parse_query",
    "resolve_accept",
    "resolve_parameters",
]
