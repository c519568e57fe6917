from __future__ import annotations

import shutil
from pathlib import Path

import typer
from rich.console import Console

from core.constraint import PDF_MAGIC

from ..config import AppConfig, dump_config, load_config
from ..core import ConversionService
from ..errors import ArchiveError, ConversionError
from ..logging import configure_logging
from ..models import ConvertParameters, EmptyOutcome, OutputFormat

console = Console()

app = typer.Typer(help="Render PDF documents into raster images")


def _load_config(path: Path | None) -> AppConfig:
    return load_config(path)


def _default_output(source: Path, params: ConvertParameters) -> Path:
    suffix = ".zip" if params.archive_requested else params.output_format.extension
    return source.with_suffix(suffix)


@app.command()
def convert(
    file: Path,
    dpi: int = typer.Option(72, "--dpi", min=0, help="Render resolution"),
    output_format: OutputFormat = typer.Option(OutputFormat.PNG, "--format", help="Image format"),
    archive: bool = typer.Option(False, "--zip", help="Write one image per page into a ZIP"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Destination file"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    with file.open("rb") as handle:
        if handle.read(len(PDF_MAGIC)) != PDF_MAGIC:
            console.print(f"[red]Not a PDF[/red]: {file}")
            raise typer.Exit(1)

    cfg = _load_config(config)
    configure_logging(cfg.runtime.log_level, cfg.runtime.log_format)
    params = ConvertParameters(output_format=output_format, archive_requested=archive, dpi=dpi)
    service = ConversionService(cfg)
    destination = output or _default_output(file, params)
    with service.scratch_space() as scratch:
        try:
            outcome = service.convert(file, params, scratch)
            if isinstance(outcome, EmptyOutcome):
                console.print("[yellow]No pages could be extracted from the PDF.[/yellow]")
                raise typer.Exit(1)
            result = service.result_path(outcome, scratch)
        except (ConversionError, ArchiveError) as exc:
            console.print(f"[red]Conversion failed[/red]: {exc.code} - {exc}")
            raise typer.Exit(1) from exc
        shutil.copyfile(result, destination)
    console.print(f"[green]Success[/green]: {file.name} -> {destination}")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Listen port"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    import uvicorn

    from api.app import create_app

    application = create_app(config_path=config)
    cfg: AppConfig = application.state.config
    configure_logging(cfg.runtime.log_level, cfg.runtime.log_format)
    uvicorn.run(application, host=host or cfg.api.host, port=port or cfg.api.port)


@app.command("show-config")
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    console.print_json(dump_config(_load_config(config)))


if __name__ == "__main__":
    app()
