"""Command-line interface for table2json."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from .allowed import ConfigurationError
from .converter import ConversionError, convert_table
from .loader import GridLoadError, load_grid
from .logging import get_logger
from .presets import describe_presets
from .runtime import build_runtime

logger = get_logger(__name__)

app = typer.Typer(add_completion=False, help="Convert tabular data into nested JSON records")


def _parse_header_option(value: str) -> Dict[str, Any]:
    """Parse ``kind:column:row`` into a header descriptor mapping."""
    parts = value.split(":")
    if len(parts) != 3:
        raise typer.BadParameter(f"Header '{value}' must look like kind:column:row, e.g. row:0:0")
    kind, column, row = parts
    try:
        return {"kind": kind.strip().lower(), "anchor_column": int(column), "anchor_row": int(row)}
    except ValueError as exc:
        raise typer.BadParameter(f"Header '{value}' must use integer coordinates") from exc


@app.command("convert")
def convert_command(
    input_path: Path = typer.Argument(..., help="Grid file (.json, .csv, .tsv, .xlsx)"),
    preset: Optional[str] = typer.Option(None, "--preset", "-p", help="Header preset, e.g. row, column, row.column"),
    header: Optional[List[str]] = typer.Option(
        None,
        "--header",
        help="Explicit header as kind:column:row (repeatable, outermost first)",
    ),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Worksheet name for Excel input"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout"),
    indent: Optional[int] = typer.Option(None, "--indent", help="JSON indentation (default from environment)"),
) -> None:
    runtime = build_runtime()
    headers = [_parse_header_option(value) for value in header] if header else None

    try:
        grid = load_grid(input_path, sheet)
        result = convert_table(grid, runtime.table_config(preset=preset, headers=headers))
    except (ConfigurationError, ConversionError, GridLoadError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    json_indent = runtime.config.json_indent if indent is None else indent
    text = json.dumps(
        result.data,
        indent=json_indent or None,
        ensure_ascii=runtime.config.ensure_ascii,
        default=str,
    )
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        logger.info("output_written", path=str(output), shape=result.shape.value)
    else:
        typer.echo(text)


@app.command("presets")
def presets_command() -> None:
    """List the built-in header presets."""
    for name, descriptors in describe_presets().items():
        layout = ", ".join(
            f"{d['kind']}@({d['anchor_column']},{d['anchor_row']})" for d in descriptors
        )
        typer.echo(f"{name}: {layout}")


@app.command("serve")
def serve_command(
    host: str = typer.Option("0.0.0.0", "--host", help="Service bind host"),
    port: int = typer.Option(8000, "--port", help="Service port"),
) -> None:
    import uvicorn

    uvicorn.run(
        "table2json.app:create_app",
        host=host,
        port=port,
        factory=True,
        log_level="info",
    )


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
