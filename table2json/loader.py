"""Read grids from JSON, CSV and Excel files."""

from __future__ import annotations

import csv
import json
import zipfile
from pathlib import Path
from typing import Any, List, Optional, Union

import pandas as pd

from .logging import get_logger

logger = get_logger(__name__)

JSON_SUFFIXES = {".json"}
CSV_SUFFIXES = {".csv", ".tsv"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class GridLoadError(Exception):
    """Raised when a file cannot be read as a grid."""
    pass


def _check_grid(data: Any, source: Path) -> List[List[Any]]:
    if isinstance(data, dict) and "grid" in data:
        data = data["grid"]
    if not isinstance(data, list):
        raise GridLoadError(f"{source}: expected a list of rows")
    for index, row in enumerate(data):
        if not isinstance(row, list):
            raise GridLoadError(f"{source}: row {index} is not a list")
    return data


def read_json_grid(path: Path) -> List[List[Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise GridLoadError(f"{path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise GridLoadError(f"Invalid JSON in {path}: {exc}") from exc
    return _check_grid(data, path)


def read_csv_grid(path: Path) -> List[List[Any]]:
    delimiter = "\t" if path.suffix.lower() == ".tsv" else ","
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as fh:
            return [list(row) for row in csv.reader(fh, delimiter=delimiter)]
    except UnicodeDecodeError as exc:
        raise GridLoadError(f"{path} is not valid UTF-8: {exc}") from exc
    except csv.Error as exc:
        raise GridLoadError(f"Invalid CSV in {path}: {exc}") from exc


def _trim_trailing(row: List[Any]) -> List[Any]:
    end = len(row)
    while end and row[end - 1] is None:
        end -= 1
    return row[:end]


def read_excel_grid(path: Path, sheet: Optional[Union[str, int]] = None) -> List[List[Any]]:
    try:
        df = pd.read_excel(path, sheet_name=sheet if sheet is not None else 0, header=None, dtype=object)
    except zipfile.BadZipFile as exc:
        raise GridLoadError(f"{path} is not a valid Excel workbook: {exc}") from exc
    except (ValueError, KeyError) as exc:
        raise GridLoadError(f"Unable to read sheet {sheet!r} of {path}: {exc}") from exc
    df = df.astype(object).where(pd.notna(df), None)
    return [_trim_trailing(list(row)) for row in df.itertuples(index=False, name=None)]


def load_grid(path: Union[str, Path], sheet: Optional[Union[str, int]] = None) -> List[List[Any]]:
    """Load a grid of cells from ``path``, choosing the reader by file suffix."""
    source = Path(path)
    if not source.exists():
        raise GridLoadError(f"Input file not found: {source}")

    suffix = source.suffix.lower()
    if suffix in JSON_SUFFIXES:
        grid = read_json_grid(source)
    elif suffix in CSV_SUFFIXES:
        grid = read_csv_grid(source)
    elif suffix in EXCEL_SUFFIXES:
        grid = read_excel_grid(source, sheet)
    else:
        raise GridLoadError(f"Unsupported input format '{suffix or source.name}'")

    logger.info("grid_loaded", path=str(source), rows=len(grid))
    return grid
