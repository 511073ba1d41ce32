"""Grid geometry helpers."""

from __future__ import annotations

from typing import Any, Sequence

from .models import ABSENT

Grid = Sequence[Sequence[Any]]


def max_columns(grid: Grid) -> int:
    """Width of the grid, i.e. the length of its longest row."""
    return max((len(row) for row in grid), default=0)


def cell_at(grid: Grid, c: int, r: int) -> Any:
    """Return the cell at column ``c``, row ``r``, or ``ABSENT`` when out of range."""
    if r < 0 or c < 0 or r >= len(grid):
        return ABSENT
    row = grid[r]
    if row is None or c >= len(row):
        return ABSENT
    return row[c]


def is_blank(value: Any) -> bool:
    """True for cells that can never be header labels: absent, null or empty string."""
    return value is ABSENT or value is None or value == ""


def cell_text(value: Any) -> str:
    """Text form of a cell as used for header labels."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
