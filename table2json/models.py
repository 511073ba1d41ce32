"""Domain models for header descriptors, discovered headers and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union


class _Absent:
    """Marker for a coordinate that has no cell at all (past the end of a short row)."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


class HeaderKind(str, Enum):
    ROW = "row"
    COLUMN = "column"


class OutputShape(str, Enum):
    """Container produced by a conversion."""

    LIST = "list"
    OBJECT = "object"


@dataclass(slots=True)
class HeaderDescriptor:
    """Rule locating header labels in the grid.

    A row descriptor matches every cell on ``anchor_row`` from
    ``anchor_column`` rightwards; a column descriptor matches every cell in
    ``anchor_column`` from ``anchor_row`` downwards.
    """

    kind: HeaderKind
    anchor_column: Union[int, float] = 0
    anchor_row: Union[int, float] = 0
    depth: int = 0

    def matches(self, c: int, r: int) -> bool:
        if self.kind == HeaderKind.ROW:
            return c >= self.anchor_column and r == self.anchor_row
        return c == self.anchor_column and r >= self.anchor_row

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": HeaderKind(self.kind).value,
            "anchor_column": self.anchor_column,
            "anchor_row": self.anchor_row,
            "depth": self.depth,
        }


@dataclass(slots=True)
class HeaderInstance:
    """A header label found in the grid."""

    descriptor: HeaderDescriptor
    label: str
    column: int
    row: int
    width: int = 1
    height: int = 1

    @property
    def kind(self) -> HeaderKind:
        return self.descriptor.kind

    @property
    def depth(self) -> int:
        return self.descriptor.depth

    def covers(self, c: int, r: int) -> bool:
        """Return True when the cell at (c, r) falls under this header's footprint."""
        if self.kind == HeaderKind.ROW:
            return self.column <= c < self.column + self.width
        return self.row <= r < self.row + self.height


HeaderMap = Dict[int, List[HeaderInstance]]


@dataclass(slots=True)
class HeaderDiscovery:
    """Header labels grouped by depth plus where the data starts."""

    headers: HeaderMap
    data_start_row: int = 0
    data_start_column: int = 0
    max_rows: int = 0
    max_columns: int = 0

    def instance_count(self) -> int:
        return sum(len(instances) for instances in self.headers.values())


@dataclass(slots=True)
class ConversionResult:
    shape: OutputShape
    data: Union[Dict[str, Any], List[Dict[str, Any]]]
    headers: HeaderMap = field(default_factory=dict)

    @property
    def is_list(self) -> bool:
        return self.shape is OutputShape.LIST
