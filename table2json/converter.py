"""Core table to nested record conversion logic."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from .grid import Grid, cell_at, cell_text
from .headers import discover_headers, first_instance, headers_governing
from .logging import get_logger
from .models import (
    ABSENT,
    ConversionResult,
    HeaderDiscovery,
    HeaderKind,
    HeaderMap,
    OutputShape,
)
from .presets import TableConfig, resolve_descriptors

logger = get_logger(__name__)

Record = Dict[str, Any]


class ConversionError(Exception):
    """Raised when a grid cannot be converted with the resolved headers."""
    pass


class EmptyHeaderError(ConversionError):
    """Raised when no header label was found for the outermost depth."""

    def __init__(self, depth: int = 0) -> None:
        self.depth = depth
        super().__init__(f"No header labels found at depth {depth}; the grid has no usable header cells")


def _coerce_config(config: Union[TableConfig, Mapping[str, Any], None], overrides: Dict[str, Any]) -> TableConfig:
    if isinstance(config, TableConfig):
        base = config
    else:
        base = TableConfig.from_mapping(config)
    return base.merged(**overrides) if overrides else base


def _output_shape(headers: HeaderMap) -> OutputShape:
    """OBJECT when the outermost instance of each depth mixes row and column kinds."""
    kinds = {instances[0].kind for instances in headers.values() if instances}
    return OutputShape.OBJECT if len(kinds) > 1 else OutputShape.LIST


def _place(record: Record, path: List[str], value: Any) -> None:
    node = record
    for key in path[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[path[-1]] = value


def _add_cell(grid: Grid, headers: HeaderMap, c: int, r: int, record: Record) -> bool:
    cell = cell_at(grid, c, r)
    if cell is ABSENT:
        return False

    governing = headers_governing(headers, c, r)
    if not governing:
        return False

    # header cells reached as data must not be written back under themselves;
    # null cells are never labels
    if cell is not None:
        text = cell_text(cell)
        for _, instances in governing:
            if any(instance.label == text for instance in instances):
                return False

    path = [instances[-1].label for _, instances in governing]
    _place(record, path, cell)
    return True


def place_cells(grid: Grid, discovery: HeaderDiscovery) -> ConversionResult:
    """Map every data cell onto the nested path formed by its governing header labels."""
    headers = discovery.headers
    lead = first_instance(headers, 0)
    if lead is None:
        raise EmptyHeaderError(0)

    shape = _output_shape(headers)
    shared: Record = {}
    entries: List[Record] = []

    if lead.kind == HeaderKind.ROW:
        outer = range(discovery.data_start_row, discovery.max_rows)
        inner = range(discovery.data_start_column, discovery.max_columns)
    else:
        outer = range(discovery.data_start_column, discovery.max_columns)
        inner = range(discovery.data_start_row, discovery.max_rows)

    for i in outer:
        record = shared if shape is OutputShape.OBJECT else {}
        for j in inner:
            c, r = (j, i) if lead.kind == HeaderKind.ROW else (i, j)
            _add_cell(grid, headers, c, r, record)
        if shape is OutputShape.LIST and record:
            entries.append(record)

    data: Union[Record, List[Record]] = shared if shape is OutputShape.OBJECT else entries
    return ConversionResult(shape=shape, data=data, headers=headers)


def convert_table(
    grid: Grid,
    config: Union[TableConfig, Mapping[str, Any], None] = None,
    **options: Any,
) -> ConversionResult:
    """Convert ``grid`` and return the result together with its shape and headers.

    ``options`` accepts ``preset``, ``headers`` and ``on_headers_ready`` and
    takes precedence over the same fields in ``config``.
    """
    unknown = set(options) - {"preset", "headers", "on_headers_ready"}
    if unknown:
        raise TypeError(f"Unexpected conversion options: {', '.join(sorted(unknown))}")

    table_config = _coerce_config(config, options)
    descriptors = resolve_descriptors(table_config)
    discovery = discover_headers(grid, descriptors)

    hook = table_config.on_headers_ready
    if hook is not None:
        replaced: Optional[HeaderMap] = hook(discovery.headers)
        if replaced is not None:
            discovery.headers = replaced

    result = place_cells(grid, discovery)
    logger.debug(
        "table_converted",
        shape=result.shape.value,
        descriptors=len(descriptors),
        entries=len(result.data),
    )
    return result


def convert_table_data_to_json(
    grid: Grid,
    config: Union[TableConfig, Mapping[str, Any], None] = None,
    **options: Any,
) -> Union[Record, List[Record]]:
    """Convert table data to nested records keyed by header labels.

    With the first row as header::

        | a  | b  | c  |
        |----|----|----|
        |  1 |  2 |  3 |
        | do | re | mi |

    becomes ``[{"a": 1, "b": 2, "c": 3}, {"a": "do", "b": "re", "c": "mi"}]``.
    Header rows stacked on header rows (``row.row``) or columns on columns
    (``column.column``) give a list of nested records; a row header combined
    with a column header (``row.column``, ``column.row``) gives one object
    keyed by the outer header's labels.
    """
    return convert_table(grid, config, **options).data
