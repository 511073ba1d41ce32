"""Locate header labels in a grid and answer which headers govern a cell."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .grid import Grid, cell_at, cell_text, is_blank, max_columns
from .logging import get_logger
from .models import HeaderDescriptor, HeaderDiscovery, HeaderInstance, HeaderKind, HeaderMap

logger = get_logger(__name__)


def discover_headers(grid: Grid, descriptors: Sequence[HeaderDescriptor]) -> HeaderDiscovery:
    """Scan ``grid`` row by row and collect a header instance per matching label cell.

    Every descriptor depth gets a bucket, even when nothing matched it. Data
    starts one past the first header row (and one past the first header
    column); an axis with no headers starts at 0.
    """
    headers: HeaderMap = {descriptor.depth: [] for descriptor in descriptors}
    rows = len(grid)
    columns = max_columns(grid)
    first_header_row = None
    first_header_column = None

    for r in range(rows):
        for c in range(columns):
            cell = cell_at(grid, c, r)
            if is_blank(cell):
                continue
            matched = [descriptor for descriptor in descriptors if descriptor.matches(c, r)]
            if not matched:
                continue

            label = cell_text(cell)
            for descriptor in matched:
                headers[descriptor.depth].append(
                    HeaderInstance(descriptor=descriptor, label=label, column=c, row=r)
                )
                if descriptor.kind == HeaderKind.ROW:
                    first_header_row = r if first_header_row is None else min(first_header_row, r)
                else:
                    first_header_column = c if first_header_column is None else min(first_header_column, c)

    discovery = HeaderDiscovery(
        headers=headers,
        data_start_row=0 if first_header_row is None else first_header_row + 1,
        data_start_column=0 if first_header_column is None else first_header_column + 1,
        max_rows=rows,
        max_columns=columns,
    )
    logger.debug(
        "headers_discovered",
        depths=len(headers),
        instances=discovery.instance_count(),
        data_start_row=discovery.data_start_row,
        data_start_column=discovery.data_start_column,
    )
    return discovery


def headers_governing(headers: HeaderMap, c: int, r: int) -> List[Tuple[int, List[HeaderInstance]]]:
    """Return ``(depth, instances)`` pairs covering cell (c, r), shallowest depth first."""
    governing: List[Tuple[int, List[HeaderInstance]]] = []
    for depth in sorted(headers):
        covering = [instance for instance in headers[depth] if instance.covers(c, r)]
        if covering:
            governing.append((depth, covering))
    return governing


def first_instance(headers: HeaderMap, depth: int) -> Optional[HeaderInstance]:
    instances = headers.get(depth) or []
    return instances[0] if instances else None
