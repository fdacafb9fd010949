"""
TagTables Core - Grid snapshots.

A Grid is the literal values of a table's used range, captured once per load.
It is never patched: structural changes to the table are followed by a reload.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from tagtables.exceptions import NotFoundException
from tagtables.hosts.base import SheetHost

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grid:
    rows: tuple[tuple[Any, ...], ...]

    @classmethod
    def from_rows(cls, rows: list[list[Any]]) -> Grid:
        return cls(rows=tuple(tuple(values) for values in rows))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((len(values) for values in self.rows), default=0)

    def cell(self, row: int, col: int) -> Any:
        """0-based cell value; "" outside the snapshot."""
        if 0 <= row < len(self.rows) and 0 <= col < len(self.rows[row]):
            return self.rows[row][col]
        return ""

    def row(self, row: int) -> tuple[Any, ...]:
        return self.rows[row] if 0 <= row < len(self.rows) else ()

    def column(self, col: int) -> list[Any]:
        return [self.cell(r, col) for r in range(len(self.rows))]

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


class GridLoader:
    """The one read path from the storage host into table snapshots."""

    def __init__(self, host: SheetHost):
        self.host = host

    def load(self, source: str, table_name: str) -> Grid:
        if not self.host.has_table(source, table_name):
            raise NotFoundException("table", f"{source}/{table_name}")
        grid = Grid.from_rows(self.host.get_values(source, table_name))
        logger.debug(f"Loaded {source}/{table_name}: {grid.row_count}x{grid.column_count}")
        return grid
