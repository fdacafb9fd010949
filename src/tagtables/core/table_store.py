from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Iterator

from tagtables.core.grid import Grid, GridLoader
from tagtables.core.tag_maps import TagMap, TagMapBuilder
from tagtables.exceptions import StructuralException

logger = logging.getLogger(__name__)

TableKey = tuple[str, str]
TableRecord = dict[str, Any]


@dataclass(frozen=True, eq=False)
class TableEntry:
    source: str
    table_name: str
    grid: Grid
    row_tags: TagMap
    col_tags: TagMap
    header_tag: str = "header"

    @property
    def key(self) -> TableKey:
        return (self.source, self.table_name)

    @property
    def header_row(self) -> int:
        """0-based index of the row tagged as header."""
        index = self.row_tags.find(self.header_tag)
        if index is None:
            raise StructuralException(self.table_name, self.header_tag)
        return index

    def data_rows(self) -> Iterator[tuple[int, tuple[Any, ...]]]:
        """(0-based index, values) of every row below the header."""
        for index in range(self.header_row + 1, self.grid.row_count):
            yield index, self.grid.row(index)

    def records(self) -> list[TableRecord]:
        """Data rows as tag -> value records."""
        return [
            {tag: self.grid.cell(index, col) for tag, col in self.col_tags.items()}
            for index, _ in self.data_rows()
        ]


class TableCache:
    """
    Session-scoped store of table snapshots keyed by (source, table name).

    Entries are never patched, only replaced; a second get() without an
    intervening invalidate or forced refresh returns the very same object.
    """

    def __init__(
        self,
        loader: GridLoader,
        builder: TagMapBuilder | None = None,
        strict: bool = False,
        header_tag: str = "header",
    ):
        self._lock = RLock()
        self._tables: dict[TableKey, TableEntry] = {}
        self.loader = loader
        self.builder = builder or TagMapBuilder()
        self.strict = strict
        self.header_tag = header_tag

    def _build(self, source: str, table_name: str) -> TableEntry:
        grid = self.loader.load(source, table_name)
        maps = self.builder.build(grid, strict=self.strict, table_name=table_name)
        return TableEntry(
            source=source,
            table_name=table_name,
            grid=grid,
            row_tags=maps.row_tags,
            col_tags=maps.col_tags,
            header_tag=self.header_tag,
        )

    def get(self, source: str, table_name: str, force_refresh: bool = False) -> TableEntry:
        key = (source, table_name)
        with self._lock:
            if not force_refresh and key in self._tables:
                return self._tables[key]
            entry = self._build(source, table_name)
            self._tables[key] = entry
            logger.debug(f"{'Refreshed' if force_refresh else 'Loaded'} {source}/{table_name}")
            return entry

    def invalidate(self, source: str, table_name: str) -> None:
        with self._lock:
            if self._tables.pop((source, table_name), None) is not None:
                logger.debug(f"Invalidated {source}/{table_name}")

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._tables

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)
