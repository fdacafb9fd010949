"""
TagTables Core - Row lifecycle and bulk writes.

Data rows live below the row tagged "header". The first data row doubles as
the template that carries formatting and validation for future entries, so it
is cleared rather than deleted when it is the only one left.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable

from tagtables.core.gateway import TableDataGateway
from tagtables.core.table_store import TableRecord
from tagtables.core.tag_maps import TagMap
from tagtables.exceptions import StructuralException, ValidationException
from tagtables.hosts.base import StructuralChange

logger = logging.getLogger(__name__)


class RowOutcome(str, Enum):
    DELETED = "deleted"
    CLEARED = "cleared"


def to_dense_row(record: TableRecord, col_tags: TagMap, width: int = 0) -> list[Any]:
    """
    Lay a tag-keyed record out as a positional row.

    Args:
        record: tag -> value; every tag must exist in col_tags
        col_tags: Column tag map of the destination table
        width: Minimum row width

    Returns:
        Row of at least `width` cells, "" where the record has no value
    """
    row: list[Any] = [""] * width
    for tag, value in record.items():
        col = col_tags.require(tag)
        if col >= len(row):
            row.extend([""] * (col + 1 - len(row)))
        row[col] = "" if value is None else value
    return row


def _segments_without(col: int, last_col: int) -> list[tuple[int, int]]:
    """(start, count) column spans covering 1..last_col except `col` (1-based)."""
    spans = []
    if col > 1:
        spans.append((1, min(col - 1, last_col)))
    if last_col > col:
        spans.append((col + 1, last_col - col))
    return [(start, count) for start, count in spans if count > 0]


class RowLifecycleManager:
    """Deletes rows from tagged tables without destroying the template row."""

    def __init__(self, gateway: TableDataGateway):
        self.gateway = gateway
        self.host = gateway.host

    @property
    def _tag_col(self) -> int:
        return self.gateway.cache.builder.tag_column_index + 1

    def _apply(self, change: StructuralChange) -> None:
        self.gateway.on_change(change)

    def delete_or_clear(self, source: str, table_name: str, row_number: int) -> RowOutcome:
        """
        Remove a data row, or clear it if it is the last one.

        Args:
            source: Source key of the table
            table_name: Exact table name
            row_number: 1-based row number

        Returns:
            RowOutcome.DELETED or RowOutcome.CLEARED
        """
        entry = self.gateway.get(source, table_name, force_refresh=True)
        try:
            header_row = entry.header_row + 1
        except StructuralException as exc:
            logger.error(f"{exc.message} Falling back to a plain delete of row {row_number} in {source}/{table_name}")
            self._apply(self.host.delete_rows(source, table_name, row_number))
            return RowOutcome.DELETED

        if row_number <= header_row:
            raise ValidationException(
                f"Row {row_number} is not a data row of <{table_name}> (header is row {header_row})"
            )
        last_row = self.host.last_row(source, table_name)
        if row_number > last_row:
            raise ValidationException(f"Row {row_number} is past the last row of <{table_name}> (row {last_row})")

        if last_row <= header_row + 1:
            last_col = self.host.last_column(source, table_name)
            for start, count in _segments_without(self._tag_col, last_col):
                self.host.clear_range(source, table_name, row_number, start, 1, count)
                self.host.uncheck_range(source, table_name, row_number, start, 1, count)
            self.gateway.invalidate(source, table_name)
            logger.info(f"Cleared template row {row_number} of {source}/{table_name}")
            return RowOutcome.CLEARED

        self._apply(self.host.delete_rows(source, table_name, row_number))
        logger.info(f"Deleted row {row_number} of {source}/{table_name}")
        return RowOutcome.DELETED

    def delete_rows(self, source: str, table_name: str, row_numbers: Iterable[int]) -> list[tuple[int, RowOutcome]]:
        """Remove several rows, bottom-up so earlier deletions do not shift later ones."""
        results = []
        for row_number in sorted(set(row_numbers), reverse=True):
            results.append((row_number, self.delete_or_clear(source, table_name, row_number)))
        return results


class TableWriter:
    """Replaces the data region of a tagged table with new records."""

    def __init__(self, gateway: TableDataGateway):
        self.gateway = gateway
        self.host = gateway.host

    def clear_and_write(self, source: str, table_name: str, records: list[TableRecord]) -> int:
        """
        Clear every data row, then write records starting at the template row.

        The tag column is never written. Returns the number of rows written.
        """
        entry = self.gateway.get(source, table_name, force_refresh=True)
        first_data_row = entry.header_row + 2
        tag_col = self.gateway.cache.builder.tag_column_index + 1
        last_row = self.host.last_row(source, table_name)
        widest_tag = max(entry.col_tags.values(), default=-1) + 1
        last_col = max(self.host.last_column(source, table_name), widest_tag)

        # Dense rows first so a bad tag fails before anything is cleared
        dense = [to_dense_row(record, entry.col_tags, last_col) for record in records]

        if last_row >= first_data_row:
            for start, count in _segments_without(tag_col, last_col):
                self.host.clear_range(source, table_name, first_data_row, start, last_row - first_data_row + 1, count)
            if last_row > first_data_row:
                self.host.delete_rows(source, table_name, first_data_row + 1, last_row - first_data_row)

        if len(dense) > 1:
            self.host.insert_rows_after(source, table_name, first_data_row, len(dense) - 1)

        for start, count in _segments_without(tag_col, last_col):
            values = [row[start - 1:start - 1 + count] for row in dense]
            if values:
                self.host.write_range(source, table_name, first_data_row, start, values)

        self.gateway.invalidate(source, table_name)
        logger.info(f"Wrote {len(dense)} row(s) to {source}/{table_name}")
        return len(dense)
