"""
TagTables Core - Sheet layout utilities.

Designer rows and columns are listed in the note on a table's A1 cell, as
"Hide: A,1,3-4,D-F". Players see the sheets with those ranges hidden;
designers toggle them back on. Trimming drops the allocated but unused rows
and columns around a table, and tag cells can be extended in place.
"""
from __future__ import annotations

import logging
from typing import Literal

from tagtables.core.a1 import A1Selection, parse_a1_notation
from tagtables.core.gateway import TableDataGateway
from tagtables.core.tag_maps import Axis
from tagtables.core.tags import merge_tags
from tagtables.hosts.base import SheetHost

logger = logging.getLogger(__name__)

HIDE_NOTE_PREFIX = "Hide: "

VisibilityState = Literal["hidden", "shown", "unknown"]


def designer_ranges(host: SheetHost, source: str, table_name: str) -> A1Selection | None:
    """Rows and columns named by the table's "Hide:" note, or None without one."""
    note = host.get_note(source, table_name)
    if HIDE_NOTE_PREFIX not in note:
        return None
    notation = note.split(HIDE_NOTE_PREFIX, 1)[1].split("\n", 1)[0]
    return parse_a1_notation(notation)


def set_designer_ranges(host: SheetHost, source: str, table_name: str, notation: str) -> A1Selection:
    """Store the table's "Hide:" note; an empty notation removes it."""
    ranges = parse_a1_notation(notation)
    host.set_note(source, table_name, f"{HIDE_NOTE_PREFIX}{notation.strip()}" if notation.strip() else "")
    return ranges


def visibility_state(host: SheetHost, source: str) -> VisibilityState:
    """
    Whether the designer ranges of a source are currently hidden.

    The first table with a non-empty "Hide:" note decides, by its first row
    (or, without rows, its first column).
    """
    for table_name in host.table_names(source):
        ranges = designer_ranges(host, source, table_name)
        if ranges is None:
            continue
        if ranges.rows:
            return "hidden" if host.is_row_hidden(source, table_name, ranges.rows[0]) else "shown"
        if ranges.cols:
            return "hidden" if host.is_column_hidden(source, table_name, ranges.cols[0]) else "shown"
    return "unknown"


def set_designer_visibility(host: SheetHost, source: str, hidden: bool) -> list[str]:
    """Hide or show every designer range of a source. Returns the tables touched."""
    touched = []
    for table_name in host.table_names(source):
        ranges = designer_ranges(host, source, table_name)
        if ranges is None or not (ranges.rows or ranges.cols):
            continue
        if hidden:
            host.hide_rows(source, table_name, ranges.rows)
            host.hide_columns(source, table_name, ranges.cols)
        else:
            host.show_rows(source, table_name, ranges.rows)
            host.show_columns(source, table_name, ranges.cols)
        touched.append(table_name)
    logger.info(f"{'Hid' if hidden else 'Showed'} designer ranges of {len(touched)} table(s) in {source}")
    return touched


def toggle_designer_visibility(host: SheetHost, source: str) -> VisibilityState:
    """Flip the designer ranges of a source; returns the new state."""
    state = visibility_state(host, source)
    if state == "unknown":
        logger.info(f"No \"Hide:\" notes found in {source}, nothing to toggle")
        return state
    set_designer_visibility(host, source, hidden=state == "shown")
    return "hidden" if state == "shown" else "shown"


def ensure_designer_visibility(host: SheetHost, source: str, show: bool) -> VisibilityState:
    """Show designer ranges for designers, hide them for players; no-op when already so."""
    state = visibility_state(host, source)
    if (show and state == "hidden") or (not show and state == "shown"):
        return toggle_designer_visibility(host, source)
    return state


def trim_table(gateway: TableDataGateway, source: str, table_name: str) -> tuple[int, int]:
    """
    Delete allocated rows and columns past the used range.

    An empty table keeps one row and one column. Columns go first.

    Returns:
        (rows deleted, columns deleted)
    """
    host = gateway.host
    last_row = max(host.last_row(source, table_name), 1)
    last_col = max(host.last_column(source, table_name), 1)
    rows_to_delete = host.max_rows(source, table_name) - last_row
    cols_to_delete = host.max_columns(source, table_name) - last_col

    if cols_to_delete > 0:
        gateway.on_change(host.delete_columns(source, table_name, last_col + 1, cols_to_delete))
    if rows_to_delete > 0:
        gateway.on_change(host.delete_rows(source, table_name, last_row + 1, rows_to_delete))

    rows_deleted, cols_deleted = max(rows_to_delete, 0), max(cols_to_delete, 0)
    logger.info(f"Trimmed {rows_deleted} row(s) and {cols_deleted} column(s) from {source}/{table_name}")
    return rows_deleted, cols_deleted


def add_tags(gateway: TableDataGateway, source: str, table_name: str, axis: Axis, position: int, tags: str) -> str:
    """
    Merge extra tags into the tag cell of a column or row.

    Args:
        axis: "column" to extend a column tag, "row" for a row tag
        position: 1-based column (or row) number
        tags: Comma-separated tags to add

    Returns:
        The merged cell text
    """
    builder = gateway.cache.builder
    if axis == "column":
        row, col = builder.tag_row_index + 1, position
    else:
        row, col = position, builder.tag_column_index + 1

    existing = gateway.host.read_cell(source, table_name, row, col)
    merged = merge_tags(existing if isinstance(existing, str) else "", tags)
    gateway.host.write_cell(source, table_name, row, col, merged)
    gateway.invalidate(source, table_name)
    return merged
