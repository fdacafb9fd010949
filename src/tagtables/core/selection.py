"""
TagTables Core - Filter selections.

A selection sheet lists candidate tables, one per data row, with a checkbox
column (tagged "isactive") marking the ones the player wants included.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from tagtables.core.gateway import TableDataGateway
from tagtables.exceptions import StructuralException

logger = logging.getLogger(__name__)

SELECTION_TAG = "isactive"


@dataclass(frozen=True)
class FilterSelection:
    table_name: str
    source_label: str


def read_selection(
    gateway: TableDataGateway,
    source: str,
    sheet: str,
    table_tag: str = "tablename",
    source_tag: str = "source",
    selection_tag: str = SELECTION_TAG,
) -> list[FilterSelection]:
    """Selected rows of a selection sheet, in sheet order. Only a literal True counts as checked."""
    entry = gateway.get(source, sheet, force_refresh=True)
    active_col = entry.col_tags.require(selection_tag)
    table_col = entry.col_tags.require(table_tag)
    source_col = entry.col_tags.find(source_tag)

    selected = []
    for index, _ in entry.data_rows():
        if entry.grid.cell(index, active_col) is True and entry.grid.cell(index, table_col):
            label = entry.grid.cell(index, source_col) if source_col is not None else ""
            selected.append(FilterSelection(table_name=str(entry.grid.cell(index, table_col)), source_label=str(label)))
    return selected


def clear_selection(
    gateway: TableDataGateway,
    source: str,
    sheet: str,
    selection_tag: str = SELECTION_TAG,
) -> int:
    """Uncheck every selection box below the header. Returns the number of rows covered."""
    entry = gateway.get(source, sheet, force_refresh=True)
    active_col = entry.col_tags.find(selection_tag)
    if active_col is None:
        raise StructuralException(sheet, selection_tag)
    first_data_row = entry.header_row + 2
    num_rows = gateway.host.last_row(source, sheet) - first_data_row + 1
    if num_rows > 0:
        gateway.host.uncheck_range(source, sheet, first_data_row, active_col + 1, num_rows, 1)
        gateway.invalidate(source, sheet)
    logger.info(f"Cleared {max(num_rows, 0)} selection(s) in {source}/{sheet}")
    return max(num_rows, 0)
