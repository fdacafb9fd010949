"""
TagTables Tables - Service

Table actions run against one request-scoped gateway.
"""

import logging
from typing import Annotated, Any

from fastapi import Depends

from tagtables.config import Settings, TableSettings, get_settings
from tagtables.core.gateway import TableDataGateway
from tagtables.core.layout import (
    add_tags,
    ensure_designer_visibility,
    set_designer_ranges,
    toggle_designer_visibility,
    trim_table,
    visibility_state,
)
from tagtables.core.rows import RowLifecycleManager, RowOutcome, TableWriter
from tagtables.core.selection import clear_selection, read_selection
from tagtables.deps import get_gateway
from tagtables.exceptions import NotFoundException, StructuralException
from .schemas import (
    BatchRowRemovalResponse,
    DesignerRangesResponse,
    FilterSelectionItem,
    FilterSelectionResponse,
    RecordsWriteResponse,
    RowRemovalResponse,
    TableListResponse,
    TableTagsResponse,
    TagConflictResponse,
    TagVerificationResponse,
    TagsAddResponse,
    TrimResponse,
    VisibilityResponse,
)

logger = logging.getLogger(__name__)


class TablesService:
    """
    Actions on tagged tables.

    Each instance serves one request: its gateway cache starts empty and is
    discarded with the request.
    """

    def __init__(self, gateway: TableDataGateway, settings: TableSettings | None = None):
        self.gateway = gateway
        self.settings = settings or TableSettings()
        self.rows = RowLifecycleManager(gateway)
        self.writer = TableWriter(gateway)

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def _require_source(self, source: str) -> list[str]:
        tables = self.gateway.host.table_names(source)
        if not tables:
            raise NotFoundException("source", source)
        return tables

    def list_tables(self, source: str) -> TableListResponse:
        tables = self._require_source(source)
        return TableListResponse(source=source, tables=tables, total=len(tables))

    def describe_table(self, source: str, table: str) -> TableTagsResponse:
        entry = self.gateway.get(source, table)
        try:
            header_row = entry.header_row
        except StructuralException:
            header_row = None
        return TableTagsResponse(
            source=source,
            table=table,
            row_count=entry.grid.row_count,
            column_count=entry.grid.column_count,
            header_row=header_row,
            row_tags=entry.row_tags.to_dict(),
            column_tags=entry.col_tags.to_dict(),
        )

    def verify_table(self, source: str, table: str) -> TagVerificationResponse:
        conflicts = self.gateway.verify(source, table)
        if conflicts:
            first = conflicts[0]
            message = (
                f"Duplicate {first.axis} tag found: \"{first.tag}\". "
                f"Original in cell: {first.first_cell}, duplicate in cell: {first.duplicate_cell}"
            )
        else:
            message = "All column and row tags are unique."
        return TagVerificationResponse(
            source=source,
            table=table,
            unique=not conflicts,
            conflicts=[TagConflictResponse(**conflict.to_dict()) for conflict in conflicts],
            message=message,
        )

    def invalidate(self, source: str, table: str) -> None:
        self.gateway.invalidate(source, table)

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------

    def remove_row(self, source: str, table: str, row_number: int) -> RowRemovalResponse:
        outcome = self.rows.delete_or_clear(source, table, row_number)
        return RowRemovalResponse(row_number=row_number, outcome=outcome.value)

    def remove_rows(self, source: str, table: str, row_numbers: list[int]) -> BatchRowRemovalResponse:
        results = self.rows.delete_rows(source, table, row_numbers)
        return BatchRowRemovalResponse(
            results=[RowRemovalResponse(row_number=row, outcome=outcome.value) for row, outcome in results],
            deleted_count=sum(1 for _, outcome in results if outcome is RowOutcome.DELETED),
            cleared_count=sum(1 for _, outcome in results if outcome is RowOutcome.CLEARED),
        )

    def write_records(self, source: str, table: str, records: list[dict[str, Any]]) -> RecordsWriteResponse:
        return RecordsWriteResponse(written=self.writer.clear_and_write(source, table, records))

    # -------------------------------------------------------------------------
    # Selections
    # -------------------------------------------------------------------------

    def get_selection(self, source: str, sheet: str) -> FilterSelectionResponse:
        selected = read_selection(self.gateway, source, sheet, selection_tag=self.settings.selection_tag)
        items = [FilterSelectionItem(table_name=s.table_name, source_label=s.source_label) for s in selected]
        return FilterSelectionResponse(items=items, total=len(items))

    def clear_selection(self, source: str, sheet: str) -> int:
        return clear_selection(self.gateway, source, sheet, selection_tag=self.settings.selection_tag)


    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def trim(self, source: str, table: str) -> TrimResponse:
        rows_deleted, columns_deleted = trim_table(self.gateway, source, table)
        return TrimResponse(rows_deleted=rows_deleted, columns_deleted=columns_deleted)

    def add_tags(self, source: str, table: str, axis: str, position: int, tags: str) -> TagsAddResponse:
        merged = add_tags(self.gateway, source, table, axis, position, tags)
        return TagsAddResponse(axis=axis, position=position, tags=merged)

    def set_designer_ranges(self, source: str, table: str, notation: str) -> DesignerRangesResponse:
        ranges = set_designer_ranges(self.gateway.host, source, table, notation)
        return DesignerRangesResponse(rows=ranges.rows, cols=ranges.cols)

    def get_visibility(self, source: str) -> VisibilityResponse:
        self._require_source(source)
        return VisibilityResponse(source=source, state=visibility_state(self.gateway.host, source))

    def toggle_visibility(self, source: str) -> VisibilityResponse:
        self._require_source(source)
        return VisibilityResponse(source=source, state=toggle_designer_visibility(self.gateway.host, source))

    def set_visibility(self, source: str, show: bool) -> VisibilityResponse:
        self._require_source(source)
        state = ensure_designer_visibility(self.gateway.host, source, show)
        return VisibilityResponse(source=source, state=state)


def get_tables_service(
    gateway: Annotated[TableDataGateway, Depends(get_gateway)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TablesService:
    return TablesService(gateway, settings.tables)
