"""TagTables Tables - Router.

REST endpoints standing in for the spreadsheet menu actions.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from tagtables.schemas import ErrorResponse
from tagtables.modules.tables.schemas import (
    BatchRowRemoval,
    BatchRowRemovalResponse,
    DesignerRangesResponse,
    DesignerRangesUpdate,
    FilterSelectionResponse,
    RecordsWrite,
    RecordsWriteResponse,
    RowRemovalResponse,
    TableListResponse,
    TableTagsResponse,
    TagVerificationResponse,
    TagsAdd,
    TagsAddResponse,
    TrimResponse,
    VisibilityResponse,
    VisibilityUpdate,
)
from tagtables.modules.tables.service import TablesService, get_tables_service

router = APIRouter(
    prefix="/tables",
    tags=["Tables"],
    responses={
        404: {"model": ErrorResponse, "description": "Source or table not found"},
        409: {"model": ErrorResponse, "description": "Duplicate tag (strict mode)"},
    },
)

Service = Annotated[TablesService, Depends(get_tables_service)]


@router.get("/{source}", response_model=TableListResponse)
def list_tables(source: str, service: Service) -> TableListResponse:
    """List the tables of a source."""
    return service.list_tables(source)


# Declared before "/{source}/{table}" so "visibility" is not read as a table name
@router.get("/{source}/visibility", response_model=VisibilityResponse)
def get_visibility(source: str, service: Service) -> VisibilityResponse:
    """Whether designer rows and columns of a source are hidden."""
    return service.get_visibility(source)


@router.put("/{source}/visibility", response_model=VisibilityResponse)
def set_visibility(source: str, data: VisibilityUpdate, service: Service) -> VisibilityResponse:
    """Show designer ranges, or hide them for players."""
    return service.set_visibility(source, data.show)


@router.post("/{source}/visibility/toggle", response_model=VisibilityResponse)
def toggle_visibility(source: str, service: Service) -> VisibilityResponse:
    """Flip designer ranges between hidden and shown."""
    return service.toggle_visibility(source)


@router.get("/{source}/{table}", response_model=TableTagsResponse)
def describe_table(source: str, table: str, service: Service) -> TableTagsResponse:
    """Row and column tag maps of a table."""
    return service.describe_table(source, table)


@router.post("/{source}/{table}/verify", response_model=TagVerificationResponse)
def verify_table(source: str, table: str, service: Service) -> TagVerificationResponse:
    """Check that every row and column tag is unique."""
    return service.verify_table(source, table)


@router.post("/{source}/{table}/invalidate", status_code=status.HTTP_204_NO_CONTENT)
def invalidate_table(source: str, table: str, service: Service):
    """Drop the cached snapshot of a table."""
    service.invalidate(source, table)
    return None


@router.delete("/{source}/{table}/rows/{row_number}", response_model=RowRemovalResponse)
def remove_row(source: str, table: str, row_number: int, service: Service) -> RowRemovalResponse:
    """Delete a data row, or clear it when it is the template row."""
    return service.remove_row(source, table, row_number)


@router.post("/{source}/{table}/rows/delete", response_model=BatchRowRemovalResponse)
def remove_rows(source: str, table: str, data: BatchRowRemoval, service: Service) -> BatchRowRemovalResponse:
    """Delete several data rows, bottom-up."""
    return service.remove_rows(source, table, data.row_numbers)


@router.put("/{source}/{table}/records", response_model=RecordsWriteResponse)
def write_records(source: str, table: str, data: RecordsWrite, service: Service) -> RecordsWriteResponse:
    """Replace the data rows of a table."""
    return service.write_records(source, table, data.records)


@router.get("/{source}/{table}/selection", response_model=FilterSelectionResponse)
def get_selection(source: str, table: str, service: Service) -> FilterSelectionResponse:
    """Tables checked on a selection sheet."""
    return service.get_selection(source, table)


@router.post("/{source}/{table}/selection/clear", status_code=status.HTTP_204_NO_CONTENT)
def clear_selection(source: str, table: str, service: Service):
    """Uncheck every selection box."""
    service.clear_selection(source, table)
    return None


@router.post("/{source}/{table}/trim", response_model=TrimResponse)
def trim_table(source: str, table: str, service: Service) -> TrimResponse:
    """Delete unused rows and columns past the used range."""
    return service.trim(source, table)


@router.post("/{source}/{table}/tags", response_model=TagsAddResponse)
def add_tags(source: str, table: str, data: TagsAdd, service: Service) -> TagsAddResponse:
    """Merge tags into a column or row tag cell."""
    return service.add_tags(source, table, data.axis, data.position, data.tags)


@router.put("/{source}/{table}/designer-ranges", response_model=DesignerRangesResponse)
def set_designer_ranges(source: str, table: str, data: DesignerRangesUpdate, service: Service) -> DesignerRangesResponse:
    """Set the rows and columns hidden from players."""
    return service.set_designer_ranges(source, table, data.notation)
