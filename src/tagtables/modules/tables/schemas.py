"""
TagTables Tables - Schemas

Pydantic models for table actions.
"""

from typing import Any, List, Literal

from pydantic import BaseModel, Field


# =============================================================================
# Table Structure
# =============================================================================

class TableListResponse(BaseModel):
    """Tables available in a source."""
    source: str
    tables: List[str]
    total: int


class TableTagsResponse(BaseModel):
    """Tag maps and extent of one table."""
    source: str
    table: str
    row_count: int
    column_count: int
    header_row: int | None = Field(default=None, description="0-based index of the header row, if tagged")
    row_tags: dict[str, int]
    column_tags: dict[str, int]


class TagConflictResponse(BaseModel):
    """A tag claimed by two columns (or rows)."""
    axis: Literal["row", "column"]
    tag: str
    first_index: int
    duplicate_index: int
    first_cell: str
    duplicate_cell: str


class TagVerificationResponse(BaseModel):
    """Result of a tag verification pass."""
    source: str
    table: str
    unique: bool
    conflicts: List[TagConflictResponse] = Field(default_factory=list)
    message: str


# =============================================================================
# Row Lifecycle
# =============================================================================

class RowRemovalResponse(BaseModel):
    """What happened to one row."""
    row_number: int
    outcome: Literal["deleted", "cleared"]


class BatchRowRemoval(BaseModel):
    """Remove several rows of one table."""
    row_numbers: List[int] = Field(..., min_length=1, description="1-based row numbers, any order")


class BatchRowRemovalResponse(BaseModel):
    """Result of a batch removal, bottom row first."""
    results: List[RowRemovalResponse]
    deleted_count: int
    cleared_count: int


# =============================================================================
# Selections and Records
# =============================================================================

class FilterSelectionItem(BaseModel):
    table_name: str
    source_label: str


class FilterSelectionResponse(BaseModel):
    items: List[FilterSelectionItem]
    total: int


class RecordsWrite(BaseModel):
    """Replace the data rows of a table with tag-keyed records."""
    records: List[dict[str, Any]] = Field(default_factory=list)


class RecordsWriteResponse(BaseModel):
    written: int


# =============================================================================
# Layout
# =============================================================================

class TrimResponse(BaseModel):
    """Rows and columns removed past the used range."""
    rows_deleted: int
    columns_deleted: int


class TagsAdd(BaseModel):
    """Merge tags into a column or row tag cell."""
    axis: Literal["row", "column"] = "column"
    position: int = Field(..., ge=1, description="1-based column (or row) number")
    tags: str = Field(..., min_length=1, description="Comma-separated tags to add")


class TagsAddResponse(BaseModel):
    axis: Literal["row", "column"]
    position: int
    tags: str


class DesignerRangesUpdate(BaseModel):
    """Rows and columns to hide for players, e.g. "A,1,3-4,D-F"; empty clears."""
    notation: str = ""


class DesignerRangesResponse(BaseModel):
    rows: List[int]
    cols: List[int]


class VisibilityUpdate(BaseModel):
    """Show designer ranges (designers) or hide them (players)."""
    show: bool


class VisibilityResponse(BaseModel):
    source: str
    state: Literal["hidden", "shown", "unknown"]
