"""
TagTables Tables Module

Table actions:
- Tag maps and tag verification
- Template-safe row removal
- Bulk record writes
- Filter selections
- Designer visibility, trimming and tag edits
"""

from .router import router
from .schemas import (
    BatchRowRemoval, BatchRowRemovalResponse,
    FilterSelectionItem, FilterSelectionResponse,
    RecordsWrite, RecordsWriteResponse,
    RowRemovalResponse,
    TableListResponse, TableTagsResponse,
    TagConflictResponse, TagVerificationResponse,
    TagsAdd, TagsAddResponse,
    TrimResponse,
    DesignerRangesUpdate, DesignerRangesResponse,
    VisibilityResponse, VisibilityUpdate,
)
from .service import TablesService, get_tables_service

__all__ = [
    "router",
    "TablesService",
    "get_tables_service",
    "BatchRowRemoval",
    "BatchRowRemovalResponse",
    "DesignerRangesResponse",
    "DesignerRangesUpdate",
    "FilterSelectionItem",
    "FilterSelectionResponse",
    "RecordsWrite",
    "RecordsWriteResponse",
    "RowRemovalResponse",
    "TableListResponse",
    "TableTagsResponse",
    "TagConflictResponse",
    "TagVerificationResponse",
    "TagsAdd",
    "TagsAddResponse",
    "TrimResponse",
    "VisibilityResponse",
    "VisibilityUpdate",
]
