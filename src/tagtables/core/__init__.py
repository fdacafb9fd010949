"""
TagTables Core - tag-addressed table engine.

Components:
- tags: raw tag cell -> canonical tags
- grid: used-range snapshots loaded from a storage host
- tag_maps: tag -> index maps and duplicate-tag verification
- table_store: session cache of TableEntry snapshots
- gateway: the one read path every workflow uses
- rows: template-safe row deletion and bulk writes
- selection: checkbox-driven table selections
- layout: designer visibility, trimming and tag cell edits
"""

from tagtables.core.a1 import A1Selection, cell_a1, column_letter, column_to_number, parse_a1_notation
from tagtables.core.gateway import TableDataGateway, open_session
from tagtables.core.grid import Grid, GridLoader
from tagtables.core.layout import (
    add_tags,
    designer_ranges,
    ensure_designer_visibility,
    set_designer_ranges,
    set_designer_visibility,
    toggle_designer_visibility,
    trim_table,
    visibility_state,
)
from tagtables.core.rows import RowLifecycleManager, RowOutcome, TableWriter, to_dense_row
from tagtables.core.selection import FilterSelection, clear_selection, read_selection
from tagtables.core.table_store import TableCache, TableEntry, TableRecord
from tagtables.core.tag_maps import (
    TagConflict,
    TagMap,
    TagMapBuilder,
    TagMaps,
    build_tag_maps,
    ensure_unique_tags,
    verify_tags,
)
from tagtables.core.tags import Tag, merge_tags, normalize_tag, normalize_tags

__all__ = [
    "A1Selection",
    "FilterSelection",
    "Grid",
    "GridLoader",
    "RowLifecycleManager",
    "RowOutcome",
    "TableCache",
    "TableDataGateway",
    "TableEntry",
    "TableRecord",
    "TableWriter",
    "Tag",
    "TagConflict",
    "TagMap",
    "TagMapBuilder",
    "TagMaps",
    "add_tags",
    "build_tag_maps",
    "cell_a1",
    "clear_selection",
    "column_letter",
    "column_to_number",
    "designer_ranges",
    "ensure_designer_visibility",
    "ensure_unique_tags",
    "merge_tags",
    "normalize_tag",
    "normalize_tags",
    "open_session",
    "parse_a1_notation",
    "read_selection",
    "set_designer_ranges",
    "set_designer_visibility",
    "to_dense_row",
    "toggle_designer_visibility",
    "trim_table",
    "verify_tags",
    "visibility_state",
]
