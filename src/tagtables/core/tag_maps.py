"""
TagTables Core - Tag maps.

Row 0 of a tagged table names its columns, column 0 names its rows. The
builder turns those cells into two lookups, tag -> index, and the verifier
reports every tag claimed by more than one column (or row).

Build is lenient by default: a duplicate is logged and the later index wins,
which is what every existing sheet has been relying on. Strict builds fail on
the first duplicate. verify_tags() is the authoritative check either way.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass
from typing import Any, Literal

from tagtables.core.a1 import cell_a1
from tagtables.core.grid import Grid
from tagtables.core.tags import Tag, normalize_tag, normalize_tags
from tagtables.exceptions import DuplicateTagException, TagNotFoundException

logger = logging.getLogger(__name__)

Axis = Literal["row", "column"]

TAG_ROW_INDEX = 0
TAG_COLUMN_INDEX = 0


class TagMap(Mapping[str, int]):
    """Read-only tag -> 0-based index lookup. Keys are normalized on lookup."""

    def __init__(self, axis: Axis, entries: dict[Tag, int] | None = None):
        self.axis = axis
        self._entries: dict[Tag, int] = dict(entries or {})

    def __getitem__(self, tag: str) -> int:
        return self._entries[normalize_tag(tag)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TagMap({self.axis!r}, {self._entries!r})"

    def find(self, tag: str) -> int | None:
        """Index for tag, or None when no row/column carries it."""
        return self._entries.get(normalize_tag(tag))

    def require(self, tag: str) -> int:
        """Index for tag; raises TagNotFoundException when absent."""
        index = self.find(tag)
        if index is None:
            raise TagNotFoundException(normalize_tag(tag), self.axis, sorted(self._entries))
        return index

    def to_dict(self) -> dict[str, int]:
        return dict(self._entries)


@dataclass(frozen=True)
class TagConflict:
    """One tag claimed by two different columns (or rows)."""
    axis: Axis
    tag: str
    first_index: int
    duplicate_index: int
    first_cell: str
    duplicate_cell: str

    @property
    def indexes(self) -> frozenset[int]:
        return frozenset((self.first_index, self.duplicate_index))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TagMaps:
    row_tags: TagMap
    col_tags: TagMap


class TagMapBuilder:
    def __init__(self, tag_row_index: int = TAG_ROW_INDEX, tag_column_index: int = TAG_COLUMN_INDEX):
        self.tag_row_index = tag_row_index
        self.tag_column_index = tag_column_index

    def _cell_a1(self, axis: Axis, index: int) -> str:
        if axis == "column":
            return cell_a1(self.tag_row_index + 1, index + 1)
        return cell_a1(index + 1, self.tag_column_index + 1)

    def _tag_cells(self, grid: Grid, axis: Axis) -> list[tuple[int, Any]]:
        if axis == "column":
            return list(enumerate(grid.row(self.tag_row_index)))
        return [(r, grid.cell(r, self.tag_column_index)) for r in range(grid.row_count)]

    def _conflict(self, axis: Axis, tag: str, first: int, duplicate: int) -> TagConflict:
        return TagConflict(
            axis=axis,
            tag=tag,
            first_index=first,
            duplicate_index=duplicate,
            first_cell=self._cell_a1(axis, first),
            duplicate_cell=self._cell_a1(axis, duplicate),
        )

    def _build_axis(self, grid: Grid, axis: Axis, strict: bool, table_name: str) -> TagMap:
        entries: dict[Tag, int] = {}
        for index, raw in self._tag_cells(grid, axis):
            for tag in normalize_tags(raw):
                previous = entries.get(tag)
                if previous is not None and previous != index:
                    conflict = self._conflict(axis, tag, previous, index)
                    if strict:
                        raise DuplicateTagException(table_name, [conflict.to_dict()])
                    logger.warning(
                        f"Duplicate {axis} tag '{tag}' in <{table_name}>: "
                        f"{conflict.first_cell} and {conflict.duplicate_cell}, keeping {conflict.duplicate_cell}"
                    )
                entries[tag] = index
        return TagMap(axis, entries)

    def build(self, grid: Grid, strict: bool = False, table_name: str = "") -> TagMaps:
        """
        Build row and column tag maps for a grid.

        Args:
            grid: Table snapshot
            strict: Raise DuplicateTagException instead of last-write-wins
            table_name: Used in log lines and errors only

        Returns:
            TagMaps with row_tags and col_tags
        """
        col_tags = self._build_axis(grid, "column", strict, table_name)
        row_tags = self._build_axis(grid, "row", strict, table_name)
        return TagMaps(row_tags=row_tags, col_tags=col_tags)

    def verify(self, grid: Grid) -> list[TagConflict]:
        """Report every cross-cell duplicate, columns first, in scan order."""
        conflicts: list[TagConflict] = []
        for axis in ("column", "row"):
            seen: dict[Tag, int] = {}
            for index, raw in self._tag_cells(grid, axis):
                for tag in normalize_tags(raw):
                    if tag not in seen:
                        seen[tag] = index
                    elif seen[tag] != index:
                        conflicts.append(self._conflict(axis, tag, seen[tag], index))
        return conflicts


def build_tag_maps(grid: Grid, strict: bool = False) -> TagMaps:
    return TagMapBuilder().build(grid, strict=strict)


def verify_tags(grid: Grid, builder: TagMapBuilder | None = None) -> list[TagConflict]:
    return (builder or TagMapBuilder()).verify(grid)


def ensure_unique_tags(grid: Grid, table_name: str = "", builder: TagMapBuilder | None = None) -> None:
    """Raise DuplicateTagException carrying every conflict in the grid."""
    conflicts = verify_tags(grid, builder)
    if conflicts:
        raise DuplicateTagException(table_name, [conflict.to_dict() for conflict in conflicts])
