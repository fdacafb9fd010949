"""
TagTables Core - Table data gateway.

The single entry point every workflow uses to read tagged tables. One gateway
(and its cache) lives for one execution; open it as a context manager so that
structural changes made through the host during that execution drop the
affected snapshot automatically.
"""
from __future__ import annotations

import logging

from tagtables.config import TableSettings
from tagtables.core.grid import GridLoader
from tagtables.core.tag_maps import TagConflict, TagMapBuilder
from tagtables.core.table_store import TableCache, TableEntry
from tagtables.hosts.base import SheetHost, StructuralChange

logger = logging.getLogger(__name__)


class TableDataGateway:
    def __init__(self, host: SheetHost, cache: TableCache | None = None):
        self.host = host
        self.cache = cache if cache is not None else TableCache(GridLoader(host))
        self._attached = False

    # -------------------------------------------------------------------------
    # Session lifetime
    # -------------------------------------------------------------------------

    def __enter__(self) -> TableDataGateway:
        self.host.subscribe(self.on_change)
        self._attached = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._attached:
            self.host.unsubscribe(self.on_change)
            self._attached = False
        self.cache.clear()

    def on_change(self, change: StructuralChange) -> None:
        """Drop the snapshot of a table whose shape changed."""
        self.invalidate(change.source, change.table_name)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get(self, source: str, table_name: str, force_refresh: bool = False) -> TableEntry:
        """
        Get the tagged snapshot of a table.

        Args:
            source: Key of the document holding the table (e.g. "CS")
            table_name: Exact, case-sensitive table name
            force_refresh: Re-read the table even if a snapshot is cached

        Returns:
            TableEntry with grid, row_tags and col_tags

        Raises:
            NotFoundException: No such table in the source
        """
        return self.cache.get(source, table_name, force_refresh=force_refresh)

    def invalidate(self, source: str, table_name: str) -> None:
        self.cache.invalidate(source, table_name)

    def verify(self, source: str, table_name: str) -> list[TagConflict]:
        """Re-read a table and report every duplicate row/column tag."""
        entry = self.get(source, table_name, force_refresh=True)
        conflicts = self.cache.builder.verify(entry.grid)
        if conflicts:
            logger.warning(f"Tag verification of {source}/{table_name} found {len(conflicts)} duplicate(s)")
        else:
            logger.info(f"Tag verification of {source}/{table_name}: all tags unique")
        return conflicts


def open_session(host: SheetHost, settings: TableSettings | None = None) -> TableDataGateway:
    """Build a gateway with a fresh cache for one execution (not yet attached)."""
    settings = settings or TableSettings()
    builder = TagMapBuilder(settings.tag_row_index, settings.tag_column_index)
    cache = TableCache(
        GridLoader(host),
        builder=builder,
        strict=settings.strict_tags,
        header_tag=settings.header_tag,
    )
    return TableDataGateway(host, cache)
