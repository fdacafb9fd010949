"""
TagTables Hosts - In-memory host.

Keeps every table as a list of row lists, keyed by (source, table name).
"""

from threading import RLock
from typing import Any

from tagtables.exceptions import NotFoundException
from tagtables.hosts.base import GridSheetHost


class InMemoryHost(GridSheetHost):
    def __init__(self, tables: dict[str, dict[str, list[list[Any]]]] | None = None):
        super().__init__()
        self._lock = RLock()
        self._tables: dict[str, dict[str, list[list[Any]]]] = {}
        for source, source_tables in (tables or {}).items():
            for table_name, rows in source_tables.items():
                self._store_rows(source, table_name, [list(values) for values in rows])

    def sheet(self, source: str, table_name: str) -> list[list[Any]]:
        """
        Live rows of a table.

        Edits made through this list bypass change notifications, the way an
        edit by another user in the spreadsheet UI does.
        """
        with self._lock:
            if not self._table_exists(source, table_name):
                raise NotFoundException("table", f"{source}/{table_name}")
            return self._tables[source][table_name]

    def _table_exists(self, source: str, table_name: str) -> bool:
        with self._lock:
            return table_name in self._tables.get(source, {})

    def _list_tables(self, source: str) -> list[str]:
        with self._lock:
            return sorted(self._tables.get(source, {}))

    def _load_rows(self, source: str, table_name: str) -> list[list[Any]]:
        with self._lock:
            return self._tables[source][table_name]

    def _store_rows(self, source: str, table_name: str, rows: list[list[Any]]) -> None:
        with self._lock:
            self._tables.setdefault(source, {})[table_name] = rows
