"""
TagTables Hosts - CSV directory host.

Layout: <data_dir>/<source>/<table name>.csv, no header line; the tag row is
simply the first line of the file. Cells are read as strings, TRUE/FALSE are
checkbox cells and come back as booleans.
"""

import csv
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from tagtables.hosts.base import GridSheetHost

logger = logging.getLogger(__name__)

CHECKED = "TRUE"
UNCHECKED = "FALSE"


def _from_csv(value: str) -> Any:
    if value == CHECKED:
        return True
    if value == UNCHECKED:
        return False
    return value


def _to_csv(value: Any) -> str:
    if isinstance(value, bool):
        return CHECKED if value else UNCHECKED
    if value is None:
        return ""
    return str(value)


class CsvHost(GridSheetHost):
    def __init__(self, data_dir: str | Path):
        super().__init__()
        self.data_dir = Path(data_dir)

    def _path(self, source: str, table_name: str) -> Path:
        return self.data_dir / source / f"{table_name}.csv"

    def _table_exists(self, source: str, table_name: str) -> bool:
        return self._path(source, table_name).is_file()

    def _list_tables(self, source: str) -> list[str]:
        source_dir = self.data_dir / source
        if not source_dir.is_dir():
            return []
        return sorted(path.stem for path in source_dir.glob("*.csv"))

    def _load_rows(self, source: str, table_name: str) -> list[list[Any]]:
        path = self._path(source, table_name)
        if path.stat().st_size == 0:
            return []
        # Hand-edited files are ragged; pandas needs the widest line up front
        with path.open(newline="", encoding="utf-8") as f:
            width = max((len(fields) for fields in csv.reader(f)), default=0)
        if width == 0:
            return []
        df = pd.read_csv(
            path,
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8",
        ).fillna("")
        return [[_from_csv(value) for value in row] for row in df.values.tolist()]

    def _store_rows(self, source: str, table_name: str, rows: list[list[Any]]) -> None:
        path = self._path(source, table_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        width = max((len(values) for values in rows), default=0)
        if width == 0:
            path.write_text("", encoding="utf-8")
            return
        dense = [[_to_csv(value) for value in values] + [""] * (width - len(values)) for values in rows]
        pd.DataFrame(dense).to_csv(path, header=False, index=False, encoding="utf-8")
        logger.debug(f"Wrote {len(dense)} rows to {path}")
