"""
TagTables Hosts - Storage host contract.

A host owns the cell storage of one or more sources (spreadsheet documents),
each holding named tables. Every position is 1-based, as in the spreadsheet UI.

Structural mutations (row/column insert and delete, table replacement) notify
subscribers with a StructuralChange so that caches keyed on the table can drop
their snapshot.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Literal

from tagtables.exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)

ChangeKind = Literal["insert_rows", "delete_rows", "insert_columns", "delete_columns", "replace"]
ChangeListener = Callable[["StructuralChange"], None]


@dataclass(frozen=True)
class StructuralChange:
    """A mutation that changed the shape of a table."""
    source: str
    table_name: str
    kind: ChangeKind


def is_blank(value: Any) -> bool:
    """True for cells the host treats as empty (an unchecked box is not empty)."""
    return value is None or value == ""


class SheetHost(ABC):
    """Abstract storage host."""

    def __init__(self):
        self._listeners: list[ChangeListener] = []
        self._notes: dict[tuple[str, str, int, int], str] = {}
        self._hidden_rows: dict[tuple[str, str], set[int]] = {}
        self._hidden_cols: dict[tuple[str, str], set[int]] = {}

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: StructuralChange) -> StructuralChange:
        logger.debug(f"Structural change {change.kind} on {change.source}/{change.table_name}")
        for listener in list(self._listeners):
            listener(change)
        return change

    # -------------------------------------------------------------------------
    # Notes and visibility
    # -------------------------------------------------------------------------
    # Presentation state only: never part of get_values and never a structural
    # change. Hidden rows and columns do not follow later inserts or deletes.

    def get_note(self, source: str, table_name: str, row: int = 1, col: int = 1) -> str:
        return self._notes.get((source, table_name, row, col), "")

    def set_note(self, source: str, table_name: str, note: str, row: int = 1, col: int = 1) -> None:
        if not self.has_table(source, table_name):
            raise NotFoundException("table", f"{source}/{table_name}")
        if note:
            self._notes[(source, table_name, row, col)] = note
        else:
            self._notes.pop((source, table_name, row, col), None)

    def hide_rows(self, source: str, table_name: str, rows: Iterable[int]) -> None:
        self._hidden_rows.setdefault((source, table_name), set()).update(rows)

    def show_rows(self, source: str, table_name: str, rows: Iterable[int]) -> None:
        self._hidden_rows.get((source, table_name), set()).difference_update(rows)

    def hide_columns(self, source: str, table_name: str, cols: Iterable[int]) -> None:
        self._hidden_cols.setdefault((source, table_name), set()).update(cols)

    def show_columns(self, source: str, table_name: str, cols: Iterable[int]) -> None:
        self._hidden_cols.get((source, table_name), set()).difference_update(cols)

    def is_row_hidden(self, source: str, table_name: str, row: int) -> bool:
        return row in self._hidden_rows.get((source, table_name), set())

    def is_column_hidden(self, source: str, table_name: str, col: int) -> bool:
        return col in self._hidden_cols.get((source, table_name), set())

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @abstractmethod
    def has_table(self, source: str, table_name: str) -> bool: ...

    @abstractmethod
    def table_names(self, source: str) -> list[str]: ...

    @abstractmethod
    def get_values(self, source: str, table_name: str) -> list[list[Any]]:
        """Literal values of the used range (A1 to last used row/column)."""

    @abstractmethod
    def last_row(self, source: str, table_name: str) -> int: ...

    @abstractmethod
    def last_column(self, source: str, table_name: str) -> int: ...

    @abstractmethod
    def max_rows(self, source: str, table_name: str) -> int:
        """Allocated rows, used or not."""

    @abstractmethod
    def max_columns(self, source: str, table_name: str) -> int:
        """Allocated columns, used or not."""

    @abstractmethod
    def read_cell(self, source: str, table_name: str, row: int, col: int) -> Any: ...

    # -------------------------------------------------------------------------
    # Content writes
    # -------------------------------------------------------------------------

    @abstractmethod
    def write_range(self, source: str, table_name: str, row: int, col: int, values: list[list[Any]]) -> None: ...

    def write_cell(self, source: str, table_name: str, row: int, col: int, value: Any) -> None:
        self.write_range(source, table_name, row, col, [[value]])

    @abstractmethod
    def clear_range(self, source: str, table_name: str, row: int, col: int, num_rows: int, num_cols: int) -> None:
        """Clear contents; checkbox cells are left unchecked."""

    @abstractmethod
    def check_range(self, source: str, table_name: str, row: int, col: int, num_rows: int, num_cols: int) -> None: ...

    @abstractmethod
    def uncheck_range(self, source: str, table_name: str, row: int, col: int, num_rows: int, num_cols: int) -> None: ...

    # -------------------------------------------------------------------------
    # Structural writes
    # -------------------------------------------------------------------------

    @abstractmethod
    def put_table(self, source: str, table_name: str, rows: list[list[Any]]) -> StructuralChange:
        """Create or wholesale replace a table."""

    @abstractmethod
    def insert_rows_after(self, source: str, table_name: str, row: int, count: int = 1) -> StructuralChange: ...

    @abstractmethod
    def delete_rows(self, source: str, table_name: str, row: int, count: int = 1) -> StructuralChange: ...

    @abstractmethod
    def insert_columns_after(self, source: str, table_name: str, col: int, count: int = 1) -> StructuralChange: ...

    @abstractmethod
    def delete_columns(self, source: str, table_name: str, col: int, count: int = 1) -> StructuralChange: ...


class GridSheetHost(SheetHost):
    """
    Host operations implemented over a list-of-lists per table.

    Subclasses supply storage through _load_rows/_store_rows; rows may be ragged,
    missing cells read as "".
    """

    @abstractmethod
    def _table_exists(self, source: str, table_name: str) -> bool: ...

    @abstractmethod
    def _list_tables(self, source: str) -> list[str]: ...

    @abstractmethod
    def _load_rows(self, source: str, table_name: str) -> list[list[Any]]: ...

    @abstractmethod
    def _store_rows(self, source: str, table_name: str, rows: list[list[Any]]) -> None: ...

    def _rows(self, source: str, table_name: str) -> list[list[Any]]:
        if not self._table_exists(source, table_name):
            raise NotFoundException("table", f"{source}/{table_name}")
        return self._load_rows(source, table_name)

    @staticmethod
    def _check_position(row: int, col: int = 1) -> None:
        if row < 1 or col < 1:
            raise ValidationException(f"Cell positions are 1-based, got row={row}, col={col}")

    @staticmethod
    def _extent(rows: list[list[Any]]) -> tuple[int, int]:
        last_row = 0
        last_col = 0
        for r, values in enumerate(rows, start=1):
            used = [c for c, value in enumerate(values, start=1) if not is_blank(value)]
            if used:
                last_row = r
                last_col = max(last_col, used[-1])
        return last_row, last_col

    # Reads

    def has_table(self, source: str, table_name: str) -> bool:
        return self._table_exists(source, table_name)

    def table_names(self, source: str) -> list[str]:
        return self._list_tables(source)

    def get_values(self, source: str, table_name: str) -> list[list[Any]]:
        rows = self._rows(source, table_name)
        last_row, last_col = self._extent(rows)
        values = []
        for values_row in rows[:last_row]:
            padded = list(values_row[:last_col])
            padded.extend([""] * (last_col - len(padded)))
            values.append([("" if value is None else value) for value in padded])
        return values

    def last_row(self, source: str, table_name: str) -> int:
        return self._extent(self._rows(source, table_name))[0]

    def last_column(self, source: str, table_name: str) -> int:
        return self._extent(self._rows(source, table_name))[1]

    def max_rows(self, source: str, table_name: str) -> int:
        return len(self._rows(source, table_name))

    def max_columns(self, source: str, table_name: str) -> int:
        return max((len(values) for values in self._rows(source, table_name)), default=0)

    def read_cell(self, source: str, table_name: str, row: int, col: int) -> Any:
        self._check_position(row, col)
        rows = self._rows(source, table_name)
        if row > len(rows) or col > len(rows[row - 1]):
            return ""
        value = rows[row - 1][col - 1]
        return "" if value is None else value

    # Content writes

    def write_range(self, source: str, table_name: str, row: int, col: int, values: list[list[Any]]) -> None:
        self._check_position(row, col)
        rows = self._rows(source, table_name)
        for offset, new_values in enumerate(values):
            r = row - 1 + offset
            while len(rows) <= r:
                rows.append([])
            target = rows[r]
            end = col - 1 + len(new_values)
            if len(target) < end:
                target.extend([""] * (end - len(target)))
            target[col - 1:end] = list(new_values)
        self._store_rows(source, table_name, rows)

    def _apply(self, source, table_name, row, col, num_rows, num_cols, update) -> None:
        self._check_position(row, col)
        rows = self._rows(source, table_name)
        for r in range(row - 1, min(row - 1 + num_rows, len(rows))):
            target = rows[r]
            for c in range(col - 1, min(col - 1 + num_cols, len(target))):
                target[c] = update(target[c])
        self._store_rows(source, table_name, rows)

    def clear_range(self, source: str, table_name: str, row: int, col: int, num_rows: int, num_cols: int) -> None:
        self._apply(source, table_name, row, col, num_rows, num_cols,
                    lambda value: False if isinstance(value, bool) else "")

    def check_range(self, source: str, table_name: str, row: int, col: int, num_rows: int, num_cols: int) -> None:
        self._apply(source, table_name, row, col, num_rows, num_cols,
                    lambda value: True if isinstance(value, bool) else value)

    def uncheck_range(self, source: str, table_name: str, row: int, col: int, num_rows: int, num_cols: int) -> None:
        self._apply(source, table_name, row, col, num_rows, num_cols,
                    lambda value: False if isinstance(value, bool) else value)

    # Structural writes

    def put_table(self, source: str, table_name: str, rows: list[list[Any]]) -> StructuralChange:
        self._store_rows(source, table_name, [list(values) for values in rows])
        return self._notify(StructuralChange(source, table_name, "replace"))

    def insert_rows_after(self, source: str, table_name: str, row: int, count: int = 1) -> StructuralChange:
        if row < 0 or count < 1:
            raise ValidationException(f"Cannot insert {count} row(s) after row {row}")
        rows = self._rows(source, table_name)
        while len(rows) < row:
            rows.append([])
        rows[row:row] = [[] for _ in range(count)]
        self._store_rows(source, table_name, rows)
        return self._notify(StructuralChange(source, table_name, "insert_rows"))

    def delete_rows(self, source: str, table_name: str, row: int, count: int = 1) -> StructuralChange:
        self._check_position(row)
        rows = self._rows(source, table_name)
        if row - 1 + count > len(rows):
            raise ValidationException(f"Rows {row}-{row + count - 1} are outside <{table_name}> ({len(rows)} rows)")
        del rows[row - 1:row - 1 + count]
        self._store_rows(source, table_name, rows)
        return self._notify(StructuralChange(source, table_name, "delete_rows"))

    def insert_columns_after(self, source: str, table_name: str, col: int, count: int = 1) -> StructuralChange:
        if col < 0 or count < 1:
            raise ValidationException(f"Cannot insert {count} column(s) after column {col}")
        rows = self._rows(source, table_name)
        for values in rows:
            if len(values) > col:
                values[col:col] = [""] * count
        self._store_rows(source, table_name, rows)
        return self._notify(StructuralChange(source, table_name, "insert_columns"))

    def delete_columns(self, source: str, table_name: str, col: int, count: int = 1) -> StructuralChange:
        self._check_position(1, col)
        rows = self._rows(source, table_name)
        for values in rows:
            del values[col - 1:col - 1 + count]
        self._store_rows(source, table_name, rows)
        return self._notify(StructuralChange(source, table_name, "delete_columns"))
