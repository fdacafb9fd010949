"""
TagTables Core - A1 notation helpers.

Rows and columns are 1-based here, as spreadsheet users see them.
"""

from dataclasses import dataclass, field

from tagtables.exceptions import ValidationException


@dataclass
class A1Selection:
    """Rows and columns addressed by a compact A1 list such as "A,1,3-4,D-F"."""
    rows: list[int] = field(default_factory=list)
    cols: list[int] = field(default_factory=list)


def column_to_number(letters: str) -> int:
    """Convert column letters (A, B, AA, AB) to a 1-based column number."""
    letters = letters.strip().upper()
    if not letters or not letters.isalpha():
        raise ValidationException(f"Invalid column letters: {letters!r}")
    number = 0
    for char in letters:
        number = number * 26 + (ord(char) - ord("A") + 1)
    return number


def column_letter(number: int) -> str:
    """Convert a 1-based column number to its letters."""
    if number < 1:
        raise ValidationException(f"Column numbers start at 1, got {number}")
    letters = ""
    while number:
        number, remainder = divmod(number - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def cell_a1(row: int, col: int) -> str:
    """A1 reference of a 1-based (row, col) cell."""
    return f"{column_letter(col)}{row}"


def parse_a1_notation(notation: str | None) -> A1Selection:
    """
    Parse a list of rows, columns and ranges.

    "A,1,3-4,D-F,BI-BK" -> rows [1, 3, 4], cols [1, 4, 5, 6, 61, 62, 63].
    Results are de-duplicated and sorted.
    """
    selection = A1Selection()
    if not notation:
        return selection

    rows: set[int] = set()
    cols: set[int] = set()
    for part in notation.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, _, end = part.partition("-")
            start, end = start.strip(), end.strip()
            if start.isdigit() and end.isdigit():
                rows.update(range(int(start), int(end) + 1))
            else:
                cols.update(range(column_to_number(start), column_to_number(end) + 1))
        elif part.isdigit():
            rows.add(int(part))
        else:
            cols.add(column_to_number(part))

    selection.rows = sorted(rows)
    selection.cols = sorted(cols)
    return selection
