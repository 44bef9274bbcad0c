"""Row/column normalization to canonical 1-based (row, col) pairs."""

from __future__ import annotations

import re

from openpyxl.utils import column_index_from_string, get_column_letter

from gsx.contracts.common import InvalidCoordinate

_LETTERS_RE = re.compile(r"[A-Za-z]{1,3}")
_A1_RE = re.compile(r"\$?([A-Za-z]{1,3})\$?([0-9]+)")


def column_index(letters: str) -> int:
    """Convert a case-insensitive column name into its index ('A' -> 1, 'aa' -> 27)."""
    text = letters.strip()
    if not _LETTERS_RE.fullmatch(text):
        raise InvalidCoordinate(f"Invalid column: {letters!r}", col=letters)
    try:
        return column_index_from_string(text.upper())
    except ValueError as e:
        raise InvalidCoordinate(f"Invalid column: {letters!r}", col=letters) from e


def column_letter(index: int) -> str:
    """Convert a 1-based column index into its letters (27 -> 'AA')."""
    try:
        return get_column_letter(index)
    except ValueError as e:
        raise InvalidCoordinate(f"Invalid column index: {index!r}", col=index) from e


def _positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def normalize(row: int | str, col: int | str) -> tuple[int, int]:
    """Return the canonical ``(row, col)`` for a cell address.

    ``col`` may be an index or a letter sequence. ``(1, 'A')``, ``('A', 1)``
    and ``('a', 1)`` all name the top-left cell.
    """
    if isinstance(row, str) and not isinstance(col, str):
        row, col = col, row
    if not _positive_int(row):
        raise InvalidCoordinate(f"Invalid row: {row!r}", row=row, col=col)
    if isinstance(col, str):
        return row, column_index(col)
    if not _positive_int(col):
        raise InvalidCoordinate(f"Invalid column: {col!r}", row=row, col=col)
    # openpyxl cannot address columns past XFD
    if col > 18278:
        raise InvalidCoordinate(f"Column out of range: {col}", row=row, col=col)
    return row, col


def parse_ref(ref: str) -> tuple[int, int]:
    """Parse an A1-style cell reference ('B2', '$c$10') into (row, col)."""
    m = _A1_RE.fullmatch(ref.strip())
    if not m:
        raise InvalidCoordinate(f"Invalid cell ref: {ref!r}", ref=ref)
    return normalize(int(m.group(2)), m.group(1))


def format_ref(row: int, col: int) -> str:
    return f"{column_letter(col)}{row}"
