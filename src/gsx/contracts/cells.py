"""Cell-level models: type tags, cached entries, bounding boxes."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class CellType(str, Enum):
    """Classification of a cell's contents."""

    string = "string"
    float = "float"
    date = "date"
    time = "time"
    datetime = "datetime"
    formula = "formula"


class CellEntry(BaseModel):
    """A cached cell: typed value, type tag, and formula text for formula cells.

    ``value`` holds the raw string for date/datetime cells; conversion happens
    on read so that pattern changes on the handle take effect.
    """

    value: Any = None
    type: CellType | None = None
    formula: str | None = None


class SheetBounds(BaseModel):
    """Minimal rectangle enclosing every non-empty cell of a sheet (1-based, inclusive)."""

    first_row: int
    last_row: int
    first_column: int
    last_column: int

    @property
    def row_count(self) -> int:
        return self.last_row - self.first_row + 1

    @property
    def column_count(self) -> int:
        return self.last_column - self.first_column + 1
