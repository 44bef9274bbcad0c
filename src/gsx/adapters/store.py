"""Remote store interfaces consumed by the cell access layer.

Sheet indexes are 1-based positions in ``list_sheets()``; rows and columns
are 1-based as well.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from gsx.contracts.options import Formats
from gsx.observe.events import TraceRecorder


@runtime_checkable
class RemoteStore(Protocol):
    """A sheet-structured data source."""

    def list_sheets(self) -> list[str]:
        """Sheet names in workbook order."""
        ...

    def sheet_extent(self, index: int) -> tuple[int, int]:
        """``(row_count, col_count)`` of the populated area of a sheet."""
        ...

    def read_display_string(self, index: int, row: int, col: int) -> str | None:
        """The cell's input: formula text for formula cells, else its text."""
        ...

    def read_numeric_value(self, index: int, row: int, col: int) -> Any:
        """The cell's computed value (a number, its display string, or ``None``)."""
        ...

    def write_cell(self, index: int, row: int, col: int, value: Any) -> None:
        ...

    def persist(self, index: int) -> None:
        """Commit pending writes for a sheet."""
        ...


@runtime_checkable
class Session(Protocol):
    """An authenticated connection able to open workbooks by key."""

    def open(self, key: str, formats: Formats | None = None) -> RemoteStore:
        """Open a workbook. Stores that render dates and times as text use ``formats``."""
        ...


class TracingStore:
    """Wraps a store and records every call in a ``TraceRecorder``."""

    def __init__(self, inner: RemoteStore, trace: TraceRecorder) -> None:
        self.inner = inner
        self.trace = trace

    def _record(self, op: str, **data: Any) -> None:
        self.trace.record("remote", {"op": op, **data})

    def list_sheets(self) -> list[str]:
        self._record("list_sheets")
        return self.inner.list_sheets()

    def sheet_extent(self, index: int) -> tuple[int, int]:
        self._record("sheet_extent", sheet=index)
        return self.inner.sheet_extent(index)

    def read_display_string(self, index: int, row: int, col: int) -> str | None:
        self._record("read_display_string", sheet=index, row=row, col=col)
        return self.inner.read_display_string(index, row, col)

    def read_numeric_value(self, index: int, row: int, col: int) -> Any:
        self._record("read_numeric_value", sheet=index, row=row, col=col)
        return self.inner.read_numeric_value(index, row, col)

    def write_cell(self, index: int, row: int, col: int, value: Any) -> None:
        self._record("write_cell", sheet=index, row=row, col=col)
        self.inner.write_cell(index, row, col, value)

    def persist(self, index: int) -> None:
        self._record("persist", sheet=index)
        self.inner.persist(index)
