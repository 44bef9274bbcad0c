"""An .xlsx file served through the remote store protocol, via openpyxl.

The workbook is loaded twice: once for cell input (formula text) and once
with ``data_only=True`` for the values cached by the application that last
calculated the file. openpyxl does not evaluate formulas, so a formula cell
whose file was never calculated, or that was written through this store,
has no numeric companion.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.workbook import Workbook as OpenpyxlWorkbook
from openpyxl.worksheet.formula import ArrayFormula
from openpyxl.worksheet.worksheet import Worksheet

from gsx.contracts.common import WorkbookCorruptError
from gsx.contracts.options import Formats
from gsx.engine.inference import to_cell_string
from gsx.io.fileops import atomic_write


def _render(value: Any, formats: Formats) -> str:
    """Text a spreadsheet UI would show as the cell's input."""
    if isinstance(value, ArrayFormula):
        return value.text or ""
    return to_cell_string(value, formats)


class XlsxStore:
    """Reads and writes one .xlsx file; ``persist`` saves it atomically."""

    def __init__(self, path: str | Path, *, formats: Formats | None = None) -> None:
        self.path = Path(path).resolve()
        if not self.path.exists():
            raise FileNotFoundError(f"Workbook not found: {self.path}")
        self.formats = formats if formats is not None else Formats()
        try:
            self.wb: OpenpyxlWorkbook = openpyxl.load_workbook(str(self.path))
            self.values: OpenpyxlWorkbook = openpyxl.load_workbook(str(self.path), data_only=True)
        except Exception as e:
            raise WorkbookCorruptError(f"Cannot open workbook {self.path}: {e}", path=str(self.path)) from e
        self._dirty = False

    def _sheet(self, wb: OpenpyxlWorkbook, index: int) -> Worksheet:
        if index < 1 or index > len(wb.worksheets):
            raise IndexError(f"Sheet index out of range: {index}")
        return wb.worksheets[index - 1]

    def list_sheets(self) -> list[str]:
        return list(self.wb.sheetnames)

    def sheet_extent(self, index: int) -> tuple[int, int]:
        ws = self._sheet(self.wb, index)
        return ws.max_row, ws.max_column

    def _inside(self, ws: Worksheet, row: int, col: int) -> bool:
        return row <= ws.max_row and col <= ws.max_column

    def read_display_string(self, index: int, row: int, col: int) -> str | None:
        ws = self._sheet(self.wb, index)
        if not self._inside(ws, row, col):
            return ""
        return _render(ws.cell(row=row, column=col).value, self.formats)

    def read_numeric_value(self, index: int, row: int, col: int) -> Any:
        ws = self._sheet(self.values, index)
        if not self._inside(ws, row, col):
            return None
        return ws.cell(row=row, column=col).value

    def write_cell(self, index: int, row: int, col: int, value: Any) -> None:
        # ws.cell(value=None) leaves the old value in place, so assign directly
        self._sheet(self.wb, index).cell(row=row, column=col).value = value
        is_formula = isinstance(value, str) and value.startswith("=")
        self._sheet(self.values, index).cell(row=row, column=col).value = None if is_formula else value
        self._dirty = True

    def persist(self, index: int) -> None:
        """Save pending writes. The whole file is written, whichever sheet changed."""
        self._sheet(self.wb, index)
        if not self._dirty:
            return
        buf = BytesIO()
        self.wb.save(buf)
        atomic_write(self.path, buf.getvalue())
        self._dirty = False

    def close(self) -> None:
        self.wb.close()
        self.values.close()


class XlsxSession:
    """Opens local .xlsx paths as workbook keys."""

    def __init__(self, *, formats: Formats | None = None) -> None:
        self.formats = formats

    def open(self, key: str, formats: Formats | None = None) -> XlsxStore:
        """Open ``key`` as a path; ``formats`` overrides the session's patterns."""
        return XlsxStore(key, formats=formats if formats is not None else self.formats)
