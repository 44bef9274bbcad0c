"""Shared test fixtures."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, time
from pathlib import Path
from typing import Any

import pytest
from openpyxl import Workbook as OpenpyxlWorkbook

from gsx.contracts.options import WorkbookOptions
from gsx.engine.workbook import Workbook


class FakeStore:
    """In-memory remote store that counts every call.

    ``sheets`` maps a sheet name to ``{(row, col): (display, numeric)}``.
    Blank cells read back as ``("", None)``, like a spreadsheet API.
    """

    def __init__(
        self,
        sheets: dict[str, dict[tuple[int, int], tuple[str | None, Any]]],
        extents: dict[str, tuple[int, int]] | None = None,
    ) -> None:
        self.names = list(sheets)
        self.cells = {name: dict(cells) for name, cells in sheets.items()}
        self.extents = dict(extents or {})
        self.calls: Counter[str] = Counter()
        self.persisted: list[int] = []

    def _name(self, index: int) -> str:
        return self.names[index - 1]

    def reads(self) -> int:
        return (
            self.calls["sheet_extent"]
            + self.calls["read_display_string"]
            + self.calls["read_numeric_value"]
        )

    def list_sheets(self) -> list[str]:
        self.calls["list_sheets"] += 1
        return list(self.names)

    def sheet_extent(self, index: int) -> tuple[int, int]:
        self.calls["sheet_extent"] += 1
        name = self._name(index)
        if name in self.extents:
            return self.extents[name]
        keys = self.cells[name].keys()
        if not keys:
            return 0, 0
        return max(r for r, _ in keys), max(c for _, c in keys)

    def read_display_string(self, index: int, row: int, col: int) -> str | None:
        self.calls["read_display_string"] += 1
        return self.cells[self._name(index)].get((row, col), ("", None))[0]

    def read_numeric_value(self, index: int, row: int, col: int) -> Any:
        self.calls["read_numeric_value"] += 1
        return self.cells[self._name(index)].get((row, col), ("", None))[1]

    def write_cell(self, index: int, row: int, col: int, value: Any) -> None:
        self.calls["write_cell"] += 1
        text = "" if value is None else str(value)
        numeric = None if text.startswith("=") or text == "" else text
        self.cells[self._name(index)][(row, col)] = (text, numeric)

    def persist(self, index: int) -> None:
        self.calls["persist"] += 1
        self.persisted.append(index)


class FakeSession:
    def __init__(self, store: FakeStore) -> None:
        self.store = store
        self.opened: list[str] = []

    def open(self, key: str, formats: Any = None) -> FakeStore:
        self.opened.append(key)
        return self.store


SHEET1 = {
    (1, 1): ("31/12/2020", None),
    (1, 2): ("=A1+1", "32"),
    (2, 1): ("42", "42"),
    (2, 2): ("10:30:15", "10:30:15"),
    (2, 3): ("hello", "hello"),
    (3, 1): ("31/12/2020 23:59:58", "31/12/2020 23:59:58"),
    (3, 2): ("=CONCAT(C2, \"!\")", "hello!"),
    (4, 3): ("0", "0"),
}

SHEET2 = {
    (2, 2): ("x", "x"),
    (5, 4): ("y", "y"),
}


@pytest.fixture()
def fake_store() -> FakeStore:
    return FakeStore(
        {"Sheet1": SHEET1, "Sheet2": SHEET2, "Blank": {}},
        extents={"Blank": (3, 3)},
    )


@pytest.fixture()
def fake_session(fake_store: FakeStore) -> FakeSession:
    return FakeSession(fake_store)


@pytest.fixture()
def workbook(fake_session: FakeSession) -> Workbook:
    return Workbook("sheet-key", session=fake_session, options=WorkbookOptions())


@pytest.fixture()
def xlsx_workbook(tmp_path: Path) -> Path:
    """A local workbook mixing text, numbers, dates, times and a formula."""
    wb = OpenpyxlWorkbook()
    ws = wb.active
    ws.title = "Data"
    ws["A1"] = "Name"
    ws["B1"] = "Amount"
    ws["C1"] = "When"
    ws["A2"] = "Alpha"
    ws["B2"] = 100
    ws["C2"] = datetime(2020, 12, 31)
    ws["A3"] = "Beta"
    ws["B3"] = 2.5
    ws["C3"] = datetime(2021, 1, 2, 8, 15, 0)
    ws["D3"] = time(9, 30, 0)
    ws["B4"] = "=SUM(B2:B3)"

    ws2 = wb.create_sheet("Notes")
    ws2["B2"] = "memo"

    path = tmp_path / "local.xlsx"
    wb.save(str(path))
    wb.close()
    return path
