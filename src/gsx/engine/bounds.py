"""Bounding box of the non-empty cells of a sheet."""

from __future__ import annotations

from gsx.adapters.store import RemoteStore
from gsx.contracts.cells import SheetBounds


def scan_bounds(store: RemoteStore, index: int) -> SheetBounds | None:
    """Scan a sheet's extent and return the box around its non-empty values.

    A cell without a value still counts when its input is a formula, since
    stores that do not evaluate formulas report no value for it. Returns
    ``None`` when the sheet holds no non-empty cell.
    """
    rows: list[int] = []
    cols: list[int] = []
    n_rows, n_cols = store.sheet_extent(index)
    for row in range(1, n_rows + 1):
        for col in range(1, n_cols + 1):
            val = store.read_numeric_value(index, row, col)
            if val is None:
                display = store.read_display_string(index, row, col)
                if isinstance(display, str) and display.startswith("="):
                    val = display
            if val is not None and val != "":
                rows.append(row)
                cols.append(col)
    if not rows:
        return None
    return SheetBounds(
        first_row=min(rows),
        last_row=max(rows),
        first_column=min(cols),
        last_column=max(cols),
    )
