"""Per-sheet cell cache, filled by one full scan of the remote sheet."""

from __future__ import annotations

from typing import Any

from gsx.adapters.store import RemoteStore
from gsx.contracts.cells import CellEntry, CellType
from gsx.contracts.options import Formats
from gsx.engine.inference import infer

Coord = tuple[int, int]


class SheetCache:
    """Cached entries and formula text for one sheet."""

    def __init__(self) -> None:
        self.loaded = False
        self.entries: dict[Coord, CellEntry] = {}
        self.formulas: dict[Coord, str] = {}

    def store(
        self,
        row: int,
        col: int,
        value: Any,
        cell_type: CellType,
        formula: str | None = None,
    ) -> CellEntry:
        """Record an inferred cell. Empty values are dropped; the tag is kept."""
        key = (row, col)
        if value == "":
            value = None
        if cell_type == CellType.formula and formula is not None:
            self.formulas[key] = formula
        else:
            formula = None
            self.formulas.pop(key, None)
        entry = CellEntry(value=value, type=cell_type, formula=formula)
        self.entries[key] = entry
        return entry

    def entry(self, row: int, col: int) -> CellEntry | None:
        return self.entries.get((row, col))

    def formula(self, row: int, col: int) -> str | None:
        return self.formulas.get((row, col))

    def celltype(self, row: int, col: int) -> CellType | None:
        if self.formulas and (row, col) in self.formulas:
            return CellType.formula
        entry = self.entries.get((row, col))
        return entry.type if entry else None


class CellCache:
    """Sheet name -> ``SheetCache``; sheets are created on first touch."""

    def __init__(self) -> None:
        self._sheets: dict[str, SheetCache] = {}

    def sheet(self, name: str) -> SheetCache:
        cache = self._sheets.get(name)
        if cache is None:
            cache = self._sheets[name] = SheetCache()
        return cache

    def is_loaded(self, name: str) -> bool:
        cache = self._sheets.get(name)
        return cache is not None and cache.loaded

    def materialize(
        self,
        name: str,
        index: int,
        store: RemoteStore,
        formats: Formats,
    ) -> int:
        """Read every cell of a sheet into the cache. Returns cells read, 0 if already loaded."""
        cache = self.sheet(name)
        if cache.loaded:
            return 0
        rows, cols = store.sheet_extent(index)
        for row in range(1, rows + 1):
            for col in range(1, cols + 1):
                display = store.read_display_string(index, row, col)
                numeric = store.read_numeric_value(index, row, col)
                value, cell_type = infer(display, numeric, formats)
                cache.store(row, col, value, cell_type, formula=display)
        cache.loaded = True
        return rows * cols

    def clear(self) -> None:
        self._sheets.clear()
