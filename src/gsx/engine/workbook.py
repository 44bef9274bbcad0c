"""Workbook: cell-oriented access to a remote sheet store through a local cache."""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import date
from typing import Any

from gsx.adapters.store import RemoteStore, Session, TracingStore
from gsx.contracts.cells import CellType, SheetBounds
from gsx.contracts.common import (
    EmptySheet,
    FormatMismatch,
    SessionUnavailable,
    UnknownSheet,
    WarningDetail,
)
from gsx.contracts.options import TOKEN_ENV, WorkbookOptions
from gsx.engine import inference
from gsx.engine.bounds import scan_bounds
from gsx.engine.cache import CellCache, SheetCache
from gsx.engine.coords import normalize, parse_ref
from gsx.observe.events import EventEmitter, Timer, TraceRecorder

Login = Callable[[str], Session]


class Workbook:
    """A handle on one remote workbook.

    Cells are addressed 1-based: ``(1, 1)``, ``(1, 'A')``, ``('A', 1)`` and
    ``('a', 1)`` all name the top-left cell. The first read of a sheet pulls
    every cell of it into the cache; later reads never go back to the store.
    Writes go straight to the store and are replayed into the cache of
    sheets that are already loaded.

    A handle is meant for a single owner. Callers sharing one across threads
    must serialize sheet loads and writes themselves.
    """

    def __init__(
        self,
        spreadsheet_key: str,
        *,
        session: Session | None = None,
        access_token: str | None = None,
        login: Login | None = None,
        options: WorkbookOptions | None = None,
        emitter: EventEmitter | None = None,
        trace: TraceRecorder | None = None,
    ) -> None:
        self.spreadsheet_key = spreadsheet_key
        self.options = options.model_copy() if options is not None else WorkbookOptions.from_env()
        self.options.access_token = (
            access_token or self.options.access_token or os.environ.get(TOKEN_ENV) or None
        )
        self.emitter = emitter or EventEmitter(enabled=self.options.events)
        self.trace = trace
        self.warnings: list[WarningDetail] = []
        self._given_session = session
        self._session = session
        self._login = login
        self._store: RemoteStore | None = None
        self._sheets: list[str] | None = None
        self._default_sheet: str | None = None
        self._cache = CellCache()
        self._bounds: dict[str, SheetBounds | None] = {}
        self._check_credentials()

    def __repr__(self) -> str:
        return f"Workbook({self.spreadsheet_key!r})"

    # ------------------------------------------------------------------
    # session / store
    # ------------------------------------------------------------------
    def _warn(self, code: str, message: str) -> None:
        self.warnings.append(WarningDetail(code=code, message=message))
        self.emitter.emit("warning", {"code": code, "message": message})

    def _check_credentials(self) -> None:
        if self._session is not None:
            return
        if not self.options.access_token:
            self._warn("WARN_NO_ACCESS_TOKEN", "set access token")
        elif self._login is None:
            self._warn("WARN_NO_LOGIN", "access token given but no login function to use it")

    @property
    def session(self) -> Session | None:
        if self._session is None and self._login is not None and self.options.access_token:
            self._session = self._login(self.options.access_token)
        return self._session

    @property
    def store(self) -> RemoteStore:
        if self._store is None:
            session = self.session
            if session is None:
                raise SessionUnavailable(
                    f"No session for workbook {self.spreadsheet_key!r}: set an access token or pass a session",
                    key=self.spreadsheet_key,
                )
            store = session.open(self.spreadsheet_key, formats=self.options)
            if self.trace is not None:
                store = TracingStore(store, self.trace)
            self._store = store
        return self._store

    def reinitialize(self) -> None:
        """Drop the store and every cached sheet, keeping key, token and options."""
        self._session = self._given_session
        self._store = None
        self._sheets = None
        self._default_sheet = None
        self._cache.clear()
        self._bounds.clear()

    # ------------------------------------------------------------------
    # sheets
    # ------------------------------------------------------------------
    @property
    def sheets(self) -> list[str]:
        """Sheet names in workbook order, fetched once."""
        if self._sheets is None:
            self._sheets = list(self.store.list_sheets())
        return self._sheets

    @property
    def default_sheet(self) -> str:
        if self._default_sheet is None:
            if not self.sheets:
                raise UnknownSheet("(default)", [])
            self._default_sheet = self.sheets[0]
        return self._default_sheet

    @default_sheet.setter
    def default_sheet(self, name: str) -> None:
        self._default_sheet = self.validate_sheet(name)

    def validate_sheet(self, name: str) -> str:
        if name not in self.sheets:
            raise UnknownSheet(name, self.sheets)
        return name

    def sheet_index(self, name: str) -> int:
        """1-based position of a sheet."""
        return self.sheets.index(self.validate_sheet(name)) + 1

    def _resolve(self, sheet: str | None) -> str:
        return self.default_sheet if sheet is None else self.validate_sheet(sheet)

    # ------------------------------------------------------------------
    # patterns
    # ------------------------------------------------------------------
    @property
    def date_format(self) -> str:
        return self.options.date_format

    @date_format.setter
    def date_format(self, pattern: str) -> None:
        self.options.date_format = pattern

    @property
    def time_format(self) -> str:
        return self.options.time_format

    @time_format.setter
    def time_format(self, pattern: str) -> None:
        self.options.time_format = pattern

    @property
    def datetime_format(self) -> str:
        return self.options.datetime_format

    @datetime_format.setter
    def datetime_format(self, pattern: str) -> None:
        self.options.datetime_format = pattern

    def is_date(self, text: Any) -> bool:
        return inference.is_date(text, self.options)

    def is_time(self, text: Any) -> bool:
        return inference.is_time(text, self.options)

    def is_datetime(self, text: Any) -> bool:
        return inference.is_datetime(text, self.options)

    def is_numeric(self, text: Any) -> bool:
        return inference.is_numeric(text)

    # ------------------------------------------------------------------
    # cache
    # ------------------------------------------------------------------
    def is_loaded(self, sheet: str | None = None) -> bool:
        return self._cache.is_loaded(self._resolve(sheet))

    def ensure_loaded(self, sheet: str | None = None) -> None:
        """Read the whole sheet into the cache unless that already happened."""
        name = self._resolve(sheet)
        if self._cache.is_loaded(name):
            return
        with Timer() as t:
            cells = self._cache.materialize(name, self.sheet_index(name), self.store, self.options)
        self.emitter.emit("sheet.materialized", {
            "sheet": name,
            "cells": cells,
            "duration_ms": t.elapsed_ms,
        })

    def _loaded_sheet(
        self, row: int | str, col: int | str, sheet: str | None
    ) -> tuple[str, int, int, SheetCache]:
        name = self._resolve(sheet)
        row, col = normalize(row, col)
        self.ensure_loaded(name)
        return name, row, col, self._cache.sheet(name)

    def cell(self, row: int | str, col: int | str, sheet: str | None = None) -> Any:
        """Typed value of a cell, or ``None`` for a blank cell.

        Date and datetime cells are parsed with the handle's current pattern
        on every call and raise ``FormatMismatch`` if it no longer fits.
        """
        name, row, col, cache = self._loaded_sheet(row, col, sheet)
        entry = cache.entry(row, col)
        value = entry.value if entry else None
        cell_type = cache.celltype(row, col)
        if cell_type == CellType.date:
            parsed = inference.parse_pattern(value, self.date_format)
            if parsed is None:
                raise FormatMismatch("Date", name, row, col, value, self.date_format)
            return parsed.date()
        if cell_type == CellType.datetime:
            parsed = inference.parse_pattern(value, self.datetime_format)
            if parsed is None:
                raise FormatMismatch("DateTime", name, row, col, value, self.datetime_format)
            return parsed
        return value

    def cell_at(self, ref: str, sheet: str | None = None) -> Any:
        """``cell`` addressed by an A1 reference such as ``'B2'``."""
        row, col = parse_ref(ref)
        return self.cell(row, col, sheet)

    def celltype(self, row: int | str, col: int | str, sheet: str | None = None) -> CellType | None:
        _, row, col, cache = self._loaded_sheet(row, col, sheet)
        return cache.celltype(row, col)

    def formula(self, row: int | str, col: int | str, sheet: str | None = None) -> str | None:
        _, row, col, cache = self._loaded_sheet(row, col, sheet)
        return cache.formula(row, col)

    def is_formula(self, row: int | str, col: int | str, sheet: str | None = None) -> bool:
        return self.formula(row, col, sheet) is not None

    def is_empty(self, row: int | str, col: int | str, sheet: str | None = None) -> bool:
        value = self.cell(row, col, sheet)
        if value is None:
            return True
        # datetime is a date subclass; neither is ever empty
        if isinstance(value, (date, float)):
            return False
        if self.celltype(row, col, sheet) == CellType.time:
            return False
        return isinstance(value, str) and value == ""

    # ------------------------------------------------------------------
    # write path
    # ------------------------------------------------------------------
    def set(self, row: int | str, col: int | str, value: Any, sheet: str | None = None) -> None:
        """Write a value (or a formula such as ``'=SUM(A1:A3)'``) to a cell.

        The store is written and persisted immediately. If the sheet is
        already cached the entry is re-inferred from the written value; an
        unloaded sheet picks the value up when it is first read.
        """
        name = self._resolve(sheet)
        row, col = normalize(row, col)
        index = self.sheet_index(name)
        self.store.write_cell(index, row, col, value)
        self.store.persist(index)

        cached = self._cache.is_loaded(name)
        if cached:
            text = inference.to_cell_string(value, self.options)
            new_value, cell_type = inference.infer(text, None, self.options)
            self._cache.sheet(name).store(row, col, new_value, cell_type, formula=text)
        self.emitter.emit("cell.set", {"sheet": name, "row": row, "col": col, "cached": cached})

    # ------------------------------------------------------------------
    # bounding box
    # ------------------------------------------------------------------
    def bounds(self, sheet: str | None = None) -> SheetBounds | None:
        """Box around the sheet's non-empty cells; ``None`` for an empty sheet."""
        name = self._resolve(sheet)
        if name not in self._bounds:
            result = scan_bounds(self.store, self.sheet_index(name))
            self._bounds[name] = result
            self.emitter.emit("bounds.computed", {
                "sheet": name,
                "bounds": result.model_dump() if result else None,
            })
        return self._bounds[name]

    def _bound(self, field: str, sheet: str | None) -> int:
        result = self.bounds(sheet)
        if result is None:
            raise EmptySheet(self._resolve(sheet))
        return getattr(result, field)

    def first_row(self, sheet: str | None = None) -> int:
        return self._bound("first_row", sheet)

    def last_row(self, sheet: str | None = None) -> int:
        return self._bound("last_row", sheet)

    def first_column(self, sheet: str | None = None) -> int:
        return self._bound("first_column", sheet)

    def last_column(self, sheet: str | None = None) -> int:
        return self._bound("last_column", sheet)

    def row(self, row: int, sheet: str | None = None) -> list[Any]:
        """Typed values of one row across the sheet's bounding columns."""
        name = self._resolve(sheet)
        result = self.bounds(name)
        if result is None:
            return []
        return [
            self.cell(row, col, name)
            for col in range(result.first_column, result.last_column + 1)
        ]

    def column(self, col: int | str, sheet: str | None = None) -> list[Any]:
        """Typed values of one column across the sheet's bounding rows."""
        name = self._resolve(sheet)
        _, col = normalize(1, col)
        result = self.bounds(name)
        if result is None:
            return []
        return [
            self.cell(row, col, name)
            for row in range(result.first_row, result.last_row + 1)
        ]
