"""Pydantic models, configuration, and errors."""

from gsx.contracts.cells import CellEntry, CellType, SheetBounds
from gsx.contracts.common import (
    EmptySheet,
    ErrorDetail,
    FormatMismatch,
    GsxError,
    InvalidCoordinate,
    SessionUnavailable,
    UnknownSheet,
    WarningDetail,
    WorkbookCorruptError,
)
from gsx.contracts.options import Formats, WorkbookOptions, load_options

__all__ = [
    "CellEntry",
    "CellType",
    "EmptySheet",
    "ErrorDetail",
    "Formats",
    "FormatMismatch",
    "GsxError",
    "InvalidCoordinate",
    "SessionUnavailable",
    "SheetBounds",
    "UnknownSheet",
    "WarningDetail",
    "WorkbookCorruptError",
    "WorkbookOptions",
    "load_options",
]
