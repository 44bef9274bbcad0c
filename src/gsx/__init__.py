"""gsx: cached, type-inferring cell access for sheet-structured workbooks."""

from gsx.contracts.cells import CellType, SheetBounds
from gsx.contracts.common import (
    EmptySheet,
    FormatMismatch,
    GsxError,
    InvalidCoordinate,
    SessionUnavailable,
    UnknownSheet,
)
from gsx.contracts.options import WorkbookOptions, load_options
from gsx.engine.workbook import Workbook

__version__ = "0.1.0"

__all__ = [
    "CellType",
    "EmptySheet",
    "FormatMismatch",
    "GsxError",
    "InvalidCoordinate",
    "SessionUnavailable",
    "SheetBounds",
    "UnknownSheet",
    "Workbook",
    "WorkbookOptions",
    "load_options",
]
