"""Common Pydantic models and the error hierarchy."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class WarningDetail(BaseModel):
    """Structured warning."""

    code: str
    message: str
    path: str | None = None


class ErrorDetail(BaseModel):
    """Structured error."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class GsxError(Exception):
    """Base class for errors raised by the cell access layer."""

    code = "ERR_GSX"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(code=self.code, message=self.message, details=self.details or None)


class InvalidCoordinate(GsxError, ValueError):
    """Raised when a row/column pair cannot be normalized."""

    code = "ERR_INVALID_COORDINATE"


class UnknownSheet(GsxError, LookupError):
    """Raised when a sheet name is not in the workbook's sheet list."""

    code = "ERR_SHEET_NOT_FOUND"

    def __init__(self, sheet: str, available: list[str]) -> None:
        super().__init__(
            f"Sheet not found: {sheet!r}. Available: {', '.join(available) or '(none)'}",
            sheet=sheet,
            available=available,
        )
        self.sheet = sheet


class FormatMismatch(GsxError, ValueError):
    """Raised when a cached date/datetime string no longer parses with the current pattern."""

    code = "ERR_FORMAT_MISMATCH"

    def __init__(self, kind: str, sheet: str, row: int, col: int, raw: Any, pattern: str) -> None:
        super().__init__(
            f"Invalid {kind} {sheet}[{row},{col}] {raw!r} using format '{pattern}'",
            kind=kind,
            sheet=sheet,
            row=row,
            col=col,
            raw=raw,
            pattern=pattern,
        )
        self.sheet = sheet
        self.row = row
        self.col = col
        self.raw = raw
        self.pattern = pattern


class EmptySheet(GsxError, LookupError):
    """Raised when a bounding-box accessor is used on a sheet with no non-empty cells."""

    code = "ERR_EMPTY_SHEET"

    def __init__(self, sheet: str) -> None:
        super().__init__(f"Sheet {sheet!r} has no non-empty cells", sheet=sheet)
        self.sheet = sheet


class SessionUnavailable(GsxError, RuntimeError):
    """Raised when the remote store is needed but no session could be established."""

    code = "ERR_NO_SESSION"


class WorkbookCorruptError(GsxError):
    """Raised when a workbook file cannot be parsed."""

    code = "ERR_WORKBOOK_CORRUPT"
