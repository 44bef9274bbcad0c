"""Type inference: classify raw cell strings and convert them to typed values.

Classification order matters because date and time strings can look
numeric and vice versa::

    formula -> datetime -> date -> float -> time -> string

Every pattern probe reads the pattern from the ``Formats`` passed in, so a
handle whose patterns change between calls is classified with the new ones.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any

from gsx.contracts.cells import CellType
from gsx.contracts.options import Formats

_NUMERIC_RE = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")

# tag -> name of the Formats attribute holding its pattern
PROBES: dict[CellType, str] = {
    CellType.datetime: "datetime_format",
    CellType.date: "date_format",
    CellType.time: "time_format",
}

DEFAULT_FORMATS = Formats()


def parse_pattern(text: Any, pattern: str) -> datetime | None:
    """Parse ``text`` under ``pattern``; ``None`` when it does not fully match."""
    if not isinstance(text, str):
        return None
    try:
        return datetime.strptime(text, pattern)
    except ValueError:
        return None


def matches(kind: CellType, text: Any, formats: Formats = DEFAULT_FORMATS) -> bool:
    return parse_pattern(text, getattr(formats, PROBES[kind])) is not None


def is_date(text: Any, formats: Formats = DEFAULT_FORMATS) -> bool:
    return matches(CellType.date, text, formats)


def is_time(text: Any, formats: Formats = DEFAULT_FORMATS) -> bool:
    return matches(CellType.time, text, formats)


def is_datetime(text: Any, formats: Formats = DEFAULT_FORMATS) -> bool:
    return matches(CellType.datetime, text, formats)


def is_numeric(value: Any) -> bool:
    """True for unsigned decimal strings such as ``"42"``, ``"4.2"``, ``"4."`` or ``".5"``."""
    return isinstance(value, str) and _NUMERIC_RE.fullmatch(value) is not None


def time_to_seconds(text: str, pattern: str = DEFAULT_FORMATS.time_format) -> int:
    """Seconds since midnight for a time-of-day string."""
    parsed = parse_pattern(text, pattern)
    if parsed is None:
        raise ValueError(f"{text!r} does not match time format '{pattern}'")
    return parsed.hour * 3600 + parsed.minute * 60 + parsed.second


def to_cell_string(value: Any, formats: Formats = DEFAULT_FORMATS) -> str:
    """Text a spreadsheet shows for a Python value written to a cell.

    Midnight datetimes render as dates and integral floats without a
    fraction, so the text infers back to what a fresh read would give.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.strftime(formats.date_format)
        return value.strftime(formats.datetime_format)
    if isinstance(value, date):
        return value.strftime(formats.date_format)
    if isinstance(value, time):
        return value.strftime(formats.time_format)
    return str(value)


def _formula_value(numeric: Any) -> Any:
    if isinstance(numeric, bool):
        return numeric
    if isinstance(numeric, (int, float)):
        return float(numeric)
    if is_numeric(numeric):
        return float(numeric)
    return numeric


def infer(
    display: str | None,
    numeric: Any = None,
    formats: Formats = DEFAULT_FORMATS,
) -> tuple[Any, CellType]:
    """Classify a cell from its display string and numeric companion.

    Returns ``(value, tag)``. Date and datetime cells keep the raw string as
    value; the reader converts it with the pattern current at read time.
    """
    if display is None or display.startswith("="):
        return _formula_value(numeric), CellType.formula
    if is_datetime(display, formats):
        return display, CellType.datetime
    if is_date(display, formats):
        return display, CellType.date
    if is_numeric(display):
        return float(display), CellType.float
    if is_time(display, formats):
        return time_to_seconds(display, formats.time_format), CellType.time
    return display, CellType.string
