"""Workbook configuration: date/time patterns, credentials, event output."""

from __future__ import annotations

import json
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

from gsx.io.fileops import read_text_safe

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M:%S"
DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"

TOKEN_ENV = "GOOGLE_TOKEN"
EVENTS_ENV = "GSX_EVENTS"


class Formats(BaseModel):
    """strptime patterns used to classify and convert cell strings."""

    date_format: str = DATE_FORMAT
    time_format: str = TIME_FORMAT
    datetime_format: str = DATETIME_FORMAT

    model_config = {"validate_assignment": True}

    @field_validator("date_format", "time_format", "datetime_format")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("pattern must not be empty")
        return v


class WorkbookOptions(Formats):
    """Per-handle configuration."""

    access_token: str | None = None
    events: bool = False

    @classmethod
    def from_env(cls) -> "WorkbookOptions":
        events = os.environ.get(EVENTS_ENV, "").strip().lower() in ("1", "true", "yes", "on")
        return cls(access_token=os.environ.get(TOKEN_ENV) or None, events=events)


def load_options(path: str | Path) -> WorkbookOptions:
    """Load options from a YAML or JSON file."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Options file not found: {p}")
    text = read_text_safe(p)
    if p.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Options file must contain a mapping: {p}")
    return WorkbookOptions(**data)
