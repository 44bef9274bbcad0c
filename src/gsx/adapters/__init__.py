"""Remote store interfaces and implementations."""

from gsx.adapters.store import RemoteStore, Session, TracingStore
from gsx.adapters.xlsx_store import XlsxSession, XlsxStore

__all__ = ["RemoteStore", "Session", "TracingStore", "XlsxSession", "XlsxStore"]
