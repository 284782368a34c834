"""Record sources that supply sensor readings."""

from .base import RecordSource
from .dummy import DummyReader
from .sheet import SheetFetchError, SheetReader

__all__ = [
    "RecordSource",
    "DummyReader",
    "SheetFetchError",
    "SheetReader",
]
