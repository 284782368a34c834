"""Sensor reading collection."""

import logging

from .readers import DummyReader, RecordSource, SheetFetchError, SheetReader
from .config.settings import Config

logger = logging.getLogger(__name__)


def create_reader(config: Config) -> RecordSource:
    """Pick the record source the configuration asks for."""
    if not config.dummy.enabled and not config.sheet.url:
        logger.warning("No sheet URL configured, using simulated readings")
    if config.dummy.enabled or not config.sheet.url:
        return DummyReader(config.dummy)
    return SheetReader(config.sheet)


__all__ = ["DummyReader", "RecordSource", "SheetFetchError", "SheetReader", "create_reader"]
