"""Shared fixtures for freshwatch tests."""

from datetime import datetime, timedelta
from typing import List, Optional

import pytest

from freshwatch.collector.readers.base import RecordSource
from freshwatch.engine import FreshnessEngine, get_profile
from freshwatch.shared.models import SensorReading

T0 = datetime(2025, 3, 1, 8, 0, 0)


@pytest.fixture
def engine() -> FreshnessEngine:
    """Engine with the default (banded) profile."""
    return FreshnessEngine()


@pytest.fixture
def threshold_engine() -> FreshnessEngine:
    return FreshnessEngine(profile=get_profile("threshold"))


def reading_at(minutes: float, temperature: Optional[float] = 3.0, gas: float = 1000, color: float = 200) -> SensorReading:
    return SensorReading(
        timestamp=T0 + timedelta(minutes=minutes),
        temperature=temperature,
        gas_value=gas,
        color_value=color,
    )


class StaticSource(RecordSource):
    """Record source returning a fixed history (or raising)."""

    def __init__(self, readings: List[SensorReading], error: Optional[Exception] = None):
        self.readings = readings
        self.error = error

    def get_readings(self) -> List[SensorReading]:
        if self.error is not None:
            raise self.error
        return list(self.readings)

    def check_health(self) -> bool:
        return self.error is None


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path."""
    def write(text: str):
        path = tmp_path / "config-test.yaml"
        path.write_text(text)
        return path
    return write
