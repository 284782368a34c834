import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional
import logging

from freshwatch.shared.models import SensorReading
from freshwatch.collector.config.settings import DummyConfig
from .base import RecordSource

logger = logging.getLogger(__name__)


class DummyReader(RecordSource):
    """Simulated fish sample that slowly loses freshness.

    Every call produces a fresh history of ``history`` readings spaced
    ``interval_seconds`` apart and ending now. Values drift upward with a
    random walk, so repeated calls show a slowly spoiling sample.
    """

    BASE_VALUES = {
        'temperature': 3.0,   # chilled, in Celsius
        'gas_value': 900.0,
        'color_value': 180.0,
    }
    DRIFT = {
        'temperature': 0.02,
        'gas_value': 15.0,
        'color_value': 1.5,
    }
    VARIATION = {
        'temperature': 0.3,
        'gas_value': 60.0,
        'color_value': 4.0,
    }

    def __init__(self, config: Optional[DummyConfig] = None):
        self.config = config or DummyConfig(enabled=True)
        self.random = random.Random(self.config.seed)
        # Keep last values so successive histories continue from each other
        self.last_values: Dict[str, float] = dict(self.BASE_VALUES)
        logger.info(f"Initialized DummyReader with {self.config.history} simulated readings")

    def _get_numeric_value(self, metric: str) -> float:
        """Generate a somewhat realistic drifting value"""
        current = self.last_values[metric]
        change = self.random.uniform(-self.VARIATION[metric], self.VARIATION[metric])
        new_value = max(0.0, current + self.DRIFT[metric] + change)
        self.last_values[metric] = new_value
        return new_value

    def get_readings(self) -> List[SensorReading]:
        readings = []
        now = datetime.now().replace(microsecond=0)
        step = timedelta(seconds=self.config.interval_seconds)

        for index in range(self.config.history):
            timestamp = now - step * (self.config.history - 1 - index)
            readings.append(SensorReading(
                timestamp=timestamp,
                temperature=round(self._get_numeric_value('temperature'), 1),
                gas_value=round(self._get_numeric_value('gas_value')),
                color_value=round(self._get_numeric_value('color_value'), 1),
            ))

        return readings

    def check_health(self) -> bool:
        # Dummy reader is always healthy
        return True
