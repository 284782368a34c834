"""Base class for record sources."""

from abc import ABC, abstractmethod
from typing import List
import logging

from freshwatch.shared.models import SensorReading

logger = logging.getLogger(__name__)


class RecordSource(ABC):
    """Base class for everything that supplies sensor readings."""

    @abstractmethod
    def get_readings(self) -> List[SensorReading]:
        """Get the reading history, oldest first."""
        pass

    @abstractmethod
    def check_health(self) -> bool:
        """Basic health check - can we reach our data?"""
        pass

    def latest(self) -> SensorReading:
        """Most recent reading, or an empty one when there is no data."""
        readings = self.get_readings()
        if not readings:
            logger.warning(f"{type(self).__name__} returned no readings")
            return SensorReading()
        return readings[-1]
