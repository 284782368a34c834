"""Cumulative temperature-exposure tracking over a reading history.

Time between two consecutive readings is attributed to the earlier
reading's temperature, and counts toward every limit whose threshold
that temperature exceeds. Gaps longer than ``max_gap`` are truncated so a
sensor outage does not pile up exposure.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from freshwatch.shared.config import ConfigError
from freshwatch.shared.models import SensorReading, as_float

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExposureLimit:
    """Maximum cumulative time allowed above a temperature."""
    threshold: float
    max_duration: timedelta

    def describe(self) -> str:
        hours = self.max_duration.total_seconds() / 3600
        return f">{self.threshold:g}°C for {hours:g}h"


DEFAULT_LIMITS = (
    ExposureLimit(10.0, timedelta(hours=2)),
    ExposureLimit(20.0, timedelta(hours=1)),
    ExposureLimit(30.0, timedelta(minutes=30)),
)

DEFAULT_MAX_GAP = timedelta(minutes=30)


class ExposureAccumulator:
    """Tracks time spent above temperature thresholds.

    Feed readings in timestamp order with ``add`` or ``extend``; readings
    that arrive out of order are ignored with a warning. Readings without a
    timestamp are skipped. Readings without a temperature end the current
    span without contributing time.
    """

    def __init__(
        self,
        limits: Sequence[ExposureLimit] = DEFAULT_LIMITS,
        max_gap: timedelta = DEFAULT_MAX_GAP,
    ):
        if not limits:
            raise ConfigError("At least one exposure limit is required")
        for limit in limits:
            if limit.max_duration <= timedelta(0):
                raise ConfigError(f"Exposure limit {limit.describe()} must allow a positive duration")
        if max_gap <= timedelta(0):
            raise ConfigError(f"max_gap must be positive, got {max_gap}")
        self.limits = tuple(sorted(limits, key=lambda limit: limit.threshold))
        self.max_gap = max_gap
        self.reset()

    @classmethod
    def from_config(cls, data: Optional[Mapping[str, Any]]) -> "ExposureAccumulator":
        """Build an accumulator from the ``exposure:`` config section.

        Example::

            exposure:
              max_gap_minutes: 30
              limits:
                - {threshold: 10, minutes: 120}
                - {threshold: 20, minutes: 60}
        """
        if not data:
            return cls()
        try:
            limits = DEFAULT_LIMITS
            if "limits" in data:
                limits = tuple(
                    ExposureLimit(float(item["threshold"]), timedelta(minutes=float(item["minutes"])))
                    for item in data["limits"]
                )
            max_gap = timedelta(minutes=float(data.get("max_gap_minutes", DEFAULT_MAX_GAP.total_seconds() / 60)))
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Malformed exposure section: {e}") from e
        return cls(limits=limits, max_gap=max_gap)

    def reset(self) -> None:
        self._totals: Dict[float, timedelta] = {limit.threshold: timedelta(0) for limit in self.limits}
        self._last_time: Optional[datetime] = None
        self._last_temp: Optional[float] = None

    def add(self, reading: SensorReading) -> None:
        timestamp = reading.timestamp
        if not isinstance(timestamp, datetime):
            logger.debug("Skipping reading without timestamp")
            return

        if self._last_time is not None:
            span = timestamp - self._last_time
            if span < timedelta(0):
                logger.warning(f"Ignoring out-of-order reading at {timestamp} (last was {self._last_time})")
                return
            if self._last_temp is not None:
                span = min(span, self.max_gap)
                for threshold in self._totals:
                    if self._last_temp > threshold:
                        self._totals[threshold] += span

        self._last_time = timestamp
        self._last_temp = as_float(reading.temperature)

    def extend(self, readings: Iterable[SensorReading]) -> None:
        for reading in readings:
            self.add(reading)

    def exposure(self) -> Dict[float, timedelta]:
        """Total time accumulated above each threshold."""
        return dict(self._totals)

    def exceeded(self) -> List[ExposureLimit]:
        return [limit for limit in self.limits if self._totals[limit.threshold] >= limit.max_duration]

    @property
    def force_unsafe(self) -> bool:
        return bool(self.exceeded())

    def describe(self) -> str:
        return ", ".join(limit.describe() for limit in self.exceeded()) or "none"
