"""Monitoring-only temperature display state.

Fish temperature never feeds the score or the verdict; it only tells the
presenter whether the sample is being kept cold or is sitting warm.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from freshwatch.shared.config import ConfigError
from freshwatch.shared.models import as_float


class TemperatureState(str, Enum):
    NEUTRAL = "neutral"
    COLD = "cold"
    HOT = "hot"


@dataclass(frozen=True)
class TemperatureLimits:
    cold_max: float = 4.0
    hot_min: float = 30.0

    def __post_init__(self):
        if self.cold_max >= self.hot_min:
            raise ConfigError(f"Temperature cold limit {self.cold_max} must be below hot limit {self.hot_min}")

    def state_for(self, celsius: Any) -> TemperatureState:
        value = as_float(celsius)
        if value is None:
            return TemperatureState.NEUTRAL
        if value <= self.cold_max:
            return TemperatureState.COLD
        if value >= self.hot_min:
            return TemperatureState.HOT
        return TemperatureState.NEUTRAL


@dataclass(frozen=True)
class TemperatureReading:
    value: Optional[float]
    state: TemperatureState

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "state": self.state.value}
