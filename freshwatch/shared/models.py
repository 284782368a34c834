"""Core data models for fish-quality sensor readings."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


def as_float(value: Any) -> Optional[float]:
    """Convert a raw metric to a finite float, or None if that is not possible."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class SensorReading:
    """Represents a single observation of one fish sample.

    Every metric is optional; the engine substitutes a cautious default
    for anything that is missing.
    """
    timestamp: Optional[datetime] = None
    temperature: Optional[float] = None
    gas_value: Optional[float] = None
    color_value: Optional[float] = None
    color_label: Optional[str] = None
    gas_label: Optional[str] = None

    def has_metrics(self) -> bool:
        """Check if at least one scored metric carries a usable value."""
        return as_float(self.gas_value) is not None or as_float(self.color_value) is not None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SensorReading":
        """Build a reading from an engine-input mapping.

        Accepts both the camelCase keys used by the dashboard
        (``colorValue``, ``gasLabel``...) and snake_case keys.
        """
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return None

        color_label = pick("colorLabel", "color_label")
        gas_label = pick("gasLabel", "gas_label")
        return cls(
            timestamp=pick("timestamp"),
            temperature=as_float(pick("temperature")),
            gas_value=as_float(pick("gasValue", "gas_value")),
            color_value=as_float(pick("colorValue", "color_value")),
            color_label=str(color_label) if color_label is not None else None,
            gas_label=str(gas_label) if gas_label is not None else None,
        )
