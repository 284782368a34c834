"""Cumulative temperature exposure over a reading history."""

from .accumulator import DEFAULT_LIMITS, DEFAULT_MAX_GAP, ExposureAccumulator, ExposureLimit

__all__ = ["DEFAULT_LIMITS", "DEFAULT_MAX_GAP", "ExposureAccumulator", "ExposureLimit"]
