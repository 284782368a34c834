"""freshwatch - fish freshness monitoring."""

__version__ = "0.1.0"

from freshwatch.engine import CombinedAssessment, FreshnessEngine, FreshnessLabel, Verdict, VerdictPolicy
from freshwatch.exposure import ExposureAccumulator
from freshwatch.shared.models import SensorReading

__all__ = [
    "CombinedAssessment",
    "FreshnessEngine",
    "FreshnessLabel",
    "Verdict",
    "VerdictPolicy",
    "ExposureAccumulator",
    "SensorReading",
]
