"""Freshness classification engine."""

from .blend import soft_min
from .engine import CombinedAssessment, FreshnessEngine
from .labels import FreshnessLabel, parse_label
from .observer import EngineObserver, LoggingObserver, NullObserver, RecordingObserver
from .profiles import (
    BUILTIN_PROFILES,
    DEFAULT_PROFILE,
    FreshnessProfile,
    get_profile,
    profile_from_config,
)
from .temperature import TemperatureLimits, TemperatureState
from .thresholds import Band, Breakpoint, MetricAssessment, MetricThresholdTable, build_table
from .verdict import Verdict, VerdictBands, VerdictPolicy, derive_verdict

__all__ = [
    "soft_min",
    "CombinedAssessment",
    "FreshnessEngine",
    "FreshnessLabel",
    "parse_label",
    "EngineObserver",
    "LoggingObserver",
    "NullObserver",
    "RecordingObserver",
    "BUILTIN_PROFILES",
    "DEFAULT_PROFILE",
    "FreshnessProfile",
    "get_profile",
    "profile_from_config",
    "TemperatureLimits",
    "TemperatureState",
    "Band",
    "Breakpoint",
    "MetricAssessment",
    "MetricThresholdTable",
    "build_table",
    "Verdict",
    "VerdictBands",
    "VerdictPolicy",
    "derive_verdict",
]
