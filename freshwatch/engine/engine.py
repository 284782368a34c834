"""Freshness engine: per-reading assessment of a fish sample."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Iterable, Mapping, Optional, Union

from freshwatch.shared.models import SensorReading, as_float

from .blend import soft_min
from .labels import FreshnessLabel, parse_label
from .observer import EngineObserver
from .profiles import COLOR, DEFAULT_PROFILE, GAS, FreshnessProfile
from .temperature import TemperatureReading
from .thresholds import MetricAssessment
from .verdict import Verdict, derive_verdict, guidance_for

if TYPE_CHECKING:
    from freshwatch.exposure import ExposureAccumulator

logger = logging.getLogger(__name__)

SCORE_DECIMALS = 1

EngineInput = Union[SensorReading, Mapping[str, Any], None]


@dataclass(frozen=True)
class CombinedAssessment:
    """Result of one evaluation. Never mutated after creation."""
    overall_score: float
    worst_label: FreshnessLabel
    verdict: Verdict
    guidance_text: str
    per_metric: Mapping[str, MetricAssessment]
    temperature: TemperatureReading
    score_verdict: Verdict
    label_verdict: Verdict
    exposure_forced: bool = False
    timestamp: Optional[datetime] = None
    profile: str = DEFAULT_PROFILE.name

    def to_dict(self) -> Dict[str, Any]:
        """Engine output in the shape the dashboard consumes."""
        return {
            "overallScorePercent": self.overall_score,
            "verdict": self.verdict.wire_name,
            "worstLabel": self.worst_label.display_name,
            "guidanceText": self.guidance_text,
            "perMetric": {name: metric.to_dict() for name, metric in self.per_metric.items()},
            "temperature": self.temperature.to_dict(),
        }


@dataclass
class FreshnessEngine:
    """Maps sensor readings to a blended score, a verdict and guidance.

    The engine holds only immutable configuration, so one instance can be
    shared freely between threads. Every call is independent of the ones
    before it.
    """
    profile: FreshnessProfile = DEFAULT_PROFILE
    observer: EngineObserver = field(default_factory=EngineObserver)
    subject: str = "The fish"

    @classmethod
    def from_config(cls, config) -> "FreshnessEngine":
        """Create an engine from a loaded freshwatch Config."""
        from .observer import LoggingObserver
        from .profiles import profile_from_config

        return cls(
            profile=profile_from_config(config.profile),
            observer=LoggingObserver(),
            subject=config.subject,
        )

    def score_metric(self, name: str, value: Any) -> float:
        """Continuous sub-score of one metric."""
        return self.profile.tables[name].score(value)

    def classify_metric(self, name: str, value: Any) -> FreshnessLabel:
        """Discrete label of one metric."""
        return self.profile.tables[name].classify(value)

    def evaluate(self, reading: EngineInput = None, exposure_forced: bool = False) -> CombinedAssessment:
        """Assess a single reading.

        Args:
            reading: A SensorReading, an engine-input mapping, or None.
                Missing metrics fall back to the cautious defaults.
            exposure_forced: Set when an exposure accumulator has flagged
                the sample's temperature history; forces the verdict to UNFIT.

        Returns:
            A fresh CombinedAssessment.
        """
        if reading is None:
            reading = SensorReading()
        elif not isinstance(reading, SensorReading):
            reading = SensorReading.from_mapping(reading)

        profile = self.profile
        per_metric = {
            COLOR: profile.color.assess(reading.color_value, parse_label(reading.color_label)),
            GAS: profile.gas.assess(reading.gas_value, parse_label(reading.gas_label)),
        }
        for name, metric in per_metric.items():
            self.observer.metric_scored(name, metric.value, metric.score, metric.label)

        blended = soft_min(per_metric[COLOR].score, per_metric[GAS].score, profile.alpha)
        overall = round(max(0.0, min(100.0, blended)), SCORE_DECIMALS)
        self.observer.scores_blended({name: m.score for name, m in per_metric.items()}, overall)

        worst = FreshnessLabel.worst(metric.label for metric in per_metric.values())
        verdict, by_score, by_label = derive_verdict(
            overall, worst, profile.verdict_bands, profile.verdict_policy
        )
        if exposure_forced:
            verdict = Verdict.UNFIT
        self.observer.verdict_derived(by_score, by_label, verdict)

        return CombinedAssessment(
            overall_score=overall,
            worst_label=worst,
            verdict=verdict,
            guidance_text=guidance_for(verdict, profile.guidance, self.subject),
            per_metric=per_metric,
            temperature=TemperatureReading(
                value=as_float(reading.temperature),
                state=profile.temperature.state_for(reading.temperature),
            ),
            score_verdict=by_score,
            label_verdict=by_label,
            exposure_forced=exposure_forced,
            timestamp=reading.timestamp if isinstance(reading.timestamp, datetime) else None,
            profile=profile.name,
        )

    def evaluate_history(
        self,
        readings: Iterable[SensorReading],
        accumulator: Optional["ExposureAccumulator"] = None,
    ) -> CombinedAssessment:
        """Assess the latest reading of a history.

        When an accumulator is given it is reset and fed the whole history;
        its force-unsafe flag is then applied to the latest reading's verdict.
        """
        # Readings without a timestamp sort first, in their original order
        history = sorted(readings, key=lambda r: (r.timestamp is not None, r.timestamp or 0))
        if not history:
            logger.debug("Empty history, evaluating neutral defaults")
            return self.evaluate(None)

        forced = False
        if accumulator is not None:
            accumulator.reset()
            accumulator.extend(history)
            forced = accumulator.force_unsafe
            if forced:
                logger.info(f"Temperature exposure limits exceeded: {accumulator.describe()}")

        return self.evaluate(history[-1], exposure_forced=forced)
