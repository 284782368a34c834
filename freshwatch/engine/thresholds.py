"""Calibrated threshold tables and per-metric scoring.

A table maps a raw sensor value to two things that are configured
independently of each other:

* a continuous 0-100 sub-score, by piecewise-linear interpolation between
  ordered breakpoints and then down to 0 at the danger cap;
* a discrete FreshnessLabel, by the first band that contains the value.

Missing or non-finite values never raise. They get the table's neutral
score and label.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from freshwatch.shared.config import ConfigError
from freshwatch.shared.models import as_float

from .labels import FreshnessLabel

NEUTRAL_SCORE = 60.0
NEUTRAL_LABEL = FreshnessLabel.SLIGHTLY_DEGRADED


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass(frozen=True)
class Breakpoint:
    """A raw-value boundary and the sub-score it maps to."""
    boundary: float
    score: float


@dataclass(frozen=True)
class Band:
    """Closed interval ``[low, high]`` carrying one label.

    ``None`` leaves that side open.
    """
    label: FreshnessLabel
    low: Optional[float] = None
    high: Optional[float] = None

    def contains(self, value: float) -> bool:
        if self.low is not None and value < self.low:
            return False
        if self.high is not None and value > self.high:
            return False
        return True


@dataclass(frozen=True)
class MetricAssessment:
    """Outcome of assessing one metric."""
    name: str
    value: Optional[float]
    score: float
    label: FreshnessLabel
    note: str
    overridden: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label.display_name,
            "score": round(self.score, 1),
            "note": self.note,
        }


@dataclass(frozen=True)
class MetricThresholdTable:
    """Immutable scoring and labelling configuration for one metric.

    Attributes:
        name: Metric name used in the per-metric breakdown.
        breakpoints: Ordered (boundary, score) pairs.
        danger_cap: Value past the last breakpoint where the score reaches 0.
        bands: Label intervals, checked in order; the first match wins.
            Values matched by no band are UNFIT.
        pivot: Optional preferred point inside the fresh band. Fresh values
            below it are "brighter", at or above it "darker".
        notes: Descriptive note per label.
        ceilings: Highest sub-score a metric may keep when a human label
            forces it to that label.
        missing_score: Sub-score used when the value is missing.
        missing_label: Label used when the value is missing.
    """
    name: str
    breakpoints: Tuple[Breakpoint, ...]
    danger_cap: float
    bands: Tuple[Band, ...]
    pivot: Optional[float] = None
    notes: Mapping[FreshnessLabel, str] = field(default_factory=dict)
    pivot_notes: Tuple[str, str] = ("", "")
    ceilings: Mapping[FreshnessLabel, float] = field(default_factory=dict)
    missing_score: float = NEUTRAL_SCORE
    missing_label: FreshnessLabel = NEUTRAL_LABEL
    missing_note: str = "No reading available; assuming caution."

    def __post_init__(self):
        if not self.breakpoints:
            raise ConfigError(f"{self.name}: at least one breakpoint is required")
        boundaries = [bp.boundary for bp in self.breakpoints]
        if any(b >= a for a, b in zip(boundaries[1:], boundaries)):
            raise ConfigError(f"{self.name}: breakpoints must be strictly increasing, got {boundaries}")
        for bp in self.breakpoints:
            if not 0.0 <= bp.score <= 100.0:
                raise ConfigError(f"{self.name}: breakpoint score {bp.score} outside [0, 100]")
        if self.danger_cap <= boundaries[-1]:
            raise ConfigError(f"{self.name}: danger cap {self.danger_cap} must exceed last breakpoint {boundaries[-1]}")
        if not self.bands:
            raise ConfigError(f"{self.name}: at least one band is required")
        if not 0.0 <= self.missing_score <= 100.0:
            raise ConfigError(f"{self.name}: missing score {self.missing_score} outside [0, 100]")

    def score(self, raw_value: Any) -> float:
        """Continuous 0-100 sub-score for a raw value."""
        value = as_float(raw_value)
        if value is None:
            return self.missing_score

        points = self.breakpoints
        if value <= points[0].boundary:
            return points[0].score

        for lower, upper in zip(points, points[1:]):
            if value <= upper.boundary:
                t = clamp01((value - lower.boundary) / (upper.boundary - lower.boundary))
                return lerp(lower.score, upper.score, t)

        last = points[-1]
        t = clamp01((value - last.boundary) / (self.danger_cap - last.boundary))
        return lerp(last.score, 0.0, t)

    def classify(self, raw_value: Any) -> FreshnessLabel:
        """Discrete label for a raw value."""
        value = as_float(raw_value)
        if value is None:
            return self.missing_label
        for band in self.bands:
            if band.contains(value):
                return band.label
        return FreshnessLabel.UNFIT

    def note_for(self, raw_value: Any, label: FreshnessLabel) -> str:
        value = as_float(raw_value)
        if value is None:
            return self.missing_note
        if label is FreshnessLabel.FRESH and self.pivot is not None:
            brighter, darker = self.pivot_notes
            return brighter if value < self.pivot else darker
        return self.notes.get(label, label.display_name)

    def ceiling(self, label: FreshnessLabel) -> float:
        return self.ceilings.get(label, DEFAULT_CEILINGS[label])

    def assess(self, raw_value: Any, human_label: Optional[FreshnessLabel] = None) -> MetricAssessment:
        """Score and label one value, folding in an optional human label.

        A human label only ever makes the result more severe: it replaces
        the numeric label and caps the sub-score at that label's ceiling.
        """
        value = as_float(raw_value)
        score = self.score(value)
        label = self.classify(value)
        overridden = False

        if human_label is not None and human_label > label:
            label = human_label
            score = min(score, self.ceiling(human_label))
            overridden = True

        note = self.note_for(value, label) if not overridden else self.notes.get(label, label.display_name)
        return MetricAssessment(
            name=self.name,
            value=value,
            score=score,
            label=label,
            note=note,
            overridden=overridden,
        )


DEFAULT_CEILINGS = {
    FreshnessLabel.FRESH: 100.0,
    FreshnessLabel.SLIGHTLY_DEGRADED: 88.0,
    FreshnessLabel.NOT_FRESH: 65.0,
    FreshnessLabel.UNFIT: 35.0,
}


def build_table(name: str, data: Mapping[str, Any], base: Optional[MetricThresholdTable] = None) -> MetricThresholdTable:
    """Build a table from a config mapping, overriding fields of ``base``.

    Expected keys (all optional when ``base`` is given)::

        breakpoints: [[0, 100], [2500, 88], ...]
        danger_cap: 6000
        bands: [{label: fresh, high: 2500}, ...]
        pivot: 200
        missing_score: 60
        ceilings: {slightly_degraded: 88}

    Raises:
        ConfigError: If a section is malformed or the result is invalid.
    """
    def parse_label_key(key: Any) -> FreshnessLabel:
        try:
            return FreshnessLabel[str(key).strip().upper().replace(" ", "_")]
        except KeyError:
            raise ConfigError(f"{name}: unknown label {key!r}") from None

    fields: Dict[str, Any] = {}
    if base is not None:
        fields.update(
            breakpoints=base.breakpoints,
            danger_cap=base.danger_cap,
            bands=base.bands,
            pivot=base.pivot,
            notes=base.notes,
            pivot_notes=base.pivot_notes,
            ceilings=base.ceilings,
            missing_score=base.missing_score,
            missing_label=base.missing_label,
            missing_note=base.missing_note,
        )

    try:
        if "breakpoints" in data:
            fields["breakpoints"] = tuple(
                Breakpoint(float(boundary), float(score)) for boundary, score in data["breakpoints"]
            )
        if "danger_cap" in data:
            fields["danger_cap"] = float(data["danger_cap"])
        if "bands" in data:
            fields["bands"] = tuple(
                Band(
                    label=parse_label_key(band["label"]),
                    low=as_float(band.get("low")),
                    high=as_float(band.get("high")),
                )
                for band in data["bands"]
            )
        if "pivot" in data:
            fields["pivot"] = as_float(data["pivot"])
        if "missing_score" in data:
            fields["missing_score"] = float(data["missing_score"])
        if "missing_label" in data:
            fields["missing_label"] = parse_label_key(data["missing_label"])
        if "ceilings" in data:
            ceilings = dict(fields.get("ceilings") or {})
            ceilings.update({parse_label_key(k): float(v) for k, v in data["ceilings"].items()})
            fields["ceilings"] = ceilings
        if "notes" in data:
            notes = dict(fields.get("notes") or {})
            notes.update({parse_label_key(k): str(v) for k, v in data["notes"].items()})
            fields["notes"] = notes
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(f"{name}: malformed threshold table: {e}") from e

    missing = [key for key in ("breakpoints", "danger_cap", "bands") if key not in fields]
    if missing:
        raise ConfigError(f"{name}: missing required keys {missing}")

    return MetricThresholdTable(name=name, **fields)
