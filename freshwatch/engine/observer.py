"""Hooks for watching the engine's intermediate results."""

import logging
from typing import Mapping, Optional

from .labels import FreshnessLabel
from .verdict import Verdict

logger = logging.getLogger("freshwatch.engine")


class EngineObserver:
    """Receives intermediate values from every evaluation.

    Subclasses override whichever hooks they care about; the base class
    ignores everything.
    """

    def metric_scored(self, name: str, value: Optional[float], score: float, label: FreshnessLabel) -> None:
        pass

    def scores_blended(self, scores: Mapping[str, float], overall: float) -> None:
        pass

    def verdict_derived(self, score_verdict: Verdict, label_verdict: Verdict, verdict: Verdict) -> None:
        pass


NullObserver = EngineObserver


class LoggingObserver(EngineObserver):
    """Reports intermediate values at DEBUG level."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def metric_scored(self, name, value, score, label):
        self.log.debug(f"{name}: value={value} score={score:.2f} label={label.display_name}")

    def scores_blended(self, scores, overall):
        parts = ", ".join(f"{name}={score:.2f}" for name, score in scores.items())
        self.log.debug(f"Blended {parts} -> {overall:.2f}")

    def verdict_derived(self, score_verdict, label_verdict, verdict):
        self.log.debug(
            f"Verdict by score={score_verdict.wire_name} by label={label_verdict.wire_name} -> {verdict.wire_name}"
        )


class RecordingObserver(EngineObserver):
    """Keeps every reported value; handy in tests and notebooks."""

    def __init__(self):
        self.metrics = []
        self.blends = []
        self.verdicts = []

    def metric_scored(self, name, value, score, label):
        self.metrics.append((name, value, score, label))

    def scores_blended(self, scores, overall):
        self.blends.append((dict(scores), overall))

    def verdict_derived(self, score_verdict, label_verdict, verdict):
        self.verdicts.append((score_verdict, label_verdict, verdict))
