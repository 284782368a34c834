"""Consumption verdicts, verdict policies and guidance text."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Mapping, Tuple

from freshwatch.shared.config import ConfigError

from .labels import FreshnessLabel


class Verdict(IntEnum):
    """Consumption verdict, ordered by severity."""
    SAFE = 0
    REHEAT_REQUIRED = 1
    NOT_RECOMMENDED = 2
    UNFIT = 3

    @property
    def wire_name(self) -> str:
        return _WIRE_NAMES[self]


_WIRE_NAMES = {
    Verdict.SAFE: "Safe",
    Verdict.REHEAT_REQUIRED: "ReheatRequired",
    Verdict.NOT_RECOMMENDED: "NotRecommended",
    Verdict.UNFIT: "Unfit",
}


class VerdictPolicy(str, Enum):
    """Which path governs the final verdict."""
    SCORE = "score"
    LABEL = "label"
    STRICTEST = "strictest"

    @classmethod
    def parse(cls, value: str) -> "VerdictPolicy":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(f"Unknown verdict policy {value!r}, expected one of {[p.value for p in cls]}") from None


LABEL_VERDICTS = {
    FreshnessLabel.FRESH: Verdict.SAFE,
    FreshnessLabel.SLIGHTLY_DEGRADED: Verdict.REHEAT_REQUIRED,
    FreshnessLabel.NOT_FRESH: Verdict.NOT_RECOMMENDED,
    FreshnessLabel.UNFIT: Verdict.UNFIT,
}


@dataclass(frozen=True)
class VerdictBands:
    """Lower score bounds (inclusive) of the three better verdicts."""
    safe_min: float = 85.0
    reheat_min: float = 70.0
    not_recommended_min: float = 50.0

    def __post_init__(self):
        if not self.safe_min >= self.reheat_min >= self.not_recommended_min:
            raise ConfigError(
                f"Verdict cut points must be descending, got "
                f"{self.safe_min}/{self.reheat_min}/{self.not_recommended_min}"
            )

    def verdict_for(self, score: float) -> Verdict:
        if score >= self.safe_min:
            return Verdict.SAFE
        if score >= self.reheat_min:
            return Verdict.REHEAT_REQUIRED
        if score >= self.not_recommended_min:
            return Verdict.NOT_RECOMMENDED
        return Verdict.UNFIT


def derive_verdict(
    score: float,
    worst_label: FreshnessLabel,
    bands: VerdictBands,
    policy: VerdictPolicy = VerdictPolicy.STRICTEST,
) -> Tuple[Verdict, Verdict, Verdict]:
    """Pick the verdict for a blended score and the worst per-metric label.

    Returns:
        Tuple of (verdict, score-path verdict, label-path verdict).
    """
    by_score = bands.verdict_for(score)
    by_label = LABEL_VERDICTS[worst_label]

    if policy is VerdictPolicy.SCORE:
        verdict = by_score
    elif policy is VerdictPolicy.LABEL:
        verdict = by_label
    else:
        verdict = max(by_score, by_label)
    return verdict, by_score, by_label


DEFAULT_GUIDANCE = {
    Verdict.SAFE: (
        "{subject} is safe to eat. Keep it at 0-4°C and consume within 24-48 hours."
    ),
    Verdict.REHEAT_REQUIRED: (
        "{subject} must be reheated to a core temperature above 70°C before consumption. "
        "Do not eat it if it smells pungent or sour."
    ),
    Verdict.NOT_RECOMMENDED: (
        "{subject} is not recommended for consumption. Quality has dropped; "
        "for safety it is better not eaten."
    ),
    Verdict.UNFIT: (
        "{subject} is unfit for consumption. Indicators are very poor; "
        "discard the product following disposal procedures."
    ),
}


def guidance_for(verdict: Verdict, templates: Mapping[Verdict, str], subject: str = "The fish") -> str:
    """Look up the guidance template for a verdict and fill in the subject."""
    template = templates.get(verdict, DEFAULT_GUIDANCE[verdict])
    return template.replace("{subject}", subject)
