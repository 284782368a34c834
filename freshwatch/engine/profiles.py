"""Scoring profiles.

Each profile is a complete, immutable set of calibration data: the two
metric tables, the blend coefficient, the verdict cut points and policy,
the temperature display limits and the guidance templates. The engine
reproduces a given calibration purely by being handed a different profile.

Built-in profiles:

``banded`` (default)
    Colour is fresh inside a closed band with a preferred midpoint; the
    score peaks at the pivot and eases off toward both band edges. Verdict
    is the stricter of the score path and the label path.

``threshold``
    Earlier calibration: colour is a plain "lower is better" ramp, and the
    verdict follows the worst per-metric label only.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from freshwatch.shared.config import ConfigError

from .blend import DEFAULT_ALPHA, validate_alpha
from .labels import FreshnessLabel
from .temperature import TemperatureLimits
from .thresholds import Band, Breakpoint, MetricThresholdTable, build_table
from .verdict import DEFAULT_GUIDANCE, Verdict, VerdictBands, VerdictPolicy

COLOR = "color"
GAS = "gas"

FRESH = FreshnessLabel.FRESH
SLIGHTLY_DEGRADED = FreshnessLabel.SLIGHTLY_DEGRADED
NOT_FRESH = FreshnessLabel.NOT_FRESH
UNFIT = FreshnessLabel.UNFIT


@dataclass(frozen=True)
class FreshnessProfile:
    name: str
    color: MetricThresholdTable
    gas: MetricThresholdTable
    alpha: float = DEFAULT_ALPHA
    verdict_bands: VerdictBands = field(default_factory=VerdictBands)
    verdict_policy: VerdictPolicy = VerdictPolicy.STRICTEST
    temperature: TemperatureLimits = field(default_factory=TemperatureLimits)
    guidance: Mapping[Verdict, str] = field(default_factory=lambda: dict(DEFAULT_GUIDANCE))

    def __post_init__(self):
        validate_alpha(self.alpha)

    @property
    def tables(self) -> Dict[str, MetricThresholdTable]:
        return {COLOR: self.color, GAS: self.gas}


GAS_NOTES = {
    SLIGHTLY_DEGRADED: "Volatile gas rising; early spoilage compounds detected.",
    NOT_FRESH: "High volatile gas level; spoilage is under way.",
    UNFIT: "Very high volatile gas level; the sample is spoiled.",
}

GAS_TABLE = MetricThresholdTable(
    name=GAS,
    breakpoints=(
        Breakpoint(0, 100),
        Breakpoint(2500, 88),
        Breakpoint(3500, 65),
        Breakpoint(4000, 35),
    ),
    danger_cap=6000,
    bands=(
        Band(FRESH, high=2500),
        Band(SLIGHTLY_DEGRADED, high=3500),
        Band(NOT_FRESH, high=4000),
    ),
    notes={FRESH: "Volatile gas level is low.", **GAS_NOTES},
)

BANDED_COLOR_TABLE = MetricThresholdTable(
    name=COLOR,
    breakpoints=(
        Breakpoint(0, 70),
        Breakpoint(120, 90),
        Breakpoint(200, 100),
        Breakpoint(320, 88),
        Breakpoint(520, 65),
        Breakpoint(650, 35),
    ),
    danger_cap=850,
    bands=(
        Band(FRESH, low=120, high=320),
        Band(SLIGHTLY_DEGRADED, high=520),
        Band(NOT_FRESH, high=650),
    ),
    pivot=200,
    pivot_notes=(
        "Bright, glossy colour. Keep at 0-4°C and consume within 48 hours.",
        "Colour starting to darken but still fresh. Consume within 24 hours.",
    ),
    notes={
        FRESH: "Colour within the fresh range.",
        SLIGHTLY_DEGRADED: "Colour outside the fresh range; cook thoroughly.",
        NOT_FRESH: "Colour clearly degraded.",
        UNFIT: "Colour far outside the fresh range.",
    },
    ceilings={SLIGHTLY_DEGRADED: 90.0},
)

THRESHOLD_COLOR_TABLE = MetricThresholdTable(
    name=COLOR,
    breakpoints=(
        Breakpoint(0, 100),
        Breakpoint(250, 88),
        Breakpoint(400, 65),
        Breakpoint(450, 35),
    ),
    danger_cap=700,
    bands=(
        Band(FRESH, high=250),
        Band(SLIGHTLY_DEGRADED, high=400),
        Band(NOT_FRESH, high=450),
    ),
    notes={
        FRESH: "Colour within the fresh range.",
        SLIGHTLY_DEGRADED: "Colour fading; cook thoroughly.",
        NOT_FRESH: "Colour clearly degraded.",
        UNFIT: "Colour far outside the fresh range.",
    },
)

BANDED = FreshnessProfile(name="banded", color=BANDED_COLOR_TABLE, gas=GAS_TABLE)

THRESHOLD = FreshnessProfile(
    name="threshold",
    color=THRESHOLD_COLOR_TABLE,
    gas=GAS_TABLE,
    verdict_policy=VerdictPolicy.LABEL,
)

BUILTIN_PROFILES = {profile.name: profile for profile in (BANDED, THRESHOLD)}

DEFAULT_PROFILE = BANDED


def get_profile(name: Optional[str] = None) -> FreshnessProfile:
    """Look up a built-in profile by name (the default when None)."""
    if name is None:
        return DEFAULT_PROFILE
    try:
        return BUILTIN_PROFILES[name]
    except KeyError:
        raise ConfigError(f"Unknown profile {name!r}, expected one of {sorted(BUILTIN_PROFILES)}") from None


def profile_from_config(data: Optional[Mapping[str, Any]]) -> FreshnessProfile:
    """Build a profile from the ``profile:`` section of a config file.

    The section names a built-in base with ``name`` (or ``base``) and may
    override any part of it::

        profile:
          name: banded
          alpha: 0.5
          verdict_policy: score
          verdict_bands: {safe_min: 90}
          temperature: {cold_max: 5}
          gas:
            breakpoints: [[0, 100], [2000, 85], [3000, 60], [3800, 30]]
          guidance:
            safe: "{subject} is fine."

    Raises:
        ConfigError: If a value is malformed or names something unknown.
    """
    if not data:
        return DEFAULT_PROFILE
    if not isinstance(data, Mapping):
        raise ConfigError(f"profile section must be a mapping, got {type(data).__name__}")

    base_name = data.get("base") or data.get("name")
    profile = get_profile(base_name)
    changes: Dict[str, Any] = {}

    if "alpha" in data:
        changes["alpha"] = validate_alpha(data["alpha"])
    if "verdict_policy" in data:
        changes["verdict_policy"] = VerdictPolicy.parse(data["verdict_policy"])
    try:
        if "verdict_bands" in data:
            changes["verdict_bands"] = replace(
                profile.verdict_bands, **{k: float(v) for k, v in data["verdict_bands"].items()}
            )
        if "temperature" in data:
            changes["temperature"] = replace(
                profile.temperature, **{k: float(v) for k, v in data["temperature"].items()}
            )
        if "guidance" in data:
            guidance = dict(profile.guidance)
            for key, text in data["guidance"].items():
                guidance[_parse_verdict(key)] = str(text)
            changes["guidance"] = guidance
    except (TypeError, AttributeError, ValueError) as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(f"Malformed profile section: {e}") from e

    for metric in (COLOR, GAS):
        if metric in data:
            changes[metric] = build_table(metric, data[metric], base=getattr(profile, metric))

    return replace(profile, **changes) if changes else profile


def _parse_verdict(key: Any) -> Verdict:
    normalized = str(key).strip().upper().replace(" ", "_")
    if normalized in Verdict.__members__:
        return Verdict[normalized]
    by_wire_name = {verdict.wire_name.upper(): verdict for verdict in Verdict}
    if normalized in by_wire_name:
        return by_wire_name[normalized]
    raise ConfigError(f"Unknown verdict {key!r} in guidance section")
