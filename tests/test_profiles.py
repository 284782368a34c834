"""Tests for built-in profiles and profile overrides from config."""

import pytest

from freshwatch.engine import (
    BUILTIN_PROFILES,
    DEFAULT_PROFILE,
    FreshnessEngine,
    Verdict,
    VerdictPolicy,
    get_profile,
    profile_from_config,
)
from freshwatch.shared.config import ConfigError


def test_default_profile_is_banded():
    assert get_profile() is DEFAULT_PROFILE
    assert DEFAULT_PROFILE.name == "banded"
    assert DEFAULT_PROFILE.alpha == pytest.approx(0.40)
    assert DEFAULT_PROFILE.verdict_policy is VerdictPolicy.STRICTEST
    assert DEFAULT_PROFILE.color.pivot == 200


def test_builtin_profiles():
    assert set(BUILTIN_PROFILES) == {"banded", "threshold"}
    assert get_profile("threshold").verdict_policy is VerdictPolicy.LABEL
    assert get_profile("threshold").color.pivot is None


def test_unknown_profile_rejected():
    with pytest.raises(ConfigError, match="Unknown profile"):
        get_profile("v7")


def test_empty_section_gives_default():
    assert profile_from_config(None) is DEFAULT_PROFILE
    assert profile_from_config({}) is DEFAULT_PROFILE
    assert profile_from_config({"name": "banded"}) is DEFAULT_PROFILE


def test_alpha_override_changes_blend():
    profile = profile_from_config({"alpha": 0.5})
    result = FreshnessEngine(profile=profile).evaluate({"gasValue": 1000})
    assert result.overall_score == pytest.approx(77.6)


def test_alpha_override_out_of_range():
    with pytest.raises(ConfigError):
        profile_from_config({"alpha": 1.5})


def test_policy_override():
    profile = profile_from_config({"name": "threshold", "verdict_policy": "score"})
    assert profile.name == "threshold"
    assert profile.verdict_policy is VerdictPolicy.SCORE


def test_bad_policy_rejected():
    with pytest.raises(ConfigError, match="Unknown verdict policy"):
        profile_from_config({"verdict_policy": "average"})


def test_verdict_band_override():
    profile = profile_from_config({"verdict_bands": {"safe_min": 98}})
    assert profile.verdict_bands.safe_min == 98
    assert profile.verdict_bands.reheat_min == 70
    result = FreshnessEngine(profile=profile).evaluate({"colorValue": 200, "gasValue": 1000})
    assert result.score_verdict is Verdict.REHEAT_REQUIRED


@pytest.mark.parametrize("bands", [
    {"safe_min": "high"},
    {"unknown_cut": 10},
    {"safe_min": 40},
])
def test_bad_verdict_bands_rejected(bands):
    with pytest.raises(ConfigError):
        profile_from_config({"verdict_bands": bands})


def test_temperature_override():
    profile = profile_from_config({"temperature": {"cold_max": 6}})
    assert profile.temperature.cold_max == 6
    assert profile.temperature.hot_min == 30


def test_guidance_override_by_either_name():
    profile = profile_from_config({"guidance": {"safe": "{subject} is fine.", "ReheatRequired": "Cook it."}})
    engine = FreshnessEngine(profile=profile, subject="Tuna")
    assert engine.evaluate({"colorValue": 200, "gasValue": 1000}).guidance_text == "Tuna is fine."
    assert engine.evaluate({"colorValue": 420, "gasValue": 3000}).guidance_text == "Cook it."


def test_guidance_unknown_verdict_rejected():
    with pytest.raises(ConfigError):
        profile_from_config({"guidance": {"maybe": "?"}})


def test_metric_table_override_keeps_other_fields():
    profile = profile_from_config({"gas": {"breakpoints": [[0, 100], [2000, 85], [3000, 60], [3800, 30]]}})
    assert profile.gas.danger_cap == DEFAULT_PROFILE.gas.danger_cap
    assert profile.gas.bands == DEFAULT_PROFILE.gas.bands
    assert profile.gas.score(2000) == pytest.approx(85.0)
    assert profile.color is DEFAULT_PROFILE.color


def test_profile_section_must_be_mapping():
    with pytest.raises(ConfigError):
        profile_from_config(["banded"])
