"""Tests for cumulative temperature exposure."""

from datetime import timedelta

import pytest

from freshwatch.exposure import ExposureAccumulator, ExposureLimit
from freshwatch.shared.config import ConfigError
from freshwatch.shared.models import SensorReading

from .conftest import T0, reading_at


def test_two_hours_above_ten_degrees_forces_unsafe():
    acc = ExposureAccumulator()
    acc.extend(reading_at(30 * i, temperature=12.0) for i in range(5))
    assert acc.exposure()[10.0] == timedelta(hours=2)
    assert acc.exposure()[20.0] == timedelta(0)
    assert acc.force_unsafe
    assert [limit.threshold for limit in acc.exceeded()] == [10.0]


def test_just_under_the_limit_is_not_flagged():
    acc = ExposureAccumulator()
    acc.extend(reading_at(30 * i, temperature=12.0) for i in range(4))
    assert acc.exposure()[10.0] == timedelta(minutes=90)
    assert not acc.force_unsafe
    assert acc.describe() == "none"


def test_higher_threshold_has_shorter_limit():
    acc = ExposureAccumulator()
    acc.extend(reading_at(30 * i, temperature=25.0) for i in range(3))
    assert acc.exposure()[10.0] == timedelta(hours=1)
    assert acc.exposure()[20.0] == timedelta(hours=1)
    assert [limit.threshold for limit in acc.exceeded()] == [20.0]
    assert acc.describe() == ">20°C for 1h"


def test_exposure_is_cumulative_across_cold_spells():
    acc = ExposureAccumulator()
    temps = [12, 12, 2, 2, 12, 12, 12, 2]
    acc.extend(reading_at(30 * i, temperature=t) for i, t in enumerate(temps))
    # Warm spans start at readings 0, 1, 4, 5, 6
    assert acc.exposure()[10.0] == timedelta(minutes=150)
    assert acc.force_unsafe


def test_threshold_is_strictly_above():
    acc = ExposureAccumulator()
    acc.extend(reading_at(30 * i, temperature=10.0) for i in range(10))
    assert acc.exposure()[10.0] == timedelta(0)


def test_long_gaps_are_capped():
    acc = ExposureAccumulator(max_gap=timedelta(minutes=30))
    acc.add(reading_at(0, temperature=15.0))
    acc.add(reading_at(300, temperature=15.0))
    assert acc.exposure()[10.0] == timedelta(minutes=30)


def test_readings_without_temperature_add_no_time():
    acc = ExposureAccumulator()
    acc.add(reading_at(0, temperature=None))
    acc.add(reading_at(30, temperature=15.0))
    acc.add(reading_at(60, temperature=None))
    acc.add(reading_at(90, temperature=15.0))
    assert acc.exposure()[10.0] == timedelta(minutes=30)


def test_readings_without_timestamp_are_skipped():
    acc = ExposureAccumulator()
    acc.add(SensorReading(temperature=40.0))
    acc.add(reading_at(0, temperature=15.0))
    acc.add(reading_at(30, temperature=15.0))
    assert acc.exposure()[10.0] == timedelta(minutes=30)


def test_out_of_order_reading_is_ignored():
    acc = ExposureAccumulator()
    acc.add(reading_at(60, temperature=15.0))
    acc.add(reading_at(30, temperature=35.0))
    acc.add(reading_at(90, temperature=15.0))
    assert acc.exposure()[10.0] == timedelta(minutes=30)
    assert acc.exposure()[30.0] == timedelta(0)


def test_reset_clears_state():
    acc = ExposureAccumulator()
    acc.extend(reading_at(30 * i, temperature=25.0) for i in range(5))
    assert acc.force_unsafe
    acc.reset()
    assert not acc.force_unsafe
    assert all(total == timedelta(0) for total in acc.exposure().values())


def test_custom_limits():
    acc = ExposureAccumulator(limits=[ExposureLimit(5.0, timedelta(minutes=10))])
    acc.extend([reading_at(0, temperature=6.0), reading_at(10, temperature=6.0)])
    assert acc.force_unsafe


def test_from_config():
    acc = ExposureAccumulator.from_config({
        "max_gap_minutes": 15,
        "limits": [{"threshold": 8, "minutes": 45}],
    })
    assert acc.max_gap == timedelta(minutes=15)
    assert acc.limits == (ExposureLimit(8.0, timedelta(minutes=45)),)


def test_from_config_defaults():
    acc = ExposureAccumulator.from_config(None)
    assert [limit.threshold for limit in acc.limits] == [10.0, 20.0, 30.0]


@pytest.mark.parametrize("data", [
    {"limits": [{"threshold": 8}]},
    {"limits": [{"threshold": "warm", "minutes": 10}]},
    {"limits": []},
    {"max_gap_minutes": 0},
    {"limits": [{"threshold": 10, "minutes": 0}]},
    {"limits": [{"threshold": 10, "minutes": -5}]},
])
def test_from_config_rejects_bad_sections(data):
    with pytest.raises(ConfigError):
        ExposureAccumulator.from_config(data)


def test_zero_duration_limit_rejected():
    with pytest.raises(ConfigError, match="positive duration"):
        ExposureAccumulator(limits=[ExposureLimit(10.0, timedelta(0))])
