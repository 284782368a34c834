"""Tests for the data fetcher, the terminal monitor and the display entry point."""

import io

import pytest
from rich.console import Console

from freshwatch.display import DataFetcher, TerminalMonitor, main
from freshwatch.engine import FreshnessEngine, FreshnessLabel, Verdict
from freshwatch.exposure import ExposureAccumulator
from freshwatch.shared.models import SensorReading

from .conftest import StaticSource, reading_at


@pytest.fixture
def history():
    return [reading_at(i) for i in range(5)]


def render(monitor, status) -> str:
    monitor.console.print(monitor.create_layout(status))
    return monitor.console.export_text()


@pytest.fixture
def console():
    return Console(record=True, width=120, height=40, file=io.StringIO())


# =============================================================================
# DATA FETCHER
# =============================================================================

def test_status_for_fresh_history(history):
    fetcher = DataFetcher(StaticSource(history), FreshnessEngine(), ExposureAccumulator())
    status = fetcher.get_status()
    assert status.source_connected
    assert status.reading_count == 5
    assert status.latest == history[-1]
    assert status.assessment.verdict is Verdict.SAFE
    assert status.assessment.overall_score == pytest.approx(97.1)
    assert status.alerts == []


def test_exposure_alert_forces_unfit():
    warm = [reading_at(30 * i, temperature=25.0) for i in range(5)]
    fetcher = DataFetcher(StaticSource(warm), FreshnessEngine(), ExposureAccumulator())
    status = fetcher.get_status()
    assert status.assessment.verdict is Verdict.UNFIT
    assert any(alert.startswith("ERROR: temperature exposure") for alert in status.alerts)


def test_exposure_ignored_without_accumulator():
    warm = [reading_at(30 * i, temperature=25.0) for i in range(5)]
    status = DataFetcher(StaticSource(warm), FreshnessEngine()).get_status()
    assert status.assessment.verdict is Verdict.SAFE


def test_missing_metric_and_override_alerts():
    latest = SensorReading(timestamp=reading_at(0).timestamp, gas_value=1000, color_label="busuk")
    status = DataFetcher(StaticSource([latest]), FreshnessEngine()).get_status()
    assert "WARNING: no color reading in latest row" in status.alerts
    assert any("color downgraded to Unfit" in alert for alert in status.alerts)
    assert status.assessment.worst_label is FreshnessLabel.UNFIT


def test_empty_history_uses_cautious_defaults():
    status = DataFetcher(StaticSource([]), FreshnessEngine()).get_status()
    assert status.latest is None
    assert status.assessment.overall_score == 60.0
    assert status.alerts[0].startswith("WARNING: no readings")


def test_fallback_keeps_last_assessment(history):
    source = StaticSource(history)
    fetcher = DataFetcher(source, FreshnessEngine())
    good = fetcher.get_status()

    source.error = RuntimeError("sheet unreachable")
    status = fetcher.get_status()
    assert not status.source_connected
    assert status.error == "sheet unreachable"
    assert status.assessment is good.assessment
    assert status.alerts[0] == "ERROR: sheet unreachable"
    assert status.alerts[1].startswith("WARNING: showing data from")


def test_fallback_without_previous_data():
    fetcher = DataFetcher(StaticSource([], error=RuntimeError("boom")), FreshnessEngine())
    status = fetcher.get_status()
    assert status.assessment is None
    assert status.reading_count == 0
    assert status.alerts == ["ERROR: boom"]


# =============================================================================
# TERMINAL MONITOR
# =============================================================================

def test_monitor_renders_verdict_and_score(history, console):
    fetcher = DataFetcher(StaticSource(history), FreshnessEngine(subject="The snapper"))
    monitor = TerminalMonitor(fetcher, console=console)
    text = render(monitor, fetcher.get_status())
    assert "SAFE" in text
    assert "97.1%" in text
    assert "The snapper is safe to eat" in text
    assert "Cold (ideal)" in text
    assert "No alerts" in text


def test_monitor_renders_offline_without_assessment(console):
    fetcher = DataFetcher(StaticSource([], error=RuntimeError("timeout")), FreshnessEngine())
    monitor = TerminalMonitor(fetcher, console=console)
    text = render(monitor, fetcher.get_status())
    assert "OFFLINE" in text
    assert "No assessment available yet" in text
    assert "ERROR: timeout" in text


def test_run_once_without_watch(history, console):
    monitor = TerminalMonitor(DataFetcher(StaticSource(history), FreshnessEngine()), console=console)
    monitor.run(0, watch=False)
    assert "SAFE" in console.export_text()


# =============================================================================
# ENTRY POINT
# =============================================================================

def test_main_with_simulated_readings(config_file):
    path = config_file("log_level: WARNING\ndummy: {enabled: true, history: 5, seed: 2}\n")
    assert main(["--config", str(path)]) == 0


def test_main_with_missing_config(tmp_path):
    assert main(["--config", str(tmp_path / "config-nope.yaml")]) == 1


def test_main_with_invalid_yaml(config_file):
    path = config_file("sheet: [unclosed\n")
    assert main(["--config", str(path)]) == 1


def test_main_with_bad_profile(config_file):
    path = config_file("dummy: {enabled: true}\nprofile: {name: nonsense}\n")
    assert main(["--config", str(path)]) == 1
