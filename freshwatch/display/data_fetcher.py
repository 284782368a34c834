"""
Data Fetcher for the freshness display.
Pulls the reading history from a record source and runs it through the engine.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from freshwatch.collector.readers.base import RecordSource
from freshwatch.engine import CombinedAssessment, FreshnessEngine
from freshwatch.exposure import ExposureAccumulator
from freshwatch.shared.models import SensorReading

logger = logging.getLogger(__name__)


@dataclass
class MonitorStatus:
    """Everything the terminal monitor needs for one refresh"""
    source_connected: bool
    assessment: Optional[CombinedAssessment]
    latest: Optional[SensorReading]
    reading_count: int
    fetched_at: datetime
    error: Optional[str] = None
    alerts: List[str] = field(default_factory=list)


class DataFetcher:
    """Fetches readings and evaluates them with graceful error handling"""

    def __init__(
        self,
        source: RecordSource,
        engine: FreshnessEngine,
        accumulator: Optional[ExposureAccumulator] = None,
    ):
        self.source = source
        self.engine = engine
        self.accumulator = accumulator
        self.last_successful_fetch: Optional[datetime] = None
        self.cached_status: Optional[MonitorStatus] = None

    def get_status(self) -> MonitorStatus:
        """Get current status; falls back to the last good one on errors"""
        try:
            return self._fetch_current_status()
        except Exception as e:
            logger.error(f"Failed to fetch readings: {e}")
            return self._get_fallback_status(str(e))

    def _fetch_current_status(self) -> MonitorStatus:
        readings = self.source.get_readings()
        assessment = self.engine.evaluate_history(readings, self.accumulator)

        status = MonitorStatus(
            source_connected=True,
            assessment=assessment,
            latest=readings[-1] if readings else None,
            reading_count=len(readings),
            fetched_at=datetime.now(),
            alerts=self._generate_alerts(readings, assessment),
        )

        self.last_successful_fetch = status.fetched_at
        self.cached_status = status
        return status

    def _get_fallback_status(self, error: str) -> MonitorStatus:
        """Keep showing the last assessment, flagged as stale"""
        cached = self.cached_status
        alerts = [f"ERROR: {error}"]
        if self.last_successful_fetch:
            alerts.append(f"WARNING: showing data from {self.last_successful_fetch:%H:%M:%S}")
        return MonitorStatus(
            source_connected=False,
            assessment=cached.assessment if cached else None,
            latest=cached.latest if cached else None,
            reading_count=cached.reading_count if cached else 0,
            fetched_at=datetime.now(),
            error=error,
            alerts=alerts,
        )

    def _generate_alerts(self, readings: List[SensorReading], assessment: CombinedAssessment) -> List[str]:
        alerts = []
        if not readings:
            alerts.append("WARNING: no readings available, showing cautious defaults")
        if assessment.exposure_forced and self.accumulator is not None:
            alerts.append(f"ERROR: temperature exposure limit exceeded ({self.accumulator.describe()})")
        for name, metric in assessment.per_metric.items():
            if metric.value is None:
                alerts.append(f"WARNING: no {name} reading in latest row")
            if metric.overridden:
                alerts.append(f"WARNING: {name} downgraded to {metric.label.display_name} by status label")
        return alerts
