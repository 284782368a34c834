"""
Terminal Monitor for the freshness display.
Full-screen terminal view of the latest assessment using Rich.
"""

import logging
import time
from datetime import datetime
from typing import Optional

from rich.align import Align
from rich.console import Console
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from freshwatch.engine import CombinedAssessment, FreshnessLabel, TemperatureState, Verdict
from .data_fetcher import DataFetcher, MonitorStatus

logger = logging.getLogger(__name__)

VERDICT_STYLES = {
    Verdict.SAFE: "bold green",
    Verdict.REHEAT_REQUIRED: "bold yellow",
    Verdict.NOT_RECOMMENDED: "bold red",
    Verdict.UNFIT: "bold white on red",
}

LABEL_STYLES = {
    FreshnessLabel.FRESH: "green",
    FreshnessLabel.SLIGHTLY_DEGRADED: "yellow",
    FreshnessLabel.NOT_FRESH: "red",
    FreshnessLabel.UNFIT: "bold red",
}

TEMPERATURE_STYLES = {
    TemperatureState.COLD: ("Cold (ideal)", "cyan"),
    TemperatureState.NEUTRAL: ("Neutral", "white"),
    TemperatureState.HOT: ("Hot (high)", "red"),
}

BAR_WIDTH = 40


def score_bar(score: float, verdict: Verdict) -> Text:
    filled = int(round(BAR_WIDTH * max(0.0, min(100.0, score)) / 100))
    bar = Text()
    bar.append("█" * filled, style=VERDICT_STYLES[verdict])
    bar.append("░" * (BAR_WIDTH - filled), style="dim")
    bar.append(f" {score:.1f}%", style="bold")
    return bar


class TerminalMonitor:
    """Terminal-based display of the freshness assessment using Rich"""

    def __init__(self, data_fetcher: DataFetcher, console: Optional[Console] = None, title: str = "FISH FRESHNESS MONITOR"):
        self.data_fetcher = data_fetcher
        self.console = console or Console()
        self.title = title

    def update_display(self):
        """Fetch, evaluate and redraw"""
        try:
            status = self.data_fetcher.get_status()
            layout = self.create_layout(status)
            self.console.clear()
            self.console.print(layout)
        except Exception as e:
            logger.error(f"Display update failed: {e}")
            self._show_error_display(str(e))

    def run(self, interval: float, watch: bool = True):
        """Redraw every ``interval`` seconds until interrupted (once if not watching)"""
        while True:
            self.update_display()
            if not watch:
                return
            time.sleep(interval)

    def create_layout(self, status: MonitorStatus) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="verdict", size=7),
            Layout(name="body"),
        )
        layout["body"].split_row(
            Layout(name="metrics"),
            Layout(name="alerts"),
        )

        layout["header"].update(self._create_header(status))
        layout["verdict"].update(self._create_verdict_panel(status.assessment))
        layout["metrics"].update(self._create_metrics_panel(status.assessment))
        layout["alerts"].update(self._create_alerts_panel(status))
        return layout

    def _create_header(self, status: MonitorStatus) -> Panel:
        timestamp = status.fetched_at.strftime("%Y-%m-%d %H:%M:%S")
        source_indicator = "🟢 ONLINE" if status.source_connected else "🔴 OFFLINE"

        header_text = Text()
        header_text.append(self.title, style="bold cyan")
        header_text.append(f" - {timestamp}", style="white")
        header_text.append(f" - {status.reading_count} readings", style="white")
        header_text.append(f" - SOURCE: {source_indicator}", style="green" if status.source_connected else "red")
        return Panel(Align.center(header_text), style="cyan")

    def _create_verdict_panel(self, assessment: Optional[CombinedAssessment]) -> Panel:
        if assessment is None:
            return Panel(Text("No assessment available yet", style="yellow"), title="VERDICT", style="cyan")

        content = Text()
        content.append(assessment.verdict.wire_name.upper(), style=VERDICT_STYLES[assessment.verdict])
        content.append(f"   worst label: {assessment.worst_label.display_name}", style=LABEL_STYLES[assessment.worst_label])
        content.append("\n")
        content.append_text(score_bar(assessment.overall_score, assessment.verdict))
        content.append("\n\n")
        content.append(assessment.guidance_text, style="white")
        return Panel(content, title=f"VERDICT ({assessment.profile})", style="cyan")

    def _create_metrics_panel(self, assessment: Optional[CombinedAssessment]) -> Panel:
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Metric", style="white", width=12)
        table.add_column("Value", style="white", width=9)
        table.add_column("Score", style="white", width=6)
        table.add_column("Status", width=18)
        table.add_column("Note", style="white")

        if assessment is not None:
            for name, metric in assessment.per_metric.items():
                table.add_row(
                    name.title(),
                    f"{metric.value:g}" if metric.value is not None else "---",
                    f"{metric.score:.1f}",
                    Text(metric.label.display_name + (" *" if metric.overridden else ""), style=LABEL_STYLES[metric.label]),
                    metric.note,
                )

            temp = assessment.temperature
            label, style = TEMPERATURE_STYLES[temp.state]
            table.add_row(
                "Temperature",
                f"{temp.value:.1f}°C" if temp.value is not None else "---",
                "",
                Text(label, style=style),
                "Monitoring only; does not affect the score",
            )

        return Panel(table, title="METRICS", style="cyan")

    def _create_alerts_panel(self, status: MonitorStatus) -> Panel:
        if not status.alerts:
            content = Text("✓ No alerts", style="green")
        else:
            content = Text()
            for i, alert in enumerate(status.alerts):
                if i > 0:
                    content.append("\n")
                style = "red" if alert.upper().startswith("ERROR") else "yellow"
                content.append(alert, style=f"bold {style}")
        return Panel(content, title="ALERTS", style="cyan")

    def _show_error_display(self, error_msg: str):
        try:
            self.console.clear()
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.console.print(Panel(
                Align.center(Text(f"DISPLAY ERROR - {timestamp}\n\n{error_msg}", style="bold red")),
                title="System Error",
                style="red",
            ))
        except Exception as e:
            logger.error(f"Failed to show error display: {e}")
