"""Rich terminal output for originscan."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from originscan.classifier import classify
from originscan.config import (
    DOMAIN_WIDTH,
    FAST_THRESHOLD_MS,
    MEDIUM_THRESHOLD_MS,
    NAME_WIDTH,
    SERVER_WIDTH,
)
from originscan.models import LatencySummary, ScanRecord, ScanReport, ScanStats

console = Console()
err_console = Console(stderr=True)


def _color_for_ms(value: float) -> str:
    """Return a Rich color name based on latency thresholds."""
    if value <= FAST_THRESHOLD_MS:
        return "green"
    elif value <= MEDIUM_THRESHOLD_MS:
        return "yellow"
    return "red"


def _fmt_ms(value: float, colorize: bool = True) -> Text:
    """Format a millisecond value with optional color."""
    text = f"{value:.1f}ms"
    if colorize:
        return Text(text, style=_color_for_ms(value))
    return Text(text)


def truncate(text: str, max_length: int) -> str:
    """Shorten *text* to *max_length* characters, ending in ``...``."""
    if len(text) > max_length:
        return text[: max_length - 3] + "..."
    return text


# ── Progress tracking ─────────────────────────────────────────────────


class ProgressTracker:
    """Live progress display for the probe pool."""

    def __init__(self, region: str, total: int):
        self.region = region
        self.total = total
        self.completed = 0
        self.live: Optional[Live] = None

    def _build_table(self) -> Table:
        table = Table(show_header=True, expand=False, border_style="dim")
        table.add_column("Region", style="bold")
        table.add_column("Progress", min_width=20)
        table.add_column("Status")

        bar_width = 30
        filled = int((self.completed / self.total) * bar_width) if self.total > 0 else 0
        bar = "[green]" + "█" * filled + "[/green]" + "[dim]░[/dim]" * (bar_width - filled)
        progress_text = f"{bar} {self.completed}/{self.total}"

        done = self.completed >= self.total
        status_text = "[green]done[/green]" if done else "[yellow]probing[/yellow]"

        table.add_row(self.region, progress_text, status_text)
        return table

    def start(self) -> None:
        self.live = Live(self._build_table(), console=err_console, refresh_per_second=4)
        self.live.start()

    def update(self, completed: int, total: int) -> None:
        self.completed = completed
        self.total = total
        if self.live:
            self.live.update(self._build_table())

    def finish(self) -> None:
        if self.live:
            self.live.stop()


# ── Result rendering ──────────────────────────────────────────────────


def build_results_table(records: list[ScanRecord]) -> Table:
    """Build the ranked origin-server table."""
    table = Table(
        show_header=True,
        border_style="bright_black",
        expand=False,
        pad_edge=True,
        header_style="bold",
    )
    table.add_column("#", justify="right", width=3, style="dim")
    table.add_column("Organization", style="bold", max_width=NAME_WIDTH + 2)
    table.add_column("Domain", max_width=DOMAIN_WIDTH + 2)
    table.add_column("Latency", justify="right", min_width=9)
    table.add_column("Server", max_width=SERVER_WIDTH + 2)
    table.add_column("Scheme", style="dim")

    for rank, r in enumerate(records, 1):
        if r.server_header:
            server = Text(truncate(r.server_header, SERVER_WIDTH))
            if classify(r.server_header) == "unknown":
                server.stylize("italic")
        else:
            server = Text("\u2014", style="dim")

        table.add_row(
            str(rank),
            Text(truncate(r.name, NAME_WIDTH)),
            Text(truncate(r.domain, DOMAIN_WIDTH)),
            _fmt_ms(r.latency_ms),
            server,
            r.scheme,
        )

    return table


def render_summary(stats: ScanStats, summary: LatencySummary) -> None:
    """Print the scan counters and latency spread below the table."""
    parts = [
        f"{stats.submitted} probed",
        f"{stats.accepted} origin",
        f"{stats.rejected_cdn} CDN",
        f"{stats.failed} unreachable",
    ]
    if stats.skipped:
        parts.append(f"{stats.skipped} without domain")
    parts.append(f"{stats.elapsed_s:.1f}s")
    console.print(f"  [dim]{' | '.join(parts)}[/dim]")

    if summary.count:
        console.print(
            f"  [dim]Latency min {summary.min:.1f}ms | median {summary.median:.1f}ms"
            f" | avg {summary.avg:.1f}ms | max {summary.max:.1f}ms[/dim]"
        )


def render_results(report: ScanReport) -> None:
    """Render the ranked results of a scan run."""
    console.print()
    if not report.records:
        console.print(
            f"[yellow]No origin servers identified among {report.candidates} "
            f"candidates in region {report.region}.[/yellow]"
        )
        render_summary(report.stats, report.summary)
        return

    console.print(
        f"[bold]Origin servers in {report.region}[/bold] "
        f"[dim](top {len(report.records)} of {report.stats.accepted}, sorted by latency)[/dim]"
    )
    console.print(build_results_table(report.records))
    render_summary(report.stats, report.summary)


def render_error(message: str) -> None:
    """Display an error message."""
    err_console.print(f"[bold red]Error:[/bold red] {message}")


def render_warning(message: str) -> None:
    """Display a warning message."""
    err_console.print(f"[yellow]Warning:[/yellow] {message}")
