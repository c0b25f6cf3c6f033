from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from covgate.core.config import RunConfiguration
    from covgate.core.report import CoverageReport
    from covgate.core.thresholds import GateResult


def _style_percent(fraction: float, required: float) -> str:
    text = f"{fraction * 100:.2f}%"
    return f"[green]{text}[/green]" if fraction >= required else f"[red]{text}[/red]"


def _style_status(*, ok: bool) -> str:
    return "[green]pass[/green]" if ok else "[red]FAIL[/red]"


def render_gate_summary(
    report: CoverageReport,
    config: RunConfiguration,
    result: GateResult,
    *,
    color: bool = True,
) -> str:
    """Render observed vs. required coverage as a Rich table."""
    failed = {failure.metric for failure in result.failures}

    table = Table(title="Coverage Gate", box=box.SIMPLE_HEAVY, header_style="bold")
    table.add_column("Metric")
    table.add_column("Observed", justify="right")
    table.add_column("Required", justify="right")
    table.add_column("Status", justify="center")

    rows = (
        ("line", report.line_coverage, config.min_line_coverage),
        ("branch", report.branch_coverage, config.min_branch_coverage),
    )
    for metric, observed, required in rows:
        table.add_row(
            metric.capitalize(),
            _style_percent(observed, required),
            f"{required * 100:.2f}%",
            _style_status(ok=metric not in failed),
        )

    buf = StringIO()
    console = Console(file=buf, force_terminal=color, no_color=not color)
    console.print(table)
    return buf.getvalue().rstrip()


__all__ = ["render_gate_summary"]
