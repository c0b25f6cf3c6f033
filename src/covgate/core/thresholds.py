"""Coverage threshold evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from covgate.core.config import RunConfiguration
    from covgate.core.report import CoverageReport


def format_fraction(value: float) -> str:
    return f"{value:.6g}"


@dataclass(frozen=True, slots=True)
class ThresholdFailure:
    """Details of a failed threshold evaluation."""

    metric: str
    required: float
    actual: float

    @property
    def message(self) -> str:
        return (
            f"{self.metric.capitalize()} coverage requirement not met "
            f"({format_fraction(self.actual)} < {format_fraction(self.required)})"
        )


@dataclass(frozen=True, slots=True)
class GateResult:
    """Outcome of evaluating a report against the configured minimums."""

    passed: bool
    failures: tuple[ThresholdFailure, ...]


def evaluate(report: CoverageReport, config: RunConfiguration) -> GateResult:
    """Check line and branch coverage independently; every miss is reported."""
    checks = (
        ("line", report.line_coverage, config.min_line_coverage),
        ("branch", report.branch_coverage, config.min_branch_coverage),
    )
    failures = tuple(
        ThresholdFailure(metric=metric, required=required, actual=actual)
        for metric, actual, required in checks
        if actual < required
    )
    return GateResult(passed=not failures, failures=failures)


__all__ = ["GateResult", "ThresholdFailure", "evaluate", "format_fraction"]
