"""Run the coverage summarisation tool and extract the aggregate percentages.

The summary printed by ``llvm-cov report`` with ``--show-region-summary=false``
ends with a ``TOTAL`` row whose whitespace-separated fields are::

    0      1          2          3           4      5          6      7         8           9
    TOTAL  functions  missed-fn  executed%   lines  missed-ln  cover% branches  missed-br   cover%

Only :func:`parse_total_row` depends on that layout.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from rich.text import Text

from covgate import logger
from covgate.core.process import ensure_success
from covgate.errors import CoverageParseError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from covgate.core.config import RunConfiguration
    from covgate.core.process import ProcessRunner

TOTAL_MARKER = "TOTAL"
LINE_COVERAGE_FIELD = 6
BRANCH_COVERAGE_FIELD = 9
NOT_APPLICABLE = "-"
_FULL_PERCENT = 100.0


class Echo(Protocol):
    def __call__(self, message: str, *, err: bool = False) -> None: ...


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Aggregate coverage as fractions in ``[0, 1]``."""

    line_coverage: float
    branch_coverage: float
    raw_total_row: str = ""


def parse_coverage_token(token: str) -> float:
    """Convert ``"96.00%"`` to ``0.96``.

    ``"-"`` means the tool found nothing to measure and counts as full coverage.
    """
    if token == NOT_APPLICABLE:
        return 1.0
    number = token.split("%", 1)[0]
    try:
        percent = float(number)
    except ValueError as exc:
        msg = f"coverage string was not a valid float: {token!r}"
        raise CoverageParseError(msg) from exc
    if not math.isfinite(percent):
        msg = f"coverage string was not a valid float: {token!r}"
        raise CoverageParseError(msg)
    return percent / _FULL_PERCENT


def find_total_row(stdout: str) -> str:
    """Return the first line mentioning ``TOTAL``, with colour codes removed."""
    plain = Text.from_ansi(stdout).plain
    for line in plain.splitlines():
        if TOTAL_MARKER in line:
            return line
    msg = f"couldn't find coverage percentages in coverage report output:\n{stdout}"
    raise CoverageParseError(msg)


def parse_total_row(row: str) -> CoverageReport:
    fields = row.split()
    if len(fields) <= BRANCH_COVERAGE_FIELD:
        msg = (
            f"TOTAL row has {len(fields)} fields, expected at least {BRANCH_COVERAGE_FIELD + 1}: "
            f"{row!r}"
        )
        raise CoverageParseError(msg)
    return CoverageReport(
        line_coverage=parse_coverage_token(fields[LINE_COVERAGE_FIELD]),
        branch_coverage=parse_coverage_token(fields[BRANCH_COVERAGE_FIELD]),
        raw_total_row=row.strip(),
    )


def report_command(config: RunConfiguration, binaries: Sequence[str]) -> list[str]:
    args = [
        config.tools.cov,
        "report",
        "--use-color",
        "--show-region-summary=false",
        f"--ignore-filename-regex={config.tools.ignore_filename_regex}",
        "-instr-profile",
        str(config.profile_path),
    ]
    for binary in binaries:
        args.extend(["--object", binary])
    return args


def generate_report(
    config: RunConfiguration,
    binaries: Sequence[str],
    runner: ProcessRunner,
    *,
    echo: Echo | None = None,
) -> CoverageReport:
    """Summarise the merged profile against *binaries* and parse the ``TOTAL`` row.

    On success the tool's stdout and stderr are passed to *echo* before parsing so
    the full table stays visible in CI logs.
    """
    logger.info("generating coverage summary for %d test binaries", len(binaries))
    result = runner.run(report_command(config, binaries), cwd=config.project_root)
    ensure_success(f"{config.tools.cov} failed", result)

    if echo is not None:
        if result.stdout:
            echo(result.stdout)
        if result.stderr:
            echo(result.stderr, err=True)

    report = parse_total_row(find_total_row(result.stdout))
    logger.debug(
        "parsed line coverage %s, branch coverage %s",
        report.line_coverage,
        report.branch_coverage,
    )
    return report


__all__ = [
    "CoverageReport",
    "Echo",
    "find_total_row",
    "generate_report",
    "parse_coverage_token",
    "parse_total_row",
    "report_command",
]
