"""Sequence the coverage stages: test, merge, discover, report.

Each stage blocks until its external tool exits and raises on failure, so a
:class:`~covgate.core.report.CoverageReport` is only produced when every stage
succeeded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from covgate.core.artifacts import ArtifactStore
from covgate.core.discover import discover_test_binaries
from covgate.core.merge import merge_profiles
from covgate.core.process import SubprocessRunner
from covgate.core.report import generate_report
from covgate.core.runner import run_instrumented_tests

if TYPE_CHECKING:  # pragma: no cover
    from covgate.core.config import RunConfiguration
    from covgate.core.process import ProcessRunner
    from covgate.core.report import CoverageReport, Echo


def run_pipeline(
    config: RunConfiguration,
    runner: ProcessRunner | None = None,
    *,
    echo: Echo | None = None,
) -> CoverageReport:
    runner = runner or SubprocessRunner()
    store = ArtifactStore.from_config(config)

    run_instrumented_tests(config, runner)
    merge_profiles(config, store, runner)
    binaries = discover_test_binaries(config, runner)
    return generate_report(config, binaries, runner, echo=echo)


__all__ = ["run_pipeline"]
