"""Run the project's test suite with coverage instrumentation enabled."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covgate import logger
from covgate.core.config import instrumentation_env
from covgate.core.process import ensure_success

if TYPE_CHECKING:  # pragma: no cover
    from covgate.core.config import RunConfiguration
    from covgate.core.process import CommandResult, ProcessRunner


def run_instrumented_tests(config: RunConfiguration, runner: ProcessRunner) -> CommandResult:
    """Run ``cargo test`` in the project root; any non-zero exit is fatal.

    Failing tests and failing builds are not told apart: both abort the run with
    the captured output attached.
    """
    logger.info("running instrumented test suite in %s", config.project_root)
    result = runner.run(
        [config.tools.cargo, "test"],
        cwd=config.project_root,
        env=instrumentation_env(),
    )
    return ensure_success(f"{config.tools.cargo} test failed", result)


__all__ = ["run_instrumented_tests"]
