"""Locate the instrumented test binaries that belong to the merged profile."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from covgate import logger
from covgate.core.config import instrumentation_env
from covgate.core.process import ensure_success
from covgate.errors import BuildEventParseError

if TYPE_CHECKING:  # pragma: no cover
    from covgate.core.config import RunConfiguration
    from covgate.core.process import ProcessRunner


def _is_test_profile(event: Any) -> bool:
    if not isinstance(event, dict):
        return False
    profile = event.get("profile")
    return isinstance(profile, dict) and profile.get("test") is True


def parse_build_events(stdout: str) -> list[str]:
    """Return the executables of test-profile artifacts in a cargo JSON message stream.

    Every line must be a JSON value; a blank or malformed line is fatal. Events that
    are not test-profile artifacts are skipped; paths are kept in first-seen order
    without duplicates.
    """
    binaries: list[str] = []
    seen: set[str] = set()
    for lineno, line in enumerate(stdout.splitlines(), start=1):
        try:
            event = json.loads(line)
        except json.JSONDecodeError as exc:
            msg = f"unable to parse output as JSON (line {lineno}): {line!r}"
            raise BuildEventParseError(msg) from exc

        if not _is_test_profile(event):
            continue

        filenames = event.get("filenames")
        if not isinstance(filenames, list):
            msg = f"filenames was not an array (line {lineno}): {filenames!r}"
            raise BuildEventParseError(msg)
        for filename in filenames:
            if not isinstance(filename, str):
                msg = f"filename was not a string (line {lineno}): {filename!r}"
                raise BuildEventParseError(msg)
            if filename not in seen:
                seen.add(filename)
                binaries.append(filename)
    return binaries


def discover_test_binaries(config: RunConfiguration, runner: ProcessRunner) -> list[str]:
    """Rebuild the tests without running them and collect the test executables.

    Uses the same instrumentation environment as the test run so cargo reuses the
    binaries that produced the raw profiles.
    """
    logger.info("discovering instrumented test binaries")
    result = runner.run(
        [config.tools.cargo, "test", "--no-run", "--message-format=json"],
        cwd=config.project_root,
        env=instrumentation_env(),
    )
    ensure_success(f"{config.tools.cargo} command failed", result)

    binaries = parse_build_events(result.stdout)
    logger.debug("found %d test binaries", len(binaries))
    return binaries


__all__ = ["discover_test_binaries", "parse_build_events"]
