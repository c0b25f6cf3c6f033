"""Thin seam around external process execution.

Every stage of the pipeline talks to the outside world through a
:class:`ProcessRunner`, so tests can substitute a scripted fake for real
``cargo``/LLVM invocations.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from covgate import logger
from covgate.errors import ToolInvocationError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping, Sequence
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and captured streams of one finished command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner(Protocol):
    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run *args* in *cwd* with *env* layered over the inherited environment."""
        ...


class SubprocessRunner:
    """:class:`ProcessRunner` backed by :func:`subprocess.run`; blocks without timeout."""

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        argv = tuple(args)
        logger.debug("running %s (cwd=%s)", " ".join(argv), cwd)
        child_env = {**os.environ, **env} if env else None
        try:
            proc = subprocess.run(  # noqa: S603 - argv is built from configured tool names
                argv,
                cwd=cwd,
                env=child_env,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ToolInvocationError(
                f"failed to run {argv[0]}",
                argv,
                returncode=None,
                stderr=str(exc),
            ) from exc
        return CommandResult(argv, proc.returncode, proc.stdout, proc.stderr)


def ensure_success(stage: str, result: CommandResult) -> CommandResult:
    """Return *result* unchanged, or raise :class:`ToolInvocationError` on non-zero exit."""
    if not result.ok:
        raise ToolInvocationError(
            stage,
            result.args,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return result


__all__ = ["CommandResult", "ProcessRunner", "SubprocessRunner", "ensure_success"]
