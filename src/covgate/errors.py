"""Centralised exception hierarchy for covgate."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence


class CovgateError(Exception):
    """Base class for all custom covgate exceptions."""


class ToolInvocationError(CovgateError):
    """An external tool could not be spawned or exited non-zero."""

    def __init__(
        self,
        stage: str,
        args: Sequence[str],
        *,
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.stage = stage
        self.command = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"{stage}:\n{stdout}\n{stderr}")


class ParseError(CovgateError):
    """Output of an external tool did not have the expected shape."""


class BuildEventParseError(ParseError):
    """A cargo JSON build event could not be interpreted."""


class CoverageParseError(ParseError):
    """The coverage summary could not be turned into percentages."""


class ArtifactError(CovgateError):
    """Creating, listing or removing coverage artifacts failed."""


class ConfigurationError(CovgateError):
    """Thresholds or other run settings are invalid."""


__all__ = [
    "ArtifactError",
    "BuildEventParseError",
    "ConfigurationError",
    "CovgateError",
    "CoverageParseError",
    "ParseError",
    "ToolInvocationError",
]
