"""Utilities and helper functions for implementing CLI-specific functionality."""

from __future__ import annotations

import logging

from covgate import logger
from covgate.cli.errors import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_IOERR,
    EXIT_SOFTWARE,
)
from covgate.core import LOG_FORMAT
from covgate.errors import (
    ArtifactError,
    ConfigurationError,
    CovgateError,
    ParseError,
    ToolInvocationError,
)

_EXIT_CODES: tuple[tuple[type[CovgateError], int], ...] = (
    (ConfigurationError, EXIT_CONFIG),
    (ParseError, EXIT_DATAERR),
    (ArtifactError, EXIT_IOERR),
    (ToolInvocationError, EXIT_SOFTWARE),
)


def _configure_runtime(*, quiet: bool, verbose: bool, debug: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose or debug else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    if debug:
        logger.debug("debug mode active")


def exit_code_for(error: CovgateError) -> int:
    """Map a pipeline failure onto its sysexits-style status."""
    for error_type, code in _EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return EXIT_SOFTWARE
