from covgate.cli.entry import cli, main
from covgate.cli.errors import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_IOERR,
    EXIT_OK,
    EXIT_SOFTWARE,
    EXIT_THRESHOLD,
)

__all__ = [
    "EXIT_CONFIG",
    "EXIT_DATAERR",
    "EXIT_IOERR",
    "EXIT_OK",
    "EXIT_SOFTWARE",
    "EXIT_THRESHOLD",
    "cli",
    "main",
]
