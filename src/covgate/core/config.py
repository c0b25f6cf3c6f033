"""Central configuration and constants for ``covgate``.

Run settings come from three places, in decreasing priority: explicit CLI
options, the ``[package.metadata.covgate]`` (or ``[workspace.metadata.covgate]``)
table of the project's ``Cargo.toml``, and the defaults below.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from covgate import logger
from covgate.errors import ConfigurationError

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

DEFAULT_MIN_LINE_COVERAGE = 1.0
DEFAULT_MIN_BRANCH_COVERAGE = 1.0

PROFDATA_DIR = ".profdata"
PROFDATA_FILE = "unittest.profdata"

# Raw profiles written by instrumented processes: ``default_<hash>_<n>.profraw``.
FRAGMENT_PREFIX = "default"
FRAGMENT_SUFFIX = ".profraw"
FRAGMENT_PATTERN = f"{FRAGMENT_PREFIX}*{FRAGMENT_SUFFIX}"

INSTRUMENT_ENV_VAR = "RUSTFLAGS"
INSTRUMENT_FLAGS = "-C instrument-coverage"

DEFAULT_IGNORE_FILENAME_REGEX = "/.cargo/registry"

METADATA_TABLE = "covgate"


def instrumentation_env() -> dict[str, str]:
    """Return the environment overrides shared by every instrumented cargo call.

    The test run and the binary discovery must build with identical flags, otherwise
    cargo rebuilds the test binaries and the merged profile no longer matches them.
    """
    return {INSTRUMENT_ENV_VAR: INSTRUMENT_FLAGS}


@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Names of the external programs the pipeline drives."""

    cargo: str = "cargo"
    profdata: str = "rust-profdata"
    cov: str = "rust-cov"
    ignore_filename_regex: str = DEFAULT_IGNORE_FILENAME_REGEX


@dataclass(frozen=True, slots=True)
class RunConfiguration:
    """Settings for one gate run; built once and shared by every stage."""

    project_root: Path
    artifact_dir: Path
    min_line_coverage: float = DEFAULT_MIN_LINE_COVERAGE
    min_branch_coverage: float = DEFAULT_MIN_BRANCH_COVERAGE
    tools: ToolConfig = field(default_factory=ToolConfig)

    def __post_init__(self) -> None:
        for name in ("min_line_coverage", "min_branch_coverage"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"{name} must be a fraction in [0, 1], got {value}"
                raise ConfigurationError(msg)
        if self.project_root not in self.artifact_dir.parents:
            msg = (
                f"artifact directory {self.artifact_dir} must be a subdirectory of "
                f"the project root {self.project_root}"
            )
            raise ConfigurationError(msg)

    @property
    def profile_path(self) -> Path:
        """Location of the merged profile inside the artifact directory."""
        return self.artifact_dir / PROFDATA_FILE


def load_cargo_metadata(project_root: Path) -> dict[str, Any]:
    """Return the ``covgate`` metadata table from ``Cargo.toml`` (empty if absent)."""
    manifest = project_root / "Cargo.toml"
    if not manifest.is_file():
        return {}
    try:
        with manifest.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", manifest, e)
        return {}

    for table in ("package", "workspace"):
        section = data.get(table)
        metadata = section.get("metadata") if isinstance(section, dict) else None
        settings = metadata.get(METADATA_TABLE) if isinstance(metadata, dict) else None
        if isinstance(settings, dict):
            logger.info("Using settings from %s [%s.metadata.%s]", manifest, table, METADATA_TABLE)
            return settings
    return {}


def _fraction_setting(settings: dict[str, Any], key: str, default: float) -> float:
    value = settings.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"Cargo metadata {key!r} must be a number, got {value!r}"
        raise ConfigurationError(msg)
    return float(value)


def build_run_configuration(
    project_root: Path,
    *,
    min_line_coverage: float | None = None,
    min_branch_coverage: float | None = None,
    artifact_dir: Path | None = None,
    cargo: str | None = None,
    profdata: str | None = None,
    cov: str | None = None,
) -> RunConfiguration:
    """Merge explicit options with Cargo metadata and defaults."""
    root = project_root.resolve()
    settings = load_cargo_metadata(root)

    if min_line_coverage is None:
        min_line_coverage = _fraction_setting(settings, "min-line-coverage", DEFAULT_MIN_LINE_COVERAGE)
    if min_branch_coverage is None:
        min_branch_coverage = _fraction_setting(
            settings, "min-branch-coverage", DEFAULT_MIN_BRANCH_COVERAGE
        )

    ignore = settings.get("ignore-filename-regex", DEFAULT_IGNORE_FILENAME_REGEX)
    if not isinstance(ignore, str):
        msg = f"Cargo metadata 'ignore-filename-regex' must be a string, got {ignore!r}"
        raise ConfigurationError(msg)

    defaults = ToolConfig()
    tools = ToolConfig(
        cargo=cargo or defaults.cargo,
        profdata=profdata or defaults.profdata,
        cov=cov or defaults.cov,
        ignore_filename_regex=ignore,
    )
    return RunConfiguration(
        project_root=root,
        artifact_dir=(root / (artifact_dir or PROFDATA_DIR)).resolve(),
        min_line_coverage=min_line_coverage,
        min_branch_coverage=min_branch_coverage,
        tools=tools,
    )


__all__ = [
    "DEFAULT_IGNORE_FILENAME_REGEX",
    "DEFAULT_MIN_BRANCH_COVERAGE",
    "DEFAULT_MIN_LINE_COVERAGE",
    "FRAGMENT_PATTERN",
    "FRAGMENT_PREFIX",
    "FRAGMENT_SUFFIX",
    "INSTRUMENT_ENV_VAR",
    "INSTRUMENT_FLAGS",
    "LOG_FORMAT",
    "PROFDATA_DIR",
    "PROFDATA_FILE",
    "RunConfiguration",
    "ToolConfig",
    "build_run_configuration",
    "instrumentation_env",
    "load_cargo_metadata",
]
