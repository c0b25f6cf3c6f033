from covgate.core.artifacts import ArtifactStore, is_fragment_name
from covgate.core.config import (
    LOG_FORMAT,
    RunConfiguration,
    ToolConfig,
    build_run_configuration,
    instrumentation_env,
    load_cargo_metadata,
)
from covgate.core.discover import discover_test_binaries, parse_build_events
from covgate.core.merge import merge_profiles
from covgate.core.pipeline import run_pipeline
from covgate.core.process import CommandResult, ProcessRunner, SubprocessRunner, ensure_success
from covgate.core.report import (
    CoverageReport,
    find_total_row,
    generate_report,
    parse_coverage_token,
    parse_total_row,
)
from covgate.core.runner import run_instrumented_tests
from covgate.core.thresholds import GateResult, ThresholdFailure, evaluate

__all__ = [
    "LOG_FORMAT",
    "ArtifactStore",
    "CommandResult",
    "CoverageReport",
    "GateResult",
    "ProcessRunner",
    "RunConfiguration",
    "SubprocessRunner",
    "ThresholdFailure",
    "ToolConfig",
    "build_run_configuration",
    "discover_test_binaries",
    "ensure_success",
    "evaluate",
    "find_total_row",
    "generate_report",
    "instrumentation_env",
    "is_fragment_name",
    "load_cargo_metadata",
    "merge_profiles",
    "parse_build_events",
    "parse_coverage_token",
    "parse_total_row",
    "run_instrumented_tests",
    "run_pipeline",
]
