from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner
from helpers import LLVM_COV_REPORT, FakeRunner, build_events, ok

from covgate.core import CommandResult, RunConfiguration, build_run_configuration


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    project = tmp_path / "crate"
    project.mkdir()
    (project / "Cargo.toml").write_text('[package]\nname = "crate"\nversion = "0.1.0"\n', encoding="utf-8")
    return project


@pytest.fixture
def run_config(cargo_project: Path) -> RunConfiguration:
    return build_run_configuration(cargo_project, min_line_coverage=0.95, min_branch_coverage=0.90)


@pytest.fixture
def scripted_runner() -> Callable[..., FakeRunner]:
    """Build a runner that behaves like a successful cargo/LLVM toolchain."""

    def build(
        *,
        fragments: Sequence[str] = ("default_1.profraw", "default_2.profraw"),
        report: str = LLVM_COV_REPORT,
        binaries: Sequence[str] = ("/tmp/target/debug/deps/crate-abc",),
    ) -> FakeRunner:
        def cargo_test(_args: tuple[str, ...], cwd: Path, _env: dict[str, str] | None) -> CommandResult:
            for name in fragments:
                (cwd / name).write_bytes(b"raw")
            return ok(stdout="test result: ok. 3 passed")

        def profdata_merge(args: tuple[str, ...], _cwd: Path, _env: dict[str, str] | None) -> CommandResult:
            Path(args[args.index("-o") + 1]).write_bytes(b"merged")
            return ok()

        events = build_events(
            {"reason": "compiler-artifact", "profile": {"test": False}, "filenames": ["/tmp/liba.rlib"]},
            {"reason": "compiler-artifact", "profile": {"test": True}, "filenames": list(binaries)},
            {"reason": "build-finished", "success": True},
        )
        return (
            FakeRunner()
            .on("cargo", "test", result=cargo_test)
            .on("cargo", "test", "--no-run", result=ok(stdout=events))
            .on("rust-profdata", "merge", result=profdata_merge)
            .on("rust-cov", "report", result=ok(stdout=report))
        )

    return build
