from collections.abc import Callable

import pytest
from helpers import FakeRunner, failed

from covgate.core.config import RunConfiguration
from covgate.core.pipeline import run_pipeline
from covgate.errors import CovgateError, ToolInvocationError


def test_full_pipeline_produces_report(
    run_config: RunConfiguration, scripted_runner: Callable[..., FakeRunner]
) -> None:
    runner = scripted_runner()
    report = run_pipeline(run_config, runner)

    assert report.line_coverage == pytest.approx(0.96)
    assert report.branch_coverage == pytest.approx(0.9667)
    assert [args[:3] for args in runner.commands()] == [
        ("cargo", "test"),
        ("rust-profdata", "merge", "-sparse"),
        ("cargo", "test", "--no-run"),
        ("rust-cov", "report", "--use-color"),
    ]
    assert runner.commands()[-1][-2:] == ("--object", "/tmp/target/debug/deps/crate-abc")


def test_pipeline_leaves_no_fragments_and_a_fresh_profile(
    run_config: RunConfiguration, scripted_runner: Callable[..., FakeRunner]
) -> None:
    run_config.artifact_dir.mkdir()
    (run_config.artifact_dir / "leftover.profdata").write_bytes(b"stale")

    fragments = ("default_1.profraw", "default_2.profraw", "default_3.profraw")
    run_pipeline(run_config, scripted_runner(fragments=fragments))

    assert list(run_config.project_root.glob("default*.profraw")) == []
    assert sorted(p.name for p in run_config.artifact_dir.iterdir()) == ["unittest.profdata"]


def test_pipeline_runs_twice_in_a_row(
    run_config: RunConfiguration, scripted_runner: Callable[..., FakeRunner]
) -> None:
    first = run_pipeline(run_config, scripted_runner())
    second = run_pipeline(run_config, scripted_runner())
    assert first == second


@pytest.mark.parametrize(
    ("failing", "reached"),
    [
        (("cargo", "test"), 1),
        (("rust-profdata", "merge"), 2),
        (("cargo", "test", "--no-run"), 3),
        (("rust-cov", "report"), 4),
    ],
)
def test_stage_failure_aborts_before_gate(
    run_config: RunConfiguration,
    scripted_runner: Callable[..., FakeRunner],
    failing: tuple[str, ...],
    reached: int,
) -> None:
    runner = scripted_runner()
    runner.on(*failing, result=failed(stderr="boom", returncode=1))

    with pytest.raises(ToolInvocationError):
        run_pipeline(run_config, runner)

    assert len(runner.calls) == reached


def test_parse_failure_propagates(
    run_config: RunConfiguration, scripted_runner: Callable[..., FakeRunner]
) -> None:
    runner = scripted_runner(report="error: nothing to report\n")
    with pytest.raises(CovgateError, match="couldn't find coverage percentages"):
        run_pipeline(run_config, runner)
