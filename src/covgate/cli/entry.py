"""Definition of the command line interface."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from covgate import __version__
from covgate.cli.errors import EXIT_OK, EXIT_THRESHOLD
from covgate.cli.util import _configure_runtime, exit_code_for
from covgate.core import SubprocessRunner, build_run_configuration, evaluate, run_pipeline
from covgate.errors import CovgateError
from covgate.output import render_gate_summary


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:  # noqa: FBT001
    if not value or ctx.resilient_parsing:
        return
    click.echo(__version__)
    ctx.exit(EXIT_OK)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "project_dir",
    required=False,
    default=".",
    type=click.Path(path_type=Path, exists=True, file_okay=False),
)
# thresholds
@click.option(
    "--min-line-coverage",
    type=click.FloatRange(0.0, 1.0),
    metavar="FRACTION",
    help="Minimum line coverage, 0-1 [default: Cargo metadata or 1.0]",
)
@click.option(
    "--min-branch-coverage",
    type=click.FloatRange(0.0, 1.0),
    metavar="FRACTION",
    help="Minimum branch coverage, 0-1 [default: Cargo metadata or 1.0]",
)
# artifacts / tools
@click.option(
    "--artifact-dir",
    type=click.Path(path_type=Path, file_okay=False),
    help="Directory for the merged profile, relative to PROJECT_DIR [default: .profdata]",
)
@click.option("--cargo", "cargo_cmd", metavar="CMD", help="Cargo executable [default: cargo]")
@click.option("--profdata-tool", metavar="CMD", help="Profile merge tool [default: rust-profdata]")
@click.option("--cov-tool", metavar="CMD", help="Coverage report tool [default: rust-cov]")
# output
@click.option("--summary/--no-summary", "show_summary", default=True, help="Print the gate summary table")
@click.option(
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Show the version and exit",
)
@click.option("--debug", is_flag=True, help="Show full tracebacks for errors")
@click.option("-q", "--quiet", is_flag=True, help="Suppress INFO logs, emit only errors")
@click.option("-v", "--verbose", is_flag=True, help="Emit diagnostic logging")
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    project_dir: Path,
    min_line_coverage: float | None,
    min_branch_coverage: float | None,
    artifact_dir: Path | None,
    cargo_cmd: str | None,
    profdata_tool: str | None,
    cov_tool: str | None,
    show_summary: bool,
    debug: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Run a Cargo project's tests under coverage and fail below the minimums.

    PROJECT_DIR is the path to the Cargo project. Defaults to the current working directory.
    """
    _configure_runtime(quiet=quiet, verbose=verbose, debug=debug)

    # ctx.obj lets callers (and tests) supply their own process runner
    runner = ctx.obj if ctx.obj is not None else SubprocessRunner()

    try:
        config = build_run_configuration(
            project_dir,
            min_line_coverage=min_line_coverage,
            min_branch_coverage=min_branch_coverage,
            artifact_dir=artifact_dir,
            cargo=cargo_cmd,
            profdata=profdata_tool,
            cov=cov_tool,
        )
        report = run_pipeline(config, runner, echo=click.echo)
    except CovgateError as e:
        click.echo(f"ERROR: {e}", err=True)
        if debug:
            raise
        sys.exit(exit_code_for(e))

    result = evaluate(report, config)

    if show_summary and not quiet:
        click.echo(render_gate_summary(report, config, result, color=sys.stdout.isatty()))

    for failure in result.failures:
        click.echo(failure.message, err=True)
    if not result.passed:
        sys.exit(EXIT_THRESHOLD)

    click.echo("SUCCESS - All coverage requirements met")


def main() -> None:
    cli()
