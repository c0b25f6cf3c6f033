"""Scripted process runner and canned tool output shared by the test modules."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from covgate.core import CommandResult

Handler = CommandResult | Callable[[tuple[str, ...], Path, dict[str, str] | None], CommandResult]

TOTAL_ROW = "TOTAL 100 0 100.00% 50 2 96.00% 30 1 96.67%"

LLVM_COV_REPORT = (
    "Filename      Functions  Missed Functions  Executed  Lines  Missed Lines  Cover   "
    "Branches  Missed Branches  Cover\n"
    "-------------------------------------------------------------------------------\n"
    "src/lib.rs          100                 0   100.00%     50             2  96.00%  "
    "      30                1  96.67%\n"
    "-------------------------------------------------------------------------------\n"
    "TOTAL               100                 0   100.00%     50             2  96.00%  "
    "      30                1  96.67%\n"
)


@dataclass(slots=True)
class Call:
    args: tuple[str, ...]
    cwd: Path
    env: dict[str, str] | None


@dataclass
class FakeRunner:
    """Scripted process runner; the longest matching argv prefix picks the response."""

    handlers: dict[tuple[str, ...], Handler] = field(default_factory=dict)
    calls: list[Call] = field(default_factory=list)

    def on(self, *prefix: str, result: Handler) -> FakeRunner:
        self.handlers[prefix] = result
        return self

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        argv = tuple(args)
        env_copy = dict(env) if env is not None else None
        self.calls.append(Call(argv, cwd, env_copy))
        matches = [p for p in self.handlers if argv[: len(p)] == p]
        if not matches:
            msg = f"unexpected command: {argv}"
            raise AssertionError(msg)
        handler = self.handlers[max(matches, key=len)]
        if isinstance(handler, CommandResult):
            return handler
        return handler(argv, cwd, env_copy)

    def commands(self) -> list[tuple[str, ...]]:
        return [call.args for call in self.calls]


def ok(stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(args=(), returncode=0, stdout=stdout, stderr=stderr)


def failed(stdout: str = "", stderr: str = "", returncode: int = 101) -> CommandResult:
    return CommandResult(args=(), returncode=returncode, stdout=stdout, stderr=stderr)


def build_events(*events: dict[str, object]) -> str:
    return "\n".join(json.dumps(event) for event in events) + "\n"
