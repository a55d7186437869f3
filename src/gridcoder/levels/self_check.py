"""Regression gate: every bundled reference solution must pass its own level."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from gridcoder.models import LevelDefinition, RunResult
from gridcoder.script_runtime import ScriptRuntime


@dataclass(slots=True)
class SolutionCheck:
    level_id: str
    result: RunResult

    @property
    def passed(self) -> bool:
        return self.result.success


def check_reference_solutions(
    levels: Iterable[LevelDefinition],
    runtime: ScriptRuntime,
    *,
    stop_on_failure: bool = False,
) -> list[SolutionCheck]:
    checks: list[SolutionCheck] = []
    for level in levels:
        check = SolutionCheck(level_id=level.id, result=runtime.run(level, level.solution))
        checks.append(check)
        if stop_on_failure and not check.passed:
            break
    return checks
