"""Bounded execution of one learner script against a world engine."""

from __future__ import annotations

import builtins
import logging
import sys
import time
from dataclasses import dataclass
from types import CodeType, FrameType, TracebackType
from typing import Any

from gridcoder.command_api import CommandApi
from gridcoder.diagnostics import DiagnosticTranslator
from gridcoder.evaluation import GoalEvaluator
from gridcoder.models import FaultKind, LevelDefinition, LogEntry, LogKind, RunResult
from gridcoder.world import WorldEngine

SCRIPT_FILENAME = "<script>"
STOPPED_MESSAGE = "Execution stopped."
SUCCESS_MESSAGE = "All goals completed!"

_ALLOWED_BUILTINS = (
    "abs",
    "all",
    "any",
    "bool",
    "dict",
    "divmod",
    "enumerate",
    "filter",
    "float",
    "int",
    "isinstance",
    "len",
    "list",
    "map",
    "max",
    "min",
    "range",
    "reversed",
    "round",
    "set",
    "sorted",
    "str",
    "sum",
    "tuple",
    "zip",
    "__build_class__",
    "Exception",
    "ArithmeticError",
    "AssertionError",
    "AttributeError",
    "IndexError",
    "KeyError",
    "LookupError",
    "NameError",
    "RuntimeError",
    "StopIteration",
    "TypeError",
    "ValueError",
    "ZeroDivisionError",
)


def _blocked_import(name: str, *args: Any, **kwargs: Any) -> None:
    raise ImportError(f"imports are disabled (tried to import {name!r})")


SAFE_BUILTINS: dict[str, Any] = {name: getattr(builtins, name) for name in _ALLOWED_BUILTINS}
SAFE_BUILTINS["__import__"] = _blocked_import


class ExecutionTimeout(BaseException):
    """Raised inside script frames once the execution budget is spent.

    Derives from ``BaseException`` so ``except Exception`` in a script cannot
    swallow it.
    """


@dataclass(frozen=True, slots=True)
class ExecutionBudget:
    time_limit_ms: int = 2000
    max_steps: int = 200_000


class _BudgetTracer:
    """``sys.settrace`` hook charging one step per line or call in script frames."""

    def __init__(self, budget: ExecutionBudget) -> None:
        self._budget = budget
        self._deadline = time.monotonic() + budget.time_limit_ms / 1000
        self.steps = 0

    def __call__(self, frame: FrameType, event: str, arg: Any):
        if frame.f_code.co_filename != SCRIPT_FILENAME:
            return None
        self._charge()
        return self._trace_local

    def _trace_local(self, frame: FrameType, event: str, arg: Any):
        if event == "line":
            self._charge()
        return self._trace_local

    def _charge(self) -> None:
        self.steps += 1
        if self.steps > self._budget.max_steps:
            raise ExecutionTimeout(f"timeout after {self._budget.max_steps} steps")
        if time.monotonic() > self._deadline:
            raise ExecutionTimeout(f"timeout after {self._budget.time_limit_ms} ms")


def _script_line(exc: BaseException) -> int | None:
    if isinstance(exc, SyntaxError):
        return exc.lineno if exc.filename == SCRIPT_FILENAME else None

    line: int | None = None
    tb: TracebackType | None = exc.__traceback__
    while tb is not None:
        if tb.tb_frame.f_code.co_filename == SCRIPT_FILENAME:
            line = tb.tb_lineno
        tb = tb.tb_next
    return line


def describe_fault(exc: BaseException) -> str:
    """Render an exception as raw fault text, e.g. ``NameError: ... on line 3``."""
    detail = exc.msg if isinstance(exc, SyntaxError) else str(exc)
    text = f"{type(exc).__name__}: {detail}"
    line = _script_line(exc)
    if line is not None:
        text = f"{text} on line {line}"
    return text


class ScriptRuntime:
    """Runs one learner script per call and folds every outcome into a ``RunResult``.

    ``stop()`` is cooperative: the flag is read only after the interpreter call
    returns, so it cannot interrupt a runaway loop. The execution budget does.
    """

    def __init__(
        self,
        engine: WorldEngine,
        *,
        translator: DiagnosticTranslator | None = None,
        evaluator: GoalEvaluator | None = None,
        budget: ExecutionBudget | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._engine = engine
        self._translator = translator or DiagnosticTranslator()
        self._evaluator = evaluator or GoalEvaluator()
        self._budget = budget or ExecutionBudget()
        self._logger = logger or logging.getLogger("gridcoder.script_runtime")
        self._stop_requested = False

    @property
    def engine(self) -> WorldEngine:
        return self._engine

    @property
    def budget(self) -> ExecutionBudget:
        return self._budget

    def stop(self) -> None:
        """Request cancellation; observed once the current interpreter call returns."""
        self._stop_requested = True

    def run(self, level: LevelDefinition, script: str) -> RunResult:
        self._stop_requested = False
        try:
            self._engine.load(level)
        except ValueError as exc:
            self._logger.warning("run_level_rejected", extra={"level_id": level.id, "error": str(exc)})
            return RunResult(
                success=False,
                message=str(exc),
                log=(LogEntry(LogKind.error, str(exc)),),
                goals_completed=tuple(False for _ in level.tests),
                fault=FaultKind.level,
            )
        log: list[LogEntry] = []
        namespace: dict[str, Any] = {
            "__builtins__": SAFE_BUILTINS,
            "__name__": "__main__",
            **CommandApi(self._engine, log).bindings(),
        }
        self._logger.info("run_started", extra={"level_id": level.id, "script_chars": len(script)})

        fault: FaultKind | None = None
        message: str | None = None
        try:
            code = compile(script, SCRIPT_FILENAME, "exec")
            self._execute(code, namespace)
        except ExecutionTimeout as exc:
            fault = FaultKind.timeout
            message = self._record_fault(exc, log)
        except Exception as exc:  # noqa: BLE001 - any script failure becomes a run fault.
            fault = FaultKind.script
            message = self._record_fault(exc, log)

        if self._stop_requested:
            fault = FaultKind.stopped
            message = STOPPED_MESSAGE
            log.append(LogEntry(LogKind.error, STOPPED_MESSAGE))
            self._logger.info("run_stopped", extra={"level_id": level.id})

        snapshot = self._engine.snapshot()
        goals = self._evaluator.evaluate(level.tests, snapshot, script)
        passed = fault is None and all(goals)

        if passed:
            log.append(LogEntry(LogKind.success, SUCCESS_MESSAGE))
        elif message is None:
            remaining = sum(1 for goal in goals if not goal)
            message = f"Not quite there yet. Goals remaining: {remaining}."

        self._logger.info(
            "run_finished",
            extra={
                "level_id": level.id,
                "success": passed,
                "fault": fault.value if fault else None,
                "goals": list(goals),
            },
        )
        return RunResult(
            success=passed,
            message=message,
            log=tuple(log),
            goals_completed=goals,
            fault=fault,
        )

    def _execute(self, code: CodeType, namespace: dict[str, Any]) -> None:
        tracer = _BudgetTracer(self._budget)
        previous = sys.gettrace()
        sys.settrace(tracer)
        try:
            exec(code, namespace)
        finally:
            sys.settrace(previous)

    def _record_fault(self, exc: BaseException, log: list[LogEntry]) -> str:
        raw = describe_fault(exc)
        diagnosis = self._translator.translate(raw)
        log.append(LogEntry(LogKind.error, diagnosis.message, diagnosis.line))
        self._logger.warning("run_fault", extra={"raw": raw, "line": diagnosis.line})
        return diagnosis.message
