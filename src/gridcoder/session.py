"""Play-session orchestration: level selection, hints, runs and resets."""

from __future__ import annotations

from dataclasses import dataclass

from gridcoder.models import LevelDefinition, RunResult
from gridcoder.script_runtime import ScriptRuntime


@dataclass(slots=True)
class SessionState:
    level: LevelDefinition
    code: str
    hint_step: int = 0
    last_result: RunResult | None = None


class PlaySession:
    """Tracks the selected level, the learner's code and the revealed hints."""

    def __init__(self, *, runtime: ScriptRuntime, levels: tuple[LevelDefinition, ...]) -> None:
        if not levels:
            raise ValueError("A play session needs at least one level")
        self._runtime = runtime
        self._levels = levels
        self._state = SessionState(level=levels[0], code=levels[0].starter_code)
        self._enter(levels[0])

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def level_number(self) -> int:
        return self._levels.index(self._state.level) + 1

    @property
    def revealed_hints(self) -> tuple[str, ...]:
        return self._state.level.hints[: self._state.hint_step]

    def select_level(self, level_id: str) -> SessionState:
        level = next((item for item in self._levels if item.id == level_id), None)
        if level is None:
            raise KeyError(f"Unknown level id: {level_id}")
        self._enter(level)
        return self._state

    def next_hint(self) -> str | None:
        hints = self._state.level.hints
        self._state.hint_step = min(self._state.hint_step + 1, len(hints))
        return hints[self._state.hint_step - 1] if self._state.hint_step else None

    def update_code(self, code: str) -> None:
        self._state.code = code

    def run(self, code: str | None = None) -> RunResult:
        if code is not None:
            self._state.code = code
        result = self._runtime.run(self._state.level, self._state.code)
        self._state.last_result = result
        return result

    def stop(self) -> None:
        self._runtime.stop()

    def reset(self) -> None:
        self._runtime.stop()
        self._runtime.engine.reset()
        self._state.last_result = None
        self._state.hint_step = 0

    def _enter(self, level: LevelDefinition) -> None:
        self._runtime.engine.load(level)
        self._state.level = level
        self._state.code = level.starter_code
        self._state.hint_step = 0
        self._state.last_result = None
