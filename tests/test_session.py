from __future__ import annotations

import pytest

from gridcoder.levels import LEVELS
from gridcoder.script_runtime import ScriptRuntime
from gridcoder.session import PlaySession
from gridcoder.world import Vector, WorldEngine


def _session() -> PlaySession:
    return PlaySession(runtime=ScriptRuntime(WorldEngine()), levels=LEVELS)


def test_session_starts_on_first_level() -> None:
    session = _session()

    assert session.state.level.id == LEVELS[0].id
    assert session.state.code == LEVELS[0].starter_code
    assert session.level_number == 1
    assert session.revealed_hints == ()


def test_hints_are_revealed_one_by_one_and_capped() -> None:
    session = _session()
    hints = LEVELS[0].hints

    assert session.next_hint() == hints[0]
    assert session.revealed_hints == hints[:1]
    for _ in range(len(hints) + 3):
        session.next_hint()

    assert session.revealed_hints == hints
    assert session.state.hint_step == len(hints)


def test_selecting_level_resets_code_and_hints() -> None:
    session = _session()
    session.next_hint()
    session.update_code("move_up()\n")

    state = session.select_level("lvl-006-for-loop")

    assert state.code == LEVELS[5].starter_code
    assert state.hint_step == 0
    assert session.level_number == 6
    assert session._runtime.engine.snapshot().actor.position == Vector(0, 5)


def test_select_unknown_level() -> None:
    with pytest.raises(KeyError):
        _session().select_level("missing")


def test_run_keeps_last_result_and_reset_clears_it() -> None:
    session = _session()

    result = session.run(LEVELS[0].solution)

    assert result.success is True
    assert session.state.last_result is result
    assert session.state.code == LEVELS[0].solution

    session.next_hint()
    session.reset()

    assert session.state.last_result is None
    assert session.state.hint_step == 0
    assert session._runtime.engine.snapshot().steps == 0


def test_session_needs_levels() -> None:
    with pytest.raises(ValueError):
        PlaySession(runtime=ScriptRuntime(WorldEngine()), levels=())
