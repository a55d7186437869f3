from __future__ import annotations

from conftest import build_level, open_grid
from gridcoder.command_api import COMMAND_NAMES, CommandApi
from gridcoder.models import LogEntry, LogKind
from gridcoder.world import UP, Vector, WorldEngine


def _bound(rows: list[str]) -> tuple[WorldEngine, list[LogEntry], dict]:
    engine = WorldEngine()
    engine.load(build_level(rows))
    log: list[LogEntry] = []
    return engine, log, CommandApi(engine, log).bindings()


def test_vocabulary_is_fixed() -> None:
    _, _, bindings = _bound(open_grid((1, 1)))

    assert tuple(bindings) == COMMAND_NAMES


def test_each_mutating_verb_appends_exactly_one_entry() -> None:
    engine, log, api = _bound(["P#C.", "....", "...."])

    api["move_right"]()
    assert len(log) == 1 and log[-1].kind is LogKind.error
    api["move_down"]()
    assert len(log) == 2
    api["pick"]()
    assert len(log) == 3 and log[-1].message == "There is no item here."
    api["open"]()
    assert len(log) == 4
    api["say"]("hello")
    assert len(log) == 5 and log[-1] == LogEntry(LogKind.info, "Hero says: hello")
    assert engine.snapshot().events[-1] == "say:hello"


def test_sensing_does_not_log() -> None:
    engine, log, api = _bound(["P#C.", "....", "...."])

    assert api["is_wall_ahead"]() is True
    assert api["see_item"]("right") is False
    assert api["at_goal"]() is False
    assert log == []


def test_turns_log_and_change_facing() -> None:
    engine, log, api = _bound(open_grid((1, 1)))

    api["turn_left"]()

    assert engine.facing == UP
    assert log == [LogEntry(LogKind.info, "Turned left")]
    assert engine.snapshot().actor.position == Vector(1, 1)


def test_print_joins_values_and_skips_blank_output() -> None:
    _, log, api = _bound(open_grid((1, 1)))

    api["print"]("coins:", 3)
    api["print"]()
    api["print"]("a", "b", sep="-")
    api["print"]("no newline", end="")
    api["print"]("next", end=" | ")

    assert [entry.message for entry in log] == ["coins: 3", "a-b", "no newline", "next"]
