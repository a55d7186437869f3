from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from gridcoder.levels import (
    LEVELS,
    LevelFormatError,
    check_reference_solutions,
    dump_levels,
    export_levels,
    get_level,
    import_levels,
    load_levels,
    write_summary,
)
from gridcoder.models import RuleCriterion, StateCriterion, TileKind
from gridcoder.script_runtime import ScriptRuntime
from gridcoder.world import WorldEngine


def test_round_trip_is_lossless() -> None:
    decoded = load_levels(dump_levels(LEVELS))

    assert decoded == LEVELS
    assert isinstance(decoded[6].tests[0], StateCriterion)
    assert isinstance(decoded[6].tests[1], RuleCriterion)
    assert decoded[0].map.legend["C"] is TileKind.COIN
    assert decoded[0].hero_stars == LEVELS[0].hero_stars


def test_export_then_import(tmp_path: Path) -> None:
    target = export_levels(LEVELS, tmp_path / "out" / "levels.json")

    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload[0]["id"] == "lvl-001-move-intro"
    assert payload[0]["tests"][1] == {"name": "no_collision", "value": True, "type": "rule"}
    assert import_levels(target) == LEVELS


def test_import_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        import_levels(tmp_path / "nope.json")


def test_invalid_level_data_is_rejected() -> None:
    payload = json.loads(dump_levels(LEVELS[:1]))
    del payload[0]["map"]

    with pytest.raises(LevelFormatError):
        load_levels(json.dumps(payload))


def test_unknown_tile_kind_is_rejected() -> None:
    payload = json.loads(dump_levels(LEVELS[:1]))
    payload[0]["map"]["legend"]["?"] = "lava"

    with pytest.raises(LevelFormatError):
        load_levels(json.dumps(payload))


def test_duplicate_ids_are_rejected() -> None:
    with pytest.raises(LevelFormatError, match="Duplicate"):
        load_levels(dump_levels(LEVELS[:1] * 2))


def test_map_size_mismatch_is_rejected() -> None:
    payload = json.loads(dump_levels(LEVELS[:1]))
    payload[0]["map"]["cols"] = 12

    with pytest.raises(LevelFormatError, match="does not match"):
        load_levels(json.dumps(payload))


def test_write_summary(tmp_path: Path) -> None:
    path = write_summary(LEVELS[:2], tmp_path / "summary.json")

    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"id": "lvl-001-move-intro", "goals": 2},
        {"id": "lvl-002-maze", "goals": 2},
    ]


def test_get_level() -> None:
    assert get_level("lvl-005-if").title == "Turn at the wall"
    with pytest.raises(KeyError):
        get_level("lvl-999")


@pytest.mark.parametrize("level", LEVELS, ids=lambda level: level.id)
def test_reference_solution_passes(level) -> None:
    result = ScriptRuntime(WorldEngine()).run(level, level.solution)

    assert result.success, (result.message, result.log)
    assert all(result.goals_completed)


@pytest.mark.parametrize("level", LEVELS, ids=lambda level: level.id)
def test_starter_code_does_not_pass(level) -> None:
    result = ScriptRuntime(WorldEngine()).run(level, level.starter_code)

    assert result.success is False


def test_check_reference_solutions_reports_failures() -> None:
    broken = dataclasses.replace(LEVELS[0], solution="pick()\n")

    checks = check_reference_solutions(
        (LEVELS[1], broken, LEVELS[2]), ScriptRuntime(WorldEngine()), stop_on_failure=True
    )

    assert [check.level_id for check in checks] == ["lvl-002-maze", "lvl-001-move-intro"]
    assert [check.passed for check in checks] == [True, False]


@pytest.mark.parametrize("rows", [["...."], ["P..P"]], ids=["no-start", "two-starts"])
def test_player_tile_count_is_checked(rows: list[str]) -> None:
    payload = json.loads(dump_levels(LEVELS[:1]))
    payload[0]["map"].update(rows=len(rows), cols=len(rows[0]), tiles=rows)

    with pytest.raises(LevelFormatError, match="exactly one player tile"):
        load_levels(json.dumps(payload))
