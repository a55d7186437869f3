from __future__ import annotations

import pytest

from gridcoder.levels.catalog import BASE_LEGEND
from gridcoder.models import Criterion, LevelDefinition, LevelMap, RuleCriterion, StateCriterion


def build_level(rows: list[str], tests: tuple[Criterion, ...] = (), level_id: str = "test-level") -> LevelDefinition:
    return LevelDefinition(
        id=level_id,
        title="Test level",
        story="",
        map=LevelMap(rows=len(rows), cols=len(rows[0]), tiles=tuple(rows), legend=dict(BASE_LEGEND)),
        goals=(),
        api=(),
        teaching=(),
        starter_code="",
        tests=tests,
        hints=("first", "second"),
        solution="",
    )


def open_grid(player: tuple[int, int], extras: dict[tuple[int, int], str] | None = None, size: int = 10) -> list[str]:
    cells = [["." for _ in range(size)] for _ in range(size)]
    cells[player[1]][player[0]] = "P"
    for (x, y), char in (extras or {}).items():
        cells[y][x] = char
    return ["".join(row) for row in cells]


@pytest.fixture
def coin_level() -> LevelDefinition:
    """10x10 open grid, hero at (2,5), coin at (3,5)."""
    return build_level(
        open_grid((2, 5), {(3, 5): "C"}),
        tests=(StateCriterion(must_have={"collected_coins": 1}), RuleCriterion(name="no_collision")),
    )


@pytest.fixture
def door_level() -> LevelDefinition:
    """Hero at (0,0), key at (1,0), door at (2,0); the door must end up open."""
    return build_level(
        ["PKD.", "....", "...."],
        tests=(StateCriterion(must_have={"opened_door": True}),),
    )
