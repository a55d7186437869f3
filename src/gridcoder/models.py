from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal


class TileKind(str, Enum):
    """Semantic meaning of one legend character."""

    EMPTY = "empty"
    WALL = "wall"
    COIN = "coin"
    DOOR = "door"
    KEY = "key"
    PLAYER = "player"
    HAZARD = "hazard"


class LogKind(str, Enum):
    info = "info"
    error = "error"
    success = "success"


class FaultKind(str, Enum):
    """Why a run ended abnormally."""

    script = "script"
    timeout = "timeout"
    stopped = "stopped"
    level = "level"


@dataclass(frozen=True, slots=True)
class LogEntry:
    kind: LogKind
    message: str
    line: int | None = None


@dataclass(frozen=True, slots=True)
class RunResult:
    success: bool
    message: str | None = None
    log: tuple[LogEntry, ...] = ()
    goals_completed: tuple[bool, ...] = ()
    fault: FaultKind | None = None


@dataclass(frozen=True, slots=True)
class StateCriterion:
    """Snapshot fields that must deep-equal the expected values at the end of a run."""

    must_have: dict[str, Any]
    type: Literal["state"] = "state"
    at: Literal["end"] = "end"


@dataclass(frozen=True, slots=True)
class RuleCriterion:
    """Named check over the snapshot or the script text."""

    name: str
    value: bool = True
    type: Literal["rule"] = "rule"


Criterion = StateCriterion | RuleCriterion


@dataclass(frozen=True, slots=True)
class LevelMap:
    rows: int
    cols: int
    tiles: tuple[str, ...]
    legend: dict[str, TileKind]


@dataclass(frozen=True, slots=True)
class LevelDefinition:
    id: str
    title: str
    story: str
    map: LevelMap
    goals: tuple[str, ...]
    api: tuple[str, ...]
    teaching: tuple[str, ...]
    starter_code: str
    tests: tuple[Criterion, ...]
    hints: tuple[str, ...]
    solution: str
    hero_stars: tuple[str, ...] = field(default_factory=tuple)
