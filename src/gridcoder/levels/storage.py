"""JSON export/import of level collections."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from gridcoder.models import LevelDefinition, TileKind

_LEVELS_ADAPTER: TypeAdapter[tuple[LevelDefinition, ...]] = TypeAdapter(tuple[LevelDefinition, ...])


class LevelFormatError(ValueError):
    """Raised when serialized level data does not describe valid levels."""


def dump_levels(levels: Iterable[LevelDefinition]) -> str:
    return _LEVELS_ADAPTER.dump_json(tuple(levels), indent=2).decode("utf-8")


def load_levels(text: str | bytes) -> tuple[LevelDefinition, ...]:
    try:
        levels = _LEVELS_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise LevelFormatError(f"Invalid level data: {exc}") from exc
    _check_levels(levels)
    return levels


def export_levels(levels: Iterable[LevelDefinition], file_path: str | Path) -> Path:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_levels(levels), encoding="utf-8")
    return path


def import_levels(file_path: str | Path) -> tuple[LevelDefinition, ...]:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Level file not found: {path}")
    return load_levels(path.read_text(encoding="utf-8"))


def import_summary(levels: Iterable[LevelDefinition]) -> list[dict]:
    return [{"id": level.id, "goals": len(level.goals)} for level in levels]


def write_summary(levels: Iterable[LevelDefinition], file_path: str | Path) -> Path:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(import_summary(levels), indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def _check_levels(levels: tuple[LevelDefinition, ...]) -> None:
    seen: set[str] = set()
    for level in levels:
        if not level.id:
            raise LevelFormatError("Level without an id")
        if level.id in seen:
            raise LevelFormatError(f"Duplicate level id: {level.id}")
        seen.add(level.id)

        grid = level.map
        if len(grid.tiles) != grid.rows or any(len(row) != grid.cols for row in grid.tiles):
            raise LevelFormatError(f"Map of {level.id} does not match {grid.cols}x{grid.rows}")

        starts = sum(1 for row in grid.tiles for char in row if grid.legend.get(char) is TileKind.PLAYER)
        if starts != 1:
            raise LevelFormatError(f"Map of {level.id} needs exactly one player tile, found {starts}")
