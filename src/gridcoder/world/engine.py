"""Deterministic grid simulation: movement, collisions, items and doors."""

from __future__ import annotations

import logging

from gridcoder.models import LevelDefinition, LevelMap, LogEntry, LogKind, TileKind
from gridcoder.world.commands import Command, Move, Open, Pick, Say
from gridcoder.world.state import (
    DIRECTIONS,
    RIGHT,
    Actor,
    ActorState,
    Snapshot,
    Tile,
    Vector,
    direction_vector,
)

_UNIT_VECTORS = frozenset(DIRECTIONS.values())


class WorldEngine:
    """Sole owner and mutator of the world runtime state.

    Not thread-safe; one engine serves one run at a time.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("gridcoder.world.engine")
        self._level: LevelDefinition | None = None
        self._actor = Actor()
        self._tiles: list[Tile] = []
        self._facing = RIGHT
        self._collisions = 0
        self._steps = 0
        self._events: list[str] = []

    @property
    def level(self) -> LevelDefinition | None:
        return self._level

    @property
    def facing(self) -> Vector:
        return self._facing

    def load(self, level: LevelDefinition) -> None:
        """Derive a fresh runtime state from ``level``, discarding any prior mutation."""
        start: Vector | None = None
        tiles: list[Tile] = []
        for y, row in enumerate(level.map.tiles):
            for x, char in enumerate(row):
                kind = level.map.legend.get(char)
                if kind is TileKind.PLAYER:
                    start = Vector(x, y)
                elif kind is not None and kind not in (TileKind.EMPTY, TileKind.WALL):
                    tiles.append(Tile(kind=kind, position=Vector(x, y)))

        if start is None:
            raise ValueError(f"Level {level.id!r} has no player start tile")

        self._level = level
        self._tiles = tiles
        self._actor = Actor(position=start)
        self._facing = RIGHT
        self._collisions = 0
        self._steps = 0
        self._events = []
        self._logger.debug("level_loaded", extra={"level_id": level.id, "entities": len(tiles)})

    def reset(self) -> None:
        if self._level is None:
            return
        self.load(self._level)

    def dispatch(self, command: Command) -> LogEntry | None:
        """Apply one command and describe its outcome."""
        match command:
            case Move(direction=direction):
                return self._move(direction)
            case Pick():
                return self._pick()
            case Open():
                return self._open()
            case Say(text=text):
                self.say(text)
                return LogEntry(LogKind.info, f"Hero says: {text}")
            case _:
                return None

    def say(self, text: str) -> None:
        self._actor.message = text
        self._events.append(f"say:{text}")

    def is_wall_at(self, position: Vector) -> bool:
        grid = self._level.map if self._level else None
        if grid is None or not _in_bounds(grid, position):
            return True
        return grid.legend.get(grid.tiles[position.y][position.x]) is TileKind.WALL

    def is_wall_ahead(self) -> bool:
        return self.is_wall_at(self._actor.position + self._facing)

    def see_item(self, direction: str) -> bool:
        target = self._actor.position + direction_vector(direction)
        return any(
            tile.position == target
            and not tile.collected
            and not tile.opened
            and tile.kind in (TileKind.COIN, TileKind.KEY, TileKind.DOOR)
            for tile in self._tiles
        )

    def at_goal(self) -> bool:
        return any(
            tile.kind is TileKind.DOOR and tile.position == self._actor.position for tile in self._tiles
        )

    def turn_left(self) -> None:
        self._facing = Vector(self._facing.y, -self._facing.x)

    def turn_right(self) -> None:
        self._facing = Vector(-self._facing.y, self._facing.x)

    def snapshot(self) -> Snapshot:
        actor = self._actor
        return Snapshot(
            level_id=self._level.id if self._level else None,
            actor=ActorState(
                position=actor.position,
                has_key=actor.has_key,
                coins=actor.coins,
                message=actor.message,
            ),
            facing=self._facing,
            collected_coins=actor.coins,
            opened_door=any(tile.kind is TileKind.DOOR and tile.opened for tile in self._tiles),
            collisions=self._collisions,
            steps=self._steps,
            events=tuple(self._events),
        )

    def _move(self, direction: Vector) -> LogEntry:
        if direction not in _UNIT_VECTORS:
            raise ValueError(f"Illegal move direction: ({direction.x}, {direction.y})")
        if self._level is None:
            return LogEntry(LogKind.error, "No level is loaded.")

        self._facing = direction
        target = self._actor.position + direction
        if self.is_wall_at(target):
            self._collisions += 1
            self._events.append("collision")
            return LogEntry(LogKind.error, "Bump! There is a wall there.")

        self._actor.position = target
        self._steps += 1
        self._events.append(f"move:{direction.x},{direction.y}")
        return LogEntry(LogKind.info, "Step done.")

    def _pick(self) -> LogEntry:
        tile = self._find_tile(TileKind.COIN, TileKind.KEY)
        if tile is None:
            return LogEntry(LogKind.error, "There is no item here.")

        tile.collected = True
        if tile.kind is TileKind.COIN:
            self._actor.coins += 1
            self._events.append("coin")
            return LogEntry(LogKind.success, "Coin collected!")
        self._actor.has_key = True
        self._events.append("key")
        return LogEntry(LogKind.success, "The hero has the key!")

    def _open(self) -> LogEntry:
        door = next(
            (
                tile
                for tile in self._tiles
                if tile.kind is TileKind.DOOR and tile.position == self._actor.position
            ),
            None,
        )
        if door is None:
            return LogEntry(LogKind.error, "There is no door here.")
        if not self._actor.has_key:
            return LogEntry(LogKind.error, "You need a key to open the door.")
        if door.opened:
            return LogEntry(LogKind.info, "The door is already open.")

        door.opened = True
        self._events.append("door-open")
        return LogEntry(LogKind.success, "The door is open!")

    def _find_tile(self, *kinds: TileKind) -> Tile | None:
        for tile in self._tiles:
            if tile.position == self._actor.position and not tile.collected and tile.kind in kinds:
                return tile
        return None


def _in_bounds(grid: LevelMap, position: Vector) -> bool:
    return 0 <= position.y < len(grid.tiles) and 0 <= position.x < len(grid.tiles[position.y])
