"""Value types shared by the world engine, its snapshots and the evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field

from gridcoder.models import TileKind


@dataclass(frozen=True, slots=True)
class Vector:
    """Grid coordinate or unit direction. ``y`` grows downward."""

    x: int
    y: int

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)


RIGHT = Vector(1, 0)
LEFT = Vector(-1, 0)
UP = Vector(0, -1)
DOWN = Vector(0, 1)
ZERO = Vector(0, 0)

DIRECTIONS: dict[str, Vector] = {
    "right": RIGHT,
    "left": LEFT,
    "up": UP,
    "down": DOWN,
}


def direction_vector(name: str) -> Vector:
    """Map a direction name to its unit vector; unknown names map to ``ZERO``."""
    return DIRECTIONS.get(str(name).strip().lower(), ZERO)


@dataclass(slots=True)
class Tile:
    """Interactive entity registered at load time plus its mutable overlay."""

    kind: TileKind
    position: Vector
    collected: bool = False
    opened: bool = False


@dataclass(slots=True)
class Actor:
    position: Vector = ZERO
    has_key: bool = False
    coins: int = 0
    message: str | None = None


@dataclass(frozen=True, slots=True)
class ActorState:
    """Read-only copy of the actor taken for a snapshot."""

    position: Vector
    has_key: bool
    coins: int
    message: str | None = None


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Point-in-time copy of the world runtime state."""

    level_id: str | None
    actor: ActorState
    facing: Vector
    collected_coins: int
    opened_door: bool
    collisions: int
    steps: int
    events: tuple[str, ...] = field(default_factory=tuple)
