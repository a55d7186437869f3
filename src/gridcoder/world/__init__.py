"""Grid world model and the engine that mutates it."""

from gridcoder.models import TileKind

from .commands import Command, Move, Open, Pick, Say
from .engine import WorldEngine
from .state import DOWN, LEFT, RIGHT, UP, ActorState, Snapshot, Vector, direction_vector

__all__ = [
    "DOWN",
    "LEFT",
    "RIGHT",
    "UP",
    "ActorState",
    "Command",
    "Move",
    "Open",
    "Pick",
    "Say",
    "Snapshot",
    "TileKind",
    "Vector",
    "WorldEngine",
    "direction_vector",
]
