"""Closed set of commands the world engine knows how to apply."""

from __future__ import annotations

from dataclasses import dataclass

from gridcoder.world.state import Vector


@dataclass(frozen=True, slots=True)
class Move:
    direction: Vector


@dataclass(frozen=True, slots=True)
class Pick:
    pass


@dataclass(frozen=True, slots=True)
class Open:
    pass


@dataclass(frozen=True, slots=True)
class Say:
    text: str


Command = Move | Pick | Open | Say
