"""Verbs exposed to learner scripts, bound to one world engine and one run log."""

from __future__ import annotations

from typing import Any, Callable

from gridcoder.models import LogEntry, LogKind
from gridcoder.world import DOWN, LEFT, RIGHT, UP, Command, Move, Open, Pick, Say, Vector, WorldEngine

COMMAND_NAMES: tuple[str, ...] = (
    "move_right",
    "move_left",
    "move_up",
    "move_down",
    "pick",
    "open",
    "say",
    "print",
    "is_wall_ahead",
    "see_item",
    "at_goal",
    "turn_left",
    "turn_right",
)


class CommandApi:
    """Uniform command binding; every level gets the same vocabulary."""

    def __init__(self, engine: WorldEngine, log: list[LogEntry]) -> None:
        self._engine = engine
        self._log = log

    def bindings(self) -> dict[str, Callable[..., Any]]:
        return {
            "move_right": lambda: self._move(RIGHT),
            "move_left": lambda: self._move(LEFT),
            "move_up": lambda: self._move(UP),
            "move_down": lambda: self._move(DOWN),
            "pick": lambda: self._dispatch(Pick()),
            "open": lambda: self._dispatch(Open()),
            "say": self.say,
            "print": self.print,
            "is_wall_ahead": self._engine.is_wall_ahead,
            "see_item": self.see_item,
            "at_goal": self._engine.at_goal,
            "turn_left": self.turn_left,
            "turn_right": self.turn_right,
        }

    def say(self, text: Any) -> None:
        self._dispatch(Say(text=str(text)))

    def print(self, *values: Any, sep: str = " ", end: str = "\n") -> None:
        """Log one info entry per call.

        ``end`` is accepted so scripts written against the builtin still run,
        but it is ignored: entries are never joined.
        """
        text = sep.join(str(value) for value in values).strip()
        if text:
            self._log.append(LogEntry(LogKind.info, text))

    def see_item(self, direction: Any) -> bool:
        return self._engine.see_item(str(direction))

    def turn_left(self) -> None:
        self._engine.turn_left()
        self._log.append(LogEntry(LogKind.info, "Turned left"))

    def turn_right(self) -> None:
        self._engine.turn_right()
        self._log.append(LogEntry(LogKind.info, "Turned right"))

    def _move(self, direction: Vector) -> None:
        self._dispatch(Move(direction=direction))

    def _dispatch(self, command: Command) -> None:
        entry = self._engine.dispatch(command)
        if entry is not None:
            self._log.append(entry)
