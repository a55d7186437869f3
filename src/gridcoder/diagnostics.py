"""Learner-facing translations of raw interpreter faults."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class FriendlyErrorRule:
    pattern: re.Pattern[str]
    message: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True, slots=True)
class Diagnosis:
    message: str
    line: int | None = None


def _rule(pattern: str, message: str) -> FriendlyErrorRule:
    return FriendlyErrorRule(pattern=re.compile(pattern), message=message)


# Order matters: the first matching rule wins, so specific rules sit above the
# generic rule for the same exception type.
DEFAULT_RULES: tuple[FriendlyErrorRule, ...] = (
    _rule(r"IndentationError|TabError", "Indentation must be even. Check the spaces in front of your commands."),
    _rule(
        r"SyntaxError: cannot assign to function call",
        "You can't store a value in a command. Put a variable on the left of =.",
    ),
    _rule(
        r"SyntaxError: (?:expected|'.' was never closed|unexpected EOF|unterminated|unmatched)",
        "Oops! A symbol seems to be missing. Check your brackets, quotes and colons.",
    ),
    _rule(r"SyntaxError", "Something is extra or missing somewhere. Look at the line from the error."),
    _rule(r"ImportError|ModuleNotFoundError", "Imports are switched off here. Use the hero commands instead."),
    _rule(r"UnboundLocalError", "A variable is used before it gets a value. Assign it first."),
    _rule(r"NameError: name '(.*)' is not defined", "Unknown command. Maybe you meant move_right()?"),
    _rule(r"TypeError: '(.*)' object is not callable", "Only commands can be called with (). Check the name before the brackets."),
    _rule(
        r"TypeError: .*(?:positional argument|takes no arguments)",
        "The command got the wrong number of values. Check what goes inside the brackets.",
    ),
    _rule(
        r"TypeError: (?:unsupported operand type|can only concatenate)",
        "The code is trying to combine things that don't fit together. Check the data types.",
    ),
    _rule(r"IndexError", "The list is empty or the index is too big. Check the numbers in square brackets."),
    _rule(r"KeyError", "There is no such key. Check the name you look up in the dictionary."),
    _rule(r"ZeroDivisionError", "You can't divide by zero. Think about what goes into the denominator."),
    _rule(r"AttributeError", "That object has no such command. Look at the list of available actions."),
    _rule(r"timeout", "The loop seems to run too long. Add an exit condition or a counter."),
    _rule(r"RecursionError", "A function keeps calling itself without stopping. Add an exit condition."),
    _rule(r"SystemError|RuntimeError", "Execution stopped. Try restarting the level."),
    _rule(r"ValueError", "That value doesn't fit. Check the text or number you pass to the function."),
    _rule(r"MemoryError", "Too much data. Think about how to cut down the repetitions."),
    _rule(r"StopIteration", "The loop ended unexpectedly. Check what you iterate over."),
    _rule(r"AssertionError", "A check did not pass. Print the value with print() to see it."),
    _rule(r"TypeError", "Something is wrong with the types. Add numbers to numbers and text to text."),
)

_ON_LINE = re.compile(r"on line (\d+)")
_LINE = re.compile(r"line\s+(\d+)")


def parse_line(text: str) -> int | None:
    """Return the trailing line number mentioned in a fault text, if any."""
    for pattern in (_ON_LINE, _LINE):
        matches = pattern.findall(text)
        if matches:
            return int(matches[-1])
    return None


class DiagnosticTranslator:
    """Maps raw fault text to a friendly message using ordered rules."""

    def __init__(self, rules: Iterable[FriendlyErrorRule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[FriendlyErrorRule, ...]:
        return self._rules

    def translate(self, raw: str) -> Diagnosis:
        line = parse_line(raw)
        for rule in self._rules:
            if rule.matches(raw):
                return Diagnosis(message=rule.message, line=line)
        return Diagnosis(message=raw, line=line)
