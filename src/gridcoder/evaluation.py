"""Scores a finished run against a level's declared criteria."""

from __future__ import annotations

import io
import json
import re
import tokenize
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Iterable

from gridcoder.models import Criterion, RuleCriterion, StateCriterion
from gridcoder.world.state import Snapshot

_COUNTER_GUARD = re.compile(r"\b[A-Za-z_]\w*\s*<=?\s*\d+")
_COMMENT = re.compile(r"#.*")
_WORD = re.compile(r"[A-Za-z_]\w*")


def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _canonical(value: Any) -> str:
    return json.dumps(_plain(value), sort_keys=True, ensure_ascii=False, default=str)


def _code_tokens(code: str) -> list[tokenize.TokenInfo] | None:
    """Name, operator and number tokens of the script; ``None`` when it does not tokenize."""
    significant = (tokenize.NAME, tokenize.OP, tokenize.NUMBER)
    try:
        return [
            token
            for token in tokenize.generate_tokens(io.StringIO(code).readline)
            if token.type in significant
        ]
    except (tokenize.TokenError, SyntaxError):
        return None


def _code_words(code: str) -> set[str]:
    """Identifiers and keywords of the script, ignoring comments and string contents."""
    tokens = _code_tokens(code)
    if tokens is None:
        return set(_WORD.findall(_strip_comments(code)))
    return {token.string for token in tokens if token.type == tokenize.NAME}


def _strip_comments(code: str) -> str:
    return "\n".join(_COMMENT.sub("", line) for line in code.splitlines())


def _has_counter_guard(code: str) -> bool:
    tokens = _code_tokens(code)
    if tokens is None:
        return bool(_COUNTER_GUARD.search(_strip_comments(code)))
    return any(
        name.type == tokenize.NAME and op.string in ("<", "<=") and bound.type == tokenize.NUMBER
        for name, op, bound in zip(tokens, tokens[1:], tokens[2:])
    )


def _has_loop_guard(snapshot: Snapshot, code: str) -> bool:
    return "break" in _code_words(code) or _has_counter_guard(code)


def _used_mix(snapshot: Snapshot, code: str) -> bool:
    words = _code_words(code)
    return bool(words & {"if", "elif"}) and bool(words & {"for", "while"})


def _uses(keyword: str) -> Callable[[Snapshot, str], bool]:
    return lambda snapshot, code: keyword in _code_words(code)


RULES: dict[str, Callable[[Snapshot, str], bool]] = {
    "no_collision": lambda snapshot, code: snapshot.collisions == 0,
    "said_hi": lambda snapshot, code: any(event.startswith("say:") for event in snapshot.events),
    "used_if": _uses("if"),
    "used_for": _uses("for"),
    "used_while": _uses("while"),
    "used_def": _uses("def"),
    "loop_guard": _has_loop_guard,
    "used_mix": _used_mix,
}

RULE_DESCRIPTIONS: dict[str, str] = {
    "no_collision": "no bumping into walls",
    "said_hi": "the hero says something",
    "used_if": "the code uses if",
    "used_for": "the code uses a for loop",
    "used_while": "the code uses a while loop",
    "used_def": "the code defines a function",
    "loop_guard": "the loop has a way out (break or a step counter)",
    "used_mix": "the code mixes a condition and a loop",
}


class GoalEvaluator:
    """Pure per-criterion checks over a snapshot and the script text."""

    def evaluate(self, criteria: Iterable[Criterion], snapshot: Snapshot, code: str) -> tuple[bool, ...]:
        return tuple(self.check(criterion, snapshot, code) for criterion in criteria)

    def check(self, criterion: Criterion, snapshot: Snapshot, code: str) -> bool:
        if isinstance(criterion, StateCriterion):
            return all(
                _canonical(getattr(snapshot, key, None)) == _canonical(expected)
                for key, expected in criterion.must_have.items()
            )
        if isinstance(criterion, RuleCriterion):
            rule = RULES.get(criterion.name)
            if rule is None:
                return bool(criterion.value)
            return rule(snapshot, code)
        return False

    @staticmethod
    def describe(criterion: Criterion) -> str:
        if isinstance(criterion, StateCriterion):
            expected = ", ".join(f"{key} = {_canonical(value)}" for key, value in criterion.must_have.items())
            return f"State: {expected}"
        return f"Rule: {RULE_DESCRIPTIONS.get(criterion.name, criterion.name)}"
