"""
Separator-aware glob compilation.

Glob syntax is compiled once into a small state machine, then matched against whole
path strings:

- `*` matches any run of characters other than the separator
- `**` matches any run of characters, separators included
- `?` matches one character other than the separator
- `[abc]`, `[a-z]`, `[!abc]`, `[^abc]` match one character from (or outside) a class
- `{a,b}` matches any of the comma-separated alternatives (alternatives may nest)
- `\\x` matches `x` literally, except when the separator is a backslash

Matching tracks the set of live states one character at a time, so it never
backtracks: cost is bounded by pattern length times path length, however many
stars the pattern holds.

The separator is always passed in explicitly, so the same pattern can be compiled
for POSIX or Windows style paths regardless of the host platform.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

# Characters that switch a path from literal to glob handling.
GLOB_CHARS = frozenset("*?[")

# State kinds. `MATCH` is always state 0.
_MATCH = "match"
_LITERAL = "literal"
_ANY = "any"
_CLASS = "class"
_STAR = "star"
_GLOBSTAR = "globstar"
_SPLIT = "split"


class InvalidPatternError(ValueError):
    """A path pattern contains malformed glob syntax."""

    def __init__(self, message: str, pattern: str, position: int) -> None:
        super().__init__(f"{message} at position {position} in pattern {pattern!r}")
        self.pattern: str = pattern
        self.position: int = position


def has_meta(path: str) -> bool:
    """Check whether `path` contains any glob metacharacter (`*`, `?`, `[`)."""
    return any(c in GLOB_CHARS for c in path)


@dataclass(frozen=True)
class _CharClass:
    negate: bool
    chars: frozenset[str]
    ranges: tuple[tuple[str, str], ...]

    def contains(self, char: str) -> bool:
        found = char in self.chars or any(low <= char <= high for low, high in self.ranges)
        return found != self.negate


@dataclass(frozen=True)
class _State:
    """
    One state of the compiled pattern. Consuming states (`literal`, `any`, `class`)
    move to `out[0]`; `star` and `globstar` loop on themselves and may also skip
    to `out[0]`; `split` moves to every state in `out` without consuming.
    """

    kind: str
    out: tuple[int, ...] = ()
    char: str = ""
    char_class: _CharClass | None = None


@dataclass(frozen=True)
class Glob:
    """A compiled glob pattern. Matches full path strings only."""

    pattern: str
    separator: str
    _states: tuple[_State, ...] = field(repr=False, compare=False)
    _start: int = field(repr=False, compare=False)

    def match(self, candidate: str) -> bool:
        current = self._closure([self._start])
        for char in candidate:
            following: list[int] = []
            for index in current:
                state = self._states[index]
                kind = state.kind
                if kind == _GLOBSTAR or (kind == _STAR and char != self.separator):
                    following.append(index)
                elif kind == _LITERAL:
                    if char == state.char:
                        following.append(state.out[0])
                elif kind == _ANY:
                    if char != self.separator:
                        following.append(state.out[0])
                elif kind == _CLASS:
                    if state.char_class is not None and state.char_class.contains(char):
                        following.append(state.out[0])
            if not following:
                return False
            current = self._closure(following)
        return 0 in current

    def _closure(self, indexes: list[int]) -> set[int]:
        """Expand states with everything reachable without consuming a character."""
        seen: set[int] = set()
        stack = list(indexes)
        while stack:
            index = stack.pop()
            if index in seen:
                continue
            seen.add(index)
            state = self._states[index]
            if state.kind in (_SPLIT, _STAR, _GLOBSTAR):
                stack.extend(state.out)
        return seen


def compile_glob(pattern: str, separator: str = os.sep) -> Glob:
    """
    Compile `pattern` using `separator` as the path segment delimiter.

    Raises `InvalidPatternError` for unterminated classes or alternations, empty
    classes, reversed ranges, and a trailing escape character.
    """
    if len(separator) != 1:
        raise ValueError(f"Separator must be a single character: {separator!r}")
    items = _Parser(pattern, separator).parse()
    states: list[_State] = [_State(_MATCH)]
    start = _build(items, 0, states)
    return Glob(pattern=pattern, separator=separator, _states=tuple(states), _start=start)


# Parsed items: ("literal", char), ("any",), ("class", _CharClass), ("star",),
# ("globstar",), ("alt", [branch items, ...]).
_Item = tuple[Any, ...]


def _build(items: list[_Item], following: int, states: list[_State]) -> int:
    """Append states for `items` (built back to front) and return the entry state."""
    for item in reversed(items):
        kind = item[0]
        if kind == "alt":
            starts = tuple(_build(branch, following, states) for branch in item[1])
            states.append(_State(_SPLIT, out=starts))
        elif kind == _LITERAL:
            states.append(_State(_LITERAL, out=(following,), char=item[1]))
        elif kind == _CLASS:
            states.append(_State(_CLASS, out=(following,), char_class=item[1]))
        else:
            states.append(_State(kind, out=(following,)))
        following = len(states) - 1
    return following


class _Parser:
    """Recursive-descent parser from glob syntax to a list of items."""

    def __init__(self, pattern: str, separator: str) -> None:
        self.pattern = pattern
        self.pos = 0
        # Backslash is a path separator on Windows, so it cannot also escape.
        self.escapes = separator != "\\"

    def parse(self) -> list[_Item]:
        return self._sequence(depth=0)

    def _error(self, message: str, position: int) -> InvalidPatternError:
        return InvalidPatternError(message, self.pattern, position)

    def _sequence(self, depth: int) -> list[_Item]:
        """Parse until end of input, or until `,`/`}` when inside an alternation."""
        pattern = self.pattern
        items: list[_Item] = []
        while self.pos < len(pattern):
            char = pattern[self.pos]
            if depth and char in ",}":
                break
            if char == "*":
                if pattern.startswith("**", self.pos):
                    # Any run of two or more stars crosses separators.
                    while self.pos < len(pattern) and pattern[self.pos] == "*":
                        self.pos += 1
                    items.append((_GLOBSTAR,))
                else:
                    self.pos += 1
                    items.append((_STAR,))
            elif char == "?":
                self.pos += 1
                items.append((_ANY,))
            elif char == "[":
                items.append((_CLASS, self._char_class()))
            elif char == "{":
                items.append(("alt", self._alternation(depth)))
            elif char == "\\" and self.escapes:
                items.append((_LITERAL, self._escaped()))
            else:
                self.pos += 1
                items.append((_LITERAL, char))
        return items

    def _escaped(self) -> str:
        """Consume a backslash escape and return the escaped character."""
        if self.pos + 1 >= len(self.pattern):
            raise self._error("dangling escape", self.pos)
        char = self.pattern[self.pos + 1]
        self.pos += 2
        return char

    def _class_char(self) -> str:
        if self.escapes and self.pattern[self.pos] == "\\":
            return self._escaped()
        char = self.pattern[self.pos]
        self.pos += 1
        return char

    def _char_class(self) -> _CharClass:
        pattern = self.pattern
        start = self.pos
        self.pos += 1
        negate = False
        if self.pos < len(pattern) and pattern[self.pos] in "!^":
            negate = True
            self.pos += 1

        chars: set[str] = set()
        ranges: list[tuple[str, str]] = []
        while True:
            if self.pos >= len(pattern):
                raise self._error("unterminated character class", start)
            if pattern[self.pos] == "]":
                self.pos += 1
                break
            low = self._class_char()
            if (
                self.pos + 1 < len(pattern)
                and pattern[self.pos] == "-"
                and pattern[self.pos + 1] != "]"
            ):
                self.pos += 1
                high = self._class_char()
                if high < low:
                    raise self._error(f"invalid range {low}-{high}", start)
                ranges.append((low, high))
            else:
                chars.add(low)

        if not chars and not ranges:
            raise self._error("empty character class", start)
        return _CharClass(negate=negate, chars=frozenset(chars), ranges=tuple(ranges))

    def _alternation(self, depth: int) -> list[list[_Item]]:
        start = self.pos
        self.pos += 1
        branches: list[list[_Item]] = []
        while True:
            branches.append(self._sequence(depth + 1))
            if self.pos >= len(self.pattern):
                raise self._error("unterminated alternation", start)
            closing = self.pattern[self.pos] == "}"
            self.pos += 1
            if closing:
                break
        return branches
