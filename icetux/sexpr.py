"""Reading and writing the parenthesised text format used by game data files.

Values map onto Python types: lists are ``list``, symbols are :class:`Symbol`,
strings are ``str``, numbers are ``int`` or ``float`` and ``#t``/``#f`` are
``bool``. A ``;`` starts a comment that runs to the end of the line.
"""

from __future__ import annotations

import math
import re
import string
from collections.abc import Iterable
from typing import Any

__all__ = ["Symbol", "SexprError", "Reader", "read", "dumps"]


class SexprError(ValueError):
    """Raised when text cannot be parsed."""


class Symbol(str):
    """A bare name, as opposed to a quoted string."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


_INT_RE = re.compile(r"[+-]?\d+\Z")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?\Z")
_DELIMITERS = frozenset('()";') | frozenset(string.whitespace)
_ESCAPES = {"n": "\n", "t": "\t"}


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _skip_blank(self) -> None:
        text = self.text
        while not self._at_end():
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif ch == ";":
                newline = text.find("\n", self.pos)
                self.pos = len(text) if newline < 0 else newline + 1
            else:
                break

    def parse(self) -> Any:
        self._skip_blank()
        if self._at_end():
            raise SexprError("unexpected end of input")
        ch = self.text[self.pos]
        if ch == "(":
            return self._list()
        if ch == ")":
            raise SexprError(f"unexpected ')' at offset {self.pos}")
        if ch == '"':
            return self._string()
        return self._atom()

    def _list(self) -> list[Any]:
        start = self.pos
        self.pos += 1
        items: list[Any] = []
        while True:
            self._skip_blank()
            if self._at_end():
                raise SexprError(f"unterminated list starting at offset {start}")
            if self.text[self.pos] == ")":
                self.pos += 1
                return items
            items.append(self.parse())

    def _string(self) -> str:
        start = self.pos
        self.pos += 1
        parts: list[str] = []
        text = self.text
        while True:
            if self._at_end():
                raise SexprError(f"unterminated string starting at offset {start}")
            ch = text[self.pos]
            self.pos += 1
            if ch == '"':
                return "".join(parts)
            if ch == "\\":
                if self._at_end():
                    raise SexprError(f"unterminated string starting at offset {start}")
                escaped = text[self.pos]
                self.pos += 1
                parts.append(_ESCAPES.get(escaped, escaped))
            else:
                parts.append(ch)

    def _atom(self) -> Any:
        start = self.pos
        text = self.text
        while not self._at_end() and text[self.pos] not in _DELIMITERS:
            self.pos += 1
        token = text[start:self.pos]
        if token.startswith("#"):
            if token == "#t":
                return True
            if token == "#f":
                return False
            raise SexprError(f"invalid token {token!r} at offset {start}")
        if _INT_RE.match(token):
            return int(token)
        if _FLOAT_RE.match(token):
            return float(token)
        return Symbol(token)


def read(text: str) -> Any:
    """Parse and return the first value in ``text``."""
    return _Parser(text).parse()


def dumps(value: Any) -> str:
    """Return the text form of ``value``."""
    if isinstance(value, bool):
        return "#t" if value else "#f"
    if isinstance(value, Symbol):
        if not value or any(ch in _DELIMITERS for ch in value):
            raise ValueError(f"symbol {str(value)!r} cannot be written")
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"cannot write non-finite number {value!r}")
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "(" + " ".join(dumps(item) for item in value) + ")"
    raise TypeError(f"cannot write value of type {type(value).__name__}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Reader:
    """Looks up ``(name value ...)`` entries in a list of entries.

    Each ``read_*`` method returns None when the entry is missing or its
    value has the wrong type.
    """

    def __init__(self, entries: Iterable[Any]) -> None:
        self._entries = list(entries)

    def _search(self, name: str) -> list[Any] | None:
        for entry in self._entries:
            if (
                isinstance(entry, list)
                and entry
                and isinstance(entry[0], Symbol)
                and entry[0] == name
            ):
                return entry[1:]
        return None

    def _first(self, name: str) -> Any:
        rest = self._search(name)
        return rest[0] if rest else None

    def read_int(self, name: str) -> int | None:
        """Return the integer stored under ``name``."""
        value = self._first(name)
        return value if _is_int(value) else None

    def read_float(self, name: str) -> float | None:
        """Return the number stored under ``name`` as a float."""
        value = self._first(name)
        if _is_int(value) or isinstance(value, float):
            return float(value)
        return None

    def read_bool(self, name: str) -> bool | None:
        """Return the boolean stored under ``name``."""
        value = self._first(name)
        return value if isinstance(value, bool) else None

    def read_string(self, name: str) -> str | None:
        """Return the quoted string stored under ``name``."""
        value = self._first(name)
        if isinstance(value, str) and not isinstance(value, Symbol):
            return value
        return None

    def read_int_vector(self, name: str) -> list[int] | None:
        """Return all integers following ``name``."""
        rest = self._search(name)
        if rest is None or not all(_is_int(item) for item in rest):
            return None
        return list(rest)

    def read_lisp(self, name: str) -> list[Any] | None:
        """Return every value following ``name``, unconverted."""
        rest = self._search(name)
        return None if rest is None else list(rest)