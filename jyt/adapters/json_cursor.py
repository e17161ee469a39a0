"""Pull-style JSON cursor over a decoded input string.

WHY: The standard ``json`` module only decodes whole values into Python
objects. Transcoding must instead walk a document event by event so that
memory stays proportional to nesting depth, and so that several
concatenated top-level values can be read one at a time.

HOW: A small state machine keeps one frame per open container (array or
object) with where we are inside it. Tokens are read with the same
primitives ``json.decoder`` is built on: the ``WHITESPACE`` pattern,
``scanstring`` for string literals, and ``NUMBER_RE`` for numbers.

RULES:
- Input must be UTF-8; anything else is MalformedInput
- Integers stay ``int``; a fraction or exponent makes a ``float``
- NaN, Infinity, trailing commas, and non-string keys are rejected
- Numbers too large for a float and unpaired surrogate escapes
  (``"\\ud800"``) are rejected
- Errors report 1-based line and column, e.g.
  ``expected `,` or `]` at line 3 column 5``
- ``at_end()`` is only meaningful between top-level values
"""

from __future__ import annotations

import math
from json.decoder import WHITESPACE, JSONDecodeError, scanstring
from json.scanner import NUMBER_RE
from typing import List

from jyt.adapters.base import Cursor
from jyt.core.events import (
    MAPPING_END,
    MAPPING_START,
    SEQUENCE_END,
    SEQUENCE_START,
    Event,
    scalar,
)
from jyt.core.formats import Format
from jyt.errors import MalformedInput

_ARRAY = "array"
_OBJECT = "object"

# Position inside the innermost open container.
_START = "start"
_AFTER_KEY = "after_key"
_AFTER_VALUE = "after_value"

_LITERALS = (("true", True), ("false", False), ("null", None))


class JsonCursor(Cursor):
    """Cursor over zero or more concatenated JSON values."""

    def __init__(self, text: str) -> None:
        super().__init__()
        self._text = text
        self._pos = 0
        self._stack: List[List[str]] = []

    @classmethod
    def from_bytes(cls, data: bytes) -> "JsonCursor":
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInput(
                Format.JSON, "input is not valid UTF-8 ({})".format(e.reason)
            ) from e
        return cls(text)

    @property
    def offset(self) -> int:
        """Index of the next unread character."""
        return self._pos

    def at_end(self) -> bool:
        """True when only whitespace remains after the last complete value."""
        if self._stack or self._lookahead is not None:
            return False
        return self._skip_whitespace() >= len(self._text)

    def _read_event(self) -> Event:
        self._skip_whitespace()
        if not self._stack:
            return self._read_value()

        frame = self._stack[-1]
        ch = self._peek_char()

        if frame[0] == _ARRAY:
            if ch == "]":
                return self._close(SEQUENCE_END)
            if frame[1] == _AFTER_VALUE:
                if ch != ",":
                    raise self._error("expected `,` or `]`")
                self._pos += 1
                self._skip_whitespace()
                if self._peek_char() == "]":
                    raise self._error("trailing comma")
            frame[1] = _AFTER_VALUE
            return self._read_value()

        if frame[1] == _AFTER_KEY:
            if ch != ":":
                raise self._error("expected `:`")
            self._pos += 1
            self._skip_whitespace()
            frame[1] = _AFTER_VALUE
            return self._read_value()

        if ch == "}":
            return self._close(MAPPING_END)
        if frame[1] == _AFTER_VALUE:
            if ch != ",":
                raise self._error("expected `,` or `}`")
            self._pos += 1
            self._skip_whitespace()
            ch = self._peek_char()
            if ch == "}":
                raise self._error("trailing comma")
        if ch != '"':
            raise self._error("key must be a string")
        frame[1] = _AFTER_KEY
        return scalar(self._read_string())

    def _read_value(self) -> Event:
        text, pos = self._text, self._pos
        ch = text[pos:pos + 1]

        if ch == "{":
            self._open(_OBJECT)
            return MAPPING_START
        if ch == "[":
            self._open(_ARRAY)
            return SEQUENCE_START
        if ch == '"':
            return scalar(self._read_string())

        for literal, value in _LITERALS:
            if text.startswith(literal, pos):
                self._pos = pos + len(literal)
                return scalar(value)

        match = NUMBER_RE.match(text, pos)
        if match is None:
            raise self._error("expected value")
        integer, frac, exp = match.groups()
        if text[match.end():match.end() + 1].isdigit():
            self._pos = match.end()
            raise self._error("invalid number")
        try:
            if frac or exp:
                number = float(integer + (frac or "") + (exp or ""))
            else:
                number = int(integer)
        except ValueError as e:
            raise self._error("number out of range") from e
        if isinstance(number, float) and math.isinf(number):
            raise self._error("number out of range")
        self._pos = match.end()
        return scalar(number)

    def _read_string(self) -> str:
        try:
            value, end = scanstring(self._text, self._pos + 1, True)
        except JSONDecodeError as e:
            self._pos = e.pos
            message = e.msg[:-3] if e.msg.endswith(" at") else e.msg
            raise self._error(message) from e
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise self._error("lone surrogate in hex escape") from e
        self._pos = end
        return value

    def _open(self, kind: str) -> None:
        self._pos += 1
        self._stack.append([kind, _START])

    def _close(self, event: Event) -> Event:
        self._pos += 1
        self._stack.pop()
        return event

    def _peek_char(self) -> str:
        return self._text[self._pos:self._pos + 1]

    def _skip_whitespace(self) -> int:
        self._pos = WHITESPACE.match(self._text, self._pos).end()
        return self._pos

    def _error(self, message: str) -> MalformedInput:
        text, pos = self._text, self._pos
        if pos >= len(text):
            if not self._stack:
                what = "a value"
            elif self._stack[-1][0] == _ARRAY:
                what = "a list"
            else:
                what = "an object"
            message = "EOF while parsing {}".format(what)
        line = text.count("\n", 0, pos) + 1
        column = pos - text.rfind("\n", 0, pos)
        return MalformedInput(
            Format.JSON, "{} at line {} column {}".format(message, line, column)
        )
