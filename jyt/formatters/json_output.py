"""JSON sink with compact and pretty styles.

WHY: JSON output must be written as the bridge walks the document, so the
standard ``json.dump`` (which needs the whole value up front) cannot be
used for containers. Scalars, however, are encoded exactly the way the
``json`` module encodes them.

HOW: JsonSink keeps one frame per open container to know whether a comma
is due and whether the next scalar is a key. Punctuation and indentation
are delegated to a style object, so compact and pretty output share the
same sink. JsonOutput ends every document with a newline.

RULES:
- Compact: no whitespace at all, e.g. ``{"a":[1,2]}``
- Pretty: two-space indent, ``": "`` after keys, empty containers
  stay ``[]`` / ``{}``
- Strings keep non-ASCII characters verbatim (``ensure_ascii=False``)
- NaN and infinities are written as ``null``
- Keys: strings as-is; ints, bools, and finite floats as their JSON
  text in quotes; anything else is UnsupportedKeyType
- One ``\\n`` after every document
"""

from __future__ import annotations

import json
import math
from typing import Any, Callable, List, TextIO

from jyt.core.bridge import DEFAULT_MAX_DEPTH
from jyt.core.formats import Format
from jyt.errors import TranscodeError, UnsupportedKeyType, UnsupportedValue
from jyt.formatters.base import Output, Sink

Write = Callable[[str], Any]


class CompactStyle:
    """Whitespace-free JSON punctuation."""

    name = "compact"

    def item(self, write: Write, first: bool, depth: int) -> None:
        if not first:
            write(",")

    def colon(self, write: Write) -> None:
        write(":")

    def close(self, write: Write, closer: str, has_items: bool, depth: int) -> None:
        write(closer)


class PrettyStyle:
    """Indented, human-readable JSON punctuation."""

    name = "pretty"

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def item(self, write: Write, first: bool, depth: int) -> None:
        write("\n" if first else ",\n")
        write(self.indent * depth)

    def colon(self, write: Write) -> None:
        write(": ")

    def close(self, write: Write, closer: str, has_items: bool, depth: int) -> None:
        if has_items:
            write("\n")
            write(self.indent * depth)
        write(closer)


def encode_scalar(value: Any) -> str:
    """Encode a scalar value as JSON text."""
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return int.__repr__(value)
    if isinstance(value, float):
        return float.__repr__(value) if math.isfinite(value) else "null"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    raise UnsupportedValue(value)


def encode_key(value: Any) -> str:
    """Encode a mapping key as a JSON string."""
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return '"true"' if value else '"false"'
    if isinstance(value, int):
        return '"{}"'.format(int.__repr__(value))
    if isinstance(value, float) and math.isfinite(value):
        return '"{}"'.format(float.__repr__(value))
    raise UnsupportedKeyType(value, Format.JSON)


class _Frame:
    __slots__ = ("mapping", "count", "awaiting_value")

    def __init__(self, mapping: bool) -> None:
        self.mapping = mapping
        self.count = 0
        self.awaiting_value = False


class JsonSink(Sink):
    """Writes JSON text to a stream as events arrive."""

    def __init__(self, stream: TextIO, style: Any) -> None:
        self._write = stream.write
        self._style = style
        self._stack: List[_Frame] = []

    def scalar(self, value: Any) -> None:
        text = encode_scalar(value)
        self._before_value()
        self._write(text)

    def key(self, value: Any) -> None:
        text = encode_key(value)
        frame = self._stack[-1] if self._stack else None
        if frame is None or not frame.mapping or frame.awaiting_value:
            raise TranscodeError("mapping key written outside a mapping")
        self._style.item(self._write, frame.count == 0, len(self._stack))
        frame.count += 1
        frame.awaiting_value = True
        self._write(text)
        self._style.colon(self._write)

    def begin_sequence(self) -> None:
        self._open(False, "[")

    def end_sequence(self) -> None:
        self._close("]")

    def begin_mapping(self) -> None:
        self._open(True, "{")

    def end_mapping(self) -> None:
        self._close("}")

    def _before_value(self) -> None:
        if not self._stack:
            return
        frame = self._stack[-1]
        if frame.mapping:
            if not frame.awaiting_value:
                raise TranscodeError("mapping value written without a key")
            frame.awaiting_value = False
        else:
            self._style.item(self._write, frame.count == 0, len(self._stack))
            frame.count += 1

    def _open(self, mapping: bool, opener: str) -> None:
        self._before_value()
        self._write(opener)
        self._stack.append(_Frame(mapping))

    def _close(self, closer: str) -> None:
        frame = self._stack.pop()
        self._style.close(self._write, closer, frame.count > 0, len(self._stack))


class JsonOutput(Output):
    """Newline-delimited JSON documents in compact or pretty style."""

    def __init__(
        self,
        stream: TextIO,
        pretty: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        super().__init__(stream, max_depth)
        self.pretty = pretty
        style = PrettyStyle() if pretty else CompactStyle()
        self._sink = JsonSink(stream, style)

    @property
    def name(self) -> str:
        return "JSON (pretty)" if self.pretty else "JSON (compact)"

    @property
    def sink(self) -> JsonSink:
        return self._sink

    def end_document(self) -> None:
        self.stream.write("\n")
