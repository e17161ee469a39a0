"""Transcoding bridge: copy one value from any cursor to any sink.

WHY: With N input formats and M output formats, writing a converter per
pair does not scale. Each format implements only its half (a Cursor or a
Sink) and this module implements the copy once, for every pair.

HOW: A recursive depth-first walk. Scalars are handed to the sink with
their native type intact; sequence and mapping starts open the matching
container on the sink, copy each element (or key, then value), and close
it. Nothing is buffered: every event reaches the sink as soon as it is
read, so output is written incrementally. Container ends are found by
asking the cursor what kind of event is next (``peek()``).

RULES:
- Exactly one value is read from the cursor per call
- Key order is the source order, never sorted
- Container keys are rejected with UnsupportedKeyType
- Nesting beyond ``max_depth`` raises TranscodeError
- The cursor is not retained after the call returns
- Style (pretty/compact) is the sink's concern, never decided here
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jyt.core.events import Event, EventKind
from jyt.errors import TranscodeError, UnsupportedKeyType

if TYPE_CHECKING:
    from jyt.adapters.base import Cursor
    from jyt.formatters.base import Sink

DEFAULT_MAX_DEPTH = 128


def transcode(cursor: Cursor, sink: Sink, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
    """Copy the next value from ``cursor`` into ``sink``.

    Args:
        cursor: Input positioned at the start of a value.
        sink: Output that receives the same value.
        max_depth: Maximum container nesting before giving up.

    Raises:
        MalformedInput: The cursor's parser rejected the input.
        UnsupportedValue: The sink cannot represent a value or key.
        TranscodeError: Nesting exceeds ``max_depth``.
    """
    _copy(cursor, sink, cursor.next_event(), max_depth)


def _copy(cursor: Cursor, sink: Sink, event: Event, depth_left: int) -> None:
    kind = event.kind

    if kind is EventKind.SCALAR:
        sink.scalar(event.value)
        return

    if depth_left <= 0:
        raise TranscodeError("recursion limit exceeded")

    if kind is EventKind.SEQUENCE_START:
        sink.begin_sequence()
        while cursor.peek() is not EventKind.SEQUENCE_END:
            _copy(cursor, sink, cursor.next_event(), depth_left - 1)
        cursor.next_event()
        sink.end_sequence()

    elif kind is EventKind.MAPPING_START:
        sink.begin_mapping()
        while cursor.peek() is not EventKind.MAPPING_END:
            key = cursor.next_event()
            if not key.is_scalar:
                raise UnsupportedKeyType(key.kind.value.split("_")[0])
            sink.key(key.value)
            _copy(cursor, sink, cursor.next_event(), depth_left - 1)
        cursor.next_event()
        sink.end_mapping()

    else:
        # A closing event where a value should start means a broken cursor.
        raise TranscodeError("unexpected {} while reading a value".format(kind.value))
