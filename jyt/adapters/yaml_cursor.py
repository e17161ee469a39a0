"""YAML document iterator and cursor built on PyYAML's event parser.

WHY: PyYAML's ``load_all`` composes every document into a node graph and
then into Python objects. For transcoding we only need its parser events,
which already describe each document as a flat, ordered stream. Reading
those directly keeps memory proportional to nesting depth.

HOW: YamlDocuments drives a SafeLoader at the event level and yields one
YamlCursor per DocumentStartEvent. The cursor types each plain scalar with
the YAML 1.2 core schema (``jyt.core.yaml_schema``), one scalar at a time.
Anchored nodes are recorded; an alias inside a recorded node is stored as a
reference to the aliased recording, never as an expanded copy, and is
expanded lazily while replaying.

RULES:
- Documents are separated by PyYAML's own grammar (``---`` markers);
  an empty stream yields zero documents
- null, bool, int, float, and str scalars are typed by the core schema;
  every other tag (timestamp, binary, merge, custom) passes through as
  its source text
- Anchors are scoped to one document; an alias to an unknown or
  still-open anchor is MalformedInput
- A document may replay at most REPETITION_FACTOR events from aliases per
  event parsed; beyond that it is MalformedInput ("repetition limit
  exceeded")
- PyYAML errors are reported as single-line MalformedInput messages
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Union

import yaml
from yaml.error import MarkedYAMLError
from yaml.events import (
    AliasEvent,
    DocumentEndEvent,
    MappingEndEvent,
    MappingStartEvent,
    ScalarEvent,
    SequenceEndEvent,
    SequenceStartEvent,
    StreamEndEvent,
    StreamStartEvent,
)

from jyt.adapters.base import Cursor
from jyt.core.events import (
    MAPPING_END,
    MAPPING_START,
    SEQUENCE_END,
    SEQUENCE_START,
    Event,
    EventKind,
    scalar,
)
from jyt.core.formats import Format
from jyt.core.yaml_schema import STR_TAG, construct_scalar, resolve_scalar
from jyt.errors import MalformedInput

REPETITION_FACTOR = 100

_OPENING = frozenset({EventKind.SEQUENCE_START, EventKind.MAPPING_START})
_CLOSING = frozenset({EventKind.SEQUENCE_END, EventKind.MAPPING_END})


def _describe(error: yaml.YAMLError) -> str:
    """Render a PyYAML error as one line."""
    if isinstance(error, MarkedYAMLError) and error.problem:
        mark = error.problem_mark
        if mark is None:
            return error.problem
        return "{} at line {} column {}".format(
            error.problem, mark.line + 1, mark.column + 1,
        )
    return " ".join(str(error).split())


class _Alias:
    """An alias inside a recorded node: a reference to the aliased events."""

    __slots__ = ("events",)

    def __init__(self, events: List["_Recorded"]) -> None:
        self.events = events


_Recorded = Union[Event, _Alias]


class _Recording:
    """Events captured for an anchor whose node is still open."""

    def __init__(self, anchor: str) -> None:
        self.anchor = anchor
        self.events: List[_Recorded] = []
        self.depth = 0


class _EventSource:
    """SafeLoader wrapper that converts PyYAML errors to MalformedInput."""

    def __init__(self, data: bytes) -> None:
        try:
            self.loader = yaml.SafeLoader(data)
        except yaml.YAMLError as e:
            raise MalformedInput(Format.YAML, _describe(e)) from e

    def check(self, *choices: type) -> bool:
        try:
            return self.loader.check_event(*choices)
        except yaml.YAMLError as e:
            raise MalformedInput(Format.YAML, _describe(e)) from e

    def get(self) -> Any:
        try:
            return self.loader.get_event()
        except yaml.YAMLError as e:
            raise MalformedInput(Format.YAML, _describe(e)) from e

    def dispose(self) -> None:
        self.loader.dispose()


class YamlCursor(Cursor):
    """Cursor over the root node of a single YAML document."""

    def __init__(self, source: _EventSource) -> None:
        super().__init__()
        self._source = source
        self._anchors: Dict[str, List[_Recorded]] = {}
        self._recording: List[_Recording] = []
        self._replay: List[Iterator[_Recorded]] = []
        self._parsed = 0
        self._replayed = 0

    def _read_event(self) -> Event:
        while True:
            if self._replay:
                item = next(self._replay[-1], None)
                if item is None:
                    self._replay.pop()
                elif isinstance(item, _Alias):
                    self._replay.append(iter(item.events))
                else:
                    self._count_replayed()
                    return item
                continue

            raw = self._source.get()
            self._parsed += 1
            if isinstance(raw, AliasEvent):
                events = self._resolve_alias(raw)
                self._record(_Alias(events))
                self._replay.append(iter(events))
                continue

            event = self._translate(raw)
            anchor = getattr(raw, "anchor", None)
            if anchor is not None:
                self._recording.append(_Recording(anchor))
            self._record(event)
            return event

    def _count_replayed(self) -> None:
        self._replayed += 1
        if self._replayed > REPETITION_FACTOR * self._parsed:
            raise MalformedInput(Format.YAML, "repetition limit exceeded")

    def _translate(self, raw: Any) -> Event:
        if isinstance(raw, ScalarEvent):
            return scalar(self._construct(raw))
        if isinstance(raw, SequenceStartEvent):
            return SEQUENCE_START
        if isinstance(raw, SequenceEndEvent):
            return SEQUENCE_END
        if isinstance(raw, MappingStartEvent):
            return MAPPING_START
        if isinstance(raw, MappingEndEvent):
            return MAPPING_END
        raise MalformedInput(
            Format.YAML, "unexpected {}".format(type(raw).__name__),
        )

    def _construct(self, raw: ScalarEvent) -> Any:
        tag = raw.tag
        if tag is None:
            tag = resolve_scalar(raw.value, raw.implicit)
        elif tag == "!":
            tag = STR_TAG
        try:
            return construct_scalar(tag, raw.value)
        except ValueError as e:
            mark = raw.start_mark
            raise MalformedInput(
                Format.YAML,
                "invalid {} scalar {!r} at line {} column {}".format(
                    tag.rsplit(":", 1)[-1], raw.value, mark.line + 1, mark.column + 1,
                ),
            ) from e

    def _resolve_alias(self, raw: AliasEvent) -> List[_Recorded]:
        events = self._anchors.get(raw.anchor)
        if events is None:
            mark = raw.start_mark
            raise MalformedInput(
                Format.YAML,
                "found undefined alias {!r} at line {} column {}".format(
                    raw.anchor, mark.line + 1, mark.column + 1,
                ),
            )
        return events

    def _record(self, item: _Recorded) -> None:
        if not self._recording:
            return
        for recording in self._recording:
            recording.events.append(item)
            if isinstance(item, _Alias):
                continue
            if item.kind in _OPENING:
                recording.depth += 1
            elif item.kind in _CLOSING:
                recording.depth -= 1
            if recording.depth == 0:
                self._anchors[recording.anchor] = recording.events
        self._recording = [r for r in self._recording if r.depth != 0]


class YamlDocuments:
    """Iterate the documents of a YAML stream as cursors.

    Each cursor must be fully transcoded before the iterator is advanced;
    advancing consumes the document's end event.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data

    def __iter__(self) -> Iterator[YamlCursor]:
        source = _EventSource(self._data)
        try:
            if source.check(StreamStartEvent):
                source.get()
            while not source.check(StreamEndEvent):
                source.get()
                yield YamlCursor(source)
                if not source.check(DocumentEndEvent):
                    raise MalformedInput(Format.YAML, "document was not fully read")
                source.get()
            source.get()
        finally:
            source.dispose()

