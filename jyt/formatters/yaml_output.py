"""YAML sink driving PyYAML's emitter event by event.

WHY: ``yaml.safe_dump`` needs a complete Python object. PyYAML's emitter
underneath it is already event driven, so feeding it events directly lets
YAML output stream the same way JSON output does.

HOW: One SafeDumper per run supplies the emitter (writes text) and the
safe representer (turns a typed scalar into tag + text). Whether the text
can be written plain or must be quoted to keep its type is decided with
the YAML 1.2 core schema resolver the YAML reader uses. This mirrors what
PyYAML's own Serializer does per scalar node, without building the node
graph.

RULES:
- One canonical style: block collections, 2-space indent, Unicode verbatim
- Keys are written in arrival order, never sorted
- Strings that would resolve to another core schema type (``"123"``,
  ``"true"``, ``"017"``) are quoted; YAML 1.1 words such as ``on`` and
  ``yes`` are plain
- Every document after the first is preceded by ``---``; the emitter
  decides this itself
- ``close()`` emits the stream end; until then the emitter may hold a few
  events of lookahead
"""

from __future__ import annotations

from typing import Any, TextIO

import yaml
from yaml.events import (
    DocumentEndEvent,
    DocumentStartEvent,
    MappingEndEvent,
    MappingStartEvent,
    ScalarEvent,
    SequenceEndEvent,
    SequenceStartEvent,
    StreamEndEvent,
    StreamStartEvent,
)

from jyt.core.bridge import DEFAULT_MAX_DEPTH
from jyt.core.yaml_schema import resolve_scalar
from jyt.errors import UnsupportedValue
from jyt.formatters.base import Output, Sink

_SCALAR_TYPES = (str, int, float, bool, type(None))


class YamlSink(Sink):
    """Forwards structure events to a PyYAML emitter."""

    def __init__(self, dumper: yaml.SafeDumper) -> None:
        self._dumper = dumper

    def scalar(self, value: Any) -> None:
        if not isinstance(value, _SCALAR_TYPES):
            raise UnsupportedValue(value)
        dumper = self._dumper
        node = dumper.represent_data(value)
        implicit = (
            node.tag == resolve_scalar(node.value, (True, False)),
            node.tag == resolve_scalar(node.value, (False, True)),
        )
        dumper.emit(ScalarEvent(None, node.tag, implicit, node.value, style=node.style))

    def key(self, value: Any) -> None:
        self.scalar(value)

    def begin_sequence(self) -> None:
        self._dumper.emit(SequenceStartEvent(None, None, True, flow_style=False))

    def end_sequence(self) -> None:
        self._dumper.emit(SequenceEndEvent())

    def begin_mapping(self) -> None:
        self._dumper.emit(MappingStartEvent(None, None, True, flow_style=False))

    def end_mapping(self) -> None:
        self._dumper.emit(MappingEndEvent())


class YamlOutput(Output):
    """A YAML stream of one or more documents."""

    def __init__(self, stream: TextIO, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        super().__init__(stream, max_depth)
        self._dumper = yaml.SafeDumper(
            stream,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
        self._sink = YamlSink(self._dumper)
        self._dumper.emit(StreamStartEvent())

    @property
    def name(self) -> str:
        return "YAML"

    @property
    def sink(self) -> YamlSink:
        return self._sink

    def begin_document(self) -> None:
        self._dumper.emit(DocumentStartEvent(explicit=False))

    def end_document(self) -> None:
        self._dumper.emit(DocumentEndEvent(explicit=False))

    def close(self) -> None:
        self._dumper.emit(StreamEndEvent())
        self._dumper.dispose()
