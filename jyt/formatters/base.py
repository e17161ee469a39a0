"""Abstract base sink and per-run output wrapper.

WHY: Every output format accepts the same shape vocabulary the cursors
produce, but writes different text. These base classes fix the interface
so the stream driver and the transcoding bridge can work with any output
format generically.

HOW: Sink is the per-run "structured value consumer" the bridge drives:
one method per event kind. Output owns a sink plus the output stream and
adds document framing: ``transcode_from()`` copies one document and
``close()`` finishes the stream.

RULES:
- Sinks write to the stream as events arrive; they never buffer a
  whole document
- Sinks raise UnsupportedValue / UnsupportedKeyType for values they cannot
  represent, before writing anything for that value
- ``Output.transcode_from()`` must leave the stream at a document
  boundary when it returns
- ``Output.close()`` writes stream trailers only; it does not close the
  underlying stream, which belongs to the caller
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TextIO

from jyt.core.bridge import DEFAULT_MAX_DEPTH, transcode

if TYPE_CHECKING:
    from jyt.adapters.base import Cursor


class Sink(ABC):
    """Consumer of structure events for one output format."""

    @abstractmethod
    def scalar(self, value: Any) -> None:
        """Write a str, int, float, bool, or None value."""

    @abstractmethod
    def key(self, value: Any) -> None:
        """Write the key of the next mapping entry."""

    @abstractmethod
    def begin_sequence(self) -> None:
        """Open a sequence."""

    @abstractmethod
    def end_sequence(self) -> None:
        """Close the innermost sequence."""

    @abstractmethod
    def begin_mapping(self) -> None:
        """Open a mapping."""

    @abstractmethod
    def end_mapping(self) -> None:
        """Close the innermost mapping."""


class Output(ABC):
    """A run's output destination in one format.

    To add a new output format:
    1. Create a new module in formatters/
    2. Subclass Sink and Output
    3. Register the Output in OUTPUTS in formatters/__init__.py
    4. Mark the format as writable in core/formats.py
    """

    def __init__(self, stream: TextIO, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.stream = stream
        self.max_depth = max_depth

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable output name, e.g. 'JSON (compact)'."""

    @property
    @abstractmethod
    def sink(self) -> Sink:
        """The sink documents are copied into."""

    def transcode_from(self, cursor: Cursor) -> None:
        """Copy one document from ``cursor`` and write its framing."""
        self.begin_document()
        transcode(cursor, self.sink, self.max_depth)
        self.end_document()

    def begin_document(self) -> None:
        """Write whatever precedes a document."""

    def end_document(self) -> None:
        """Write whatever separates this document from the next one."""

    def close(self) -> None:
        """Write any trailer the format needs after the last document."""
