"""Shared test fixtures for the jyt test suite.

WHY: Bridge, formatter, and driver tests all need the same building
blocks: a cursor that replays a fixed event list, a sink that records what
it was told, and a one-call text-to-text conversion helper.

HOW: ListCursor and RecordingSink are minimal implementations of the
Cursor and Sink contracts. The ``convert`` fixture runs the full stream
driver against an in-memory StringIO.

RULES:
- No test touches the real stdout or the network
- ``convert`` is non-interactive (compact JSON) unless asked otherwise
"""

import io
from typing import Any, List, Tuple

import pytest

from jyt.adapters.base import Cursor
from jyt.core.events import Event, EventKind
from jyt.core.formats import Format
from jyt.core.stream import run
from jyt.formatters.base import Sink


class ListCursor(Cursor):
    """Cursor that replays a fixed list of events."""

    def __init__(self, events: List[Event]) -> None:
        super().__init__()
        self._events = list(events)
        self.consumed = 0

    def _read_event(self) -> Event:
        event = self._events[self.consumed]
        self.consumed += 1
        return event


class RecordingSink(Sink):
    """Sink that records every call as a tuple."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, ...]] = []

    def scalar(self, value: Any) -> None:
        self.calls.append(("scalar", value))

    def key(self, value: Any) -> None:
        self.calls.append(("key", value))

    def begin_sequence(self) -> None:
        self.calls.append(("begin_sequence",))

    def end_sequence(self) -> None:
        self.calls.append(("end_sequence",))

    def begin_mapping(self) -> None:
        self.calls.append(("begin_mapping",))

    def end_mapping(self) -> None:
        self.calls.append(("end_mapping",))


def _read_value(cursor: Cursor) -> List[Event]:
    """Consume exactly one value from ``cursor`` and return its events."""
    events: List[Event] = []
    depth = 0
    while True:
        event = cursor.next_event()
        events.append(event)
        if event.kind in (EventKind.SEQUENCE_START, EventKind.MAPPING_START):
            depth += 1
        elif event.kind in (EventKind.SEQUENCE_END, EventKind.MAPPING_END):
            depth -= 1
        if depth == 0:
            return events


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def list_cursor():
    """Factory for cursors that replay a fixed event list."""
    return ListCursor


@pytest.fixture
def read_value():
    """Consume one value from a cursor and return its events."""
    return _read_value


@pytest.fixture
def convert():
    """Convert text between formats through the full stream driver."""

    def _convert(text: str, source: Format, destination: Format, interactive: bool = False) -> str:
        out = io.StringIO()
        run(text.encode("utf-8"), source, destination, out, interactive=interactive)
        return out.getvalue()

    return _convert
