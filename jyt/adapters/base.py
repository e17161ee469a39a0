"""Abstract base for input cursors.

WHY: The transcoding bridge must work with any input format using only
the minimal operations a streaming parser exposes: "what kind of value is
next" and "give me the next event". This base class fixes that contract
so the bridge never needs to know which format it is reading.

HOW: Subclasses implement ``_read_event()``, which pulls the next event
from the underlying parser. The base class layers a one-event lookahead on
top so callers can ``peek()`` without consuming.

RULES:
- Cursors are forward-only; an event is produced exactly once
- ``peek()`` never advances the underlying parser more than one event
- Grammar violations raise MalformedInput, never the parser's own error
- A cursor is owned by the stream driver; the bridge only borrows it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from jyt.core.events import Event, EventKind


class Cursor(ABC):
    """Forward-only producer of structure events for one input format.

    To add a new input format:
    1. Create a new module in adapters/
    2. Subclass Cursor and implement ``_read_event()``
    3. Teach the stream driver how to split that format into documents
    """

    def __init__(self) -> None:
        self._lookahead: Optional[Event] = None

    @abstractmethod
    def _read_event(self) -> Event:
        """Pull the next event from the underlying parser."""

    def peek(self) -> EventKind:
        """Return the kind of the next event without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._read_event()
        return self._lookahead.kind

    def next_event(self) -> Event:
        """Consume and return the next event."""
        if self._lookahead is not None:
            event, self._lookahead = self._lookahead, None
            return event
        return self._read_event()
