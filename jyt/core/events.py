"""Event vocabulary shared by input cursors and output sinks.

WHY: Every input format can describe a value as a flat stream of shape
events, and every output format can be driven by the same stream. Naming
that vocabulary once is what lets N parsers feed M writers through a
single copy algorithm instead of N x M converters.

HOW: EventKind enumerates the five shapes. Event pairs a kind with the
typed scalar value (only meaningful for SCALAR). Container boundary events
carry no data, so one shared instance per kind is enough.

RULES:
- Scalar values are str, int, float, bool, or None; nothing else
- Container events always come in balanced start/end pairs
- Inside a mapping, events alternate key, value, key, value, ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventKind(Enum):
    SCALAR = "scalar"
    SEQUENCE_START = "sequence_start"
    SEQUENCE_END = "sequence_end"
    MAPPING_START = "mapping_start"
    MAPPING_END = "mapping_end"


@dataclass(frozen=True)
class Event:
    """One step of a value's structure.

    Attributes:
        kind: Which shape this event describes.
        value: The typed scalar for SCALAR events, otherwise None.
    """

    kind: EventKind
    value: Any = None

    @property
    def is_scalar(self) -> bool:
        return self.kind is EventKind.SCALAR


def scalar(value: Any) -> Event:
    return Event(EventKind.SCALAR, value)


SEQUENCE_START = Event(EventKind.SEQUENCE_START)
SEQUENCE_END = Event(EventKind.SEQUENCE_END)
MAPPING_START = Event(EventKind.MAPPING_START)
MAPPING_END = Event(EventKind.MAPPING_END)
