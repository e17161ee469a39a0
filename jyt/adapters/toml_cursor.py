"""TOML cursor over a single document parsed by tomli.

WHY: TOML input is always exactly one document: the top-level table.
tomli only exposes a whole-document API, so the cursor walks the table
tomli returns and replays it as structure events in key order.

HOW: A generator does a depth-first walk over tomli's dicts and lists and
yields one Event per scalar or container boundary. Date and time values
have no JSON or YAML equivalent in the event model and are rendered as
RFC 3339 strings.

RULES:
- Input must be UTF-8 TOML 1.0; any tomli error is MalformedInput
- Key order is tomli's insertion order (source order)
- datetime, date, and time values become ``isoformat()`` strings
- The root event is always MAPPING_START
"""

from __future__ import annotations

import datetime
from typing import Any, Iterator

import tomli

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

_TEMPORAL_TYPES = (datetime.datetime, datetime.date, datetime.time)


def _walk(value: Any) -> Iterator[Event]:
    if isinstance(value, dict):
        yield MAPPING_START
        for key, item in value.items():
            yield scalar(key)
            yield from _walk(item)
        yield MAPPING_END
    elif isinstance(value, list):
        yield SEQUENCE_START
        for item in value:
            yield from _walk(item)
        yield SEQUENCE_END
    elif isinstance(value, _TEMPORAL_TYPES):
        yield scalar(value.isoformat())
    else:
        yield scalar(value)


class TomlCursor(Cursor):
    """Cursor over the single top-level table of a TOML document."""

    def __init__(self, table: dict) -> None:
        super().__init__()
        self._events = _walk(table)

    @classmethod
    def from_bytes(cls, data: bytes) -> "TomlCursor":
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInput(
                Format.TOML, "input is not valid UTF-8 ({})".format(e.reason)
            ) from e
        try:
            table = tomli.loads(text)
        except tomli.TOMLDecodeError as e:
            raise MalformedInput(Format.TOML, str(e)) from e
        return cls(table)

    def _read_event(self) -> Event:
        try:
            return next(self._events)
        except StopIteration:
            raise MalformedInput(Format.TOML, "read past the end of the document") from None
