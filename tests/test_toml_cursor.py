"""Unit tests for the TOML cursor.

WHY: TOML is the only single-document input and the only one with date
and time types. Both need explicit handling before events reach a sink.

HOW: Tests parse small documents and compare the event stream, including
tables, arrays of tables, and temporal values, then check that invalid
documents are rejected as MalformedInput.
"""

import pytest

from jyt.adapters.toml_cursor import TomlCursor
from jyt.core.events import (
    MAPPING_END,
    MAPPING_START,
    SEQUENCE_END,
    SEQUENCE_START,
    scalar,
)
from jyt.core.formats import Format
from jyt.errors import MalformedInput


def _events(read_value, text):
    return read_value(TomlCursor.from_bytes(text.encode("utf-8")))


class TestDocument:
    """The single top-level table becomes one mapping."""

    def test_scalars_and_order(self, read_value):
        events = _events(read_value, 'title = "x"\ncount = 3\nratio = 0.5\nok = true\n')
        assert events == [
            MAPPING_START,
            scalar("title"), scalar("x"),
            scalar("count"), scalar(3),
            scalar("ratio"), scalar(0.5),
            scalar("ok"), scalar(True),
            MAPPING_END,
        ]

    def test_tables_and_arrays(self, read_value):
        text = 'name = "a"\n[owner]\nid = 1\n[[items]]\nv = [1, 2]\n[[items]]\nv = []\n'
        events = _events(read_value, text)
        assert events == [
            MAPPING_START,
            scalar("name"), scalar("a"),
            scalar("owner"), MAPPING_START, scalar("id"), scalar(1), MAPPING_END,
            scalar("items"),
            SEQUENCE_START,
            MAPPING_START, scalar("v"), SEQUENCE_START, scalar(1), scalar(2), SEQUENCE_END, MAPPING_END,
            MAPPING_START, scalar("v"), SEQUENCE_START, SEQUENCE_END, MAPPING_END,
            SEQUENCE_END,
            MAPPING_END,
        ]

    def test_empty_document_is_empty_table(self, read_value):
        assert _events(read_value, "") == [MAPPING_START, MAPPING_END]

    @pytest.mark.parametrize("text,value", [
        ("t = 1979-05-27T07:32:00Z", "1979-05-27T07:32:00+00:00"),
        ("t = 1979-05-27T07:32:00", "1979-05-27T07:32:00"),
        ("t = 1979-05-27", "1979-05-27"),
        ("t = 07:32:00", "07:32:00"),
    ])
    def test_temporal_values_become_strings(self, read_value, text, value):
        events = _events(read_value, text)
        assert events[2] == scalar(value)


class TestErrors:
    """Anything tomli rejects is MalformedInput."""

    @pytest.mark.parametrize("text", [
        "a = 1\n[t]\nb = 2\n[t]\nc = 3\n",
        "a = 1\na = 2\n",
        "[t]\nb = 2\n]\n",
        "a = \n",
    ])
    def test_invalid_documents(self, text):
        with pytest.raises(MalformedInput) as exc_info:
            TomlCursor.from_bytes(text.encode("utf-8"))
        assert exc_info.value.format is Format.TOML

    def test_invalid_utf8(self):
        with pytest.raises(MalformedInput, match="not valid UTF-8"):
            TomlCursor.from_bytes(b'a = "\xff"')

    def test_reading_past_the_document(self, read_value):
        cursor = TomlCursor.from_bytes(b"a = 1")
        read_value(cursor)
        with pytest.raises(MalformedInput):
            cursor.next_event()
