"""Unit tests for the JSON and YAML output formatters.

WHY: Formatters produce the bytes users actually see. Punctuation or
indentation mistakes yield invalid JSON; quoting mistakes in YAML silently
change a value's type when the output is read back.

HOW: Hand-written event lists are replayed through each Output into a
StringIO and compared with the exact expected text. Sink-level tests feed
values the destination cannot represent.
"""

import io

import pytest

from jyt.core.events import (
    MAPPING_END,
    MAPPING_START,
    SEQUENCE_END,
    SEQUENCE_START,
    scalar,
)
from jyt.errors import TranscodeError, UnsupportedKeyType, UnsupportedValue
from jyt.formatters.json_output import JsonOutput, JsonSink, CompactStyle, encode_key, encode_scalar
from jyt.formatters.yaml_output import YamlOutput

NESTED = [
    MAPPING_START,
    scalar("a"),
    SEQUENCE_START,
    scalar(1),
    MAPPING_START, scalar("b"), scalar(None), MAPPING_END,
    SEQUENCE_END,
    scalar("c"), MAPPING_START, MAPPING_END,
    MAPPING_END,
]


def _write(output_cls, cursors, **kwargs):
    stream = io.StringIO()
    output = output_cls(stream, **kwargs)
    for cursor in cursors:
        output.transcode_from(cursor)
    output.close()
    return stream.getvalue()


# =========================================================================
# JSON
# =========================================================================

class TestJsonOutput:
    """Compact and pretty JSON framing."""

    def test_compact(self, list_cursor):
        text = _write(JsonOutput, [list_cursor(NESTED)])
        assert text == '{"a":[1,{"b":null}],"c":{}}\n'

    def test_pretty(self, list_cursor):
        text = _write(JsonOutput, [list_cursor(NESTED)], pretty=True)
        assert text == (
            '{\n'
            '  "a": [\n'
            '    1,\n'
            '    {\n'
            '      "b": null\n'
            '    }\n'
            '  ],\n'
            '  "c": {}\n'
            '}\n'
        )

    def test_pretty_empty_containers(self, list_cursor):
        text = _write(JsonOutput, [list_cursor([SEQUENCE_START, SEQUENCE_END])], pretty=True)
        assert text == "[]\n"

    def test_each_document_ends_with_newline(self, list_cursor):
        cursors = [list_cursor([scalar(1)]), list_cursor([scalar("two")])]
        assert _write(JsonOutput, cursors) == '1\n"two"\n'

    def test_names(self):
        assert JsonOutput(io.StringIO()).name == "JSON (compact)"
        assert JsonOutput(io.StringIO(), pretty=True).name == "JSON (pretty)"


class TestJsonScalars:
    """Scalars are encoded the way the json module encodes them."""

    @pytest.mark.parametrize("value,text", [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (-12, "-12"),
        (10 ** 20, "100000000000000000000"),
        (1.5, "1.5"),
        (1.0, "1.0"),
        (float("nan"), "null"),
        (float("-inf"), "null"),
        ("plain", '"plain"'),
        ('quote " and \\', '"quote \\" and \\\\"'),
        ("tab\tnewline\n", '"tab\\tnewline\\n"'),
        ("café", '"café"'),
    ])
    def test_encode_scalar(self, value, text):
        assert encode_scalar(value) == text

    def test_unknown_type_rejected(self):
        with pytest.raises(UnsupportedValue):
            encode_scalar(object())

    @pytest.mark.parametrize("value,text", [
        ("k", '"k"'),
        (1, '"1"'),
        (True, '"true"'),
        (2.5, '"2.5"'),
    ])
    def test_encode_key(self, value, text):
        assert encode_key(value) == text

    @pytest.mark.parametrize("value", [None, float("inf"), b"bytes"])
    def test_unsupported_key(self, value):
        with pytest.raises(UnsupportedKeyType):
            encode_key(value)


class TestJsonSink:
    """The sink enforces key/value alternation inside mappings."""

    def test_value_without_key(self):
        sink = JsonSink(io.StringIO(), CompactStyle())
        sink.begin_mapping()
        with pytest.raises(TranscodeError, match="without a key"):
            sink.scalar(1)

    def test_key_outside_mapping(self):
        sink = JsonSink(io.StringIO(), CompactStyle())
        sink.begin_sequence()
        with pytest.raises(TranscodeError, match="outside a mapping"):
            sink.key("a")

    def test_rejected_key_writes_nothing(self):
        stream = io.StringIO()
        sink = JsonSink(stream, CompactStyle())
        sink.begin_mapping()
        with pytest.raises(UnsupportedKeyType):
            sink.key(None)
        assert stream.getvalue() == "{"


# =========================================================================
# YAML
# =========================================================================

class TestYamlOutput:
    """Block-style YAML with type-preserving quoting."""

    def test_nested_document(self, list_cursor):
        events = [
            MAPPING_START,
            scalar("a"), scalar(1),
            scalar("b"), SEQUENCE_START, scalar(1), scalar(2), SEQUENCE_END,
            scalar("c"), MAPPING_START, scalar("d"), scalar("x"), MAPPING_END,
            MAPPING_END,
        ]
        assert _write(YamlOutput, [list_cursor(events)]) == "a: 1\nb:\n- 1\n- 2\nc:\n  d: x\n"

    def test_key_order_is_not_sorted(self, list_cursor):
        events = [MAPPING_START, scalar("z"), scalar(1), scalar("a"), scalar(2), MAPPING_END]
        assert _write(YamlOutput, [list_cursor(events)]) == "z: 1\na: 2\n"

    def test_ambiguous_strings_are_quoted(self, list_cursor):
        events = [
            MAPPING_START,
            scalar("n"), scalar("123"),
            scalar("t"), scalar("true"),
            scalar("e"), scalar(""),
            scalar("z"), scalar(None),
            MAPPING_END,
        ]
        text = _write(YamlOutput, [list_cursor(events)])
        assert text == "n: '123'\nt: 'true'\ne: ''\nz: null\n"

    def test_yaml_1_1_words_are_plain(self, list_cursor):
        events = [SEQUENCE_START, scalar("on"), scalar("yes"), scalar("NO"), scalar("1:30"), SEQUENCE_END]
        assert _write(YamlOutput, [list_cursor(events)]) == "- on\n- yes\n- NO\n- 1:30\n"

    @pytest.mark.parametrize("text", ["017", "0o17", "0x1F", "1e3", ".5", "Null", "~", "FALSE"])
    def test_core_schema_lookalikes_are_quoted(self, list_cursor, text):
        written = _write(YamlOutput, [list_cursor([SEQUENCE_START, scalar(text), SEQUENCE_END])])
        assert written == "- '{}'\n".format(text)

    def test_special_floats(self, list_cursor):
        events = [SEQUENCE_START, scalar(float("inf")), scalar(float("nan")), scalar(2.0), SEQUENCE_END]
        assert _write(YamlOutput, [list_cursor(events)]) == "- .inf\n- .nan\n- 2.0\n"

    def test_unicode_verbatim(self, list_cursor):
        events = [MAPPING_START, scalar("name"), scalar("café"), MAPPING_END]
        assert _write(YamlOutput, [list_cursor(events)]) == "name: café\n"

    def test_non_string_keys(self, list_cursor):
        events = [MAPPING_START, scalar(1), scalar("one"), scalar(True), scalar("yes"), MAPPING_END]
        assert _write(YamlOutput, [list_cursor(events)]) == "1: one\ntrue: yes\n"

    def test_documents_are_separated(self, list_cursor):
        cursors = [
            list_cursor([MAPPING_START, scalar("a"), scalar(1), MAPPING_END]),
            list_cursor([MAPPING_START, scalar("b"), scalar(2), MAPPING_END]),
        ]
        assert _write(YamlOutput, cursors) == "a: 1\n---\nb: 2\n"

    def test_no_documents_writes_nothing(self):
        assert _write(YamlOutput, []) == ""

    def test_unsupported_value(self, list_cursor):
        output = YamlOutput(io.StringIO())
        with pytest.raises(UnsupportedValue):
            output.transcode_from(list_cursor([scalar(b"raw")]))
