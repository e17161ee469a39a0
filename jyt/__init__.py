"""jyt: translate between serialized data formats.

WHY: JSON, YAML, and TOML describe the same kinds of values (scalars,
sequences, mappings), yet converting between them usually means loading
the whole document into Python objects and dumping it again. jyt streams
each document through a shared event model instead, so any parser can
drive any writer directly.

HOW: Three layers. Input adapters turn each format's parser into a
Cursor of events, the core bridge copies one value from a cursor to a
sink, and output formatters turn events back into text. The stream driver
ties them together per document.

RULES:
- Input formats: JSON, YAML, TOML; output formats: JSON, YAML
- Adding a format = one adapter and/or one formatter plus a Format entry
- No intermediate value tree between parser and writer
"""

__version__ = "0.1.0"
