"""Input adapters: one cursor per input format.

WHY: Each input format's parser speaks its own API (a hand-driven JSON
scanner, PyYAML's event parser, tomli's table loader). Adapters expose all
of them through the same Cursor contract so the transcoding bridge can
read any of them.

HOW: Each module wraps one parser and translates its output into
``jyt.core.events`` events. Document splitting lives with the stream
driver, which knows each format's iteration policy.

RULES:
- Adapters never write output and never hold a reference to a sink
- Parser-specific exceptions are converted to MalformedInput here
"""

from jyt.adapters.base import Cursor
from jyt.adapters.json_cursor import JsonCursor
from jyt.adapters.toml_cursor import TomlCursor
from jyt.adapters.yaml_cursor import YamlCursor, YamlDocuments

__all__ = ["Cursor", "JsonCursor", "TomlCursor", "YamlCursor", "YamlDocuments"]
