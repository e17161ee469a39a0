"""Format registry: the closed set of formats jyt understands.

WHY: Argument parsing, extension detection, the stream driver, and the
output registry all need to agree on which formats exist and what each
one can do. A single enum keeps them in lockstep.

HOW: Format is a ``str`` enum whose values are the canonical lowercase
names. ``parse()`` accepts the full name or the one-letter alias. Two
capability properties answer "can this be written?" and "can one input
hold several documents?".

RULES:
- Exactly JSON, YAML, TOML; adding a format means extending this enum,
  the adapters, and the formatter registry together
- Aliases are the first character of the name: j, y, t
- TOML is input-only and single-document
- ``str(Format.JSON) == "json"``
"""

from __future__ import annotations

from enum import Enum

from jyt.errors import UnrecognizedFormat, UnsupportedOutputFormat


class Format(str, Enum):
    """A supported serialization format."""

    JSON = "json"
    YAML = "yaml"
    TOML = "toml"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> "Format":
        """Resolve a full format name or its one-letter alias.

        Raises:
            UnrecognizedFormat: ``name`` matches no format.
        """
        token = name.strip().lower()
        for fmt in cls:
            if token == fmt.value or token == fmt.value[0]:
                return fmt
        raise UnrecognizedFormat(name)

    @classmethod
    def parse_output(cls, name: str) -> "Format":
        """Resolve a format name and require that it can be written.

        Raises:
            UnrecognizedFormat: ``name`` matches no format.
            UnsupportedOutputFormat: the format is input-only.
        """
        fmt = cls.parse(name)
        if not fmt.can_output:
            raise UnsupportedOutputFormat(fmt)
        return fmt

    @property
    def can_output(self) -> bool:
        return self in _OUTPUT_FORMATS

    @property
    def is_multi_document(self) -> bool:
        return self in _MULTI_DOCUMENT_FORMATS


_OUTPUT_FORMATS = frozenset({Format.JSON, Format.YAML})
_MULTI_DOCUMENT_FORMATS = frozenset({Format.JSON, Format.YAML})
