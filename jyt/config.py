"""Configuration defaults, extension detection, and .env loading.

WHY: A few policy choices (which input format to assume when detection
fails, the default output format, the nesting limit) are reasonable to
change per environment rather than hard-code. Keeping them here, as plain
data, makes them easy to find and override.

HOW: python-dotenv loads the .env file on import. Defaults are read from
environment variables with fallbacks. ``detect_format()`` maps a path's
extension to a Format using EXTENSION_FORMATS.

RULES:
- EXTENSION_FORMATS keys are lowercase and include the dot
- An unknown or missing extension is "no opinion" (None), never an error
- Invalid environment values raise at use, with the variable named
- Nothing here reads input files
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from jyt.core.bridge import DEFAULT_MAX_DEPTH
from jyt.core.formats import Format

# Load .env from the working directory (where the command is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Extension-based format detection
# ---------------------------------------------------------------------------

EXTENSION_FORMATS: dict[str, Format] = {
    ".json": Format.JSON,
    ".yaml": Format.YAML,
    ".yml": Format.YAML,
    ".toml": Format.TOML,
}
"""File extensions (lowercase, with dot) that identify an input format."""


def detect_format(path: Optional[Path]) -> Optional[Format]:
    """Guess the input format from a file extension.

    Returns None for standard input, ``-``, or an unknown extension.
    """
    if path is None or str(path) == "-":
        return None
    return EXTENSION_FORMATS.get(path.suffix.lower())


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

DEFAULT_FROM = os.getenv("JYT_DEFAULT_FROM", "yaml")
"""Input format used when neither ``-f`` nor the extension decides.

YAML parses single-document JSON as well, so it is the broadest choice,
though slower than reading JSON as JSON.
"""

DEFAULT_TO = os.getenv("JYT_DEFAULT_TO", "json")
LOG_LEVEL = os.getenv("JYT_LOG_LEVEL", "WARNING").upper()


def default_input_format() -> Format:
    """The configured fallback input format."""
    return Format.parse(DEFAULT_FROM)


def max_depth() -> int:
    """Container nesting limit from JYT_MAX_DEPTH.

    Raises:
        ValueError: the variable is set but is not a positive integer.
    """
    raw = os.getenv("JYT_MAX_DEPTH", "").strip()
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        raise ValueError("JYT_MAX_DEPTH must be a positive integer, got {!r}".format(raw))
    return value
