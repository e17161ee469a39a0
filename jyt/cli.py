"""Command-line interface: translate between serialized data formats.

WHY: Users need a pipe-friendly command that reads JSON, YAML, or TOML
and writes JSON or YAML. The CLI is thin glue: it resolves the formats and
the input bytes, then hands everything to ``jyt.core.stream.run``.

HOW: argparse collects ``-t``/``-f`` as names; main() resolves them with
Format's own parsers, so unknown names and input-only destinations are
rejected before any input is read. The source format comes from ``-f``,
else the file extension, else the configured default. Output goes to
stdout; JSON is pretty on a terminal and compact otherwise.

RULES:
- Formats may be given by full name or first letter (``-ty`` == ``-t yaml``)
- No file argument, or ``-``, reads standard input
- Diagnostics, argument errors included, are one line on stderr:
  ``jyt error: <message>``, exit 1
- A closed downstream pipe is a silent, successful exit
- Ctrl-C exits 130
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from jyt import __version__, config
from jyt.core.formats import Format
from jyt.core.stream import run
from jyt.errors import JytError

logger = logging.getLogger(__name__)

_DESCRIPTION = """\
Translate between serialized data formats.

Formats may be given by their full name or first character
(e.g. '-ty' == '-t yaml'):

  json: input and output, multi-document with self-delimiting values
        (object, array, string) and/or whitespace between values
  yaml: input and output, multi-document with "---" syntax
  toml: input only, single document

With file inputs, the input format is detected from the file extension.
Otherwise it defaults to '-f {default}' (set JYT_DEFAULT_FROM to change it).
YAML input also accepts single-document JSON, but more slowly than '-f json'.

JSON output is pretty-printed on a terminal and compact elsewhere.
"""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser whose errors follow the one-line diagnostic format."""

    def error(self, message: str) -> NoReturn:
        print("jyt error: {}".format(message), file=sys.stderr)
        sys.exit(1)


def resolve_source(explicit: Optional[Format], path: Optional[Path]) -> Format:
    """Pick the input format: ``-f``, else the extension, else the default."""
    if explicit is not None:
        return explicit
    detected = config.detect_format(path)
    if detected is not None:
        return detected
    fallback = config.default_input_format()
    logger.debug("No input format detected, assuming %s", fallback)
    return fallback


def read_input(path: Optional[Path]) -> bytes:
    """Read the whole input into memory.

    WHY: Every parser works on a complete in-memory buffer; reading
    incrementally would not reduce peak memory.

    RULES:
    - None or ``-`` reads standard input in binary mode
    - Anything else is read as a file; OSError propagates
    """
    if path is None or str(path) == "-":
        return sys.stdin.buffer.read()
    return path.read_bytes()


def _discard_stdout() -> None:
    """Point stdout at /dev/null so the interpreter's final flush is silent."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        # stdout is not a real file descriptor (e.g. captured in tests)
        pass


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running a conversion.
    """
    parser = _Parser(
        prog="jyt",
        description=_DESCRIPTION.format(default=config.DEFAULT_FROM),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-t", "--to",
        dest="to_format",
        default=config.DEFAULT_TO,
        metavar="FORMAT",
        help="Format to convert to (default: %(default)s).",
    )

    parser.add_argument(
        "-f", "--from",
        dest="from_format",
        default=None,
        metavar="FORMAT",
        help="Format to convert from (default: detect, else {}).".format(config.DEFAULT_FROM),
    )

    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        default=None,
        help="File to read input from (default: stdin).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``jyt`` command and ``python -m jyt``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        destination = Format.parse_output(args.to_format)
        explicit = Format.parse(args.from_format) if args.from_format else None
        source = resolve_source(explicit, args.file)
        data = read_input(args.file)
        result = run(
            data,
            source,
            destination,
            sys.stdout,
            max_depth=config.max_depth(),
        )
    except KeyboardInterrupt:
        sys.exit(130)
    except (JytError, ValueError, OSError) as e:
        print("jyt error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    if result.closed_early:
        _discard_stdout()


if __name__ == "__main__":
    main()
