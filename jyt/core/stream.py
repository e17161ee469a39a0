"""Stream driver: split input into documents and feed them to an output.

WHY: Each input format has its own notion of "several documents in one
input": JSON concatenates self-delimiting values, YAML separates documents
with ``---``, TOML has exactly one. Output framing and the pretty/compact
decision are also per run, not per document. This module owns those
policies so the bridge can stay a pure structural copy.

HOW: ``iter_documents()`` yields one cursor per document using the source
format's iteration policy. ``transcode_all_input()`` hands each cursor to
the run's Output, strictly one at a time. ``run()`` is the single entry
point: it selects the output once, drives every document, flushes, and
classifies I/O failures.

RULES:
- A document is completely written before the next one is read
- An empty JSON or YAML input is zero documents and succeeds
- TOML input is always exactly one document
- JSON style is pretty iff the destination is interactive, decided once
- A broken pipe ends the run successfully with ``closed_early=True``;
  any other OSError becomes IOFailure
- Parse and transcode errors propagate unchanged and abort the run;
  output already written for earlier documents is left in place, and
  may be followed by the partial text of the failing document (the
  sinks write as events arrive and nothing is rolled back)
"""

from __future__ import annotations

import errno
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, TextIO

from jyt.adapters import Cursor, JsonCursor, TomlCursor, YamlDocuments
from jyt.core.bridge import DEFAULT_MAX_DEPTH
from jyt.core.formats import Format
from jyt.errors import IOFailure, UnsupportedOutputFormat
from jyt.formatters import OUTPUTS, JsonOutput, Output

logger = logging.getLogger(__name__)


@dataclass
class TranscodeResult:
    """Outcome of a successful run.

    Attributes:
        documents: Number of documents completely written.
        closed_early: True when the destination stopped reading (broken
                      pipe) before all input was written.
    """

    documents: int = 0
    closed_early: bool = False


def _json_documents(data: bytes) -> Iterator[Cursor]:
    cursor = JsonCursor.from_bytes(data)
    while not cursor.at_end():
        yield cursor


def _yaml_documents(data: bytes) -> Iterator[Cursor]:
    return iter(YamlDocuments(data))


def _toml_documents(data: bytes) -> Iterator[Cursor]:
    yield TomlCursor.from_bytes(data)


_DOCUMENT_READERS: Dict[Format, Callable[[bytes], Iterator[Cursor]]] = {
    Format.JSON: _json_documents,
    Format.YAML: _yaml_documents,
    Format.TOML: _toml_documents,
}


def iter_documents(data: bytes, source: Format) -> Iterator[Cursor]:
    """Yield one cursor per document in ``data``.

    The same cursor object may be yielded repeatedly (JSON); callers must
    finish with each yielded cursor before advancing the iterator.
    """
    return _DOCUMENT_READERS[source](data)


def is_interactive(stream: TextIO) -> bool:
    """True when ``stream`` is attached to a terminal."""
    isatty = getattr(stream, "isatty", None)
    return bool(isatty is not None and isatty())


def select_output(
    destination: Format,
    stream: TextIO,
    interactive: bool,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Output:
    """Create the run's Output for ``destination``.

    Raises:
        UnsupportedOutputFormat: ``destination`` is input-only.
    """
    if not destination.can_output:
        raise UnsupportedOutputFormat(destination)
    if destination is Format.JSON:
        output: Output = JsonOutput(stream, pretty=interactive, max_depth=max_depth)
    else:
        output = OUTPUTS[destination](stream, max_depth=max_depth)
    logger.debug("Writing %s output", output.name)
    return output


def transcode_all_input(
    data: bytes,
    source: Format,
    output: Output,
    result: Optional[TranscodeResult] = None,
) -> TranscodeResult:
    """Transcode every document in ``data`` into ``output``.

    Does not close ``output``; the caller owns the run.
    """
    if result is None:
        result = TranscodeResult()
    for cursor in iter_documents(data, source):
        output.transcode_from(cursor)
        result.documents += 1
        logger.debug("Transcoded %s document %d", source, result.documents)
    return result


def _is_broken_pipe(error: OSError) -> bool:
    return isinstance(error, BrokenPipeError) or error.errno == errno.EPIPE


def run(
    data: bytes,
    source: Format,
    destination: Format,
    stream: TextIO,
    interactive: Optional[bool] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> TranscodeResult:
    """Convert all of ``data`` from ``source`` to ``destination``.

    Args:
        data: The complete input.
        source: Format of ``data``.
        destination: Format to write; must be writable.
        stream: Text stream receiving the output. Flushed, not closed.
        interactive: Whether ``stream`` is a terminal. Detected with
                     ``isatty()`` when None.
        max_depth: Container nesting limit for every document.

    Returns:
        TranscodeResult with the number of documents written.

    Raises:
        UnsupportedOutputFormat: ``destination`` is input-only. Raised
            before any input is read.
        TranscodeError: A document is malformed or unrepresentable.
        IOFailure: ``stream`` failed for a reason other than a closed pipe.
    """
    if interactive is None:
        interactive = is_interactive(stream)
    output = select_output(destination, stream, interactive, max_depth)

    result = TranscodeResult()
    try:
        transcode_all_input(data, source, output, result)
        output.close()
        stream.flush()
    except OSError as e:
        if not _is_broken_pipe(e):
            raise IOFailure("cannot write output: {}".format(e.strerror or e)) from e
        logger.debug("Output closed after %d document(s)", result.documents)
        result.closed_early = True
    return result
