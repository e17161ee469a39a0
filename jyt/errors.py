"""Exception hierarchy for format resolution, transcoding, and output.

WHY: The CLI needs to turn any failure into a one-line diagnostic, and it
needs to tell configuration mistakes, bad input, unrepresentable values,
and output failures apart. A small class hierarchy lets callers catch at
the granularity they care about.

HOW: Every error derives from JytError. Configuration errors also derive
from ValueError, so the CLI reports them with the other bad values.
Errors raised while copying a document derive from TranscodeError.

RULES:
- Messages are single-line and name the offending token or value
- MalformedInput carries the input format that rejected the data
- IOFailure wraps the original OSError as ``__cause__``
- A closed downstream pipe is never raised as IOFailure
"""

from __future__ import annotations

from typing import Any, Optional


class JytError(Exception):
    """Base class for every error jyt reports."""


class UnrecognizedFormat(JytError, ValueError):
    """A format name that is neither a full name nor a known alias."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__("'{}' is not a valid format".format(token))


class UnsupportedOutputFormat(JytError, ValueError):
    """An input-only format was requested as the destination."""

    def __init__(self, fmt: Any) -> None:
        self.format = fmt
        super().__init__("{} output is not supported".format(fmt))


class TranscodeError(JytError):
    """A document could not be copied from its source to the destination."""


class MalformedInput(TranscodeError):
    """The input bytes violate the claimed input format's grammar."""

    def __init__(self, fmt: Any, message: str) -> None:
        self.format = fmt
        self.detail = message
        super().__init__("invalid {} input: {}".format(fmt, message))


class UnsupportedValue(TranscodeError):
    """A value the destination format's type system cannot represent."""

    def __init__(self, value: Any, message: Optional[str] = None) -> None:
        self.value = value
        if message is None:
            message = "cannot serialize value {!r} of type {}".format(
                value, type(value).__name__,
            )
        super().__init__(message)


class UnsupportedKeyType(UnsupportedValue):
    """A mapping key the destination format cannot use as a key."""

    def __init__(self, value: Any, fmt: Any = None) -> None:
        if fmt is None:
            message = "mapping key must be a scalar, got {}".format(value)
        else:
            message = "{} cannot use {!r} as a mapping key".format(fmt, value)
        super().__init__(value, message)


class IOFailure(JytError):
    """The output destination stopped accepting bytes."""
