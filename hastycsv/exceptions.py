"""
Custom exception hierarchy for hastycsv.

Every error a reading session can end with derives from
``HastyCsvError``. Errors that are tied to a record carry the 1-based
``line_number`` once the reader has attached it, and render it as a
``Line <n>: `` prefix.

Groups:
- Structural errors (``InvalidDelimiterError``, ``MalformedRecordError``)
  are raised by the reader itself as soon as they are detected.
- Field errors (``FieldParseError`` and subclasses) are raised by the
  parsers in ``numbers.py``. ``Field`` accessors catch them and record
  the first one; the reader re-raises it after the callback returns.
- ``CallbackAbortError`` wraps whatever the callback returned to stop
  reading.
- ``ReadFailureError`` wraps an ``OSError`` from the input stream.
"""

from __future__ import annotations


class HastyCsvError(Exception):
    """Base exception for all hastycsv errors."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def at_line(self, line_number: int) -> HastyCsvError:
        """Attach the line number the error belongs to and return self."""
        self.line_number = line_number
        return self

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"Line {self.line_number}: {self.message}"


class ConfigValidationError(HastyCsvError):
    """Raised when a reader config file cannot be turned into a ReaderConfig."""


class InvalidDelimiterError(HastyCsvError):
    """Raised before reading when the delimiter is unusable.

    The delimiter must be exactly one byte and must not be a line
    terminator (``\\r`` or ``\\n``).
    """


class MalformedRecordError(HastyCsvError):
    """Raised when a line has fewer fields than the first line had."""

    def __init__(
        self,
        message: str,
        expected_fields: int,
        line: str | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(message, line_number=line_number)
        self.expected_fields = expected_fields
        self.line = line

    def __str__(self) -> str:
        text = super().__str__()
        if self.line is None:
            return text
        return f'{text}: "{self.line}"'


class FieldParseError(HastyCsvError):
    """Raised when a field cannot be coerced to the requested type.

    ``literal`` holds the field text exactly as it appeared in the line.
    ``context`` names the conversion being attempted when the error was
    deferred by a ``Field`` accessor, and prefixes the message.
    """

    def __init__(self, message: str, literal: str) -> None:
        super().__init__(message)
        self.literal = literal
        self.context: str | None = None

    def within(self, context: str) -> FieldParseError:
        """Set the conversion context and return self."""
        self.context = context
        return self

    def __str__(self) -> str:
        text = self.message if self.context is None else f"{self.context}: {self.message}"
        if self.line_number is None:
            return text
        return f"Line {self.line_number}: {text}"


class InvalidDigitError(FieldParseError):
    """A uint32 literal contains a byte outside ``0``-``9``."""

    def __init__(self, literal: str, char: str) -> None:
        super().__init__(
            f'"{literal}" contains non-numeric character \'{char}\'', literal
        )
        self.char = char


class TooLongError(FieldParseError):
    """A uint32 literal has more than 10 digits."""

    def __init__(self, literal: str) -> None:
        super().__init__(f'"{literal}" is too long to be parsed as a uint32', literal)


class Uint32OverflowError(FieldParseError):
    """A uint32 literal is numerically larger than 4294967295."""

    def __init__(self, literal: str) -> None:
        super().__init__(f'"{literal}" overflows uint32', literal)


class InvalidFloatError(FieldParseError):
    """A float literal does not match the decimal floating-point grammar."""

    def __init__(self, literal: str) -> None:
        super().__init__(f'"{literal}" is not a valid float32 literal', literal)


class FloatRangeError(FieldParseError):
    """A well-formed float literal is out of float32 range."""

    def __init__(self, literal: str) -> None:
        super().__init__(f'"{literal}" is out of range for float32', literal)


class CallbackAbortError(HastyCsvError):
    """Raised when the record callback returns a stop signal.

    ``signal`` is the value the callback returned.
    """

    def __init__(self, signal: object, line_number: int | None = None) -> None:
        super().__init__(str(signal), line_number=line_number)
        self.signal = signal


class ReadFailureError(HastyCsvError):
    """Raised when the underlying stream fails while lines are read."""
