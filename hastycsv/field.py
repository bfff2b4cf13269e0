"""
Field views for hastycsv records.

A ``Field`` is a window ``[start, end)`` over the ``bytearray`` holding
the current record line. The reader allocates one ``Field`` per column
when it sees the first line and rebinds the same objects on every later
line, so a field is only meaningful inside the callback invocation that
received it.

Numeric accessors never raise. A parse failure is recorded in the
session's ``ErrorSlot`` (first failure wins) and the accessor returns
zero; the reader checks the slot once the callback returns and stops
with that error.
"""

from __future__ import annotations

import numpy as np

from hastycsv.exceptions import FieldParseError
from hastycsv.numbers import parse_float32, parse_uint32

# Maps A-Z to a-z and leaves every other byte alone.
_ASCII_LOWER = bytes.maketrans(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    b"abcdefghijklmnopqrstuvwxyz",
)


class ErrorSlot:
    """Holds the first field-level error of a reading session."""

    __slots__ = ("error",)

    def __init__(self) -> None:
        self.error: FieldParseError | None = None

    def record(self, error: FieldParseError) -> None:
        """Keep *error* unless an earlier one is already recorded."""
        if self.error is None:
            self.error = error

    def clear(self) -> None:
        self.error = None

    def __bool__(self) -> bool:
        return self.error is not None

    def __repr__(self) -> str:
        return f"ErrorSlot({self.error!r})"


class Field:
    """A non-owning view over one delimiter-separated span of a line.

    Attributes are set by ``bind()``; a freshly created field is empty.
    """

    __slots__ = ("_errors", "_line", "_start", "_end")

    def __init__(self, errors: ErrorSlot) -> None:
        self._errors = errors
        self._line = bytearray()
        self._start = 0
        self._end = 0

    @classmethod
    def from_bytes(cls, data: bytes | str, errors: ErrorSlot | None = None) -> Field:
        """Build a standalone field over a copy of *data*."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        field = cls(errors if errors is not None else ErrorSlot())
        line = bytearray(data)
        field.bind(line, 0, len(line))
        return field

    def bind(self, line: bytearray, start: int, end: int) -> None:
        """Point this field at ``line[start:end]``."""
        self._line = line
        self._start = start
        self._end = end

    # -- Raw access ---------------------------------------------------------

    def is_empty(self) -> bool:
        """Return True if the field has no bytes."""
        return self._end == self._start

    def bytes(self) -> memoryview:
        """Return a zero-copy view of the field's bytes.

        The view aliases the line buffer: it sees ``to_lower()`` changes
        and must not be kept past the callback.
        """
        return memoryview(self._line)[self._start:self._end]

    def as_text(self) -> str:
        """Decode the field as UTF-8, replacing invalid sequences."""
        return self._line[self._start:self._end].decode("utf-8", errors="replace")

    def to_lower(self) -> Field:
        """Lowercase ASCII letters in place and return this field.

        Mutates the shared line buffer, so every other view over the same
        bytes observes the change.
        """
        start, end = self._start, self._end
        self._line[start:end] = self._line[start:end].translate(_ASCII_LOWER)
        return self

    # -- Numeric coercion ---------------------------------------------------

    def as_uint32(self) -> int:
        """Parse the field as a uint32, deferring any error.

        Returns 0 when the field is not a valid uint32.
        """
        try:
            return parse_uint32(self._line, self._start, self._end)
        except FieldParseError as exc:
            self._errors.record(exc.within("Can't parse field as uint32"))
            return 0

    def as_float32(self) -> np.float32:
        """Parse the field as a float32, deferring any error.

        Returns ``numpy.float32(0)`` when the field is not a valid float.
        """
        try:
            return parse_float32(self._line, self._start, self._end)
        except FieldParseError as exc:
            self._errors.record(exc)
            return np.float32(0)

    # -- Dunder helpers -----------------------------------------------------

    def __len__(self) -> int:
        return self._end - self._start

    def __bytes__(self) -> bytes:
        return bytes(self._line[self._start:self._end])

    def __str__(self) -> str:
        return self.as_text()

    def __repr__(self) -> str:
        return f"Field({bytes(self)!r})"
