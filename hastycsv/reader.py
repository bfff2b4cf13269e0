"""
Streaming record reader for hastycsv.

``Reader.read()`` pulls lines from a stream, splits each one into a
fixed number of ``Field`` views and hands them to a callback::

    def on_record(line_number, fields):
        print(fields[0].as_text(), fields[1].as_uint32())

    Reader(delimiter="|").read(stream, on_record)

Session lifecycle (``ReaderState``):

- ``AWAITING_FIRST_LINE``: the delimiter is validated before anything is
  read. The first line fixes the field count (delimiters + 1) and the
  slot table is allocated once.
- ``READING_RECORDS``: every line, the first one included, is numbered
  from 1, split into the slot table and dispatched. After the callback
  returns the reader checks, in order, the deferred field error and the
  callback's return value; either one halts the session.
- ``HALTED``: the terminating error has been raised.
- ``EXHAUSTED``: the stream ended cleanly.

The slot table and its ``Field`` objects are reused for every line.
Callbacks must not keep fields (or their ``bytes()`` views) after they
return.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from hastycsv.config import DEFAULT_BUFFER_SIZE, DEFAULT_DELIMITER, ReaderConfig, validate_delimiter
from hastycsv.exceptions import CallbackAbortError, MalformedRecordError, ReadFailureError
from hastycsv.field import ErrorSlot, Field
from hastycsv.splitter import count_fields, split_line

logger = logging.getLogger(__name__)

NextRecord = Callable[[int, list[Field]], object]
"""Record callback: ``(line_number, fields) -> stop signal or None``."""

_LF = ord("\n")
_CR = ord("\r")


class ReaderState(enum.Enum):
    """Lifecycle of a reading session."""

    AWAITING_FIRST_LINE = "awaiting_first_line"
    READING_RECORDS = "reading_records"
    HALTED = "halted"
    EXHAUSTED = "exhausted"


def _iter_lines(stream: Iterable[bytes | str]) -> Iterator[tuple[bytearray, int]]:
    """Yield ``(line_buffer, end)`` for each line of *stream*.

    ``end`` excludes a trailing ``\\n`` and one ``\\r`` before it. Text
    lines are encoded as UTF-8. ``OSError`` from the stream becomes
    ``ReadFailureError``.
    """
    lines = iter(stream)
    while True:
        try:
            raw = next(lines)
        except StopIteration:
            return
        except OSError as exc:
            raise ReadFailureError(f"Error scanning input: {exc}") from exc

        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        line = bytearray(raw)
        end = len(line)
        if end and line[end - 1] == _LF:
            end -= 1
        if end and line[end - 1] == _CR:
            end -= 1
        yield line, end


class Reader:
    """Reads delimiter-separated records from a line stream.

    Attributes:
        delimiter: Field delimiter; a one-character ASCII ``str``, one-byte
            ``bytes`` or byte value 0-255 other than ``\\r``/``\\n``.
            Checked at the start of every read.
        buffer_size: Buffer size used by ``read_file()``.

    One ``Reader`` runs one session at a time. Independent readers share
    no state and may be used from different threads.
    """

    def __init__(
        self,
        delimiter: str | bytes | int = DEFAULT_DELIMITER,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self.delimiter = delimiter
        self.buffer_size = buffer_size
        self._errors = ErrorSlot()
        self._fields: list[Field] = []
        self._line_number = 0
        self._state = ReaderState.AWAITING_FIRST_LINE

    @classmethod
    def from_config(cls, config: ReaderConfig) -> Reader:
        """Build a reader from a validated ``ReaderConfig``."""
        return cls(delimiter=config.delimiter, buffer_size=config.buffer_size)

    # -- Properties ---------------------------------------------------------

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def line_number(self) -> int:
        """Number of the last line read (1-based, 0 before the first)."""
        return self._line_number

    @property
    def field_count(self) -> int:
        """Fields per record, 0 until the first line has been read."""
        return len(self._fields)

    def __repr__(self) -> str:
        return (
            f"Reader(delimiter={self.delimiter!r}, state={self._state.value}, "
            f"line_number={self._line_number})"
        )

    # -- Reading ------------------------------------------------------------

    def read(self, stream: Iterable[bytes | str], next_record: NextRecord) -> int:
        """Read every record of *stream*, calling *next_record* for each.

        Args:
            stream: Binary (or text) stream, or any iterable of lines.
            next_record: Called as ``next_record(line_number, fields)``.
                Returning a truthy value (an error message, an exception
                instance, ...) stops the read with ``CallbackAbortError``. Exceptions raised
                by the callback propagate unchanged.

        Returns:
            The number of records dispatched.

        Raises:
            InvalidDelimiterError: If the delimiter is unusable. Nothing
                is read from *stream*.
            MalformedRecordError: If a line has too few fields.
            FieldParseError: The first numeric coercion failure of a
                record, raised after that record's callback.
            CallbackAbortError: If the callback asked to stop.
            ReadFailureError: If the stream raised ``OSError``.
        """
        self._reset()
        try:
            delim = validate_delimiter(self.delimiter)
            for line, end in _iter_lines(stream):
                if self._state is ReaderState.AWAITING_FIRST_LINE:
                    self._init_fields(line, delim, end)

                self._line_number += 1
                try:
                    split_line(line, delim, self._fields, end)
                except MalformedRecordError as exc:
                    exc.at_line(self._line_number)
                    exc.line = line[:end].decode("utf-8", errors="replace")
                    raise

                signal = next_record(self._line_number, self._fields)

                if self._errors:
                    raise self._errors.error.at_line(self._line_number)
                if signal:
                    cause = signal if isinstance(signal, BaseException) else None
                    raise CallbackAbortError(signal, line_number=self._line_number) from cause
        except Exception as exc:
            self._state = ReaderState.HALTED
            logger.debug("Reading halted at line %d: %s", self._line_number, exc)
            raise

        self._state = ReaderState.EXHAUSTED
        return self._line_number

    def read_file(self, path: str | Path, next_record: NextRecord) -> int:
        """Open *path* with a ``buffer_size`` read buffer and ``read()`` it.

        Errors opening the file (e.g. ``FileNotFoundError``) propagate
        unchanged.
        """
        validate_delimiter(self.delimiter)
        logger.info("Reading %s (delimiter=%r)", path, self.delimiter)
        with open(path, "rb", buffering=self.buffer_size) as f:
            count = self.read(f, next_record)
        logger.info("Read %d records from %s", count, path)
        return count

    # -- Internals ----------------------------------------------------------

    def _reset(self) -> None:
        self._errors.clear()
        self._fields = []
        self._line_number = 0
        self._state = ReaderState.AWAITING_FIRST_LINE

    def _init_fields(self, line: bytearray, delim: int, end: int) -> None:
        """Size the slot table from the first line."""
        n = count_fields(line, delim, end)
        self._fields = [Field(self._errors) for _ in range(n)]
        self._state = ReaderState.READING_RECORDS
        logger.debug("Inferred %d fields from first line", n)


def read_file(
    path: str | Path,
    delimiter: str | bytes | int,
    next_record: NextRecord,
) -> int:
    """Read a delimited file with a default 32 KiB buffer.

    Shortcut for ``Reader(delimiter).read_file(path, next_record)``.
    """
    return Reader(delimiter=delimiter).read_file(path, next_record)
