"""
Line splitting for hastycsv.

``split_line`` partitions one record line into exactly ``len(fields)``
spans, writing them into the caller's pre-sized slot table. It is a
single left-to-right scan with ``bytearray.find``; no bytes are copied.

The last slot always receives the remainder of the line, delimiters
included. With a one-slot table the whole line is the only field.
"""

from __future__ import annotations

from collections.abc import Sequence

from hastycsv.exceptions import MalformedRecordError
from hastycsv.field import Field


def count_fields(line: bytes | bytearray, delimiter: int, end: int | None = None) -> int:
    """Number of fields *line* splits into: one more than its delimiters."""
    if end is None:
        end = len(line)
    return line.count(delimiter, 0, end) + 1


def split_line(
    line: bytearray,
    delimiter: int,
    fields: Sequence[Field],
    end: int | None = None,
) -> None:
    """Split ``line[:end]`` on *delimiter* into *fields*, in place.

    Args:
        line: The record line buffer.
        delimiter: Delimiter byte value (e.g. ``ord(",")``).
        fields: Slot table; its length is the expected field count.
        end: Offset where the record ends (terminator excluded).
            Defaults to ``len(line)``.

    Raises:
        MalformedRecordError: If fewer than ``len(fields) - 1``
            delimiters are found.
    """
    if end is None:
        end = len(line)

    last = len(fields) - 1
    start = 0
    for i in range(last):
        idx = line.find(delimiter, start, end)
        if idx == -1:
            raise MalformedRecordError(
                f"expected {len(fields)} fields using delimiter '{chr(delimiter)}'",
                expected_fields=len(fields),
            )
        fields[i].bind(line, start, idx)
        start = idx + 1
    fields[last].bind(line, start, end)
