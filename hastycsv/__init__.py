"""
hastycsv: a fast, simple and NOT RFC 4180 compliant CSV reader.

Records are one per line, fields are separated by a single-byte
delimiter, and there is no quoting or escaping. The number of fields is
taken from the first line and every later line must have at least that
many.

Public API surface:

- ``Reader`` -- streaming reader. ``Reader(delimiter).read(stream, fn)``
  calls ``fn(line_number, fields)`` for every line, first line included.
- ``read_file(path, delimiter, fn)`` -- same, for a file on disk opened
  with a 32 KiB buffer.
- ``Field`` -- view over one field of the current line: ``as_text()``,
  ``bytes()``, ``is_empty()``, ``to_lower()``, ``as_uint32()``,
  ``as_float32()``. Numeric accessors never raise; the first failure
  stops the read after the current record.
- ``read_frame(source, ...)`` -- collect every record into a pandas
  DataFrame of strings.
- ``parse_uint32`` / ``parse_float32`` -- the byte-level number parsers.
- ``ReaderConfig``, ``load_config``, ``save_config`` -- YAML-backed
  settings.

Example::

    import io
    import hastycsv

    data = io.BytesIO(b"bill|30|154.5\\nmary|35|125.1")

    def on_record(i, fields):
        print(i, fields[0].as_text(), fields[1].as_uint32(), fields[2].as_float32())

    hastycsv.Reader(delimiter="|").read(data, on_record)
"""

from __future__ import annotations

from hastycsv.config import ReaderConfig, load_config, save_config
from hastycsv.exceptions import (
    CallbackAbortError,
    ConfigValidationError,
    FieldParseError,
    FloatRangeError,
    HastyCsvError,
    InvalidDelimiterError,
    InvalidDigitError,
    InvalidFloatError,
    MalformedRecordError,
    ReadFailureError,
    TooLongError,
    Uint32OverflowError,
)
from hastycsv.field import ErrorSlot, Field
from hastycsv.frame import read_frame
from hastycsv.numbers import MAX_UINT32, parse_float32, parse_uint32
from hastycsv.reader import Reader, ReaderState, read_file

__all__ = [
    "Reader",
    "ReaderState",
    "read_file",
    "read_frame",
    "Field",
    "ErrorSlot",
    "parse_uint32",
    "parse_float32",
    "MAX_UINT32",
    "ReaderConfig",
    "load_config",
    "save_config",
    "HastyCsvError",
    "ConfigValidationError",
    "InvalidDelimiterError",
    "MalformedRecordError",
    "FieldParseError",
    "InvalidDigitError",
    "TooLongError",
    "Uint32OverflowError",
    "InvalidFloatError",
    "FloatRangeError",
    "CallbackAbortError",
    "ReadFailureError",
]
