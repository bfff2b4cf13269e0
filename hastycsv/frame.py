"""
Collect hastycsv records into a pandas DataFrame.

``read_frame`` is a convenience on top of ``Reader``: every field is
copied out as text, so the result is safe to keep after reading ends.
No column typing is attempted; all columns hold ``str`` values.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from hastycsv.config import ReaderConfig
from hastycsv.field import Field
from hastycsv.reader import Reader

logger = logging.getLogger(__name__)


def read_frame(
    source: str | Path | Iterable[bytes | str],
    *,
    delimiter: str | bytes | int | None = None,
    header: bool = False,
    config: ReaderConfig | None = None,
) -> pd.DataFrame:
    """Read all records of a file or stream into a DataFrame of strings.

    Args:
        source: Path to a delimited file, or an already-open stream.
        delimiter: Field delimiter. Overrides ``config.delimiter``.
        header: If ``True``, the first record supplies the column names
            and is not included in the rows.
        config: Reader settings. Defaults to ``ReaderConfig()``.

    Returns:
        ``pandas.DataFrame`` with one row per record. Columns are named
        from the header when ``header=True``, otherwise ``0..N-1``.

    Raises:
        Any ``HastyCsvError`` raised by the reader.
    """
    if config is None:
        config = ReaderConfig()
    reader = Reader.from_config(config)
    if delimiter is not None:
        reader.delimiter = delimiter

    rows: list[list[str]] = []
    columns: list[str] | None = None

    def collect(line_number: int, fields: list[Field]) -> None:
        nonlocal columns
        values = [field.as_text() for field in fields]
        if header and columns is None:
            columns = values
            return
        rows.append(values)

    if isinstance(source, (str, Path)):
        reader.read_file(source, collect)
    else:
        reader.read(source, collect)

    logger.debug("Collected %d rows x %d columns", len(rows), reader.field_count)
    if columns is None:
        columns = list(range(reader.field_count))
    return pd.DataFrame(rows, columns=columns, dtype=object)
