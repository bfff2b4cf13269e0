"""
Benchmark: hastycsv vs the stdlib csv module vs pandas.read_csv.

Usage:
    python scripts/benchmark.py                      # 1,000,000 records x 5 fields
    python scripts/benchmark.py --records 100000
    python scripts/benchmark.py --file data.csv --delimiter ,

Each record holds the same integer repeated in every field
(``1000000+i``), '|' delimited. Two access patterns are timed per
reader: reading every field as a string, and as an unsigned integer.
"""

from __future__ import annotations

import argparse
import csv
import logging
import tempfile
import time
from pathlib import Path

import pandas as pd

import hastycsv

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("benchmark")


# ---------------------------------------------------------------------------
# Data generation
# ---------------------------------------------------------------------------

def generate(path: Path, records: int, fields: int, delimiter: str) -> None:
    """Write *records* lines of *fields* copies of ``1000000+i``."""
    base = 1_000_000
    with open(path, "w", encoding="utf-8") as f:
        for i in range(records):
            if i > 0:
                f.write("\n")
            f.write(delimiter.join([str(base + i)] * fields))


# ---------------------------------------------------------------------------
# Readers under test
# ---------------------------------------------------------------------------

def hasty_strings(path: Path, delimiter: str) -> int:
    def on_record(i, fields):
        for field in fields:
            field.as_text()

    return hastycsv.read_file(path, delimiter, on_record)


def hasty_ints(path: Path, delimiter: str) -> int:
    def on_record(i, fields):
        for field in fields:
            field.as_uint32()

    return hastycsv.read_file(path, delimiter, on_record)


def stdlib_strings(path: Path, delimiter: str) -> int:
    count = 0
    with open(path, newline="", encoding="utf-8") as f:
        for row in csv.reader(f, delimiter=delimiter):
            for value in row:
                pass
            count += 1
    return count


def stdlib_ints(path: Path, delimiter: str) -> int:
    count = 0
    with open(path, newline="", encoding="utf-8") as f:
        for row in csv.reader(f, delimiter=delimiter):
            for value in row:
                int(value)
            count += 1
    return count


def pandas_strings(path: Path, delimiter: str) -> int:
    return len(pd.read_csv(path, sep=delimiter, header=None, dtype=str))


def pandas_ints(path: Path, delimiter: str) -> int:
    return len(pd.read_csv(path, sep=delimiter, header=None, dtype="uint32"))


BENCHMARKS = [
    ("hastycsv  strings", hasty_strings),
    ("hastycsv  uint32 ", hasty_ints),
    ("csv       strings", stdlib_strings),
    ("csv       int    ", stdlib_ints),
    ("pandas    strings", pandas_strings),
    ("pandas    uint32 ", pandas_ints),
]


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def run(path: Path, delimiter: str) -> None:
    size_mb = path.stat().st_size / (1024 ** 2)
    log.info("Input: %s (%.1f MB)", path, size_mb)
    for name, fn in BENCHMARKS:
        start = time.perf_counter()
        count = fn(path, delimiter)
        elapsed = time.perf_counter() - start
        log.info(
            "  %s  %10s records  %7.3fs  %8.1f MB/s",
            name, f"{count:,}", elapsed, size_mb / elapsed if elapsed else 0.0,
        )


def main() -> None:
    p = argparse.ArgumentParser(description="Compare hastycsv with csv and pandas.")
    p.add_argument("--records", type=int, default=1_000_000)
    p.add_argument("--fields", type=int, default=5)
    p.add_argument("--delimiter", default="|")
    p.add_argument("--file", help="Use an existing file instead of generating one")
    args = p.parse_args()

    if args.file:
        run(Path(args.file), args.delimiter)
        return

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "bench.csv"
        log.info("Generating %s records x %d fields", f"{args.records:,}", args.fields)
        generate(path, args.records, args.fields, args.delimiter)
        run(path, args.delimiter)


if __name__ == "__main__":
    main()
