"""
Demo script: read a '|' delimited file from disk.

Usage:
    python scripts/read_from_file.py                       # writes and reads a sample file
    python scripts/read_from_file.py path/to/data.csv
    python scripts/read_from_file.py data.csv --config reader.yaml

The file is expected to hold make|model|year|mpg records. With
``--config`` the delimiter and buffer size come from a YAML reader
config instead of the defaults.
"""

from __future__ import annotations

import argparse
import logging
import sys
import tempfile
from pathlib import Path

import hastycsv

SAMPLE = """Honda|Acura NSX|2017|18.1
Chevrolet|Corvette|2016|16.5
BMW|M3|2015|18.7
Audi|A3|2014|25.4
"""

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("read_from_file")


def _on_record(i, fields):
    log.info(
        "line %d: make=%s, model=%s, year=%d, mpg=%s",
        i,
        fields[0].as_text(),
        fields[1].as_text(),
        fields[2].as_uint32(),
        fields[3].as_float32(),
    )


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Read a make|model|year|mpg file.")
    p.add_argument("path", nargs="?", help="Input file (default: a generated sample)")
    p.add_argument("--config", help="YAML reader config")
    args = p.parse_args(argv)

    if args.config:
        reader = hastycsv.Reader.from_config(hastycsv.load_config(args.config))
    else:
        reader = hastycsv.Reader(delimiter="|")

    with tempfile.TemporaryDirectory() as tmp:
        path = args.path
        if path is None:
            path = Path(tmp) / "sample_data.csv"
            path.write_text(SAMPLE, encoding="utf-8")

        try:
            reader.read_file(path, _on_record)
        except (hastycsv.HastyCsvError, OSError) as exc:
            log.error("Error parsing csv file: %s", exc)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
