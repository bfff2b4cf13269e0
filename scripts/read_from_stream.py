"""
Demo script: read '|' delimited records from an in-memory stream.

Usage:
    python scripts/read_from_stream.py
"""

from __future__ import annotations

import io
import logging

import hastycsv

CARS = b"""Honda|Acura NSX|2017|18.1
Chevrolet|Corvette|2016|16.5
BMW|M3|2015|18.7
Audi|A3|2014|25.4"""

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("read_from_stream")


def main() -> None:
    reader = hastycsv.Reader(delimiter="|")

    def on_record(i, fields):
        log.info(
            "line %d: make=%s, model=%s, year=%d, mpg=%s",
            i,
            fields[0].as_text(),
            fields[1].as_text(),
            fields[2].as_uint32(),
            fields[3].as_float32(),
        )
        return None  # return a message or exception here to stop reading

    try:
        reader.read(io.BytesIO(CARS), on_record)
    except hastycsv.HastyCsvError as exc:
        log.error("Error parsing csv stream: %s", exc)


if __name__ == "__main__":
    main()
