"""
Shared test fixtures and sample data for hastycsv tests.

Sample inputs are defined here as module-level constants so every test
module works from the same records. File-based fixtures write them to
``tmp_path``; no checked-in input files are needed.
"""

from __future__ import annotations

import io

import pytest

# ---------------------------------------------------------------------------
# Sample data -- edit here if the shared records change
# ---------------------------------------------------------------------------
PERSONS_PIPE = b"bill|30|154.5\nmary|35|125.1"

BAD_UINT_PIPE = b"John|123xyz|12.5\nMary|25|130.5"

CARS_PIPE = (
    b"Honda|Acura NSX|2017|18.1\n"
    b"Chevrolet|Corvette|2016|16.5\n"
    b"BMW|M3|2015|18.7\n"
    b"Audi|A3|2014|25.4\n"
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def persons_stream() -> io.BytesIO:
    """Two 3-field person records, '|' delimited, no trailing newline."""
    return io.BytesIO(PERSONS_PIPE)


@pytest.fixture()
def bad_uint_stream() -> io.BytesIO:
    """Line 1 has an unparseable uint32 in field 1."""
    return io.BytesIO(BAD_UINT_PIPE)


@pytest.fixture()
def cars_file(tmp_path):
    """The four-record cars sample written to a temp file."""
    path = tmp_path / "sample_data.csv"
    path.write_bytes(CARS_PIPE)
    return path


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (reads files from disk)",
    )
