"""
Unit tests for Field views and the deferred error slot (hastycsv.field).

Field accessors must never raise: numeric failures are recorded once in
the ErrorSlot and a zero is returned.
"""

from __future__ import annotations

import numpy as np
import pytest

from hastycsv.exceptions import InvalidDigitError, InvalidFloatError, TooLongError
from hastycsv.field import ErrorSlot, Field


class TestFieldText:
    """Raw and text access."""

    @pytest.mark.parametrize("value", ["", " ", "a", "abcdefg", "ABC123"])
    def test_as_text(self, value):
        field = Field.from_bytes(value)
        assert field.as_text() == value
        assert str(field) == value

    def test_is_empty(self):
        assert Field.from_bytes("").is_empty()
        assert not Field.from_bytes(" ").is_empty()

    def test_len(self):
        assert len(Field.from_bytes("abc")) == 3

    def test_bytes_is_view(self):
        field = Field.from_bytes(b"hello")
        view = field.bytes()
        assert isinstance(view, memoryview)
        assert view == b"hello"

    def test_dunder_bytes_is_copy(self):
        field = Field.from_bytes(b"hello")
        assert bytes(field) == b"hello"

    def test_invalid_utf8_is_replaced(self):
        field = Field.from_bytes(b"caf\xe9")
        assert field.as_text() == "caf\ufffd"

    def test_fresh_field_is_empty(self):
        field = Field(ErrorSlot())
        assert field.is_empty()
        assert field.as_text() == ""


class TestFieldToLower:
    """In-place ASCII lowercasing."""

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "ABC", "AbC", "!ABC-123?", "!@#$%^&*()_+", "AbC-123"],
    )
    def test_matches_lower(self, value):
        assert Field.from_bytes(value).to_lower().as_text() == value.lower()

    def test_example(self):
        assert Field.from_bytes("AbC-123").to_lower().as_text() == "abc-123"

    def test_returns_same_field(self):
        field = Field.from_bytes("ABC")
        assert field.to_lower() is field

    def test_non_ascii_untouched(self):
        """Only A-Z change; UTF-8 multi-byte sequences pass through."""
        field = Field.from_bytes("ÄBÇ")
        assert field.to_lower().as_text() == "ÄbÇ"

    def test_mutation_is_shared(self):
        """Lowering one view is visible through another over the same bytes."""
        errors = ErrorSlot()
        line = bytearray(b"HELLO,World")
        whole = Field(errors)
        whole.bind(line, 0, len(line))
        part = Field(errors)
        part.bind(line, 6, 11)
        view = whole.bytes()

        part.to_lower()

        assert whole.as_text() == "HELLO,world"
        assert view == b"HELLO,world"
        assert line == bytearray(b"HELLO,world")


class TestFieldUint32:
    """as_uint32() with deferred errors."""

    @pytest.mark.parametrize(
        "value, expected",
        [("0", 0), ("000", 0), ("1", 1), ("12", 12), ("12345678", 12345678), ("012", 12), ("4294967295", 4294967295)],
    )
    def test_valid(self, value, expected):
        errors = ErrorSlot()
        assert Field.from_bytes(value, errors).as_uint32() == expected
        assert errors.error is None

    @pytest.mark.parametrize("value", ["-1", "-1.23", "1.5", "1F", "x", "abc", " "])
    def test_invalid_records_error(self, value):
        errors = ErrorSlot()
        assert Field.from_bytes(value, errors).as_uint32() == 0
        assert isinstance(errors.error, InvalidDigitError)

    def test_does_not_raise(self):
        Field.from_bytes("nope").as_uint32()

    def test_first_error_wins(self):
        errors = ErrorSlot()
        Field.from_bytes("12a", errors).as_uint32()
        Field.from_bytes("12345678901", errors).as_uint32()
        assert isinstance(errors.error, InvalidDigitError)
        assert errors.error.char == "a"

    @pytest.mark.parametrize(
        "value, message",
        [
            ("12a", "Can't parse field as uint32: \"12a\" contains non-numeric character 'a'"),
            ("12345678901", "Can't parse field as uint32: \"12345678901\" is too long to be parsed as a uint32"),
            ("4294967296", "Can't parse field as uint32: \"4294967296\" overflows uint32"),
        ],
    )
    def test_error_names_conversion(self, value, message):
        errors = ErrorSlot()
        Field.from_bytes(value, errors).as_uint32()
        assert str(errors.error) == message
        assert errors.error.context == "Can't parse field as uint32"

    def test_later_success_keeps_error(self):
        errors = ErrorSlot()
        Field.from_bytes("99999999999", errors).as_uint32()
        assert Field.from_bytes("7", errors).as_uint32() == 7
        assert isinstance(errors.error, TooLongError)


class TestFieldFloat32:
    """as_float32() with deferred errors."""

    @pytest.mark.parametrize(
        "value, expected",
        [("0", 0.0), ("0.0", 0.0), ("1", 1.0), ("0.125", 0.125), (".125", 0.125), ("1.25", 1.25)],
    )
    def test_valid(self, value, expected):
        errors = ErrorSlot()
        assert Field.from_bytes(value, errors).as_float32() == np.float32(expected)
        assert errors.error is None

    @pytest.mark.parametrize("value", ["x", "", " ", "1.2.3"])
    def test_invalid_records_error(self, value):
        errors = ErrorSlot()
        result = Field.from_bytes(value, errors).as_float32()
        assert result == np.float32(0)
        assert isinstance(errors.error, InvalidFloatError)

    def test_error_message_has_no_uint32_context(self):
        errors = ErrorSlot()
        Field.from_bytes("x", errors).as_float32()
        assert str(errors.error) == '"x" is not a valid float32 literal'


class TestErrorSlot:
    """Tests for ErrorSlot."""

    def test_starts_clear(self):
        slot = ErrorSlot()
        assert not slot
        assert slot.error is None

    def test_record_and_clear(self):
        slot = ErrorSlot()
        first = InvalidDigitError("1x", "x")
        slot.record(first)
        slot.record(InvalidDigitError("2y", "y"))
        assert slot
        assert slot.error is first
        slot.clear()
        assert not slot
