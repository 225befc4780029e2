"""Tests for the packed encoding rules and the validation scan."""

import pytest
from hypothesis import given

from klaw_strlist import DELIMITER, MalformedEncoding, Ok, StrListBuf
from klaw_strlist.encoding import count, encode_element, validate
from tests.strategies import element_lists, foreign_bytes


class TestDelimiter:
    """The separator can never be part of UTF-8 text."""

    def test_delimiter_value(self) -> None:
        assert DELIMITER == 0xFF

    @given(element_lists)
    def test_delimiter_never_in_payload(self, values: list[str]) -> None:
        for value in values:
            assert DELIMITER not in encode_element(value)

    def test_delimiter_is_invalid_utf8(self) -> None:
        with pytest.raises(UnicodeDecodeError):
            bytes([DELIMITER]).decode('utf-8')


class TestEncodingInvariant:
    """Properties of bytes produced by StrListBuf."""

    @given(element_lists)
    def test_layout(self, values: list[str]) -> None:
        packed = bytes(StrListBuf(values))
        assert packed == b''.join(v.encode() + b'\xff' for v in values)
        assert count(packed) == len(values)
        if values:
            assert packed[-1] == DELIMITER
        else:
            assert packed == b''

    @given(element_lists)
    def test_produced_bytes_validate(self, values: list[str]) -> None:
        assert validate(bytes(StrListBuf(values))) == Ok(None)


class TestValidate:
    """Tests for validate()."""

    def test_empty_is_valid(self) -> None:
        assert validate(b'').is_ok()

    def test_lone_separator_is_one_empty_element(self) -> None:
        assert validate(b'\xff').is_ok()

    def test_missing_trailing_separator(self) -> None:
        assert validate(b'abc').unwrap_err() == MalformedEncoding('missing trailing separator', 3)

    def test_invalid_continuation_byte(self) -> None:
        error = validate(b'a\xff\x80\xff').unwrap_err()
        assert error.offset == 2
        assert error.reason.startswith('invalid UTF-8 in element 1')

    def test_overlong_encoding(self) -> None:
        """Overlong forms are not valid UTF-8."""
        assert validate(b'\xc0\xaf\xff').is_err()

    def test_utf8_always_checked(self) -> None:
        """A trailing separator alone does not make the payload valid."""
        error = validate(b'\x80\xff').unwrap_err()
        assert error.offset == 0
        assert error.reason.startswith('invalid UTF-8 in element 0')

    def test_validate_bytearray(self) -> None:
        assert validate(bytearray(b'x\xff')).is_ok()

    @given(foreign_bytes)
    def test_agrees_with_per_element_decode(self, data: bytes) -> None:
        """validate() accepts exactly the bytes whose elements all decode."""
        expected = data.endswith(b'\xff')
        if expected:
            try:
                for chunk in data[:-1].split(b'\xff'):
                    chunk.decode('utf-8')
            except UnicodeDecodeError:
                expected = False
        assert validate(data).is_ok() is expected


class TestEncodeElement:
    """Tests for encode_element()."""

    def test_encodes_utf8(self) -> None:
        assert encode_element('€') == b'\xe2\x82\xac'

    def test_rejects_non_str(self) -> None:
        with pytest.raises(TypeError, match='not int'):
            encode_element(1)  # type: ignore[arg-type]
