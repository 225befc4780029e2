"""Tests for the dual struct/exception error types."""

import msgspec
import pytest

from klaw_strlist import (
    MalformedEncoding,
    MalformedEncodingError,
    StaleView,
    StaleViewError,
)


class TestMalformedEncoding:
    """Tests for MalformedEncoding / MalformedEncodingError."""

    def test_struct_fields(self) -> None:
        err = MalformedEncoding('missing trailing separator', 3)
        assert err.reason == 'missing trailing separator'
        assert err.offset == 3

    def test_struct_is_frozen(self) -> None:
        err = MalformedEncoding('x')
        with pytest.raises(AttributeError):
            err.offset = 1  # type: ignore[misc]

    def test_round_trip_conversion(self) -> None:
        exc = MalformedEncoding('bad', 7).to_exception()
        assert isinstance(exc, MalformedEncodingError)
        assert exc.to_struct() == MalformedEncoding('bad', 7)

    def test_exception_message(self) -> None:
        exc = MalformedEncodingError('bad', 7)
        assert str(exc) == 'Malformed string list at byte 7: bad'

    def test_is_value_error(self) -> None:
        assert issubclass(MalformedEncodingError, ValueError)

    def test_struct_serializes(self) -> None:
        err = MalformedEncoding('bad', 2)
        assert msgspec.json.decode(msgspec.json.encode(err), type=MalformedEncoding) == err


class TestStaleView:
    """Tests for StaleView / StaleViewError."""

    def test_default_message(self) -> None:
        assert str(StaleViewError()) == 'View used after its buffer was modified'

    def test_custom_reason(self) -> None:
        assert str(StaleViewError('popped')) == 'popped'

    def test_round_trip_conversion(self) -> None:
        exc = StaleView('popped').to_exception()
        assert isinstance(exc, StaleViewError)
        assert exc.to_struct() == StaleView('popped')

    def test_is_runtime_error(self) -> None:
        assert issubclass(StaleViewError, RuntimeError)
