"""Error types: dual struct+exception for Result and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'MalformedEncoding',
    'MalformedEncodingError',
    'StaleView',
    'StaleViewError',
]


# --- Encoding Errors ---


class MalformedEncoding(msgspec.Struct, frozen=True, gc=False):
    """Foreign bytes are not a packed string list - struct variant.

    Attributes:
        reason: What the validation scan found.
        offset: Byte offset (relative to the start of the input) where the
            problem was detected.
    """

    reason: str
    offset: int = 0

    def to_exception(self) -> MalformedEncodingError:
        """Convert to exception for raise-based code."""
        return MalformedEncodingError(self.reason, self.offset)


class MalformedEncodingError(ValueError):
    """Foreign bytes are not a packed string list - exception variant.

    Subclasses ValueError so msgspec decode hooks report it as a
    validation failure.
    """

    def __init__(self, reason: str, offset: int = 0) -> None:
        self.reason = reason
        self.offset = offset
        super().__init__(f'Malformed string list at byte {offset}: {reason}')

    def to_struct(self) -> MalformedEncoding:
        """Convert to struct for Result-based code."""
        return MalformedEncoding(self.reason, self.offset)


# --- Borrow Errors ---


class StaleView(msgspec.Struct, frozen=True, gc=False):
    """A view outlived a structural mutation of its buffer - struct variant."""

    reason: str | None = None

    def to_exception(self) -> StaleViewError:
        """Convert to exception for raise-based code."""
        return StaleViewError(self.reason)


class StaleViewError(RuntimeError):
    """A view outlived a structural mutation of its buffer - exception variant."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(reason or 'View used after its buffer was modified')

    def to_struct(self) -> StaleView:
        """Convert to struct for Result-based code."""
        return StaleView(self.reason)
