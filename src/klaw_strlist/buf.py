"""StrListBuf: owned, growable packed string list."""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable
from typing import Self

from klaw_strlist._logging import get_logger, log_enabled
from klaw_strlist.encoding import DELIMITER, encode_element
from klaw_strlist.errors import MalformedEncoding
from klaw_strlist.iter import Iter, IterMut, Rev
from klaw_strlist.option import Option
from klaw_strlist.result import Result
from klaw_strlist.view import StrList, StrListMut, StrMut, _as_view, _Borrow

__all__ = ['StrListBuf']

log = get_logger(__name__)


@functools.total_ordering
class StrListBuf:
    """Owned, growable list of strings packed into one bytearray.

    The buffer is well-formed after every operation. Read access goes
    through a StrList view of the buffer; the read methods below delegate
    to ``as_str_list()``.

    Structural mutations (push, extend, pop, clear, into_boxed_str_list)
    invalidate every view issued before them; using such a view raises
    StaleViewError.

    Examples:
        >>> buf = StrListBuf()
        >>> buf.push('a')
        >>> buf.push('bb')
        >>> buf.push('c')
        >>> buf.pop()
        True
        >>> buf
        StrListBuf(['a', 'bb'])
        >>> bytes(buf)
        b'a\\xffbb\\xff'
    """

    __slots__ = ('_borrow', '_inner')

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._inner = bytearray()
        self._borrow = _Borrow()
        self.extend(values)

    @classmethod
    def with_capacity(cls, capacity: int) -> Self:
        """Create an empty buffer expected to hold about ``capacity`` bytes.

        The hint is validated but otherwise advisory: bytearray already grows
        geometrically, so pushes stay amortized constant either way.

        Raises:
            ValueError: If capacity is negative.
        """
        if capacity < 0:
            msg = f'capacity must be non-negative, got {capacity}'
            raise ValueError(msg)
        return cls()

    @classmethod
    def from_iter(cls, values: Iterable[str]) -> Self:
        """Build a buffer by pushing every value in iteration order."""
        return cls(values)

    @classmethod
    def _from_packed(cls, data: bytearray) -> Self:
        """Take ownership of bytes already known to be well-formed."""
        buf = object.__new__(cls)
        buf._inner = data
        buf._borrow = _Borrow()
        return buf

    @classmethod
    def try_from_bytes(cls, data: bytes | bytearray | memoryview) -> Result[Self, MalformedEncoding]:
        """Validate foreign bytes and copy them into a new buffer."""
        return StrList.try_from_bytes(data).map(lambda view: cls._from_packed(bytearray(bytes(view))))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Self:
        """Validate foreign bytes and copy them into a new buffer.

        Raises:
            MalformedEncodingError: If the bytes are not a packed string list.
        """
        return cls.try_from_bytes(data).unwrap()

    def _retire(self) -> None:
        self._borrow.alive = False
        self._borrow = _Borrow()

    # --- Views ---

    def as_str_list(self) -> StrList:
        """Read-only view of the whole buffer, without copying."""
        return StrList._from_range(self._inner, 0, len(self._inner), self._borrow)

    def as_str_list_mut(self) -> StrListMut:
        """Read/write view of the whole buffer, without copying.

        Every view issued before it goes stale, as after a mutation.
        """
        self._retire()
        return StrListMut._from_range(self._inner, 0, len(self._inner), self._borrow)

    def into_boxed_str_list(self) -> StrListMut:
        """Move the storage into a standalone fixed-size view.

        The returned view owns the very bytearray this buffer was using; no
        bytes are copied. The buffer is left empty and every view issued
        from it before the move is invalidated.
        """
        inner = self._inner
        self._inner = bytearray()
        self._retire()
        if log_enabled(logging.DEBUG, __name__):
            log.debug('strlist.boxed', nbytes=len(inner))
        return StrListMut._from_range(inner, 0, len(inner), _Borrow())

    # --- Mutation ---

    def push(self, value: str) -> None:
        """Append one element.

        Raises:
            TypeError: If value is not a str.
            UnicodeEncodeError: If value holds lone surrogates.
        """
        encoded = encode_element(value)
        self._inner += encoded
        self._inner.append(DELIMITER)
        self._retire()

    def extend(self, values: Iterable[str]) -> None:
        """Push every value in iteration order.

        All values are encoded before the buffer changes, so a bad value
        leaves it untouched and ``values`` may iterate over this buffer.
        """
        encoded = [encode_element(value) for value in values]
        if not encoded:
            return
        for payload in encoded:
            self._inner += payload
            self._inner.append(DELIMITER)
        self._retire()

    def pop(self) -> bool:
        """Remove the last element.

        Returns:
            True if an element was removed, False if the buffer was empty.
        """
        split = self.as_str_list().split_last()
        if split.is_none():
            return False
        _, rest = split.unwrap()
        del self._inner[rest.nbytes :]
        self._retire()
        return True

    def clear(self) -> None:
        """Remove all elements."""
        self._inner.clear()
        self._retire()

    def is_empty(self) -> bool:
        return not self._inner

    def copy(self) -> Self:
        """Independent buffer holding the same bytes."""
        return self._from_packed(bytearray(self._inner))

    def __copy__(self) -> Self:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, object]) -> Self:
        return self.copy()

    # --- Read access (delegated to the view) ---

    def split_first(self) -> Option[tuple[str, StrList]]:
        return self.as_str_list().split_first()

    def split_last(self) -> Option[tuple[str, StrList]]:
        return self.as_str_list().split_last()

    def split_first_mut(self) -> Option[tuple[StrMut, StrListMut]]:
        return self.as_str_list_mut().split_first_mut()

    def split_last_mut(self) -> Option[tuple[StrMut, StrListMut]]:
        return self.as_str_list_mut().split_last_mut()

    def iter(self) -> Iter:
        return Iter(self.as_str_list())

    def iter_mut(self) -> IterMut:
        return IterMut(self.as_str_list_mut())

    def __iter__(self) -> Iter:
        return Iter(self.as_str_list())

    def __reversed__(self) -> Rev[str]:
        return Iter(self.as_str_list()).rev()

    def __len__(self) -> int:
        return len(self.as_str_list())

    def __bool__(self) -> bool:
        return bool(self._inner)

    def __contains__(self, value: object) -> bool:
        return value in self.as_str_list()

    @property
    def nbytes(self) -> int:
        """Size of the packed encoding in bytes."""
        return len(self._inner)

    def __bytes__(self) -> bytes:
        return bytes(self._inner)

    def to_list(self) -> list[str]:
        return list(self)

    def __eq__(self, other: object) -> bool:
        view = _as_view(other)
        if view is None:
            return NotImplemented
        return self.as_str_list() == view

    def __lt__(self, other: object) -> bool:
        view = _as_view(other)
        if view is None:
            return NotImplemented
        return self.as_str_list() < view

    def __repr__(self) -> str:
        return f'StrListBuf({self.to_list()!r})'

    def __str__(self) -> str:
        return repr(self.to_list())
