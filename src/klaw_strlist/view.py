"""Borrowed views over packed string lists.

A view is a window ``(storage, start, stop)`` onto bytes that already satisfy
the packed encoding. Views never copy the packed bytes: splitting narrows the
window, and element values are decoded on demand.

Views are only created from well-formed bytes:
    - by a StrListBuf (``as_str_list``, ``as_str_list_mut``, ``into_boxed_str_list``)
    - by narrowing another view (the split operations)
    - by the validating constructors ``from_bytes`` / ``try_from_bytes``

Views issued by a buffer share its borrow token. A structural mutation of the
buffer (push, pop, clear, boxing) or a new mutable view retires the token,
and any later use of those views raises StaleViewError instead of reading
shifted separators. Read-only views also remember the token's write count
when they are issued, so an in-place StrMut write makes them stale too and a
hashed view can never change under its hash.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Self

from klaw_strlist._logging import get_logger, log_enabled
from klaw_strlist.encoding import DELIMITER, count, encode_element, validate
from klaw_strlist.errors import MalformedEncoding, StaleViewError
from klaw_strlist.iter import Iter, IterMut, Rev
from klaw_strlist.option import Nothing, Option, Some
from klaw_strlist.result import Err, Ok, Result

if TYPE_CHECKING:
    from klaw_strlist.buf import StrListBuf

__all__ = ['StrList', 'StrListMut', 'StrMut']

log = get_logger(__name__)


class _Borrow:
    """Liveness marker shared by a buffer and the views it has issued.

    ``writes`` counts in-place element writes made through StrMut handles
    holding this token.
    """

    __slots__ = ('alive', 'writes')

    def __init__(self) -> None:
        self.alive = True
        self.writes = 0


def _as_view(obj: object) -> StrList | None:
    if isinstance(obj, StrList):
        return obj
    from klaw_strlist.buf import StrListBuf

    if isinstance(obj, StrListBuf):
        return obj.as_str_list()
    return None


def _compare(left: StrList, right: StrList) -> int:
    """Three-way comparison over the element sequences."""
    for a, b in zip(left, right):
        if a != b:
            return -1 if a < b else 1
    n, m = len(left), len(right)
    return (n > m) - (n < m)


@functools.total_ordering
class StrList:
    """Read-only view over a packed list of strings.

    ``StrList()`` is the empty list. Equality and hashing use the packed
    bytes; ordering is lexicographic over the elements, so
    ``['a', 'bb'] < ['a', 'c']`` even though the packed bytes compare the
    other way round at the separator.

    Examples:
        >>> view = StrList.from_bytes(b'a\\xffbb\\xff')
        >>> view.to_list()
        ['a', 'bb']
        >>> first, rest = view.split_first().unwrap()
        >>> first, rest.to_list()
        ('a', ['bb'])
    """

    __slots__ = ('_borrow', '_data', '_start', '_stop', '_writes')

    def __init__(self) -> None:
        self._data: bytes | bytearray = b''
        self._start = 0
        self._stop = 0
        self._borrow: _Borrow | None = None
        self._writes = 0

    @classmethod
    def _from_range(
        cls,
        data: bytes | bytearray,
        start: int,
        stop: int,
        borrow: _Borrow | None,
    ) -> Self:
        """Wrap bytes already known to be well-formed. No validation."""
        view = object.__new__(cls)
        view._data = data
        view._start = start
        view._stop = stop
        view._borrow = borrow
        view._writes = 0 if borrow is None else borrow.writes
        return view

    @staticmethod
    def _storage_for(data: bytes | bytearray | memoryview) -> bytes | bytearray:
        if type(data) is bytes:
            return data
        return bytes(memoryview(data))

    @classmethod
    def try_from_bytes(cls, data: bytes | bytearray | memoryview) -> Result[Self, MalformedEncoding]:
        """Validate foreign bytes and wrap them.

        ``bytes`` inputs are windowed in place. Any other buffer object,
        ``bytearray`` included, is copied into ``bytes`` first, so the
        caller cannot change a read-only view afterwards.

        Returns:
            Ok(view) if the bytes are well-formed, otherwise Err(MalformedEncoding).
        """
        storage = cls._storage_for(data)
        checked = validate(storage)
        if isinstance(checked, Err):
            if log_enabled(logging.DEBUG, __name__):
                log.debug('strlist.rejected', reason=checked.error.reason, offset=checked.error.offset)
            return checked
        return Ok(cls._from_range(storage, 0, len(storage), _Borrow()))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Self:
        """Validate foreign bytes and wrap them.

        Raises:
            MalformedEncodingError: If the bytes are not a packed string list.
        """
        return cls.try_from_bytes(data).unwrap()

    def _check(self) -> None:
        borrow = self._borrow
        if borrow is not None and (not borrow.alive or borrow.writes != self._writes):
            raise StaleViewError

    # --- Splitting ---

    def split_first(self) -> Option[tuple[str, StrList]]:
        """Split off the first element.

        Returns:
            Some((first, rest)) where rest views every following element,
            or Nothing if the view is empty.
        """
        self._check()
        data, start, stop = self._data, self._start, self._stop
        if start == stop:
            return Nothing
        i = data.find(DELIMITER, start, stop)
        return Some((data[start:i].decode('utf-8'), StrList._from_range(data, i + 1, stop, self._borrow)))

    def split_last(self) -> Option[tuple[str, StrList]]:
        """Split off the last element.

        Returns:
            Some((last, rest)) where rest views every preceding element
            (with its trailing separator), or Nothing if the view is empty.
        """
        self._check()
        data, start, stop = self._data, self._start, self._stop
        if start == stop:
            return Nothing
        end = stop - 1
        pos = data.rfind(DELIMITER, start, end)
        cut = start if pos == -1 else pos + 1
        return Some((data[cut:end].decode('utf-8'), StrList._from_range(data, start, cut, self._borrow)))

    # --- Iteration ---

    def iter(self) -> Iter:
        """Double-ended iterator over the elements."""
        return Iter(self)

    def __iter__(self) -> Iter:
        return Iter(self)

    def __reversed__(self) -> Rev[str]:
        return Iter(self).rev()

    def __len__(self) -> int:
        self._check()
        return count(self._data, self._start, self._stop)

    def __bool__(self) -> bool:
        self._check()
        return self._start != self._stop

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, str):
            return False
        return any(element == value for element in self)

    # --- Conversion ---

    @property
    def nbytes(self) -> int:
        """Size of the packed encoding in bytes."""
        self._check()
        return self._stop - self._start

    def __bytes__(self) -> bytes:
        self._check()
        return bytes(self._data[self._start : self._stop])

    def to_list(self) -> list[str]:
        return list(self)

    def to_str_list_buf(self) -> StrListBuf:
        """Copy the packed bytes into a new, independently owned buffer."""
        from klaw_strlist.buf import StrListBuf

        self._check()
        return StrListBuf._from_packed(bytearray(self._data[self._start : self._stop]))

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        view = _as_view(other)
        if view is None:
            return NotImplemented
        if self.nbytes != view.nbytes:
            return False
        return self._data[self._start : self._stop] == view._data[view._start : view._stop]

    def __lt__(self, other: object) -> bool:
        view = _as_view(other)
        if view is None:
            return NotImplemented
        return _compare(self, view) < 0

    def __hash__(self) -> int:
        return hash(bytes(self))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.to_list()!r})'

    def __str__(self) -> str:
        return repr(self.to_list())


class StrListMut(StrList):
    """Read/write view over a packed list of strings.

    Adds the mutable splits. Elements can be rewritten in place through
    StrMut as long as their UTF-8 length is unchanged; adding, removing or
    resizing elements needs a StrListBuf.
    """

    __slots__ = ()

    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        super().__init__()
        self._data = bytearray()

    @staticmethod
    def _storage_for(data: bytes | bytearray | memoryview) -> bytearray:
        if not isinstance(data, bytearray):
            msg = f'StrListMut wraps a bytearray, not {type(data).__name__}'
            raise TypeError(msg)
        return data

    def _check(self) -> None:
        # StrMut writes keep the layout, so only retirement matters here
        if self._borrow is not None and not self._borrow.alive:
            raise StaleViewError

    def split_first_mut(self) -> Option[tuple[StrMut, StrListMut]]:
        """Split off the first element as a mutable string.

        Returns:
            Some((first, rest)), or Nothing if the view is empty.
        """
        self._check()
        data, start, stop = self._data, self._start, self._stop
        if start == stop:
            return Nothing
        i = data.find(DELIMITER, start, stop)
        return Some((
            StrMut(data, start, i, self._borrow),
            StrListMut._from_range(data, i + 1, stop, self._borrow),
        ))

    def split_last_mut(self) -> Option[tuple[StrMut, StrListMut]]:
        """Split off the last element as a mutable string.

        Returns:
            Some((last, rest)), or Nothing if the view is empty.
        """
        self._check()
        data, start, stop = self._data, self._start, self._stop
        if start == stop:
            return Nothing
        end = stop - 1
        pos = data.rfind(DELIMITER, start, end)
        cut = start if pos == -1 else pos + 1
        return Some((
            StrMut(data, cut, end, self._borrow),
            StrListMut._from_range(data, start, cut, self._borrow),
        ))

    def iter_mut(self) -> IterMut:
        """Double-ended iterator over mutable elements."""
        return IterMut(self)


class StrMut:
    """One element of a StrListMut, writable in place.

    The byte length is fixed: writes that would change it raise ValueError,
    since neighbouring elements are not moved.

    Example:
        >>> from klaw_strlist import StrListBuf
        >>> buf = StrListBuf(['tag', 'x'])
        >>> for item in buf.iter_mut():
        ...     item.make_ascii_uppercase()
        >>> buf.to_list()
        ['TAG', 'X']
    """

    __slots__ = ('_borrow', '_data', '_start', '_stop')

    def __init__(self, data: bytearray, start: int, stop: int, borrow: _Borrow | None) -> None:
        self._data = data
        self._start = start
        self._stop = stop
        self._borrow = borrow

    def _check(self) -> None:
        if self._borrow is not None and not self._borrow.alive:
            raise StaleViewError

    def _write(self, payload: bytes | bytearray) -> None:
        self._check()
        self._data[self._start : self._stop] = payload
        if self._borrow is not None:
            self._borrow.writes += 1

    def get(self) -> str:
        """Decode the current value."""
        self._check()
        return self._data[self._start : self._stop].decode('utf-8')

    def set(self, value: str) -> None:
        """Overwrite the element with a string of the same UTF-8 length.

        Read-only views issued before the write go stale.

        Raises:
            ValueError: If value encodes to a different number of bytes.
        """
        encoded = encode_element(value)
        size = self._stop - self._start
        if len(encoded) != size:
            msg = f'replacement must encode to {size} UTF-8 bytes, got {len(encoded)}'
            raise ValueError(msg)
        self._write(encoded)

    def make_ascii_uppercase(self) -> None:
        """Uppercase ASCII letters in place; other characters are untouched."""
        self._write(self._data[self._start : self._stop].upper())

    def make_ascii_lowercase(self) -> None:
        """Lowercase ASCII letters in place; other characters are untouched."""
        self._write(self._data[self._start : self._stop].lower())

    def __len__(self) -> int:
        return self._stop - self._start

    def __str__(self) -> str:
        return self.get()

    def __repr__(self) -> str:
        return f'StrMut({self.get()!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StrMut):
            return self.get() == other.get()
        if isinstance(other, str):
            return self.get() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]
