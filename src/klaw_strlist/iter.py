"""Double-ended iterators over string list views.

Each iterator holds only the remaining view. Consuming from the front calls
``split_first`` and from the back calls ``split_last``; both narrow the same
remaining view, so the two ends meet without ever yielding an element twice.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from klaw_strlist.view import StrList, StrListMut, StrMut

__all__ = ['Iter', 'IterMut', 'Rev']


class Iter:
    """Iterator over the elements of a StrList.

    Example:
        >>> from klaw_strlist import StrListBuf
        >>> it = StrListBuf(['a', 'bb', 'c']).iter()
        >>> next(it), it.next_back(), list(it)
        ('a', 'c', ['bb'])
    """

    __slots__ = ('_inner',)

    def __init__(self, inner: StrList) -> None:
        self._inner = inner

    def __iter__(self) -> Iter:
        return self

    def __next__(self) -> str:
        split = self._inner.split_first()
        if split.is_none():
            raise StopIteration
        first, self._inner = split.unwrap()
        return first

    def next_back(self) -> str:
        """Consume and return the last remaining element.

        Raises:
            StopIteration: If no elements remain.
        """
        split = self._inner.split_last()
        if split.is_none():
            raise StopIteration
        last, self._inner = split.unwrap()
        return last

    def rev(self) -> Rev[str]:
        """Iterate from the back, sharing this iterator's remaining elements."""
        return Rev(self)

    def remaining(self) -> StrList:
        """The view of elements not consumed yet."""
        return self._inner

    def __length_hint__(self) -> int:
        return len(self._inner)


class IterMut:
    """Iterator over mutable elements of a StrListMut."""

    __slots__ = ('_inner',)

    def __init__(self, inner: StrListMut) -> None:
        self._inner = inner

    def __iter__(self) -> IterMut:
        return self

    def __next__(self) -> StrMut:
        split = self._inner.split_first_mut()
        if split.is_none():
            raise StopIteration
        first, self._inner = split.unwrap()
        return first

    def next_back(self) -> StrMut:
        """Consume and return the last remaining element.

        Raises:
            StopIteration: If no elements remain.
        """
        split = self._inner.split_last_mut()
        if split.is_none():
            raise StopIteration
        last, self._inner = split.unwrap()
        return last

    def rev(self) -> Rev[StrMut]:
        """Iterate from the back, sharing this iterator's remaining elements."""
        return Rev(self)

    def remaining(self) -> StrListMut:
        """The view of elements not consumed yet."""
        return self._inner

    def __length_hint__(self) -> int:
        return len(self._inner)


class Rev[T]:
    """Reversed adapter over a double-ended iterator.

    ``next()`` takes from the back of the wrapped iterator and ``next_back()``
    from its front; ``rev()`` hands back the wrapped iterator.
    """

    __slots__ = ('_it',)

    def __init__(self, it: Iter | IterMut) -> None:
        self._it = it

    def __iter__(self) -> Rev[T]:
        return self

    def __next__(self) -> T:
        return self._it.next_back()

    def next_back(self) -> T:
        return next(self._it)

    def rev(self) -> Iter | IterMut:
        return self._it

    def __length_hint__(self) -> int:
        return self._it.__length_hint__()
