"""Option type: Some[T] | Nothing, returned by the split operations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, NoReturn, TypeIs

import msgspec

if TYPE_CHECKING:
    from klaw_strlist.result import Err, Ok

__all__ = ['Nothing', 'NothingType', 'Option', 'Some']


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Split operations return ``Some((element, rest))`` while elements remain.

    Examples:
        >>> Some(42).unwrap()
        42
        >>> Some(42).map(lambda x: x * 2)
        Some(value=84)
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True if the option is Some.

        This method provides type narrowing - after checking is_some(),
        the type checker knows the option is Some[T].
        """
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def unwrap(self) -> T:
        """Return the contained Some value."""
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the fallback function."""
        return self.value

    def expect(self, _msg: str) -> T:
        """Return the contained Some value, ignoring the message."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def and_then[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Apply a function that returns an Option to the contained value.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def or_else(self, _f: Callable[[], Some[T] | NothingType]) -> Some[T]:
        """Return self unchanged since this is Some."""
        return self

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Return self if the predicate holds for the value, else Nothing."""
        if predicate(self.value):
            return self
        return Nothing

    def ok_or[E](self, _err: E) -> Ok[T]:
        """Convert to Result, returning Ok(value)."""
        from klaw_strlist.result import Ok

        return Ok(self.value)


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    Split operations return Nothing once a view is empty. This is a
    singleton - use the `Nothing` constant instead of instantiating directly.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.unwrap_or(0)
        0
    """

    def is_some(self) -> TypeIs[Some[object]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True if the option is Nothing."""
        return True

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Nothing.

        Raises:
            RuntimeError: Always, since Nothing has no value to unwrap.
        """
        raise RuntimeError('Called unwrap on Nothing')

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Nothing."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Nothing."""
        return f()

    def expect(self, msg: str) -> NoReturn:
        """Raise RuntimeError with a custom message."""
        raise RuntimeError(msg)

    def map[T, U](self, _f: Callable[[T], U]) -> NothingType:
        """Return Nothing since there's no value to map."""
        return self

    def and_then[T, U](self, _f: Callable[[T], Some[U] | NothingType]) -> NothingType:
        """Return Nothing since there's no value to bind."""
        return self

    def or_else[T](self, f: Callable[[], Some[T] | NothingType]) -> Some[T] | NothingType:
        """Return the Option produced by the recovery function."""
        return f()

    def filter[T](self, _predicate: Callable[[T], bool]) -> NothingType:
        """Return Nothing since there's no value to filter."""
        return self

    def ok_or[E](self, err: E) -> Err[E]:
        """Convert to Result, returning Err(err)."""
        from klaw_strlist.result import Err

        return Err(err)


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Option[T] = Some[T] | NothingType
