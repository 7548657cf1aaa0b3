"""
SyncOption - settled optional value
===================================

Present or absent, known right now. Absence is a single process-wide
instance, SyncOption.NONE, returned by every operation that produces it.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Awaitable, Callable, Generator

from .._deferred import Deferred, is_deferred, settle
from .._errors import UnwrappedNoneError
from .._helpers import Frozen, pair_with
from .._types import NONE, SOME, Effect, Mapper, OptionTag, Predicate

if typing.TYPE_CHECKING:
    from .async_option import AsyncOption

# Marks the absent slot; never escapes this module.
_ABSENT: typing.Final = object()


class SyncOption[T](Frozen):
    """
    Optional value that is already settled.

    Immutable: operations return a new instance, the receiver itself, or the
    NONE singleton. When a callback hands back a deferred computation the
    returned wrapper is an AsyncOption instead; the receiver is left as is.
    """

    __slots__ = ("_value",)

    NONE: typing.ClassVar[SyncOption[typing.Never]]

    def __init__(self, value: T, /) -> None:
        object.__setattr__(self, "_value", value)

    @staticmethod
    def some[V](value: V, /) -> SyncOption[V]:
        return SyncOption(value)

    # Accessors

    @property
    def tag(self) -> OptionTag:
        return NONE if self._value is _ABSENT else SOME

    def is_some(self) -> bool:
        return self._value is not _ABSENT

    def is_none(self) -> bool:
        return self._value is _ABSENT

    def unwrap(self) -> T:
        if self._value is _ABSENT:
            raise UnwrappedNoneError()
        return self._value

    def safe_unwrap(self) -> T | None:
        if self._value is _ABSENT:
            return None
        return self._value

    def unwrap_or(self, default: T, /) -> T:
        if self._value is _ABSENT:
            return default
        return self._value

    def unwrap_or_else(self, fn: Callable[[], T], /) -> T:
        if self._value is _ABSENT:
            return fn()
        return self._value

    # Transformations

    def map[U](self, fn: Mapper[T, U], /) -> SyncOption[U] | AsyncOption[U]:
        """Apply fn to the value. Absent stays absent and fn is not called."""
        if self._value is _ABSENT:
            return SyncOption.NONE

        out = fn(self._value)
        if inspect.isawaitable(out):
            pending = out

            async def wrapper() -> SyncOption[U]:
                return SyncOption(await pending)

            return _promote(wrapper)
        return SyncOption(out)

    def flat_map[U](
        self,
        fn: Callable[[T], SyncOption[U] | AsyncOption[U] | Awaitable[typing.Any]],
        /,
    ) -> SyncOption[U] | AsyncOption[U]:
        """Apply fn returning an option and use that option as the result."""
        if self._value is _ABSENT:
            return SyncOption.NONE

        out = fn(self._value)
        if isinstance(out, SyncOption):
            return out
        return _adopt(out)

    def zip[U](self, fn: Mapper[T, U], /) -> SyncOption[tuple[T, U]] | AsyncOption[tuple[T, U]]:
        """Pair the value with fn(value)."""
        if self._value is _ABSENT:
            return SyncOption.NONE

        original = self._value
        out = fn(original)
        if inspect.isawaitable(out):
            pending = out

            async def wrapper() -> SyncOption[tuple[T, U]]:
                return SyncOption(await pair_with(original, pending))

            return _promote(wrapper)
        return SyncOption((original, out))

    def flat_zip[U](
        self,
        fn: Callable[[T], SyncOption[U] | AsyncOption[U] | Awaitable[typing.Any]],
        /,
    ) -> SyncOption[tuple[T, U]] | AsyncOption[tuple[T, U]]:
        """Pair the value with the value of the option fn returns; absent wins."""
        if self._value is _ABSENT:
            return SyncOption.NONE

        original = self._value
        out = fn(original)
        if isinstance(out, SyncOption):
            return out.zip_value(original)
        _require_option_or_deferred(out)

        async def wrapper() -> SyncOption[tuple[T, U]]:
            other = await settled_option(out)
            return other.zip_value(original)

        return _promote(wrapper)

    def zip_value[P](self, original: P, /) -> SyncOption[tuple[P, T]]:
        """(original, value) when present, NONE otherwise."""
        if self._value is _ABSENT:
            return SyncOption.NONE
        return SyncOption((original, self._value))

    def filter(
        self,
        pred: Predicate[T] | Callable[[T], Awaitable[bool]],
        /,
    ) -> SyncOption[T] | AsyncOption[T]:
        """Keep the value only when pred holds."""
        if self._value is _ABSENT:
            return self

        out = pred(self._value)
        if inspect.isawaitable(out):
            pending = out

            async def wrapper() -> SyncOption[T]:
                return self if await pending else SyncOption.NONE

            return _promote(wrapper)
        return self if out else SyncOption.NONE

    def tap(self, fn: Effect[T], /) -> SyncOption[T] | AsyncOption[T]:
        """Run fn for its side effect on the value, pass self through."""
        if self._value is _ABSENT:
            return self

        out = fn(self._value)
        if inspect.isawaitable(out):
            pending = out

            async def wrapper() -> SyncOption[T]:
                await pending
                return self

            return _promote(wrapper)
        return self

    def or_else(
        self,
        fn: Callable[[], SyncOption[T] | AsyncOption[T] | Awaitable[typing.Any]],
        /,
    ) -> SyncOption[T] | AsyncOption[T]:
        """Fallback: present stays as is, absent is replaced by fn()."""
        if self._value is not _ABSENT:
            return self

        out = fn()
        if isinstance(out, SyncOption):
            return out
        return _adopt(out)

    # Delegation protocol

    def __iter__(self) -> Generator[SyncOption[T], typing.Any, T]:
        if self._value is not _ABSENT:
            return self._value
        yield self
        # Resumed after handing back absence: there is still no value.
        raise UnwrappedNoneError()

    # Protocol methods

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyncOption):
            return NotImplemented
        return self._value is other._value or (
            self._value is not _ABSENT
            and other._value is not _ABSENT
            and self._value == other._value
        )

    def __hash__(self) -> int:
        return hash((self.tag, None if self._value is _ABSENT else self._value))

    def __repr__(self) -> str:
        if self._value is _ABSENT:
            return "Nothing"
        return f"Some({self._value!r})"


SyncOption.NONE = SyncOption(typing.cast(typing.Never, _ABSENT))


async def settled_option(out: typing.Any) -> SyncOption[typing.Any]:
    """Await whatever a flat_* callback produced down to a SyncOption."""
    opt = await settle(out)
    if not isinstance(opt, SyncOption):
        raise TypeError(f"expected an Option from callback, got {opt!r}")
    return opt


def _promote[U](thunk: Callable[[], Awaitable[SyncOption[U]]]) -> AsyncOption[U]:
    # async_option imports this module, hence the local import
    from .async_option import AsyncOption

    return AsyncOption(Deferred(thunk))


def _adopt[U](out: typing.Any) -> AsyncOption[U]:
    """Use an AsyncOption returned by a callback as is, promote other awaitables."""
    from .async_option import AsyncOption

    if isinstance(out, AsyncOption):
        return out
    _require_option_or_deferred(out)
    return _promote(lambda: settled_option(out))


def _require_option_or_deferred(out: typing.Any) -> None:
    if not is_deferred(out):
        raise TypeError(f"expected an Option from callback, got {out!r}")


__all__ = ("SyncOption", "settled_option")
