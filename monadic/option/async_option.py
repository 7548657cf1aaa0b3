"""
AsyncOption - pending optional value
====================================

Holds a deferred computation that settles to a SyncOption. Every operation
is a continuation scheduled after that settlement and produces a new
AsyncOption around a newly derived Deferred; nothing is shared between
derived branches except the (memoized) ancestor they await.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Awaitable, Callable, Coroutine, Generator

from .._deferred import Deferred
from .._helpers import apply
from .._types import Effect, Mapper, OptionTag, Predicate
from .sync_option import SyncOption, settled_option


class AsyncOption[T]:
    """
    Optional value that settles later.

    Awaiting it yields the settled SyncOption. Accessors are coroutines even
    when the chain only became async several steps back.
    """

    __slots__ = ("_deferred",)

    def __init__(self, deferred: Deferred[SyncOption[T]], /) -> None:
        self._deferred = deferred

    @staticmethod
    def some[V](value: V, /) -> AsyncOption[V]:
        return AsyncOption(Deferred.resolved(SyncOption(value)))

    @staticmethod
    def none() -> AsyncOption[typing.Never]:
        return AsyncOption(Deferred.resolved(SyncOption.NONE))

    @staticmethod
    def from_sync[V](opt: SyncOption[V], /) -> AsyncOption[V]:
        """Settled async view of a sync option."""
        return AsyncOption(Deferred.resolved(opt))

    @staticmethod
    def from_awaitable[V](pending: Awaitable[typing.Any], /) -> AsyncOption[V]:
        """Adopt an awaitable that produces a SyncOption (or another AsyncOption)."""
        return AsyncOption(Deferred(lambda: settled_option(pending)))

    # Accessors

    @property
    def tag(self) -> Coroutine[typing.Any, typing.Any, OptionTag]:
        async def inner() -> OptionTag:
            return (await self).tag

        return inner()

    async def is_some(self) -> bool:
        return (await self).is_some()

    async def is_none(self) -> bool:
        return (await self).is_none()

    async def unwrap(self) -> T:
        return (await self).unwrap()

    async def safe_unwrap(self) -> T | None:
        return (await self).safe_unwrap()

    async def unwrap_or(self, default: T, /) -> T:
        return (await self).unwrap_or(default)

    async def unwrap_or_else(self, fn: Callable[[], T | Awaitable[T]], /) -> T:
        opt = await self
        if opt.is_some():
            return opt.unwrap()
        out = fn()
        if inspect.isawaitable(out):
            return await out
        return out

    # Transformations

    def map[U](self, fn: Mapper[T, U], /) -> AsyncOption[U]:
        """Functor map scheduled after settlement."""

        async def wrapper() -> SyncOption[U]:
            opt = await self
            if opt.is_none():
                return SyncOption.NONE
            return SyncOption(await apply(fn, opt.unwrap()))

        return AsyncOption(Deferred(wrapper))

    def flat_map[U](
        self,
        fn: Callable[[T], SyncOption[U] | AsyncOption[U] | Awaitable[typing.Any]],
        /,
    ) -> AsyncOption[U]:
        """Monadic bind scheduled after settlement."""

        async def wrapper() -> SyncOption[U]:
            opt = await self
            if opt.is_none():
                return SyncOption.NONE
            return await settled_option(fn(opt.unwrap()))

        return AsyncOption(Deferred(wrapper))

    def zip[U](self, fn: Mapper[T, U], /) -> AsyncOption[tuple[T, U]]:
        async def wrapper() -> SyncOption[tuple[T, U]]:
            opt = await self
            if opt.is_none():
                return SyncOption.NONE
            value = opt.unwrap()
            return SyncOption((value, await apply(fn, value)))

        return AsyncOption(Deferred(wrapper))

    def flat_zip[U](
        self,
        fn: Callable[[T], SyncOption[U] | AsyncOption[U] | Awaitable[typing.Any]],
        /,
    ) -> AsyncOption[tuple[T, U]]:
        async def wrapper() -> SyncOption[tuple[T, U]]:
            opt = await self
            if opt.is_none():
                return SyncOption.NONE
            value = opt.unwrap()
            other = await settled_option(fn(value))
            return other.zip_value(value)

        return AsyncOption(Deferred(wrapper))

    def filter(
        self,
        pred: Predicate[T] | Callable[[T], Awaitable[bool]],
        /,
    ) -> AsyncOption[T]:
        async def wrapper() -> SyncOption[T]:
            opt = await self
            if opt.is_none():
                return opt
            return opt if await apply(pred, opt.unwrap()) else SyncOption.NONE

        return AsyncOption(Deferred(wrapper))

    def tap(self, fn: Effect[T], /) -> AsyncOption[T]:
        async def wrapper() -> SyncOption[T]:
            opt = await self
            if opt.is_some():
                await apply(fn, opt.unwrap())
            return opt

        return AsyncOption(Deferred(wrapper))

    def or_else(
        self,
        fn: Callable[[], SyncOption[T] | AsyncOption[T] | Awaitable[typing.Any]],
        /,
    ) -> AsyncOption[T]:
        async def wrapper() -> SyncOption[T]:
            opt = await self
            if opt.is_some():
                return opt
            return await settled_option(fn())

        return AsyncOption(Deferred(wrapper))

    # Delegation protocol

    def __iter__(self) -> Generator[AsyncOption[T], typing.Any, T]:
        # The async driver settles this step and sends back the value.
        return (yield self)

    # Protocol methods

    def __await__(self) -> Generator[typing.Any, None, SyncOption[T]]:
        """Allow direct await: settles to the underlying SyncOption."""
        return self._deferred.__await__()

    def __repr__(self) -> str:
        return f"AsyncOption({self._deferred!r})"


__all__ = ("AsyncOption",)
