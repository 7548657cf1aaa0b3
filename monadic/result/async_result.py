"""
AsyncResult - pending success or failure
========================================

Same surface as SyncResult, with every operation scheduled as a continuation
after the held Deferred settles. Accessors are coroutines.
"""

from __future__ import annotations

import typing
from collections.abc import Awaitable, Callable, Coroutine, Generator

from .._deferred import Deferred
from .._helpers import apply
from .._types import Effect, Mapper, ResultTag
from .sync_result import SyncResult, settled_result

type _Flat[T, E] = SyncResult[T, E] | AsyncResult[T, E] | Awaitable[typing.Any]


class AsyncResult[T, E]:
    __slots__ = ("_deferred",)

    def __init__(self, deferred: Deferred[SyncResult[T, E]], /) -> None:
        self._deferred = deferred

    @staticmethod
    def ok[V](value: V, /) -> AsyncResult[V, typing.Never]:
        return AsyncResult(Deferred.resolved(SyncResult.ok(value)))

    @staticmethod
    def err[X](error: X, /) -> AsyncResult[typing.Never, X]:
        return AsyncResult(Deferred.resolved(SyncResult.err(error)))

    @staticmethod
    def from_sync[V, X](res: SyncResult[V, X], /) -> AsyncResult[V, X]:
        return AsyncResult(Deferred.resolved(res))

    @staticmethod
    def from_awaitable[V, X](pending: Awaitable[typing.Any], /) -> AsyncResult[V, X]:
        """Adopt an awaitable that produces a SyncResult (or another AsyncResult)."""
        return AsyncResult(Deferred(lambda: settled_result(pending)))

    # Accessors

    @property
    def tag(self) -> Coroutine[typing.Any, typing.Any, ResultTag]:
        async def inner() -> ResultTag:
            return (await self).tag

        return inner()

    async def is_ok(self) -> bool:
        return (await self).is_ok()

    async def is_err(self) -> bool:
        return (await self).is_err()

    async def unwrap(self) -> T:
        return (await self).unwrap()

    async def unwrap_err(self) -> E:
        return (await self).unwrap_err()

    async def safe_unwrap(self) -> T | None:
        return (await self).safe_unwrap()

    async def unwrap_or(self, default: T, /) -> T:
        return (await self).unwrap_or(default)

    async def unwrap_or_else(self, fn: Callable[[E], T | Awaitable[T]], /) -> T:
        res = await self
        if res.is_ok():
            return res.unwrap()
        return await apply(fn, res.unwrap_err())

    # Transformations

    def map[U](self, fn: Mapper[T, U], /) -> AsyncResult[U, E]:
        async def wrapper() -> SyncResult[U, E]:
            res = await self
            if res.is_err():
                return typing.cast(SyncResult[U, E], res)
            return SyncResult(True, await apply(fn, res.unwrap()))

        return AsyncResult(Deferred(wrapper))

    def map_err[F](self, fn: Mapper[E, F], /) -> AsyncResult[T, F]:
        async def wrapper() -> SyncResult[T, F]:
            res = await self
            if res.is_ok():
                return typing.cast(SyncResult[T, F], res)
            return SyncResult(False, await apply(fn, res.unwrap_err()))

        return AsyncResult(Deferred(wrapper))

    def flat_map[U, F](self, fn: Callable[[T], _Flat[U, F]], /) -> AsyncResult[U, E | F]:
        async def wrapper() -> SyncResult[U, E | F]:
            res = await self
            if res.is_err():
                return typing.cast(SyncResult[U, E | F], res)
            return await settled_result(fn(res.unwrap()))

        return AsyncResult(Deferred(wrapper))

    def zip[U](self, fn: Mapper[T, U], /) -> AsyncResult[tuple[T, U], E]:
        async def wrapper() -> SyncResult[tuple[T, U], E]:
            res = await self
            if res.is_err():
                return typing.cast(SyncResult[tuple[T, U], E], res)
            value = res.unwrap()
            return SyncResult(True, (value, await apply(fn, value)))

        return AsyncResult(Deferred(wrapper))

    def flat_zip[U, F](self, fn: Callable[[T], _Flat[U, F]], /) -> AsyncResult[tuple[T, U], E | F]:
        async def wrapper() -> SyncResult[tuple[T, U], E | F]:
            res = await self
            if res.is_err():
                return typing.cast(SyncResult[tuple[T, U], E | F], res)
            value = res.unwrap()
            other = await settled_result(fn(value))
            return other.zip_value(value)

        return AsyncResult(Deferred(wrapper))

    def zip_err[F](self, fn: Callable[[T], _Flat[typing.Any, F]], /) -> AsyncResult[T, E | F]:
        async def wrapper() -> SyncResult[T, E | F]:
            res = await self
            if res.is_err():
                return res
            other = await settled_result(fn(res.unwrap()))
            return res if other.is_ok() else typing.cast(SyncResult[T, F], other)

        return AsyncResult(Deferred(wrapper))

    def tap(self, fn: Effect[T], /) -> AsyncResult[T, E]:
        async def wrapper() -> SyncResult[T, E]:
            res = await self
            if res.is_ok():
                await apply(fn, res.unwrap())
            return res

        return AsyncResult(Deferred(wrapper))

    def tap_err(self, fn: Effect[E], /) -> AsyncResult[T, E]:
        async def wrapper() -> SyncResult[T, E]:
            res = await self
            if res.is_err():
                await apply(fn, res.unwrap_err())
            return res

        return AsyncResult(Deferred(wrapper))

    def or_else[U, F](self, fn: Callable[[E], _Flat[U, F]], /) -> AsyncResult[T | U, F]:
        async def wrapper() -> SyncResult[T | U, F]:
            res = await self
            if res.is_ok():
                return typing.cast(SyncResult[T | U, F], res)
            return await settled_result(fn(res.unwrap_err()))

        return AsyncResult(Deferred(wrapper))

    def flip(self) -> AsyncResult[E, T]:
        async def wrapper() -> SyncResult[E, T]:
            return (await self).flip()

        return AsyncResult(Deferred(wrapper))

    # Delegation protocol

    def __iter__(self) -> Generator[AsyncResult[T, E], typing.Any, T]:
        return (yield self)

    # Protocol methods

    def __await__(self) -> Generator[typing.Any, None, SyncResult[T, E]]:
        return self._deferred.__await__()

    def __repr__(self) -> str:
        return f"AsyncResult({self._deferred!r})"


__all__ = ("AsyncResult",)
