"""
Deferred - memoized awaitable
=============================

Each async step in an Option/Result chain is a Deferred. Its thunk starts
on the first await; every later awaiter, concurrent or not, receives the
same outcome. Settled values are replayed through kungfu's acache, the way a
lazy writer is cached; concurrent awaiters share one task on top of it.
"""

from __future__ import annotations

import asyncio
import inspect
import typing
from collections.abc import Awaitable, Callable, Generator

from kungfu.library.caching import acache


class Deferred[T]:
    """
    Zero-argument async thunk, run at most once.

    Awaiters are shielded from each other: cancelling one awaiter (a timeout
    on one branch, say) leaves the shared run going for the rest. The thunk
    is dropped as soon as its run is scheduled, so a settled step does not
    keep its ancestors alive.
    """

    __slots__ = ("_thunk", "_task", "_settled")

    def __init__(self, thunk: Callable[[], Awaitable[T]], /) -> None:
        self._thunk: Callable[[], Awaitable[T]] | None = thunk
        self._task: asyncio.Future[T] | None = None
        self._settled: Callable[[], Awaitable[T]] = acache(self._join)

    @staticmethod
    def resolved[V](value: V, /) -> Deferred[V]:
        async def run() -> V:
            return value

        return Deferred(run)

    async def _join(self) -> T:
        if self._task is None:
            thunk = typing.cast(Callable[[], Awaitable[T]], self._thunk)
            self._thunk = None
            self._task = asyncio.ensure_future(thunk())
        return await asyncio.shield(self._task)

    def __await__(self) -> Generator[typing.Any, None, T]:
        return self._settled().__await__()

    def __repr__(self) -> str:
        if self._task is None:
            state = "idle"
        elif self._task.done():
            state = "settled"
        else:
            state = "pending"
        return f"Deferred(<{state}>)"


def is_deferred(value: object) -> bool:
    """True for anything that has to be awaited before it can be inspected."""
    return inspect.isawaitable(value)


async def settle(value: typing.Any) -> typing.Any:
    # awaitables may resolve to further awaitables
    while inspect.isawaitable(value):
        value = await value
    return value


__all__ = ("Deferred", "is_deferred", "settle")
