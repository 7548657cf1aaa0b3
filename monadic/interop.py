"""
kungfu interop
==============

Conversions between monadic.Result and kungfu's Result / LazyCoroResult, so
results can move in and out of pipelines built on kungfu.
"""

from __future__ import annotations

import typing

from kungfu import Error, LazyCoroResult, Ok
from kungfu import Result as KResult

from ._deferred import Deferred
from .result import AsyncResult, Result, SyncResult


def _to_kungfu_sync[T, E](res: SyncResult[T, E]) -> KResult[T, E]:
    if res.is_ok():
        return Ok(res.unwrap())
    return Error(res.unwrap_err())


def _from_kungfu_sync[T, E](kres: KResult[T, E]) -> SyncResult[T, E]:
    match kres:
        case Ok(value):
            return SyncResult.ok(value)
        case Error(err):
            return SyncResult.err(err)
    raise TypeError(f"expected a kungfu Result, got {kres!r}")


def to_kungfu[T, E](
    result: Result[T, E],
) -> KResult[T, E] | typing.Coroutine[typing.Any, typing.Any, KResult[T, E]]:
    """Ok/Error for a sync Result, a coroutine producing one for an async Result."""
    inner = result.inner
    if isinstance(inner, SyncResult):
        return _to_kungfu_sync(inner)

    async def run() -> KResult[T, E]:
        return _to_kungfu_sync(await inner)

    return run()


def from_kungfu[T, E](kres: KResult[T, E]) -> Result[T, E]:
    return Result(_from_kungfu_sync(kres))


def from_lazy_coro_result[T, E](lcr: LazyCoroResult[T, E]) -> Result[T, E]:
    """Async Result that runs lcr when first awaited."""

    async def run() -> SyncResult[T, E]:
        return _from_kungfu_sync(await lcr())

    return Result(AsyncResult(Deferred(run)))


def to_lazy_coro_result[T, E](result: Result[T, E]) -> LazyCoroResult[T, E]:
    async def run() -> KResult[T, E]:
        settled = await result.settle()
        return _to_kungfu_sync(typing.cast(SyncResult[T, E], settled.inner))

    return LazyCoroResult(run)


__all__ = (
    "from_kungfu",
    "from_lazy_coro_result",
    "to_kungfu",
    "to_lazy_coro_result",
)
