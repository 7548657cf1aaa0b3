"""
Composition drivers
===================

Drive a generator body that delegates to wrappers with ``yield from``.
A settled success finishes its delegation without suspending the body; a
failure (or anything that has to be awaited) suspends it and lands here.
The driver stops at the first failure and closes the body, so nothing
sequenced after the failing step ever runs.

Loops are flat: one iteration per suspension, no recursion per step.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Awaitable, Callable, Generator

from .._errors import YieldedValueError
from .._helpers import identity
from .._types import Body, Step

logger = logging.getLogger(__name__)


class Pending:
    """Delegable step over an awaitable that settles to a wrapper."""

    __slots__ = ("awaitable",)

    def __init__(self, awaitable: Awaitable[typing.Any], /) -> None:
        self.awaitable = awaitable

    def __iter__(self) -> Generator[Pending, typing.Any, typing.Any]:
        return (yield self)

    def __repr__(self) -> str:
        return f"Pending({self.awaitable!r})"


def binder(accepts: Callable[[object], bool]) -> Callable[[typing.Any], typing.Any]:
    """Adapter for async bodies: wrappers pass through, awaitables become Pending."""

    def bind(value: typing.Any) -> typing.Any:
        if accepts(value):
            return value
        if inspect.isawaitable(value):
            return Pending(value)
        raise YieldedValueError(value, "bind expects a wrapper or an awaitable of one")

    return bind


# ============================================================================
# Generic drivers (extract + wrap pattern)
# ============================================================================


def genM[M, T](
    body: Callable[..., Body[T]],
    *,
    resolve: Callable[[typing.Any], Step],
    pure: Callable[[T], M],
    args: tuple[typing.Any, ...] = (),
) -> M:
    """
    Synchronous driver.

    resolve maps every suspension to (True, value) to resume the body with
    value, or (False, failure) to stop and return failure as is.
    """
    gen = body(*args)
    send: typing.Any = None
    while True:
        try:
            yielded = gen.send(send)
        except StopIteration as stop:
            return pure(stop.value)

        try:
            ok, value = resolve(yielded)
        except Exception:
            gen.close()
            raise

        if not ok:
            gen.close()
            logger.debug("composition short-circuited on %r", value)
            return value
        send = value


def gen_adapterM[M, T](
    body: Callable[[Callable[[typing.Any], typing.Any]], Body[T]],
    *,
    resolve: Callable[[typing.Any], Step],
    pure: Callable[[T], M],
) -> M:
    """Synchronous driver whose body receives an identity adapter."""
    return genM(body, resolve=resolve, pure=pure, args=(identity,))


async def async_genM[M, T](
    body: Callable[..., Body[T]],
    *,
    resolve: Callable[[typing.Any], Awaitable[Step]],
    accepts: Callable[[object], bool],
    pure: Callable[[T], M],
    args: tuple[typing.Any, ...] = (),
) -> M:
    """
    Asynchronous driver.

    Every suspension is settled before deciding how to go on:
      - a wrapper of the family (accepts) goes through resolve;
      - a Pending step is awaited and the wrapper it produces resolved;
      - any other awaitable is awaited and its value sent back.

    An exception raised while settling is thrown into the body at the
    suspension point; if the body does not handle it, it propagates out.
    """
    gen = body(*args)
    send: typing.Any = None
    error: Exception | None = None
    while True:
        try:
            yielded = gen.send(send) if error is None else gen.throw(error)
        except StopIteration as stop:
            return pure(stop.value)
        send, error = None, None

        try:
            ok, value = await _settle_step(yielded, resolve, accepts)
        except Exception as exc:
            error = exc
            continue

        if not ok:
            gen.close()
            logger.debug("async composition short-circuited on %r", value)
            return value
        send = value


async def async_gen_adapterM[M, T](
    body: Callable[[Callable[[typing.Any], typing.Any]], Body[T]],
    *,
    resolve: Callable[[typing.Any], Awaitable[Step]],
    accepts: Callable[[object], bool],
    pure: Callable[[T], M],
) -> M:
    """Asynchronous driver whose body receives bind (see binder)."""
    return await async_genM(
        body,
        resolve=resolve,
        accepts=accepts,
        pure=pure,
        args=(binder(accepts),),
    )


async def _settle_step(
    yielded: typing.Any,
    resolve: Callable[[typing.Any], Awaitable[Step]],
    accepts: Callable[[object], bool],
) -> Step:
    if accepts(yielded):
        return await resolve(yielded)
    if isinstance(yielded, Pending):
        wrapper = await yielded.awaitable
        if not accepts(wrapper):
            raise YieldedValueError(wrapper, "pending step settled to a non-wrapper")
        return await resolve(wrapper)
    if inspect.isawaitable(yielded):
        return True, await yielded
    raise YieldedValueError(yielded, "cannot suspend on a non-awaitable")


__all__ = (
    "Pending",
    "binder",
    "genM",
    "gen_adapterM",
    "async_genM",
    "async_gen_adapterM",
)
