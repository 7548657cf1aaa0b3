"""
SyncResult - settled success or failure
=======================================

Ok carries a value, Err carries an error payload. Failures are data: no
operation raises for control flow, only the two accessors used on the wrong
variant (unwrap on Err, unwrap_err on Ok).
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Awaitable, Callable, Generator

from .._deferred import Deferred, is_deferred, settle
from .._errors import UnwrappedErrError, UnwrappedOkError
from .._helpers import Frozen, pair_with
from .._types import ERR, OK, Effect, Mapper, ResultTag

if typing.TYPE_CHECKING:
    from .async_result import AsyncResult

type _Flat[T, E] = SyncResult[T, E] | AsyncResult[T, E] | Awaitable[typing.Any]


class SyncResult[T, E](Frozen):
    """
    Result that is already settled.

    Operations on the variant they do not apply to return the receiver
    itself and never call their callback.
    """

    __slots__ = ("_is_ok", "_payload")

    def __init__(self, is_ok: bool, payload: typing.Any, /) -> None:
        object.__setattr__(self, "_is_ok", is_ok)
        object.__setattr__(self, "_payload", payload)

    @staticmethod
    def ok[V](value: V, /) -> SyncResult[V, typing.Never]:
        return SyncResult(True, value)

    @staticmethod
    def err[X](error: X, /) -> SyncResult[typing.Never, X]:
        return SyncResult(False, error)

    # Accessors

    @property
    def tag(self) -> ResultTag:
        return OK if self._is_ok else ERR

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    def unwrap(self) -> T:
        if not self._is_ok:
            error = self._payload
            if isinstance(error, BaseException):
                raise UnwrappedErrError(error) from error
            raise UnwrappedErrError(error)
        return self._payload

    def unwrap_err(self) -> E:
        if self._is_ok:
            raise UnwrappedOkError(self._payload)
        return self._payload

    def safe_unwrap(self) -> T | None:
        return self._payload if self._is_ok else None

    def unwrap_or(self, default: T, /) -> T:
        return self._payload if self._is_ok else default

    def unwrap_or_else(self, fn: Callable[[E], T], /) -> T:
        """Value, or fn(error) computed from the failure."""
        return self._payload if self._is_ok else fn(self._payload)

    # Transformations (success side)

    def map[U](self, fn: Mapper[T, U], /) -> SyncResult[U, E] | AsyncResult[U, E]:
        if not self._is_ok:
            return typing.cast(SyncResult[U, E], self)

        out = fn(self._payload)
        if inspect.isawaitable(out):
            pending = out

            async def wrapper() -> SyncResult[U, E]:
                return SyncResult(True, await pending)

            return _promote(wrapper)
        return SyncResult(True, out)

    def flat_map[U, F](
        self,
        fn: Callable[[T], _Flat[U, F]],
        /,
    ) -> SyncResult[U, E | F] | AsyncResult[U, E | F]:
        """Chain a step that may fail; its result is used as is."""
        if not self._is_ok:
            return typing.cast(SyncResult[U, E | F], self)

        out = fn(self._payload)
        if isinstance(out, SyncResult):
            return out
        return _adopt(out)

    def zip[U](self, fn: Mapper[T, U], /) -> SyncResult[tuple[T, U], E] | AsyncResult[tuple[T, U], E]:
        if not self._is_ok:
            return typing.cast(SyncResult[tuple[T, U], E], self)

        original = self._payload
        out = fn(original)
        if inspect.isawaitable(out):
            pending = out

            async def wrapper() -> SyncResult[tuple[T, U], E]:
                return SyncResult(True, await pair_with(original, pending))

            return _promote(wrapper)
        return SyncResult(True, (original, out))

    def flat_zip[U, F](
        self,
        fn: Callable[[T], _Flat[U, F]],
        /,
    ) -> SyncResult[tuple[T, U], E | F] | AsyncResult[tuple[T, U], E | F]:
        """Pair the value with the value of the result fn returns; its failure wins."""
        if not self._is_ok:
            return typing.cast(SyncResult[tuple[T, U], E | F], self)

        original = self._payload
        out = fn(original)
        if isinstance(out, SyncResult):
            return out.zip_value(original)
        _require_result_or_deferred(out)

        async def wrapper() -> SyncResult[tuple[T, U], E | F]:
            other = await settled_result(out)
            return other.zip_value(original)

        return _promote(wrapper)

    def zip_value[P](self, original: P, /) -> SyncResult[tuple[P, T], E]:
        if not self._is_ok:
            return typing.cast(SyncResult[tuple[P, T], E], self)
        return SyncResult(True, (original, self._payload))

    def zip_err[F](
        self,
        fn: Callable[[T], _Flat[typing.Any, F]],
        /,
    ) -> SyncResult[T, E | F] | AsyncResult[T, E | F]:
        """Keep the value unless the result fn returns is a failure."""
        if not self._is_ok:
            return self

        out = fn(self._payload)
        if isinstance(out, SyncResult):
            return self if out._is_ok else typing.cast(SyncResult[T, F], out)
        _require_result_or_deferred(out)

        async def wrapper() -> SyncResult[T, E | F]:
            other = await settled_result(out)
            return self if other.is_ok() else typing.cast(SyncResult[T, F], other)

        return _promote(wrapper)

    def tap(self, fn: Effect[T], /) -> SyncResult[T, E] | AsyncResult[T, E]:
        if not self._is_ok:
            return self
        return self._run_effect(fn)

    # Transformations (failure side)

    def map_err[F](self, fn: Mapper[E, F], /) -> SyncResult[T, F] | AsyncResult[T, F]:
        if self._is_ok:
            return typing.cast(SyncResult[T, F], self)

        out = fn(self._payload)
        if inspect.isawaitable(out):
            pending = out

            async def wrapper() -> SyncResult[T, F]:
                return SyncResult(False, await pending)

            return _promote(wrapper)
        return SyncResult(False, out)

    def tap_err(self, fn: Effect[E], /) -> SyncResult[T, E] | AsyncResult[T, E]:
        if self._is_ok:
            return self
        return self._run_effect(fn)

    def or_else[U, F](
        self,
        fn: Callable[[E], _Flat[U, F]],
        /,
    ) -> SyncResult[T | U, F] | AsyncResult[T | U, F]:
        """Recover from a failure with the result fn(error) returns."""
        if self._is_ok:
            return typing.cast(SyncResult[T | U, F], self)

        out = fn(self._payload)
        if isinstance(out, SyncResult):
            return out
        return _adopt(out)

    def flip(self) -> SyncResult[E, T]:
        """Swap the variants: Ok(v) becomes Err(v) and the other way round."""
        return SyncResult(not self._is_ok, self._payload)

    def _run_effect(self, fn: Effect[typing.Any]) -> SyncResult[T, E] | AsyncResult[T, E]:
        out = fn(self._payload)
        if inspect.isawaitable(out):
            pending = out

            async def wrapper() -> SyncResult[T, E]:
                await pending
                return self

            return _promote(wrapper)
        return self

    # Delegation protocol

    def __iter__(self) -> Generator[SyncResult[T, E], typing.Any, T]:
        if self._is_ok:
            return self._payload
        yield self
        raise UnwrappedErrError(self._payload)

    # Protocol methods

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyncResult):
            return NotImplemented
        return self._is_ok == other._is_ok and self._payload == other._payload

    def __hash__(self) -> int:
        return hash((self._is_ok, self._payload))

    def __repr__(self) -> str:
        return f"{self.tag}({self._payload!r})"


async def settled_result(out: typing.Any) -> SyncResult[typing.Any, typing.Any]:
    """Await whatever a flat_* callback produced down to a SyncResult."""
    res = await settle(out)
    if not isinstance(res, SyncResult):
        raise TypeError(f"expected a Result from callback, got {res!r}")
    return res


def _promote[U, F](thunk: Callable[[], Awaitable[SyncResult[U, F]]]) -> AsyncResult[U, F]:
    from .async_result import AsyncResult

    return AsyncResult(Deferred(thunk))


def _adopt[U, F](out: typing.Any) -> AsyncResult[U, F]:
    from .async_result import AsyncResult

    if isinstance(out, AsyncResult):
        return out
    _require_result_or_deferred(out)
    return _promote(lambda: settled_result(out))


def _require_result_or_deferred(out: typing.Any) -> None:
    if not is_deferred(out):
        raise TypeError(f"expected a Result from callback, got {out!r}")


__all__ = ("SyncResult", "settled_result")
