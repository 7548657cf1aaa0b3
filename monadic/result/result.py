"""
Result - the type call sites hold
=================================

Result wraps one SyncResult or AsyncResult and follows the same one-way
promotion rule as Option: sync until a callback answers with an awaitable,
async from then on.

Besides the chaining operations it carries the constructors that catch
exceptions (try_catch, try_catch_async, from_awaitable) and the operations
that do not stop at the first failure: validate runs every validator,
all and any look at every input.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Awaitable, Callable, Coroutine, Generator, Sequence

from .._deferred import Deferred
from .._errors import YieldedValueError
from .._helpers import Frozen
from .._types import Body, Effect, Mapper, Predicate, ResultTag, Step
from ..flow.drive import async_gen_adapterM, async_genM, gen_adapterM, genM
from .async_result import AsyncResult
from .sync_result import SyncResult, settled_result

if typing.TYPE_CHECKING:
    from ..option import Option

logger = logging.getLogger(__name__)

type _Inner[T, E] = SyncResult[T, E] | AsyncResult[T, E]
type _Validator[T] = Callable[[T], Result[typing.Any, typing.Any] | Awaitable[Result[typing.Any, typing.Any]]]


class Result[T, E](Frozen):
    """Hybrid success/failure value."""

    __slots__ = ("_inner",)

    def __init__(self, inner: _Inner[T, E], /) -> None:
        object.__setattr__(self, "_inner", inner)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @staticmethod
    def ok[V](value: V, /) -> Result[V, typing.Never]:
        return Result(SyncResult.ok(value))

    @staticmethod
    def err[X](error: X, /) -> Result[typing.Never, X]:
        return Result(SyncResult.err(error))

    @staticmethod
    def from_nullable[V, X](value: V | None, error: X, /) -> Result[V, X]:
        if value is None:
            return Result.err(error)
        return Result.ok(value)

    @staticmethod
    def from_predicate[V, X](value: V, pred: Predicate[V], error: X, /) -> Result[V, X]:
        if pred(value):
            return Result.ok(value)
        return Result.err(error)

    @staticmethod
    def from_awaitable[V](pending: Awaitable[V], /) -> Result[V, Exception]:
        """Async result over an awaitable; an exception it raises becomes Err."""

        async def wrapper() -> SyncResult[V, Exception]:
            try:
                return SyncResult.ok(await pending)
            except Exception as exc:
                return SyncResult.err(exc)

        return Result(AsyncResult(Deferred(wrapper)))

    @staticmethod
    def try_catch[V, X](
        fn: Callable[[], V],
        map_error: Callable[[Exception], X] | None = None,
    ) -> Result[V, X]:
        """
        Call fn and capture what it raises as Err.

        map_error turns the exception into the error payload; without it the
        exception itself is the payload.
        """
        try:
            value = fn()
        except Exception as exc:
            return Result.err(map_error(exc) if map_error is not None else exc)
        return Result.ok(value)

    @staticmethod
    def try_catch_async[V, X](
        fn: Callable[[], Awaitable[V]],
        map_error: Callable[[Exception], X] | None = None,
    ) -> Result[V, X]:
        """Async try_catch: fn runs when the result is first awaited."""

        async def wrapper() -> SyncResult[V, X]:
            try:
                value = await fn()
            except Exception as exc:
                return SyncResult.err(map_error(exc) if map_error is not None else exc)
            return SyncResult.ok(value)

        return Result(AsyncResult(Deferred(wrapper)))

    # ------------------------------------------------------------------
    # Inspection and accessors
    # ------------------------------------------------------------------

    def is_async(self) -> bool:
        return isinstance(self._inner, AsyncResult)

    @property
    def inner(self) -> _Inner[T, E]:
        return self._inner

    @property
    def tag(self) -> ResultTag | Coroutine[typing.Any, typing.Any, ResultTag]:
        return self._inner.tag

    def is_ok(self) -> bool | Coroutine[typing.Any, typing.Any, bool]:
        return self._inner.is_ok()

    def is_err(self) -> bool | Coroutine[typing.Any, typing.Any, bool]:
        return self._inner.is_err()

    def unwrap(self) -> T | Coroutine[typing.Any, typing.Any, T]:
        return self._inner.unwrap()

    def unwrap_err(self) -> E | Coroutine[typing.Any, typing.Any, E]:
        return self._inner.unwrap_err()

    def safe_unwrap(self) -> T | None | Coroutine[typing.Any, typing.Any, T | None]:
        return self._inner.safe_unwrap()

    def unwrap_or(self, default: T, /) -> T | Coroutine[typing.Any, typing.Any, T]:
        return self._inner.unwrap_or(default)

    def unwrap_or_else(self, fn: Callable[[E], T], /) -> T | Coroutine[typing.Any, typing.Any, T]:
        return self._inner.unwrap_or_else(fn)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def map[U](self, fn: Mapper[T, U], /) -> Result[U, E]:
        return self._derive(self._inner.map(fn))

    def map_err[F](self, fn: Mapper[E, F], /) -> Result[T, F]:
        return self._derive(self._inner.map_err(fn))

    def map_both[U, F](self, on_ok: Mapper[T, U], on_err: Mapper[E, F], /) -> Result[U, F]:
        return self.map(on_ok).map_err(on_err)

    def flat_map[U, F](
        self,
        fn: Callable[[T], Result[U, F] | Awaitable[Result[U, F]]],
        /,
    ) -> Result[U, E | F]:
        return self._derive(self._inner.flat_map(lambda value: _lower(fn(value))))

    def zip[U](self, fn: Mapper[T, U], /) -> Result[tuple[T, U], E]:
        return self._derive(self._inner.zip(fn))

    def flat_zip[U, F](
        self,
        fn: Callable[[T], Result[U, F] | Awaitable[Result[U, F]]],
        /,
    ) -> Result[tuple[T, U], E | F]:
        return self._derive(self._inner.flat_zip(lambda value: _lower(fn(value))))

    def zip_err[F](
        self,
        fn: Callable[[T], Result[typing.Any, F] | Awaitable[Result[typing.Any, F]]],
        /,
    ) -> Result[T, E | F]:
        """
        Run a check that may fail and keep the original value.

        Ok(v) stays Ok(v) when fn(v) is Ok; when fn(v) is Err that error
        replaces the result. Whatever value fn succeeds with is dropped.
        """
        return self._derive(self._inner.zip_err(lambda value: _lower(fn(value))))

    def tap(self, fn: Effect[T], /) -> Result[T, E]:
        return self._derive(self._inner.tap(fn))

    def tap_err(self, fn: Effect[E], /) -> Result[T, E]:
        return self._derive(self._inner.tap_err(fn))

    def or_else[U, F](
        self,
        fn: Callable[[E], Result[U, F] | Awaitable[Result[U, F]]],
        /,
    ) -> Result[T | U, F]:
        """Recover from a failure; Ok is kept and fn is not called."""
        return self._derive(self._inner.or_else(lambda error: _lower(fn(error))))

    def flip(self) -> Result[E, T]:
        return Result(self._inner.flip())

    def inner_map[I, U](self: Result[Sequence[I], E], fn: Callable[[I], U], /) -> Result[list[U], E]:
        """Map fn over the elements of an Ok list or tuple."""

        def each(items: Sequence[I]) -> list[U]:
            if not isinstance(items, (list, tuple)):
                raise TypeError("inner_map can only be called on a Result of a list or tuple")
            return [fn(item) for item in items]

        return self.map(each)

    def validate(self, validators: Sequence[_Validator[T]], /) -> Result[T, E | list[typing.Any]]:
        """
        Run every validator against the Ok value and collect all their errors.

        Ok is kept when no validator fails, otherwise the result is Err with
        the list of errors in validator order. An Err receiver is returned
        unchanged and no validator runs. Any async validator makes the whole
        result async.
        """
        inner = self._inner
        if isinstance(inner, SyncResult):
            if inner.is_err():
                return self
            outs = [_lower(v(inner.unwrap())) for v in validators]
            for o in outs:
                if not isinstance(o, SyncResult) and not inspect.isawaitable(o):
                    raise TypeError(f"expected a Result from validator, got {o!r}")
            if all(isinstance(o, SyncResult) for o in outs):
                return Result(_collect_errors(inner, outs))

            async def settle_outs() -> SyncResult[T, E | list[typing.Any]]:
                settled = [await settled_result(o) for o in outs]
                return _collect_errors(inner, settled)

            return _promoted(AsyncResult(Deferred(settle_outs)))

        async def wrapper() -> SyncResult[T, E | list[typing.Any]]:
            res = await inner
            if res.is_err():
                return res
            value = res.unwrap()
            settled = [await settled_result(_lower(v(value))) for v in validators]
            return _collect_errors(res, settled)

        return Result(AsyncResult(Deferred(wrapper)))

    # ------------------------------------------------------------------
    # Folding and conversion
    # ------------------------------------------------------------------

    def fold[U](
        self,
        on_ok: Callable[[T], U],
        on_err: Callable[[E], U],
        /,
    ) -> U | Coroutine[typing.Any, typing.Any, U]:
        inner = self._inner
        if isinstance(inner, SyncResult):
            return on_ok(inner.unwrap()) if inner.is_ok() else on_err(inner.unwrap_err())

        async def wrapper() -> U:
            res = await inner
            out = on_ok(res.unwrap()) if res.is_ok() else on_err(res.unwrap_err())
            if inspect.isawaitable(out):
                return await out
            return out

        return wrapper()

    def match[U](
        self,
        *,
        ok: Callable[[T], U],
        err: Callable[[E], U],
    ) -> U | Coroutine[typing.Any, typing.Any, U]:
        return self.fold(ok, err)

    def match_partial[U](
        self,
        default: Callable[[], U],
        /,
        *,
        ok: Callable[[T], U] | None = None,
        err: Callable[[E], U] | None = None,
    ) -> U | Coroutine[typing.Any, typing.Any, U]:
        """Match with some cases left out; default() answers the missing ones."""
        return self.fold(
            ok if ok is not None else lambda _: default(),
            err if err is not None else lambda _: default(),
        )

    def to_option(self) -> Option[T]:
        """Ok becomes present, Err becomes Option.NONE."""
        from ..option import AsyncOption, Option, SyncOption

        def convert(res: SyncResult[T, E]) -> SyncOption[T]:
            return SyncOption(res.unwrap()) if res.is_ok() else SyncOption.NONE

        inner = self._inner
        if isinstance(inner, SyncResult):
            return Option(convert(inner))

        async def wrapper() -> SyncOption[T]:
            return convert(await inner)

        return Option(AsyncOption(Deferred(wrapper)))

    # ------------------------------------------------------------------
    # Sync / async boundary
    # ------------------------------------------------------------------

    def to_async(self) -> Result[T, E]:
        if isinstance(self._inner, SyncResult):
            return Result(AsyncResult.from_sync(self._inner))
        return self

    async def settle(self) -> Result[T, E]:
        """Wait for the outcome and return it as a sync Result."""
        return Result(await settled_result(self._inner))

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    @staticmethod
    def all(*results: Result[typing.Any, typing.Any]) -> Result[tuple[typing.Any, ...], list[typing.Any]]:
        """Tuple of every value when all are Ok, otherwise Err with every error."""
        inners = [r._inner for r in results]
        if all(isinstance(i, SyncResult) for i in inners):
            return Result(_all_of(typing.cast(list[SyncResult[typing.Any, typing.Any]], inners)))

        async def wrapper() -> SyncResult[tuple[typing.Any, ...], list[typing.Any]]:
            return _all_of([await settled_result(i) for i in inners])

        return _promoted(AsyncResult(Deferred(wrapper)))

    @staticmethod
    def any(*results: Result[typing.Any, typing.Any]) -> Result[typing.Any, list[typing.Any]]:
        """First Ok, otherwise Err with every error in order."""
        inners = [r._inner for r in results]
        if all(isinstance(i, SyncResult) for i in inners):
            return Result(_first_ok(typing.cast(list[SyncResult[typing.Any, typing.Any]], inners)))

        async def wrapper() -> SyncResult[typing.Any, list[typing.Any]]:
            errors: list[typing.Any] = []
            for i in inners:
                res = await settled_result(i)
                if res.is_ok():
                    return res
                errors.append(res.unwrap_err())
            return SyncResult.err(errors)

        return _promoted(AsyncResult(Deferred(wrapper)))

    # ------------------------------------------------------------------
    # Composition drivers
    # ------------------------------------------------------------------

    @staticmethod
    def gen[R](body: Callable[[], Body[R]], /) -> Result[R, typing.Any]:
        """Run a generator body delegating to results; the first Err is returned."""
        return genM(body, resolve=result_step, pure=Result.ok)

    @staticmethod
    def gen_adapter[R](body: Callable[[Callable[[typing.Any], typing.Any]], Body[R]], /) -> Result[R, typing.Any]:
        return gen_adapterM(body, resolve=result_step, pure=Result.ok)

    @staticmethod
    async def async_gen[R](body: Callable[[], Body[R]], /) -> Result[R, typing.Any]:
        return await async_genM(
            body,
            resolve=result_step_async,
            accepts=is_result,
            pure=Result.ok,
        )

    @staticmethod
    async def async_gen_adapter[R](
        body: Callable[[Callable[[typing.Any], typing.Any]], Body[R]],
        /,
    ) -> Result[R, typing.Any]:
        """
        Async driver whose body receives bind.

        bind passes results through and turns an awaitable of a result into
        a step that can be delegated to with ``yield from``:

            async def load(user_id): ...

            def body(bind):
                user = yield from bind(load(1))
                return user.name
        """
        return await async_gen_adapterM(
            body,
            resolve=result_step_async,
            accepts=is_result,
            pure=Result.ok,
        )

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def __iter__(self) -> Generator[typing.Any, typing.Any, T]:
        return (yield from self._inner)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        if isinstance(self._inner, SyncResult) and isinstance(other._inner, SyncResult):
            return self._inner == other._inner
        return self is other

    def __hash__(self) -> int:
        if isinstance(self._inner, SyncResult):
            return hash(self._inner)
        return id(self)

    def __repr__(self) -> str:
        return f"Result({self._inner!r})"

    def _derive[U, F](self, inner: _Inner[U, F]) -> Result[U, F]:
        if inner is self._inner:
            return typing.cast(Result[U, F], self)
        if isinstance(inner, AsyncResult) and isinstance(self._inner, SyncResult):
            return _promoted(inner)
        return Result(inner)


def _promoted[U, F](inner: AsyncResult[U, F]) -> Result[U, F]:
    logger.debug("result promoted to async: %r", inner)
    return Result(inner)


def _lower(out: typing.Any) -> typing.Any:
    if isinstance(out, Result):
        return out._inner
    if inspect.isawaitable(out) and not isinstance(out, AsyncResult):
        return _lower_later(out)
    return out


async def _lower_later(pending: Awaitable[typing.Any]) -> typing.Any:
    return _lower(await pending)


def _collect_errors[T, E](
    base: SyncResult[T, E],
    outs: Sequence[SyncResult[typing.Any, typing.Any]],
) -> SyncResult[T, E | list[typing.Any]]:
    errors = [o.unwrap_err() for o in outs if o.is_err()]
    if errors:
        return SyncResult.err(errors)
    return base


def _all_of(results: list[SyncResult[typing.Any, typing.Any]]) -> SyncResult[tuple[typing.Any, ...], list[typing.Any]]:
    errors = [r.unwrap_err() for r in results if r.is_err()]
    if errors:
        return SyncResult.err(errors)
    return SyncResult.ok(tuple(r.unwrap() for r in results))


def _first_ok(results: list[SyncResult[typing.Any, typing.Any]]) -> SyncResult[typing.Any, list[typing.Any]]:
    errors: list[typing.Any] = []
    for r in results:
        if r.is_ok():
            return r
        errors.append(r.unwrap_err())
    return SyncResult.err(errors)


# ============================================================================
# Driver plumbing
# ============================================================================


def is_result(value: object) -> bool:
    return isinstance(value, (Result, SyncResult, AsyncResult))


def result_step(yielded: typing.Any) -> Step:
    """Resolve a suspension of a sync body: Err stops with that failure."""
    inner = yielded._inner if isinstance(yielded, Result) else yielded
    if isinstance(inner, SyncResult):
        if inner.is_ok():
            return True, inner.unwrap()
        return False, yielded if isinstance(yielded, Result) else Result(inner)
    if isinstance(inner, AsyncResult):
        raise YieldedValueError(yielded, "async result delegated inside a sync driver, use async_gen")
    raise YieldedValueError(yielded, "expected a Result")


async def result_step_async(yielded: typing.Any) -> Step:
    inner = yielded._inner if isinstance(yielded, Result) else yielded
    if isinstance(inner, AsyncResult):
        inner = await inner
    return result_step(inner)


__all__ = (
    "Result",
    "is_result",
    "result_step",
    "result_step_async",
)
