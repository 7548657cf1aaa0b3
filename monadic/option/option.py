"""
Option - the type call sites hold
=================================

Option wraps exactly one SyncOption or AsyncOption. It stays sync while every
callback answers synchronously and switches to async the first time one hands
back an awaitable (or an async option). The switch is one-way: every option
derived from an async one is async too, whatever its own callbacks return.

Accessors follow the wrapped value: plain values while sync, coroutines
once async. Option.NONE is the only absent sync Option there is.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Awaitable, Callable, Coroutine, Generator, Sequence

from .._deferred import Deferred
from .._errors import YieldedValueError
from .._helpers import Frozen
from .._types import Body, Effect, Mapper, OptionTag, Predicate, Step
from ..flow.drive import async_gen_adapterM, async_genM, gen_adapterM, genM
from .async_option import AsyncOption
from .sync_option import SyncOption, settled_option

if typing.TYPE_CHECKING:
    from ..result import Result

logger = logging.getLogger(__name__)

type _Inner[T] = SyncOption[T] | AsyncOption[T]

_NONE: Option[typing.Never] | None = None


class Option[T](Frozen):
    """Hybrid optional value."""

    __slots__ = ("_inner",)

    NONE: typing.ClassVar[Option[typing.Never]]

    _inner: _Inner[T]

    def __new__(cls, inner: _Inner[T], /) -> Option[T]:
        if inner is SyncOption.NONE and _NONE is not None:
            return _NONE
        self = object.__new__(cls)
        object.__setattr__(self, "_inner", inner)
        return self

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @staticmethod
    def some[V](value: V, /) -> Option[V]:
        return Option(SyncOption(value))

    @staticmethod
    def none() -> Option[typing.Never]:
        return Option.NONE

    @staticmethod
    def from_nullable[V](value: V | None, /) -> Option[V]:
        """None becomes absent, anything else present."""
        if value is None:
            return Option.NONE
        return Option(SyncOption(value))

    @staticmethod
    def from_falsy[V](value: V, /) -> Option[V]:
        """Falsy values (0, "", [], None, ...) become absent."""
        if not value:
            return Option.NONE
        return Option(SyncOption(value))

    @staticmethod
    def from_predicate[V](value: V, pred: Predicate[V], /) -> Option[V]:
        if not pred(value):
            return Option.NONE
        return Option(SyncOption(value))

    @staticmethod
    def from_awaitable[V](pending: Awaitable[V | None], /) -> Option[V]:
        """Async option over an awaitable; a None result becomes absent."""

        async def wrapper() -> SyncOption[V]:
            value = await pending
            if value is None:
                return SyncOption.NONE
            return SyncOption(value)

        return Option(AsyncOption(Deferred(wrapper)))

    # ------------------------------------------------------------------
    # Inspection and accessors
    # ------------------------------------------------------------------

    def is_async(self) -> bool:
        return isinstance(self._inner, AsyncOption)

    @property
    def inner(self) -> _Inner[T]:
        """The wrapped SyncOption or AsyncOption."""
        return self._inner

    @property
    def tag(self) -> OptionTag | Coroutine[typing.Any, typing.Any, OptionTag]:
        return self._inner.tag

    def is_some(self) -> bool | Coroutine[typing.Any, typing.Any, bool]:
        return self._inner.is_some()

    def is_none(self) -> bool | Coroutine[typing.Any, typing.Any, bool]:
        return self._inner.is_none()

    def unwrap(self) -> T | Coroutine[typing.Any, typing.Any, T]:
        return self._inner.unwrap()

    def safe_unwrap(self) -> T | None | Coroutine[typing.Any, typing.Any, T | None]:
        return self._inner.safe_unwrap()

    def unwrap_or(self, default: T, /) -> T | Coroutine[typing.Any, typing.Any, T]:
        return self._inner.unwrap_or(default)

    def unwrap_or_else(self, fn: Callable[[], T], /) -> T | Coroutine[typing.Any, typing.Any, T]:
        return self._inner.unwrap_or_else(fn)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def map[U](self, fn: Mapper[T, U], /) -> Option[U]:
        return self._derive(self._inner.map(fn))

    def flat_map[U](self, fn: Callable[[T], Option[U] | Awaitable[Option[U]]], /) -> Option[U]:
        """fn returns an Option (or an awaitable of one) that becomes the result."""
        return self._derive(self._inner.flat_map(lambda value: _lower(fn(value))))

    def zip[U](self, fn: Mapper[T, U], /) -> Option[tuple[T, U]]:
        return self._derive(self._inner.zip(fn))

    def flat_zip[U](
        self,
        fn: Callable[[T], Option[U] | Awaitable[Option[U]]],
        /,
    ) -> Option[tuple[T, U]]:
        return self._derive(self._inner.flat_zip(lambda value: _lower(fn(value))))

    def filter(self, pred: Predicate[T] | Callable[[T], Awaitable[bool]], /) -> Option[T]:
        return self._derive(self._inner.filter(pred))

    def tap(self, fn: Effect[T], /) -> Option[T]:
        return self._derive(self._inner.tap(fn))

    def or_else(self, fn: Callable[[], Option[T] | Awaitable[Option[T]]], /) -> Option[T]:
        """Keep a present value; replace absence with the Option fn returns."""
        return self._derive(self._inner.or_else(lambda: _lower(fn())))

    def map_or[U](
        self,
        default: U,
        fn: Mapper[T, U],
        /,
    ) -> U | Coroutine[typing.Any, typing.Any, U]:
        return self.map(fn).unwrap_or(default)

    def inner_map[I, U](self: Option[Sequence[I]], fn: Callable[[I], U], /) -> Option[list[U]]:
        """Map fn over the elements of a present list or tuple."""

        def each(items: Sequence[I]) -> list[U]:
            if not isinstance(items, (list, tuple)):
                raise TypeError("inner_map can only be called on an Option of a list or tuple")
            return [fn(item) for item in items]

        return self.map(each)

    def fold[U](
        self,
        on_some: Callable[[T], U],
        on_none: Callable[[], U],
        /,
    ) -> U | Coroutine[typing.Any, typing.Any, U]:
        """Fold both variants into one value."""
        inner = self._inner
        if isinstance(inner, SyncOption):
            return on_some(inner.unwrap()) if inner.is_some() else on_none()

        async def wrapper() -> U:
            opt = await inner
            out = on_some(opt.unwrap()) if opt.is_some() else on_none()
            if inspect.isawaitable(out):
                return await out
            return out

        return wrapper()

    def match[U](
        self,
        *,
        some: Callable[[T], U],
        none: Callable[[], U],
    ) -> U | Coroutine[typing.Any, typing.Any, U]:
        return self.fold(some, none)

    def match_partial[U](
        self,
        default: Callable[[], U],
        /,
        *,
        some: Callable[[T], U] | None = None,
        none: Callable[[], U] | None = None,
    ) -> U | Coroutine[typing.Any, typing.Any, U]:
        """
        Match with some cases left out.

        A variant without a handler is answered by default(), which is
        only called in that case.
        """
        return self.fold(
            some if some is not None else lambda _: default(),
            none if none is not None else default,
        )

    def to_result[E](self, error: E, /) -> Result[T, E]:
        """Present becomes Ok, absent becomes Err(error)."""
        from ..result import AsyncResult, Result, SyncResult

        def convert(opt: SyncOption[T]) -> SyncResult[T, E]:
            if opt.is_some():
                return SyncResult.ok(opt.unwrap())
            return SyncResult.err(error)

        inner = self._inner
        if isinstance(inner, SyncOption):
            return Result(convert(inner))

        async def wrapper() -> SyncResult[T, E]:
            return convert(await inner)

        return Result(AsyncResult(Deferred(wrapper)))

    # ------------------------------------------------------------------
    # Sync / async boundary
    # ------------------------------------------------------------------

    def to_async(self) -> Option[T]:
        """Settled async view of a sync option; async options are returned as is."""
        if isinstance(self._inner, SyncOption):
            return Option(AsyncOption.from_sync(self._inner))
        return self

    async def settle(self) -> Option[T]:
        """Wait for the value and return it as a sync Option."""
        return Option(await settled_option(self._inner))

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    @staticmethod
    def all(*options: Option[typing.Any]) -> Option[tuple[typing.Any, ...]]:
        """Tuple of every value when all are present, NONE otherwise."""
        inners = [o._inner for o in options]
        if all(isinstance(i, SyncOption) for i in inners):
            return Option(_all_of(typing.cast(list[SyncOption[typing.Any]], inners)))

        async def wrapper() -> SyncOption[tuple[typing.Any, ...]]:
            settled: list[SyncOption[typing.Any]] = []
            for i in inners:
                opt = await settled_option(i)
                if opt.is_none():
                    return SyncOption.NONE
                settled.append(opt)
            return _all_of(settled)

        return _promoted(AsyncOption(Deferred(wrapper)))

    @staticmethod
    def any(*options: Option[typing.Any]) -> Option[typing.Any]:
        """First present option, NONE when there is none."""
        inners = [o._inner for o in options]
        if all(isinstance(i, SyncOption) for i in inners):
            return Option(_first_some(typing.cast(list[SyncOption[typing.Any]], inners)))

        async def wrapper() -> SyncOption[typing.Any]:
            for i in inners:
                opt = await settled_option(i)
                if opt.is_some():
                    return opt
            return SyncOption.NONE

        return _promoted(AsyncOption(Deferred(wrapper)))

    # ------------------------------------------------------------------
    # Composition drivers
    # ------------------------------------------------------------------

    @staticmethod
    def gen[R](body: Callable[[], Body[R]], /) -> Option[R]:
        """
        Run a generator body that delegates to options with ``yield from``.

        >>> def body():
        ...     a = yield from Option.some(2)
        ...     b = yield from Option.some(3)
        ...     return a * b
        >>> Option.gen(body)
        Option(Some(6))
        """
        return genM(body, resolve=option_step, pure=Option.some)

    @staticmethod
    def gen_adapter[R](body: Callable[[Callable[[typing.Any], typing.Any]], Body[R]], /) -> Option[R]:
        return gen_adapterM(body, resolve=option_step, pure=Option.some)

    @staticmethod
    async def async_gen[R](body: Callable[[], Body[R]], /) -> Option[R]:
        """Like gen, but async options and plain awaitables may be yielded too."""
        return await async_genM(
            body,
            resolve=option_step_async,
            accepts=is_option,
            pure=Option.some,
        )

    @staticmethod
    async def async_gen_adapter[R](
        body: Callable[[Callable[[typing.Any], typing.Any]], Body[R]],
        /,
    ) -> Option[R]:
        return await async_gen_adapterM(
            body,
            resolve=option_step_async,
            accepts=is_option,
            pure=Option.some,
        )

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def __iter__(self) -> Generator[typing.Any, typing.Any, T]:
        return (yield from self._inner)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        if isinstance(self._inner, SyncOption) and isinstance(other._inner, SyncOption):
            return self._inner == other._inner
        return self is other

    def __hash__(self) -> int:
        if isinstance(self._inner, SyncOption):
            return hash(self._inner)
        return id(self)

    def __repr__(self) -> str:
        return f"Option({self._inner!r})"

    def _derive[U](self, inner: _Inner[U]) -> Option[U]:
        if inner is self._inner:
            return typing.cast(Option[U], self)
        if isinstance(inner, AsyncOption) and isinstance(self._inner, SyncOption):
            return _promoted(inner)
        return Option(inner)


Option.NONE = _NONE = Option(SyncOption.NONE)


def _promoted[U](inner: AsyncOption[U]) -> Option[U]:
    logger.debug("option promoted to async: %r", inner)
    return Option(inner)


def _lower(out: typing.Any) -> typing.Any:
    """Unwrap the façade a flat_* callback returned, down to a wrapper."""
    if isinstance(out, Option):
        return out._inner
    if inspect.isawaitable(out) and not isinstance(out, AsyncOption):
        return _lower_later(out)
    return out


async def _lower_later(pending: Awaitable[typing.Any]) -> typing.Any:
    return _lower(await pending)


def _all_of(opts: list[SyncOption[typing.Any]]) -> SyncOption[tuple[typing.Any, ...]]:
    if any(o.is_none() for o in opts):
        return SyncOption.NONE
    return SyncOption(tuple(o.unwrap() for o in opts))


def _first_some(opts: list[SyncOption[typing.Any]]) -> SyncOption[typing.Any]:
    for o in opts:
        if o.is_some():
            return o
    return SyncOption.NONE


# ============================================================================
# Driver plumbing
# ============================================================================


def is_option(value: object) -> bool:
    return isinstance(value, (Option, SyncOption, AsyncOption))


def option_step(yielded: typing.Any) -> Step:
    """Resolve a suspension of a sync body: absent stops with Option.NONE."""
    inner = yielded._inner if isinstance(yielded, Option) else yielded
    if isinstance(inner, SyncOption):
        if inner.is_some():
            return True, inner.unwrap()
        return False, Option.NONE
    if isinstance(inner, AsyncOption):
        raise YieldedValueError(yielded, "async option delegated inside a sync driver, use async_gen")
    raise YieldedValueError(yielded, "expected an Option")


async def option_step_async(yielded: typing.Any) -> Step:
    inner = yielded._inner if isinstance(yielded, Option) else yielded
    if isinstance(inner, AsyncOption):
        inner = await inner
    return option_step(inner)


__all__ = (
    "Option",
    "is_option",
    "option_step",
    "option_step_async",
)
