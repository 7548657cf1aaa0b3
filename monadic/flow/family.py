"""
Wrapper families
================

Family bundles what the generic drivers need to know about one kind of
wrapper, so a custom wrapper type can reuse them without restating the
keyword arguments. Flow is the family that accepts both options and results
in one body and produces a Result.
"""

from __future__ import annotations

import functools
import typing
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .._errors import UnwrappedNoneError
from .._types import Body, Step
from .drive import async_gen_adapterM, async_genM, gen_adapterM, genM

if typing.TYPE_CHECKING:
    from ..result import Result


@dataclass(frozen=True, slots=True)
class Family[M]:
    """
    Driver interface for one wrapper family.

    step resolves a suspension of a sync body, step_async one of an async
    body; accepts tells wrappers of the family apart from plain awaitables;
    pure wraps the return value of a body that ran to completion.
    """

    step: Callable[[typing.Any], Step]
    step_async: Callable[[typing.Any], Awaitable[Step]]
    accepts: Callable[[object], bool]
    pure: Callable[[typing.Any], M]

    def gen(self, body: Callable[[], Body[typing.Any]], /) -> M:
        return genM(body, resolve=self.step, pure=self.pure)

    def gen_adapter(self, body: Callable[[Callable[[typing.Any], typing.Any]], Body[typing.Any]], /) -> M:
        return gen_adapterM(body, resolve=self.step, pure=self.pure)

    async def async_gen(self, body: Callable[[], Body[typing.Any]], /) -> M:
        return await async_genM(
            body,
            resolve=self.step_async,
            accepts=self.accepts,
            pure=self.pure,
        )

    async def async_gen_adapter(
        self,
        body: Callable[[Callable[[typing.Any], typing.Any]], Body[typing.Any]],
        /,
    ) -> M:
        return await async_gen_adapterM(
            body,
            resolve=self.step_async,
            accepts=self.accepts,
            pure=self.pure,
        )


# ============================================================================
# Mixed Option / Result family
# ============================================================================


@functools.cache
def mixed() -> Family[Result[typing.Any, typing.Any]]:
    """Options and results in one body; an absent option stops it with Err(UnwrappedNoneError())."""
    # option and result import the drivers from this package
    from ..option.option import is_option, option_step, option_step_async
    from ..result.result import Result, is_result, result_step, result_step_async

    def absent_as_err(step: Step) -> Step:
        ok, value = step
        if ok:
            return step
        return False, Result.err(UnwrappedNoneError())

    def step(yielded: typing.Any) -> Step:
        if is_option(yielded):
            return absent_as_err(option_step(yielded))
        return result_step(yielded)

    async def step_async(yielded: typing.Any) -> Step:
        if is_option(yielded):
            return absent_as_err(await option_step_async(yielded))
        return await result_step_async(yielded)

    def accepts(value: object) -> bool:
        return is_option(value) or is_result(value)

    return Family(step=step, step_async=step_async, accepts=accepts, pure=Result.ok)


class Flow:
    """
    Drivers for bodies that mix options and results.

    >>> def body():
    ...     user = yield from Option.some("ada")
    ...     age = yield from Result.ok(36)
    ...     return f"{user}:{age}"
    >>> Flow.gen(body)
    Result(Ok('ada:36'))
    """

    @staticmethod
    def gen(body: Callable[[], Body[typing.Any]], /) -> Result[typing.Any, typing.Any]:
        return mixed().gen(body)

    @staticmethod
    def gen_adapter(
        body: Callable[[Callable[[typing.Any], typing.Any]], Body[typing.Any]],
        /,
    ) -> Result[typing.Any, typing.Any]:
        return mixed().gen_adapter(body)

    @staticmethod
    async def async_gen(body: Callable[[], Body[typing.Any]], /) -> Result[typing.Any, typing.Any]:
        return await mixed().async_gen(body)

    @staticmethod
    async def async_gen_adapter(
        body: Callable[[Callable[[typing.Any], typing.Any]], Body[typing.Any]],
        /,
    ) -> Result[typing.Any, typing.Any]:
        return await mixed().async_gen_adapter(body)


__all__ = ("Family", "Flow", "mixed")
