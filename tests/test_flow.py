"""Mixed Option / Result bodies and the generic drivers."""

from __future__ import annotations

import asyncio

import pytest

from monadic import Option, Result, UnwrappedNoneError
from monadic.flow import Family, Flow, Pending, binder, genM, mixed


async def fetch(value):
    await asyncio.sleep(0)
    return value


# =============================================================================
# Flow
# =============================================================================


def test_flow_mixes_options_and_results():
    def body():
        user = yield from Option.some("ada")
        age = yield from Result.ok(36)
        return f"{user}:{age}"

    assert Flow.gen(body) == Result.ok("ada:36")


def test_flow_turns_absence_into_err():
    ran = []

    def body():
        yield from Result.ok(1)
        yield from Option.none()
        ran.append("after")
        return 1

    out = Flow.gen(body)
    assert isinstance(out.unwrap_err(), UnwrappedNoneError)
    assert ran == []


def test_flow_keeps_result_errors():
    def body(adapt):
        yield from adapt(Option.some(1))
        yield from adapt(Result.err("bad"))
        return 1

    assert Flow.gen_adapter(body).unwrap_err() == "bad"


@pytest.mark.asyncio
async def test_flow_async():
    def body():
        a = yield from Option.from_awaitable(fetch(2))
        b = yield from Result.from_awaitable(fetch(3))
        return a * b

    assert (await Flow.async_gen(body)).unwrap() == 6


@pytest.mark.asyncio
async def test_flow_async_adapter_absent_option():
    def body(bind):
        value = yield from bind(fetch(Option.none()))
        return value

    out = await Flow.async_gen_adapter(body)
    assert isinstance(out.unwrap_err(), UnwrappedNoneError)


def test_mixed_family_is_built_once():
    assert mixed() is mixed()


# =============================================================================
# Generic drivers with a custom wrapper family
# =============================================================================


class Box:
    """Minimal wrapper: a value, or a failure when empty."""

    def __init__(self, *value):
        self.value = value

    def __iter__(self):
        if self.value:
            return self.value[0]
        yield self


def box_step(yielded):
    if not isinstance(yielded, Box):
        raise TypeError(yielded)
    return (True, yielded.value[0]) if yielded.value else (False, "empty")


async def box_step_async(yielded):
    return box_step(yielded)


BOXES = Family(
    step=box_step,
    step_async=box_step_async,
    accepts=lambda v: isinstance(v, Box),
    pure=lambda v: ("done", v),
)


def test_genM_with_custom_family():
    def body():
        a = yield from Box(1)
        b = yield from Box(2)
        return a + b

    assert genM(body, resolve=box_step, pure=lambda v: v) == 3
    assert BOXES.gen(body) == ("done", 3)


def test_custom_family_short_circuit():
    def body():
        yield from Box()
        return 1

    assert BOXES.gen(body) == "empty"


@pytest.mark.asyncio
async def test_custom_family_async_adapter():
    def body(bind):
        a = yield from bind(fetch(Box(5)))
        return a

    assert await BOXES.async_gen_adapter(body) == ("done", 5)


def test_binder_wraps_awaitables_in_pending():
    bind = binder(lambda v: isinstance(v, Box))
    box = Box(1)
    assert bind(box) is box

    async def later():
        return box

    coro = later()
    step = bind(coro)
    assert isinstance(step, Pending)
    assert step.awaitable is coro
    coro.close()
