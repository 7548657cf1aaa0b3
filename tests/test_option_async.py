"""Async Option behaviour: promotion, settlement, branch isolation on pending values."""

from __future__ import annotations

import asyncio
import inspect

import pytest

from monadic import AsyncOption, Option, SyncOption, UnwrappedNoneError


async def fetch(value):
    await asyncio.sleep(0)
    return value


@pytest.mark.asyncio
async def test_async_callback_promotes(async_double):
    out = Option.some(5).map(async_double)
    assert out.is_async()
    assert isinstance(out.inner, AsyncOption)
    assert await out.unwrap() == 10
    assert async_double.calls == 1


@pytest.mark.asyncio
async def test_promotion_is_monotonic(async_double, double):
    first = Option.some(1).map(async_double)
    second = first.map(double)
    third = second.filter(lambda x: x > 0).zip(lambda x: x + 1)
    assert first.is_async() and second.is_async() and third.is_async()
    assert await third.unwrap() == (4, 5)


@pytest.mark.asyncio
async def test_receiver_stays_sync_after_promotion(async_double):
    base = Option.some(2)
    promoted = base.map(async_double)
    assert not base.is_async()
    assert base.unwrap() == 2
    assert await promoted.unwrap() == 4


def test_absent_never_promotes(async_double):
    out = Option.NONE.map(async_double)
    assert out is Option.NONE
    assert not out.is_async()
    assert async_double.calls == 0


@pytest.mark.asyncio
async def test_promotion_is_logged(async_double, caplog):
    await Option.some(1).map(async_double).settle()
    assert any("promoted to async" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_accessors_are_awaitable_on_async_options():
    opt = Option.some(3).to_async().map(lambda x: x + 1)
    for pending in (opt.unwrap(), opt.is_some(), opt.is_none(), opt.safe_unwrap(), opt.unwrap_or(0), opt.tag):
        assert inspect.isawaitable(pending)
        await pending
    assert await opt.tag == "Some"


@pytest.mark.asyncio
async def test_to_async_is_explicit_and_settled():
    opt = Option.some(1).to_async()
    assert opt.is_async()
    assert opt.to_async() is opt
    assert await opt.unwrap() == 1


@pytest.mark.asyncio
async def test_settle_returns_sync_singleton_for_absent():
    settled = await Option.some(1).to_async().filter(lambda x: x > 1).settle()
    assert settled is Option.NONE
    present = await Option.some(1).to_async().settle()
    assert not present.is_async()
    assert present.unwrap() == 1


@pytest.mark.asyncio
async def test_unwrap_on_async_none_raises_on_await():
    opt = Option.NONE.to_async()
    with pytest.raises(UnwrappedNoneError):
        await opt.unwrap()


@pytest.mark.asyncio
async def test_flat_map_with_awaitable_of_option():
    async def lookup(x):
        await asyncio.sleep(0)
        return Option.some(x * 10) if x > 0 else Option.none()

    assert await Option.some(2).flat_map(lookup).unwrap() == 20
    missing = await Option.some(-1).flat_map(lookup).settle()
    assert missing is Option.NONE


@pytest.mark.asyncio
async def test_flat_map_with_async_option():
    out = Option.some(2).flat_map(lambda x: Option.some(x + 1).to_async())
    assert out.is_async()
    assert await out.unwrap() == 3


@pytest.mark.asyncio
async def test_async_none_short_circuits(spy, async_spy):
    cb = spy(lambda x: x)
    acb = async_spy(lambda x: Option.some(x))
    opt = Option.NONE.to_async()
    for out in (opt.map(cb), opt.zip(cb), opt.flat_map(acb), opt.flat_zip(acb), opt.tap(cb)):
        assert await out.settle() is Option.NONE
    assert cb.calls == 0
    assert acb.calls == 0


@pytest.mark.asyncio
async def test_async_flat_zip_and_filter():
    opt = Option.some(2).to_async()
    assert await opt.flat_zip(lambda x: fetch(Option.some(x * 3))).unwrap() == (2, 6)
    assert await opt.filter(lambda x: fetch(x > 5)).settle() is Option.NONE


@pytest.mark.asyncio
async def test_async_tap_and_or_else(spy):
    effect = spy(lambda x: None)
    assert await Option.some(1).to_async().tap(effect).unwrap() == 1
    assert effect.seen == [(1,)]
    recovered = Option.NONE.to_async().or_else(lambda: fetch(Option.some(9)))
    assert await recovered.unwrap() == 9


@pytest.mark.asyncio
async def test_async_match_and_map_or():
    opt = Option.some(4).to_async()
    assert await opt.match(some=lambda x: x + 1, none=lambda: 0) == 5
    assert await opt.map_or(0, lambda x: x * 2) == 8
    assert await Option.NONE.to_async().map_or(0, lambda x: x * 2) == 0


@pytest.mark.asyncio
async def test_async_fold_and_match_partial():
    opt = Option.some(4).to_async()
    assert await opt.fold(lambda x: fetch(x + 1), lambda: 0) == 5
    assert await Option.NONE.to_async().fold(lambda x: x, lambda: "empty") == "empty"
    assert await opt.match_partial(lambda: 0, none=lambda: -1) == 0
    assert await Option.NONE.to_async().match_partial(lambda: 0, none=lambda: -1) == -1


@pytest.mark.asyncio
async def test_from_awaitable():
    assert await Option.from_awaitable(fetch(3)).unwrap() == 3
    assert await Option.from_awaitable(fetch(None)).settle() is Option.NONE


@pytest.mark.asyncio
async def test_callback_exception_surfaces_on_await():
    async def boom(_):
        raise ValueError("boom")

    opt = Option.some(1).map(boom)
    with pytest.raises(ValueError, match="boom"):
        await opt.unwrap()
    # the outcome is memoized: every awaiter sees the same failure
    with pytest.raises(ValueError, match="boom"):
        await opt.is_some()


@pytest.mark.asyncio
async def test_shared_async_step_runs_once(async_spy):
    slow = async_spy(lambda x: x)
    base = Option.some(1).map(slow)
    left = base.map(lambda x: x + 1)
    right = base.map(lambda x: x * 10)
    assert await left.unwrap() == 2
    assert await right.unwrap() == 10
    assert await base.unwrap() == 1
    assert slow.calls == 1


@pytest.mark.asyncio
async def test_async_all_and_any():
    pending = Option.from_awaitable(fetch(2))
    both = Option.all(Option.some(1), pending)
    assert both.is_async()
    assert await both.unwrap() == (1, 2)
    assert await Option.all(pending, Option.NONE).settle() is Option.NONE
    first = Option.any(Option.NONE, pending, Option.some(3))
    assert await first.unwrap() == 2


@pytest.mark.asyncio
async def test_to_result_from_async():
    res = Option.NONE.to_async().to_result("missing")
    assert res.is_async()
    assert await res.unwrap_err() == "missing"


@pytest.mark.asyncio
async def test_async_option_wrapper_directly():
    opt = AsyncOption.some(2).map(lambda x: x + 1)
    settled = await opt
    assert isinstance(settled, SyncOption)
    assert settled.unwrap() == 3
    assert await AsyncOption.none().is_none()
    adopted = AsyncOption.from_awaitable(fetch(SyncOption(5)))
    assert await adopted.unwrap() == 5
