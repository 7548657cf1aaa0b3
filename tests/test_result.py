"""Synchronous Result behaviour."""

from __future__ import annotations

import pytest

from monadic import Result, SyncResult, UnwrappedErrError, UnwrappedOkError


def too_small(x):
    return Result.err("too small") if x < 10 else Result.ok(x)


# =============================================================================
# Constructors and accessors
# =============================================================================


def test_ok_and_err_accessors():
    ok = Result.ok(5)
    err = Result.err("bad")
    assert ok.tag == "Ok" and ok.is_ok() and not ok.is_err()
    assert err.tag == "Err" and err.is_err() and not err.is_ok()
    assert ok.unwrap() == 5
    assert err.unwrap_err() == "bad"
    assert err.safe_unwrap() is None
    assert err.unwrap_or(0) == 0
    assert err.unwrap_or_else(len) == 3


def test_unwrap_on_err_raises_named_error():
    with pytest.raises(UnwrappedErrError) as info:
        Result.err("bad").unwrap()
    assert info.value.error == "bad"


def test_unwrap_on_err_chains_exception_payload():
    cause = KeyError("id")
    with pytest.raises(UnwrappedErrError) as info:
        Result.err(cause).unwrap()
    assert info.value.__cause__ is cause


def test_unwrap_err_on_ok_raises_named_error():
    with pytest.raises(UnwrappedOkError) as info:
        Result.ok(1).unwrap_err()
    assert info.value.value == 1


def test_from_nullable_and_predicate():
    assert Result.from_nullable(None, "missing").unwrap_err() == "missing"
    assert Result.from_nullable(0, "missing").unwrap() == 0
    assert Result.from_predicate(4, lambda x: x > 3, "small").unwrap() == 4
    assert Result.from_predicate(2, lambda x: x > 3, "small").unwrap_err() == "small"


def test_try_catch():
    assert Result.try_catch(lambda: int("12")).unwrap() == 12
    failed = Result.try_catch(lambda: int("x"))
    assert isinstance(failed.unwrap_err(), ValueError)
    mapped = Result.try_catch(lambda: int("x"), lambda exc: type(exc).__name__)
    assert mapped.unwrap_err() == "ValueError"


# =============================================================================
# Chaining
# =============================================================================


def test_map_then_unwrap(double):
    assert Result.ok(5).map(double).unwrap() == 10


def test_err_short_circuits_every_operation(spy):
    cb = spy(lambda x: Result.ok(x))
    err = Result.err("bad")
    for out in (err.map(cb), err.flat_map(cb), err.zip(cb), err.flat_zip(cb), err.tap(cb)):
        assert out.unwrap_err() == "bad"
    assert cb.calls == 0


def test_ok_short_circuits_failure_side(spy):
    cb = spy(lambda e: e)
    ok = Result.ok(1)
    assert ok.map_err(cb).unwrap() == 1
    assert ok.tap_err(cb).unwrap() == 1
    assert ok.or_else(cb).unwrap() == 1
    assert cb.calls == 0


def test_flat_map_into_failure():
    out = Result.ok(5).flat_map(too_small)
    assert out.is_err()
    assert out.unwrap_err() == "too small"
    assert Result.ok(50).flat_map(too_small).unwrap() == 50


def test_zip_and_flat_zip():
    assert Result.ok(2).zip(lambda x: x + 1).unwrap() == (2, 3)
    assert Result.ok(20).flat_zip(too_small).unwrap() == (20, 20)
    assert Result.ok(2).flat_zip(too_small).unwrap_err() == "too small"


def test_map_err_and_map_both():
    assert Result.err("bad").map_err(str.upper).unwrap_err() == "BAD"
    assert Result.ok(1).map_both(lambda x: x + 1, str.upper).unwrap() == 2
    assert Result.err("bad").map_both(lambda x: x + 1, str.upper).unwrap_err() == "BAD"


def test_tap_and_tap_err(spy):
    on_ok = spy(lambda x: None)
    on_err = spy(lambda e: None)
    Result.ok(1).tap(on_ok).tap_err(on_err)
    Result.err("e").tap(on_ok).tap_err(on_err)
    assert on_ok.seen == [(1,)]
    assert on_err.seen == [("e",)]


def test_or_else_recovers():
    assert Result.err("bad").or_else(lambda e: Result.ok(len(e))).unwrap() == 3
    assert Result.err("bad").or_else(lambda e: Result.err(e * 2)).unwrap_err() == "badbad"


def test_fold_and_match():
    assert Result.ok(2).fold(lambda x: x * 2, len) == 4
    assert Result.err("bad").fold(lambda x: x * 2, len) == 3
    assert Result.ok(2).match(ok=str, err=lambda e: "?") == "2"


def test_match_partial_falls_back_to_lazy_default(spy):
    default = spy(lambda: 0)
    assert Result.ok(21).match_partial(default, ok=lambda x: x * 2) == 42
    assert default.calls == 0
    assert Result.err("bad").match_partial(default, ok=lambda x: x * 2) == 0
    assert Result.err("bad").match_partial(default, err=len) == 3
    assert Result.ok(1).match_partial(default) == 0
    assert default.calls == 2


def test_zip_err_keeps_value_and_takes_check_failure(spy):
    assert Result.ok(50).zip_err(too_small).unwrap() == 50
    assert Result.ok(5).zip_err(too_small).unwrap_err() == "too small"
    # success value of the check is dropped
    assert Result.ok(1).zip_err(lambda x: Result.ok("ignored")).unwrap() == 1

    check = spy(too_small)
    assert Result.err("first").zip_err(check).unwrap_err() == "first"
    assert check.calls == 0


def test_operations_on_the_untouched_variant_return_the_receiver(spy):
    cb = spy(lambda x: x)
    err = Result.err("e")
    assert err.map(cb) is err
    assert err.zip_err(cb) is err
    ok = Result.ok(1)
    assert ok.map_err(cb) is ok
    assert cb.calls == 0


def test_flip():
    assert Result.ok(1).flip().unwrap_err() == 1
    assert Result.err("e").flip().unwrap() == "e"


def test_to_option():
    from monadic import Option

    assert Result.ok(1).to_option().unwrap() == 1
    assert Result.err("e").to_option() is Option.NONE


def test_inner_map():
    assert Result.ok((1, 2)).inner_map(str).unwrap() == ["1", "2"]
    assert Result.err("e").inner_map(str).unwrap_err() == "e"


def test_branches_do_not_affect_ancestor(spy):
    r = Result.ok(5)
    f = spy(lambda x: x + 1)
    g = spy(lambda x: x * 2)
    h = spy(lambda _: Result.err("no"))
    r1, r2, r3 = r.map(f), r.map(g), r.flat_map(h)
    assert r.unwrap() == 5
    assert (r1.unwrap(), r2.unwrap(), r3.unwrap_err()) == (6, 10, "no")


# =============================================================================
# Accumulation and aggregation
# =============================================================================

VALIDATORS = [
    lambda x: Result.ok(True) if x > 0 else Result.err("must be positive"),
    lambda x: Result.ok(True) if x < 100 else Result.err("must be < 100"),
    lambda x: Result.ok(True) if x % 2 == 0 else Result.err("must be even"),
]


@pytest.mark.parametrize(
    ("value", "errors"),
    [
        (42, None),
        (101, ["must be < 100"]),
        (-5, ["must be positive", "must be even"]),
    ],
)
def test_validate_collects_every_error(value, errors):
    out = Result.ok(value).validate(VALIDATORS)
    if errors is None:
        assert out.unwrap() == value
    else:
        assert out.unwrap_err() == errors


def test_validate_skips_validators_on_err(spy):
    validator = spy(lambda x: Result.ok(x))
    assert Result.err("init").validate([validator]).unwrap_err() == "init"
    assert validator.calls == 0


def test_all_collects_every_error():
    assert Result.all(Result.ok(1), Result.ok(2)).unwrap() == (1, 2)
    assert Result.all(Result.ok(1), Result.err("a"), Result.err("b")).unwrap_err() == ["a", "b"]


def test_any_returns_first_ok():
    assert Result.any(Result.err("a"), Result.ok(2), Result.ok(3)).unwrap() == 2
    assert Result.any(Result.err("a"), Result.err("b")).unwrap_err() == ["a", "b"]


# =============================================================================
# Equality and representation
# =============================================================================


def test_equality_and_repr():
    assert Result.ok(1) == Result.ok(1)
    assert Result.ok(1) != Result.err(1)
    assert SyncResult.ok(1) == SyncResult.ok(1)
    assert repr(Result.ok(1)) == "Result(Ok(1))"
    assert repr(Result.err("e")) == "Result(Err('e'))"


def test_results_are_immutable():
    res = Result.ok(1)
    with pytest.raises(AttributeError):
        res._inner = SyncResult.err("e")
    with pytest.raises(AttributeError):
        res.extra = 1
    inner = SyncResult.ok(1)
    with pytest.raises(AttributeError):
        inner._payload = 2
    with pytest.raises(AttributeError):
        del inner._is_ok
    assert res.unwrap() == 1 and inner.unwrap() == 1
