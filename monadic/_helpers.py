"""Internal helpers for monadic.

Common functions used across the Option and Result families and the drivers.
These are not part of the public API but can be used for creating custom
wrapper families for the generic drivers."""

from __future__ import annotations

import dataclasses
import inspect
import typing
from collections.abc import Awaitable, Callable


# Identity function
def identity[T](x: T) -> T:
    """Identity function: returns its argument unchanged."""
    return x


# Callback application inside async continuations
async def apply[T, U](fn: Callable[[T], U | Awaitable[U]], value: T, /) -> U:
    """
    Call fn and wait for its result if it is a deferred computation.

    Used by async wrappers, where a callback may be either sync or async
    and the continuation has to suspend only in the second case.
    """
    out = fn(value)
    if inspect.isawaitable(out):
        return await out
    return typing.cast(U, out)


async def pair_with[T, U](original: T, pending: Awaitable[U], /) -> tuple[T, U]:
    """Await the second element of a zip pair."""
    return (original, await pending)


# Write-once slotted base
class Frozen:
    """
    Slotted base that refuses assignment after construction.

    Subclasses set their slots with object.__setattr__ in __init__ or
    __new__; any later write or delete fails like on a frozen dataclass.
    """

    __slots__ = ()

    def __setattr__(self, name: str, value: object) -> None:
        raise dataclasses.FrozenInstanceError(f"cannot assign to field {name!r}")

    def __delattr__(self, name: str) -> None:
        raise dataclasses.FrozenInstanceError(f"cannot delete field {name!r}")


__all__ = (
    "identity",
    "apply",
    "pair_with",
    "Frozen",
)
