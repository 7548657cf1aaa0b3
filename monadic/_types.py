"""
Core type definitions for monadic.

Aliases shared by the Option and Result families and by the drivers.
"""

from __future__ import annotations

import typing
from collections.abc import Awaitable, Callable, Generator

# ============================================================================
# Type aliases
# ============================================================================

# Predicate = function that tests a value
type Predicate[T] = Callable[[T], bool]

# Mapper = callback used by map / zip, may return a deferred computation
type Mapper[T, U] = Callable[[T], U | Awaitable[U]]

# Effect = callback run for its side effect only (tap / tap_err)
type Effect[T] = Callable[[T], typing.Any]

# Body = generator consumed by the composition drivers
type Body[T] = Generator[typing.Any, typing.Any, T]

# Step = outcome of resolving one yielded wrapper inside a driver:
# (True, unwrapped value) to continue, (False, failure) to stop.
type Step = tuple[bool, typing.Any]

# ============================================================================
# Discriminant tags
# ============================================================================

type OptionTag = typing.Literal["Some", "None"]
type ResultTag = typing.Literal["Ok", "Err"]

SOME: typing.Final = "Some"
NONE: typing.Final = "None"
OK: typing.Final = "Ok"
ERR: typing.Final = "Err"

__all__ = (
    # Type aliases
    "Predicate",
    "Mapper",
    "Effect",
    "Body",
    "Step",
    # Tags
    "OptionTag",
    "ResultTag",
    "SOME",
    "NONE",
    "OK",
    "ERR",
)
