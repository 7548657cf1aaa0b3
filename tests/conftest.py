"""Pytest configuration and fixtures.

Provides call-counting callbacks shared by the Option, Result and driver
tests. Every property about "the callback never ran" is checked through
these spies rather than through side channels.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class Spy:
    """Synchronous callback double that records every call."""

    fn: Callable[..., Any]
    calls: int = 0
    seen: list[tuple[Any, ...]] = field(default_factory=list)

    def __call__(self, *args: Any) -> Any:
        self.calls += 1
        self.seen.append(args)
        return self.fn(*args)


@dataclass
class AsyncSpy:
    """Async callback double: each call returns a coroutine that yields to the loop once."""

    fn: Callable[..., Any]
    calls: int = 0
    seen: list[tuple[Any, ...]] = field(default_factory=list)

    async def __call__(self, *args: Any) -> Any:
        self.calls += 1
        self.seen.append(args)
        await asyncio.sleep(0)
        return self.fn(*args)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def double() -> Spy:
    return Spy(lambda x: x * 2)


@pytest.fixture
def async_double() -> AsyncSpy:
    return AsyncSpy(lambda x: x * 2)


@pytest.fixture
def spy() -> Callable[[Callable[..., Any]], Spy]:
    """Factory for ad-hoc sync spies."""
    return Spy


@pytest.fixture
def async_spy() -> Callable[[Callable[..., Any]], AsyncSpy]:
    """Factory for ad-hoc async spies."""
    return AsyncSpy


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Capture the library's debug records so tests can assert on them."""
    caplog.set_level(logging.DEBUG, logger="monadic")
