from __future__ import annotations

import typing


class UnwrapError(Exception):
    """Accessor used on the wrong variant."""


class UnwrappedNoneError(UnwrapError):
    """unwrap() called on an absent Option."""

    def __init__(self) -> None:
        super().__init__("Attempted to unwrap Option.none")


class UnwrappedErrError(UnwrapError):
    """unwrap() called on an Err result."""

    error: typing.Any

    def __init__(self, error: typing.Any) -> None:
        self.error = error
        super().__init__(f"Attempted to call unwrap on an Err result: {error!r}")


class UnwrappedOkError(UnwrapError):
    """unwrap_err() called on an Ok result."""

    value: typing.Any

    def __init__(self, value: typing.Any) -> None:
        self.value = value
        super().__init__(f"Attempted to call unwrap_err on an Ok result: {value!r}")


class YieldedValueError(TypeError):
    """A composition body yielded something its driver cannot interpret."""

    yielded: typing.Any

    def __init__(self, yielded: typing.Any, reason: str) -> None:
        self.yielded = yielded
        super().__init__(f"{reason}: {yielded!r}")


__all__ = (
    "UnwrapError",
    "UnwrappedErrError",
    "UnwrappedNoneError",
    "UnwrappedOkError",
    "YieldedValueError",
)
