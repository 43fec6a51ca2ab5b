"""Ok/Err values for outcomes the caller is expected to branch on.

A refused lifecycle transition is not a bug when it comes from
``try_transition``; the caller gets an ``Err`` describing why and decides
what to do with it.

Usage:
    result = machine.try_transition(CocoonStage.OPEN)
    if result.is_err():
        logger.debug(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    error = None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failure; ``unwrap`` raises instead of returning a value."""

    error: E
    value = None

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"unwrap() on Err: {self.error}")

    def unwrap_or(self, default):
        return default


Result = Union[Ok[T], Err[E]]

__all__ = ["Ok", "Err", "Result"]
