"""Exception hierarchy for weighted pools."""

from __future__ import annotations

from typing import Optional


class PoolError(Exception):
    """Base class for every error raised by roulette_pool."""


class InvalidWeightError(PoolError, ValueError):
    """A weight is negative, NaN, infinite or not a number at all."""

    def __init__(self, weight: object, message: Optional[str] = None) -> None:
        self.weight = weight
        super().__init__(message or f"weight {weight!r} must be a finite number >= 0")


class WeightOverflowError(PoolError, OverflowError):
    """Adding a weight would push the pool total past the finite range."""

    def __init__(self, weight: float, total: float) -> None:
        self.weight = weight
        self.total = total
        super().__init__(f"adding weight {weight!r} to total {total!r} overflows")


class PoolModifiedError(PoolError, RuntimeError):
    """The pool changed while a borrowing draw session was open."""


__all__ = [
    "InvalidWeightError",
    "PoolError",
    "PoolModifiedError",
    "WeightOverflowError",
]
