"""Weight validation and the cumulative-subtraction index scan."""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Callable, Iterable, Optional

from .exceptions import InvalidWeightError, WeightOverflowError

LOGGER = logging.getLogger(__name__)


def validate_weight(weight: object) -> float:
    """Return ``weight`` as a float or raise :class:`InvalidWeightError`."""

    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidWeightError(weight)
    value = float(weight)
    if not math.isfinite(value) or value < 0.0:
        raise InvalidWeightError(weight)
    return value


def checked_total(total: float, weight: float) -> float:
    """Add ``weight`` to ``total`` or raise :class:`WeightOverflowError`."""

    new_total = total + weight
    if not math.isfinite(new_total):
        raise WeightOverflowError(weight, total)
    return new_total


def sum_weights(weights: Iterable[object]) -> float:
    """Validate and sum ``weights`` in order, the way repeated inserts would."""

    total = 0.0
    for weight in weights:
        total = checked_total(total, validate_weight(weight))
    return total


def select_index(
    weights: Iterable[float],
    total: float,
    random_fn: Callable[[], float],
) -> Optional[int]:
    """Pick an index with probability ``weights[i] / total``.

    ``target = random_fn() * total`` is walked down by each weight in index
    order and the first positive-weight index that brings it to ``<= 0`` wins.
    Zero weights are stepped over. Rounding can leave ``target`` above zero
    after the last entry; the last positive-weight index is returned then.
    Returns ``None`` when nothing is drawable.
    """

    if total <= 0.0:
        return None
    target = random_fn() * total
    fallback: Optional[int] = None
    for index, weight in enumerate(weights):
        if weight <= 0.0:
            continue
        target -= weight
        if target <= 0.0:
            return index
        fallback = index
    if fallback is not None:
        LOGGER.debug("Scan ended %r above zero, falling back to index %d", target, fallback)
    return fallback


def reduce_total(total: float, weight: float, remaining: Iterable[float]) -> float:
    """Subtract a drawn ``weight`` from ``total``.

    Cancellation can leave ``total`` at or below zero while ``remaining``
    still holds positive weights (e.g. ``1e16 + 1.0 - 1e16``). The total is
    re-summed from ``remaining`` then; an empty ``remaining`` gives ``0.0``.
    """

    new_total = total - weight
    if new_total > 0.0:
        return new_total
    return max(sum(remaining), 0.0)


def swap_remove(items: list, index: int):
    """Remove ``items[index]`` in O(1) by moving the last item into its slot."""

    last = items.pop()
    if index == len(items):
        return last
    removed = items[index]
    items[index] = last
    return removed


__all__ = ["checked_total", "reduce_total", "select_index", "sum_weights", "swap_remove", "validate_weight"]
