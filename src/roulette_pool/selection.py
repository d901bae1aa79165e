"""Fitness-proportionate parent selection built on :class:`WeightedPool`."""

from __future__ import annotations

from typing import Optional, Sequence

from .pool import WeightedPool
from .types import RandomSource, T


def roulette_select(
    individuals: Sequence[T],
    fitness: Sequence[float],
    count: int,
    *,
    replace: bool = False,
    random_fn: Optional[RandomSource] = None,
) -> list[T]:
    """Pick up to ``count`` individuals with probability proportional to fitness.

    Without replacement each individual is returned at most once and fewer
    than ``count`` come back when the positive-fitness individuals run out.
    With replacement exactly ``count`` are returned unless nothing is drawable.
    Fitness values go through the same validation as :meth:`WeightedPool.insert`.
    """

    if len(individuals) != len(fitness):
        raise ValueError("fitness length must match individuals")
    if count < 0:
        raise ValueError("count must be >= 0")

    pool: WeightedPool[T] = WeightedPool.from_pairs(zip(fitness, individuals), random_fn=random_fn)
    chosen: list[T] = []
    if replace:
        for _ in range(count):
            pair = pool.peek()
            if pair is None:
                break
            chosen.append(pair[1])
        return chosen

    session = pool.session()
    while len(chosen) < count:
        pair = session.draw()
        if pair is None:
            break
        chosen.append(pair[1])
    return chosen


__all__ = ["roulette_select"]
