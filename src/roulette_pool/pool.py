"""Fitness-proportionate (roulette-wheel) selection container.

A :class:`WeightedPool` holds ``(weight, value)`` entries and a running total of
their weights. Each draw picks an entry with probability ``weight / total``:

* :meth:`WeightedPool.draw` removes the entry and hands the value over,
* :meth:`WeightedPool.session` opens a :class:`~roulette_pool.session.DrawSession`
  that samples without replacement while leaving the pool untouched.

See https://wikipedia.org/wiki/Fitness_proportionate_selection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Optional

from .config import PoolConfig
from .exceptions import PoolError
from .session import DrawSession
from .telemetry import EVENT_DRAW, EVENT_EXHAUSTED, EVENT_RECOMPUTE, EVENT_REJECTED, TelemetryPublisher
from .types import DrawMode, RandomSource, T
from .utils import checked_total, reduce_total, select_index, sum_weights, swap_remove, validate_weight

LOGGER = logging.getLogger(__name__)


@dataclass
class PoolEntry(Generic[T]):
    """One slot of the pool. Mutating ``weight`` requires a total rescan."""

    weight: float
    value: T

    def as_pair(self) -> tuple[float, T]:
        return self.weight, self.value


class WeightedPool(Generic[T]):
    """Collection of weighted values supporting roulette-wheel draws.

    The pool is not thread-safe; guard a shared pool with a single lock.
    """

    def __init__(
        self,
        config: Optional[PoolConfig] = None,
        *,
        random_fn: Optional[RandomSource] = None,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> None:
        self.config = config or PoolConfig()
        self._random = random_fn or self.config.random_source()
        self._telemetry = telemetry
        self._entries: list[PoolEntry[T]] = []
        self._total = 0.0
        self._version = 0
        self._draws_since_recompute = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def empty(
        cls,
        config: Optional[PoolConfig] = None,
        *,
        random_fn: Optional[RandomSource] = None,
    ) -> "WeightedPool[T]":
        return cls(config, random_fn=random_fn)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[float, T]],
        config: Optional[PoolConfig] = None,
        *,
        random_fn: Optional[RandomSource] = None,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> "WeightedPool[T]":
        """Build a pool as if every pair had been passed to :meth:`insert`."""

        pool = cls(config, random_fn=random_fn, telemetry=telemetry)
        pool.extend(pairs)
        return pool

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, weight: float, value: T) -> None:
        """Append an entry.

        Raises :class:`~roulette_pool.exceptions.InvalidWeightError` for a
        negative or non-finite weight and
        :class:`~roulette_pool.exceptions.WeightOverflowError` when the total
        would stop being finite. A rejected insert changes nothing.
        """

        try:
            checked = validate_weight(weight)
            new_total = checked_total(self._total, checked)
        except PoolError as exc:
            self._reject(weight, exc)
            raise
        self._entries.append(PoolEntry(checked, value))
        self._total = new_total
        self._version += 1

    def insert_unchecked(self, weight: float, value: T) -> None:
        """Append an entry without validating ``weight``.

        Fast path for callers that already guarantee a finite, non-negative
        weight and a finite resulting total. Passing anything else breaks the
        pool until :meth:`recompute_total_weight` is called.
        """

        self._entries.append(PoolEntry(weight, value))
        self._total += weight
        self._version += 1

    def extend(self, pairs: Iterable[tuple[float, T]]) -> None:
        """Insert every pair, or none of them if any weight is rejected."""

        staged = [(weight, value) for weight, value in pairs]
        total = self._total
        checked: list[float] = []
        for weight, _ in staged:
            try:
                checked_weight = validate_weight(weight)
                total = checked_total(total, checked_weight)
            except PoolError as exc:
                self._reject(weight, exc)
                raise
            checked.append(checked_weight)
        self._entries.extend(PoolEntry(weight, value) for weight, (_, value) in zip(checked, staged))
        self._total = total
        self._version += 1

    def clear(self) -> None:
        self._entries.clear()
        self._total = 0.0
        self._version += 1

    def recompute_total_weight(self) -> float:
        """Rescan entries and reset the total to their exact sum.

        Required after weights were changed through :attr:`entries`, and
        useful from time to time to cancel rounding drift from many draws.
        The stored total is left untouched when an invalid weight is found.
        """

        previous = self._total
        try:
            total = sum_weights(entry.weight for entry in self._entries)
        except PoolError as exc:
            self._reject(exc.weight, exc)
            raise
        self._total = total
        self._draws_since_recompute = 0
        LOGGER.debug("Recomputed total weight %r -> %r over %d entries", previous, total, len(self))
        self.emit_event(EVENT_RECOMPUTE, previous=previous, total=total)
        return total

    # ------------------------------------------------------------------
    # Draws
    # ------------------------------------------------------------------
    def draw(self) -> Optional[tuple[float, T]]:
        """Remove one entry chosen by weight and return ``(weight, value)``.

        Returns ``None`` when the pool is empty or every weight is zero.
        The remaining entries may be reordered.
        """

        self._maybe_recompute()
        index = self._random_index()
        if index is None:
            self.emit_event(EVENT_EXHAUSTED, remaining=len(self._entries))
            return None
        entry = swap_remove(self._entries, index)
        if self._entries:
            self._total = reduce_total(self._total, entry.weight, (e.weight for e in self._entries))
        else:
            self._total = 0.0
        self._version += 1
        self.emit_event(
            EVENT_DRAW,
            mode=DrawMode.CONSUMING.value,
            weight=entry.weight,
            value=entry.value,
            remaining=len(self._entries),
        )
        return entry.as_pair()

    def drain(self) -> Iterator[tuple[float, T]]:
        """Yield consuming draws until the pool has nothing drawable left."""

        while True:
            pair = self.draw()
            if pair is None:
                return
            yield pair

    def peek(self) -> Optional[tuple[float, T]]:
        """Return one entry chosen by weight without removing it."""

        index = self._random_index()
        if index is None:
            return None
        return self._entries[index].as_pair()

    def session(self) -> DrawSession[T]:
        """Open a borrowing draw session over the current contents."""

        return DrawSession(self)

    draw_iter = session

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    @property
    def total_weight(self) -> float:
        return self._total

    @property
    def entries(self) -> list[PoolEntry[T]]:
        """Live entry list. Call :meth:`recompute_total_weight` after editing weights."""

        return self._entries

    @property
    def random_fn(self) -> RandomSource:
        return self._random

    @property
    def version(self) -> int:
        """Counter bumped by every mutation; sessions use it to detect changes."""

        return self._version

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[tuple[float, T]]:
        for entry in self._entries:
            yield entry.as_pair()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(len={len(self)}, total_weight={self._total!r})"

    def copy(self) -> "WeightedPool[T]":
        """Shallow copy: new entry slots, same values, same random source."""

        clone = type(self)(self.config, random_fn=self._random, telemetry=self._telemetry)
        clone._entries = [PoolEntry(entry.weight, entry.value) for entry in self._entries]
        clone._total = self._total
        return clone

    __copy__ = copy

    def attach_telemetry(self, telemetry: Optional[TelemetryPublisher]) -> None:
        self._telemetry = telemetry

    def emit_event(self, name: str, **payload: object) -> None:
        """Publish a pool event through the attached telemetry, if enabled."""

        if self._telemetry is None or not self.config.telemetry.enabled:
            return
        self._telemetry.publish(name, pool_id=id(self), **payload)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _random_index(self) -> Optional[int]:
        if not self._entries:
            return None
        return select_index((entry.weight for entry in self._entries), self._total, self._random)

    def _maybe_recompute(self) -> None:
        # before selection: a failed rescan must leave the pool untouched
        interval = self.config.recompute_interval
        if interval <= 0 or not self._entries:
            return
        if self._draws_since_recompute + 1 >= interval:
            self.recompute_total_weight()
        else:
            self._draws_since_recompute += 1

    def _reject(self, weight: object, exc: PoolError) -> None:
        LOGGER.warning("Rejected weight %r: %s", weight, exc)
        self.emit_event(EVENT_REJECTED, weight=weight, reason=type(exc).__name__)


__all__ = ["PoolEntry", "WeightedPool"]
