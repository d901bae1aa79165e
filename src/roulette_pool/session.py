"""Borrowing draw sessions: weighted sampling without replacement, pool intact."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Iterator, Optional

from .exceptions import PoolModifiedError
from .telemetry import EVENT_DRAW
from .types import DrawMode, T
from .utils import reduce_total, select_index, swap_remove

if TYPE_CHECKING:
    from .pool import WeightedPool


class DrawSession(Generic[T]):
    """Disposable cursor drawing each entry of a pool at most once.

    The session snapshots ``(index, weight)`` pairs and the total weight when
    it is created and only ever edits that snapshot. Values are handed out by
    reference from the pool's storage. Once exhausted a session stays
    exhausted; open a new one with :meth:`WeightedPool.session`.
    """

    def __init__(self, pool: "WeightedPool[T]") -> None:
        self._pool = pool
        self._version = pool.version
        self._candidates: list[tuple[int, float]] = [
            (index, entry.weight) for index, entry in enumerate(pool.entries)
        ]
        self._total = pool.total_weight if self._candidates else 0.0

    def draw(self) -> Optional[tuple[float, T]]:
        """Return the next ``(weight, value)`` or ``None`` when nothing is drawable."""

        if self._pool.version != self._version:
            raise PoolModifiedError("pool changed during a draw session")
        if not self._candidates:
            return None
        position = select_index(
            (weight for _, weight in self._candidates),
            self._total,
            self._pool.random_fn,
        )
        if position is None:
            return None
        index, weight = swap_remove(self._candidates, position)
        if self._candidates:
            self._total = reduce_total(self._total, weight, (w for _, w in self._candidates))
        else:
            self._total = 0.0
        value = self._pool.entries[index].value
        self._pool.emit_event(
            EVENT_DRAW,
            mode=DrawMode.BORROWING.value,
            weight=weight,
            value=value,
            remaining=len(self._candidates),
        )
        return weight, value

    @property
    def remaining(self) -> int:
        return len(self._candidates)

    @property
    def remaining_weight(self) -> float:
        return self._total

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[tuple[float, T]]:
        return self

    def __next__(self) -> tuple[float, T]:
        pair = self.draw()
        if pair is None:
            raise StopIteration
        return pair

    def __repr__(self) -> str:
        return f"{type(self).__name__}(remaining={self.remaining}, remaining_weight={self._total!r})"


__all__ = ["DrawSession"]
