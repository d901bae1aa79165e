"""Telemetry publishing for pool draw and maintenance events."""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Callable, Iterable, Optional, Protocol

from .config import TelemetryConfig
from .types import TelemetryEvent

LOGGER = logging.getLogger(__name__)

EVENT_DRAW = "pool.draw"
EVENT_EXHAUSTED = "pool.exhausted"
EVENT_REJECTED = "pool.rejected"
EVENT_RECOMPUTE = "pool.recompute"


class TelemetrySink(Protocol):
    """Sink that handles telemetry events."""

    def handle(self, event: TelemetryEvent) -> None:  # pragma: no cover - protocol
        ...


class TelemetryPublisher:
    """Turn pool notifications into sampled :class:`TelemetryEvent` objects for sinks."""

    def __init__(
        self,
        config: TelemetryConfig,
        *,
        sinks: Iterable[TelemetrySink] = (),
        random_fn: Callable[[], float] = random.random,
    ) -> None:
        self.config = config
        self._random = random_fn
        self._sinks: list[TelemetrySink] = list(sinks)

    def subscribe(self, sink: TelemetrySink) -> Callable[[], None]:
        """Register ``sink``; the returned callable detaches it again."""

        self._sinks.append(sink)

        def detach() -> None:
            if sink in self._sinks:
                self._sinks.remove(sink)

        return detach

    def publish(self, name: str, *, pool_id: Optional[int] = None, **payload: object) -> Optional[TelemetryEvent]:
        """Deliver one event to every sink and return it, or ``None`` if sampled out."""

        if not self.config.enabled or self._random() > self.config.sample_rate:
            return None
        event = TelemetryEvent(event=name, payload=payload, pool_id=pool_id)
        for sink in tuple(self._sinks):
            try:
                sink.handle(event)
            except Exception:
                LOGGER.exception("Telemetry sink %s failed on %s", sink, name)
        return event


class LoggingTelemetrySink:
    """Write each event as a ``key=value`` line to the module logger."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def handle(self, event: TelemetryEvent) -> None:
        details = " ".join(f"{key}={value!r}" for key, value in sorted(event.payload.items()))
        LOGGER.log(self.level, "%s %s", event.event, details)


class InMemoryTelemetrySink:
    """Collects telemetry events in memory for diagnostics or testing."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def handle(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.event for event in self.events]


class DrawCounterSink:
    """Tally how often each value was drawn, for checking empirical frequencies.

    Unhashable values cannot be counted; they only bump ``skipped``.
    """

    def __init__(self) -> None:
        self.counts: Counter = Counter()
        self.skipped = 0

    def handle(self, event: TelemetryEvent) -> None:
        if event.event != EVENT_DRAW:
            return
        try:
            self.counts[event.payload.get("value")] += 1
        except TypeError:
            self.skipped += 1


__all__ = [
    "DrawCounterSink",
    "EVENT_DRAW",
    "EVENT_EXHAUSTED",
    "EVENT_RECOMPUTE",
    "EVENT_REJECTED",
    "InMemoryTelemetrySink",
    "LoggingTelemetrySink",
    "TelemetryPublisher",
    "TelemetrySink",
]
