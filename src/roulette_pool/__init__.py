"""Public package interface for roulette_pool."""

from .config import PoolConfig, TelemetryConfig
from .exceptions import InvalidWeightError, PoolError, PoolModifiedError, WeightOverflowError
from .pool import PoolEntry, WeightedPool
from .selection import roulette_select
from .session import DrawSession
from .telemetry import (
    DrawCounterSink,
    InMemoryTelemetrySink,
    LoggingTelemetrySink,
    TelemetryPublisher,
)
from .types import DrawMode, RandomSource, TelemetryEvent

__all__ = [
    "DrawCounterSink",
    "DrawMode",
    "DrawSession",
    "InMemoryTelemetrySink",
    "InvalidWeightError",
    "LoggingTelemetrySink",
    "PoolConfig",
    "PoolEntry",
    "PoolError",
    "PoolModifiedError",
    "RandomSource",
    "TelemetryConfig",
    "TelemetryEvent",
    "TelemetryPublisher",
    "WeightOverflowError",
    "WeightedPool",
    "roulette_select",
]
