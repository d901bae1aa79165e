"""Common data types used across the roulette_pool package."""

from __future__ import annotations

import time
from enum import Enum
from typing import Optional, Protocol, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class RandomSource(Protocol):
    """Callable returning a float uniformly distributed over ``[0, 1)``."""

    def __call__(self) -> float:  # pragma: no cover - protocol definition
        ...


class DrawMode(str, Enum):
    """How a draw treats the chosen entry."""

    CONSUMING = "consuming"
    BORROWING = "borrowing"


class TelemetryEvent(BaseModel):
    """Structured event published by pools to telemetry sinks."""

    event: str
    payload: dict[str, object] = Field(default_factory=dict)
    pool_id: Optional[int] = Field(
        default=None,
        description="id() of the emitting pool, to tell pools apart in shared sinks.",
    )
    timestamp: float = Field(default_factory=time.time)


__all__ = ["DrawMode", "RandomSource", "T", "TelemetryEvent"]
