"""Configuration models for weighted pools."""

from __future__ import annotations

import random
from typing import Callable, Optional

from pydantic import BaseModel, Field


class TelemetryConfig(BaseModel):
    """Controls whether pools publish draw events and how often."""

    enabled: bool = False
    sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Fraction of events forwarded to sinks.",
    )


class PoolConfig(BaseModel):
    """Top-level configuration object for a pool."""

    seed: Optional[int] = Field(
        default=None,
        description="Seed for a private random.Random; unseeded pools share the global generator.",
    )
    recompute_interval: int = Field(
        default=0,
        ge=0,
        description="Rescan the total weight after this many consuming draws (0 disables).",
    )
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    def random_source(self) -> Callable[[], float]:
        """Return the uniform ``[0, 1)`` source this config describes."""

        if self.seed is None:
            return random.random
        return random.Random(self.seed).random


__all__ = ["PoolConfig", "TelemetryConfig"]
