"""
Metallindex — Politeness Pacing

Waits base + uniform(0, jitter) seconds between targets so the dealer's
site is not hit in a tight loop. Parameters are passed in explicitly;
the random source is injectable for tests.
"""

from __future__ import annotations

import asyncio
import random

import structlog

from metallindex.config import settings

logger = structlog.get_logger(__name__)


class Pacer:
    """Random delay between consecutive page loads."""

    def __init__(
        self,
        base_seconds: float | None = None,
        jitter_seconds: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.base_seconds = base_seconds if base_seconds is not None else settings.PACING_BASE_SECONDS
        self.jitter_seconds = jitter_seconds if jitter_seconds is not None else settings.PACING_JITTER_SECONDS
        if self.base_seconds < 0 or self.jitter_seconds < 0:
            raise ValueError("pacing base and jitter must be non-negative")
        self._rng = rng or random.Random()

    def next_delay(self) -> float:
        """Delay in seconds for the next pause."""
        return self.base_seconds + self._rng.uniform(0, self.jitter_seconds)

    async def wait(self) -> float:
        """Sleep for the next delay and return it."""
        delay = self.next_delay()
        logger.debug("pacing_delay", delay_seconds=round(delay, 2), source="pacing")
        await asyncio.sleep(delay)
        return delay
