"""Weight-based token bucket used to pace requests to a rate-limited API."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Optional


class WeightRateLimiter:
    """
    Token bucket measured in request weight.

    The bucket holds at most ``capacity`` weight and refills continuously at
    ``capacity / window_seconds`` per second. ``acquire()`` waits until enough
    weight is available, so callers are paced instead of rejected.

    Attributes:
        capacity: Maximum weight per window.
        window_seconds: Window length in seconds.
        clock: Callable returning current time in seconds (defaults to time.monotonic).
        sleep: Awaitable sleep used while waiting (defaults to asyncio.sleep).
    """

    def __init__(
        self,
        capacity: int = 1200,
        window_seconds: float = 60.0,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.capacity = float(capacity)
        self.window_seconds = float(window_seconds)
        self.clock = clock or time.monotonic
        self._sleep = sleep or asyncio.sleep
        self._tokens = self.capacity
        self._last_refill = self.clock()
        self._lock = asyncio.Lock()

    @property
    def refill_rate(self) -> float:
        """Weight regained per second."""
        return self.capacity / self.window_seconds

    def _refill(self) -> None:
        now = self.clock()
        elapsed = max(0.0, now - self._last_refill)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.refill_rate)
        self._last_refill = now

    def available(self) -> float:
        """Return the weight currently available."""
        self._refill()
        return self._tokens

    def try_acquire(self, weight: int = 1) -> bool:
        """Consume ``weight`` if available without waiting."""
        self._refill()
        if self._tokens >= weight:
            self._tokens -= weight
            return True
        return False

    async def acquire(self, weight: int = 1) -> None:
        """
        Wait until ``weight`` is available and consume it.

        Raises:
            ValueError: If ``weight`` exceeds the bucket capacity.
        """
        if weight > self.capacity:
            raise ValueError(f"weight {weight} exceeds limiter capacity {self.capacity:g}")

        # Serialize waiters so a large request is not starved by small ones
        async with self._lock:
            while True:
                self._refill()
                if self._tokens >= weight:
                    self._tokens -= weight
                    return
                deficit = weight - self._tokens
                await self._sleep(deficit / self.refill_rate)
