"""
Nonce generation for signed Hyperliquid actions.
"""

import threading
import time
from typing import Callable, Optional


def get_timestamp_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


class NonceGenerator:
    """
    Monotonic nonce counter seeded from the wall clock.

    Every value is at least the current millisecond timestamp and strictly
    greater than the previous one, so back-to-back calls within the same
    millisecond still get distinct nonces. Share one instance per wallet.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """
        Args:
            clock: Callable returning wall-clock milliseconds (defaults to get_timestamp_ms)
        """
        self._clock = clock or get_timestamp_ms
        self._last = 0
        self._lock = threading.Lock()

    @property
    def last(self) -> int:
        """Last issued nonce, 0 before the first call."""
        return self._last

    def next(self) -> int:
        with self._lock:
            nonce = max(int(self._clock()), self._last + 1)
            self._last = nonce
            return nonce
