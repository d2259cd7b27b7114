"""
resilient_client.backoff - Randomized exponential backoff.
"""

import random
from typing import Optional

from resilient_client.throttle import BACKOFF_JITTER_MS, MAX_BACKOFF_MS


class BackoffPolicy:
    """
    Exponential backoff with additive jitter, capped.

        delay = min(initial_delay_ms * 2 ** attempt + uniform(0, jitter_ms), max_delay_ms)

    Example with initial_delay_ms=1000:
        attempt 0: 1000ms + jitter
        attempt 1: 2000ms + jitter
        attempt 4: 16000ms + jitter
        attempt 5: 30000ms (capped)
    """

    def __init__(
        self,
        initial_delay_ms: float,
        max_delay_ms: float = MAX_BACKOFF_MS,
        jitter_ms: float = BACKOFF_JITTER_MS,
        rng: Optional[random.Random] = None,
    ):
        self.initial_delay_ms = initial_delay_ms
        self.max_delay_ms = max_delay_ms
        self.jitter_ms = jitter_ms
        self.rng = rng if rng is not None else random.Random()

    def delay(self, attempt: int) -> float:
        """Milliseconds to wait before retrying after the given (0-indexed) attempt."""
        if attempt < 0:
            raise ValueError(f"attempt must be >= 0, got {attempt}")
        # 2 ** attempt overflows float past ~1024; the cap is long reached by then
        if attempt >= 64:
            return self.max_delay_ms
        base = self.initial_delay_ms * (2 ** attempt)
        if base >= self.max_delay_ms:
            return self.max_delay_ms
        jitter = self.rng.uniform(0, self.jitter_ms)
        return min(base + jitter, self.max_delay_ms)
