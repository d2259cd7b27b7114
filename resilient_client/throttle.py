"""
resilient_client.throttle - Request pacing and HTTP retry constants.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

MAX_BACKOFF_MS = 30_000
BACKOFF_JITTER_MS = 1_000
RATE_LIMIT_STATUS = 429
AUTH_FAILURE_STATUS_CODES = {401, 403}
SERVER_ERROR_MIN_STATUS = 500


class Throttle:
    """
    Enforce a minimum interval between physical requests.

    ``acquire()`` returns once at least ``1 / requests_per_second`` seconds
    have passed since the previous ``acquire()`` returned.  The last
    request timestamp belongs to this instance only.
    """

    def __init__(
        self,
        requests_per_second: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be > 0")
        self.requests_per_second = requests_per_second
        self.last_request_time: Optional[float] = None
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()

    @property
    def min_interval(self) -> float:
        """Minimum gap between requests, in seconds."""
        return 1.0 / self.requests_per_second

    def acquire(self) -> None:
        with self._lock:
            if self.last_request_time is not None:
                elapsed = self._clock() - self.last_request_time
                if elapsed < self.min_interval:
                    wait = self.min_interval - elapsed
                    logger.debug("Throttling for %.3fs", wait)
                    self._sleep(wait)
            self.last_request_time = self._clock()
