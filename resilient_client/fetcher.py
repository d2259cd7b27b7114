"""
resilient_client.fetcher - One logical GET with throttling, retries and backoff.
"""

import logging
import time
from typing import Any, Callable, Optional

import requests

from resilient_client.backoff import BackoffPolicy
from resilient_client.config import ClientConfig
from resilient_client.errors import (
    AuthenticationError,
    RequestFailedError,
    RetryExhaustedError,
    TransportError,
)
from resilient_client.models import FetchAttempt, Page
from resilient_client.observability import record_attempt, record_retry
from resilient_client.throttle import (
    AUTH_FAILURE_STATUS_CODES,
    RATE_LIMIT_STATUS,
    SERVER_ERROR_MIN_STATUS,
    Throttle,
)

logger = logging.getLogger(__name__)


class RetryingFetcher:
    """
    Issue a GET, classify the outcome, and retry transient failures.

    Classification per attempt:
      - 429: always retried; does not count against ``max_retries``
        (bounded only by ``max_rate_limit_retries`` when that is set)
      - >= 500: retried while ``attempt < max_retries``
      - 401 / 403: ``AuthenticationError``, never retried
      - other non-2xx: ``RequestFailedError``
      - transport error or undecodable body: retried while
        ``attempt < max_retries``, then ``TransportError``
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        throttle: Optional[Throttle] = None,
        backoff: Optional[BackoffPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        metrics: Optional[dict] = None,
    ):
        self.config = config
        self.session = session if session is not None else requests.Session()
        self.throttle = throttle if throttle is not None else Throttle(config.requests_per_second)
        self.backoff = backoff if backoff is not None else BackoffPolicy(config.initial_delay_ms)
        self.metrics = metrics
        self._sleep = sleep

    def fetch(self, url: str) -> Page:
        """Fetch ``url`` and parse the body into a ``Page``."""
        return Page.from_payload(self.fetch_json(url), self.config.records_key)

    def fetch_json(self, url: str) -> Any:
        """Fetch ``url`` and return the decoded JSON body."""
        current = FetchAttempt(url)
        rate_limit_retries = 0

        while True:
            self.throttle.acquire()
            logger.debug("GET %s (attempt %d)", url, current.attempt)

            try:
                response = self.session.get(
                    url, headers=self.config.headers, timeout=self.config.timeout
                )
                status = response.status_code
                payload = response.json() if 200 <= status < 300 else None
            except (requests.RequestException, ValueError) as e:
                record_attempt(self.metrics, "transport_error")
                if current.attempt < self.config.max_retries:
                    self._wait(current, f"Request failed: {e}.")
                    current = current.next()
                    continue
                raise TransportError(
                    f"Request to {url} failed after {current.attempt + 1} attempt(s): {e}",
                    attempts=current.attempt + 1,
                    last_error=e,
                ) from e

            if status == RATE_LIMIT_STATUS:
                record_attempt(self.metrics, "rate_limited")
                limit = self.config.max_rate_limit_retries
                if limit is not None and rate_limit_retries >= limit:
                    raise RetryExhaustedError(
                        f"Still rate limited after {rate_limit_retries} rate-limit retries",
                        attempts=current.attempt + 1,
                        status_code=status,
                    )
                rate_limit_retries += 1
                self._wait(current, "Rate limited.")
                current = current.next()
                continue

            if status >= SERVER_ERROR_MIN_STATUS:
                record_attempt(self.metrics, "server_error")
                if current.attempt < self.config.max_retries:
                    self._wait(current, f"Server error ({status}).")
                    current = current.next()
                    continue
                raise RetryExhaustedError(
                    f"Server error ({status}) persisted after {current.attempt + 1} attempt(s)",
                    attempts=current.attempt + 1,
                    status_code=status,
                )

            record_attempt(self.metrics)

            if status in AUTH_FAILURE_STATUS_CODES:
                raise AuthenticationError(status, url)

            if not 200 <= status < 300:
                raise RequestFailedError(status, url)

            return payload

    def _wait(self, attempt: FetchAttempt, reason: str) -> None:
        delay_ms = self.backoff.delay(attempt.attempt)
        logger.warning("%s Retrying %s after %.0fms (attempt %d)", reason, attempt.url, delay_ms, attempt.attempt + 1)
        record_retry(self.metrics)
        self._sleep(delay_ms / 1000)
