"""
resilient_client.client - Facade wiring config, throttle, backoff, fetcher and paginator.
"""

import logging
import random
import time
from typing import Any, Callable, Mapping, Optional

import requests

from resilient_client.backoff import BackoffPolicy
from resilient_client.config import ClientConfig
from resilient_client.fetcher import RetryingFetcher
from resilient_client.models import Page, PaginationResult
from resilient_client.paginator import Paginator
from resilient_client.throttle import Throttle
from resilient_client.urls import build_page_url

logger = logging.getLogger(__name__)


class ResilientAPIClient:
    """
    Fetch a complete paginated collection from a rate-limited API.

    Usage::

        with ResilientAPIClient("https://api.example.com/patients", "KEY") as client:
            patients = client.fetch_all()

    Each instance owns its own throttle state, so independent clients never
    delay each other.  One instance is meant for one logical caller.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        options: Optional[Mapping[str, Any]] = None,
        session: Optional[requests.Session] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        config: Optional[ClientConfig] = None,
    ):
        self.config = config if config is not None else ClientConfig.from_options(base_url, api_key, options)
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.throttle = Throttle(self.config.requests_per_second, clock=clock, sleep=sleep)
        self.backoff = BackoffPolicy(self.config.initial_delay_ms, rng=rng)
        self.fetcher = RetryingFetcher(
            self.config,
            session=self.session,
            throttle=self.throttle,
            backoff=self.backoff,
            sleep=sleep,
        )
        self.paginator = Paginator(self.fetcher, self.config.base_url, self.config.page_size)
        logger.debug(
            "Client ready: base_url=%s max_retries=%d rps=%s page_size=%d",
            self.config.base_url, self.config.max_retries,
            self.config.requests_per_second, self.config.page_size,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs) -> "ResilientAPIClient":
        config = ClientConfig.from_env(environ)
        return cls(config.base_url, config.api_key, config=config, **kwargs)

    def fetch_page(self, page: int) -> Page:
        """Fetch a single page (1-indexed) with retries."""
        url = build_page_url(self.config.base_url, page, self.config.page_size)
        return self.fetcher.fetch(url)

    def fetch_all(self) -> list:
        """
        Return every record in page order.

        If a page fails after retries the records gathered so far are
        returned; use ``paginate()`` to see whether the run completed.
        ``AuthenticationError`` is raised rather than swallowed.
        """
        return self.paginator.fetch_all()

    def paginate(self) -> PaginationResult:
        return self.paginator.paginate()

    @property
    def last_metrics(self) -> Optional[dict]:
        return self.paginator.last_metrics

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "ResilientAPIClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
