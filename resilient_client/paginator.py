"""
resilient_client.paginator - Sequential page loop that accumulates a collection.
"""

import logging
from typing import Optional

from resilient_client.errors import AuthenticationError, FetchError
from resilient_client.fetcher import RetryingFetcher
from resilient_client.models import PaginationResult, PaginationState
from resilient_client.observability import (
    evaluate_alerts,
    finish_fetch_run,
    record_page,
    start_fetch_run,
)
from resilient_client.urls import build_page_url

logger = logging.getLogger(__name__)


class Paginator:
    """
    Drive a ``RetryingFetcher`` across pages 1, 2, ... until the collection ends.

    The run ends (DONE) on an empty page, a page shorter than
    ``page_size``, or a page with ``hasNext: false``.  A fetch error other
    than ``AuthenticationError`` ends it early (ABORTED) and the records
    gathered so far are returned instead of raising.
    """

    def __init__(self, fetcher: RetryingFetcher, base_url: str, page_size: int):
        self.fetcher = fetcher
        self.base_url = base_url
        self.page_size = page_size
        self.last_metrics: Optional[dict] = None
        self.last_alerts: list[dict] = []

    def fetch_all(self) -> list:
        """Fetch every page and return the records (partial if the run aborted)."""
        return self.paginate().records

    def paginate(self) -> PaginationResult:
        metrics = start_fetch_run(self.base_url)
        self.fetcher.metrics = metrics

        records: list = []
        page = 1
        pages_fetched = 0
        state = PaginationState.FETCHING
        error = None

        try:
            while state is PaginationState.FETCHING:
                url = build_page_url(self.base_url, page, self.page_size)
                logger.info("Fetching page %d: %s", page, url)

                try:
                    result = self.fetcher.fetch(url)
                except AuthenticationError:
                    raise
                except FetchError as e:
                    logger.error("Failed to fetch page %d: %s", page, e)
                    error = e
                    state = PaginationState.ABORTED
                    break

                pages_fetched += 1
                record_page(metrics, len(result))

                if not result.records:
                    logger.info("No more data after page %d", page - 1)
                    state = PaginationState.DONE
                    break

                records.extend(result.records)
                logger.info(
                    "Fetched %d records from page %d (total: %d)",
                    len(result), page, len(records),
                )

                if len(result) < self.page_size or result.has_next is False:
                    state = PaginationState.DONE
                else:
                    page += 1
        finally:
            self.fetcher.metrics = None

        finish_fetch_run(metrics, aborted=state is PaginationState.ABORTED, error=error)
        self.last_metrics = metrics
        self.last_alerts = evaluate_alerts(metrics)
        for alert in self.last_alerts:
            logger.warning("[%s] %s", alert["severity"], alert["message"])

        logger.info("Total records fetched: %d (%s)", len(records), state.value)
        return PaginationResult(
            records=records,
            state=state,
            pages_fetched=pages_fetched,
            error=error,
        )
