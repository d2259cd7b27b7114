"""
Unit tests - Pagination loop termination and partial results (Paginator).
"""

from unittest.mock import MagicMock

import pytest

from resilient_client.errors import (
    AuthenticationError,
    RequestFailedError,
    RetryExhaustedError,
    TransportError,
)
from resilient_client.models import Page, PaginationState
from resilient_client.paginator import Paginator
from tests.conftest import BASE_URL, make_records


def _paginator(pages, page_size=10):
    fetcher = MagicMock()
    fetcher.fetch.side_effect = pages
    return Paginator(fetcher, BASE_URL, page_size), fetcher


class TestPaginatorTermination:
    """resilient_client.paginator.Paginator.fetch_all - when to stop."""

    def test_short_last_page_stops(self):
        paginator, fetcher = _paginator([
            Page(make_records(10, 1)),
            Page(make_records(10, 11)),
            Page(make_records(7, 21)),
        ])
        records = paginator.fetch_all()
        assert len(records) == 27
        assert fetcher.fetch.call_count == 3

    def test_records_in_page_order(self):
        paginator, _ = _paginator([Page(make_records(10, 1)), Page(make_records(3, 11))])
        records = paginator.fetch_all()
        assert [r["patient_id"] for r in records] == [f"DEMO{i:03d}" for i in range(1, 14)]

    def test_has_next_false_on_full_page_stops(self):
        paginator, fetcher = _paginator([Page(make_records(10), has_next=False)])
        records = paginator.fetch_all()
        assert len(records) == 10
        assert fetcher.fetch.call_count == 1

    def test_has_next_true_does_not_override_short_page(self):
        paginator, fetcher = _paginator([Page(make_records(4), has_next=True)])
        assert len(paginator.fetch_all()) == 4
        assert fetcher.fetch.call_count == 1

    def test_empty_page_is_end_of_collection(self):
        paginator, fetcher = _paginator([Page(make_records(10)), Page([])])
        result = paginator.paginate()
        assert len(result.records) == 10
        assert result.state is PaginationState.DONE
        assert result.complete
        assert fetcher.fetch.call_count == 2

    def test_empty_first_page(self):
        paginator, _ = _paginator([Page([])])
        assert paginator.fetch_all() == []

    def test_requests_page_and_limit(self):
        paginator, fetcher = _paginator([Page(make_records(5)), Page(make_records(5))], page_size=5)
        paginator.fetch_all()
        urls = [c.args[0] for c in fetcher.fetch.call_args_list[:2]]
        assert urls[0] == f"{BASE_URL}?page=1&limit=5"
        assert urls[1] == f"{BASE_URL}?page=2&limit=5"


class TestPaginatorAbort:
    """Errors after retries end the run with a partial result."""

    def test_retry_exhausted_on_page_two_returns_page_one(self):
        paginator, fetcher = _paginator([
            Page(make_records(10)),
            RetryExhaustedError("Server error (503)", attempts=6, status_code=503),
        ])
        result = paginator.paginate()
        assert len(result.records) == 10
        assert result.state is PaginationState.ABORTED
        assert not result.complete
        assert isinstance(result.error, RetryExhaustedError)
        assert result.pages_fetched == 1

    def test_fetch_all_swallows_transport_error(self):
        paginator, _ = _paginator([
            Page(make_records(10)),
            Page(make_records(10, 11)),
            TransportError("connection reset", attempts=6),
        ])
        records = paginator.fetch_all()
        assert len(records) == 20

    def test_request_failed_aborts(self):
        paginator, _ = _paginator([RequestFailedError(404)])
        result = paginator.paginate()
        assert result.records == []
        assert result.state is PaginationState.ABORTED

    def test_authentication_error_propagates(self):
        paginator, _ = _paginator([Page(make_records(10)), AuthenticationError(401)])
        with pytest.raises(AuthenticationError):
            paginator.fetch_all()


class TestPaginatorMetrics:

    def test_completed_run_metrics(self):
        paginator, _ = _paginator([Page(make_records(10)), Page(make_records(2))])
        paginator.fetch_all()
        metrics = paginator.last_metrics
        assert metrics["status"] == "completed"
        assert metrics["pages_fetched"] == 2
        assert metrics["records_fetched"] == 12
        assert paginator.last_alerts == []

    def test_aborted_run_raises_partial_result_alert(self):
        paginator, _ = _paginator([
            Page(make_records(10)),
            RetryExhaustedError("boom", attempts=6),
        ])
        paginator.fetch_all()
        assert paginator.last_metrics["status"] == "aborted"
        conditions = {a["condition_name"] for a in paginator.last_alerts}
        assert "partial_result" in conditions

    def test_fetcher_metrics_detached_after_run(self):
        paginator, fetcher = _paginator([Page([])])
        paginator.fetch_all()
        assert fetcher.metrics is None
