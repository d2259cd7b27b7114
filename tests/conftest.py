"""
tests/conftest.py - Shared fixtures, fakes and sample payloads for the test suite.
"""

from unittest.mock import MagicMock

import pytest
import requests

from resilient_client.backoff import BackoffPolicy
from resilient_client.config import ClientConfig
from resilient_client.fetcher import RetryingFetcher
from resilient_client.throttle import Throttle

BASE_URL = "https://api.example.com/patients"
API_KEY = "test-key"


def make_records(count: int, start: int = 1) -> list[dict]:
    """Patient-shaped records with sequential ids."""
    return [
        {"patient_id": f"DEMO{i:03d}", "name": f"Patient {i}", "age": 40, "temperature": 98.6,
         "blood_pressure": "120/80"}
        for i in range(start, start + count)
    ]


def mock_http_response(payload=None, status_code: int = 200):
    """Return a mock ``requests.Response`` whose ``json()`` yields ``payload``."""
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.json = MagicMock(return_value=payload)
    return resp


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` is called or it is advanced."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FixedRandom:
    """Stand-in for ``random.Random`` whose ``uniform`` always returns ``value``."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def uniform(self, a, b):
        return self.value


@pytest.fixture
def config():
    return ClientConfig(base_url=BASE_URL, api_key=API_KEY)


@pytest.fixture
def mock_session():
    """A ``MagicMock`` standing in for ``requests.Session``."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def mock_sleep():
    return MagicMock()


@pytest.fixture
def make_fetcher(mock_session, mock_sleep):
    """Factory for a fetcher with an unthrottled clock and recorded backoff sleeps."""

    def _make(**overrides):
        cfg = ClientConfig(base_url=BASE_URL, api_key=API_KEY, **overrides)
        clock = FakeClock()
        return RetryingFetcher(
            cfg,
            session=mock_session,
            throttle=Throttle(cfg.requests_per_second, clock=clock, sleep=clock.sleep),
            backoff=BackoffPolicy(cfg.initial_delay_ms, rng=FixedRandom(0.0)),
            sleep=mock_sleep,
        )

    return _make
