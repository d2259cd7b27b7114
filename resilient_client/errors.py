"""
resilient_client.errors - Exception taxonomy raised by the fetch path.
"""

from typing import Optional


class FetchError(Exception):
    """Base class for every error the fetcher raises."""


class ConfigError(ValueError):
    """Invalid client configuration."""


class AuthenticationError(FetchError):
    """HTTP 401/403. Never retried."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Authentication failed (HTTP {status_code}). Check API key.")


class RequestFailedError(FetchError):
    """Non-success status that is neither retryable nor an auth failure."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with status {status_code}")


class RetryExhaustedError(FetchError):
    """
    Raised when a retryable condition outlasts the retry budget.

    ``status_code`` is the last HTTP status seen (``None`` for transport
    failures) and ``last_error`` the last underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        attempts: int,
        status_code: Optional[int] = None,
        last_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.attempts = attempts
        self.status_code = status_code
        self.last_error = last_error


ExhaustedRetriesError = RetryExhaustedError


class TransportError(RetryExhaustedError):
    """Network-level failure (connection reset, timeout, bad body) after all retries."""
