"""
resilient_client - Resilient paginated HTTP client and patient risk helpers.

Re-exports the public symbols so callers can write
``from resilient_client import ResilientAPIClient``.
"""

from resilient_client.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_INITIAL_DELAY_MS,
    DEFAULT_REQUESTS_PER_SECOND,
    DEFAULT_PAGE_SIZE,
    ClientConfig,
)

from resilient_client.errors import (
    FetchError,
    ConfigError,
    AuthenticationError,
    RequestFailedError,
    RetryExhaustedError,
    ExhaustedRetriesError,
    TransportError,
)

from resilient_client.throttle import (
    MAX_BACKOFF_MS,
    BACKOFF_JITTER_MS,
    Throttle,
)

from resilient_client.backoff import BackoffPolicy

from resilient_client.urls import normalize_base_url, build_page_url

from resilient_client.models import (
    FetchAttempt,
    Page,
    PaginationResult,
    PaginationState,
)

from resilient_client.fetcher import RetryingFetcher

from resilient_client.paginator import Paginator

from resilient_client.client import ResilientAPIClient

from resilient_client.observability import (
    start_fetch_run,
    finish_fetch_run,
    evaluate_alerts,
)

from resilient_client.validation import (
    validate_blood_pressure,
    validate_temperature,
    validate_age,
)

from resilient_client.risk import (
    blood_pressure_risk,
    temperature_risk,
    age_risk,
    assess_patient,
    total_risk,
    assess_patients,
    summarize_alerts,
)

from resilient_client.log import setup_logging
