"""
resilient_client.models - Value types passed between fetcher, paginator and caller.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)

HAS_NEXT_KEY = "hasNext"


class PaginationState(Enum):
    FETCHING = "fetching"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class FetchAttempt:
    """One physical attempt at a logical GET.  ``attempt`` starts at 0."""

    url: str
    attempt: int = 0

    def next(self) -> "FetchAttempt":
        return FetchAttempt(self.url, self.attempt + 1)


@dataclass
class Page:
    """Records from one response plus the optional explicit continuation flag."""

    records: list = field(default_factory=list)
    has_next: Optional[bool] = None

    @classmethod
    def from_payload(cls, payload: Any, records_key: str = "data") -> "Page":
        """
        Accept either a bare JSON array of records or an object holding the
        array under ``records_key`` with an optional boolean ``hasNext``.
        Anything else yields an empty page.
        """
        if payload is None:
            return cls()
        if isinstance(payload, list):
            return cls(records=list(payload))
        if not isinstance(payload, dict):
            logger.warning("Unexpected payload type %s, treating as empty page", type(payload).__name__)
            return cls()

        has_next = payload.get(HAS_NEXT_KEY)
        if not isinstance(has_next, bool):
            has_next = None

        records = payload.get(records_key)
        if not isinstance(records, list):
            logger.warning("No %r list in response object, treating as empty page", records_key)
            records = []
        return cls(records=list(records), has_next=has_next)

    def __len__(self) -> int:
        return len(self.records)


@dataclass
class PaginationResult:
    """
    Outcome of a full pagination run.

    ``state`` is DONE when the collection end was reached and ABORTED when a
    fetch error stopped the run early; ``records`` holds everything
    accumulated either way and ``error`` the error that caused the abort.
    """

    records: list
    state: PaginationState
    pages_fetched: int = 0
    error: Optional[BaseException] = None

    @property
    def complete(self) -> bool:
        return self.state is PaginationState.DONE
