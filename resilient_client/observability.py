"""
resilient_client.observability - Fetch-run metrics lifecycle and alert evaluation.

Threshold Rationale
-------------------
RETRY_RATE_WARNING  (25 %)  - A healthy API needs few retries; one retry for
    every four physical attempts points at sustained throttling or flapping.
RETRY_RATE_CRITICAL (50 %)  - Half of all attempts being retries means the
    run spent most of its time backing off.
EMPTY_RESULT_MIN_RECORDS (1) - A collection with zero records is suspicious.
An ABORTED run always raises a CRITICAL partial-result alert.
"""

import uuid
from datetime import datetime, timezone

RETRY_RATE_WARNING = 25.0
RETRY_RATE_CRITICAL = 50.0
EMPTY_RESULT_MIN_RECORDS = 1


def start_fetch_run(base_url: str) -> dict:
    """Begin a new fetch run.  Returns a metrics dict to populate."""
    return {
        "run_id": str(uuid.uuid4()),
        "run_start": datetime.now(timezone.utc),
        "run_end": None,
        "duration_seconds": None,
        "base_url": base_url,
        "pages_fetched": 0,
        "records_fetched": 0,
        "attempts": 0,
        "retries": 0,
        "rate_limited": 0,
        "server_errors": 0,
        "transport_errors": 0,
        "retry_rate_pct": None,
        "status": "running",
        "error_message": None,
    }


def record_attempt(metrics, outcome: str = "ok") -> None:
    """
    Count one physical attempt.  ``outcome`` is ``"ok"`` or one of the
    retry classifications ``"rate_limited"``, ``"server_error"``,
    ``"transport_error"``.
    """
    if metrics is None:
        return
    metrics["attempts"] += 1
    if outcome == "rate_limited":
        metrics["rate_limited"] += 1
    elif outcome == "server_error":
        metrics["server_errors"] += 1
    elif outcome == "transport_error":
        metrics["transport_errors"] += 1


def record_retry(metrics) -> None:
    if metrics is not None:
        metrics["retries"] += 1


def record_page(metrics, record_count: int) -> None:
    if metrics is not None:
        metrics["pages_fetched"] += 1
        metrics["records_fetched"] += record_count


def finish_fetch_run(metrics: dict, aborted: bool = False, error=None) -> dict:
    """Finalise metrics: compute duration and retry rate, mark completed or aborted."""
    metrics["run_end"] = datetime.now(timezone.utc)
    elapsed = (metrics["run_end"] - metrics["run_start"]).total_seconds()
    metrics["duration_seconds"] = round(elapsed, 2)

    if metrics["attempts"] > 0:
        metrics["retry_rate_pct"] = round(metrics["retries"] / metrics["attempts"] * 100, 2)
    else:
        metrics["retry_rate_pct"] = 0.0

    if aborted:
        metrics["status"] = "aborted"
        metrics["error_message"] = str(error) if error is not None else None
    elif metrics["status"] == "running":
        metrics["status"] = "completed"

    return metrics


def _make_alert(run_id, severity, category, condition, message, metric_value, threshold):
    """Build a single alert dict."""
    return {
        "alert_id": str(uuid.uuid4()),
        "run_id": run_id,
        "created_at": datetime.now(timezone.utc),
        "severity": severity,
        "category": category,
        "condition_name": condition,
        "message": message,
        "metric_value": metric_value,
        "threshold": threshold,
    }


def evaluate_alerts(metrics: dict) -> list[dict]:
    """
    Evaluate alert conditions against a finished metrics dict.
    Returns zero or more alert dicts.
    """
    alerts: list[dict] = []
    run_id = metrics["run_id"]

    # 1. Partial result
    if metrics["status"] == "aborted":
        alerts.append(_make_alert(
            run_id, "CRITICAL", "completeness", "partial_result",
            f"Pagination aborted after {metrics['pages_fetched']} page(s); "
            f"returned {metrics['records_fetched']} record(s) as a partial result "
            f"({metrics['error_message']})",
            float(metrics["pages_fetched"]), None,
        ))

    # 2. Retry pressure
    retry_rate = metrics.get("retry_rate_pct") or 0.0
    if retry_rate >= RETRY_RATE_CRITICAL:
        alerts.append(_make_alert(
            run_id, "CRITICAL", "retry_rate", "retry_rate_critical",
            f"Retry rate {retry_rate:.1f}% exceeds critical threshold "
            f"({RETRY_RATE_CRITICAL}%)",
            retry_rate, RETRY_RATE_CRITICAL,
        ))
    elif retry_rate >= RETRY_RATE_WARNING:
        alerts.append(_make_alert(
            run_id, "WARNING", "retry_rate", "retry_rate_warning",
            f"Retry rate {retry_rate:.1f}% exceeds warning threshold "
            f"({RETRY_RATE_WARNING}%)",
            retry_rate, RETRY_RATE_WARNING,
        ))

    # 3. Empty result set
    total = metrics["records_fetched"]
    if total < EMPTY_RESULT_MIN_RECORDS:
        alerts.append(_make_alert(
            run_id, "WARNING", "empty_results", "empty_result_set",
            f"Fetch produced {total} records (minimum expected: "
            f"{EMPTY_RESULT_MIN_RECORDS})",
            float(total), float(EMPTY_RESULT_MIN_RECORDS),
        ))

    return alerts
