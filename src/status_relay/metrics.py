"""
Prometheus metrics for the status relay.

Tracks relay invocations and the commit statuses posted back to GitHub.
"""

from prometheus_client import Counter, Histogram
import time


# Relay invocation metrics
relays_total = Counter(
    "status_relay_relays_total",
    "Total number of status relay invocations",
    ["pipeline"],
)

relay_duration_seconds = Histogram(
    "status_relay_relay_duration_seconds",
    "Time spent relaying a pipeline execution status",
    ["pipeline"],
)

relay_errors_total = Counter(
    "status_relay_relay_errors_total",
    "Total number of failed status relay invocations",
    ["pipeline", "error_type"],
)

# GitHub status update metrics
github_status_updates_total = Counter(
    "status_relay_github_status_updates_total",
    "Total number of GitHub commit statuses posted",
    ["repo_name", "state"],  # state = pending|success|failure
)

github_status_update_errors_total = Counter(
    "status_relay_github_status_update_errors_total",
    "Total number of rejected or failed GitHub commit status posts",
    ["repo_name", "status_code"],  # status_code = none on transport errors
)


class MetricsContext:
    """Context manager for timing operations and handling errors with metrics."""

    def __init__(self, histogram, error_counter, labels=None, error_labels=None):
        self.histogram = histogram
        self.error_counter = error_counter
        self.labels = labels or []
        self.error_labels = error_labels or []
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            duration = time.time() - self.start_time
            self.histogram.labels(*self.labels).observe(duration)

        if exc_type is not None:
            error_type = exc_type.__name__
            self.error_counter.labels(*self.error_labels, error_type).inc()

        return False  # Don't suppress exceptions


def track_relay(pipeline: str):
    """Count a relay invocation and time it."""
    relays_total.labels(pipeline).inc()
    return MetricsContext(
        relay_duration_seconds,
        relay_errors_total,
        labels=[pipeline],
        error_labels=[pipeline],
    )
