"""Metric definitions and helpers for creating MetricSample objects."""

import time
from dataclasses import dataclass

from countryinfo.core.models import MetricSample, RequestMetricEvent

REQUEST_DURATION_BUCKETS = [0.001, 0.005, 0.015, 0.05, 0.1, 0.2, 0.5, 1, 2, 5]


@dataclass(frozen=True)
class MetricDefinition:
    """Exposition metadata for one metric family."""

    name: str
    kind: str
    help: str


HTTP_REQUESTS_TOTAL = MetricDefinition(
    "http_requests_total", "counter", "Total number of HTTP requests"
)
HTTP_REQUEST_DURATION = MetricDefinition(
    "http_request_duration_seconds",
    "histogram",
    "Duration of HTTP requests in seconds",
)
API_CALLS_BY_COUNTRY = MetricDefinition(
    "api_calls_by_country_total", "counter", "Total API calls per country"
)
API_ERRORS_TOTAL = MetricDefinition(
    "api_errors_total", "counter", "Total number of API errors"
)

REQUEST_METRICS = (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION,
    API_CALLS_BY_COUNTRY,
    API_ERRORS_TOTAL,
)

# Process metrics, named after the Prometheus client conventions
PROCESS_CPU_USER_SECONDS = MetricDefinition(
    "process_cpu_user_seconds_total",
    "counter",
    "Total user CPU time spent in seconds.",
)
PROCESS_CPU_SYSTEM_SECONDS = MetricDefinition(
    "process_cpu_system_seconds_total",
    "counter",
    "Total system CPU time spent in seconds.",
)
PROCESS_CPU_SECONDS = MetricDefinition(
    "process_cpu_seconds_total",
    "counter",
    "Total user and system CPU time spent in seconds.",
)
PROCESS_RESIDENT_MEMORY = MetricDefinition(
    "process_resident_memory_bytes", "gauge", "Resident memory size in bytes."
)
PROCESS_VIRTUAL_MEMORY = MetricDefinition(
    "process_virtual_memory_bytes", "gauge", "Virtual memory size in bytes."
)
PROCESS_START_TIME = MetricDefinition(
    "process_start_time_seconds",
    "gauge",
    "Start time of the process since unix epoch in seconds.",
)
PROCESS_OPEN_FDS = MetricDefinition(
    "process_open_fds", "gauge", "Number of open file descriptors."
)

PROCESS_METRICS = (
    PROCESS_CPU_USER_SECONDS,
    PROCESS_CPU_SYSTEM_SECONDS,
    PROCESS_CPU_SECONDS,
    PROCESS_RESIDENT_MEMORY,
    PROCESS_VIRTUAL_MEMORY,
    PROCESS_START_TIME,
    PROCESS_OPEN_FDS,
)

EXPOSED_METRICS = REQUEST_METRICS + PROCESS_METRICS


def counter(
    name: str,
    value: float = 1.0,
    labels: dict[str, str] | None = None,
) -> MetricSample:
    """Create a counter metric sample.

    Args:
        name: Metric name (e.g., "http_requests_total")
        value: Increment value (default: 1.0)
        labels: Optional dimension labels

    Returns:
        MetricSample with current timestamp
    """
    return MetricSample(
        name=name,
        timestamp=time.time(),
        value=value,
        labels=labels or {},
    )


def histogram(
    name: str,
    value: float,
    labels: dict[str, str] | None = None,
    buckets: list[float] | None = None,
) -> list[MetricSample]:
    """Create histogram metric samples for a single observation.

    Args:
        name: Metric name (e.g., "http_request_duration_seconds")
        value: Observed value
        labels: Optional dimension labels
        buckets: Bucket boundaries (default: REQUEST_DURATION_BUCKETS)

    Returns:
        List of MetricSample objects (bucket samples + sum + count)
    """
    timestamp = time.time()
    base_labels = labels or {}
    bucket_boundaries = buckets if buckets is not None else REQUEST_DURATION_BUCKETS

    samples: list[MetricSample] = []

    # Bucket samples count 1 when the observation falls at or below them
    for boundary in bucket_boundaries:
        samples.append(
            MetricSample(
                name=f"{name}_bucket",
                timestamp=timestamp,
                value=1.0 if value <= boundary else 0.0,
                labels={**base_labels, "le": str(boundary)},
            )
        )

    samples.append(
        MetricSample(
            name=f"{name}_bucket",
            timestamp=timestamp,
            value=1.0,
            labels={**base_labels, "le": "+Inf"},
        )
    )
    samples.append(
        MetricSample(
            name=f"{name}_sum", timestamp=timestamp, value=value, labels=base_labels
        )
    )
    samples.append(
        MetricSample(
            name=f"{name}_count", timestamp=timestamp, value=1.0, labels=base_labels
        )
    )
    return samples


def request_samples(event: RequestMetricEvent) -> list[MetricSample]:
    """Build every registry sample produced by one completed request.

    Always: request counter and duration histogram. On success the
    per-country counter, on failure the error counter.
    """
    status = str(event.status_code)
    samples = [
        counter(
            HTTP_REQUESTS_TOTAL.name,
            labels={
                "method": event.method,
                "route": event.route,
                "status_code": status,
                "country": event.country,
            },
        ),
        *histogram(
            HTTP_REQUEST_DURATION.name,
            event.duration,
            labels={"method": event.method, "route": event.route, "status_code": status},
        ),
    ]
    if event.succeeded:
        samples.append(
            counter(
                API_CALLS_BY_COUNTRY.name,
                labels={"country": event.country, "endpoint": event.endpoint},
            )
        )
    else:
        samples.append(
            counter(
                API_ERRORS_TOTAL.name,
                labels={"route": event.route, "error_type": str(event.error_kind)},
            )
        )
    return samples


def push_samples(event: RequestMetricEvent) -> list[tuple[MetricSample, str]]:
    """Build the (sample, kind) points mirrored to the remote backend.

    The duration is pushed as a single gauge point instead of histogram
    buckets. Kind is "counter" or "gauge".
    """
    status = str(event.status_code)
    points = [
        (
            counter(
                HTTP_REQUESTS_TOTAL.name,
                labels={
                    "method": event.method,
                    "route": event.route,
                    "status_code": status,
                    "country": event.country,
                },
            ),
            "counter",
        ),
        (
            MetricSample(
                name=HTTP_REQUEST_DURATION.name,
                timestamp=time.time(),
                value=event.duration,
                labels={
                    "method": event.method,
                    "route": event.route,
                    "status_code": status,
                },
            ),
            "gauge",
        ),
    ]
    if event.succeeded:
        points.append(
            (
                counter(
                    API_CALLS_BY_COUNTRY.name,
                    labels={"country": event.country, "endpoint": event.endpoint},
                ),
                "counter",
            )
        )
    return points
