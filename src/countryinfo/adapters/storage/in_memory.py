"""In-memory storage adapter for metrics."""

import threading
from collections.abc import AsyncIterable

from countryinfo.core.models import MetricSample

SeriesKey = tuple[str, tuple[tuple[str, str], ...]]


class InMemoryMetricsStorage:
    """In-memory implementation of MetricsStoragePort.

    Aggregates samples into labeled series: each write adds its value to
    the series total, so counters and histogram buckets only ever grow.
    State lives for the life of the process.
    """

    def __init__(self) -> None:
        self._series: dict[SeriesKey, MetricSample] = {}
        self._lock = threading.Lock()

    async def write(self, sample: MetricSample) -> None:
        """Add a metric sample to its series."""
        key = (sample.name, tuple(sorted(sample.labels.items())))
        with self._lock:
            current = self._series.get(key)
            value = sample.value if current is None else current.value + sample.value
            self._series[key] = MetricSample(
                name=sample.name,
                timestamp=sample.timestamp,
                value=value,
                labels=dict(sample.labels),
            )

    async def scrape(self) -> AsyncIterable[MetricSample]:
        """Yield the current value of every series in insertion order."""
        with self._lock:
            snapshot = list(self._series.values())
        for sample in snapshot:
            yield sample

    def value(self, name: str, labels: dict[str, str] | None = None) -> float:
        """Return the current value of one series (0.0 if never written)."""
        key = (name, tuple(sorted((labels or {}).items())))
        with self._lock:
            sample = self._series.get(key)
        return 0.0 if sample is None else sample.value
