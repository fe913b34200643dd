"""Storage adapters for metrics."""

from countryinfo.adapters.storage.in_memory import InMemoryMetricsStorage

__all__ = ["InMemoryMetricsStorage"]
