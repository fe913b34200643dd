"""Port interfaces for adapters.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from collections.abc import AsyncIterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from countryinfo.core.models import MetricSample


@runtime_checkable
class MetricsStoragePort(Protocol):
    """Port for metrics storage operations.

    Adapters implementing this protocol aggregate metric samples into
    labeled series and expose their current values.
    """

    async def write(self, sample: MetricSample) -> None:
        """Add a metric sample to its series."""
        ...

    def scrape(self) -> AsyncIterable[MetricSample]:
        """Yield one sample per series holding its current value."""
        ...


@dataclass(frozen=True)
class CurrencyResponse:
    """Answer from a currency source: HTTP status and JSON payload."""

    status_code: int
    payload: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class CurrencySourcePort(Protocol):
    """Port for resolving a country's currency.

    Examples: InProcessCurrencySource, HttpCurrencySource.
    """

    dependency_api: str

    async def fetch(self, country: str, request_id: str) -> CurrencyResponse:
        """Fetch the currency payload for a country.

        Args:
            country: Country key to resolve.
            request_id: Trace identifier to propagate.

        Returns:
            CurrencyResponse with the status and payload of the lookup.
        """
        ...
