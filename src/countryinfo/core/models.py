"""Core domain models for country facts and observability data."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AnimalFact:
    """National animal of a country."""

    animal: str
    scientific_name: str


@dataclass(frozen=True)
class CapitalFact:
    """Capital city of a country and its population (display string)."""

    capital: str
    population: str


@dataclass(frozen=True)
class CurrencyFact:
    """Currency of a country.

    Attributes:
        currency: Currency name (e.g., Japanese Yen).
        symbol: Three-letter currency code (e.g., JPY).
        value_against_usd: Units per one US dollar, as a display string.
    """

    currency: str
    symbol: str
    value_against_usd: str


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Log level (e.g., info, warning, error).
        message: The log message.
        attributes: Additional structured fields.
    """

    timestamp: float
    level: str
    message: str
    attributes: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class MetricSample:
    """A single metric measurement.

    Attributes:
        name: Metric name (e.g., http_requests_total).
        timestamp: Unix timestamp in seconds.
        value: The metric value.
        labels: Key-value pairs for metric dimensions.
    """

    name: str
    timestamp: float
    value: float
    labels: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RequestMetricEvent:
    """Outcome of one handled API request.

    Attributes:
        method: HTTP method.
        route: Route prefix without the country segment (e.g., /api/capital).
        endpoint: Short endpoint name (e.g., capital).
        status_code: HTTP status of the response.
        country: Normalized country key.
        duration: Seconds from handler entry to response assembly.
        error_kind: Error code for failures, None on success.
    """

    method: str
    route: str
    endpoint: str
    status_code: int
    country: str
    duration: float
    error_kind: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error_kind is None
