"""Domain errors surfaced to API callers.

Each error carries the HTTP status and the machine-readable error code used
in the response payload and in the ``error_type`` metric label.
"""

from typing import Any


class CountryInfoError(Exception):
    """Base class for errors that map to a client-visible response."""

    status_code = 404
    error_code = "not_found"

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for this error."""
        return {"error": self.error_code, "message": self.message, **self.extra}


class CountryNotFound(CountryInfoError):
    """The country is absent from the requested fact table."""

    error_code = "not_found"


class DependencyNotFound(CountryInfoError):
    """The currency lookup used by the exchange-rate endpoint failed.

    ``details`` holds the downstream error payload unchanged.
    """

    error_code = "dependency_not_found"

    def __init__(
        self, message: str, details: Any, dependency_api: str
    ) -> None:
        super().__init__(message, details=details, dependencyApi=dependency_api)


class ConversionRateNotFound(CountryInfoError):
    """The currency resolved but has no INR conversion entry."""

    error_code = "conversion_rate_not_found"

    def __init__(self, message: str, currency: dict[str, Any]) -> None:
        super().__init__(message, currency=currency)


INTERNAL_ERROR = "internal_error"
