"""countryinfo - static country facts over HTTP with built-in observability.

Endpoints return a country's national animal, capital, currency, and an INR
exchange rate composed from the currency lookup. Every request is counted,
timed, and logged, with best-effort mirroring to Loki and an OTLP backend.
"""

from countryinfo.adapters.frameworks.fastapi import create_app
from countryinfo.config import Settings
from countryinfo.core.facts import normalize_country

__all__ = ["Settings", "create_app", "normalize_country"]
