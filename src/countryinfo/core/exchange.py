"""Exchange-rate composition: currency lookup plus INR conversion table."""

import logging
import time
from collections.abc import Mapping
from typing import Any

from countryinfo.core.errors import ConversionRateNotFound, DependencyNotFound
from countryinfo.core.facts import INR_CONVERSION_RATES, normalize_country
from countryinfo.core.ports import CurrencySourcePort

logger = logging.getLogger(__name__)

EXAMPLE_AMOUNT = 100
TARGET_CURRENCY = "INR"


class ExchangeRateResolver:
    """Composes a currency lookup with the static INR conversion table.

    Rates keep full precision internally and are rounded to two decimals
    only when the response is assembled.
    """

    def __init__(
        self,
        currency_source: CurrencySourcePort,
        rates: Mapping[str, float] = INR_CONVERSION_RATES,
    ) -> None:
        self.currency_source = currency_source
        self.rates = rates

    async def resolve(
        self, country: str, request_id: str, started: float | None = None
    ) -> dict[str, Any]:
        """Build the exchange-rate payload for a raw country segment.

        Args:
            country: Raw country path segment, echoed in the payload.
            request_id: Trace identifier forwarded to the currency source.
            started: ``time.perf_counter()`` value at handler entry, used for
                ``metadata.processingTimeMs``.

        Raises:
            DependencyNotFound: If the currency lookup did not succeed.
            ConversionRateNotFound: If the symbol has no INR rate.
        """
        started = time.perf_counter() if started is None else started
        country_key = normalize_country(country)
        dependency_api = self.currency_source.dependency_api

        logger.info(
            "Calling currency lookup",
            extra={
                "country": country_key,
                "dependencyApi": dependency_api,
                "step": "fetching_currency",
            },
        )
        response = await self.currency_source.fetch(country_key, request_id)
        if not response.ok:
            raise DependencyNotFound(
                f'Could not find currency for "{country}"',
                details=response.payload,
                dependency_api=dependency_api,
            )

        currency = response.payload
        symbol = currency["symbol"]
        logger.info(
            "Currency lookup response received",
            extra={
                "country": country_key,
                "currency": currency["currency"],
                "symbol": symbol,
                "step": "currency_fetched",
            },
        )

        rate = self.rates.get(symbol)
        if rate is None:
            raise ConversionRateNotFound(
                f"{TARGET_CURRENCY} conversion rate for {symbol} is not available",
                currency=currency,
            )

        converted = EXAMPLE_AMOUNT * rate
        duration = time.perf_counter() - started
        logger.info(
            "Exchange rate calculation complete",
            extra={
                "country": country_key,
                "fromCurrency": symbol,
                "toCurrency": TARGET_CURRENCY,
                "rate": rate,
                "duration": duration,
            },
        )
        return {
            "country": country,
            "currency": {"name": currency["currency"], "symbol": symbol},
            "exchangeRate": {
                "from": symbol,
                "to": TARGET_CURRENCY,
                "rate": round(rate, 2),
                "description": f"1 {symbol} = ₹{rate:.2f} {TARGET_CURRENCY}",
            },
            "example": {
                "amount": EXAMPLE_AMOUNT,
                "converted": round(converted, 2),
                "description": (
                    f"{EXAMPLE_AMOUNT} {symbol} = ₹{converted:.2f} {TARGET_CURRENCY}"
                ),
            },
            "metadata": {
                "dependencyApi": dependency_api,
                "processingTimeMs": round(duration * 1000),
            },
        }
