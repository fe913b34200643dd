"""Tests for ExchangeRateResolver."""

import pytest

from countryinfo.adapters.currency import InProcessCurrencySource
from countryinfo.core.errors import ConversionRateNotFound, DependencyNotFound
from countryinfo.core.exchange import ExchangeRateResolver
from countryinfo.core.lookup import FactLookup
from countryinfo.core.ports import CurrencyResponse

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]


class StubCurrencySource:
    """Currency source returning a canned response and recording calls."""

    dependency_api = "/api/currency"

    def __init__(self, response: CurrencyResponse) -> None:
        self.response = response
        self.calls: list[tuple[str, str]] = []

    async def fetch(self, country: str, request_id: str) -> CurrencyResponse:
        self.calls.append((country, request_id))
        return self.response


@pytest.fixture
def resolver(lookup: FactLookup) -> ExchangeRateResolver:
    return ExchangeRateResolver(InProcessCurrencySource(lookup))


async def test_japan_rate_and_example(resolver: ExchangeRateResolver) -> None:
    """JPY resolves to 0.56 and 100 JPY converts to 56.00 INR."""
    payload = await resolver.resolve("japan", "req-1")

    assert payload["country"] == "japan"
    assert payload["currency"] == {"name": "Japanese Yen", "symbol": "JPY"}
    assert payload["exchangeRate"] == {
        "from": "JPY",
        "to": "INR",
        "rate": 0.56,
        "description": "1 JPY = ₹0.56 INR",
    }
    assert payload["example"] == {
        "amount": 100,
        "converted": 56.0,
        "description": "100 JPY = ₹56.00 INR",
    }
    assert payload["metadata"]["dependencyApi"] == "/api/currency"
    assert isinstance(payload["metadata"]["processingTimeMs"], int)


async def test_rate_is_rounded_only_at_response(resolver: ExchangeRateResolver) -> None:
    """KRW keeps full precision for the example but displays two decimals."""
    payload = await resolver.resolve("South-Korea", "req-1")

    assert payload["country"] == "South-Korea"
    assert payload["exchangeRate"]["rate"] == 0.06
    assert payload["example"]["converted"] == 6.4


async def test_forwards_normalized_key_and_request_id() -> None:
    """The currency source receives the normalized key and the trace id."""
    source = StubCurrencySource(
        CurrencyResponse(200, {"currency": "Euro", "symbol": "EUR"})
    )
    resolver = ExchangeRateResolver(source)

    await resolver.resolve("GERMANY", "trace-42")

    assert source.calls == [("germany", "trace-42")]


async def test_failed_dependency_carries_payload_verbatim() -> None:
    """A non-2xx currency answer raises DependencyNotFound with its payload."""
    downstream = {"error": "not_found", "message": 'Currency data for "x" ...'}
    resolver = ExchangeRateResolver(StubCurrencySource(CurrencyResponse(404, downstream)))

    with pytest.raises(DependencyNotFound) as exc_info:
        await resolver.resolve("atlantis", "req-1")

    payload = exc_info.value.to_payload()
    assert exc_info.value.status_code == 404
    assert payload["error"] == "dependency_not_found"
    assert payload["details"] == downstream
    assert payload["dependencyApi"] == "/api/currency"
    assert payload["message"] == 'Could not find currency for "atlantis"'


async def test_missing_conversion_rate(resolver: ExchangeRateResolver) -> None:
    """CHF resolves as a currency but has no INR rate."""
    with pytest.raises(ConversionRateNotFound) as exc_info:
        await resolver.resolve("switzerland", "req-1")

    payload = exc_info.value.to_payload()
    assert payload["error"] == "conversion_rate_not_found"
    assert payload["message"] == "INR conversion rate for CHF is not available"
    assert payload["currency"]["symbol"] == "CHF"
    assert payload["currency"]["currency"] == "Swiss Franc"


async def test_custom_rate_table(lookup: FactLookup) -> None:
    """Rates are injectable."""
    resolver = ExchangeRateResolver(InProcessCurrencySource(lookup), rates={"USD": 80})

    with pytest.raises(ConversionRateNotFound):
        await resolver.resolve("japan", "req-1")


async def test_malformed_downstream_payload_propagates() -> None:
    """A success payload without a symbol is an unexpected fault."""
    resolver = ExchangeRateResolver(
        StubCurrencySource(CurrencyResponse(200, {"currency": "Mystery"}))
    )

    with pytest.raises(KeyError):
        await resolver.resolve("japan", "req-1")
