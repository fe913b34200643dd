"""Currency sources for the exchange-rate endpoint.

``InProcessCurrencySource`` calls the currency lookup directly.
``HttpCurrencySource`` calls a deployed ``/api/currency`` endpoint over
HTTP, for setups where the two endpoints run in separate processes.
"""

from urllib.parse import quote

import httpx

from countryinfo.core.errors import CountryNotFound
from countryinfo.core.lookup import FactLookup
from countryinfo.core.ports import CurrencyResponse

CURRENCY_ROUTE = "/api/currency"


class InProcessCurrencySource:
    """Resolves currencies with a FactLookup in the same process.

    Produces the same status and payload the currency endpoint would.
    """

    dependency_api = CURRENCY_ROUTE

    def __init__(self, lookup: FactLookup) -> None:
        self.lookup = lookup

    async def fetch(self, country: str, request_id: str) -> CurrencyResponse:
        try:
            return CurrencyResponse(200, self.lookup.currency(country))
        except CountryNotFound as exc:
            return CurrencyResponse(exc.status_code, exc.to_payload())


class HttpCurrencySource:
    """Resolves currencies through the currency endpoint over HTTP.

    Every call has a bounded timeout. Timeouts and transport errors
    propagate as ``httpx.HTTPError``, as does a body that is not JSON
    (``ValueError``); the caller turns them into ``internal_error``.
    """

    dependency_api = CURRENCY_ROUTE

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def fetch(self, country: str, request_id: str) -> CurrencyResponse:
        url = f"{self.base_url}{CURRENCY_ROUTE}/{quote(country, safe='')}"
        response = await self.client.get(
            url,
            headers={"Accept": "application/json", "X-Request-ID": request_id},
            timeout=self.timeout,
        )
        return CurrencyResponse(response.status_code, response.json())

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
