"""FastAPI application for the country info endpoints.

Run with:
    uvicorn countryinfo.adapters.frameworks.fastapi:create_app --factory

Endpoints:
    /api/animal/{country}         - national animal
    /api/capital/{country}        - capital city and population
    /api/currency/{country}       - currency and value against USD
    /api/exchange-rate/{country}  - INR exchange rate (composed from currency)
    /api/metrics                  - Prometheus text format
    /                             - demo page
"""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from countryinfo.adapters.currency import HttpCurrencySource, InProcessCurrencySource
from countryinfo.adapters.frameworks.demo_page import DEMO_HTML
from countryinfo.adapters.frameworks.request_details import (
    REQUEST_ID_HEADER,
    extract_request_details,
    extract_request_id,
)
from countryinfo.adapters.logging import configure_logging
from countryinfo.adapters.process_metrics import collect_process_metrics
from countryinfo.adapters.push import (
    BackgroundDispatcher,
    LokiPusher,
    OTLPMetricsPusher,
)
from countryinfo.adapters.sink import ObservabilitySink
from countryinfo.adapters.storage.in_memory import InMemoryMetricsStorage
from countryinfo.config import Settings
from countryinfo.core.encoding.prometheus import CONTENT_TYPE, encode_metrics
from countryinfo.core.errors import INTERNAL_ERROR, CountryInfoError
from countryinfo.core.exchange import ExchangeRateResolver
from countryinfo.core.facts import INR_CONVERSION_RATES, normalize_country
from countryinfo.core.logs import log_exception
from countryinfo.core.lookup import FactLookup
from countryinfo.core.metrics import EXPOSED_METRICS, REQUEST_METRICS
from countryinfo.core.models import RequestMetricEvent
from countryinfo.core.ports import CurrencySourcePort, MetricsStoragePort

logger = logging.getLogger(__name__)

# (raw country, request id, perf_counter at entry) -> success payload
EndpointHandler = Callable[[str, str, float], Awaitable[dict[str, Any]]]
RouteFunc = Callable[[Request, str], Awaitable[JSONResponse]]


def instrumented_endpoint(
    sink: ObservabilitySink,
    route: str,
    endpoint: str,
    handler: EndpointHandler,
    internal_message: str = "An unexpected error occurred",
) -> RouteFunc:
    """Wrap a lookup handler with error mapping, metrics, and logging.

    The handler returns the success payload or raises ``CountryInfoError``.
    Any other exception becomes a 500 ``internal_error`` response with a
    generic message; the traceback is only logged.

    Args:
        sink: Observability sink that records every request.
        route: Route prefix without the country segment (e.g., /api/animal).
        endpoint: Short name for the per-country counter (e.g., animal).
        handler: Coroutine producing the success payload.
        internal_message: Message returned on unexpected faults.

    Returns:
        FastAPI route function taking the request and the country segment.
    """

    async def route_func(request: Request, country: str) -> JSONResponse:
        started = time.perf_counter()
        request_id = extract_request_id(request)
        error_kind: str | None = None
        try:
            payload = await handler(country, request_id, started)
            status_code = 200
        except CountryInfoError as exc:
            payload = exc.to_payload()
            status_code = exc.status_code
            error_kind = exc.error_code
        except Exception:
            log_exception(
                logger,
                f"{endpoint} endpoint error",
                route=route,
                country=normalize_country(country),
                requestId=request_id,
            )
            payload = {"error": INTERNAL_ERROR, "message": internal_message}
            status_code = 500
            error_kind = INTERNAL_ERROR
        duration = time.perf_counter() - started

        event = RequestMetricEvent(
            method=request.method,
            route=route,
            endpoint=endpoint,
            status_code=status_code,
            country=normalize_country(country),
            duration=duration,
            error_kind=error_kind,
        )
        await sink.record_request(
            event, extract_request_details(request, request_id), country
        )
        return JSONResponse(
            payload, status_code=status_code, headers={REQUEST_ID_HEADER: request_id}
        )

    return route_func


def create_app(
    settings: Settings | None = None,
    *,
    lookup: FactLookup | None = None,
    rates: Mapping[str, float] | None = None,
    currency_source: CurrencySourcePort | None = None,
    metrics_storage: MetricsStoragePort | None = None,
    dispatcher: BackgroundDispatcher | None = None,
    metrics_pusher: OTLPMetricsPusher | None = None,
    log_pusher: LokiPusher | None = None,
    collect_process: bool = True,
    configure_logs: bool = True,
) -> FastAPI:
    """Create the country info FastAPI application.

    Every collaborator can be injected; defaults are built from settings
    (read from the environment when not given).

    Args:
        settings: Service settings.
        lookup: Fact lookup over the static tables.
        rates: INR conversion table.
        currency_source: Currency source for the exchange-rate endpoint.
            Defaults to an HTTP source when ``currency_api_url`` is set,
            otherwise an in-process one.
        metrics_storage: Process-wide metrics registry.
        dispatcher: Background dispatcher for remote pushes.
        metrics_pusher: Remote metrics pusher.
        log_pusher: Remote log pusher.
        collect_process: Add process CPU and memory metrics to the scrape.
        configure_logs: Install the console and Loki handlers on the
            ``countryinfo`` logger. Logging configuration is process-wide:
            the last app created with this set owns the handlers, so
            additional apps in the same process should pass False.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or Settings.from_env()
    lookup = lookup or FactLookup()
    dispatcher = dispatcher or BackgroundDispatcher()
    metrics_storage = metrics_storage or InMemoryMetricsStorage()
    metrics_pusher = metrics_pusher or OTLPMetricsPusher(settings)
    log_pusher = log_pusher or LokiPusher(settings)
    if currency_source is None:
        if settings.currency_api_url:
            currency_source = HttpCurrencySource(
                settings.currency_api_url, timeout=settings.currency_api_timeout
            )
        else:
            currency_source = InProcessCurrencySource(lookup)
    resolver = ExchangeRateResolver(
        currency_source, INR_CONVERSION_RATES if rates is None else rates
    )
    sink = ObservabilitySink(metrics_storage, dispatcher, metrics_pusher)

    if configure_logs:
        configure_logging(settings, log_pusher, dispatcher)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        """Flush background pushes and close HTTP clients on shutdown."""
        yield
        await dispatcher.aclose()
        await metrics_pusher.aclose()
        await log_pusher.aclose()
        close = getattr(currency_source, "aclose", None)
        if close is not None:
            await close()

    app = FastAPI(title="Country Info API", lifespan=lifespan)
    app.state.settings = settings
    app.state.metrics_storage = metrics_storage
    app.state.dispatcher = dispatcher
    app.state.sink = sink

    async def animal(country: str, request_id: str, started: float) -> dict[str, Any]:
        return lookup.animal(country)

    async def capital(country: str, request_id: str, started: float) -> dict[str, Any]:
        return lookup.capital(country)

    async def currency(country: str, request_id: str, started: float) -> dict[str, Any]:
        return lookup.currency(country)

    async def exchange_rate(
        country: str, request_id: str, started: float
    ) -> dict[str, Any]:
        return await resolver.resolve(country, request_id, started)

    routes: list[tuple[str, str, EndpointHandler, str]] = [
        ("/api/animal", "animal", animal, "Failed to fetch national animal"),
        ("/api/capital", "capital", capital, "Failed to fetch capital city"),
        ("/api/currency", "currency", currency, "Failed to fetch currency"),
        (
            "/api/exchange-rate",
            "exchange-rate",
            exchange_rate,
            "Failed to fetch exchange rate",
        ),
    ]
    for route, endpoint, handler, internal_message in routes:
        app.add_api_route(
            f"{route}/{{country}}",
            instrumented_endpoint(sink, route, endpoint, handler, internal_message),
            methods=["GET"],
            name=endpoint,
        )

    @app.get("/api/metrics")
    async def get_metrics() -> Response:
        """Return the metrics registry in Prometheus text format."""
        try:
            samples = [s async for s in metrics_storage.scrape()]
            definitions = REQUEST_METRICS
            if collect_process:
                samples.extend(collect_process_metrics())
                definitions = EXPOSED_METRICS
            body = encode_metrics(samples, definitions)
        except Exception:
            log_exception(logger, "Error generating metrics")
            return JSONResponse({"error": "Failed to generate metrics"}, status_code=500)
        return Response(content=body, media_type=CONTENT_TYPE)

    @app.get("/", response_class=HTMLResponse)
    async def demo_page() -> HTMLResponse:
        """Serve the demo page."""
        return HTMLResponse(content=DEMO_HTML)

    return app
