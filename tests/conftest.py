"""Shared test fixtures for all test modules."""

from collections.abc import AsyncIterator
from datetime import date

import httpx
import pytest

from countryinfo.adapters.frameworks.fastapi import create_app
from countryinfo.adapters.push import BackgroundDispatcher
from countryinfo.adapters.storage.in_memory import InMemoryMetricsStorage
from countryinfo.config import Settings
from countryinfo.core.lookup import FactLookup

FIXED_TODAY = date(2024, 3, 1)


@pytest.fixture
def settings() -> Settings:
    """Settings with both remote pushes disabled."""
    return Settings()


@pytest.fixture
def lookup() -> FactLookup:
    """Fact lookup over the static tables with a pinned date."""
    return FactLookup(today=lambda: FIXED_TODAY)


@pytest.fixture
def metrics_storage() -> InMemoryMetricsStorage:
    """Fixture providing an empty metrics registry."""
    return InMemoryMetricsStorage()


@pytest.fixture
def dispatcher() -> BackgroundDispatcher:
    return BackgroundDispatcher()


@pytest.fixture
def app(settings, lookup, metrics_storage, dispatcher):
    """Country info app wired to the per-test registry and dispatcher."""
    return create_app(
        settings,
        lookup=lookup,
        metrics_storage=metrics_storage,
        dispatcher=dispatcher,
    )


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/api/capital/japan")
    """

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client


@pytest.fixture
async def client(app, asgi_test_client) -> AsyncIterator[httpx.AsyncClient]:
    """AsyncClient bound to the default test app."""
    async with asgi_test_client(app) as client:
        yield client


@pytest.fixture
def mock_transport_factory():
    """Factory for httpx.MockTransport that records the requests it sees.

    Returns a callable taking a handler ``request -> httpx.Response`` and
    returning ``(transport, requests)``.
    """

    def _factory(handler):
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        return httpx.MockTransport(_record), requests

    return _factory
