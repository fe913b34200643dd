"""BDD step definitions for the exchange-rate feature."""

from dataclasses import dataclass, field
from typing import Any

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import given, parsers, then, when

from countryinfo.adapters.frameworks.fastapi import create_app
from countryinfo.adapters.storage.in_memory import InMemoryMetricsStorage


@dataclass
class ExchangeScenarioContext:
    """Shared state between steps in a scenario."""

    metrics_storage: InMemoryMetricsStorage = field(
        default_factory=InMemoryMetricsStorage
    )
    client: TestClient | None = None
    status_code: int = 0
    body: Any = None


@pytest.fixture
def ctx() -> ExchangeScenarioContext:
    """Fresh scenario context for each test."""
    return ExchangeScenarioContext()


@given("the country info app")
def step_app(ctx: ExchangeScenarioContext, settings, lookup) -> None:
    app = create_app(settings, lookup=lookup, metrics_storage=ctx.metrics_storage)
    ctx.client = TestClient(app)


@when(parsers.parse('a GET request is made to "{path}"'))
def step_get(ctx: ExchangeScenarioContext, path: str) -> None:
    response = ctx.client.get(path)
    ctx.status_code = response.status_code
    ctx.body = response.json()


@when(parsers.parse('{n:d} GET requests are made to "{path}"'))
def step_get_n(ctx: ExchangeScenarioContext, n: int, path: str) -> None:
    for _ in range(n):
        step_get(ctx, path)


@then(parsers.parse("the response status should be {code:d}"))
def step_status(ctx: ExchangeScenarioContext, code: int) -> None:
    assert ctx.status_code == code, ctx.body


@then(parsers.parse('the exchange rate should be from "{source}" to "{target}" at {rate:g}'))
def step_rate(ctx: ExchangeScenarioContext, source: str, target: str, rate: float) -> None:
    exchange = ctx.body["exchangeRate"]
    assert exchange["from"] == source
    assert exchange["to"] == target
    assert exchange["rate"] == rate


@then(parsers.parse("100 units should convert to {converted:g}"))
def step_converted(ctx: ExchangeScenarioContext, converted: float) -> None:
    assert ctx.body["example"]["amount"] == 100
    assert ctx.body["example"]["converted"] == converted


@then(parsers.parse('the error code should be "{code}"'))
def step_error_code(ctx: ExchangeScenarioContext, code: str) -> None:
    assert ctx.body["error"] == code


@then(parsers.parse('the details should equal the currency response for "{country}"'))
def step_details(ctx: ExchangeScenarioContext, country: str) -> None:
    downstream = ctx.client.get(f"/api/currency/{country}").json()
    assert ctx.body["details"] == downstream


@then(
    parsers.parse(
        'the metric "{name}" for route "{route}" and country "{country}" should be {n:d}'
    )
)
def step_metric(
    ctx: ExchangeScenarioContext, name: str, route: str, country: str, n: int
) -> None:
    labels = {"method": "GET", "route": route, "status_code": "200", "country": country}
    assert ctx.metrics_storage.value(name, labels) == n
