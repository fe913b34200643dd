"""Tests for metric helper functions."""

import time

import pytest

from countryinfo.core.metrics import (
    REQUEST_DURATION_BUCKETS,
    counter,
    histogram,
    push_samples,
    request_samples,
)
from countryinfo.core.models import MetricSample, RequestMetricEvent

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]


def _event(**overrides) -> RequestMetricEvent:
    fields = {
        "method": "GET",
        "route": "/api/capital",
        "endpoint": "capital",
        "status_code": 200,
        "country": "japan",
        "duration": 0.012,
        "error_kind": None,
    }
    fields.update(overrides)
    return RequestMetricEvent(**fields)


class TestCounter:
    """Tests for counter() helper function."""

    def test_counter_creates_metric_sample_with_name(self) -> None:
        sample = counter("requests_total")
        assert isinstance(sample, MetricSample)
        assert sample.name == "requests_total"

    def test_counter_auto_captures_timestamp(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Counter automatically captures current timestamp."""
        monkeypatch.setattr(time, "time", lambda: 1702300000.0)
        assert counter("requests_total").timestamp == 1702300000.0

    def test_counter_defaults(self) -> None:
        """Counter defaults to value 1 and no labels."""
        sample = counter("requests_total")
        assert sample.value == 1.0
        assert sample.labels == {}

    def test_counter_with_value_and_labels(self) -> None:
        sample = counter("requests_total", value=3.0, labels={"method": "GET"})
        assert sample.value == 3.0
        assert sample.labels == {"method": "GET"}


class TestHistogram:
    """Tests for histogram() helper function."""

    def test_one_sample_per_bucket_plus_inf_sum_count(self) -> None:
        samples = histogram("latency_seconds", 0.01)
        assert len(samples) == len(REQUEST_DURATION_BUCKETS) + 3

    def test_buckets_count_observations_at_or_below_boundary(self) -> None:
        samples = histogram("latency_seconds", 0.05, buckets=[0.01, 0.05, 0.1])
        buckets = {s.labels["le"]: s.value for s in samples if s.name.endswith("_bucket")}
        assert buckets == {"0.01": 0.0, "0.05": 1.0, "0.1": 1.0, "+Inf": 1.0}

    def test_sum_and_count(self) -> None:
        samples = histogram("latency_seconds", 0.25, labels={"route": "/x"})
        by_name = {s.name: s for s in samples if not s.name.endswith("_bucket")}
        assert by_name["latency_seconds_sum"].value == 0.25
        assert by_name["latency_seconds_count"].value == 1.0
        assert by_name["latency_seconds_sum"].labels == {"route": "/x"}


class TestRequestSamples:
    """Tests for request_samples()."""

    def test_success_records_request_duration_and_country(self) -> None:
        names = [s.name for s in request_samples(_event())]
        assert "http_requests_total" in names
        assert "http_request_duration_seconds_count" in names
        assert "api_calls_by_country_total" in names
        assert "api_errors_total" not in names

    def test_request_counter_labels(self) -> None:
        sample = request_samples(_event())[0]
        assert sample.labels == {
            "method": "GET",
            "route": "/api/capital",
            "status_code": "200",
            "country": "japan",
        }

    def test_duration_labels_exclude_country(self) -> None:
        count = next(
            s
            for s in request_samples(_event())
            if s.name == "http_request_duration_seconds_count"
        )
        assert count.labels == {
            "method": "GET",
            "route": "/api/capital",
            "status_code": "200",
        }

    def test_failure_records_error_instead_of_country(self) -> None:
        samples = request_samples(_event(status_code=404, error_kind="not_found"))
        errors = [s for s in samples if s.name == "api_errors_total"]
        assert [s.labels for s in errors] == [
            {"route": "/api/capital", "error_type": "not_found"}
        ]
        assert not [s for s in samples if s.name == "api_calls_by_country_total"]

    def test_country_counter_uses_endpoint_name(self) -> None:
        sample = request_samples(_event(endpoint="exchange-rate"))[-1]
        assert sample.labels == {"country": "japan", "endpoint": "exchange-rate"}


class TestPushSamples:
    """Tests for push_samples()."""

    def test_success_pushes_three_points(self) -> None:
        points = push_samples(_event())
        assert [(s.name, kind) for s, kind in points] == [
            ("http_requests_total", "counter"),
            ("http_request_duration_seconds", "gauge"),
            ("api_calls_by_country_total", "counter"),
        ]

    def test_duration_is_pushed_as_raw_value(self) -> None:
        sample, _kind = push_samples(_event(duration=0.2))[1]
        assert sample.value == 0.2

    def test_failure_skips_country_counter(self) -> None:
        points = push_samples(_event(status_code=500, error_kind="internal_error"))
        assert len(points) == 2
