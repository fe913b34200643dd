"""OTLP/JSON encoder for pushing single metric points."""

from typing import Any

from countryinfo.core.models import MetricSample

# AGGREGATION_TEMPORALITY_CUMULATIVE in the OTLP protobuf enum
_CUMULATIVE = 2


def _string_attributes(values: dict[str, str]) -> list[dict[str, Any]]:
    return [{"key": key, "value": {"stringValue": value}} for key, value in values.items()]


def encode_metric_point(
    sample: MetricSample,
    kind: str,
    service: str,
    environment: str,
) -> dict[str, Any]:
    """Build a ``resourceMetrics`` payload holding one data point.

    Args:
        sample: Measurement to push.
        kind: "counter" (monotonic cumulative sum) or "gauge".
        service: Service name for resource and point attributes.
        environment: Deployment environment resource attribute.

    Returns:
        JSON-serializable OTLP payload.
    """
    data_point = {
        "asDouble": sample.value,
        "timeUnixNano": int(sample.timestamp * 1_000_000_000),
        "attributes": _string_attributes({**sample.labels, "service": service}),
    }
    metric: dict[str, Any] = {
        "name": sample.name,
        "unit": "1" if kind == "counter" else "s",
        "description": "",
    }
    if kind == "gauge":
        metric["gauge"] = {"dataPoints": [data_point]}
    else:
        metric["sum"] = {
            "dataPoints": [data_point],
            "aggregationTemporality": _CUMULATIVE,
            "isMonotonic": True,
        }

    return {
        "resourceMetrics": [
            {
                "resource": {
                    "attributes": _string_attributes(
                        {"service.name": service, "environment": environment}
                    )
                },
                "scopeMetrics": [{"scope": {"name": service}, "metrics": [metric]}],
            }
        ]
    }
