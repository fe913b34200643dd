"""Environment-driven settings for the country info service."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_LOKI_HOST = "http://localhost:3100"
DEFAULT_GRAFANA_METRICS_URL = (
    "https://otlp-gateway-prod-ap-south-1.grafana.net/otlp/v1/metrics"
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Attributes:
        service_name: Value of the ``service`` label on logs and metrics.
        environment: Deployment environment name (e.g., development).
        log_level: Level name for the ``countryinfo`` logger.
        loki_host: Base URL of the log push backend.
        loki_username: Basic auth user for the log push (optional).
        loki_password: Basic auth password for the log push (optional).
        grafana_metrics_url: OTLP/JSON endpoint for the metrics push.
        grafana_username: Account id used as basic auth user for metrics.
        grafana_api_key: API key for the metrics push; empty disables it.
        currency_api_url: Base URL for the currency lookup used by the
            exchange-rate endpoint. None means an in-process call.
        currency_api_timeout: Seconds before the currency call times out.
        push_timeout: Seconds before a log or metrics push times out.
        host: Interface for ``python -m countryinfo``.
        port: Port for ``python -m countryinfo``.
    """

    service_name: str = "country-info-api"
    environment: str = "development"
    log_level: str = "INFO"
    loki_host: str = DEFAULT_LOKI_HOST
    loki_username: str = ""
    loki_password: str = ""
    grafana_metrics_url: str = DEFAULT_GRAFANA_METRICS_URL
    grafana_username: str = ""
    grafana_api_key: str = ""
    currency_api_url: str | None = None
    currency_api_timeout: float = 5.0
    push_timeout: float = 5.0
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def loki_enabled(self) -> bool:
        """Log push runs only against a non-default host."""
        return bool(self.loki_host) and self.loki_host != DEFAULT_LOKI_HOST

    @property
    def metrics_push_enabled(self) -> bool:
        """Metrics push runs only when an API key is configured."""
        return bool(self.grafana_api_key)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: ``os.environ``).

        Returns:
            Settings instance.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        currency_api_url = env.get("CURRENCY_API_URL", "").strip().rstrip("/")
        return cls(
            service_name=env.get("SERVICE_NAME", cls.service_name),
            environment=env.get("APP_ENV", cls.environment),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            loki_host=env.get("LOKI_HOST", DEFAULT_LOKI_HOST).rstrip("/"),
            loki_username=env.get("LOKI_USERNAME", ""),
            loki_password=env.get("LOKI_PASSWORD", ""),
            grafana_metrics_url=env.get(
                "GRAFANA_METRICS_URL", DEFAULT_GRAFANA_METRICS_URL
            ),
            grafana_username=env.get("GRAFANA_USERNAME", ""),
            grafana_api_key=env.get("GRAFANA_API_KEY", ""),
            currency_api_url=currency_api_url or None,
            currency_api_timeout=_parse_float(env, "CURRENCY_API_TIMEOUT", 5.0),
            push_timeout=_parse_float(env, "PUSH_TIMEOUT", 5.0),
            host=env.get("HOST", cls.host),
            port=int(env.get("PORT", cls.port)),
        )


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0 or value != value:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value
