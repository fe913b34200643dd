"""Best-effort push of logs and metrics to remote backends.

Pushes are dispatched as background tasks: the request path never awaits
them, nothing is retried, and failures are only written to this module's
logger.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

import httpx

from countryinfo.config import Settings
from countryinfo.core.encoding.loki import encode_stream
from countryinfo.core.encoding.otlp import encode_metric_point
from countryinfo.core.models import LogEntry, MetricSample

logger = logging.getLogger(__name__)


class BackgroundDispatcher:
    """Runs coroutines as fire-and-forget tasks.

    Keeps a strong reference to each pending task until it finishes so the
    event loop cannot garbage-collect it mid-flight.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, coro: Coroutine[Any, Any, Any]) -> None:
        """Schedule a coroutine without waiting for it.

        Outside a running event loop the coroutine runs to completion
        in a fresh one instead.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait until every pending task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Drain pending tasks; called on application shutdown."""
        await self.drain()


class _Pusher:
    """Shared HTTP plumbing for the push backends."""

    backend = "backend"

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.push_timeout)
        return self._client

    async def _post(self, url: str, payload: dict[str, Any], auth: Any) -> None:
        try:
            response = await self.client.post(url, json=payload, auth=auth)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "Failed to push to %s: %s",
                self.backend,
                exc,
                extra={"url": url, "errorClass": type(exc).__name__},
            )
            return
        if response.status_code >= 400:
            logger.warning(
                "Push to %s rejected with status %d",
                self.backend,
                response.status_code,
                extra={"url": url, "statusCode": response.status_code},
            )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


class LokiPusher(_Pusher):
    """Pushes log entries to a Loki-compatible ``/loki/api/v1/push`` API."""

    backend = "Loki"

    @property
    def enabled(self) -> bool:
        return self.settings.loki_enabled

    @property
    def url(self) -> str:
        return f"{self.settings.loki_host}/loki/api/v1/push"

    async def push(self, entry: LogEntry, labels: dict[str, str] | None = None) -> None:
        """Push one log entry; a no-op when the backend is not configured."""
        if not self.enabled:
            return
        payload = encode_stream(
            entry,
            labels or {},
            service=self.settings.service_name,
            environment=self.settings.environment,
        )
        auth = None
        if self.settings.loki_username and self.settings.loki_password:
            auth = httpx.BasicAuth(
                self.settings.loki_username, self.settings.loki_password
            )
        await self._post(self.url, payload, auth)


class OTLPMetricsPusher(_Pusher):
    """Pushes single metric points as OTLP/JSON with basic auth."""

    backend = "OTLP metrics"

    @property
    def enabled(self) -> bool:
        return self.settings.metrics_push_enabled

    async def push(self, sample: MetricSample, kind: str = "counter") -> None:
        """Push one metric point; a no-op when no API key is configured."""
        if not self.enabled:
            return
        payload = encode_metric_point(
            sample,
            kind,
            service=self.settings.service_name,
            environment=self.settings.environment,
        )
        auth = httpx.BasicAuth(
            self.settings.grafana_username, self.settings.grafana_api_key
        )
        await self._post(self.settings.grafana_metrics_url, payload, auth)
