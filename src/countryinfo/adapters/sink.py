"""Observability sink: registry, request log line, and remote mirrors."""

import logging
from datetime import datetime, timezone
from typing import Any

from countryinfo.adapters.push import BackgroundDispatcher, OTLPMetricsPusher
from countryinfo.core.logs import LABELS_ATTR, level_for_status
from countryinfo.core.metrics import push_samples, request_samples
from countryinfo.core.models import RequestMetricEvent
from countryinfo.core.ports import MetricsStoragePort

request_logger = logging.getLogger("countryinfo.requests")


class ObservabilitySink:
    """Records every completed API request.

    For each request it:
    - adds counter and histogram samples to the in-process registry
    - dispatches the remote metrics push in the background
    - writes one structured log line (mirrored to Loki by LokiHandler)

    Remote pushes are never awaited here.
    """

    def __init__(
        self,
        metrics_storage: MetricsStoragePort,
        dispatcher: BackgroundDispatcher,
        metrics_pusher: OTLPMetricsPusher,
    ) -> None:
        self.metrics_storage = metrics_storage
        self.dispatcher = dispatcher
        self.metrics_pusher = metrics_pusher

    async def record_request(
        self,
        event: RequestMetricEvent,
        details: dict[str, Any],
        raw_country: str,
    ) -> None:
        """Record metrics and the log line for one request.

        Args:
            event: Request outcome.
            details: Request metadata from ``extract_request_details``.
            raw_country: Country path segment as received.
        """
        for sample in request_samples(event):
            await self.metrics_storage.write(sample)

        if self.metrics_pusher.enabled:
            for sample, kind in push_samples(event):
                self.dispatcher.submit(self.metrics_pusher.push(sample, kind))

        self._log_request(event, details, raw_country)

    def _log_request(
        self,
        event: RequestMetricEvent,
        details: dict[str, Any],
        raw_country: str,
    ) -> None:
        route = f"{event.route}/{raw_country}"
        metadata: dict[str, Any] = {
            "method": event.method,
            "route": route,
            "country": event.country,
            "statusCode": event.status_code,
            "duration": event.duration,
            "durationMs": round(event.duration * 1000),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **details,
        }
        if event.error_kind is not None:
            metadata["errorType"] = event.error_kind
        metadata[LABELS_ATTR] = {
            "route": route,
            "country": event.country,
            "status_code": str(event.status_code),
            "ip": str(details.get("ip", "unknown")),
        }
        request_logger.log(
            level_for_status(event.status_code),
            "API Request: %s %s",
            event.method,
            details.get("path", route),
            extra=metadata,
        )
