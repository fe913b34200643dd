"""Python logging adapters for countryinfo.

``JsonFormatter`` renders records as one JSON object per line for the
console. ``LokiHandler`` bridges records to the remote log backend through
a ``LokiPusher``. ``configure_logging`` wires both onto the package logger.
"""

import json
import logging
from datetime import datetime, timezone

from countryinfo.adapters.push import BackgroundDispatcher, LokiPusher
from countryinfo.config import Settings
from countryinfo.core.logs import entry_from_record, record_extras, record_labels

PACKAGE_LOGGER = "countryinfo"

# Records from the push module are never forwarded back to the push backend
_PUSH_LOGGER = "countryinfo.adapters.push"

_OWNED_ATTR = "_countryinfo_owned"


class JsonFormatter(logging.Formatter):
    """Formats a log record as a single-line JSON object.

    Example:
        ```python
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter(service="country-info-api"))
        ```
    """

    def __init__(self, service: str = "", environment: str = "") -> None:
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.service:
            payload["service"] = self.service
        if self.environment:
            payload["environment"] = self.environment
        for key, value in record_extras(record).items():
            payload.setdefault(key, value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class LokiHandler(logging.Handler):
    """Logging handler that pushes records to Loki in the background.

    Each record becomes a ``LogEntry``; stream labels come from the
    ``labels`` extra (e.g., ``logger.info(msg, extra={"labels": {...}})``).
    """

    def __init__(
        self,
        pusher: LokiPusher,
        dispatcher: BackgroundDispatcher,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        self._pusher = pusher
        self._dispatcher = dispatcher

    def emit(self, record: logging.LogRecord) -> None:
        """Dispatch a push for the record; never blocks on the network.

        Args:
            record: The log record to emit.
        """
        if record.name.startswith(_PUSH_LOGGER):
            return
        try:
            entry = entry_from_record(record)
            self._dispatcher.submit(self._pusher.push(entry, record_labels(record)))
        except Exception:
            self.handleError(record)


def configure_logging(
    settings: Settings,
    pusher: LokiPusher | None = None,
    dispatcher: BackgroundDispatcher | None = None,
) -> logging.Logger:
    """Install console (and, when enabled, Loki) handlers on the package logger.

    Handlers installed by an earlier call are replaced, so repeated app
    creation does not duplicate output. The ``countryinfo`` logger is
    process-wide: the most recent call decides where every app in the
    process logs to.

    Args:
        settings: Service settings (level, service name, Loki config).
        pusher: Loki pusher; a LokiHandler is added only if it is enabled.
        dispatcher: Dispatcher for background pushes.

    Returns:
        The configured ``countryinfo`` logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(settings.log_level)
    for handler in list(package_logger.handlers):
        if getattr(handler, _OWNED_ATTR, False):
            package_logger.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setFormatter(
        JsonFormatter(service=settings.service_name, environment=settings.environment)
    )
    handlers: list[logging.Handler] = [console]
    if pusher is not None and dispatcher is not None and pusher.enabled:
        handlers.append(LokiHandler(pusher, dispatcher))

    for handler in handlers:
        setattr(handler, _OWNED_ATTR, True)
        package_logger.addHandler(handler)
    return package_logger
