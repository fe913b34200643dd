"""Loki push API encoder."""

import json
from typing import Any

from countryinfo.core.models import LogEntry


def encode_stream(
    entry: LogEntry,
    labels: dict[str, str],
    service: str,
    environment: str,
) -> dict[str, Any]:
    """Build a ``streams`` payload holding one log line.

    The line is a JSON object with the message and the entry attributes.
    Loki expects the timestamp as a nanosecond string.

    Args:
        entry: Log entry to push.
        labels: Extra stream labels (route, country, ...).
        service: Value of the ``service`` label.
        environment: Value of the ``environment`` label.
    """
    stream = {
        "service": service,
        "level": entry.level,
        "environment": environment,
        **labels,
    }
    line = json.dumps({"message": entry.message, **entry.attributes}, default=str)
    timestamp = str(int(entry.timestamp * 1_000_000_000))
    return {"streams": [{"stream": stream, "values": [[timestamp, line]]}]}
