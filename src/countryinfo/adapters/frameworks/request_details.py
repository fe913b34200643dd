"""Request introspection for structured request logs."""

import uuid
from typing import Any

from fastapi import Request

REQUEST_ID_HEADER = "X-Request-ID"

# First match wins
_CLIENT_IP_HEADERS = ("x-forwarded-for", "x-real-ip", "cf-connecting-ip")

_GEO_HEADERS = {
    "country": "x-vercel-ip-country",
    "countryRegion": "x-vercel-ip-country-region",
    "city": "x-vercel-ip-city",
    "latitude": "x-vercel-ip-latitude",
    "longitude": "x-vercel-ip-longitude",
}

_PASSTHROUGH_HEADERS = {
    "userAgent": "user-agent",
    "referer": "referer",
    "origin": "origin",
    "host": "host",
    "contentType": "content-type",
    "acceptLanguage": "accept-language",
}


def extract_request_id(request: Request, header_name: str = REQUEST_ID_HEADER) -> str:
    """Return the request ID header, or a newly generated UUID if absent."""
    value = request.headers.get(header_name)
    if value:
        return value
    return str(uuid.uuid4())


def client_ip(request: Request) -> str:
    """Infer the client IP from proxy headers.

    Only the first address of ``X-Forwarded-For`` is used. Returns
    "unknown" when no header is present.
    """
    for header in _CLIENT_IP_HEADERS:
        value = request.headers.get(header)
        if not value:
            continue
        if header == "x-forwarded-for":
            value = value.split(",")[0].strip()
        if value:
            return value
    return "unknown"


def extract_request_details(request: Request, request_id: str) -> dict[str, Any]:
    """Collect request metadata for the request log line.

    Headers that are absent are left out. ``geo`` is included only when at
    least one geo header is present, ``queryParams`` only when the query
    string is non-empty.

    Args:
        request: Incoming request.
        request_id: Request ID already chosen for this request.

    Returns:
        Dictionary of camelCase metadata fields.
    """
    details: dict[str, Any] = {"requestId": request_id, "ip": client_ip(request)}
    for field_name, header in _PASSTHROUGH_HEADERS.items():
        value = request.headers.get(header)
        if value:
            details[field_name] = value

    geo = {
        field_name: request.headers[header]
        for field_name, header in _GEO_HEADERS.items()
        if request.headers.get(header)
    }
    if geo:
        details["geo"] = geo

    query_params = dict(request.query_params)
    if query_params:
        details["queryParams"] = query_params

    details["path"] = request.url.path
    return details
