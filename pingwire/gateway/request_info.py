"""Request metadata and response envelopes for the gateway."""

from __future__ import annotations

import json
from typing import Any

from starlette.requests import Request

from pingwire.utils.helpers import utc_timestamp

# Headers echoed back in the monitoring report, in display order.
REPORTED_HEADERS = (
    "user-agent",
    "accept-language",
    "host",
    "x-forwarded-for",
    "cf-connecting-ip",
    "cf-ray",
)

# Client IP sources, most trusted first.
IP_HEADERS = ("cf-connecting-ip", "x-forwarded-for", "x-real-ip")


def api_response(
    success: bool,
    message: str | None = None,
    data: dict[str, Any] | None = None,
    error: str | None = None,
) -> dict[str, Any]:
    """Build the JSON envelope shared by every endpoint; empty fields are omitted."""
    body: dict[str, Any] = {"success": success}
    if message:
        body["message"] = message
    if data:
        body["data"] = data
    if error:
        body["error"] = error
    return body


def client_ip(request: Request) -> str:
    for name in IP_HEADERS:
        value = request.headers.get(name)
        if value:
            return value
    return "unknown"


def extract_request_info(request: Request) -> str:
    """Format the inbound request's details as a readable report."""
    headers = {name: request.headers.get(name) or "unknown" for name in REPORTED_HEADERS}
    return (
        f"Request received at {utc_timestamp()}\n"
        "\n"
        "Request Details:\n"
        f"- Method: {request.method}\n"
        f"- URL: {request.url}\n"
        f"- Path: {request.url.path}\n"
        f"- IP Address: {client_ip(request)}\n"
        f"- Headers: {json.dumps(headers, indent=2)}"
    )
