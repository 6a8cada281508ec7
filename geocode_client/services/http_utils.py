"""HTTP helpers for calling the geocoding endpoint."""

from __future__ import annotations

import json
from typing import Any

import httpx

from geocode_client.core.config import DEFAULT_TIMEOUT
from geocode_client.core.exceptions import ParseError, TransportError
from geocode_client.logging import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "geocode-client/0.1"


def build_client(*, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> httpx.Client:
    """Create the ``httpx.Client`` a geocoding client owns when none is injected."""
    return httpx.Client(
        headers={"User-Agent": user_agent, "Accept": "application/json"},
        timeout=timeout,
    )


def fetch_json(
    client: httpx.Client,
    url: str,
    params: dict[str, Any],
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any] | TransportError | ParseError:
    """Execute an HTTP GET and decode the JSON object in the body.

    Args:
        client: HTTP client to use
        url: Endpoint URL
        params: Query parameters, including the credential
        timeout: Request timeout in seconds

    Returns:
        The decoded JSON object, or the error describing which stage failed.
        HTTP status codes are not inspected: the service reports failures
        through the ``status`` field of the body.
    """
    try:
        response = client.get(
            url,
            params=params,
            headers={"Accept": "application/json"},
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        return TransportError(f"Geocoding API request failed: {exc}")

    logger.debug("geocoding_response", http_status=response.status_code)
    try:
        payload = json.loads(response.content)
    except ValueError:
        return ParseError("Failed to parse Geocoding API response")

    if not isinstance(payload, dict):
        return ParseError(
            f"Failed to parse Geocoding API response: expected object, got {type(payload).__name__}"
        )
    return payload


__all__ = ["DEFAULT_USER_AGENT", "build_client", "fetch_json"]
