"""Shared HTTP request utilities for the transport namespaces."""

from __future__ import annotations

from typing import Any

import httpx

from .exceptions import APIError, AuthenticationError, NetworkError

UNKNOWN_ERROR = "Unknown error"
MALFORMED_BODY = "Malformed response: body is not JSON"


def build_headers(token: str | None) -> dict[str, str]:
    """Build request headers carrying ``token`` as a bearer credential."""
    if not token or not token.strip():
        raise AuthenticationError("No stored credential. Log in first.")

    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
    }


def extract_error_message(response: httpx.Response) -> str:
    """Read the ``msg`` field of an error payload, or a generic fallback."""
    try:
        payload = response.json()
    except ValueError:
        return UNKNOWN_ERROR

    if isinstance(payload, dict):
        message = payload.get("msg")
        if isinstance(message, str) and message:
            return message
    return UNKNOWN_ERROR


def handle_response(response: httpx.Response) -> dict[str, Any]:
    """Process HTTP response, raising appropriate errors for failures."""
    if response.status_code == 401:
        raise AuthenticationError(extract_error_message(response))

    if response.status_code >= 400:
        raise APIError(
            message=extract_error_message(response),
            status_code=response.status_code,
            response=response,
        )

    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        raise APIError(
            message=MALFORMED_BODY,
            status_code=response.status_code,
            response=response,
        ) from None


def build_query_params(**kwargs: Any) -> dict[str, Any]:
    """Build query parameters, filtering out None values."""
    return {k: v for k, v in kwargs.items() if v is not None}


async def send(client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
    """Issue one request and return its decoded JSON body.

    Transport failures (DNS, refused connection, timeout) are re-raised as
    NetworkError so callers deal with a single exception hierarchy.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TransportError as e:
        raise NetworkError(str(e) or type(e).__name__) from e
    return handle_response(response)
