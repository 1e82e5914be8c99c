from __future__ import annotations

import logging
from typing import Any

import httpx

from ..storage.tokens import TokenStore

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Could not reach the server. Please check your network connection."


class ApiError(Exception):
    """A failed call to the hotel backend (HTTP error, transport error or unreadable body)."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        details: Any = None,
        is_network_error: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details
        self.is_network_error = is_network_error


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


def _error_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    nested = body.get("data")
    return (
        body.get("message")
        or (nested.get("message") if isinstance(nested, dict) else None)
        or body.get("error")
    )


def handle_response(response: httpx.Response) -> Any:
    """
    Turn a backend response into its payload.

    Successful JSON bodies are unwrapped from the ``{"data": ...}`` envelope
    the backend uses; other successful bodies are returned as text. Non-2xx
    responses raise ``ApiError`` carrying the backend's own message.
    """
    if not response.is_success:
        details = None
        try:
            if _is_json(response):
                details = response.json()
                message = _error_message(details) or "Something went wrong"
            else:
                message = response.text or "Something went wrong"
        except ValueError:
            message = f"HTTP {response.status_code}: {response.reason_phrase or 'Unknown error'}"
        logger.error(
            "API error response: status=%s url=%s body=%s",
            response.status_code, response.request.url, details,
        )
        raise ApiError(
            message,
            status=response.status_code,
            details=details or {"message": message},
        )

    if not _is_json(response):
        return response.text

    try:
        data = response.json()
    except ValueError as exc:
        raise ApiError("Could not parse the server response", status=response.status_code) from exc

    if isinstance(data, dict) and data.get("data"):
        return data["data"]
    return data


def auth_headers(token_store: TokenStore | None) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    token = token_store.get_access_token() if token_store else None
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def send(client: httpx.Client, method: str, url: str, **kwargs: Any) -> Any:
    """Issue a request and return its unwrapped payload, mapping httpx failures to ``ApiError``."""
    try:
        response = client.request(method, url, **kwargs)
    except httpx.TransportError as exc:
        raise ApiError(NETWORK_ERROR_MESSAGE, is_network_error=True) from exc
    except httpx.HTTPError as exc:
        raise ApiError(f"Request to {url} failed: {exc}") from exc
    return handle_response(response)
