"""HTTP transport for the Trello REST API."""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol

import httpx

from .exceptions import (
    TrelloAuthError,
    TrelloDecodeError,
    TrelloNotFoundError,
    TrelloTransportError,
)

logger = logging.getLogger(__name__)


class TransportProtocol(Protocol):
    """Interface for the HTTP primitive resources call into.

    Implementations perform exactly one request per call and return the
    decoded JSON body (None for an empty body). They never retry.
    """

    def request(self, method: str, url: str) -> Any:
        """Send a request and return the decoded JSON response.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            url: Fully built URL, credentials included

        Raises:
            TrelloAuthError: 401/403 response
            TrelloNotFoundError: 404 response or invalid id
            TrelloTransportError: Network failure or other error status
            TrelloDecodeError: Body is not valid JSON
        """
        ...

    def close(self) -> None:
        """Release any underlying connections."""
        ...


class TrelloTransport:
    """httpx-backed transport.

    Logs the method and path of every request. The query string carries the
    credentials and is never logged.
    """

    def __init__(self, timeout: float = 30.0, client: httpx.Client | None = None):
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds (ignored when client is given)
            client: Preconfigured httpx client, e.g. one with a mock transport
        """
        self.timeout = timeout
        # A client passed in stays owned by the caller and is not closed here
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> TrelloTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(self, method: str, url: str) -> Any:
        method = method.upper()
        path = httpx.URL(url).path

        start_time = time.monotonic()
        try:
            response = self._client.request(method, url)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, type(e).__name__)
            raise TrelloTransportError(f"Request failed: {method} {path}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status in (401, 403):
            logger.error("%s %s: %d Unauthorized (%.0fms)", method, path, status, elapsed_ms)
            raise TrelloAuthError(
                f"Authorization rejected for {method} {path}. "
                "Check your API key and token permissions."
            )
        if status == 404 or (status == 400 and "invalid id" in response.text.lower()):
            logger.info("%s %s: %d Not Found (%.0fms)", method, path, status, elapsed_ms)
            raise TrelloNotFoundError(f"Resource not found: {path}")
        if status >= 400:
            logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
            raise TrelloTransportError(f"HTTP {status}: {response.text}", status_code=status)

        logger.info("%s %s: %d (%.0fms)", method, path, status, elapsed_ms)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s: Invalid JSON response", method, path)
            raise TrelloDecodeError(f"Invalid JSON response from {path}: {e}") from e
