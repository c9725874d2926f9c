# ABOUTME: HTTP client abstraction for metadata source API calls.
# ABOUTME: Fetches JSON objects over HTTPS and raises MetadataFetchError on any failure.

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from bookmeld import __version__

logger = logging.getLogger(__name__)


class MetadataFetchError(Exception):
    """Raised when an HTTP request to a metadata source fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against metadata APIs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class BookmeldHttpClient:
    """JSON-over-HTTPS client for metadata API calls.

    Wraps httpx.Client. Every request is attempted exactly once; callers that
    need retries or bounded latency wrap this client themselves.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": f"bookmeld/{__version__}"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request and return the decoded JSON object.

        Args:
            url: The URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response body.

        Raises:
            MetadataFetchError: On transport errors, non-2xx responses, or a
                body that is not a JSON object.
        """
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

        if not response.is_success:
            raise MetadataFetchError(f"Request failed ({response.status_code}): {url}")

        try:
            data = response.json()
        except ValueError as exc:
            raise MetadataFetchError(f"Invalid JSON from {url}: {exc}") from exc

        if not isinstance(data, dict):
            raise MetadataFetchError(f"Unexpected JSON payload from {url}")
        return data

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "BookmeldHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
