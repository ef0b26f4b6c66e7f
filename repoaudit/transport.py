"""
HTTP Transport for repoaudit.

Handles authenticated HTTP communication with the registry, pagination,
bounded retry and error handling.
"""

import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import httpx

from repoaudit.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConnectionFailedError,
    DecodeError,
    FetchError,
    NotFoundError,
    ServerError,
    UnexpectedStatusError,
)
from repoaudit.logging import get_logger, log_http_request, log_http_response

logger = get_logger("http")


@dataclass
class RetryConfig:
    """
    Configuration for retrying a failed round trip.

    Every failure is retried the same way: connection errors and any non-2xx
    status alike. Decode errors are never retried.
    """

    max_attempts: int = 3  # Total attempts, including the first
    delay: float = 5.0  # Fixed pause between attempts in seconds

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ConfigurationError("delay must not be negative")


@dataclass(frozen=True)
class PageStyle:
    """How an endpoint family takes and returns its page cursor."""

    start_param: str
    limit_param: str
    next_header: str | None = None
    next_field: str | None = None


# api/v0 endpoints return the next cursor in a response header
API_PAGING = PageStyle("pageStart", "pageSize", next_header="X-Next-Page-Start")
# enzi/v0 endpoints return it in the body
ENZI_PAGING = PageStyle("start", "limit", next_field="nextPageStart")


class HTTPTransport:
    """
    HTTP transport layer with basic auth, paging and retry logic.

    Handles:
    - HTTP Basic authentication on every request
    - Fixed-delay retry of failed round trips
    - Following page cursors until a listing is exhausted
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 30.0,
        verify: bool = True,
        page_size: int = 100,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Registry URL (e.g., "https://dtr.example.com")
            username: Account used to read the registry
            password: Password or access token for that account
            timeout: Request timeout in seconds
            verify: Whether to verify the server's TLS certificate
            page_size: Number of items requested per page
            retry_config: Configuration for retry behavior
        """
        if page_size < 1:
            raise ConfigurationError("page_size must be at least 1")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.page_size = page_size
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.Client(
            base_url=self.base_url,
            auth=httpx.BasicAuth(username, password),
            timeout=timeout,
            verify=verify,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Make a GET request with automatic retry.

        Args:
            path: API path (e.g., "/api/v0/repositories")
            params: Query parameters

        Returns:
            Parsed JSON object

        Raises:
            FetchError: On transport, status or decode errors
        """
        response = self._execute_with_retry(
            lambda: self._client.request("GET", path, params=params), path, params
        )
        return self._decode(response, path)

    def iter_pages(
        self,
        path: str,
        items_key: str,
        params: dict[str, Any] | None = None,
        paging: PageStyle = API_PAGING,
    ) -> Iterator[list[Any]]:
        """
        Yield the item list of every page of a listing endpoint.

        Args:
            path: API path
            items_key: Envelope field holding the page's items
            params: Extra query parameters
            paging: Cursor convention of the endpoint

        Yields:
            The raw items of each page, in order

        Raises:
            FetchError: On transport, status or decode errors
        """
        start = ""
        while True:
            query = dict(params or {})
            query[paging.limit_param] = self.page_size
            if start:
                query[paging.start_param] = start

            response = self._execute_with_retry(
                lambda: self._client.request("GET", path, params=query), path, query
            )
            body = self._decode(response, path)

            if items_key not in body:
                raise DecodeError(f"response from {path} has no '{items_key}' field")
            items = body[items_key]
            if items is None:
                items = []
            if not isinstance(items, list):
                raise DecodeError(f"'{items_key}' in response from {path} is not a list")

            yield items

            next_start = self._next_page_start(response, body, paging)
            if not next_start:
                return
            if next_start == start:
                logger.warning("page cursor for %s did not advance; stopping", path)
                return
            start = next_start

    def _execute_with_retry(
        self,
        request_fn: Callable[[], httpx.Response],
        path: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Execute a request, retrying any failure up to the configured budget.

        Args:
            request_fn: Function that makes the HTTP request
            path: API path, used for logging and error messages
            params: Query parameters, used for logging

        Returns:
            A response with a 2xx status

        Raises:
            FetchError: The error of the final attempt
        """
        url = f"{self.base_url}{path}"
        max_attempts = self.retry_config.max_attempts
        last_error: FetchError | None = None

        for attempt in range(1, max_attempts + 1):
            log_http_request("GET", url, params, attempt)
            started = time.monotonic()
            try:
                response = request_fn()
            except httpx.RequestError as e:
                last_error = ConnectionFailedError(f"error requesting {url}: {e}")
                last_error.__cause__ = e
            else:
                log_http_response(
                    response.status_code, url, (time.monotonic() - started) * 1000
                )
                if 200 <= response.status_code <= 299:
                    return response
                last_error = self._parse_error_response(response, url)

            if attempt < max_attempts:
                logger.warning(
                    "attempt %d/%d for %s failed: %s; retrying in %.1fs",
                    attempt,
                    max_attempts,
                    url,
                    last_error.message,
                    self.retry_config.delay,
                )
                time.sleep(self.retry_config.delay)

        if last_error is not None:
            raise last_error

        raise ConnectionFailedError(f"no request was made to {url}")

    def _decode(self, response: httpx.Response, path: str) -> dict[str, Any]:
        """Parse a JSON object body; malformed bodies are not retried."""
        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON in response from {path}: {e}") from e

        if not isinstance(data, dict):
            raise DecodeError(f"expected a JSON object in response from {path}")
        return data

    def _next_page_start(
        self, response: httpx.Response, body: dict[str, Any], paging: PageStyle
    ) -> str | None:
        if paging.next_header:
            value = response.headers.get(paging.next_header)
        else:
            value = body.get(paging.next_field or "")
        if value is None:
            return None
        return str(value)

    def _parse_error_response(
        self, response: httpx.Response, url: str
    ) -> UnexpectedStatusError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with a non-2xx status
            url: Requested URL

        Returns:
            Appropriate UnexpectedStatusError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        # the registry reports {"errors": [{"code": ..., "message": ...}]}
        errors = data.get("errors") or [{}]
        first = errors[0] if isinstance(errors, list) and isinstance(errors[0], dict) else {}
        code = first.get("code") or "UNEXPECTED_STATUS"
        detail = first.get("message") or f"HTTP {response.status_code}"
        message = f"unexpected status code requesting {url}: {response.status_code} ({detail})"

        status_code = response.status_code

        if status_code == 401:
            return AuthenticationError(code, message, status_code, url)
        elif status_code == 403:
            return AuthorizationError(code, message, status_code, url)
        elif status_code == 404:
            return NotFoundError(code, message, status_code, url)
        elif status_code >= 500:
            return ServerError(code, message, status_code, url)
        else:
            return UnexpectedStatusError(code, message, status_code, url)
