"""Shared HTTP utilities for the source adapters."""

import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from print_finder.config import settings
from print_finder.consts import MAX_RESULTS_PER_SOURCE
from print_finder.utils.logging import setup_logger

logger = setup_logger(__name__)

# Query parameters whose values must never reach the logs
_SECRET_PARAMS = re.compile(r"\b((?:access_token|api_key|token|key)=)[^&\s'\"]+", re.IGNORECASE)


class SourceError(Exception):
    """Base exception for a source adapter that could not produce results."""

    pass


class SourceAuthError(SourceError):
    """The upstream rejected our credentials (typically HTTP 401 or 403)."""

    pass


class SourceConfigurationError(SourceError):
    """A source is missing configuration it needs before any request is sent."""

    pass


class SourceResponseError(SourceError):
    """The upstream answered, but not in the shape the adapter expects."""

    pass


@asynccontextmanager
async def _open_client(
    client: httpx.AsyncClient | None, timeout: int | None
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client, or a short-lived one closed on exit."""
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(timeout=timeout or settings.search_timeout) as owned:
        yield owned


async def send_request(
    method: str,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    params: dict[str, Any] | None = None,
    json: Any = None,
    headers: dict[str, str] | None = None,
    timeout: int | None = None,
    auth_statuses: tuple[int, ...] = (401, 403),
) -> httpx.Response:
    """Send one HTTP request with standardized error handling.

    Args:
        method: HTTP method (GET, POST, ...)
        url: Endpoint URL
        client: Shared AsyncClient. If None, a client is opened for this call only
        params: Query string parameters
        json: JSON request body
        headers: Extra request headers
        timeout: Transport timeout in seconds. If None, uses settings.search_timeout
        auth_statuses: HTTP status codes that indicate rejected credentials

    Returns:
        The successful (2xx) response

    Raises:
        SourceAuthError: If response status code is in auth_statuses
        httpx.TimeoutException: If request times out
        httpx.HTTPError: For other HTTP errors
    """
    try:
        async with _open_client(client, timeout) as http:
            response = await http.request(
                method, url, params=params, json=json, headers=headers
            )

        if response.status_code in auth_statuses:
            raise SourceAuthError(
                f"Upstream rejected credentials (status: {response.status_code})"
            )

        response.raise_for_status()
        return response

    except httpx.TimeoutException:
        logger.error(f"Request timeout for URL: {url}")
        raise
    except httpx.HTTPError as e:
        logger.error(
            "HTTP error during upstream request",
            extra={"url": url, "error": describe_error(e)},
        )
        raise


async def fetch_json(method: str, url: str, **kwargs: Any) -> Any:
    """Send a request and decode the JSON body.

    Raises:
        SourceResponseError: If the body is not valid JSON
    """
    response = await send_request(method, url, **kwargs)
    try:
        return response.json()
    except ValueError as e:
        raise SourceResponseError(f"Response from {url} is not valid JSON") from e


async def fetch_text(url: str, **kwargs: Any) -> str:
    """Send a GET request and return the decoded body text."""
    response = await send_request("GET", url, **kwargs)
    return response.text


def dig(payload: Any, *path: str) -> Any:
    """Walk nested dictionaries along ``path``.

    Raises:
        SourceResponseError: If any step is missing or not a dictionary
    """
    current = payload
    for key in path:
        if not isinstance(current, dict) or current.get(key) is None:
            raise SourceResponseError(f"Missing field in response: {'.'.join(path)}")
        current = current[key]
    return current


def pluck(payload: Any, *path: str, default: Any = None) -> Any:
    """Like :func:`dig`, but return ``default`` instead of raising."""
    try:
        return dig(payload, *path)
    except SourceResponseError:
        return default


def redact_secrets(text: str) -> str:
    """Mask credential query parameters (e.g. ``access_token``) in ``text``."""
    return _SECRET_PARAMS.sub(r"\1***", text)


def describe_error(error: BaseException) -> str:
    """Render an exception for logging with credentials masked.

    httpx status errors embed the full request URL, query string included.
    """
    return redact_secrets(str(error))


def result_limit(requested: int | None = None) -> int:
    """Resolve a per-source result count, never exceeding MAX_RESULTS_PER_SOURCE."""
    return min(requested or settings.max_results_per_source, MAX_RESULTS_PER_SOURCE)
