"""Thingiverse search API client."""

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from print_finder.config import settings
from print_finder.tools._http_utils import (
    SourceConfigurationError,
    SourceResponseError,
    fetch_json,
    pluck,
    result_limit,
)
from print_finder.types.search import SearchResult, SearchSource
from print_finder.utils.logging import setup_logger

logger = setup_logger(__name__)


async def thingiverse_search(
    query: str,
    num_results: int | None = None,
    token: str | None = None,
    api_url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[SearchResult]:
    """Search Thingiverse things with an app access token.

    Args:
        query: Search term, sent URL-encoded as a path segment
        num_results: Number of hits kept. If None, uses
            settings.max_results_per_source. Never more than 15
        token: Access token. If None, uses settings.thingiverse_token
        api_url: Search endpoint. If None, uses settings.thingiverse_api_url
        client: Shared AsyncClient. If None, a client is opened for this call

    Returns:
        List of SearchResult models tagged with SearchSource.THINGIVERSE

    Raises:
        SourceConfigurationError: If no access token is configured
        SourceAuthError: If Thingiverse rejects the token
        SourceResponseError: If the response has no ``hits`` list
        httpx.HTTPError: For network and other HTTP status errors
    """
    num_results = result_limit(num_results)
    token = token or settings.thingiverse_token
    api_url = api_url or settings.thingiverse_api_url

    if not token:
        raise SourceConfigurationError(
            "Thingiverse token not configured. Set THINGIVERSE_TOKEN in .env file"
        )

    url = f"{api_url.rstrip('/')}/{quote(query, safe='')}"

    logger.info(f"Fetching search results from Thingiverse: {query}")
    payload = await fetch_json("GET", url, client=client, params={"access_token": token})

    hits = payload.get("hits") if isinstance(payload, dict) else None
    if not isinstance(hits, list):
        raise SourceResponseError("Thingiverse response has no hits list")

    logger.info(
        f"Successfully fetched {len(hits)} hits from Thingiverse",
        extra={"query": query},
    )

    return _parse_results(hits[:num_results])


def _parse_results(hits: list[dict[str, Any]]) -> list[SearchResult]:
    """Map raw Thingiverse hits to SearchResult models, skipping incomplete ones."""
    parsed_results = []

    for i, hit in enumerate(hits, start=1):
        if not isinstance(hit, dict):
            logger.warning(f"Skipping non-object Thingiverse hit at rank {i}")
            continue

        try:
            result = SearchResult(
                title=hit.get("name") or "",
                url=hit.get("public_url") or "",
                image_url=hit.get("thumbnail") or "",
                source=SearchSource.THINGIVERSE,
                author=pluck(hit, "creator", "name", default=""),
            )
            parsed_results.append(result)

        except ValidationError as e:
            logger.warning(
                f"Failed to parse Thingiverse hit at rank {i}",
                extra={"error": str(e), "hit": hit},
            )
            continue

    return parsed_results
