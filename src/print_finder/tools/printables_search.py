"""Printables GraphQL search client."""

import re
from typing import Any

import httpx
from pydantic import ValidationError

from print_finder.config import settings
from print_finder.consts import (
    PRINTABLES_IMAGE_SIZE,
    PRINTABLES_MODEL_URL,
    PRINTABLES_SEARCH_QUERY,
)
from print_finder.tools._http_utils import (
    SourceResponseError,
    dig,
    fetch_json,
    pluck,
    result_limit,
)
from print_finder.types.search import SearchResult, SearchSource
from print_finder.utils.logging import setup_logger

logger = setup_logger(__name__)

_TRAILING_SIZE_SEGMENT = re.compile(r"/\d+$")


def rewrite_image_size(image_url: str, size: int = PRINTABLES_IMAGE_SIZE) -> str:
    """Point a Printables image URL at the ``size`` px rendition.

    Only a trailing ``/<digits>`` path segment is rewritten, e.g.
    ``.../image/12345`` becomes ``.../image/256``. Anything else is returned as is.
    """
    return _TRAILING_SIZE_SEGMENT.sub(f"/{size}", image_url)


async def printables_search(
    query: str,
    num_results: int | None = None,
    api_url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[SearchResult]:
    """Search Printables models through its GraphQL endpoint.

    Args:
        query: Search term
        num_results: Hit limit sent to the API. If None, uses
            settings.max_results_per_source. Never more than 15
        api_url: GraphQL endpoint. If None, uses settings.printables_api_url
        client: Shared AsyncClient. If None, a client is opened for this call

    Returns:
        List of SearchResult models tagged with SearchSource.PRINTABLES

    Raises:
        SourceResponseError: If the response lacks ``data.search.hits``
        httpx.HTTPError: For network and HTTP status errors
    """
    num_results = result_limit(num_results)
    api_url = api_url or settings.printables_api_url

    logger.info(f"Fetching search results from Printables: {query}")
    payload = await fetch_json(
        "POST",
        api_url,
        client=client,
        json={
            "query": PRINTABLES_SEARCH_QUERY,
            "variables": {"query": query, "limit": num_results},
        },
    )

    if isinstance(payload, dict) and payload.get("errors") and not payload.get("data"):
        messages = "; ".join(str(err.get("message", err)) for err in payload["errors"])
        raise SourceResponseError(f"Printables GraphQL error: {messages}")

    hits = dig(payload, "data", "search", "hits")
    if not isinstance(hits, list):
        raise SourceResponseError("Printables response field data.search.hits is not a list")

    logger.info(
        f"Successfully fetched {len(hits)} hits from Printables",
        extra={"query": query},
    )

    return _parse_results(hits[:num_results])


def _parse_results(hits: list[dict[str, Any]]) -> list[SearchResult]:
    """Map raw Printables hits to SearchResult models, skipping incomplete ones."""
    parsed_results = []

    for i, hit in enumerate(hits, start=1):
        model = pluck(hit, "object")
        if not isinstance(model, dict):
            model = {}
        model_id = model.get("id")
        slug = model.get("slug")
        image_url = pluck(model, "primaryImage", "url")

        try:
            result = SearchResult(
                title=model.get("name") or "",
                url=PRINTABLES_MODEL_URL.format(id=model_id, slug=slug)
                if model_id and slug
                else "",
                image_url=rewrite_image_size(image_url) if image_url else "",
                source=SearchSource.PRINTABLES,
                author=pluck(model, "user", "name", default=""),
            )
            parsed_results.append(result)

        except ValidationError as e:
            logger.warning(
                f"Failed to parse Printables hit at rank {i}",
                extra={"error": str(e), "hit": hit},
            )
            continue

    logger.debug(f"Parsed {len(parsed_results)} valid results out of {len(hits)} total")

    return parsed_results
