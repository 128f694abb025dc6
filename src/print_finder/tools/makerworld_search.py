"""Makerworld search provider, scraped from the public HTML search page.

Makerworld has no public search API. The adapter parses the server-rendered
result page, so it depends on the site's current markup: when the card or
field selectors in :mod:`print_finder.consts` stop matching, this returns an
empty or partial list rather than raising.
"""

from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from print_finder.config import settings
from print_finder.consts import (
    MAKERWORLD_AUTHOR_SELECTOR,
    MAKERWORLD_CARD_SELECTOR,
    MAKERWORLD_IMAGE_ATTR,
    MAKERWORLD_IMAGE_SELECTOR,
    MAKERWORLD_TITLE_SELECTOR,
)
from print_finder.tools._http_utils import fetch_text, result_limit
from print_finder.types.search import SearchResult, SearchSource
from print_finder.utils.logging import setup_logger

logger = setup_logger(__name__)


async def makerworld_search(
    query: str,
    num_results: int | None = None,
    search_url: str | None = None,
    base_url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[SearchResult]:
    """Search Makerworld by scraping its search results page.

    Args:
        query: Search term, sent as the ``keyword`` query parameter
        num_results: Number of cards kept. If None, uses
            settings.max_results_per_source. Never more than 15
        search_url: Search page URL. If None, uses settings.makerworld_search_url
        base_url: Origin for resolving relative links. If None, uses settings.makerworld_base_url
        client: Shared AsyncClient. If None, a client is opened for this call

    Returns:
        List of SearchResult models tagged with SearchSource.MAKERWORLD

    Raises:
        httpx.HTTPError: For network and HTTP status errors
    """
    num_results = result_limit(num_results)
    search_url = search_url or settings.makerworld_search_url
    base_url = base_url or settings.makerworld_base_url

    logger.info(f"Fetching search page from Makerworld: {query}")
    html = await fetch_text(
        search_url,
        client=client,
        params={"keyword": query},
        headers={"User-Agent": settings.user_agent},
    )

    results = parse_search_page(html, base_url)[:num_results]

    logger.info(
        f"Makerworld search completed: {len(results)} valid results",
        extra={"query": query},
    )

    return results


def parse_search_page(html: str, base_url: str) -> list[SearchResult]:
    """Extract model cards from a Makerworld search page.

    Cards without a title, link or lazy-loaded image are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    cards = soup.select(MAKERWORLD_CARD_SELECTOR)
    parsed_results = []

    for i, card in enumerate(cards, start=1):
        result = _parse_card(card, base_url)
        if result is None:
            logger.debug(f"Skipping incomplete Makerworld card at position {i}")
            continue
        parsed_results.append(result)

    if not cards:
        logger.warning(
            "No Makerworld result cards found; the page markup may have changed",
            extra={"selector": MAKERWORLD_CARD_SELECTOR},
        )

    return parsed_results


def _parse_card(card: Tag, base_url: str) -> SearchResult | None:
    link = card.select_one(MAKERWORLD_TITLE_SELECTOR)
    image = card.select_one(MAKERWORLD_IMAGE_SELECTOR)
    author = card.select_one(MAKERWORLD_AUTHOR_SELECTOR)

    title = link.get_text(strip=True) if link else ""
    href = link.get("href") if link else None
    # Images load on scroll, so the real URL lives in data-src rather than src
    image_url = image.get(MAKERWORLD_IMAGE_ATTR) if image else None

    if not (title and href and image_url):
        return None

    try:
        return SearchResult(
            title=title,
            url=urljoin(base_url, href),
            image_url=image_url,
            source=SearchSource.MAKERWORLD,
            author=author.get_text(strip=True) if author else "",
        )
    except ValidationError:
        return None
