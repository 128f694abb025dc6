"""Fan-out search across every source, merged into one shuffled list.

Each source adapter runs concurrently against the same term. The aggregator
waits for all of them to settle; a source that raises or returns something
other than a list is logged and left out, so one failing site never hides the
results of the others.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable, Iterable, Mapping

from print_finder.tools import makerworld_search, printables_search, thingiverse_search
from print_finder.tools._http_utils import describe_error, result_limit
from print_finder.types.search import SearchResult, SearchSource
from print_finder.utils.logging import setup_logger

logger = setup_logger(__name__)

SourceAdapter = Callable[[str], Awaitable[list[SearchResult]]]

SOURCE_ADAPTERS: dict[SearchSource, SourceAdapter] = {
    SearchSource.PRINTABLES: printables_search,
    SearchSource.THINGIVERSE: thingiverse_search,
    SearchSource.MAKERWORLD: makerworld_search,
}


def select_adapters(
    sources: Iterable[SearchSource | str] | None = None,
) -> dict[SearchSource, SourceAdapter]:
    """Return the registered adapters for ``sources`` (all of them if None).

    Raises:
        ValueError: If a name does not match any SearchSource
    """
    if sources is None:
        return dict(SOURCE_ADAPTERS)

    selected = {}
    for source in sources:
        key = SearchSource(source)
        selected[key] = SOURCE_ADAPTERS[key]
    return selected


def cap_results(results: list[SearchResult], limit: int | None = None) -> list[SearchResult]:
    """Keep at most ``limit`` records, never more than MAX_RESULTS_PER_SOURCE."""
    limit = result_limit(limit)
    return results[:limit]


def shuffle_results(
    results: list[SearchResult], rng: random.Random | None = None
) -> list[SearchResult]:
    """Return a uniformly shuffled copy so no source systematically comes first."""
    shuffled = list(results)
    (rng or random).shuffle(shuffled)
    return shuffled


async def aggregate(
    query: str,
    adapters: Mapping[SearchSource, SourceAdapter] | None = None,
    rng: random.Random | None = None,
) -> list[SearchResult]:
    """Search every source concurrently and merge the successful results.

    Args:
        query: Search term passed unchanged to each adapter
        adapters: Source -> adapter mapping. If None, uses SOURCE_ADAPTERS
        rng: Random generator for the final shuffle. If None, uses the module RNG

    Returns:
        Shuffled list of results from every source that succeeded.
        Empty when all sources failed or found nothing.
    """
    adapters = SOURCE_ADAPTERS if adapters is None else adapters
    sources = list(adapters)

    logger.info(
        f"Starting aggregated search for query: {query}",
        extra={"sources": ",".join(s.value for s in sources)},
    )

    outcomes = await asyncio.gather(
        *(adapters[source](query) for source in sources),
        return_exceptions=True,
    )

    merged: list[SearchResult] = []
    for source, outcome in zip(sources, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            # CancelledError and friends are not per-source failures
            if not isinstance(outcome, Exception):
                raise outcome
            logger.warning(
                f"Source {source.value} failed: {type(outcome).__name__}",
                extra={"source": source.value, "error": describe_error(outcome)},
            )
            continue

        if not isinstance(outcome, list):
            logger.warning(
                f"Source {source.value} returned {type(outcome).__name__}, expected list",
                extra={"source": source.value},
            )
            continue

        kept = cap_results(outcome)
        logger.debug(f"Source {source.value} contributed {len(kept)} results")
        merged.extend(kept)

    logger.info(
        f"Aggregated search completed: {len(merged)} results",
        extra={"query": query},
    )

    return shuffle_results(merged, rng)
