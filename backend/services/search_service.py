"""Game search: query variants fanned out to the catalog, merged and ranked.

Flow for one request:
  1. Enhance the raw query. Nothing left -> trending games, unranked.
  2. Build up to 3 search variants (4 when filters are set).
  3. Fetch every variant concurrently; failures count as zero results.
  4. Merge by game id in variant order (first occurrence wins).
  5. Rank the merged pool against the raw query and paginate it.
  6. Empty pool -> one direct search with the sanitized query, unranked.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from backend.errors import AllVariantsFailed, InvalidInput, SearchFailed, UpstreamUnavailable
from backend.models.game import GameRecord
from backend.models.search import RankedPage, SearchFilters
from backend.services.query_enhancer import (
    create_search_variants,
    enhance_search_query,
    sanitize_search_query,
)
from backend.services.ranker import paginate, rank_search_results

logger = logging.getLogger(__name__)

TRENDING_ORDERING = "-rating,-released"
MAX_VARIANTS = 3
MAX_VARIANTS_WITH_FILTERS = 4
CANDIDATE_PAGE_SIZE = 40


class CatalogClient(Protocol):
    async def fetch(self, endpoint: str, params: dict | None = None) -> dict: ...


@dataclass
class FanOutResult:
    candidates: list[GameRecord] = field(default_factory=list)
    best_results: list[GameRecord] = field(default_factory=list)
    best_variant: str | None = None
    variants_tried: int = 0
    variants_failed: int = 0


@dataclass
class SearchOutcome:
    """A search result page plus how it was produced."""

    page: RankedPage
    strategy: str  # trending | enhanced | fallback
    enhanced_query: str = ""


def _parse_records(payload) -> list[GameRecord]:
    if not isinstance(payload, dict):
        logger.warning("Catalog returned a non-object body: %r", type(payload).__name__)
        return []
    records = []
    for raw in payload.get("results") or []:
        try:
            records.append(GameRecord.model_validate(raw))
        except ValidationError:
            logger.debug("Skipping malformed catalog record: %r", raw)
    return records


def _relative_page(payload, page: int, page_size: int) -> RankedPage:
    """Wrap an upstream page, replacing its absolute (keyed) cursors."""
    records = _parse_records(payload)
    if not isinstance(payload, dict):
        payload = {}
    return RankedPage(
        count=payload.get("count") or len(records),
        next=f"?page={page + 1}" if payload.get("next") else None,
        previous=f"?page={page - 1}" if payload.get("previous") and page > 1 else None,
        results=[record.to_payload() for record in records],
    )


def _coerce_filters(filters: SearchFilters | dict | None) -> SearchFilters:
    if filters is None:
        return SearchFilters()
    if isinstance(filters, SearchFilters):
        return filters
    try:
        return SearchFilters.model_validate(filters)
    except ValidationError as e:
        logger.debug("Rejected search filters %r: %s", filters, e.errors())
        raise InvalidInput("Invalid search filters") from e


async def _fetch_variant(
    client: CatalogClient, variant: str, params: dict
) -> list[GameRecord] | None:
    """Fetch one variant. Returns None when the upstream call failed."""
    try:
        data = await client.fetch("games", {"search": variant, **params})
    except UpstreamUnavailable as e:
        logger.warning("Search variant %r failed: %s", variant, e)
        return None
    return _parse_records(data)


async def fan_out(
    client: CatalogClient,
    variants: list[str],
    filters: SearchFilters,
    page_size: int,
) -> FanOutResult:
    """Search the first few variants and merge their results by game id.

    Raises AllVariantsFailed when no variant produced a single candidate.
    """
    limit = MAX_VARIANTS_WITH_FILTERS if filters.has_filters else MAX_VARIANTS
    selected = variants[:limit]

    params = {
        "page": 1,
        "page_size": CANDIDATE_PAGE_SIZE if filters.has_filters else min(page_size * 2, CANDIDATE_PAGE_SIZE),
        **filters.facet_params(),
    }

    responses = await asyncio.gather(
        *(_fetch_variant(client, variant, params) for variant in selected)
    )

    result = FanOutResult(variants_tried=len(selected))
    seen_ids: set[int] = set()
    # gather() preserves argument order, so merging is by variant index
    for variant, records in zip(selected, responses):
        if records is None:
            result.variants_failed += 1
            continue
        for record in records:
            if record.id not in seen_ids:
                seen_ids.add(record.id)
                result.candidates.append(record)
        if len(records) > len(result.best_results):
            result.best_results = records
            result.best_variant = variant

    if not result.candidates:
        raise AllVariantsFailed(selected, result.variants_failed)

    logger.info(
        "Fan-out over %d variant(s): %d candidates, %d failed, best variant %r",
        result.variants_tried, len(result.candidates),
        result.variants_failed, result.best_variant,
    )
    return result


async def fetch_trending(
    client: CatalogClient, filters: SearchFilters, page: int, page_size: int
) -> RankedPage:
    params = {
        "ordering": TRENDING_ORDERING,
        "page": page,
        "page_size": page_size,
        **filters.facet_params(),
    }
    try:
        data = await client.fetch("games", params)
    except UpstreamUnavailable as e:
        raise SearchFailed("Failed to fetch trending games") from e
    return _relative_page(data, page, page_size)


async def fetch_direct(
    client: CatalogClient,
    raw_query: str,
    filters: SearchFilters,
    page: int,
    page_size: int,
) -> RankedPage:
    """Single unranked search with the sanitized query and every filter."""
    params = {
        "search": sanitize_search_query(raw_query),
        "page": page,
        "page_size": page_size,
        **filters.facet_params(),
    }
    if filters.ordering:
        params["ordering"] = filters.ordering
    try:
        data = await client.fetch("games", params)
    except UpstreamUnavailable as e:
        raise SearchFailed("Failed to search games") from e
    return _relative_page(data, page, page_size)


async def run_search(
    client: CatalogClient,
    raw_query: str,
    filters: SearchFilters | dict | None = None,
    page: int = 1,
    page_size: int = 20,
    current_year: int | None = None,
) -> SearchOutcome:
    """Run a full search and report which strategy produced the page."""
    if page < 1 or page_size < 1:
        raise InvalidInput("page and page_size must be positive")
    filters = _coerce_filters(filters)

    enhanced = enhance_search_query(raw_query)
    if not enhanced:
        logger.info("Empty query after enhancement, returning trending games")
        trending = await fetch_trending(client, filters, page, page_size)
        return SearchOutcome(page=trending, strategy="trending")

    variants = create_search_variants(raw_query, filters.has_filters)
    try:
        fanned = await fan_out(client, variants, filters, page_size)
    except AllVariantsFailed as e:
        logger.info("%s; falling back to direct search for %r", e, raw_query)
        direct = await fetch_direct(client, raw_query, filters, page, page_size)
        return SearchOutcome(page=direct, strategy="fallback", enhanced_query=enhanced)

    ranked = rank_search_results(fanned.candidates, raw_query, current_year=current_year)
    return SearchOutcome(
        page=paginate(ranked, page, page_size),
        strategy="enhanced",
        enhanced_query=enhanced,
    )


async def search_games(
    client: CatalogClient,
    raw_query: str,
    filters: SearchFilters | dict | None = None,
    page: int = 1,
    page_size: int = 20,
    current_year: int | None = None,
) -> RankedPage:
    """Search the catalog for ``raw_query`` and return one ranked page.

    Raises InvalidInput for a non-string query or malformed filters and
    SearchFailed when even the fallback search cannot reach the catalog.
    """
    outcome = await run_search(
        client, raw_query, filters, page, page_size, current_year=current_year
    )
    return outcome.page
