"""Game catalog routes: search, trending, details, screenshots, reviews."""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Response

from backend.catalog import get_rawg_client
from backend.config import settings
from backend.errors import GameNotFound, InvalidInput, SearchFailed, UpstreamUnavailable
from backend.services import catalog_service
from backend.services.rawg_client import RawgClient
from backend.services.search_service import run_search

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/games", tags=["games"])

MAX_REVIEWS_PAGE_SIZE = 20


def _clamp_page(page: int) -> int:
    return max(1, min(settings.max_page, page))


def _clamp_page_size(page_size: int) -> int:
    return max(1, min(settings.max_page_size, page_size))


def _error(status_code: int, message: str, code: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": message, "code": code})


# ── Static path routes (must come BEFORE /{game_id} to avoid conflicts) ─────

@router.get("/search")
async def search_games(
    response: Response,
    search: str = "",
    page: int = 1,
    page_size: int = settings.default_page_size,
    platforms: str | None = None,
    genres: str | None = None,
    ordering: str | None = None,
    client: RawgClient = Depends(get_rawg_client),
):
    """Search the catalog with query enhancement and relevance ranking.

    - search: free-text query; empty returns trending games
    - platforms/genres: comma-separated catalog ids
    - ordering: catalog ordering, only honored by the fallback search
    - page/page_size: pagination (page_size capped at 40)
    """
    page = _clamp_page(page)
    page_size = _clamp_page_size(page_size)
    filters = {"platforms": platforms, "genres": genres, "ordering": ordering}

    try:
        outcome = await run_search(client, search, filters, page, page_size)
    except InvalidInput as e:
        raise _error(400, str(e), e.code)
    except SearchFailed as e:
        logger.error("Games search failed for %r: %s", search, e.__cause__ or e)
        raise _error(500, "Failed to search games", e.code)

    if outcome.strategy == "trending":
        response.headers["Cache-Control"] = "public, max-age=300, stale-while-revalidate=600"
    else:
        response.headers["Cache-Control"] = "public, max-age=180, stale-while-revalidate=360"
        response.headers["X-Search-Query"] = quote(outcome.enhanced_query, safe=" ")
        response.headers["X-Results-Found"] = str(outcome.page.count)
    response.headers["X-Search-Strategy"] = outcome.strategy

    return outcome.page.model_dump()


@router.get("/trending")
async def trending_games(
    response: Response,
    page: int = 1,
    page_size: int = settings.default_page_size,
    client: RawgClient = Depends(get_rawg_client),
):
    """Top-rated games released in the last few weeks."""
    try:
        data = await catalog_service.get_trending_games(
            client,
            page=max(1, page),
            page_size=_clamp_page_size(page_size),
            window_days=settings.trending_window_days,
        )
    except UpstreamUnavailable as e:
        logger.error("Trending games fetch failed: %s", e)
        raise _error(500, "Failed to fetch trending games", "INTERNAL_ERROR")

    response.headers["Cache-Control"] = "public, max-age=300, stale-while-revalidate=600"
    return data


@router.get("/{game_id}")
async def game_details(
    game_id: str,
    response: Response,
    client: RawgClient = Depends(get_rawg_client),
):
    try:
        data = await catalog_service.get_game_details(client, game_id)
    except InvalidInput as e:
        raise _error(400, str(e), e.code)
    except GameNotFound as e:
        raise _error(404, "Game not found", e.code)
    except UpstreamUnavailable as e:
        logger.error("Game details fetch failed for %s: %s", game_id, e)
        raise _error(500, "Failed to fetch game details", "FETCH_FAILED")

    response.headers["Cache-Control"] = "public, max-age=600, stale-while-revalidate=1200"
    return data


@router.get("/{game_id}/screenshots")
async def game_screenshots(
    game_id: str,
    page: int = 1,
    page_size: int = settings.default_page_size,
    client: RawgClient = Depends(get_rawg_client),
):
    try:
        return await catalog_service.get_game_screenshots(
            client, game_id, page=max(1, page), page_size=_clamp_page_size(page_size)
        )
    except InvalidInput as e:
        raise _error(400, str(e), e.code)
    except GameNotFound as e:
        raise _error(404, "Game not found", e.code)
    except UpstreamUnavailable as e:
        logger.error("Game screenshots fetch failed for %s: %s", game_id, e)
        raise _error(500, "Failed to fetch game screenshots", "INTERNAL_ERROR")


@router.get("/{game_id}/reviews")
async def game_reviews(
    game_id: str,
    response: Response,
    page: int = 1,
    page_size: int = 5,
    client: RawgClient = Depends(get_rawg_client),
):
    """User reviews for a game, 5 per page by default (at most 20)."""
    try:
        data = await catalog_service.get_game_reviews(
            client,
            game_id,
            page=max(1, page),
            page_size=max(1, min(MAX_REVIEWS_PAGE_SIZE, page_size)),
        )
    except InvalidInput as e:
        raise _error(400, str(e), e.code)
    except UpstreamUnavailable as e:
        logger.error("Game reviews fetch failed for %s: %s", game_id, e)
        raise _error(500, "Failed to fetch game reviews", "INTERNAL_ERROR")

    response.headers["Cache-Control"] = "public, max-age=1800, stale-while-revalidate=3600"
    return data
