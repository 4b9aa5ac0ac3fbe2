"""Trailer lookup through YouTube video search."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from backend.catalog import get_youtube_client
from backend.services.query_enhancer import sanitize_search_query
from backend.services.youtube_client import YouTubeClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/youtube", tags=["youtube"])


@router.get("/trailer")
async def game_trailer(
    response: Response,
    game: str = "",
    max_results: int = 3,
    client: YouTubeClient = Depends(get_youtube_client),
):
    """Trailer and gameplay videos for a game title.

    - game: game name as shown to the user
    - max_results: number of videos (1-10)
    """
    name = sanitize_search_query(game)
    if not name:
        raise HTTPException(
            status_code=400,
            detail={"error": "Game name is required", "code": "MISSING_GAME_NAME"},
        )
    max_results = max(1, min(10, max_results))

    try:
        data = await client.search_videos(f"{name} game trailer gameplay", max_results)
    except Exception as e:
        logger.exception("Trailer lookup failed for %r", name)
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to fetch trailer", "code": "TRAILER_FETCH_FAILED", "items": []},
        ) from e

    response.headers["Cache-Control"] = "public, max-age=1800, stale-while-revalidate=3600"
    return data
