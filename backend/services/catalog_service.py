"""Catalog browsing: trending games, game details, screenshots and reviews."""

import logging
from datetime import date, timedelta

from backend.errors import GameNotFound, InvalidInput, UpstreamUnavailable
from backend.services.rawg_client import validate_game_id
from backend.services.search_service import CatalogClient

logger = logging.getLogger(__name__)


def _checked_game_id(game_id: str) -> str:
    game_id = str(game_id)
    if not validate_game_id(game_id):
        raise InvalidInput("Invalid game ID", code="INVALID_ID")
    return game_id


async def get_trending_games(
    client: CatalogClient,
    page: int = 1,
    page_size: int = 20,
    window_days: int = 30,
    today: date | None = None,
) -> dict:
    """Highest-rated games released within the last ``window_days`` days."""
    today = today or date.today()
    since = today - timedelta(days=window_days)
    return await client.fetch("games", {
        "dates": f"{since.isoformat()},{today.isoformat()}",
        "ordering": "-rating",
        "page": page,
        "page_size": page_size,
    })


async def get_game_details(client: CatalogClient, game_id: str) -> dict:
    game_id = _checked_game_id(game_id)
    try:
        return await client.fetch(f"games/{game_id}")
    except UpstreamUnavailable as e:
        if e.status_code == 404:
            raise GameNotFound(f"Game {game_id} not found") from e
        raise


async def get_game_screenshots(
    client: CatalogClient, game_id: str, page: int = 1, page_size: int = 20
) -> dict:
    game_id = _checked_game_id(game_id)
    try:
        return await client.fetch(
            f"games/{game_id}/screenshots",
            {"page": page, "page_size": page_size},
        )
    except UpstreamUnavailable as e:
        if e.status_code == 404:
            logger.info("Screenshots requested for unknown game %s", game_id)
            raise GameNotFound(f"Game {game_id} not found") from e
        raise


async def get_game_reviews(
    client: CatalogClient, game_id: str, page: int = 1, page_size: int = 5
) -> dict:
    """One page of user reviews for a game."""
    game_id = str(game_id)
    if not validate_game_id(game_id):
        raise InvalidInput("Invalid game ID provided", code="INVALID_GAME_ID")
    return await client.fetch(
        f"games/{game_id}/reviews",
        {"page": page, "page_size": page_size},
    )
