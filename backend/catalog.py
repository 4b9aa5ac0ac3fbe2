"""Upstream client lifecycle and FastAPI dependencies."""

import logging

from fastapi import FastAPI, HTTPException, Request

from backend.config import Settings
from backend.services.rawg_client import RawgClient
from backend.services.youtube_client import YouTubeClient

logger = logging.getLogger(__name__)


async def init_catalog(app: FastAPI, settings: Settings) -> None:
    """Build the upstream clients from settings and attach them to the app."""
    app.state.youtube_client = YouTubeClient.from_settings(settings)
    if not settings.youtube_api_key:
        logger.warning("GAMESCOPE_YOUTUBE_API_KEY is not set. Trailer search returns no videos.")

    if not settings.rawg_configured:
        logger.warning(
            "GAMESCOPE_RAWG_API_KEY is not set. Catalog endpoints will "
            "answer 503 until it is configured."
        )
        app.state.rawg_client = None
        return
    app.state.rawg_client = RawgClient.from_settings(settings)


async def close_catalog(app: FastAPI) -> None:
    for name in ("rawg_client", "youtube_client"):
        client = getattr(app.state, name, None)
        if client is not None:
            await client.aclose()
            setattr(app.state, name, None)


async def get_rawg_client(request: Request) -> RawgClient:
    """FastAPI dependency returning the app's catalog client."""
    client = getattr(request.app.state, "rawg_client", None)
    if client is None:
        raise HTTPException(
            status_code=503,
            detail={"error": "Game catalog is not configured", "code": "NOT_CONFIGURED"},
        )
    return client


async def get_youtube_client(request: Request) -> YouTubeClient:
    client = getattr(request.app.state, "youtube_client", None)
    if client is None:
        raise HTTPException(
            status_code=503,
            detail={"error": "Trailer search is not available", "code": "NOT_CONFIGURED"},
        )
    return client
