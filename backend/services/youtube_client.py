"""Async client for YouTube Data API video search.

Trailers are a nice-to-have on the game page, so this client never raises
for upstream trouble: a missing key or a failed call yields no items.
"""

import logging

import httpx

from backend.config import Settings

logger = logging.getLogger(__name__)

YOUTUBE_API = "https://www.googleapis.com/youtube/v3"


def _empty() -> dict:
    return {"items": []}


class YouTubeClient:
    def __init__(
        self,
        api_key: str = "",
        base_url: str = YOUTUBE_API,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "YouTubeClient":
        return cls(
            api_key=settings.youtube_api_key,
            base_url=settings.youtube_base_url,
            timeout=settings.youtube_timeout,
        )

    async def search_videos(self, query: str, max_results: int = 5) -> dict:
        """Search videos matching ``query``; returns the API body or no items."""
        if not self.api_key:
            logger.warning("YouTube API key not configured, returning no videos")
            return _empty()

        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": str(max_results),
            "key": self.api_key,
        }
        try:
            resp = await self._http.get(f"{self.base_url}/search", params=params)
        except httpx.HTTPError as e:
            logger.error("YouTube search for %r failed: %s", query, e)
            return _empty()

        if resp.status_code < 200 or resp.status_code >= 300:
            logger.error("YouTube API error: %d %s", resp.status_code, resp.reason_phrase)
            return _empty()

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("YouTube API returned invalid JSON: %s", e)
            return _empty()
        if not isinstance(data, dict):
            return _empty()
        return data

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
