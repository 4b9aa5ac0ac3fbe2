"""Async client for the RAWG games catalog API.

The API key never leaves the server: it is attached here to every request
and callers only ever see the decoded JSON payload.
"""

import logging
import re

import httpx

from backend.config import Settings
from backend.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

RAWG_API = "https://api.rawg.io/api"

_STATUS_MESSAGES = {
    429: "API rate limit exceeded. Please try again later.",
    403: "API access forbidden. Service temporarily unavailable.",
    401: "API authentication failed. Service temporarily unavailable.",
}

_GAME_ID_RE = re.compile(r"^\d+$")


def validate_game_id(game_id: str) -> bool:
    """A game id is a positive integer written in plain digits."""
    return bool(_GAME_ID_RE.match(game_id)) and int(game_id) > 0


class RawgClient:
    """Thin wrapper around ``httpx.AsyncClient`` bound to one API key."""

    def __init__(
        self,
        api_key: str,
        base_url: str = RAWG_API,
        timeout: float = 15.0,
        user_agent: str = "GameScope-Hub/1.0",
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ValueError("RAWG API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "RawgClient":
        return cls(
            api_key=settings.rawg_api_key,
            base_url=settings.rawg_base_url,
            timeout=settings.rawg_timeout,
            user_agent=settings.user_agent,
        )

    async def fetch(self, endpoint: str, params: dict | None = None) -> dict:
        """GET ``{base_url}/{endpoint}`` and return the decoded JSON body.

        None-valued params are dropped. Raises UpstreamUnavailable on
        transport errors, non-2xx statuses and undecodable bodies.
        """
        query = {"key": self.api_key}
        for key, value in (params or {}).items():
            if value is not None:
                query[key] = str(value)

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            resp = await self._http.get(url, params=query, headers=self._headers)
        except httpx.HTTPError as e:
            logger.error("RAWG API request to %s failed: %s", endpoint, e)
            raise UpstreamUnavailable("Failed to fetch data from RAWG API") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            logger.error(
                "RAWG API error for %s: %d %s",
                endpoint, resp.status_code, resp.reason_phrase,
            )
            message = _STATUS_MESSAGES.get(
                resp.status_code, "Failed to fetch data from RAWG API"
            )
            raise UpstreamUnavailable(message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            logger.error("RAWG API returned invalid JSON for %s: %s", endpoint, e)
            raise UpstreamUnavailable(
                "Failed to fetch data from RAWG API", status_code=resp.status_code
            ) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "RawgClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
