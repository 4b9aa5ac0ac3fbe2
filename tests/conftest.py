"""Shared test fixtures for all test modules."""

import asyncio
import os

import pytest

# ── Environment overrides (must be set before importing backend modules) ─────
os.environ["GAMESCOPE_RAWG_API_KEY"] = "pytest-rawg-key"
os.environ["GAMESCOPE_RAWG_BASE_URL"] = "https://rawg.test/api"
os.environ["GAMESCOPE_YOUTUBE_API_KEY"] = ""
os.environ["GAMESCOPE_LOG_LEVEL"] = "DEBUG"

from backend.errors import UpstreamUnavailable  # noqa: E402


def _page(results: list[dict], next_url: str | None = None, previous_url: str | None = None) -> dict:
    return {
        "count": len(results),
        "next": next_url,
        "previous": previous_url,
        "results": results,
    }


class FakeCatalog:
    """In-memory stand-in for RawgClient.

    ``responses`` maps a ``search`` param (None for requests without one)
    to a payload dict, a list of game dicts, or an exception to raise.
    ``delays`` maps a search param to seconds to sleep before answering.
    """

    def __init__(self, responses: dict | None = None, delays: dict | None = None):
        self.responses = responses or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, dict]] = []

    async def fetch(self, endpoint: str, params: dict | None = None) -> dict:
        params = dict(params or {})
        self.calls.append((endpoint, params))
        key = params.get("search")
        if key in self.delays:
            await asyncio.sleep(self.delays[key])

        response = self.responses.get(key, [])
        if isinstance(response, Exception):
            raise response
        if isinstance(response, list):
            return _page(response)
        return response

    @property
    def searches(self) -> list[str]:
        return [params.get("search") for _, params in self.calls]


@pytest.fixture
def fake_catalog():
    """Return the FakeCatalog class so tests can build their own."""
    return FakeCatalog


@pytest.fixture
def game():
    """Return a factory for catalog game dicts."""
    def make_game(game_id: int, name: str, **extra) -> dict:
        return {"id": game_id, "name": name, **extra}
    return make_game


@pytest.fixture
def upstream_error():
    """Return a factory for UpstreamUnavailable errors."""
    def make_error(status_code: int = 502) -> UpstreamUnavailable:
        return UpstreamUnavailable("Failed to fetch data from RAWG API", status_code=status_code)
    return make_error


@pytest.fixture
def page_payload():
    return _page
