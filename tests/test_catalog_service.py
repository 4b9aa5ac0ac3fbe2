"""Tests for trending, details and screenshot lookups."""

from datetime import date

import pytest

from backend.errors import GameNotFound, InvalidInput, UpstreamUnavailable
from backend.services import catalog_service


@pytest.mark.asyncio
async def test_trending_window(fake_catalog):
    catalog = fake_catalog()
    await catalog_service.get_trending_games(
        catalog, page=3, page_size=12, window_days=30, today=date(2026, 3, 15)
    )
    endpoint, params = catalog.calls[0]
    assert endpoint == "games"
    assert params == {
        "dates": "2026-02-13,2026-03-15",
        "ordering": "-rating",
        "page": 3,
        "page_size": 12,
    }


@pytest.mark.asyncio
async def test_details_rejects_bad_id(fake_catalog):
    with pytest.raises(InvalidInput) as exc_info:
        await catalog_service.get_game_details(fake_catalog(), "0")
    assert exc_info.value.code == "INVALID_ID"


@pytest.mark.asyncio
async def test_details_not_found(fake_catalog, upstream_error):
    catalog = fake_catalog({None: upstream_error(404)})
    with pytest.raises(GameNotFound):
        await catalog_service.get_game_details(catalog, "42")


@pytest.mark.asyncio
async def test_details_other_errors_propagate(fake_catalog, upstream_error):
    catalog = fake_catalog({None: upstream_error(502)})
    with pytest.raises(UpstreamUnavailable):
        await catalog_service.get_game_details(catalog, "42")


@pytest.mark.asyncio
async def test_screenshots_not_found(fake_catalog, upstream_error):
    catalog = fake_catalog({None: upstream_error(404)})
    with pytest.raises(GameNotFound):
        await catalog_service.get_game_screenshots(catalog, "42")


@pytest.mark.asyncio
async def test_reviews_request(fake_catalog):
    catalog = fake_catalog({None: {"count": 0, "results": []}})
    data = await catalog_service.get_game_reviews(catalog, "3498", page=2, page_size=5)
    assert data == {"count": 0, "results": []}
    assert catalog.calls == [("games/3498/reviews", {"page": 2, "page_size": 5})]


@pytest.mark.asyncio
async def test_reviews_reject_bad_id(fake_catalog):
    catalog = fake_catalog()
    with pytest.raises(InvalidInput) as exc_info:
        await catalog_service.get_game_reviews(catalog, "abc")
    assert exc_info.value.code == "INVALID_GAME_ID"
    assert catalog.calls == []
