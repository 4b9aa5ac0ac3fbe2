"""Tests for search result scoring, ranking and pagination.

The current year is pinned so franchise-year and recency bonuses are
reproducible.
"""

import pytest

from backend.models.game import GameRecord
from backend.services.ranker import paginate, rank_search_results, score_game

YEAR = 2026


def _games(*names: str) -> list[GameRecord]:
    return [GameRecord(id=i + 1, name=name) for i, name in enumerate(names)]


def _names(games: list[GameRecord]) -> list[str]:
    return [g.name for g in games]


# ── Scoring ──────────────────────────────────────────────────────────────────


class TestScoring:
    def test_sports_numbering_drift(self):
        """fifa 24: FIFA 23 beats FIFA Mobile, both beat EA Sports FC 24."""
        fc24, fifa23, mobile = _games("EA Sports FC 24", "FIFA 23", "FIFA Mobile")
        # franchise 900 + close number 200 + word "fifa" 50 + prefix 25
        assert score_game(fifa23, "fifa 24", YEAR) == 1175
        # franchise 900 + word "fifa" 75
        assert score_game(mobile, "fifa 24", YEAR) == 975
        # shared number 400 + word "24" 50
        assert score_game(fc24, "fifa 24", YEAR) == 450

    def test_exact_match_dominates(self):
        exact, partial = _games("Hades", "Hades II")
        assert score_game(exact, "hades", YEAR) > score_game(partial, "hades", YEAR)
        # step-wise exact 1000 + 150 + 100, generic exact 1000 + 500 + 200, word 75
        assert score_game(exact, "hades", YEAR) == 3025

    def test_franchise_without_year_prefers_newest(self):
        newer, older = _games("Call of Duty 2025", "Call of Duty 2024")
        assert score_game(newer, "call of duty", YEAR) - score_game(older, "call of duty", YEAR) == 30

    def test_franchise_with_year_matches_short_form(self):
        match, other = _games("FIFA 23", "FIFA 22")
        # franchise 900 + short year 200 + "20YY" vs "YY" 300 + word 75
        assert score_game(match, "fifa 2023", YEAR) == 1475
        assert score_game(other, "fifa 2023", YEAR) == 975

    def test_franchise_with_year_exact(self):
        (game,) = _games("Battlefield 2042")
        # franchise 900 + year 300 + shared number 400
        # + exact 1000 + 150 + 100 (series pass)
        # + exact 1000 + prefix 500 + contains 200 + words 75 + 50 (generic pass)
        assert score_game(game, "battlefield 2042", YEAR) == 4675

    def test_scores_against_raw_query_only(self):
        (gta,) = _games("Grand Theft Auto V")
        # franchise 900 only: the abbreviation shares no text with the name
        assert score_game(gta, "gta v", YEAR) == 900
        assert score_game(gta, "GTA V", YEAR) == 900

    def test_abbreviation_in_raw_query_hits_franchise(self):
        gta, other = _games("Grand Theft Auto V", "Saints Row")
        assert score_game(gta, "gta", YEAR) >= 900
        assert score_game(other, "gta", YEAR) == 0

    def test_popularity_is_capped(self):
        plain = GameRecord(id=1, name="Celeste")
        popular = GameRecord(id=2, name="Celeste", rating=4.5, ratings_count=1000)
        huge = GameRecord(id=3, name="Celeste", rating=9.0, ratings_count=10**30)
        base = score_game(plain, "celeste", YEAR)
        assert score_game(popular, "celeste", YEAR) - base == pytest.approx(48)
        assert score_game(huge, "celeste", YEAR) - base == pytest.approx(70)

    def test_zero_ratings_count_adds_nothing(self):
        plain = GameRecord(id=1, name="Celeste")
        zero = GameRecord(id=2, name="Celeste", ratings_count=0)
        assert score_game(zero, "celeste", YEAR) == score_game(plain, "celeste", YEAR)

    @pytest.mark.parametrize("released,bonus", [
        ("2026-02-01", 10),
        ("2024-05-01", 6),
        ("2021-11-11", 0),
        ("2015-01-01", 0),
        ("not-a-date", 0),
    ])
    def test_recency_bonus(self, released, bonus):
        plain = GameRecord(id=1, name="Celeste")
        dated = GameRecord(id=2, name="Celeste", released=released)
        assert score_game(dated, "celeste", YEAR) - score_game(plain, "celeste", YEAR) == bonus


# ── Ranking ──────────────────────────────────────────────────────────────────


class TestRanking:
    def test_fifa_scenario_order(self):
        ranked = rank_search_results(
            _games("EA Sports FC 24", "FIFA 23", "FIFA Mobile"), "fifa 24", current_year=YEAR
        )
        assert _names(ranked) == ["FIFA 23", "FIFA Mobile", "EA Sports FC 24"]

    def test_ties_keep_discovery_order(self):
        games = [GameRecord(id=i, name="Tetris") for i in (7, 3, 9)]
        ranked = rank_search_results(games, "tetris", current_year=YEAR)
        assert [g.id for g in ranked] == [7, 3, 9]

    def test_ranking_is_deterministic(self):
        games = _games("Doom", "Doom Eternal", "Doom 64", "Quake")
        first = rank_search_results(games, "doom 64", current_year=YEAR)
        second = rank_search_results(games, "doom 64", current_year=YEAR)
        assert [g.id for g in first] == [g.id for g in second]
        assert first[0].name == "Doom 64"

    def test_empty_query_leaves_order(self):
        games = _games("B", "A")
        assert _names(rank_search_results(games, "", current_year=YEAR)) == ["B", "A"]

    def test_defaults_to_wall_clock_year(self):
        games = _games("Portal", "Portal 2")
        assert _names(rank_search_results(games, "portal")) == ["Portal", "Portal 2"]


# ── Pagination ───────────────────────────────────────────────────────────────


class TestPagination:
    def test_middle_page(self):
        ranked = [GameRecord(id=i, name=f"Game {i}") for i in range(1, 46)]
        page = paginate(ranked, page=2, page_size=20)
        assert [g["id"] for g in page.results] == list(range(21, 41))
        assert page.count == 45
        assert page.next == "?page=3"
        assert page.previous == "?page=1"

    def test_last_partial_page(self):
        ranked = [GameRecord(id=i, name=f"Game {i}") for i in range(1, 46)]
        page = paginate(ranked, page=3, page_size=20)
        assert len(page.results) == 5
        assert page.next is None
        assert page.previous == "?page=2"

    def test_first_page_has_no_previous(self):
        page = paginate(_games("A", "B"), page=1, page_size=20)
        assert page.previous is None
        assert page.next is None

    def test_results_pass_through_extra_fields(self):
        record = GameRecord.model_validate({
            "id": 1,
            "name": "Hollow Knight",
            "background_image": "https://media.rawg.io/hk.jpg",
            "platforms": [{"platform": {"id": 4}}],
        })
        page = paginate([record], page=1, page_size=20)
        assert page.results == [{
            "id": 1,
            "name": "Hollow Knight",
            "background_image": "https://media.rawg.io/hk.jpg",
            "platforms": [{"platform": {"id": 4}}],
        }]
        assert "rating" not in page.results[0]
