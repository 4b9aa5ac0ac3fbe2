"""Heuristic relevance ranking for catalog search results.

Scores are additive. Franchise recognition, numbering and year matching,
plain text matching, popularity and recency each contribute independently,
so the same signal may be rewarded by more than one rule. The weights were
tuned by hand against real queries; change them with care.
"""

import logging
import math
import re
from datetime import datetime

from backend.models.game import GameRecord
from backend.models.search import RankedPage

logger = logging.getLogger(__name__)

FRANCHISE_BONUS = 900
EXACT_MATCH_BONUS = 1000

# (pattern the query must match, pattern the game name must match)
SERIES_PATTERNS: list[tuple[re.Pattern, re.Pattern]] = [
    (re.compile(r"\b(ea\s*fc|ea\s*sports?\s*fc|eafc)\b"), re.compile(r"\bea\s*sports?\s*fc\b")),
    (re.compile(r"\b(fifa)\b"), re.compile(r"\bfifa\b")),
    (re.compile(r"\b(cod|call\s*of\s*duty)\b"), re.compile(r"\bcall\s*of\s*duty\b")),
    (re.compile(r"\b(gta|grand\s*theft\s*auto)\b"), re.compile(r"\bgrand\s*theft\s*auto\b")),
    (re.compile(r"\b(ac|assassins?\s*creed)\b"), re.compile(r"\bassassins?\s*creed\b")),
    (re.compile(r"\b(cs|csgo|counter\s*strike)\b"), re.compile(r"\bcounter.*strike\b")),
    (re.compile(r"\b(bf|battlefield)\b"), re.compile(r"\bbattlefield\b")),
    (re.compile(r"\b(nfs|need\s*for\s*speed)\b"), re.compile(r"\bneed\s*for\s*speed\b")),
]

_QUERY_YEAR_RE = re.compile(r"\b(20\d{2}|'\d{2}|2[0-9])\b")
_NUMBER_RE = re.compile(r"\b(\d{2,4})\b")
_LONG_YEAR_RE = re.compile(r"\b20(\d{2})\b")
_SHORT_NUMBER_RE = re.compile(r"\b(\d{2})\b")
_RELEASE_YEAR_RE = re.compile(r"^(\d{4})")


def _franchise_score(name: str, query: str, current_year: int) -> int:
    for query_pattern, game_pattern in SERIES_PATTERNS:
        if not (query_pattern.search(query) and game_pattern.search(name)):
            continue

        score = FRANCHISE_BONUS
        year_match = _QUERY_YEAR_RE.search(query)
        if year_match:
            query_year = year_match.group(0)
            if query_year in name:
                score += 300
            else:
                short_year = query_year[-2:] if len(query_year) == 4 else query_year
                long_year = "20" + query_year if len(query_year) == 2 else query_year
                if short_year in name or long_year in name:
                    score += 200
        else:
            # No year asked for: nudge the newest installments up
            for year in range(current_year, current_year - 4, -1):
                if str(year) in name or str(year)[-2:] in name:
                    score += 150 - (current_year - year) * 30
                    break
        return score
    return 0


def _numbering_score(name: str, query: str) -> int:
    score = 0
    game_numbers = _NUMBER_RE.findall(name)
    query_numbers = _NUMBER_RE.findall(query)
    if game_numbers and query_numbers:
        if any(number in query_numbers for number in game_numbers):
            score += 400
        elif any(
            abs(int(g) - int(q)) <= 2 for g in game_numbers for q in query_numbers
        ):
            # Annual sports titles drift by a year or two
            score += 200

    long_year = _LONG_YEAR_RE.search(query)
    short_number = _SHORT_NUMBER_RE.search(name)
    if long_year and short_number and long_year.group(1) == short_number.group(1):
        score += 300
    return score


def _text_score(name: str, query: str) -> int:
    score = 0
    if name == query:
        score += EXACT_MATCH_BONUS
    if name.startswith(query):
        score += 500
    if query in name:
        score += 200
    for word in query.split():
        if len(word) <= 1:
            continue
        if word in name:
            score += 50
        if name.startswith(word):
            score += 25
    return score


def _release_year(released: str | None) -> int | None:
    if not released:
        return None
    match = _RELEASE_YEAR_RE.match(released)
    return int(match.group(1)) if match else None


def score_game(game: GameRecord, original_query: str, current_year: int) -> float:
    """Score one game against what the user typed, compared lowercased."""
    name = (game.name or "").lower()
    query_lower = original_query.lower()

    score: float = 0
    score += _franchise_score(name, query_lower, current_year)
    score += _numbering_score(name, query_lower)

    # Series pass: exact and substring matches, counted again by _text_score
    if name == query_lower:
        score += EXACT_MATCH_BONUS
    if query_lower in name:
        score += 150 + 100

    score += _text_score(name, query_lower)

    if game.rating:
        score += min(game.rating * 10, 50)
    if game.ratings_count and game.ratings_count > 0:
        score += min(math.log10(game.ratings_count), 20)

    release_year = _release_year(game.released)
    if release_year is not None:
        years_ago = current_year - release_year
        if years_ago <= 5:
            score += 10 - years_ago * 2

    return score


def rank_search_results(
    results: list[GameRecord],
    original_query: str,
    current_year: int | None = None,
) -> list[GameRecord]:
    """Sort games by descending score; ties keep their discovery order."""
    if not results or not original_query:
        return list(results)

    if current_year is None:
        current_year = datetime.now().year

    scored = [(score_game(game, original_query, current_year), game) for game in results]
    for score, game in scored:
        logger.debug("Score %.1f for %r (query %r)", score, game.name, original_query)

    # sorted() is stable, so equal scores keep upstream order
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
    return [game for _, game in scored]


def paginate(ranked: list[GameRecord], page: int, page_size: int) -> RankedPage:
    """Slice a ranked list into a 1-indexed page with relative cursors."""
    start = (page - 1) * page_size
    page_results = ranked[start:start + page_size]
    return RankedPage(
        count=len(ranked),
        next=f"?page={page + 1}" if len(page_results) == page_size else None,
        previous=f"?page={page - 1}" if page > 1 else None,
        results=[game.to_payload() for game in page_results],
    )
