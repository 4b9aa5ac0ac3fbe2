"""Search query normalization for the games catalog.

Turns what people actually type ("gta 5", "cod mw", "fifa 24 ultimate
edition") into strings the catalog's own search handles well, and builds
a handful of broader variants to fan out over when facet filters narrow
the result set.
"""

import logging
import re

from backend.errors import InvalidInput

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 100
MAX_ENHANCED_LENGTH = 80

# Ordered: only the first pattern that matches is applied.
FRANCHISE_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("EA SPORTS FC", re.compile(r"\b(ea\s*fc|ea\s*sports?\s*fc|eafc)\b", re.IGNORECASE)),
    ("FIFA", re.compile(r"\b(fifa)\b", re.IGNORECASE)),
    ("Call of Duty", re.compile(r"\b(cod|call\s*of\s*duty)\b", re.IGNORECASE)),
    ("Grand Theft Auto", re.compile(r"\b(gta|grand\s*theft\s*auto)\b", re.IGNORECASE)),
    ("Counter Strike", re.compile(r"\b(cs|csgo|counter\s*strike)\b", re.IGNORECASE)),
    ("Assassins Creed", re.compile(r"\b(ac|assassins?\s*creed)\b", re.IGNORECASE)),
    ("Battlefield", re.compile(r"\b(bf|battlefield)\b", re.IGNORECASE)),
    ("Need for Speed", re.compile(r"\b(nfs|need\s*for\s*speed)\b", re.IGNORECASE)),
    ("Red Dead Redemption", re.compile(r"\b(rdr|red\s*dead\s*redemption)\b", re.IGNORECASE)),
    ("God of War", re.compile(r"\b(gow|god\s*of\s*war)\b", re.IGNORECASE)),
    ("The Last of Us", re.compile(r"\b(tlou|last\s*of\s*us)\b", re.IGNORECASE)),
    ("League of Legends", re.compile(r"\b(lol|league\s*of\s*legends)\b", re.IGNORECASE)),
    ("World of Warcraft", re.compile(r"\b(wow|world\s*of\s*warcraft)\b", re.IGNORECASE)),
    ("Defense of the Ancients", re.compile(r"\b(dota)\b", re.IGNORECASE)),
    ("PlayerUnknowns Battlegrounds", re.compile(r"\b(pubg|playerunknowns?\s*battlegrounds?)\b", re.IGNORECASE)),
    # "fc 25" is a football title, not Far Cry
    ("Far Cry", re.compile(r"\b(fc(?!\s*\d+$)|far\s*cry)\b", re.IGNORECASE)),
]

NOISE_WORDS = frozenset(
    ["the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "with", "by"]
)

TERM_EXPANSIONS = {
    "cod": "call of duty",
    "gta": "grand theft auto",
    "lol": "league of legends",
    "wow": "world of warcraft",
    "cs": "counter strike",
    "csgo": "counter strike global offensive",
    "dota": "defense of the ancients",
    "pubg": "playerunknown battlegrounds",
    "rdr": "red dead redemption",
    "gow": "god of war",
    "ac": "assassins creed",
    "bf": "battlefield",
    "nfs": "need for speed",
    "tlou": "the last of us",
}

_UNSAFE_CHARS_RE = re.compile(r"[<>\"'&]")
_YEAR_RE = re.compile(r"\b(20\d{2}|'\d{2})\b")
_VARIANT_YEAR_RE = re.compile(r"\b(20\d{2}|'\d{2}|\d{2})\b")
_EDITION_RE = re.compile(
    r"\b(edition|remastered|deluxe|ultimate|gold|premium|complete|goty|standard)\b",
    re.IGNORECASE,
)
_WHITESPACE_RE = re.compile(r"\s+")


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _require_text(query) -> str:
    if query is None:
        return ""
    if not isinstance(query, str):
        raise InvalidInput(f"Search query must be a string, got {type(query).__name__}")
    return query


def sanitize_search_query(query: str) -> str:
    """Trim, drop markup-significant characters and cap the length."""
    query = _require_text(query)
    return _UNSAFE_CHARS_RE.sub("", query.strip())[:MAX_QUERY_LENGTH]


def apply_franchise_pattern(text: str) -> str:
    """Rewrite the first recognized franchise abbreviation to its full name."""
    for name, pattern in FRANCHISE_PATTERNS:
        if pattern.search(text):
            return pattern.sub(name, text)
    return text


def enhance_search_query(query: str) -> str:
    """Normalize a raw query into an upstream-friendly search string.

    Returns "" for empty input or input made only of noise; callers treat
    that as "no search".
    """
    result = sanitize_search_query(query)
    if not result:
        return ""

    result = apply_franchise_pattern(result)

    # Years are dropped from the search string; ranking still sees them
    # through the raw query.
    result = _collapse(_YEAR_RE.sub("", result))

    words = [
        word for word in result.split(" ")
        if len(word) > 1 and word.lower() not in NOISE_WORDS
    ]
    words = [TERM_EXPANSIONS.get(word.lower(), word) for word in words]
    result = " ".join(words)

    result = _collapse(_EDITION_RE.sub("", result))

    return result[:MAX_ENHANCED_LENGTH].strip()


def create_search_variants(query: str, has_filters: bool = False) -> list[str]:
    """Build the ordered, de-duplicated list of queries to fan out over.

    Without filters this is just the enhanced query. With filters the
    result pool shrinks a lot, so broader variants are added: the plain
    lowercased query, the first and last significant words, and the
    enhanced query without any year-like numbers.
    """
    variants = []
    enhanced = enhance_search_query(query)
    if enhanced:
        variants.append(enhanced)

    if has_filters:
        sanitized = sanitize_search_query(query).lower()
        if sanitized and sanitized != enhanced:
            variants.append(sanitized)

        if " " in enhanced:
            words = [word for word in enhanced.split(" ") if len(word) > 2]
            if len(words) >= 2:
                variants.append(words[0])
                variants.append(words[-1])

        without_year = _collapse(_VARIANT_YEAR_RE.sub("", enhanced))
        if without_year and without_year != enhanced:
            variants.append(without_year)

    variants = list(dict.fromkeys(v for v in variants if v))
    logger.debug("Search variants for %r: %s", query, variants)
    return variants
