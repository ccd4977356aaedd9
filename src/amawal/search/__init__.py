"""
Relevance search and multilingual reverse lookup over the entity store.
"""

from .engine import SearchHit, search_entries, search_hits, search_symbols, search_verbs
from .reverse import (
    DIRECTIONS,
    Direction,
    search_by_language,
    search_phrases,
    search_phrases_by_direction,
)
from .scoring import Query, TierWeights, score_entity

__all__ = [
    "SearchHit",
    "search_entries",
    "search_hits",
    "search_symbols",
    "search_verbs",
    "DIRECTIONS",
    "Direction",
    "search_by_language",
    "search_phrases",
    "search_phrases_by_direction",
    "Query",
    "TierWeights",
    "score_entity",
]
