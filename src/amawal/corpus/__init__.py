"""
Corpus loading and the read-only entity store.
"""

from .loader import CorpusError, RegionCollection, load_corpus, merge_by_id
from .store import EntityStore, coerce_region, get_store, reset_store

__all__ = [
    "CorpusError",
    "RegionCollection",
    "load_corpus",
    "merge_by_id",
    "EntityStore",
    "coerce_region",
    "get_store",
    "reset_store",
]
