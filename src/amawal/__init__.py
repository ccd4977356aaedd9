"""
Amawal - a read-only lexical index over a Tamazight dictionary, verb
conjugations, symbol encyclopedia and phrasebook.
"""

from .corpus import CorpusError, EntityStore, get_store
from .models import DEFAULT_REGION, EntityKind, Language, Region

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("amawal")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = [
    "CorpusError",
    "EntityStore",
    "get_store",
    "DEFAULT_REGION",
    "EntityKind",
    "Language",
    "Region",
]
