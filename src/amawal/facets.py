"""
Facet aggregation and facet filters.

Facet values are derived from the loaded corpus rather than maintained
separately. The store never changes after load, so computed facets are
cached for the life of the index.
"""

from __future__ import annotations

from enum import Enum
from threading import Lock
from typing import Callable, Iterable

from .corpus.store import EntityStore, coerce_region
from .models import (
    DictionaryEntry,
    PartOfSpeech,
    PhraseCategory,
    PhraseEntry,
    Region,
    SemanticField,
    SymbolCategory,
    SymbolContext,
    SymbolEntry,
    SymbolMedium,
)


def _distinct_sorted(values: Iterable[Enum]) -> list:
    return sorted(set(values), key=lambda value: value.value)


class FacetIndex:
    """Distinct facet values per region, computed once and cached.

    Example:
        >>> facets = FacetIndex(store)
        >>> facets.summary()["phrase_categories"]
        ['courtesy', 'farewell', 'greeting', 'proverb', 'shopping']
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store
        self._cache: dict[tuple[str, Region], list] = {}
        self._lock = Lock()

    def _cached(self, facet: str, region: Region | str | None, compute: Callable[[Region], list]) -> list:
        resolved = coerce_region(region)
        if resolved is None:
            return []
        key = (facet, resolved)
        with self._lock:
            if key not in self._cache:
                self._cache[key] = compute(resolved)
            return list(self._cache[key])

    def semantic_fields(self, region: Region | str | None = None) -> list[SemanticField]:
        return self._cached("semantic_fields", region, lambda r: _distinct_sorted(
            field for entry in self.store.entries(r) for field in entry.semantic_fields
        ))

    def parts_of_speech(self, region: Region | str | None = None) -> list[PartOfSpeech]:
        return self._cached("parts_of_speech", region, lambda r: _distinct_sorted(
            entry.part_of_speech for entry in self.store.entries(r)
        ))

    def symbol_categories(self, region: Region | str | None = None) -> list[SymbolCategory]:
        return self._cached("symbol_categories", region, lambda r: _distinct_sorted(
            symbol.category for symbol in self.store.symbols(r)
        ))

    def symbol_media(self, region: Region | str | None = None) -> list[SymbolMedium]:
        return self._cached("symbol_media", region, lambda r: _distinct_sorted(
            medium for symbol in self.store.symbols(r) for medium in symbol.media
        ))

    def symbol_contexts(self, region: Region | str | None = None) -> list[SymbolContext]:
        return self._cached("symbol_contexts", region, lambda r: _distinct_sorted(
            context for symbol in self.store.symbols(r) for context in symbol.contexts
        ))

    def phrase_categories(self, region: Region | str | None = None) -> list[PhraseCategory]:
        return self._cached("phrase_categories", region, lambda r: _distinct_sorted(
            phrase.category for phrase in self.store.phrases(r)
        ))

    def summary(self, region: Region | str | None = None) -> dict[str, list[str]]:
        """All facets as plain string lists, keyed by facet name."""
        facets = {
            "semantic_fields": self.semantic_fields(region),
            "parts_of_speech": self.parts_of_speech(region),
            "symbol_categories": self.symbol_categories(region),
            "symbol_media": self.symbol_media(region),
            "symbol_contexts": self.symbol_contexts(region),
            "phrase_categories": self.phrase_categories(region),
        }
        return {name: [value.value for value in values] for name, values in facets.items()}


# ----------------------------------------------------------------------
# Filters
# ----------------------------------------------------------------------

def entries_by_part_of_speech(
    store: EntityStore, part_of_speech: PartOfSpeech | str, region: Region | str | None = None
) -> list[DictionaryEntry]:
    return [e for e in store.entries(region) if e.part_of_speech == part_of_speech]


def entries_by_semantic_field(
    store: EntityStore, semantic_field: SemanticField | str, region: Region | str | None = None
) -> list[DictionaryEntry]:
    return [e for e in store.entries(region) if semantic_field in e.semantic_fields]


def filter_entries_by_category(
    store: EntityStore, category: str, region: Region | str | None = None
) -> list[DictionaryEntry]:
    """Entries tagged with ``category`` as a semantic field or part of speech."""
    return [
        e for e in store.entries(region)
        if category in e.semantic_fields or e.part_of_speech == category
    ]


def symbols_by_category(
    store: EntityStore, category: SymbolCategory | str, region: Region | str | None = None
) -> list[SymbolEntry]:
    return [s for s in store.symbols(region) if s.category == category]


def symbols_by_medium(
    store: EntityStore, medium: SymbolMedium | str, region: Region | str | None = None
) -> list[SymbolEntry]:
    return [s for s in store.symbols(region) if medium in s.media]


def symbols_by_context(
    store: EntityStore, context: SymbolContext | str, region: Region | str | None = None
) -> list[SymbolEntry]:
    return [s for s in store.symbols(region) if context in s.contexts]


def symbols_by_status(
    store: EntityStore, status: str, region: Region | str | None = None
) -> list[SymbolEntry]:
    return [s for s in store.symbols(region) if s.status == status]


def phrases_by_category(
    store: EntityStore, category: PhraseCategory | str, region: Region | str | None = None
) -> list[PhraseEntry]:
    return [p for p in store.phrases(region) if p.category == category]
