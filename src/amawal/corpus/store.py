"""
EntityStore - read-only, region-keyed entity collections.

The store is built once from the corpus and shared by every query
function. Nothing mutates it after construction, so concurrent reads need
no locking; only the lazy process-wide construction in ``get_store`` is
guarded.
"""

from __future__ import annotations

import logging
import random
import threading
from pathlib import Path
from typing import Any, Iterable

from ..models import (
    DEFAULT_REGION,
    DictionaryEntry,
    Entity,
    EntityKind,
    PhraseCategoryInfo,
    PhraseEntry,
    Region,
    SymbolEntry,
    SymbolFamily,
    VerbEntry,
)
from .loader import CorpusError, RegionCollection, load_corpus

logger = logging.getLogger("amawal")


def coerce_region(region: Region | str | None) -> Region | None:
    """Map a region code to ``Region``; None for unknown codes."""
    if region is None:
        return DEFAULT_REGION
    if isinstance(region, Region):
        return region
    try:
        return Region(region)
    except ValueError:
        return None


class EntityStore:
    """Immutable snapshot of the lexicon, queried by kind and region.

    Unknown or unpopulated regions yield empty collections rather than
    errors; only ``Region.TACHELHIT`` currently carries data.

    Example:
        >>> store = EntityStore.from_directory(Path("data"))
        >>> store.get_entry_by_word("AMAN").id
        'w1'
    """

    def __init__(self, collections: Iterable[RegionCollection] = ()) -> None:
        self._entities: dict[tuple[EntityKind, Region], tuple[Any, ...]] = {}
        self._by_id: dict[tuple[EntityKind, Region], dict[str, Any]] = {}
        self._families: dict[Region, tuple[SymbolFamily, ...]] = {}
        self._categories: dict[Region, tuple[PhraseCategoryInfo, ...]] = {}
        self._metadata: dict[tuple[EntityKind, Region], dict[str, Any]] = {}

        for collection in collections:
            key = (collection.kind, collection.region)
            if key in self._entities:
                raise CorpusError(
                    f"Collection {collection.kind.value}/{collection.region.value} loaded twice"
                )
            self._entities[key] = tuple(collection.entities)
            self._by_id[key] = {entity.id: entity for entity in collection.entities}
            self._metadata[key] = dict(collection.metadata)
            if collection.families:
                self._families[collection.region] = tuple(collection.families)
            if collection.categories:
                self._categories[collection.region] = tuple(collection.categories)

    @classmethod
    def from_directory(cls, data_dir: Path) -> EntityStore:
        """Load and merge the corpus under ``data_dir``.

        Raises:
            CorpusError: If the corpus is malformed
        """
        try:
            store = cls(load_corpus(data_dir))
        except CorpusError as e:
            logger.error(f"Malformed corpus in {data_dir}: {e}")
            raise
        logger.info(f"Entity store ready: {store.counts()}")
        return store

    # =========================================================================
    # Generic access
    # =========================================================================

    def all(self, kind: EntityKind, region: Region | str | None = None) -> list[Entity]:
        """Every entity of ``kind`` in ``region``, in corpus order."""
        resolved = coerce_region(region)
        if resolved is None:
            return []
        return list(self._entities.get((kind, resolved), ()))

    def get_by_id(
        self, kind: EntityKind, entity_id: str, region: Region | str | None = None
    ) -> Entity | None:
        resolved = coerce_region(region)
        if resolved is None:
            return None
        return self._by_id.get((kind, resolved), {}).get(entity_id)

    def get_by_headword(
        self, kind: EntityKind, headword: str, region: Region | str | None = None
    ) -> Entity | None:
        """Find an entity by Latin headword (case-insensitive) or exact script form."""
        if not headword:
            return None
        lowered = headword.lower()
        for entity in self.all(kind, region):
            if entity.headword.lower() == lowered or (entity.script and entity.script == headword):
                return entity
        return None

    def regions(self, kind: EntityKind) -> list[Region]:
        """Regions that hold at least one entity of ``kind``."""
        return [region for region in Region if self._entities.get((kind, region))]

    def metadata(self, kind: EntityKind, region: Region | str | None = None) -> dict[str, Any]:
        resolved = coerce_region(region)
        if resolved is None:
            return {}
        return dict(self._metadata.get((kind, resolved), {}))

    def counts(self) -> dict[str, int]:
        """Total entity count per kind across regions."""
        totals = {kind.value: 0 for kind in EntityKind}
        for (kind, _), entities in self._entities.items():
            totals[kind.value] += len(entities)
        return totals

    def random_sample(
        self,
        kind: EntityKind,
        count: int = 5,
        region: Region | str | None = None,
        rng: random.Random | None = None,
    ) -> list[Entity]:
        """Up to ``count`` distinct entities picked at random."""
        entities = self.all(kind, region)
        if count <= 0 or not entities:
            return []
        return (rng or random).sample(entities, min(count, len(entities)))

    # =========================================================================
    # Typed access
    # =========================================================================

    def entries(self, region: Region | str | None = None) -> list[DictionaryEntry]:
        return self.all(EntityKind.DICTIONARY, region)

    def verbs(self, region: Region | str | None = None) -> list[VerbEntry]:
        return self.all(EntityKind.VERBS, region)

    def symbols(self, region: Region | str | None = None) -> list[SymbolEntry]:
        return self.all(EntityKind.SYMBOLS, region)

    def phrases(self, region: Region | str | None = None) -> list[PhraseEntry]:
        return self.all(EntityKind.PHRASES, region)

    def get_entry_by_id(self, entry_id: str, region: Region | str | None = None) -> DictionaryEntry | None:
        return self.get_by_id(EntityKind.DICTIONARY, entry_id, region)

    def get_entry_by_word(self, word: str, region: Region | str | None = None) -> DictionaryEntry | None:
        return self.get_by_headword(EntityKind.DICTIONARY, word, region)

    def get_verb_by_id(self, verb_id: str, region: Region | str | None = None) -> VerbEntry | None:
        return self.get_by_id(EntityKind.VERBS, verb_id, region)

    def get_verb_by_infinitive(self, infinitive: str, region: Region | str | None = None) -> VerbEntry | None:
        return self.get_by_headword(EntityKind.VERBS, infinitive, region)

    def get_symbol_by_id(self, symbol_id: str, region: Region | str | None = None) -> SymbolEntry | None:
        return self.get_by_id(EntityKind.SYMBOLS, symbol_id, region)

    def get_symbol_by_name(self, name: str, region: Region | str | None = None) -> SymbolEntry | None:
        """Match the primary, English, French or alternate names case-insensitively."""
        symbol = self.get_by_headword(EntityKind.SYMBOLS, name, region)
        if symbol is not None or not name:
            return symbol
        lowered = name.lower()
        for candidate in self.symbols(region):
            if any(alias.lower() == lowered for alias in candidate.names):
                return candidate
        return None

    def get_phrase_by_id(self, phrase_id: str, region: Region | str | None = None) -> PhraseEntry | None:
        return self.get_by_id(EntityKind.PHRASES, phrase_id, region)

    def symbol_families(self, region: Region | str | None = None) -> list[SymbolFamily]:
        resolved = coerce_region(region)
        return list(self._families.get(resolved, ())) if resolved else []

    def phrase_categories(self, region: Region | str | None = None) -> list[PhraseCategoryInfo]:
        resolved = coerce_region(region)
        return list(self._categories.get(resolved, ())) if resolved else []


# ----------------------------------------------------------------------
# Process-wide store
# ----------------------------------------------------------------------

_store: EntityStore | None = None
_store_lock = threading.Lock()


def get_store(data_dir: Path | None = None) -> EntityStore:
    """Return the process-wide store, loading it on first use.

    Concurrent first callers block on a lock so the corpus is loaded
    exactly once. ``data_dir`` only matters on the first call; it defaults
    to the configured corpus directory.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                if data_dir is None:
                    from ..config import load_config
                    data_dir = load_config().data_dir
                _store = EntityStore.from_directory(data_dir)
    return _store


def reset_store() -> None:
    """Drop the process-wide store so the next ``get_store`` reloads it."""
    global _store
    with _store_lock:
        _store = None
