"""
Cross-reference resolution between entities.

Relationships are resolved on demand against the store; nothing is
precomputed. Links whose target is missing are dropped (and logged at
DEBUG) instead of failing the lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .corpus.store import EntityStore
from .models import (
    CrossReferenceType,
    DictionaryEntry,
    PhraseEntry,
    Region,
    SymbolEntry,
    SymbolRelationship,
    VerbEntry,
)

logger = logging.getLogger("amawal")


@dataclass(frozen=True)
class ResolvedReference:
    """A cross-reference whose target entry exists."""
    type: CrossReferenceType
    entry: DictionaryEntry
    notes: str | None = None


@dataclass(frozen=True)
class ResolvedSymbolLink:
    relationship: SymbolRelationship
    symbol: SymbolEntry
    notes: str | None = None


@dataclass
class WordFamily:
    """Everything sharing a consonantal root."""
    root: str
    entries: list[DictionaryEntry] = field(default_factory=list)
    verbs: list[VerbEntry] = field(default_factory=list)
    symbols: list[SymbolEntry] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.entries) + len(self.verbs) + len(self.symbols)


# ----------------------------------------------------------------------
# Dictionary entries
# ----------------------------------------------------------------------

def resolve_cross_references(
    store: EntityStore,
    entry: DictionaryEntry,
    region: Region | str | None = None,
) -> list[ResolvedReference]:
    """Resolve an entry's declared cross-references.

    Each reference is looked up by id first, then by headword. References
    resolving to nothing are omitted.

    Args:
        store: Entity store
        entry: Entry whose references to resolve
        region: Region to resolve in (defaults to the entry's own)

    Returns:
        Resolved references in declaration order
    """
    region = region or entry.region
    resolved: list[ResolvedReference] = []
    for ref in entry.cross_references:
        target = None
        if ref.word_id:
            target = store.get_entry_by_id(ref.word_id, region)
        if target is None and ref.word:
            target = store.get_entry_by_word(ref.word, region)
        if target is None:
            logger.debug(f"Dangling {ref.type.value} reference from '{entry.id}' to '{ref.word_id or ref.word}'")
            continue
        resolved.append(ResolvedReference(type=ref.type, entry=target, notes=ref.notes))
    return resolved


def group_cross_references(
    references: list[ResolvedReference],
) -> dict[CrossReferenceType, list[ResolvedReference]]:
    """Group references by type.

    Types appear in first-seen order; references keep their order within
    each group.
    """
    groups: dict[CrossReferenceType, list[ResolvedReference]] = {}
    for ref in references:
        groups.setdefault(ref.type, []).append(ref)
    return groups


def get_related_entries(
    store: EntityStore,
    entry: DictionaryEntry,
    region: Region | str | None = None,
) -> list[DictionaryEntry]:
    """Entries named in ``entry.related_words``, in corpus order."""
    if not entry.related_words:
        return []
    wanted = set(entry.related_words)
    return [e for e in store.entries(region or entry.region) if e.word in wanted]


def get_by_root(
    store: EntityStore,
    root: str,
    region: Region | str | None = None,
) -> list[DictionaryEntry]:
    """Entries whose morphological or etymological root equals ``root``, ignoring case.

    Example:
        >>> [e.word for e in get_by_root(store, "K-L")]
        ['akal', 'takalt']
    """
    if not root or not root.strip():
        return []
    lowered = root.strip().lower()
    return [
        entry for entry in store.entries(region)
        if any(r.lower() == lowered for r in entry.roots)
    ]


def word_family(
    store: EntityStore,
    root: str,
    region: Region | str | None = None,
) -> WordFamily:
    """Dictionary entries, verbs and symbols sharing ``root``."""
    family = WordFamily(root=root)
    if not root or not root.strip():
        return family
    lowered = root.strip().lower()

    family.entries = get_by_root(store, root, region)
    family.verbs = [v for v in store.verbs(region) if v.root and v.root.lower() == lowered]
    family.symbols = [
        s for s in store.symbols(region) if any(r.lower() == lowered for r in s.roots)
    ]
    return family


# ----------------------------------------------------------------------
# Symbols
# ----------------------------------------------------------------------

def resolve_related_symbols(store: EntityStore, symbol: SymbolEntry) -> list[ResolvedSymbolLink]:
    links = []
    for rel in symbol.related_symbols:
        target = store.get_symbol_by_id(rel.symbol_id, symbol.region)
        if target is None:
            logger.debug(f"Dangling related symbol from '{symbol.id}' to '{rel.symbol_id}'")
            continue
        links.append(ResolvedSymbolLink(relationship=rel.relationship, symbol=target, notes=rel.notes))
    return links


def get_related_symbols(store: EntityStore, symbol: SymbolEntry) -> list[SymbolEntry]:
    """Symbols listed in ``symbol.related_symbols`` that exist."""
    return [link.symbol for link in resolve_related_symbols(store, symbol)]


def get_symbols_linked_to_word(
    store: EntityStore,
    word_id: str,
    region: Region | str | None = None,
) -> list[SymbolEntry]:
    return [
        symbol for symbol in store.symbols(region)
        if any(link.word_id == word_id for link in symbol.linked_words)
    ]


def get_linked_entries(store: EntityStore, symbol: SymbolEntry) -> list[DictionaryEntry]:
    """Dictionary entries a symbol links to, in link order."""
    entries = []
    for link in symbol.linked_words:
        entry = store.get_entry_by_id(link.word_id, symbol.region)
        if entry is None and link.word:
            entry = store.get_entry_by_word(link.word, symbol.region)
        if entry is None:
            logger.debug(f"Dangling word link from symbol '{symbol.id}' to '{link.word_id}'")
            continue
        entries.append(entry)
    return entries


def get_symbols_in_family(
    store: EntityStore,
    family_id: str,
    region: Region | str | None = None,
) -> list[SymbolEntry]:
    family = next((f for f in store.symbol_families(region) if f.id == family_id), None)
    if family is None:
        return []
    symbols = [store.get_symbol_by_id(symbol_id, region) for symbol_id in family.symbols]
    return [s for s in symbols if s is not None]


# ----------------------------------------------------------------------
# Phrases
# ----------------------------------------------------------------------

def get_phrase_response(store: EntityStore, phrase: PhraseEntry) -> PhraseEntry | None:
    """The customary reply to a greeting-style phrase, if it exists."""
    if not phrase.response:
        return None
    response = store.get_phrase_by_id(phrase.response, phrase.region)
    if response is None:
        logger.debug(f"Dangling response from phrase '{phrase.id}' to '{phrase.response}'")
    return response


def get_related_phrases(store: EntityStore, phrase: PhraseEntry) -> list[PhraseEntry]:
    related = [store.get_phrase_by_id(pid, phrase.region) for pid in phrase.related_phrases]
    return [p for p in related if p is not None]


def get_phrase_words(store: EntityStore, phrase: PhraseEntry) -> list[DictionaryEntry]:
    words = [store.get_entry_by_id(wid, phrase.region) for wid in phrase.related_words]
    return [w for w in words if w is not None]
