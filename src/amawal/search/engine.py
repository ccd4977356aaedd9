"""
Relevance search over the entity store.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..corpus.store import EntityStore
from ..models import (
    DictionaryEntry,
    Entity,
    EntityKind,
    Region,
    SymbolEntry,
    VerbEntry,
)
from .scoring import Query, rank, score_entity


@dataclass(frozen=True)
class SearchHit:
    """A ranked search result with its score and strongest matching field."""
    entity: Entity
    score: int
    matched_field: str | None


def search_hits(
    store: EntityStore,
    query: str,
    region: Region | str | None = None,
    kind: EntityKind = EntityKind.DICTIONARY,
    limit: int | None = None,
) -> list[SearchHit]:
    """Score every entity of ``kind`` in ``region`` against ``query``.

    Results are ordered by descending score; equal scores keep corpus
    order. Entities scoring zero are dropped.

    Args:
        store: Entity store to search
        query: Free-text query (Latin, Tifinagh, or a translated meaning)
        region: Region code; unknown regions give no results
        kind: Entity collection to search
        limit: Optional cap on the number of hits

    Returns:
        Ranked hits; empty for a blank query
    """
    parsed = Query.parse(query)
    if parsed is None:
        return []

    hits = []
    for entity in store.all(kind, region):
        score = score_entity(entity, parsed)
        hits.append(SearchHit(entity=entity, score=score.total, matched_field=score.matched_field))

    ranked = [hit for hit, _ in rank((hit, hit.score) for hit in hits)]
    return ranked[:limit] if limit is not None else ranked


def search_entries(
    store: EntityStore,
    query: str,
    region: Region | str | None = None,
    limit: int | None = None,
) -> list[DictionaryEntry]:
    """Ranked dictionary entries matching ``query``.

    Example:
        >>> [e.word for e in search_entries(store, "aman")]
        ['aman', 'amanar']
    """
    return [hit.entity for hit in search_hits(store, query, region, EntityKind.DICTIONARY, limit)]


def search_verbs(
    store: EntityStore,
    query: str,
    region: Region | str | None = None,
    limit: int | None = None,
) -> list[VerbEntry]:
    return [hit.entity for hit in search_hits(store, query, region, EntityKind.VERBS, limit)]


def search_symbols(
    store: EntityStore,
    query: str,
    region: Region | str | None = None,
    limit: int | None = None,
) -> list[SymbolEntry]:
    """Ranked symbols, matched on names, tags, roots and all interpretation layers."""
    return [hit.entity for hit in search_hits(store, query, region, EntityKind.SYMBOLS, limit)]
