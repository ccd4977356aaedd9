"""
Additive relevance scoring.

Each searchable field contributes at most one tier (exact, else prefix,
else substring); fields and meaning records add up. Weights are fixed so
rankings are reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, NamedTuple, TypeVar

from ..models import (
    DictionaryEntry,
    Entity,
    Language,
    PhraseEntry,
    SymbolEntry,
    VerbEntry,
)


class TierWeights(NamedTuple):
    """Weights for an exact, prefix and substring match. Zero disables a tier."""
    exact: int
    prefix: int = 0
    contains: int = 0


HEADWORD_WEIGHTS = TierWeights(exact=100, prefix=50, contains=20)
SCRIPT_WEIGHTS = TierWeights(exact=100, contains=30)
MEANING_WEIGHTS = TierWeights(exact=80, prefix=40, contains=15)
PLURAL_WEIGHTS = TierWeights(exact=60, contains=10)
ROOT_WEIGHTS = TierWeights(exact=70)

T = TypeVar("T")


@dataclass(frozen=True)
class Query:
    """A normalized query: trimmed raw text plus its lowercase form."""
    raw: str
    lowered: str

    @classmethod
    def parse(cls, text: str | None) -> Query | None:
        """Return None for empty or whitespace-only input."""
        if not text or not text.strip():
            return None
        stripped = text.strip()
        return cls(raw=stripped, lowered=stripped.lower())


def score_text(
    value: str | None,
    query: Query,
    weights: TierWeights,
    case_sensitive: bool = False,
) -> int:
    """Score one field value against the query using the first matching tier.

    Args:
        value: Field content (None or empty scores 0)
        query: Parsed query
        weights: Tier weights for this field
        case_sensitive: Compare verbatim instead of lowercased (script fields)

    Returns:
        The weight of the first tier that matches, or 0

    Example:
        >>> score_text("aman", Query.parse("am"), HEADWORD_WEIGHTS)
        50
    """
    if not value:
        return 0
    if case_sensitive:
        text, needle = value, query.raw
    else:
        text, needle = value.lower(), query.lowered

    if weights.exact and text == needle:
        return weights.exact
    if weights.prefix and text.startswith(needle):
        return weights.prefix
    if weights.contains and needle in text:
        return weights.contains
    return 0


@dataclass
class SearchFields:
    """The searchable projection of an entity."""
    headwords: list[str]
    script: str = ""
    meanings: list[tuple[Language | None, str]] = field(default_factory=list)
    plural: str | None = None
    roots: list[str] = field(default_factory=list)


def search_fields(entity: Entity) -> SearchFields:
    """Project any entity kind onto the fields the scorer understands."""
    if isinstance(entity, DictionaryEntry):
        return SearchFields(
            headwords=[entity.word],
            script=entity.tifinagh,
            meanings=list(entity.translations()),
            plural=entity.plural,
            roots=entity.roots,
        )
    if isinstance(entity, VerbEntry):
        return SearchFields(
            headwords=[entity.infinitive],
            script=entity.tifinagh,
            meanings=list(entity.translations()),
            roots=entity.roots,
        )
    if isinstance(entity, SymbolEntry):
        layers = entity.interpretation_layers()
        meanings: list[tuple[Language | None, str]] = list(entity.translations())
        meanings.extend((None, name) for name in entity.alternate_names)
        meanings.extend((None, tag) for tag in entity.tags)
        for layer in ("attested", "oral", "contemporary"):
            meanings.extend((None, meaning) for meaning in layers[layer])
        return SearchFields(
            headwords=[entity.name],
            script=entity.name_tifinagh,
            meanings=meanings,
            roots=entity.roots,
        )
    if isinstance(entity, PhraseEntry):
        return SearchFields(
            headwords=[entity.phrase],
            script=entity.tifinagh,
            meanings=list(entity.iter_translations()),
        )
    raise TypeError(f"Unsupported entity type: {type(entity).__name__}")


class Score(NamedTuple):
    total: int
    matched_field: str | None


def score_fields(fields: SearchFields, query: Query) -> Score:
    """Sum every signal for one entity.

    The matched field reported is the one contributing the largest single
    weight (first one on ties).
    """
    signals: list[tuple[str, int]] = []

    signals.append(("headword", max(
        (score_text(h, query, HEADWORD_WEIGHTS) for h in fields.headwords), default=0
    )))
    signals.append(("script", score_text(fields.script, query, SCRIPT_WEIGHTS, case_sensitive=True)))
    for language, meaning in fields.meanings:
        name = f"meaning:{language.value}" if language else "meaning"
        signals.append((name, score_text(meaning, query, MEANING_WEIGHTS)))
    signals.append(("plural", score_text(fields.plural, query, PLURAL_WEIGHTS)))
    for root in fields.roots:
        signals.append(("root", score_text(root, query, ROOT_WEIGHTS)))

    total = sum(weight for _, weight in signals)
    best_name, best_weight = None, 0
    for name, weight in signals:
        if weight > best_weight:
            best_name, best_weight = name, weight
    return Score(total, best_name)


def score_entity(entity: Entity, query: Query) -> Score:
    return score_fields(search_fields(entity), query)


def rank(scored: Iterable[tuple[T, int]]) -> list[tuple[T, int]]:
    """Drop zero scores and sort by score descending, keeping corpus order on ties."""
    kept = [(entity, score) for entity, score in scored if score > 0]
    # sorted() is stable
    return sorted(kept, key=lambda pair: -pair[1])
