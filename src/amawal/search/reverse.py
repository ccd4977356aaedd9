"""
Direction-aware lookups between Tamazight and English/French.

``search_by_language`` is a cheap recall-oriented filter. Phrase search
reuses the additive scorer, with the participating fields chosen from the
``DIRECTIONS`` table rather than per-direction code.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple

from ..corpus.store import EntityStore
from ..models import (
    Entity,
    EntityKind,
    Language,
    PhraseEntry,
    Region,
    entity_translations,
)
from .scoring import HEADWORD_WEIGHTS, SCRIPT_WEIGHTS, Query, TierWeights, rank, score_text


TAMAZIGHT = "tzm"


class Direction(str, Enum):
    """Query language → result language."""
    EN_TO_TZM = "en-tzm"
    FR_TO_TZM = "fr-tzm"
    TZM_TO_EN = "tzm-en"
    TZM_TO_FR = "tzm-fr"

    @property
    def query_language(self) -> str:
        return DIRECTIONS[self].query_language

    @property
    def target_language(self) -> str:
        return DIRECTIONS[self].target_language

    def reverse(self) -> Direction:
        """The direction with query and target languages swapped."""
        return _REVERSED[self]


class FieldRule(NamedTuple):
    """One phrase field taking part in direction scoring."""
    name: str
    value: Callable[[PhraseEntry], str | None]
    weights: TierWeights
    case_sensitive: bool = False


class DirectionRule(NamedTuple):
    query_language: str
    target_language: str
    fields: tuple[FieldRule, ...]


def _translation(language: Language) -> Callable[[PhraseEntry], str | None]:
    return lambda phrase: phrase.translations_by_language().get(language)


TAMAZIGHT_FIELDS = (
    FieldRule("phrase", lambda phrase: phrase.phrase, HEADWORD_WEIGHTS),
    FieldRule("tifinagh", lambda phrase: phrase.tifinagh, SCRIPT_WEIGHTS, case_sensitive=True),
)
# Only the translation is scored; the English context note carries no weight.
ENGLISH_FIELDS = (FieldRule("translations.en", _translation(Language.EN), HEADWORD_WEIGHTS),)
FRENCH_FIELDS = (FieldRule("translations.fr", _translation(Language.FR), HEADWORD_WEIGHTS),)

# The query side decides which fields are scored.
DIRECTIONS: dict[Direction, DirectionRule] = {
    Direction.EN_TO_TZM: DirectionRule(Language.EN.value, TAMAZIGHT, ENGLISH_FIELDS),
    Direction.FR_TO_TZM: DirectionRule(Language.FR.value, TAMAZIGHT, FRENCH_FIELDS),
    Direction.TZM_TO_EN: DirectionRule(TAMAZIGHT, Language.EN.value, TAMAZIGHT_FIELDS),
    Direction.TZM_TO_FR: DirectionRule(TAMAZIGHT, Language.FR.value, TAMAZIGHT_FIELDS),
}

_REVERSED: dict[Direction, Direction] = {
    Direction.EN_TO_TZM: Direction.TZM_TO_EN,
    Direction.TZM_TO_EN: Direction.EN_TO_TZM,
    Direction.FR_TO_TZM: Direction.TZM_TO_FR,
    Direction.TZM_TO_FR: Direction.FR_TO_TZM,
}


def search_by_language(
    store: EntityStore,
    query: str,
    language: Language | str,
    region: Region | str | None = None,
    kind: EntityKind = EntityKind.DICTIONARY,
) -> list[Entity]:
    """Entities with a ``language`` translation containing ``query``.

    Case-insensitive substring filter in corpus order; entities lacking a
    translation in ``language`` never match.

    Example:
        >>> [e.id for e in search_by_language(store, "water", "en")]
        ['w1']
    """
    parsed = Query.parse(query)
    if parsed is None:
        return []
    try:
        language = Language(language)
    except ValueError:
        return []

    return [
        entity
        for entity in store.all(kind, region)
        if any(
            lang == language and parsed.lowered in text.lower()
            for lang, text in entity_translations(entity)
        )
    ]


def score_phrase(phrase: PhraseEntry, query: Query, direction: Direction) -> int:
    """Sum the direction's field scores for one phrase."""
    return sum(
        score_text(rule.value(phrase), query, rule.weights, rule.case_sensitive)
        for rule in DIRECTIONS[direction].fields
    )


def search_phrases_by_direction(
    store: EntityStore,
    query: str,
    direction: Direction | str,
    region: Region | str | None = None,
    limit: int | None = None,
) -> list[PhraseEntry]:
    """Ranked phrases for a translation direction.

    Tamazight-side queries are scored against the phrase and its Tifinagh
    form; English/French queries against that language's translation.
    Unknown directions give no results.
    """
    parsed = Query.parse(query)
    if parsed is None:
        return []
    try:
        direction = Direction(direction)
    except ValueError:
        return []

    ranked = rank(
        (phrase, score_phrase(phrase, parsed, direction))
        for phrase in store.phrases(region)
    )
    phrases = [phrase for phrase, _ in ranked]
    return phrases[:limit] if limit is not None else phrases


def search_phrases(
    store: EntityStore,
    query: str,
    region: Region | str | None = None,
) -> list[PhraseEntry]:
    """Phrases matching ``query`` anywhere: phrase, script, translations, context, literal."""
    parsed = Query.parse(query)
    if parsed is None:
        return []

    def matches(phrase: PhraseEntry) -> bool:
        if parsed.raw in phrase.tifinagh:
            return True
        texts = [
            phrase.phrase,
            *phrase.translations_by_language().values(),
            phrase.context,
            phrase.literal_translation,
        ]
        return any(text and parsed.lowered in text.lower() for text in texts)

    return [phrase for phrase in store.phrases(region) if matches(phrase)]
