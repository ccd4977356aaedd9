"""
Data models for the Amawal Tamazight lexicon.

Entities are loaded once from the static corpus and never mutated, so every
model is frozen. Field names follow Python conventions; the camelCase keys
used in the corpus files are accepted as aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Region(str, Enum):
    """Regional varieties of Tamazight."""
    TACHELHIT = "tachelhit"
    KABYLE = "kabyle"
    TARIFIT = "tarifit"
    CENTRAL_ATLAS = "central-atlas"
    TUAREG = "tuareg"
    ZENAGA = "zenaga"
    GHOMARA = "ghomara"


DEFAULT_REGION = Region.TACHELHIT


class Language(str, Enum):
    """Languages that meanings and translations are given in."""
    EN = "en"
    FR = "fr"
    AR = "ar"
    ES = "es"


class EntityKind(str, Enum):
    """The four entity collections held by the store."""
    DICTIONARY = "dictionary"
    VERBS = "verbs"
    SYMBOLS = "symbols"
    PHRASES = "phrases"


class PartOfSpeech(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PREPOSITION = "preposition"
    PRONOUN = "pronoun"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"
    PARTICLE = "particle"
    NUMERAL = "numeral"


class SemanticField(str, Enum):
    NATURE = "nature"
    BODY = "body"
    FAMILY = "family"
    FOOD = "food"
    CLOTHING = "clothing"
    HOUSE = "house"
    AGRICULTURE = "agriculture"
    ANIMALS = "animals"
    TIME = "time"
    SPACE = "space"
    RELIGION = "religion"
    EMOTIONS = "emotions"
    SOCIETY = "society"
    COMMERCE = "commerce"
    CRAFT = "craft"
    MUSIC = "music"
    ABSTRACT = "abstract"
    ARCHITECTURE = "architecture"
    COMMUNITY = "community"
    WATER = "water"
    CULTURE = "culture"
    GOVERNANCE = "governance"
    SOCIAL = "social"
    DIRECTION = "direction"
    GEOGRAPHY = "geography"
    COLOR = "color"
    WEATHER = "weather"
    TEXTILE = "textile"
    IDENTITY = "identity"
    KNOWLEDGE = "knowledge"
    EMOTION = "emotion"
    NUMBERS = "numbers"
    TRAVEL = "travel"
    COMMUNICATION = "communication"
    HOUSEHOLD = "household"
    ADORNMENT = "adornment"
    PEOPLE = "people"
    WRITING = "writing"
    LANGUAGE = "language"
    POLITICS = "politics"
    COSMOLOGY = "cosmology"


class CrossReferenceType(str, Enum):
    SYNONYM = "synonym"
    ANTONYM = "antonym"
    SEE_ALSO = "see-also"
    COMPARE = "compare"
    DERIVED = "derived"
    ROOT = "root"


class SymbolCategory(str, Enum):
    GEOMETRIC = "geometric"
    ANTHROPOMORPHIC = "anthropomorphic"
    ZOOMORPHIC = "zoomorphic"
    BOTANICAL = "botanical"
    COSMIC = "cosmic"
    ABSTRACT = "abstract"
    COMPOSITE = "composite"


class SymbolMedium(str, Enum):
    TATTOO = "tattoo"
    WEAVING = "weaving"
    POTTERY = "pottery"
    JEWELRY = "jewelry"
    ARCHITECTURE = "architecture"
    DOOR = "door"
    WALL = "wall"
    CARPET = "carpet"
    TEXTILE = "textile"
    HENNA = "henna"
    METALWORK = "metalwork"
    WOOD_CARVING = "wood-carving"


class SymbolContext(str, Enum):
    WEDDING = "wedding"
    PROTECTION = "protection"
    FERTILITY = "fertility"
    DAILY_LIFE = "daily-life"
    MOURNING = "mourning"
    THRESHOLD = "threshold"
    BLESSING = "blessing"
    IDENTITY = "identity"
    SPIRITUAL = "spiritual"
    DECORATIVE = "decorative"
    RITE_OF_PASSAGE = "rite-of-passage"


class SymbolRelationship(str, Enum):
    VARIANT = "variant"
    COMPONENT = "component"
    OPPOSITE = "opposite"
    COMPLEMENTARY = "complementary"
    EVOLVED_FROM = "evolved-from"
    FAMILY = "family"


class PhraseCategory(str, Enum):
    GREETING = "greeting"
    FAREWELL = "farewell"
    INTRODUCTION = "introduction"
    QUESTION = "question"
    DIRECTION = "direction"
    SHOPPING = "shopping"
    FOOD = "food"
    TIME = "time"
    WEATHER = "weather"
    FAMILY = "family"
    COURTESY = "courtesy"
    EMERGENCY = "emergency"
    TRAVEL = "travel"
    NUMBERS = "numbers"
    PROVERB = "proverb"
    BLESSING = "blessing"
    EXPRESSION = "expression"


class PhraseFormality(str, Enum):
    FORMAL = "formal"
    INFORMAL = "informal"
    NEUTRAL = "neutral"


class Tense(str, Enum):
    """Conjugation tables a verb may carry."""
    IMPERATIVE = "imperative"
    AORIST = "aorist"
    PRETERITE = "preterite"
    NEGATIVE_PRETERITE = "negative-preterite"
    INTENSIVE = "intensive"


Confidence = Literal["high", "medium", "low"]


class CorpusModel(BaseModel):
    """Base for every corpus model: immutable, camelCase aliases accepted."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ----------------------------------------------------------------------
# Audio
# ----------------------------------------------------------------------

class AudioRecording(CorpusModel):
    id: str
    file: str
    format: Literal["mp3", "ogg", "wav", "webm"] = "mp3"
    duration: float | None = None
    region: Region | None = None
    verified: bool = False


class SingleAudio(CorpusModel):
    """A single legacy audio file."""
    kind: Literal["single"] = "single"
    file: str


class AudioCollection(CorpusModel):
    """Several recordings, optionally with a recommended one."""
    kind: Literal["collection"] = "collection"
    primary: AudioRecording | None = None
    recordings: list[AudioRecording] = Field(default_factory=list)


Audio = Annotated[Union[SingleAudio, AudioCollection], Field(discriminator="kind")]


def _tag_audio(data: Any) -> Any:
    """Attach the ``kind`` discriminant to raw audio data.

    The corpus stores either ``audioFile: "x.mp3"`` or an ``audio`` object
    with a ``recordings`` list; both are folded into the tagged ``audio``
    field.
    """
    if not isinstance(data, dict):
        return data
    data = dict(data)
    legacy = data.pop("audioFile", None) or data.pop("audio_file", None)
    audio = data.get("audio")
    if isinstance(audio, dict) and "kind" not in audio:
        data["audio"] = {"kind": "collection", **audio}
    elif audio is None and legacy:
        data["audio"] = {"kind": "single", "file": legacy}
    return data


def primary_audio_file(audio: SingleAudio | AudioCollection | None) -> str | None:
    """Return the file to play by default, if any."""
    if audio is None:
        return None
    if isinstance(audio, SingleAudio):
        return audio.file
    if audio.primary is not None:
        return audio.primary.file
    if audio.recordings:
        return audio.recordings[0].file
    return None


# ----------------------------------------------------------------------
# Dictionary entries
# ----------------------------------------------------------------------

class Definition(CorpusModel):
    meaning: str
    language: Language
    context: str | None = None
    usage_register: str | None = Field(default=None, alias="register")


class ExampleTranslation(CorpusModel):
    language: Language
    text: str


class ExampleSource(CorpusModel):
    type: str
    attribution: str | None = None
    work: str | None = None
    author: str | None = None
    year: int | None = None


class Example(CorpusModel):
    text: str
    tifinagh: str = ""
    translations: list[ExampleTranslation] = Field(default_factory=list)
    source: ExampleSource | None = None
    region: Region | None = None


class Morphology(CorpusModel):
    root: str
    root_tifinagh: str = Field(default="", alias="rootTifinagh")
    pattern: str | None = None
    state: Literal["free", "construct"] | None = None
    derived_from: str | None = Field(default=None, alias="derivedFrom")


class Etymology(CorpusModel):
    root: str | None = None
    root_tifinagh: str | None = Field(default=None, alias="rootTifinagh")
    origin: str | None = None
    notes: str | None = None


class Variant(CorpusModel):
    """An alternate form of a word in another region."""
    region: Region
    word: str
    tifinagh: str = ""
    pronunciation: str = ""
    notes: str | None = None


class CrossReference(CorpusModel):
    type: CrossReferenceType
    word_id: str = Field(default="", alias="wordId")
    word: str = ""
    tifinagh: str = ""
    notes: str | None = None


class DictionaryEntry(CorpusModel):
    """A single headword in the dictionary."""

    id: str
    word: str
    tifinagh: str
    pronunciation: str = ""
    audio: Audio | None = None
    part_of_speech: PartOfSpeech = Field(alias="partOfSpeech")
    gender: Literal["masculine", "feminine"] | None = None
    number: Literal["singular", "plural", "dual", "collective"] | None = None
    semantic_fields: list[SemanticField] = Field(default_factory=list, alias="semanticFields")
    plural: str | None = None
    plural_tifinagh: str | None = Field(default=None, alias="pluralTifinagh")
    morphology: Morphology | None = None
    definitions: list[Definition]
    etymology: Etymology | None = None
    frequency: str | None = None
    usage_register: str | None = Field(default=None, alias="register")
    status: str | None = None
    examples: list[Example] = Field(default_factory=list)
    region: Region
    variants: list[Variant] = Field(default_factory=list)
    cross_references: list[CrossReference] = Field(default_factory=list, alias="crossReferences")
    related_words: list[str] = Field(default_factory=list, alias="relatedWords")
    sources: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def fold_audio(cls, data: Any) -> Any:
        return _tag_audio(data)

    @property
    def headword(self) -> str:
        return self.word

    @property
    def script(self) -> str:
        return self.tifinagh

    @property
    def roots(self) -> list[str]:
        """Morphological and etymological roots, in that order."""
        roots = []
        if self.morphology and self.morphology.root:
            roots.append(self.morphology.root)
        if self.etymology and self.etymology.root:
            roots.append(self.etymology.root)
        return roots

    def translations(self) -> Iterator[tuple[Language, str]]:
        for definition in self.definitions:
            yield definition.language, definition.meaning

    def meaning(self, language: Language | str = Language.EN) -> str:
        """Meaning in ``language``, falling back to the first definition."""
        for definition in self.definitions:
            if definition.language == language:
                return definition.meaning
        return self.definitions[0].meaning if self.definitions else ""


# ----------------------------------------------------------------------
# Verbs
# ----------------------------------------------------------------------

# Person/number/gender slots in display order.
PERSON_SLOTS = ("1s", "2s", "3sm", "3sf", "1p", "2pm", "2pf", "3pm", "3pf")


class Conjugation(CorpusModel):
    """Forms of one tense keyed by person slot (imperatives use singular/plural)."""
    singular: str | None = None
    plural: str | None = None
    s1: str | None = Field(default=None, alias="1s")
    s2: str | None = Field(default=None, alias="2s")
    s3m: str | None = Field(default=None, alias="3sm")
    s3f: str | None = Field(default=None, alias="3sf")
    p1: str | None = Field(default=None, alias="1p")
    p2m: str | None = Field(default=None, alias="2pm")
    p2f: str | None = Field(default=None, alias="2pf")
    p3m: str | None = Field(default=None, alias="3pm")
    p3f: str | None = Field(default=None, alias="3pf")

    def forms(self) -> dict[str, str]:
        """Filled slots, keyed by corpus slot name, in display order."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        order = ("singular", "plural", *PERSON_SLOTS)
        return {slot: data[slot] for slot in order if slot in data}


class VerbConjugations(CorpusModel):
    imperative: Conjugation
    aorist: Conjugation
    preterite: Conjugation
    negative_preterite: Conjugation | None = Field(default=None, alias="negativePreterite")
    intensive: Conjugation | None = None
    perfective_participle: str | None = Field(default=None, alias="perfectiveParticiple")
    imperfective_participle: str | None = Field(default=None, alias="imperfectiveParticiple")


_TENSE_ATTRS = {
    Tense.IMPERATIVE: "imperative",
    Tense.AORIST: "aorist",
    Tense.PRETERITE: "preterite",
    Tense.NEGATIVE_PRETERITE: "negative_preterite",
    Tense.INTENSIVE: "intensive",
}


class VerbEntry(CorpusModel):
    id: str
    infinitive: str
    tifinagh: str
    definitions: list[Definition] = Field(default_factory=list)
    meaning: str
    meaning_fr: str = Field(alias="meaningFr")
    root: str | None = None
    root_tifinagh: str | None = Field(default=None, alias="rootTifinagh")
    verb_class: str | None = Field(default=None, alias="verbClass")
    transitivity: str | None = None
    conjugations: VerbConjugations
    region: Region
    variants: list[Variant] = Field(default_factory=list)
    examples: list[Example] = Field(default_factory=list)

    @property
    def headword(self) -> str:
        return self.infinitive

    @property
    def script(self) -> str:
        return self.tifinagh

    @property
    def roots(self) -> list[str]:
        return [self.root] if self.root else []

    def translations(self) -> Iterator[tuple[Language, str]]:
        yield Language.EN, self.meaning
        yield Language.FR, self.meaning_fr
        for definition in self.definitions:
            yield definition.language, definition.meaning

    def conjugation(self, tense: Tense | str) -> Conjugation | None:
        """Conjugation table for ``tense``, or None if the verb lacks it."""
        try:
            attr = _TENSE_ATTRS[Tense(tense)]
        except ValueError:
            return None
        return getattr(self.conjugations, attr)

    def tenses(self) -> list[Tense]:
        return [tense for tense in Tense if self.conjugation(tense) is not None]


# ----------------------------------------------------------------------
# Symbols
# ----------------------------------------------------------------------

class AttestedMeaning(CorpusModel):
    """Layer A: documented, academic meaning."""
    meaning: str
    region: Region
    medium: list[SymbolMedium] = Field(default_factory=list)
    context: list[SymbolContext] = Field(default_factory=list)
    source: str
    source_type: str = Field(default="academic", alias="sourceType")
    confidence: Confidence = "medium"
    notes: str | None = None


class OralMeaning(CorpusModel):
    """Layer B: community interpretation, possibly contradicting others."""
    meaning: str
    region: Region
    speaker: str | None = None
    speaker_context: str | None = Field(default=None, alias="speakerContext")
    collected_in: str | None = Field(default=None, alias="collectedIn")
    medium: list[SymbolMedium] = Field(default_factory=list)
    contradicts: str | None = None
    notes: str | None = None


class ModernMeaning(CorpusModel):
    """Layer C: contemporary reinterpretation."""
    meaning: str
    interpreter: str
    interpreter_type: str = Field(default="community", alias="interpreterType")
    context: str = ""
    year: int | None = None
    medium: list[SymbolMedium] = Field(default_factory=list)
    notes: str | None = None


class RelatedSymbol(CorpusModel):
    symbol_id: str = Field(alias="symbolId")
    relationship: SymbolRelationship
    notes: str | None = None


class SymbolWordLink(CorpusModel):
    word_id: str = Field(alias="wordId")
    word: str = ""
    tifinagh: str = ""
    relationship: str = "associated-phrase"
    notes: str | None = None


class LinkedRoot(CorpusModel):
    root: str
    root_tifinagh: str | None = Field(default=None, alias="rootTifinagh")
    meaning: str = ""
    notes: str | None = None


class SymbolEntry(CorpusModel):
    id: str
    name: str
    name_tifinagh: str = Field(default="", alias="nameTifinagh")
    name_arabic: str | None = Field(default=None, alias="nameArabic")
    name_french: str | None = Field(default=None, alias="nameFrench")
    name_english: str | None = Field(default=None, alias="nameEnglish")
    alternate_names: list[str] = Field(default_factory=list, alias="alternateNames")
    category: SymbolCategory
    tags: list[str] = Field(default_factory=list)
    primary_region: Region = Field(alias="primaryRegion")
    regions: list[Region] = Field(default_factory=list)
    media: list[SymbolMedium] = Field(default_factory=list)
    attested_usage: list[AttestedMeaning] = Field(default_factory=list, alias="attestedUsage")
    oral_interpretations: list[OralMeaning] = Field(default_factory=list, alias="oralInterpretations")
    contemporary_readings: list[ModernMeaning] = Field(default_factory=list, alias="contemporaryReadings")
    contexts: list[SymbolContext] = Field(default_factory=list)
    linked_words: list[SymbolWordLink] = Field(default_factory=list, alias="linkedWords")
    linked_roots: list[LinkedRoot] = Field(default_factory=list, alias="linkedRoots")
    related_symbols: list[RelatedSymbol] = Field(default_factory=list, alias="relatedSymbols")
    status: Literal["active", "declining", "archaic", "reviving", "extinct"] = "active"
    sources: list[str] = Field(default_factory=list)
    confidence: Confidence = "medium"

    @property
    def region(self) -> Region:
        return self.primary_region

    @property
    def headword(self) -> str:
        return self.name

    @property
    def script(self) -> str:
        return self.name_tifinagh

    @property
    def roots(self) -> list[str]:
        return [link.root for link in self.linked_roots]

    @property
    def names(self) -> list[str]:
        """Every name the symbol is known by, primary name first."""
        names = [self.name, self.name_english, self.name_french, *self.alternate_names]
        return [name for name in names if name]

    def translations(self) -> Iterator[tuple[Language, str]]:
        if self.name_english:
            yield Language.EN, self.name_english
        if self.name_french:
            yield Language.FR, self.name_french
        if self.name_arabic:
            yield Language.AR, self.name_arabic

    def interpretation_layers(self) -> dict[str, list[str]]:
        """Meanings per layer: attested, oral, contemporary."""
        return {
            "attested": [m.meaning for m in self.attested_usage],
            "oral": [m.meaning for m in self.oral_interpretations],
            "contemporary": [m.meaning for m in self.contemporary_readings],
        }


class SymbolFamily(CorpusModel):
    id: str
    name: str
    name_tifinagh: str | None = Field(default=None, alias="nameTifinagh")
    description: str = ""
    symbols: list[str] = Field(default_factory=list)
    region: Region | None = None


# ----------------------------------------------------------------------
# Phrases
# ----------------------------------------------------------------------

class PhraseTranslations(CorpusModel):
    en: str
    fr: str
    ar: str | None = None
    es: str | None = None


class PhraseEntry(CorpusModel):
    id: str
    phrase: str
    tifinagh: str
    pronunciation: str = ""
    translations: PhraseTranslations
    literal_translation: str | None = Field(default=None, alias="literalTranslation")
    category: PhraseCategory
    formality: PhraseFormality = PhraseFormality.NEUTRAL
    context: str | None = None
    response: str | None = None
    region: Region
    related_phrases: list[str] = Field(default_factory=list, alias="relatedPhrases")
    related_words: list[str] = Field(default_factory=list, alias="relatedWords")
    cultural_note: str | None = Field(default=None, alias="culturalNote")

    @property
    def headword(self) -> str:
        return self.phrase

    @property
    def script(self) -> str:
        return self.tifinagh

    @property
    def roots(self) -> list[str]:
        return []

    def translations_by_language(self) -> dict[Language, str]:
        data = self.translations.model_dump(exclude_none=True)
        return {Language(lang): text for lang, text in data.items() if text}

    def iter_translations(self) -> Iterator[tuple[Language, str]]:
        yield from self.translations_by_language().items()

    def translation(self, language: Language | str = Language.EN) -> str:
        """Translation in ``language``, falling back to the first available one."""
        available = self.translations_by_language()
        try:
            return available[Language(language)]
        except (KeyError, ValueError):
            return next(iter(available.values()), "")


class PhraseCategoryInfo(CorpusModel):
    id: PhraseCategory
    name: str
    name_tifinagh: str | None = Field(default=None, alias="nameTifinagh")
    description: str = ""


Entity = Union[DictionaryEntry, VerbEntry, SymbolEntry, PhraseEntry]

ENTITY_MODELS: dict[EntityKind, type[CorpusModel]] = {
    EntityKind.DICTIONARY: DictionaryEntry,
    EntityKind.VERBS: VerbEntry,
    EntityKind.SYMBOLS: SymbolEntry,
    EntityKind.PHRASES: PhraseEntry,
}


def entity_translations(entity: Entity) -> Iterator[tuple[Language, str]]:
    """Language-tagged translations of any entity kind."""
    if isinstance(entity, PhraseEntry):
        return entity.iter_translations()
    return entity.translations()
