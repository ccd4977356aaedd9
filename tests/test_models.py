"""
Unit tests for the lexicon data models.
"""

import pytest
from pydantic import ValidationError

from amawal.models import (
    AudioCollection,
    CrossReferenceType,
    DictionaryEntry,
    Language,
    PhraseEntry,
    SingleAudio,
    SymbolEntry,
    Tense,
    VerbEntry,
    entity_translations,
    primary_audio_file,
)


def make_entry(**overrides) -> DictionaryEntry:
    data = {
        "id": "w1",
        "word": "aman",
        "tifinagh": "ⴰⵎⴰⵏ",
        "partOfSpeech": "noun",
        "definitions": [{"meaning": "water", "language": "en"}],
        "region": "tachelhit",
    }
    data.update(overrides)
    return DictionaryEntry.model_validate(data)


class TestDictionaryEntry:
    """Test DictionaryEntry parsing and helpers."""

    def test_camel_case_aliases(self) -> None:
        """Test that corpus camelCase keys populate snake_case fields."""
        entry = make_entry(
            semanticFields=["water"],
            pluralTifinagh="ⵉⵎⴰⵏ",
            crossReferences=[{"type": "see-also", "wordId": "w2"}],
        )
        assert entry.part_of_speech.value == "noun"
        assert entry.semantic_fields[0].value == "water"
        assert entry.plural_tifinagh == "ⵉⵎⴰⵏ"
        assert entry.cross_references[0].type == CrossReferenceType.SEE_ALSO
        assert entry.cross_references[0].word_id == "w2"

    def test_register_key(self) -> None:
        """Test that the corpus 'register' key fills usage_register without shadowing BaseModel."""
        entry = make_entry(
            register="formal",
            definitions=[{"meaning": "water", "language": "en", "register": "literary"}],
        )
        assert entry.usage_register == "formal"
        assert entry.definitions[0].usage_register == "literary"
        assert "register" not in DictionaryEntry.model_fields
        assert make_entry().usage_register is None

    def test_entries_are_frozen(self) -> None:
        """Test that loaded entries cannot be mutated."""
        entry = make_entry()
        with pytest.raises(ValidationError):
            entry.word = "amane"

    def test_missing_required_field_rejected(self) -> None:
        """Test that an entry without definitions is invalid."""
        with pytest.raises(ValidationError):
            DictionaryEntry.model_validate({
                "id": "w1", "word": "aman", "tifinagh": "ⴰⵎⴰⵏ",
                "partOfSpeech": "noun", "region": "tachelhit",
            })

    def test_unsupported_language_rejected(self) -> None:
        """Test that definitions must use a supported language tag."""
        with pytest.raises(ValidationError):
            make_entry(definitions=[{"meaning": "Wasser", "language": "de"}])

    def test_unknown_region_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_entry(region="atlantis")

    def test_roots_in_order(self) -> None:
        """Test that morphology root comes before etymology root."""
        entry = make_entry(morphology={"root": "m-n"}, etymology={"root": "m-w-n"})
        assert entry.roots == ["m-n", "m-w-n"]
        assert make_entry().roots == []

    def test_meaning_in_language(self) -> None:
        entry = make_entry(definitions=[
            {"meaning": "water", "language": "en"},
            {"meaning": "eau", "language": "fr"},
        ])
        assert entry.meaning("fr") == "eau"
        assert entry.meaning(Language.EN) == "water"

    def test_meaning_falls_back_to_first_definition(self) -> None:
        """Test that a missing language falls back to the first translation."""
        entry = make_entry(definitions=[{"meaning": "eau", "language": "fr"}])
        assert entry.meaning(Language.EN) == "eau"

    def test_translations_are_language_tagged(self) -> None:
        entry = make_entry(definitions=[
            {"meaning": "water", "language": "en"},
            {"meaning": "agua", "language": "es"},
        ])
        assert list(entry.translations()) == [(Language.EN, "water"), (Language.ES, "agua")]


class TestAudio:
    """Test the tagged audio variant."""

    def test_legacy_audio_file_becomes_single(self) -> None:
        """Test that audioFile is folded into a single-recording variant."""
        entry = make_entry(audioFile="aman.mp3")
        assert isinstance(entry.audio, SingleAudio)
        assert entry.audio.kind == "single"
        assert primary_audio_file(entry.audio) == "aman.mp3"

    def test_recordings_become_collection(self) -> None:
        """Test that an audio object with recordings is a collection variant."""
        entry = make_entry(audio={
            "recordings": [
                {"id": "r1", "file": "aman-1.mp3"},
                {"id": "r2", "file": "aman-2.ogg", "format": "ogg"},
            ],
        })
        assert isinstance(entry.audio, AudioCollection)
        assert len(entry.audio.recordings) == 2
        assert primary_audio_file(entry.audio) == "aman-1.mp3"

    def test_collection_primary_preferred(self) -> None:
        entry = make_entry(audio={
            "primary": {"id": "r2", "file": "aman-2.mp3"},
            "recordings": [{"id": "r1", "file": "aman-1.mp3"}],
        })
        assert primary_audio_file(entry.audio) == "aman-2.mp3"

    def test_explicit_collection_wins_over_legacy_file(self) -> None:
        entry = make_entry(audioFile="old.mp3", audio={"recordings": [{"id": "r1", "file": "new.mp3"}]})
        assert primary_audio_file(entry.audio) == "new.mp3"

    def test_no_audio(self) -> None:
        assert make_entry().audio is None
        assert primary_audio_file(None) is None
        assert primary_audio_file(AudioCollection()) is None


class TestVerbEntry:
    """Test VerbEntry conjugation access."""

    @pytest.fixture
    def verb(self) -> VerbEntry:
        return VerbEntry.model_validate({
            "id": "v1",
            "infinitive": "ara",
            "tifinagh": "ⴰⵔⴰ",
            "meaning": "to write",
            "meaningFr": "écrire",
            "root": "r",
            "conjugations": {
                "imperative": {"singular": "ara", "plural": "arat"},
                "aorist": {"3sm": "yara", "1s": "araɣ"},
                "preterite": {"1s": "uriɣ"},
                "negativePreterite": {"1s": "ur uriɣ"},
            },
            "region": "tachelhit",
        })

    def test_forms_in_slot_order(self, verb: VerbEntry) -> None:
        """Test that forms are keyed by corpus slot name in display order."""
        assert verb.conjugation(Tense.AORIST).forms() == {"1s": "araɣ", "3sm": "yara"}
        assert verb.conjugation("imperative").forms() == {"singular": "ara", "plural": "arat"}

    def test_optional_tenses(self, verb: VerbEntry) -> None:
        assert verb.conjugation(Tense.NEGATIVE_PRETERITE).forms() == {"1s": "ur uriɣ"}
        assert verb.conjugation(Tense.INTENSIVE) is None
        assert verb.tenses() == [
            Tense.IMPERATIVE, Tense.AORIST, Tense.PRETERITE, Tense.NEGATIVE_PRETERITE,
        ]

    def test_unknown_tense_is_absent(self, verb: VerbEntry) -> None:
        assert verb.conjugation("future") is None

    def test_translations(self, verb: VerbEntry) -> None:
        assert list(verb.translations()) == [(Language.EN, "to write"), (Language.FR, "écrire")]
        assert verb.headword == "ara"
        assert verb.roots == ["r"]


class TestSymbolEntry:
    """Test SymbolEntry helpers."""

    @pytest.fixture
    def symbol(self) -> SymbolEntry:
        return SymbolEntry.model_validate({
            "id": "s1",
            "name": "yaz",
            "nameTifinagh": "ⵣ",
            "nameEnglish": "free man",
            "nameFrench": "homme libre",
            "alternateNames": ["aza"],
            "category": "abstract",
            "primaryRegion": "tachelhit",
            "attestedUsage": [{"meaning": "Emblem", "region": "tachelhit", "source": "Chaker"}],
            "contemporaryReadings": [{"meaning": "Flag", "interpreter": "Movement"}],
            "linkedRoots": [{"root": "m-z-ɣ"}],
        })

    def test_region_is_primary_region(self, symbol: SymbolEntry) -> None:
        assert symbol.region.value == "tachelhit"

    def test_names(self, symbol: SymbolEntry) -> None:
        assert symbol.names == ["yaz", "free man", "homme libre", "aza"]

    def test_interpretation_layers(self, symbol: SymbolEntry) -> None:
        """Test that the three layers are reported separately, even when empty."""
        assert symbol.interpretation_layers() == {
            "attested": ["Emblem"],
            "oral": [],
            "contemporary": ["Flag"],
        }

    def test_roots_and_script(self, symbol: SymbolEntry) -> None:
        assert symbol.roots == ["m-z-ɣ"]
        assert symbol.script == "ⵣ"


class TestPhraseEntry:
    """Test PhraseEntry translations."""

    @pytest.fixture
    def phrase(self) -> PhraseEntry:
        return PhraseEntry.model_validate({
            "id": "p1",
            "phrase": "azul",
            "tifinagh": "ⴰⵣⵓⵍ",
            "translations": {"en": "Hello", "fr": "Bonjour"},
            "category": "greeting",
            "region": "tachelhit",
        })

    def test_requires_english_and_french(self) -> None:
        with pytest.raises(ValidationError):
            PhraseEntry.model_validate({
                "id": "p1", "phrase": "azul", "tifinagh": "ⴰⵣⵓⵍ",
                "translations": {"en": "Hello"},
                "category": "greeting", "region": "tachelhit",
            })

    def test_default_formality(self, phrase: PhraseEntry) -> None:
        assert phrase.formality.value == "neutral"

    def test_translation_fallback(self, phrase: PhraseEntry) -> None:
        """Test that a missing language falls back to the first translation."""
        assert phrase.translation("fr") == "Bonjour"
        assert phrase.translation(Language.AR) == "Hello"
        assert phrase.translation("xx") == "Hello"

    def test_entity_translations(self, phrase: PhraseEntry) -> None:
        assert list(entity_translations(phrase)) == [(Language.EN, "Hello"), (Language.FR, "Bonjour")]
