"""
Pytest configuration and fixtures for amawal tests.
"""

import copy
import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

# Add src directory to Python path to allow importing amawal
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from amawal.corpus import EntityStore  # noqa: E402


def _entry(entry_id: str, word: str, tifinagh: str, definitions: list[tuple[str, str]], **extra: Any) -> dict:
    return {
        "id": entry_id,
        "word": word,
        "tifinagh": tifinagh,
        "partOfSpeech": extra.pop("partOfSpeech", "noun"),
        "definitions": [{"meaning": meaning, "language": lang} for lang, meaning in definitions],
        "region": extra.pop("region", "tachelhit"),
        **extra,
    }


TEST_CORPUS: dict[str, dict[str, Any]] = {
    "dictionary": {
        "tachelhit": {
            "metadata": {"version": "test"},
            "entries": [
                _entry(
                    "w1", "aman", "ⴰⵎⴰⵏ", [("en", "water"), ("fr", "eau")],
                    semanticFields=["water", "nature"],
                    morphology={"root": "m-n"},
                    audioFile="aman.mp3",
                    crossReferences=[
                        {"type": "see-also", "wordId": "w5", "word": "asif"},
                        {"type": "synonym", "wordId": "ghost-id", "word": "ghost"},
                        {"type": "see-also", "word": "amane"},
                    ],
                ),
                _entry("w2", "amane", "ⴰⵎⴰⵏⴻ", [("en", "flood")], partOfSpeech="adjective"),
                _entry(
                    "w3", "akal", "ⴰⴽⴰⵍ", [("en", "earth"), ("fr", "terre")],
                    semanticFields=["nature"],
                    morphology={"root": "k-l"},
                    plural="akalen",
                    crossReferences=[{"type": "derived", "wordId": "w4"}],
                ),
                _entry(
                    "w4", "takalt", "ⵜⴰⴽⴰⵍⵜ", [("en", "plot of land"), ("fr", "parcelle")],
                    semanticFields=["agriculture"],
                    etymology={"root": "k-l"},
                    relatedWords=["akal", "nowhere"],
                ),
                _entry(
                    "w5", "asif", "ⴰⵙⵉⴼ", [("en", "river")],
                    semanticFields=["water"],
                    plural="isaffen",
                ),
                _entry("w6", "tanirt", "ⵜⴰⵏⵉⵔⵜ", [("fr", "ange")]),
                _entry("x001", "tafukt", "ⵜⴰⴼⵓⴽⵜ", [("en", "sun")]),
            ],
        },
        "tachelhit-enhanced": {
            "entries": [
                _entry("x001", "tafukt", "ⵜⴰⴼⵓⴽⵜ", [("en", "sunshine"), ("fr", "soleil")], status="verified"),
                _entry("w8", "agadir", "ⴰⴳⴰⴷⵉⵔ", [("en", "fortified granary")]),
            ],
        },
        "kabyle": [
            _entry("k1", "aman", "ⴰⵎⴰⵏ", [("en", "water")], region="kabyle"),
        ],
    },
    "verbs": {
        "tachelhit": {
            "verbs": [
                {
                    "id": "v1",
                    "infinitive": "ara",
                    "tifinagh": "ⴰⵔⴰ",
                    "meaning": "to write",
                    "meaningFr": "écrire",
                    "root": "r",
                    "conjugations": {
                        "imperative": {"singular": "ara", "plural": "arat"},
                        "aorist": {"1s": "araɣ", "3sm": "yara"},
                        "preterite": {"1s": "uriɣ", "3sm": "yura"},
                        "intensive": {"3sm": "itara"},
                    },
                    "region": "tachelhit",
                },
                {
                    "id": "v2",
                    "infinitive": "kel",
                    "tifinagh": "ⴽⴻⵍ",
                    "meaning": "to spend the day",
                    "meaningFr": "passer la journée",
                    "root": "K-L",
                    "conjugations": {
                        "imperative": {"singular": "kel"},
                        "aorist": {"3sm": "ikel"},
                        "preterite": {"3sm": "ikla"},
                    },
                    "region": "tachelhit",
                },
            ],
        },
    },
    "symbols": {
        "tachelhit": {
            "families": [
                {"id": "f1", "name": "Identity signs", "symbols": ["s1", "s2", "s404"]},
            ],
            "symbols": [
                {
                    "id": "s1",
                    "name": "yaz",
                    "nameTifinagh": "ⵣ",
                    "nameEnglish": "free man",
                    "category": "abstract",
                    "primaryRegion": "tachelhit",
                    "media": ["jewelry"],
                    "contexts": ["identity"],
                    "attestedUsage": [
                        {"meaning": "Emblem of the free person", "region": "tachelhit", "source": "Chaker"},
                    ],
                    "oralInterpretations": [
                        {"meaning": "A person with raised arms", "region": "tachelhit"},
                    ],
                    "contemporaryReadings": [
                        {"meaning": "Centre of the Amazigh flag", "interpreter": "Cultural movement"},
                    ],
                    "linkedWords": [
                        {"wordId": "w1", "word": "aman"},
                        {"wordId": "w404"},
                    ],
                    "linkedRoots": [{"root": "k-l"}],
                    "relatedSymbols": [
                        {"symbolId": "s2", "relationship": "variant"},
                        {"symbolId": "s404", "relationship": "component"},
                    ],
                },
                {
                    "id": "s2",
                    "name": "tit",
                    "nameTifinagh": "ⵜⵉⵜ",
                    "nameEnglish": "eye",
                    "nameFrench": "œil",
                    "alternateNames": ["lozenge"],
                    "category": "geometric",
                    "tags": ["protection"],
                    "primaryRegion": "tachelhit",
                    "media": ["tattoo", "carpet"],
                    "contexts": ["protection"],
                    "status": "declining",
                },
            ],
        },
    },
    "phrases": {
        "tachelhit": {
            "categories": [
                {"id": "greeting", "name": "Greetings"},
            ],
            "phrases": [
                {
                    "id": "p1",
                    "phrase": "azul",
                    "tifinagh": "ⴰⵣⵓⵍ",
                    "translations": {"en": "Hello", "fr": "Bonjour"},
                    "category": "greeting",
                    "response": "p2",
                    "relatedPhrases": ["p2", "p404"],
                    "relatedWords": ["w1", "w404"],
                    "region": "tachelhit",
                },
                {
                    "id": "p2",
                    "phrase": "azul fellawen",
                    "tifinagh": "ⴰⵣⵓⵍ ⴼⵍⵍⴰⵡⵏ",
                    "translations": {"en": "Hello to you", "fr": "Bonjour à vous"},
                    "category": "greeting",
                    "formality": "formal",
                    "region": "tachelhit",
                },
                {
                    "id": "p3",
                    "phrase": "tanmmirt",
                    "tifinagh": "ⵜⴰⵏⵎⵎⵉⵔⵜ",
                    "translations": {"en": "Thank you", "fr": "Merci"},
                    "category": "courtesy",
                    "context": "After a meal",
                    "response": "p404",
                    "region": "tachelhit",
                },
                {
                    "id": "p4",
                    "phrase": "ar tufat",
                    "tifinagh": "ⴰⵔ ⵜⵓⴼⴰⵜ",
                    "translations": {"en": "See you tomorrow", "fr": "À demain"},
                    "literalTranslation": "until the morning",
                    "category": "farewell",
                    "region": "tachelhit",
                },
            ],
        },
    },
}


def write_corpus(root: Path, corpus: dict[str, dict[str, Any]], fmt: str = "json") -> Path:
    """Write ``{kind: {stem: content}}`` as corpus files under ``root``."""
    for kind, files in corpus.items():
        kind_dir = root / kind
        kind_dir.mkdir(parents=True, exist_ok=True)
        for stem, content in files.items():
            path = kind_dir / f"{stem}.{fmt}"
            if fmt == "json":
                path.write_text(json.dumps(content, ensure_ascii=False), encoding="utf-8")
            else:
                path.write_text(yaml.safe_dump(content, allow_unicode=True), encoding="utf-8")
    return root


@pytest.fixture
def corpus_data() -> dict[str, dict[str, Any]]:
    """A fresh, mutable copy of the test corpus."""
    return copy.deepcopy(TEST_CORPUS)


@pytest.fixture
def make_corpus(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a corpus into a fresh directory under tmp_path."""
    counter = iter(range(1000))

    def _make(corpus: dict[str, dict[str, Any]], fmt: str = "json") -> Path:
        return write_corpus(tmp_path / f"corpus{next(counter)}", corpus, fmt)

    return _make


@pytest.fixture
def corpus_dir(make_corpus, corpus_data) -> Path:
    """The test corpus written as JSON."""
    return make_corpus(corpus_data)


@pytest.fixture
def store(corpus_dir: Path) -> EntityStore:
    """An EntityStore loaded from the test corpus."""
    return EntityStore.from_directory(corpus_dir)
