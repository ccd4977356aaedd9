"""
Linked-data documents (schema.org DefinedTerm / DefinedTermSet) for the
dictionary query surface.
"""

from typing import Any
from urllib.parse import quote

from .models import DictionaryEntry, Language

TERM_SET_NAME = "Amawal Tamazight Dictionary"
TERM_SET_DESCRIPTION = (
    "Tamazight (Tachelhit) dictionary with Tifinagh script, pronunciation, "
    "etymology, and cultural context."
)
TERM_SET_LANGUAGES = ["tzm", *(language.value for language in Language)]


def entry_url(entry: DictionaryEntry, site_url: str) -> str:
    return f"{site_url.rstrip('/')}/dictionary/{quote(entry.word, safe='')}"


def word_document(entry: DictionaryEntry, site_url: str) -> dict[str, Any]:
    """A single entry as a schema.org DefinedTerm."""
    return {
        "@context": "https://schema.org",
        "@type": "DefinedTerm",
        "name": entry.word,
        "alternateName": entry.tifinagh,
        "description": entry.meaning(Language.EN),
        "inDefinedTermSet": {
            "@type": "DefinedTermSet",
            "name": TERM_SET_NAME,
            "url": site_url,
        },
        "termCode": entry.pronunciation,
        "url": entry_url(entry, site_url),
    }


def search_document(query: str, entries: list[DictionaryEntry], site_url: str) -> dict[str, Any]:
    """Search results; an empty result list is still a successful response."""
    return {
        "query": query,
        "count": len(entries),
        "results": [
            {
                "id": e.id,
                "word": e.word,
                "tifinagh": e.tifinagh,
                "pronunciation": e.pronunciation,
                "partOfSpeech": e.part_of_speech.value,
                "meaning": e.meaning(Language.EN),
                "url": entry_url(e, site_url),
            }
            for e in entries
        ],
    }


def _term_properties(entry: DictionaryEntry) -> list[dict[str, str]]:
    props = {
        "gender": entry.gender,
        "partOfSpeech": entry.part_of_speech.value,
        "frequency": entry.frequency,
        "plural": entry.plural,
    }
    return [
        {"@type": "PropertyValue", "name": name, "value": value}
        for name, value in props.items()
        if value
    ]


def term_set_document(
    entries: list[DictionaryEntry],
    site_url: str,
    simple: bool = False,
) -> dict[str, Any]:
    """The (optionally filtered) dictionary as a DefinedTermSet.

    Args:
        entries: Entries to include
        site_url: Base URL for term links
        simple: Emit a compact term list instead of full DefinedTerms
    """
    document: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "DefinedTermSet",
        "name": TERM_SET_NAME,
        "url": site_url,
        "description": TERM_SET_DESCRIPTION,
        "numberOfTerms": len(entries),
    }

    if simple:
        document["terms"] = [
            {
                "word": e.word,
                "tifinagh": e.tifinagh,
                "meaning": e.meaning(Language.EN),
                "partOfSpeech": e.part_of_speech.value,
            }
            for e in entries
        ]
        return document

    document["inLanguage"] = TERM_SET_LANGUAGES
    document["hasDefinedTerm"] = [
        {
            "@type": "DefinedTerm",
            "name": e.word,
            "alternateName": e.tifinagh,
            "description": e.meaning(Language.EN),
            "termCode": e.pronunciation,
            "url": entry_url(e, site_url),
            "additionalProperty": _term_properties(e),
        }
        for e in entries
    ]
    return document
