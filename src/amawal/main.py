"""
Amawal MCP Server
Read-only query tools over the Tamazight lexicon, built with FastMCP.
"""

import json
import logging
from typing import Annotated, Any, Literal

from fastmcp import FastMCP
from pydantic import Field

from .config import load_config
from .corpus import EntityStore, get_store
from .crossref import (
    get_phrase_response,
    get_related_symbols,
    get_linked_entries,
    get_symbols_linked_to_word,
    group_cross_references,
    resolve_cross_references,
    word_family,
)
from .documents import search_document, term_set_document, word_document
from .facets import FacetIndex, filter_entries_by_category
from .models import EntityKind, Language, PERSON_SLOTS
from .search import (
    search_by_language,
    search_entries,
    search_phrases,
    search_phrases_by_direction,
    search_symbols as search_symbol_entries,
)
from .transliteration import is_tifinagh, to_latin, to_tifinagh

logger = logging.getLogger("amawal")

config = load_config()

logging.basicConfig(
    level=config.log_level.upper(),
    )

logger.debug(f"📂 Corpus path: {config.data_dir}")

store = get_store(config.data_dir)
facet_index = FacetIndex(store)
logger.debug("✅ Entity store initialized")

mcp = FastMCP(
    name="amawal"
)

RegionCode = Literal["tachelhit", "kabyle", "tarifit", "central-atlas", "tuareg", "zenaga", "ghomara"]
LanguageCode = Literal["en", "fr", "ar", "es"]
DirectionCode = Literal["en-tzm", "fr-tzm", "tzm-en", "tzm-fr"]


def _dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _not_found(message: str) -> dict:
    return {"error": message, "status": 404}


def _region(region: str | None) -> str:
    return region or config.default_region.value


# ----------------------------------------------------------------------
# Tool logic (plain functions, store passed explicitly)
# ----------------------------------------------------------------------

def _lookup_word_logic(store: EntityStore, word: str, region: str, site_url: str) -> dict:
    if not word or not word.strip():
        return {"error": "Missing 'word' parameter", "status": 400}
    entry = store.get_entry_by_word(word.strip(), region)
    if entry is None:
        return _not_found("Word not found")
    document = word_document(entry, site_url)
    groups = group_cross_references(resolve_cross_references(store, entry, region))
    document["crossReferences"] = {
        ref_type.value: [ref.entry.word for ref in refs] for ref_type, refs in groups.items()
    }
    document["symbols"] = [s.name for s in get_symbols_linked_to_word(store, entry.id, region)]
    return document


def _search_dictionary_logic(
    store: EntityStore,
    query: str,
    language: str | None,
    region: str,
    limit: int,
    site_url: str,
) -> dict:
    if language:
        results = search_by_language(store, query, language, region)[:limit]
    else:
        results = search_entries(store, query, region, limit=limit)
    return search_document(query, results, site_url)


def _dictionary_terms_logic(
    store: EntityStore, category: str | None, format: str, region: str, site_url: str
) -> dict:
    entries = filter_entries_by_category(store, category, region) if category else store.entries(region)
    return term_set_document(entries, site_url, simple=(format == "simple"))


def _conjugation_logic(store: EntityStore, verb: str, region: str) -> dict:
    entry = store.get_verb_by_infinitive(verb, region)
    if entry is None:
        return _not_found("Verb not found")
    return {
        "infinitive": entry.infinitive,
        "tifinagh": entry.tifinagh,
        "meaning": {"en": entry.meaning, "fr": entry.meaning_fr},
        "root": entry.root,
        "slots": list(PERSON_SLOTS),
        "tenses": {tense.value: entry.conjugation(tense).forms() for tense in entry.tenses()},
    }


def _symbol_summary(symbol) -> dict:
    return {
        "id": symbol.id,
        "name": symbol.name,
        "tifinagh": symbol.name_tifinagh,
        "english": symbol.name_english,
        "category": symbol.category.value,
    }


def _symbol_logic(store: EntityStore, name_or_id: str, region: str) -> dict:
    symbol = store.get_symbol_by_id(name_or_id, region) or store.get_symbol_by_name(name_or_id, region)
    if symbol is None:
        return _not_found("Symbol not found")
    return {
        **_symbol_summary(symbol),
        "media": [m.value for m in symbol.media],
        "contexts": [c.value for c in symbol.contexts],
        "layers": symbol.interpretation_layers(),
        "related": [_symbol_summary(s) for s in get_related_symbols(store, symbol)],
        "words": [e.word for e in get_linked_entries(store, symbol)],
    }


def _phrase_summary(store: EntityStore, phrase, language: str) -> dict:
    response = get_phrase_response(store, phrase)
    return {
        "id": phrase.id,
        "phrase": phrase.phrase,
        "tifinagh": phrase.tifinagh,
        "translation": phrase.translation(language),
        "category": phrase.category.value,
        "formality": phrase.formality.value,
        "response": response.phrase if response else None,
    }


def _search_phrases_logic(
    store: EntityStore, query: str, direction: str | None, region: str, limit: int
) -> dict:
    if direction:
        phrases = search_phrases_by_direction(store, query, direction, region, limit=limit)
        language = "fr" if "fr" in direction else "en"
    else:
        phrases = search_phrases(store, query, region)[:limit]
        language = "en"
    return {
        "query": query,
        "direction": direction,
        "count": len(phrases),
        "results": [_phrase_summary(store, p, language) for p in phrases],
    }


def _word_family_logic(store: EntityStore, root: str, region: str) -> dict:
    family = word_family(store, root, region)
    return {
        "root": root,
        "size": family.size,
        "entries": [{"word": e.word, "tifinagh": e.tifinagh, "meaning": e.meaning()} for e in family.entries],
        "verbs": [{"infinitive": v.infinitive, "meaning": v.meaning} for v in family.verbs],
        "symbols": [_symbol_summary(s) for s in family.symbols],
    }


def _transliterate_logic(text: str, target: str) -> dict:
    if target == "auto":
        target = "latin" if is_tifinagh(text) else "tifinagh"
    converted = to_latin(text) if target == "latin" else to_tifinagh(text)
    return {"input": text, "target": target, "output": converted}


# ----------------------------------------------------------------------
# Tools
# ----------------------------------------------------------------------

@mcp.tool
def lookup_word(
    word: Annotated[str, Field(description="Word in Latin transliteration (any case) or exact Tifinagh")],
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
) -> str:
    """Look up a single dictionary entry as a schema.org DefinedTerm."""
    return _dump(_lookup_word_logic(store, word, _region(region), config.site_url))


@mcp.tool
def search_dictionary(
    query: Annotated[str, Field(description="Search text: Tamazight, Tifinagh, or a translated meaning")],
    language: Annotated[LanguageCode | None, Field(description="Only match meanings in this language (reverse lookup)")] = None,
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
    limit: Annotated[int | None, Field(description="Maximum results", ge=1, le=500)] = None,
) -> str:
    """Search the dictionary, ranked by relevance.

    Without a language, matches headwords, Tifinagh, meanings, plurals and roots.
    With a language, returns entries whose meaning in that language contains the query.
    """
    return _dump(_search_dictionary_logic(
        store, query, language, _region(region), limit or config.display_limit, config.site_url
    ))


@mcp.tool
def dictionary_terms(
    category: Annotated[str | None, Field(description="Semantic field or part of speech to filter on")] = None,
    format: Annotated[Literal["full", "simple"], Field(description="Response shape")] = "full",
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
) -> str:
    """Get the dictionary as a schema.org DefinedTermSet."""
    return _dump(_dictionary_terms_logic(store, category, format, _region(region), config.site_url))


@mcp.tool
def get_conjugation(
    verb: Annotated[str, Field(description="Infinitive in Latin or Tifinagh")],
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
) -> str:
    """Get the conjugation tables of a verb."""
    return _dump(_conjugation_logic(store, verb, _region(region)))


@mcp.tool
def search_symbols(
    query: Annotated[str, Field(description="Symbol name, tag, root or meaning")],
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
    limit: Annotated[int | None, Field(description="Maximum results", ge=1, le=500)] = None,
) -> str:
    """Search the symbol encyclopedia."""
    symbols = search_symbol_entries(store, query, _region(region), limit=limit or config.display_limit)
    return _dump({"query": query, "count": len(symbols), "results": [_symbol_summary(s) for s in symbols]})


@mcp.tool
def get_symbol(
    name_or_id: Annotated[str, Field(description="Symbol id or any of its names")],
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
) -> str:
    """Get a symbol with its interpretation layers, related symbols and linked words."""
    return _dump(_symbol_logic(store, name_or_id, _region(region)))


@mcp.tool
def search_phrasebook(
    query: Annotated[str, Field(description="Phrase or translation text")],
    direction: Annotated[DirectionCode | None, Field(description="Translation direction; omit to match any field")] = None,
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
    limit: Annotated[int | None, Field(description="Maximum results", ge=1, le=500)] = None,
) -> str:
    """Search the phrasebook in a translation direction."""
    return _dump(_search_phrases_logic(store, query, direction, _region(region), limit or config.display_limit))


@mcp.tool
def get_word_family(
    root: Annotated[str, Field(description="Consonantal root, e.g. 'k-l'")],
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
) -> str:
    """Get every entry, verb and symbol sharing a root."""
    return _dump(_word_family_logic(store, root, _region(region)))


@mcp.tool
def list_facets(
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
) -> str:
    """List the filter values present in the corpus."""
    return _dump(facet_index.summary(_region(region)))


@mcp.tool
def transliterate(
    text: Annotated[str, Field(description="Text to convert")],
    target: Annotated[Literal["tifinagh", "latin", "auto"], Field(description="Output script")] = "auto",
) -> str:
    """Convert between Latin transliteration and Tifinagh."""
    return _dump(_transliterate_logic(text, target))


@mcp.tool
def random_words(
    count: Annotated[int, Field(description="Number of words", ge=1, le=50)] = 5,
    region: Annotated[RegionCode | None, Field(description="Regional variety (defaults to the configured region)")] = None,
) -> str:
    """Pick random dictionary entries."""
    entries = store.random_sample(EntityKind.DICTIONARY, count, _region(region))
    return _dump([{"word": e.word, "tifinagh": e.tifinagh, "meaning": e.meaning(Language.EN)} for e in entries])


logger.debug("✅ All tools registered. Amawal server running! ⵣ")

def main() -> None:
    """Main entry point for the Amawal MCP Server."""
    mcp.run()

if __name__ == "__main__":
    main()
