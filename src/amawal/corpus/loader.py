"""
Corpus file loading and base/overlay merging.

Each entity kind lives in its own directory with one base file per region
and an optional "enhanced" overlay file. Overlay entities replace base
entities sharing the same id wholesale; nothing is field-merged.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence, TypeVar

import yaml
from pydantic import ValidationError

from ..models import (
    ENTITY_MODELS,
    EntityKind,
    PhraseCategoryInfo,
    Region,
    SymbolFamily,
)

logger = logging.getLogger("amawal")

SUPPORTED_EXTENSIONS = (".json", ".yaml", ".yml")
OVERLAY_SUFFIX = "-enhanced"

# Key under which a file may nest its entity list.
COLLECTION_KEYS: dict[EntityKind, str] = {
    EntityKind.DICTIONARY: "entries",
    EntityKind.VERBS: "verbs",
    EntityKind.SYMBOLS: "symbols",
    EntityKind.PHRASES: "phrases",
}

T = TypeVar("T")


class CorpusError(Exception):
    """Raised when the corpus is structurally invalid. Fatal at startup."""
    pass


@dataclass
class CorpusFile:
    """Raw content of one corpus file."""
    path: Path
    items: list[dict[str, Any]]
    families: list[dict[str, Any]] = field(default_factory=list)
    categories: list[dict[str, Any]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class RegionCollection:
    """Merged, validated content of one (kind, region) pair."""
    kind: EntityKind
    region: Region
    entities: list[Any] = field(default_factory=list)
    families: list[SymbolFamily] = field(default_factory=list)
    categories: list[PhraseCategoryInfo] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


def merge_by_id(base: Iterable[T], overlay: Iterable[T], key=lambda item: item["id"]) -> list[T]:
    """Merge two datasets by id, overlay entries replacing base entries.

    Replaced entries keep their base position; overlay-only entries are
    appended in overlay order. Merging the same pair twice yields the same
    list.

    Args:
        base: Base dataset
        overlay: Overlay dataset
        key: Function returning an item's id

    Returns:
        Merged list
    """
    merged: dict[Any, T] = {}
    for item in base:
        merged[key(item)] = item
    for item in overlay:
        item_id = key(item)
        if item_id in merged:
            logger.debug(f"Overlay replaces '{item_id}'")
        merged[item_id] = item
    return list(merged.values())


def read_corpus_file(path: Path, kind: EntityKind) -> CorpusFile:
    """Read a JSON or YAML corpus file.

    Accepts either a bare list of entities or an object holding the list
    under the kind's collection key, with optional ``families``,
    ``categories`` and ``metadata`` side tables.

    Raises:
        CorpusError: If the file can't be read or parsed, or has the wrong shape
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise CorpusError(
            f"Unsupported file format: {suffix}. Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
        )

    try:
        raw_content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CorpusError(f"Failed to read {path}: {e}") from e

    try:
        if suffix == ".json":
            data = json.loads(raw_content)
        else:
            data = yaml.safe_load(raw_content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CorpusError(f"Failed to parse {path}: {e}") from e

    if isinstance(data, list):
        return CorpusFile(path=path, items=data)

    if not isinstance(data, dict):
        raise CorpusError(f"{path}: top level must be a list or an object")

    collection_key = COLLECTION_KEYS[kind]
    items = data.get(collection_key)
    if not isinstance(items, list):
        raise CorpusError(f"{path}: expected a '{collection_key}' list")

    families = data.get("families") or []
    categories = data.get("categories") or []
    metadata = data.get("metadata") or {}
    for name, table in (("families", families), ("categories", categories)):
        if not isinstance(table, list):
            raise CorpusError(f"{path}: '{name}' must be a list")
    if not isinstance(metadata, dict):
        raise CorpusError(f"{path}: 'metadata' must be an object")

    return CorpusFile(
        path=path,
        items=items,
        families=families,
        categories=categories,
        metadata=metadata,
    )


def _check_unique_ids(items: Sequence[dict[str, Any]], path: Path) -> None:
    seen: set[str] = set()
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise CorpusError(f"{path}: item #{index} is not an object")
        item_id = item.get("id")
        if not item_id:
            raise CorpusError(f"{path}: item #{index} has no 'id'")
        if not isinstance(item_id, str):
            raise CorpusError(f"{path}: item #{index} has a non-string id {item_id!r}")
        if item_id in seen:
            raise CorpusError(f"{path}: duplicate id '{item_id}'")
        seen.add(item_id)


def build_collection(
    kind: EntityKind,
    region: Region,
    base: CorpusFile,
    overlay: CorpusFile | None = None,
) -> RegionCollection:
    """Merge base and overlay files and validate every entity.

    Raises:
        CorpusError: On duplicate ids within a file, schema violations, or
            entities tagged with a different region than their file
    """
    _check_unique_ids(base.items, base.path)
    overlay_items: list[dict[str, Any]] = []
    if overlay is not None:
        _check_unique_ids(overlay.items, overlay.path)
        overlay_items = overlay.items

    model = ENTITY_MODELS[kind]
    entities = []
    for item in merge_by_id(base.items, overlay_items):
        try:
            entity = model.model_validate(item)
        except ValidationError as e:
            raise CorpusError(f"Invalid {kind.value} entity '{item.get('id')}': {e}") from e
        if entity.region != region:
            raise CorpusError(
                f"{kind.value} entity '{entity.id}' is tagged '{entity.region.value}' "
                f"but was loaded for region '{region.value}'"
            )
        entities.append(entity)

    side_tables = [base] + ([overlay] if overlay else [])
    for corpus_file in side_tables:
        _check_unique_ids(corpus_file.families, corpus_file.path)
        _check_unique_ids(corpus_file.categories, corpus_file.path)

    raw_families = merge_by_id(base.families, overlay.families if overlay else [])
    raw_categories = merge_by_id(base.categories, overlay.categories if overlay else [])
    try:
        families = [SymbolFamily.model_validate(f) for f in raw_families]
        categories = [PhraseCategoryInfo.model_validate(c) for c in raw_categories]
    except ValidationError as e:
        raise CorpusError(f"Invalid side table in {base.path}: {e}") from e

    metadata = {**base.metadata, **(overlay.metadata if overlay else {})}

    return RegionCollection(
        kind=kind,
        region=region,
        entities=entities,
        families=families,
        categories=categories,
        metadata=metadata,
    )


def _find_file(directory: Path, stem: str) -> Path | None:
    for suffix in SUPPORTED_EXTENSIONS:
        candidate = directory / f"{stem}{suffix}"
        if candidate.exists():
            return candidate
    return None


def load_corpus(data_dir: Path) -> list[RegionCollection]:
    """Load every (kind, region) collection found under ``data_dir``.

    Missing kind directories and regions without a base file are simply
    absent from the result. An overlay without a base file is an error.

    Raises:
        CorpusError: If any file is malformed
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise CorpusError(f"Corpus directory not found: {data_dir}")

    collections: list[RegionCollection] = []
    for kind in EntityKind:
        kind_dir = data_dir / kind.value
        if not kind_dir.is_dir():
            continue
        for region in Region:
            base_path = _find_file(kind_dir, region.value)
            overlay_path = _find_file(kind_dir, region.value + OVERLAY_SUFFIX)
            if base_path is None:
                if overlay_path is not None:
                    raise CorpusError(f"Overlay {overlay_path} has no base file")
                continue

            base = read_corpus_file(base_path, kind)
            overlay = read_corpus_file(overlay_path, kind) if overlay_path else None
            collection = build_collection(kind, region, base, overlay)
            logger.info(
                f"Loaded {len(collection.entities)} {kind.value} entities for {region.value}"
                + (" (with overlay)" if overlay else "")
            )
            collections.append(collection)

    return collections
