# src/specsmith/sources.py
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from .constants import (
    ALL_SOURCES,
    SOURCE_DOMAIN,
    SOURCE_GRAPHQL,
    SOURCE_METADATA,
    SOURCE_OPENAPI,
    SOURCE_OUTPUT_PREFS,
)
from .data.descriptors import SpecSources
from .errors import SourceDecodeError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def _decode_mapping(source: str, filename: str, text: str) -> dict[str, object]:
    """Decodes one structured source into a top-level mapping.

    The OpenAPI source is read as YAML for .yaml/.yml files and JSON otherwise;
    every other structured source is YAML. An empty output-preferences file
    decodes to an empty mapping.
    """
    use_json = source == SOURCE_OPENAPI and not filename.lower().endswith(_YAML_SUFFIXES)
    if source == SOURCE_OUTPUT_PREFS and not text.strip():
        return {}
    try:
        obj = json.loads(text) if use_json else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SourceDecodeError(str(e), data={"source": source, "filename": filename}) from e
    if not isinstance(obj, dict):
        raise SourceDecodeError(
            f"expected a mapping at the top level, got {type(obj).__name__}",
            data={"source": source, "filename": filename},
        )
    return obj


def decode_sources(texts: Mapping[str, tuple[str, str]]) -> SpecSources:
    """Builds SpecSources from already-read texts keyed by source name.

    Values are (filename, text) pairs. Unknown source names are ignored. A
    source that fails to decode is left absent and listed in decode_failures.
    """
    decoded: dict[str, object] = {}
    failures: list[tuple[str, str]] = []
    raw_texts: list[tuple[str, str]] = []

    for source in ALL_SOURCES:
        entry = texts.get(source)
        if entry is None:
            continue
        filename, text = entry
        raw_texts.append((source, text))

        if source == SOURCE_GRAPHQL:
            decoded[source] = text
            continue
        try:
            decoded[source] = _decode_mapping(source, filename, text)
        except SourceDecodeError as e:
            logger.warning("Could not decode %s source %s: %s", source, filename, e)
            failures.append((source, str(e)))

    return SpecSources(
        schema=decoded.get(SOURCE_OPENAPI),  # type: ignore[arg-type]
        idl=decoded.get(SOURCE_GRAPHQL),  # type: ignore[arg-type]
        domain_model=decoded.get(SOURCE_DOMAIN),  # type: ignore[arg-type]
        metadata=decoded.get(SOURCE_METADATA),  # type: ignore[arg-type]
        output_prefs=decoded.get(SOURCE_OUTPUT_PREFS),  # type: ignore[arg-type]
        raw_texts=tuple(raw_texts),
        decode_failures=tuple(failures),
    )


def load_sources(paths: Mapping[str, str | Path | None]) -> SpecSources:
    """Reads and decodes source files keyed by source name (None entries are skipped).

    A file that cannot be read counts as a decode failure for its source.
    """
    texts: dict[str, tuple[str, str]] = {}
    read_failures: list[tuple[str, str]] = []

    for source in ALL_SOURCES:
        raw_path = paths.get(source)
        if raw_path is None:
            continue
        p = Path(raw_path)
        try:
            texts[source] = (p.name, p.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s source %s: %s", source, p, e)
            read_failures.append((source, f"{type(e).__name__}: {e}"))

    sources = decode_sources(texts)
    if not read_failures:
        return sources

    return SpecSources(
        schema=sources.schema,
        idl=sources.idl,
        domain_model=sources.domain_model,
        metadata=sources.metadata,
        output_prefs=sources.output_prefs,
        raw_texts=sources.raw_texts,
        decode_failures=tuple(sorted(
            (*read_failures, *sources.decode_failures),
            key=lambda f: ALL_SOURCES.index(f[0]),
        )),
    )
