# src/specsmith/gaps/checks.py
from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from ..constants import SOURCE_LABELS
from ..data.descriptors import EndpointDescriptor, EntityDescriptor
from .collector import GapCollector

IDL_NOT_COMPILED = "GraphQL schema parsing is not fully implemented - manual review required"
NO_SOURCES = "No API specification files provided (OpenAPI, GraphQL, or Domain Model)"


def check_entity_completeness(gaps: GapCollector, entity: EntityDescriptor) -> None:
    if not entity.field_specs:
        gaps.record(f"Entity '{entity.name}' has no fields defined")
    if not entity.has_identity:
        gaps.record(f"Entity '{entity.name}' does not have an explicit 'id' field (auto-generated)")


def check_endpoint_completeness(gaps: GapCollector, endpoint: EndpointDescriptor) -> None:
    if not endpoint.summary:
        gaps.record(f"Endpoint {endpoint.method.value} {endpoint.path} lacks a summary/description")


def check_missing_sources(gaps: GapCollector, *, has_schema: bool, has_idl: bool, has_domain_model: bool) -> None:
    if not (has_schema or has_idl or has_domain_model):
        gaps.record(NO_SOURCES)


def record_decode_failure(gaps: GapCollector, source: str, message: str) -> None:
    label = SOURCE_LABELS.get(source, source)
    gaps.record(f"Failed to parse {label}: {message}")


def record_opaque_idl(gaps: GapCollector) -> None:
    gaps.record(IDL_NOT_COMPILED)


def check_duplicate_entities(gaps: GapCollector, entities: Sequence[EntityDescriptor]) -> None:
    """Flags entity names defined more than once across all sources.

    Duplicates are still generated in list order; this only makes them visible.
    """
    counts = Counter(e.name for e in entities)
    seen: set[str] = set()
    for e in entities:
        if counts[e.name] > 1 and e.name not in seen:
            seen.add(e.name)
            gaps.record(
                f"Entity '{e.name}' is defined {counts[e.name]} times; "
                "all definitions were generated in source order"
            )
