# src/specsmith/normalize/extractors.py
from __future__ import annotations

import logging

from ..data.descriptors import (
    CanonicalFieldType,
    EndpointDescriptor,
    EntityDescriptor,
    HttpMethod,
    SourceKind,
)
from ..data.json_value import as_mapping, as_str, get_mapping, iter_items
from .type_mapper import map_type

logger = logging.getLogger(__name__)


def _schema_section(doc: object) -> object | None:
    # OpenAPI 3 keeps named schemas under components.schemas; Swagger 2 under definitions.
    schemas = get_mapping(doc, "components", "schemas")
    if schemas is not None:
        return schemas
    return get_mapping(doc, "definitions")


def _schema_property_type(prop_schema: object) -> CanonicalFieldType:
    prop = as_mapping(prop_schema)
    if prop is None:
        return CanonicalFieldType.TEXT
    return map_type(prop.get("type"), SourceKind.SCHEMA_TYPED)


def extract_entities_from_schema(doc: object) -> list[EntityDescriptor]:
    """Builds one entity per named schema object, in document order.

    Property names become fields, typed through the schema-typed mapping.
    Missing or malformed sections yield an empty list.
    """
    entities: list[EntityDescriptor] = []
    for name, schema in iter_items(_schema_section(doc)):
        if not name.strip():
            continue
        fields = [
            (prop_name, _schema_property_type(prop_schema))
            for prop_name, prop_schema in iter_items(get_mapping(schema, "properties"))
        ]
        entities.append(EntityDescriptor.build(name, fields))
    logger.debug("Extracted %d entities from schema", len(entities))
    return entities


def extract_entities_from_domain_model(doc: object) -> list[EntityDescriptor]:
    """Builds one entity per entry under `entities`, typing fields from free text."""
    entities: list[EntityDescriptor] = []
    for name, entry in iter_items(get_mapping(doc, "entities")):
        if not name.strip():
            continue
        fields = [
            (field_name, map_type(raw_type, SourceKind.FREE_TEXT))
            for field_name, raw_type in iter_items(get_mapping(entry, "fields"))
        ]
        entities.append(EntityDescriptor.build(name, fields))
    logger.debug("Extracted %d entities from domain model", len(entities))
    return entities


def extract_endpoints_from_schema(doc: object) -> list[EndpointDescriptor]:
    """Emits one endpoint per (path, method) operation, in document order.

    Path-item keys that are not HTTP methods (parameters, servers, $ref, ...)
    are skipped. A missing summary becomes "".
    """
    endpoints: list[EndpointDescriptor] = []
    for path, path_item in iter_items(get_mapping(doc, "paths")):
        for key, operation in iter_items(path_item):
            method = HttpMethod.parse(key)
            if method is None:
                continue
            op = as_mapping(operation) or {}
            summary = as_str(op.get("summary"))
            endpoints.append(EndpointDescriptor(path=path, method=method, summary=summary or ""))
    logger.debug("Extracted %d endpoints from schema", len(endpoints))
    return endpoints
