"""Spec normalization: decoded documents -> entity and endpoint descriptors."""

from .extractors import (
    extract_endpoints_from_schema,
    extract_entities_from_domain_model,
    extract_entities_from_schema,
)
from .type_mapper import map_free_text_type, map_schema_type, map_type

__all__ = [
    "extract_endpoints_from_schema",
    "extract_entities_from_domain_model",
    "extract_entities_from_schema",
    "map_free_text_type",
    "map_schema_type",
    "map_type",
]
