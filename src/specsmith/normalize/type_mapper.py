# src/specsmith/normalize/type_mapper.py
from __future__ import annotations

from ..data.descriptors import CanonicalFieldType, SourceKind

_SCHEMA_TYPES: dict[str, CanonicalFieldType] = {
    "string": CanonicalFieldType.TEXT,
    "integer": CanonicalFieldType.INTEGER,
    "number": CanonicalFieldType.FLOATING_POINT,
    "boolean": CanonicalFieldType.BOOLEAN,
}

# Checked in order; first match wins ("int or float" is an INTEGER).
_FREE_TEXT_RULES: tuple[tuple[tuple[str, ...], CanonicalFieldType], ...] = (
    (("int", "long"), CanonicalFieldType.INTEGER),
    (("double", "float"), CanonicalFieldType.FLOATING_POINT),
    (("bool",), CanonicalFieldType.BOOLEAN),
)


def map_schema_type(raw_token: object) -> CanonicalFieldType:
    """Maps an explicit schema type keyword, matched case-insensitively and exactly."""
    if not isinstance(raw_token, str):
        return CanonicalFieldType.TEXT
    return _SCHEMA_TYPES.get(raw_token.strip().lower(), CanonicalFieldType.TEXT)


def map_free_text_type(raw_token: object) -> CanonicalFieldType:
    """Maps a free-form type phrase by substring containment."""
    if raw_token is None:
        return CanonicalFieldType.TEXT
    lower = str(raw_token).lower()
    for needles, canonical in _FREE_TEXT_RULES:
        if any(n in lower for n in needles):
            return canonical
    return CanonicalFieldType.TEXT


def map_type(raw_token: object, source_kind: SourceKind) -> CanonicalFieldType:
    """Maps a source type token to a canonical field type. Never raises.

    Unknown or missing tokens resolve to TEXT.
    """
    if source_kind == SourceKind.SCHEMA_TYPED:
        return map_schema_type(raw_token)
    return map_free_text_type(raw_token)
