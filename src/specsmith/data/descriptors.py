# src/specsmith/data/descriptors.py
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

IDENTITY_FIELD_NAME = "id"


class CanonicalFieldType(str, Enum):
    """Closed set of field types artifacts are generated against.

    Each member carries the Java type name used when rendering artifacts.
    """

    TEXT = "String"
    INTEGER = "Long"
    FLOATING_POINT = "Double"
    BOOLEAN = "Boolean"

    @property
    def java_type(self) -> str:
        return self.value


class SourceKind(str, Enum):
    """Where a raw type token came from.

    - SCHEMA_TYPED: an explicit type keyword of a structured schema.
    - FREE_TEXT: an arbitrary word or phrase (domain-model YAML).
    """

    SCHEMA_TYPED = "schema_typed"
    FREE_TEXT = "free_text"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, raw: object) -> "HttpMethod | None":
        """Returns the method for a path-item key, or None for non-operation keys."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


def is_identity_name(name: str) -> bool:
    return name.lower() == IDENTITY_FIELD_NAME


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One named, typed field of an entity."""

    name: str
    type: CanonicalFieldType

    @property
    def is_identity(self) -> bool:
        return is_identity_name(self.name)


@dataclass(frozen=True, slots=True)
class EntityDescriptor:
    """Normalized, immutable description of one modeled entity.

    Stored fields:
    - name: Entity identifier as it appeared in the source (e.g. "Book").
    - field_specs: Ordered fields. Order is the source order and is carried
      verbatim into every emitted artifact. Names are unique (case-sensitive);
      a repeated name keeps its first position and takes the last type, the way
      an ordered mapping would.
    """

    name: str
    field_specs: tuple[FieldSpec, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("EntityDescriptor.name must be a non-empty string")

    @staticmethod
    def build(name: str, fields: Iterable[tuple[str, CanonicalFieldType]] | Mapping[str, CanonicalFieldType] = ()) -> "EntityDescriptor":
        """Builds a descriptor from ordered (name, type) pairs or an ordered mapping."""
        pairs = fields.items() if isinstance(fields, Mapping) else fields
        ordered: dict[str, CanonicalFieldType] = {}
        for field_name, field_type in pairs:
            ordered[str(field_name)] = CanonicalFieldType(field_type)
        return EntityDescriptor(
            name=name,
            field_specs=tuple(FieldSpec(name=n, type=t) for n, t in ordered.items()),
        )

    @property
    def fields(self) -> Mapping[str, CanonicalFieldType]:
        """Read-only ordered view of field name -> canonical type."""
        return MappingProxyType({f.name: f.type for f in self.field_specs})

    @property
    def has_identity(self) -> bool:
        return any(f.is_identity for f in self.field_specs)


@dataclass(frozen=True, slots=True)
class EndpointDescriptor:
    """One operation found in an API-shaped source."""

    path: str
    method: HttpMethod
    summary: str = ""


@dataclass(frozen=True, slots=True)
class SpecSources:
    """The decoded inputs of a single run.

    Stored fields:
    - schema: Decoded OpenAPI/Swagger document, or None when not supplied or undecodable.
    - idl: Interface-definition text (GraphQL SDL), passed through opaque.
    - domain_model: Decoded domain-model document.
    - metadata: Decoded project metadata (projectName, ...).
    - output_prefs: Decoded output preferences (packageName, ...).
    - raw_texts: Original text per source name, used by the AI mode prompt.
    - decode_failures: (source name, message) pairs for supplied sources that failed to decode.
    """

    schema: Mapping[str, object] | None = None
    idl: str | None = None
    domain_model: Mapping[str, object] | None = None
    metadata: Mapping[str, object] | None = None
    output_prefs: Mapping[str, object] | None = None
    raw_texts: tuple[tuple[str, str], ...] = ()
    decode_failures: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    def failed(self, source: str) -> bool:
        return any(name == source for name, _ in self.decode_failures)

    def supplied(self, source: str) -> bool:
        """True when the caller provided the source, whether or not it decoded."""
        return self.failed(source) or any(name == source for name, _ in self.raw_texts)
