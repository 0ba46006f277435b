"""Data structures for specsmith.

These modules hold pure data (descriptors, results) plus the safe accessors used
to read decoded documents, so every other component can be unit-tested without
touching the filesystem.
"""

from .descriptors import (
    CanonicalFieldType,
    EndpointDescriptor,
    EntityDescriptor,
    FieldSpec,
    HttpMethod,
    SourceKind,
    SpecSources,
)
from .result import Artifact, ArtifactKind, GenerationResult, RunStatus

__all__ = [
    "Artifact",
    "ArtifactKind",
    "CanonicalFieldType",
    "EndpointDescriptor",
    "EntityDescriptor",
    "FieldSpec",
    "GenerationResult",
    "HttpMethod",
    "RunStatus",
    "SourceKind",
    "SpecSources",
]
