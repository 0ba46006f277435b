# src/specsmith/emit/naming.py
from __future__ import annotations

import re
from dataclasses import dataclass

from ..constants import MAIN_SOURCE_ROOT, TEST_SOURCE_ROOT
from ..data.descriptors import (
    IDENTITY_FIELD_NAME,
    CanonicalFieldType,
    EntityDescriptor,
    FieldSpec,
)

_PACKAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def is_valid_package_name(name: object) -> bool:
    return isinstance(name, str) and _PACKAGE_RE.match(name) is not None


@dataclass(frozen=True, slots=True)
class NamingContext:
    """Shared namespace every artifact of a run is generated under."""

    package_name: str

    def __post_init__(self) -> None:
        if not is_valid_package_name(self.package_name):
            raise ValueError(f"Invalid package name: {self.package_name!r}")

    @property
    def package_path(self) -> str:
        return self.package_name.replace(".", "/")



@dataclass(frozen=True, slots=True)
class EntityNames:
    """Class names derived from one entity name. Every artifact uses these."""

    entity: str
    dto: str
    repository: str
    service: str
    service_impl: str
    controller: str
    controller_test: str


def entity_names(entity_name: str) -> EntityNames:
    return EntityNames(
        entity=entity_name,
        dto=f"{entity_name}DTO",
        repository=f"{entity_name}Repository",
        service=f"{entity_name}Service",
        service_impl=f"{entity_name}ServiceImpl",
        controller=f"{entity_name}Controller",
        controller_test=f"{entity_name}ControllerTest",
    )


def accessor_suffix(field_name: str) -> str:
    """Capitalizes exactly the first character and leaves the rest unchanged."""
    if not field_name:
        return field_name
    return field_name[:1].upper() + field_name[1:]


def getter_name(field_name: str) -> str:
    return f"get{accessor_suffix(field_name)}"


def setter_name(field_name: str) -> str:
    return f"set{accessor_suffix(field_name)}"


def route_segment(entity_name: str) -> str:
    """Lowercased entity name; also the key used to relate declared endpoints."""
    return entity_name.lower()


def collection_route(entity_name: str) -> str:
    return f"/api/{route_segment(entity_name)}s"


def table_name(entity_name: str) -> str:
    return f"{route_segment(entity_name)}s"


def artifact_path(naming: NamingContext, layer: str, class_name: str, *, test: bool = False) -> str:
    root = TEST_SOURCE_ROOT if test else MAIN_SOURCE_ROOT
    return f"{root}/{naming.package_path}/{layer}/{class_name}.java"


def identity_field(entity: EntityDescriptor) -> FieldSpec:
    """Returns the entity's identity field, synthesizing one when absent."""
    for f in entity.field_specs:
        if f.is_identity:
            return f
    return FieldSpec(name=IDENTITY_FIELD_NAME, type=CanonicalFieldType.INTEGER)


def emitted_fields(entity: EntityDescriptor) -> tuple[FieldSpec, ...]:
    """Fields in emission order: the synthesized identity (if any) first, then source order."""
    if entity.has_identity:
        return entity.field_specs
    return (identity_field(entity), *entity.field_specs)
