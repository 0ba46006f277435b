# src/specsmith/emit/emitter.py
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..data.descriptors import EndpointDescriptor, EntityDescriptor, FieldSpec
from ..data.result import Artifact, ArtifactKind
from .naming import (
    EntityNames,
    NamingContext,
    artifact_path,
    collection_route,
    emitted_fields,
    entity_names,
    getter_name,
    identity_field,
    setter_name,
    table_name,
)
from .renderer import TemplateRenderer
from .routes import Route, plan_routes

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldView:
    """Template-facing view of one field with its derived accessor names."""

    name: str
    java_type: str
    getter: str
    setter: str
    is_identity: bool


# (kind, template, layer, class-name attribute, test source root)
_ARTIFACT_PLAN: tuple[tuple[ArtifactKind, str, str, str, bool], ...] = (
    (ArtifactKind.ENTITY, "entity/entity.java.j2", "entity", "entity", False),
    (ArtifactKind.DTO, "entity/dto.java.j2", "dto", "dto", False),
    (ArtifactKind.REPOSITORY, "entity/repository.java.j2", "repository", "repository", False),
    (ArtifactKind.SERVICE, "entity/service.java.j2", "service", "service", False),
    (ArtifactKind.SERVICE_IMPL, "entity/service_impl.java.j2", "service", "service_impl", False),
    (ArtifactKind.CONTROLLER, "entity/controller.java.j2", "controller", "controller", False),
    (ArtifactKind.CONTROLLER_TEST, "entity/controller_test.java.j2", "controller", "controller_test", True),
)


def field_views(entity: EntityDescriptor) -> tuple[FieldView, ...]:
    """Fields in emission order with accessor names; exactly one is the identity."""
    identity = identity_field(entity)
    return tuple(
        FieldView(
            name=f.name,
            java_type=f.type.java_type,
            getter=getter_name(f.name),
            setter=setter_name(f.name),
            is_identity=f == identity,
        )
        for f in emitted_fields(entity)
    )


class TemplateEmitter:
    """Derives the dependent artifact family of one entity.

    Output is a pure function of the entity, its related endpoints, and the
    naming context: no clock, no randomness, no filesystem access. Artifacts
    come back in a fixed order: entity, DTO, repository, service, service
    implementation, controller, controller test.
    """

    def __init__(self, naming: NamingContext, *, renderer: TemplateRenderer | None = None) -> None:
        self.naming = naming
        self.renderer = renderer or TemplateRenderer()

    def variables(self, entity: EntityDescriptor, routes: Sequence[Route]) -> dict[str, object]:
        names: EntityNames = entity_names(entity.name)
        identity: FieldSpec = identity_field(entity)
        return {
            "package": self.naming.package_name,
            "names": names,
            "fields": field_views(entity),
            "id_type": identity.type.java_type,
            "table_name": table_name(entity.name),
            "base_route": collection_route(entity.name),
            "routes": tuple(routes),
        }

    def emit(
        self,
        entity: EntityDescriptor,
        related_endpoints: Sequence[EndpointDescriptor] = (),
    ) -> tuple[Artifact, ...]:
        routes = plan_routes(entity, related_endpoints)
        variables = self.variables(entity, routes)
        names: EntityNames = variables["names"]  # type: ignore[assignment]

        artifacts: list[Artifact] = []
        for kind, template, layer, name_attr, is_test in _ARTIFACT_PLAN:
            class_name = getattr(names, name_attr)
            artifacts.append(
                Artifact(
                    path=artifact_path(self.naming, layer, class_name, test=is_test),
                    content=self.renderer.render(template, variables),
                    kind=kind,
                )
            )

        logger.debug(
            "Emitted %d artifacts for %s (%d routes, %d declared)",
            len(artifacts),
            entity.name,
            len(routes),
            sum(1 for r in routes if r.declared),
        )
        return tuple(artifacts)
