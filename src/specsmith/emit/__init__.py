"""Artifact emission: naming derivation, route planning, and template rendering."""

from .emitter import FieldView, TemplateEmitter, field_views
from .naming import (
    EntityNames,
    NamingContext,
    accessor_suffix,
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
from .routes import Route, RouteKind, plan_routes, related_endpoints
from .scaffold import ProjectScaffolder, ProjectSettings, derive_project_settings

__all__ = [
    "EntityNames",
    "FieldView",
    "NamingContext",
    "ProjectScaffolder",
    "ProjectSettings",
    "Route",
    "RouteKind",
    "TemplateEmitter",
    "TemplateRenderer",
    "accessor_suffix",
    "artifact_path",
    "collection_route",
    "derive_project_settings",
    "emitted_fields",
    "entity_names",
    "field_views",
    "getter_name",
    "identity_field",
    "plan_routes",
    "related_endpoints",
    "setter_name",
    "table_name",
]
