# src/specsmith/emit/routes.py
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..data.descriptors import EndpointDescriptor, EntityDescriptor, HttpMethod
from .naming import accessor_suffix, route_segment


class RouteKind(str, Enum):
    LIST = "list"
    GET_BY_ID = "get_by_id"
    CREATE = "create"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class Route:
    """One controller route.

    - declared: True when the route reuses an endpoint found in the source spec.
    - summary: Declared summary, or "" for synthesized routes.
    """

    kind: RouteKind
    method: HttpMethod
    sub_path: str
    handler: str
    declared: bool = False
    summary: str = ""

    @property
    def test_name(self) -> str:
        return f"test{accessor_suffix(self.handler)}"


def related_endpoints(entity: EntityDescriptor, endpoints: Iterable[EndpointDescriptor]) -> list[EndpointDescriptor]:
    """Endpoints whose path references the entity's lowercased name, in order."""
    segment = route_segment(entity.name)
    return [e for e in endpoints if segment in e.path]


def _route(kind: RouteKind, entity_name: str, *, declared: EndpointDescriptor | None = None) -> Route:
    summary = " ".join(declared.summary.split()) if declared is not None else ""
    is_declared = declared is not None
    if kind == RouteKind.LIST:
        return Route(kind, HttpMethod.GET, "", f"getAll{entity_name}s", is_declared, summary)
    if kind == RouteKind.GET_BY_ID:
        return Route(kind, HttpMethod.GET, "/{id}", f"get{entity_name}ById", is_declared, summary)
    if kind == RouteKind.CREATE:
        return Route(kind, HttpMethod.POST, "", f"create{entity_name}", is_declared, summary)
    return Route(kind, HttpMethod.DELETE, "/{id}", f"delete{entity_name}", is_declared, summary)


def plan_routes(entity: EntityDescriptor, related: Sequence[EndpointDescriptor]) -> tuple[Route, ...]:
    """Merges declared endpoints with synthesized defaults.

    Declared routes come first, in scan order: the first GET becomes the list
    route and the first POST the create route. Afterwards any of list, get-by-id,
    create, and delete not yet present is synthesized, in that order. Get-by-id
    and delete have no declared-endpoint detection and are always synthesized.
    No route kind is emitted twice.
    """
    routes: list[Route] = []
    satisfied: set[RouteKind] = set()

    for endpoint in related:
        if endpoint.method == HttpMethod.GET and RouteKind.LIST not in satisfied:
            routes.append(_route(RouteKind.LIST, entity.name, declared=endpoint))
            satisfied.add(RouteKind.LIST)
        elif endpoint.method == HttpMethod.POST and RouteKind.CREATE not in satisfied:
            routes.append(_route(RouteKind.CREATE, entity.name, declared=endpoint))
            satisfied.add(RouteKind.CREATE)

    for kind in (RouteKind.LIST, RouteKind.GET_BY_ID, RouteKind.CREATE, RouteKind.DELETE):
        if kind not in satisfied:
            routes.append(_route(kind, entity.name))
            satisfied.add(kind)

    return tuple(routes)
