"""
Resource kinds browsable through the infinite lists.

A kind is the small capability a paginated list needs: where to list,
where to fetch details, how to project a detail payload, and which
filters apply to the projection.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from pokebrowser.filtering.predicates import (
    ABILITY_FILTERS,
    BERRY_FILTERS,
    MOVE_FILTERS,
    POKEMON_FILTERS,
    FilterDefinition,
    FilterSet,
)
from pokebrowser.models.failure import FailureKind, KnownError
from pokebrowser.models.resource import (
    project_ability,
    project_berry,
    project_move,
    project_pokemon,
)


class UnknownResourceKindError(KnownError):
    """Raised when a route names a resource kind we do not browse."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Unknown resource kind: {name}",
            detail=f"Known kinds: {', '.join(sorted(RESOURCE_KINDS))}",
            status_code=404,
        )


@dataclass(frozen=True)
class ResourceKind:
    """
    Attributes:
        name: Kind name used in routes ("pokemon", "berry", ...)
        list_path: Collection endpoint path
        detail_path: Detail endpoint path (the name is appended)
        project: Raw detail payload -> detail record
        filters: Filter definitions applicable to the detail record
    """

    name: str
    list_path: str
    detail_path: str
    project: Callable[[dict[str, Any]], BaseModel]
    filters: Mapping[str, FilterDefinition]

    def filter_set(self, values: Mapping[str, str] | None = None) -> FilterSet:
        """Build a validated filter set for this kind."""
        return FilterSet(self.filters, dict(values or {}))


POKEMON = ResourceKind("pokemon", "/pokemon", "/pokemon", project_pokemon, POKEMON_FILTERS)
BERRY = ResourceKind("berry", "/berry", "/berry", project_berry, BERRY_FILTERS)
MOVE = ResourceKind("move", "/move", "/move", project_move, MOVE_FILTERS)
ABILITY = ResourceKind("ability", "/ability", "/ability", project_ability, ABILITY_FILTERS)

RESOURCE_KINDS: dict[str, ResourceKind] = {
    kind.name: kind for kind in (POKEMON, BERRY, MOVE, ABILITY)
}


def get_resource_kind(name: str) -> ResourceKind:
    """
    Look up a kind by name.

    Raises:
        UnknownResourceKindError: If the name is not browsable
    """
    kind = RESOURCE_KINDS.get(name)
    if kind is None:
        raise UnknownResourceKindError(name)
    return kind
