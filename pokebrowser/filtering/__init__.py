"""
Client-side filtering over loaded, detail-enriched lists.

Filters never fetch; they only narrow what has already been loaded.
"""

from pokebrowser.filtering.predicates import (
    ABILITY_FILTERS,
    BERRY_FILTERS,
    MOVE_FILTERS,
    POKEMON_FILTERS,
    FilterDefinition,
    FilterSet,
    InvalidFilterError,
    filter_visible,
)

__all__ = [
    "ABILITY_FILTERS",
    "BERRY_FILTERS",
    "MOVE_FILTERS",
    "POKEMON_FILTERS",
    "FilterDefinition",
    "FilterSet",
    "InvalidFilterError",
    "filter_visible",
]
