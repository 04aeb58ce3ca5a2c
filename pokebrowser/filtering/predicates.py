"""
Filter Predicates — Client-Side Narrowing of Loaded Lists.

Filters run only over items that are already loaded and enriched with a
cached detail record. Changing a filter never triggers a remote fetch.

INVARIANTS:
- Active filters combine with logical AND
- No active filter is equivalent to "match all"
- An item without a cached detail is always visible (never hidden early)
- Same items + same cache + same filter values -> same result
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from pydantic import BaseModel

from pokebrowser.models.constants import DAMAGE_CLASSES, FIRMNESS_LEVELS, GENERATIONS, POKEMON_TYPES
from pokebrowser.models.failure import FailureKind, KnownError
from pokebrowser.models.resource import (
    AbilitySummary,
    BerrySummary,
    MoveSummary,
    NamedResource,
    PokemonSummary,
)

Predicate = Callable[[Any, str], bool]


class DetailLookup(Protocol):
    """Anything that maps an identity to a resolved detail (or None)."""

    def get(self, identity: str) -> BaseModel | None: ...


class InvalidFilterError(KnownError):
    """Raised for an unknown filter name or a value outside its choices."""

    def __init__(self, name: str, value: str | None = None, allowed: Iterable[str] = ()):
        self.name = name
        self.value = value
        allowed_list = sorted(allowed)
        if value is None:
            message = f"Unknown filter: {name}"
        else:
            message = f"Invalid value for filter '{name}': {value}"
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=f"Allowed: {', '.join(allowed_list)}" if allowed_list else None,
            status_code=400,
        )


@dataclass(frozen=True)
class FilterDefinition:
    """
    A named predicate evaluated against a detail record.

    Attributes:
        name: Filter name as used in query strings
        predicate: Pure function (record, value) -> bool
        choices: Allowed values; empty means free text
    """

    name: str
    predicate: Predicate
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class FilterSet:
    """
    The active filter values for one list.

    Empty values are inactive. Construction validates names and values
    against the definitions of the resource kind.
    """

    definitions: Mapping[str, FilterDefinition] = field(default_factory=dict)
    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name, value in self.values.items():
            definition = self.definitions.get(name)
            if definition is None:
                raise InvalidFilterError(name, allowed=self.definitions.keys())
            if value and definition.choices and value not in definition.choices:
                raise InvalidFilterError(name, value, definition.choices)

    @property
    def active(self) -> dict[str, str]:
        """Filters that currently constrain the list."""
        return {name: value for name, value in self.values.items() if value}

    @property
    def is_active(self) -> bool:
        return bool(self.active)

    def key(self) -> tuple[tuple[str, str], ...]:
        """Hashable, order-independent view of the active values."""
        return tuple(sorted(self.active.items()))

    def matches(self, record: Any) -> bool:
        """True if the record satisfies every active predicate."""
        return all(
            self.definitions[name].predicate(record, value) for name, value in self.active.items()
        )

    def with_values(self, **values: str) -> "FilterSet":
        """Copy with some values replaced."""
        return FilterSet(self.definitions, {**self.values, **values})


def filter_visible(
    items: Iterable[NamedResource],
    details: DetailLookup,
    filters: FilterSet,
) -> list[NamedResource]:
    """
    Narrow a loaded list to the items matching the active filters.

    Order is preserved. Items with no resolved detail are kept.
    """
    if not filters.is_active:
        return list(items)

    visible: list[NamedResource] = []
    for item in items:
        record = details.get(item.identity)
        if record is None or filters.matches(record):
            visible.append(item)
    return visible


# =============================================================================
# PER-KIND FILTER DEFINITIONS
# =============================================================================


def _pokemon_has_type(record: PokemonSummary, value: str) -> bool:
    return value in record.types


def _berry_firmness(record: BerrySummary, value: str) -> bool:
    return record.firmness == value


def _berry_gift_type(record: BerrySummary, value: str) -> bool:
    return record.natural_gift_type == value


def _move_type(record: MoveSummary, value: str) -> bool:
    return record.type == value


def _move_damage_class(record: MoveSummary, value: str) -> bool:
    return record.damage_class == value


def _ability_generation(record: AbilitySummary, value: str) -> bool:
    return record.generation == value


def _ability_main_series(record: AbilitySummary, value: str) -> bool:
    # "yes" keeps main-series abilities, "no" keeps the spin-off ones
    return record.is_main_series == (value == "yes")


def _definitions(*defs: FilterDefinition) -> dict[str, FilterDefinition]:
    return {d.name: d for d in defs}


POKEMON_FILTERS = _definitions(
    FilterDefinition("type", _pokemon_has_type, POKEMON_TYPES),
)

BERRY_FILTERS = _definitions(
    FilterDefinition("firmness", _berry_firmness, FIRMNESS_LEVELS),
    FilterDefinition("natural_gift_type", _berry_gift_type, POKEMON_TYPES),
)

MOVE_FILTERS = _definitions(
    FilterDefinition("type", _move_type, POKEMON_TYPES),
    FilterDefinition("damage_class", _move_damage_class, DAMAGE_CLASSES),
)

ABILITY_FILTERS = _definitions(
    FilterDefinition("generation", _ability_generation, GENERATIONS),
    FilterDefinition("main_series", _ability_main_series, ("yes", "no")),
)
