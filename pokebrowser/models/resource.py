"""
Resource models for the PokeAPI collection and detail endpoints.

List endpoints return lightweight `NamedResource` references; detail
endpoints return large payloads that are projected down to the few
fields the list views and filters read.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NamedResource(BaseModel):
    """
    A reference to a resource as returned by a collection listing.

    The name is the identity: unique within a resource kind and the key
    used by the detail cache.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str

    @property
    def identity(self) -> str:
        return self.name

    @property
    def resource_id(self) -> str:
        """Numeric id taken from the locator (".../pokemon/25/" -> "25")."""
        parts = [part for part in self.url.split("/") if part]
        return parts[-1] if parts else ""


class ResourcePage(BaseModel):
    """One page of a paginated collection listing."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[NamedResource] = Field(default_factory=list)


# =============================================================================
# DETAIL PROJECTIONS
# =============================================================================


def _name_of(ref: dict[str, Any] | None) -> str | None:
    """Read the `name` of a nested named reference, tolerating nulls."""
    if not ref:
        return None
    name = ref.get("name")
    return str(name) if name is not None else None


class PokemonSummary(BaseModel):
    """Pokémon fields shown on list cards."""

    id: int
    name: str
    types: list[str] = Field(default_factory=list)
    sprite: str | None = None


class BerrySummary(BaseModel):
    """Berry fields shown on list cards."""

    id: int
    name: str
    firmness: str | None = None
    natural_gift_type: str | None = None
    size: int | None = None


class MoveSummary(BaseModel):
    """Move fields shown in the moves table."""

    id: int
    name: str
    type: str | None = None
    damage_class: str | None = None
    power: int | None = None
    accuracy: int | None = None
    pp: int | None = None


class AbilitySummary(BaseModel):
    """Ability fields shown in the abilities table."""

    id: int
    name: str
    generation: str | None = None
    is_main_series: bool = False


DetailRecord = PokemonSummary | BerrySummary | MoveSummary | AbilitySummary


def project_pokemon(raw: dict[str, Any]) -> PokemonSummary:
    # Types come back sorted by slot; keep that order
    slots = sorted(raw.get("types") or [], key=lambda t: t.get("slot", 0))
    types = [name for name in (_name_of(t.get("type")) for t in slots) if name]

    return PokemonSummary(
        id=raw["id"],
        name=raw["name"],
        types=types,
        sprite=(raw.get("sprites") or {}).get("front_default"),
    )


def project_berry(raw: dict[str, Any]) -> BerrySummary:
    return BerrySummary(
        id=raw["id"],
        name=raw["name"],
        firmness=_name_of(raw.get("firmness")),
        natural_gift_type=_name_of(raw.get("natural_gift_type")),
        size=raw.get("size"),
    )


def project_move(raw: dict[str, Any]) -> MoveSummary:
    return MoveSummary(
        id=raw["id"],
        name=raw["name"],
        type=_name_of(raw.get("type")),
        damage_class=_name_of(raw.get("damage_class")),
        power=raw.get("power"),
        accuracy=raw.get("accuracy"),
        pp=raw.get("pp"),
    )


def project_ability(raw: dict[str, Any]) -> AbilitySummary:
    return AbilitySummary(
        id=raw["id"],
        name=raw["name"],
        generation=_name_of(raw.get("generation")),
        is_main_series=bool(raw.get("is_main_series", False)),
    )
