from typing import Any

from pydantic import BaseModel, Field


class AbilitySlot(BaseModel):
    """An ability a Pokémon can have."""

    name: str
    is_hidden: bool = False


class ComparisonRecord(BaseModel):
    """
    A full Pokémon record held for side-by-side comparison.

    Attributes:
        id: National Pokédex number
        name: API name, also the identity in the selection
        types: Type names in slot order
        stats: Base stats keyed by stat name, in API order
        height: Height in decimetres
        weight: Weight in hectograms
        abilities: Regular and hidden abilities
        sprite: Default front sprite URL
        artwork: Official artwork URL
    """

    id: int
    name: str
    types: list[str] = Field(default_factory=list)
    stats: dict[str, int] = Field(default_factory=dict)
    height: int = 0
    weight: int = 0
    abilities: list[AbilitySlot] = Field(default_factory=list)
    sprite: str | None = None
    artwork: str | None = None

    @property
    def identity(self) -> str:
        return self.name

    def base_stat_total(self) -> int:
        """Sum of all base stats."""
        return sum(self.stats.values())

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "ComparisonRecord":
        """Project a /pokemon/{name} payload."""
        slots = sorted(raw.get("types") or [], key=lambda t: t.get("slot", 0))
        sprites = raw.get("sprites") or {}
        artwork = ((sprites.get("other") or {}).get("official-artwork") or {}).get(
            "front_default"
        )

        return cls(
            id=raw["id"],
            name=raw["name"],
            types=[t["type"]["name"] for t in slots],
            stats={s["stat"]["name"]: s["base_stat"] for s in raw.get("stats") or []},
            height=raw.get("height") or 0,
            weight=raw.get("weight") or 0,
            abilities=[
                AbilitySlot(name=a["ability"]["name"], is_hidden=a.get("is_hidden", False))
                for a in raw.get("abilities") or []
            ],
            sprite=sprites.get("front_default"),
            artwork=artwork,
        )


class StatRow(BaseModel):
    """One stat across every compared Pokémon."""

    stat: str
    values: dict[str, int]
    best: list[str] = Field(default_factory=list)
    worst: list[str] = Field(default_factory=list)


class ComparisonStats(BaseModel):
    """Stat table for the compare page."""

    rows: list[StatRow] = Field(default_factory=list)
    totals: dict[str, int] = Field(default_factory=dict)
