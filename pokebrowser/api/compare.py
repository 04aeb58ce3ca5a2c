"""
Comparison API endpoints.

Up to MAX_COMPARE Pokémon can be selected at once; the selection is
shared by every client of the process.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from pokebrowser.config import MAX_COMPARE
from pokebrowser.models.comparison import ComparisonRecord, ComparisonStats
from pokebrowser.services.comparison import (
    ComparisonStore,
    compare_stats,
    get_comparison_store,
)
from pokebrowser.sources.pokeapi import PokeAPIClient, get_pokeapi_client

router = APIRouter(prefix="/compare", tags=["compare"])

PokeAPIClientDep = Annotated[PokeAPIClient, Depends(get_pokeapi_client)]
ComparisonStoreDep = Annotated[ComparisonStore, Depends(get_comparison_store)]


class ComparisonResponse(BaseModel):
    """Current selection."""

    items: list[ComparisonRecord] = Field(default_factory=list)
    count: int = 0
    capacity: int = MAX_COMPARE
    can_add_more: bool = True


class ComparisonChangeResponse(ComparisonResponse):
    """Selection after an add or remove."""

    changed: bool = Field(..., description="False when the call was a no-op")
    message: str = ""


def _selection(store: ComparisonStore) -> dict[str, Any]:
    items = store.selected_items
    return {
        "items": items,
        "count": len(items),
        "capacity": store.capacity,
        "can_add_more": len(items) < store.capacity,
    }


@router.get("", response_model=ComparisonResponse)
async def get_comparison(store: ComparisonStoreDep) -> ComparisonResponse:
    """Get the selected Pokémon in selection order."""
    return ComparisonResponse(**_selection(store))


@router.get("/stats", response_model=ComparisonStats)
async def get_comparison_stats(store: ComparisonStoreDep) -> ComparisonStats:
    """
    Stat table for the selection.

    Best and worst holders are marked per stat only when values differ.
    """
    return compare_stats(store.selected_items)


@router.post("/{name}", response_model=ComparisonChangeResponse)
async def add_to_comparison(
    name: str,
    store: ComparisonStoreDep,
    client: PokeAPIClientDep,
) -> ComparisonChangeResponse:
    """
    Add a Pokémon to the selection.

    Adding an already selected Pokémon, or adding to a full selection,
    leaves it unchanged.
    """
    identity = name.strip().lower()

    if store.contains(identity):
        return ComparisonChangeResponse(
            **_selection(store), changed=False, message=f"{identity} is already selected"
        )
    if not store.can_add_more():
        return ComparisonChangeResponse(
            **_selection(store),
            changed=False,
            message=f"At most {store.capacity} Pokémon can be compared",
        )

    record = ComparisonRecord.from_api(await client.pokemon(identity))
    added = store.add(record)
    message = f"{record.name} added" if added else f"{record.name} was not added"

    return ComparisonChangeResponse(**_selection(store), changed=added, message=message)


@router.delete("/{name}", response_model=ComparisonChangeResponse)
async def remove_from_comparison(name: str, store: ComparisonStoreDep) -> ComparisonChangeResponse:
    """Remove a Pokémon from the selection."""
    identity = name.strip().lower()
    removed = store.remove(identity)
    message = f"{identity} removed" if removed else f"{identity} was not selected"
    return ComparisonChangeResponse(**_selection(store), changed=removed, message=message)


@router.delete("", response_model=ComparisonResponse)
async def clear_comparison(store: ComparisonStoreDep) -> ComparisonResponse:
    """Empty the selection."""
    store.clear()
    return ComparisonResponse(**_selection(store))
