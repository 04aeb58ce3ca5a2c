"""
Resource API endpoints.

Direct access to paginated PokeAPI collections and detail records, plus
the Pokémon list loader (type and name search).
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from pokebrowser.browsing import POKEMON, get_resource_kind, load_first_page
from pokebrowser.config import settings
from pokebrowser.filtering import InvalidFilterError
from pokebrowser.models.constants import POKEMON_TYPES
from pokebrowser.models.resource import NamedResource
from pokebrowser.sources.pokeapi import PokeAPIClient, get_pokeapi_client

router = APIRouter(tags=["resources"])

PokeAPIClientDep = Annotated[PokeAPIClient, Depends(get_pokeapi_client)]


class ResourceListResponse(BaseModel):
    """One page of a resource collection."""

    kind: str
    count: int = Field(..., description="Total size of the collection upstream")
    offset: int
    next_offset: int | None = Field(
        default=None,
        description="Offset of the following page, or null at the end",
    )
    results: list[NamedResource] = Field(default_factory=list)


class ResourceDetailResponse(BaseModel):
    """A detail record with its list-view projection."""

    kind: str
    name: str
    summary: dict[str, Any]
    data: dict[str, Any] = Field(..., description="Raw PokeAPI payload")


class PokemonListResponse(BaseModel):
    """Seed items of the Pokémon list view."""

    query: str = ""
    type: str = ""
    results: list[NamedResource] = Field(default_factory=list)
    total: int = 0


@router.get("/resources/{kind}", response_model=ResourceListResponse)
async def list_resources(
    kind: str,
    client: PokeAPIClientDep,
    limit: Annotated[int, Query(ge=1, le=100)] = settings.page_size,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> ResourceListResponse:
    """List one page of pokemon, berries, moves, or abilities."""
    resource_kind = get_resource_kind(kind)
    page = await client.list_resource(resource_kind.list_path, limit=limit, offset=offset)

    return ResourceListResponse(
        kind=resource_kind.name,
        count=page.count,
        offset=offset,
        next_offset=offset + limit if page.next else None,
        results=page.results,
    )


@router.get("/resources/{kind}/{name}", response_model=ResourceDetailResponse)
async def get_resource_detail(
    kind: str,
    name: str,
    client: PokeAPIClientDep,
) -> ResourceDetailResponse:
    """
    Get one resource by name or id.

    Unknown names surface as a 404 known failure.
    """
    resource_kind = get_resource_kind(kind)
    raw = await client.get_resource(resource_kind.detail_path, name.strip().lower())

    return ResourceDetailResponse(
        kind=resource_kind.name,
        name=raw.get("name", name),
        summary=resource_kind.project(raw).model_dump(),
        data=raw,
    )


@router.get("/pokemon", response_model=PokemonListResponse)
async def list_pokemon(
    client: PokeAPIClientDep,
    q: str = "",
    type: str = "",
) -> PokemonListResponse:
    """
    Load the Pokémon list the way the list page does.

    - type: every member of the type, narrowed by q
    - q only: name search over the whole Pokédex
    - neither: the first page
    """
    if type and type not in POKEMON_TYPES:
        raise InvalidFilterError("type", type, POKEMON_TYPES)

    results = await load_first_page(client, POKEMON, search=q, type_filter=type)
    return PokemonListResponse(
        query=q.strip().lower(),
        type=type,
        results=results,
        total=len(results),
    )
