"""
Browse session endpoints.

A session stands in for one mounted infinite list: open it with the seed
query, read it (optionally with filters), ask for the next page, and
close it when the view goes away.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from pokebrowser.browsing import (
    POKEMON,
    BrowseSessionRegistry,
    FetcherSnapshot,
    PaginatedResourceFetcher,
    get_resource_kind,
    get_session_registry,
    load_first_page,
)
from pokebrowser.models.resource import NamedResource
from pokebrowser.sources.pokeapi import PokeAPIClient, get_pokeapi_client

router = APIRouter(prefix="/browse", tags=["browse"])

PokeAPIClientDep = Annotated[PokeAPIClient, Depends(get_pokeapi_client)]
RegistryDep = Annotated[BrowseSessionRegistry, Depends(get_session_registry)]

# Query parameters of GET /browse/{id} that are not filter values
RESERVED_PARAMS = frozenset({"wait"})


class BrowseOpenRequest(BaseModel):
    """Seed query for a new list."""

    q: str = Field(default="", description="Name search (pokemon only)")
    type: str = Field(default="", description="Type filter")


class BrowseStateResponse(BaseModel):
    """What the list view renders."""

    session_id: str
    kind: str
    items: list[NamedResource] = Field(default_factory=list)
    details: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Resolved detail records of the visible items, by name",
    )
    is_loading_next_page: bool = False
    has_more_pages: bool = True
    total_loaded: int = 0
    active_filters: dict[str, str] = Field(default_factory=dict)
    appended: bool | None = Field(
        default=None,
        description="Whether the last next-page request appended items",
    )


class BrowseCloseResponse(BaseModel):
    session_id: str
    closed: bool = True


def _state(
    session_id: str,
    fetcher: PaginatedResourceFetcher,
    snapshot: FetcherSnapshot,
    appended: bool | None = None,
) -> BrowseStateResponse:
    return BrowseStateResponse(
        session_id=session_id,
        kind=fetcher.kind.name,
        items=snapshot.visible_items,
        details={name: record.model_dump() for name, record in snapshot.details.items()},
        is_loading_next_page=snapshot.is_loading_next_page,
        has_more_pages=snapshot.has_more_pages,
        total_loaded=snapshot.total_loaded,
        active_filters=snapshot.active_filters,
        appended=appended,
    )


@router.post("/{kind}", response_model=BrowseStateResponse, status_code=201)
async def open_browse_session(
    kind: str,
    client: PokeAPIClientDep,
    registry: RegistryDep,
    request: BrowseOpenRequest | None = None,
) -> BrowseStateResponse:
    """
    Open a list over one resource kind.

    The first page is loaded before the session exists; detail resolution
    for it starts in the background.
    """
    resource_kind = get_resource_kind(kind)
    body = request or BrowseOpenRequest()

    # Validates the type against the kind's filters before any fetch
    filters = resource_kind.filter_set({"type": body.type} if body.type else {})

    is_pokemon = resource_kind is POKEMON
    seed = await load_first_page(
        client,
        resource_kind,
        search=body.q if is_pokemon else "",
        type_filter=body.type if is_pokemon else "",
    )

    fetcher = PaginatedResourceFetcher(client, resource_kind)
    fetcher.set_filters(filters)
    search_term = body.q.strip().lower() if is_pokemon else ""
    # Type members and search matches are complete results, not a first page
    seeded_from_query = is_pokemon and bool(search_term or body.type)
    fetcher.initialize(
        seed,
        seed_offset=len(seed),
        search_term=search_term,
        seeded_from_query=seeded_from_query,
    )

    session_id = registry.open(fetcher)
    return _state(session_id, fetcher, fetcher.snapshot())


@router.get("/{session_id}", response_model=BrowseStateResponse)
async def read_browse_session(
    session_id: str,
    http_request: Request,
    registry: RegistryDep,
    wait: bool = False,
) -> BrowseStateResponse:
    """
    Read the list.

    Every query parameter other than `wait` is a filter value and replaces
    the session's filters; no parameters clears them. With wait=true the
    response waits for pending detail fetches first.
    """
    fetcher = registry.get(session_id)

    values = {
        name: value
        for name, value in http_request.query_params.items()
        if name not in RESERVED_PARAMS
    }
    fetcher.set_filters(fetcher.kind.filter_set(values))

    if wait:
        await fetcher.wait_for_details()

    return _state(session_id, fetcher, fetcher.snapshot())


@router.post("/{session_id}/next", response_model=BrowseStateResponse)
async def next_browse_page(
    session_id: str,
    registry: RegistryDep,
    wait: bool = False,
) -> BrowseStateResponse:
    """
    Request the next page.

    A no-op (appended=false) while a page is loading, after the end of the
    collection, on a list seeded from a search or type query, or while a
    filter is active.
    """
    fetcher = registry.get(session_id)
    appended = await fetcher.request_next_page()

    if wait:
        await fetcher.wait_for_details()

    return _state(session_id, fetcher, fetcher.snapshot(), appended=appended)


@router.delete("/{session_id}", response_model=BrowseCloseResponse)
async def close_browse_session(session_id: str, registry: RegistryDep) -> BrowseCloseResponse:
    """Close the list. Detail fetches still in flight are discarded."""
    registry.close(session_id)
    return BrowseCloseResponse(session_id=session_id)
