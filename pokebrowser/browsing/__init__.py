from pokebrowser.browsing.fetcher import (
    Cursor,
    DetailCache,
    FetcherSnapshot,
    PaginatedResourceFetcher,
    ResourceSource,
)
from pokebrowser.browsing.kinds import (
    ABILITY,
    BERRY,
    MOVE,
    POKEMON,
    RESOURCE_KINDS,
    ResourceKind,
    UnknownResourceKindError,
    get_resource_kind,
)
from pokebrowser.browsing.loaders import load_first_page
from pokebrowser.browsing.sessions import (
    BrowseSessionRegistry,
    SessionNotFoundError,
    get_session_registry,
    reset_session_registry,
)

__all__ = [
    "ABILITY",
    "BERRY",
    "MOVE",
    "POKEMON",
    "RESOURCE_KINDS",
    "BrowseSessionRegistry",
    "Cursor",
    "DetailCache",
    "FetcherSnapshot",
    "PaginatedResourceFetcher",
    "ResourceKind",
    "ResourceSource",
    "SessionNotFoundError",
    "UnknownResourceKindError",
    "get_resource_kind",
    "get_session_registry",
    "load_first_page",
    "reset_session_registry",
]
