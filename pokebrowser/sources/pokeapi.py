"""
PokeAPI client.

Async wrapper around the public PokeAPI v2 REST service. Every resource
kind exposes the same two endpoints:

    GET /{resource}?limit={n}&offset={k}  -> paginated named references
    GET /{resource}/{nameOrId}            -> full detail payload

API docs: https://pokeapi.co/docs/v2
"""

import asyncio
import logging
from typing import Any

import httpx

from pokebrowser.config import settings
from pokebrowser.models.failure import FailureKind, KnownError
from pokebrowser.models.resource import NamedResource, ResourcePage

logger = logging.getLogger(__name__)

USER_AGENT = "PokeBrowser/1.0"

DEFAULT_PAGE_SIZE = 20


class PokeAPIError(KnownError):
    """
    Raised when PokeAPI answers with a non-success status or cannot be reached.

    The message keeps the "PokeAPI error <status>: <reason>" shape that page
    loaders surface to the not-found/error boundary.
    """

    def __init__(self, status_code: int, reason: str, path: str | None = None):
        self.upstream_status = status_code
        self.path = path
        not_found = status_code == 404
        super().__init__(
            kind=FailureKind.NOT_FOUND if not_found else FailureKind.EXTERNAL_API_ERROR,
            message=f"PokeAPI error {status_code}: {reason}",
            detail=path,
            suggestion=None if not_found else "The upstream API may be down. Retry shortly.",
            status_code=404 if not_found else 502,
        )


class PokeAPIUnavailableError(KnownError):
    """Raised when the request never produced a response (DNS, timeout, ...)."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message=f"PokeAPI request failed: {type(cause).__name__}",
            detail=path,
            suggestion="Check network connectivity and retry.",
            status_code=503,
        )


class PokeAPIClient:
    """
    Client for the PokeAPI REST service.

    Owns one `httpx.AsyncClient` for connection reuse. Pass `client` to
    inject a preconfigured one (tests use this with respx or a mock
    transport).
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        simulated_latency: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.pokeapi_base_url).rstrip("/")
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=settings.http_timeout,
            follow_redirects=True,
        )
        self.simulated_latency = (
            settings.simulated_latency if simulated_latency is None else simulated_latency
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a path relative to the base URL and decode the JSON body.

        Raises:
            PokeAPIError: If the response status is not 2xx
            PokeAPIUnavailableError: If no response was received
        """
        if self.simulated_latency > 0:
            await asyncio.sleep(self.simulated_latency)

        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, params=params)
        except httpx.RequestError as e:
            logger.warning("PokeAPI request to %s failed: %s", path, e)
            raise PokeAPIUnavailableError(path, e) from e

        if not response.is_success:
            raise PokeAPIError(response.status_code, response.reason_phrase, path)

        return response.json()

    # --- Generic access ---

    async def list_resource(
        self, path: str, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0
    ) -> ResourcePage:
        """Fetch one page of a collection listing."""
        data = await self._get(path, params={"limit": limit, "offset": offset})
        return ResourcePage.model_validate(data)

    async def get_resource(self, path: str, name_or_id: str | int) -> dict[str, Any]:
        """Fetch the full detail payload of one resource."""
        data: dict[str, Any] = await self._get(f"{path}/{name_or_id}")
        return data

    # --- Pokémon ---

    async def pokemon(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/pokemon", name_or_id)

    async def list_pokemon(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> ResourcePage:
        return await self.list_resource("/pokemon", limit, offset)

    async def species(self, name_or_id: str | int) -> dict[str, Any]:
        """Species data (evolution chain link, flavour text, ...)."""
        return await self.get_resource("/pokemon-species", name_or_id)

    async def search_pokemon_by_name(
        self, query: str, limit: int | None = None
    ) -> list[NamedResource]:
        """
        Search Pokémon by partial name.

        PokeAPI has no search endpoint, so this loads up to `limit` names
        and filters locally (case-insensitive substring match).
        """
        page = await self.list_pokemon(limit or settings.search_limit, 0)
        needle = query.lower()
        return [item for item in page.results if needle in item.name]

    async def get_pokemon_by_type(self, type_name: str) -> list[NamedResource]:
        """All Pokémon of a type, in the order the type endpoint lists them."""
        data = await self.type(type_name)
        return [NamedResource.model_validate(entry["pokemon"]) for entry in data["pokemon"]]

    # --- Types ---

    async def type(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/type", name_or_id)

    async def list_types(self) -> ResourcePage:
        data = await self._get("/type")
        return ResourcePage.model_validate(data)

    # --- Abilities, moves, berries, items ---

    async def ability(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/ability", name_or_id)

    async def list_abilities(
        self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0
    ) -> ResourcePage:
        return await self.list_resource("/ability", limit, offset)

    async def move(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/move", name_or_id)

    async def list_moves(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> ResourcePage:
        return await self.list_resource("/move", limit, offset)

    async def berry(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/berry", name_or_id)

    async def list_berries(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> ResourcePage:
        return await self.list_resource("/berry", limit, offset)

    async def item(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/item", name_or_id)

    # --- Locations and game versions ---

    async def location(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/location", name_or_id)

    async def list_locations(
        self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0
    ) -> ResourcePage:
        return await self.list_resource("/location", limit, offset)

    async def location_area(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/location-area", name_or_id)

    async def version(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/version", name_or_id)

    async def version_group(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/version-group", name_or_id)

    async def generation(self, name_or_id: str | int) -> dict[str, Any]:
        return await self.get_resource("/generation", name_or_id)


# =============================================================================
# SHARED CLIENT INSTANCE
# =============================================================================

_client: PokeAPIClient | None = None


def get_pokeapi_client() -> PokeAPIClient:
    """Get the process-wide client (FastAPI dependency)."""
    global _client
    if _client is None:
        _client = PokeAPIClient()
    return _client


async def close_pokeapi_client() -> None:
    """Close and drop the process-wide client (application shutdown)."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
