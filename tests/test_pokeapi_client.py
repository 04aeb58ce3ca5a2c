"""Tests for the PokeAPI client."""

import httpx
import pytest
import respx

from pokebrowser.models.failure import FailureKind
from pokebrowser.sources.pokeapi import (
    PokeAPIClient,
    PokeAPIError,
    PokeAPIUnavailableError,
    close_pokeapi_client,
    get_pokeapi_client,
)

BASE = "https://pokeapi.co/api/v2"


@pytest.fixture
async def client():
    client = PokeAPIClient(base_url=BASE, simulated_latency=0)
    yield client
    await client.aclose()


class TestListResource:
    @respx.mock
    async def test_sends_limit_and_offset(self, client: PokeAPIClient, make_page) -> None:
        route = respx.get(f"{BASE}/berry", params={"limit": "20", "offset": "40"}).mock(
            return_value=httpx.Response(200, json=make_page("berry", ["cheri", "chesto"], 41))
        )

        page = await client.list_resource("/berry", limit=20, offset=40)

        assert route.called
        assert [item.name for item in page.results] == ["cheri", "chesto"]
        assert page.results[0].resource_id == "41"

    @respx.mock
    async def test_named_helpers(self, client: PokeAPIClient, make_page) -> None:
        respx.get(f"{BASE}/move").mock(
            return_value=httpx.Response(200, json=make_page("move", ["pound"], count=900))
        )

        page = await client.list_moves()

        assert page.count == 900


class TestGetResource:
    @respx.mock
    async def test_returns_payload(self, client: PokeAPIClient, make_pokemon) -> None:
        respx.get(f"{BASE}/pokemon/pikachu").mock(
            return_value=httpx.Response(200, json=make_pokemon("pikachu", 25, ["electric"]))
        )

        data = await client.pokemon("pikachu")

        assert data["id"] == 25

    @respx.mock
    async def test_not_found(self, client: PokeAPIClient) -> None:
        """404 keeps the "PokeAPI error <status>: <reason>" message."""
        respx.get(f"{BASE}/pokemon/missingno").mock(return_value=httpx.Response(404))

        with pytest.raises(PokeAPIError, match="PokeAPI error 404: Not Found") as exc_info:
            await client.pokemon("missingno")

        assert exc_info.value.kind == FailureKind.NOT_FOUND
        assert exc_info.value.status_code == 404
        assert exc_info.value.upstream_status == 404

    @respx.mock
    async def test_server_error(self, client: PokeAPIClient) -> None:
        respx.get(f"{BASE}/berry/cheri").mock(return_value=httpx.Response(500))

        with pytest.raises(PokeAPIError, match="PokeAPI error 500") as exc_info:
            await client.berry("cheri")

        assert exc_info.value.kind == FailureKind.EXTERNAL_API_ERROR
        assert exc_info.value.status_code == 502

    @respx.mock
    async def test_transport_error(self, client: PokeAPIClient) -> None:
        respx.get(f"{BASE}/ability/stench").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(PokeAPIUnavailableError) as exc_info:
            await client.ability("stench")

        assert exc_info.value.kind == FailureKind.SERVICE_UNAVAILABLE
        assert exc_info.value.status_code == 503


class TestSearch:
    @respx.mock
    async def test_search_by_name_substring(self, client: PokeAPIClient, make_page) -> None:
        """Search loads the name index once and matches case-insensitively."""
        route = respx.get(f"{BASE}/pokemon", params={"limit": "2000", "offset": "0"}).mock(
            return_value=httpx.Response(
                200, json=make_page("pokemon", ["pikachu", "raichu", "pichu", "mew"])
            )
        )

        matches = await client.search_pokemon_by_name("CHU")

        assert route.call_count == 1
        assert [m.name for m in matches] == ["pikachu", "raichu", "pichu"]

    @respx.mock
    async def test_by_type(self, client: PokeAPIClient) -> None:
        respx.get(f"{BASE}/type/ghost").mock(
            return_value=httpx.Response(
                200,
                json={
                    "name": "ghost",
                    "pokemon": [
                        {"slot": 1, "pokemon": {"name": "gastly", "url": f"{BASE}/pokemon/92/"}},
                        {"slot": 1, "pokemon": {"name": "haunter", "url": f"{BASE}/pokemon/93/"}},
                    ],
                },
            )
        )

        members = await client.get_pokemon_by_type("ghost")

        assert [m.name for m in members] == ["gastly", "haunter"]
        assert members[1].resource_id == "93"


class TestSharedClient:
    async def test_singleton_and_close(self) -> None:
        first = get_pokeapi_client()
        assert get_pokeapi_client() is first

        await close_pokeapi_client()

        assert get_pokeapi_client() is not first
        await close_pokeapi_client()
