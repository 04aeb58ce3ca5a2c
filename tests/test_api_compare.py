"""Tests for the comparison endpoints."""

import httpx
import pytest
import respx
from httpx import ASGITransport, AsyncClient

from pokebrowser.config import MAX_COMPARE
from pokebrowser.main import app
from pokebrowser.services.comparison import get_comparison_store
from pokebrowser.sources.pokeapi import PokeAPIClient, get_pokeapi_client

BASE = "https://pokeapi.co/api/v2"

ROSTER = {
    "pikachu": (25, ["electric"], 90),
    "snorlax": (143, ["normal"], 30),
    "mew": (151, ["psychic"], 100),
    "eevee": (133, ["normal"], 55),
    "ditto": (132, ["normal"], 48),
}


@pytest.fixture
async def pokeapi():
    client = PokeAPIClient(base_url=BASE, simulated_latency=0)
    yield client
    await client.aclose()


@pytest.fixture
async def client(pokeapi: PokeAPIClient):
    app.dependency_overrides[get_pokeapi_client] = lambda: pokeapi

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def mock_roster(make_pokemon):
    def detail(request: httpx.Request, name: str) -> httpx.Response:
        if name not in ROSTER:
            return httpx.Response(404)
        pokemon_id, types, speed = ROSTER[name]
        stats = {
            "hp": 50,
            "attack": 50,
            "defense": 50,
            "special-attack": 50,
            "special-defense": 50,
            "speed": speed,
        }
        return httpx.Response(200, json=make_pokemon(name, pokemon_id, types, stats))

    def install() -> respx.Route:
        return respx.get(url__regex=rf"^{BASE}/pokemon/(?P<name>[a-z-]+)$").mock(
            side_effect=detail
        )

    return install


class TestCompare:
    async def test_empty_selection(self, client: AsyncClient) -> None:
        response = await client.get("/compare")

        assert response.status_code == 200
        assert response.json() == {
            "items": [],
            "count": 0,
            "capacity": MAX_COMPARE,
            "can_add_more": True,
        }

    @respx.mock
    async def test_add_and_list(self, client: AsyncClient, mock_roster) -> None:
        mock_roster()

        added = await client.post("/compare/Pikachu")

        assert added.status_code == 200
        data = added.json()
        assert data["changed"] is True
        assert [i["name"] for i in data["items"]] == ["pikachu"]
        assert data["items"][0]["stats"]["speed"] == 90

    @respx.mock
    async def test_duplicate_does_not_refetch(self, client: AsyncClient, mock_roster) -> None:
        route = mock_roster()
        await client.post("/compare/pikachu")

        again = await client.post("/compare/pikachu")

        assert again.json()["changed"] is False
        assert again.json()["count"] == 1
        assert route.call_count == 1

    @respx.mock
    async def test_full_selection_is_noop(self, client: AsyncClient, mock_roster) -> None:
        route = mock_roster()
        for name in ["pikachu", "snorlax", "mew", "eevee"]:
            await client.post(f"/compare/{name}")

        response = await client.post("/compare/ditto")

        data = response.json()
        assert data["changed"] is False
        assert data["can_add_more"] is False
        assert data["count"] == MAX_COMPARE
        assert route.call_count == MAX_COMPARE

    @respx.mock
    async def test_unknown_pokemon(self, client: AsyncClient, mock_roster) -> None:
        mock_roster()

        response = await client.post("/compare/agumon")

        assert response.status_code == 404
        assert len(get_comparison_store()) == 0

    @respx.mock
    async def test_remove_and_clear(self, client: AsyncClient, mock_roster) -> None:
        mock_roster()
        await client.post("/compare/pikachu")
        await client.post("/compare/mew")

        removed = await client.delete("/compare/pikachu")
        assert removed.json()["changed"] is True
        assert [i["name"] for i in removed.json()["items"]] == ["mew"]

        missing = await client.delete("/compare/pikachu")
        assert missing.json()["changed"] is False

        cleared = await client.delete("/compare")
        assert cleared.json()["count"] == 0

    @respx.mock
    async def test_stats(self, client: AsyncClient, mock_roster) -> None:
        mock_roster()
        await client.post("/compare/pikachu")
        await client.post("/compare/snorlax")

        response = await client.get("/compare/stats")

        data = response.json()
        rows = {row["stat"]: row for row in data["rows"]}
        assert rows["speed"]["best"] == ["pikachu"]
        assert rows["speed"]["worst"] == ["snorlax"]
        assert rows["hp"]["best"] == []
        assert data["totals"] == {"pikachu": 340, "snorlax": 280}
