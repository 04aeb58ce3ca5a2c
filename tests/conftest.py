from typing import Any

import pytest

from pokebrowser.browsing import reset_session_registry
from pokebrowser.models import failure as failure_module
from pokebrowser.services.comparison import reset_comparison_store


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture(autouse=True)
def reset_process_state():
    """Drop the shared comparison selection and browse sessions."""
    reset_comparison_store()
    reset_session_registry()
    yield
    reset_comparison_store()
    reset_session_registry()


def _make_pokemon(
    name: str,
    pokemon_id: int,
    types: list[str],
    stats: dict[str, int] | None = None,
) -> dict[str, Any]:
    """A trimmed /pokemon/{name} payload."""
    stats = stats or {
        "hp": 45,
        "attack": 49,
        "defense": 49,
        "special-attack": 65,
        "special-defense": 65,
        "speed": 45,
    }
    return {
        "id": pokemon_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "types": [
            {"slot": slot, "type": {"name": t, "url": f"https://pokeapi.co/api/v2/type/{t}/"}}
            for slot, t in enumerate(types, start=1)
        ],
        "stats": [
            {"base_stat": value, "effort": 0, "stat": {"name": stat, "url": ""}}
            for stat, value in stats.items()
        ],
        "abilities": [
            {"ability": {"name": "overgrow", "url": ""}, "is_hidden": False, "slot": 1},
            {"ability": {"name": "chlorophyll", "url": ""}, "is_hidden": True, "slot": 3},
        ],
        "sprites": {
            "front_default": f"https://img.example/{pokemon_id}.png",
            "other": {
                "official-artwork": {"front_default": f"https://art.example/{pokemon_id}.png"}
            },
        },
    }


def _make_page(
    kind: str, names: list[str], start_id: int = 1, count: int | None = None
) -> dict[str, Any]:
    """A /{kind}?limit&offset listing payload."""
    return {
        "count": count if count is not None else len(names),
        "next": None,
        "previous": None,
        "results": [
            {"name": name, "url": f"https://pokeapi.co/api/v2/{kind}/{start_id + i}/"}
            for i, name in enumerate(names)
        ],
    }


@pytest.fixture
def make_pokemon():
    """Factory for /pokemon/{name} payloads."""
    return _make_pokemon


@pytest.fixture
def make_page():
    """Factory for collection listing payloads."""
    return _make_page
