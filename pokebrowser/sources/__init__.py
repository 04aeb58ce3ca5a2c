from pokebrowser.sources.pokeapi import (
    PokeAPIClient,
    PokeAPIError,
    PokeAPIUnavailableError,
    close_pokeapi_client,
    get_pokeapi_client,
)

__all__ = [
    "PokeAPIClient",
    "PokeAPIError",
    "PokeAPIUnavailableError",
    "close_pokeapi_client",
    "get_pokeapi_client",
]
