"""
Page loaders.

Build the first page a list view is seeded with. Upstream failures are
raised (PokeAPIError) so the HTTP layer can render its not-found/error
response.
"""

import logging

from pokebrowser.browsing.kinds import POKEMON, ResourceKind
from pokebrowser.config import settings
from pokebrowser.models.resource import NamedResource
from pokebrowser.sources.pokeapi import PokeAPIClient

logger = logging.getLogger(__name__)


async def load_first_page(
    client: PokeAPIClient,
    kind: ResourceKind,
    search: str = "",
    type_filter: str = "",
) -> list[NamedResource]:
    """
    Load the seed items for a list view.

    Pokémon lists accept a type and a name search, resolved upstream:
    - type: every member of the type, narrowed by the search term if any
    - search only: name search over the whole Pokédex
    - neither: the first page

    Other kinds always load their first page.
    """
    query = search.strip().lower()

    if kind is POKEMON and type_filter:
        members = await client.get_pokemon_by_type(type_filter)
        if query:
            members = [item for item in members if query in item.name]
        logger.info("Loaded %d %s pokemon (search=%r)", len(members), type_filter, query)
        return members

    if kind is POKEMON and query:
        matches = await client.search_pokemon_by_name(query)
        logger.info("Search %r matched %d pokemon", query, len(matches))
        return matches

    page = await client.list_resource(kind.list_path, limit=settings.page_size, offset=0)
    return list(page.results)
