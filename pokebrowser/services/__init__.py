"""
PokeBrowser services.

Comparison selection and the submission targets behind the creator and
user forms.
"""

from pokebrowser.services.comparison import (
    ComparisonStore,
    compare_stats,
    get_comparison_store,
    reset_comparison_store,
)
from pokebrowser.services.creator import (
    CREATOR_DEFAULTS,
    CreatorCard,
    StatBar,
    build_card,
    card_filename,
    create_pokemon_card_action,
)
from pokebrowser.services.users import make_delete_user_action, make_update_user_action

__all__ = [
    "CREATOR_DEFAULTS",
    "ComparisonStore",
    "CreatorCard",
    "StatBar",
    "build_card",
    "card_filename",
    "compare_stats",
    "create_pokemon_card_action",
    "get_comparison_store",
    "make_delete_user_action",
    "make_update_user_action",
    "reset_comparison_store",
]
