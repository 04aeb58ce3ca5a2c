"""Shared Pokémon vocabularies used by filters, forms, and the creator card."""

POKEMON_TYPES: tuple[str, ...] = (
    "normal",
    "fire",
    "water",
    "electric",
    "grass",
    "ice",
    "fighting",
    "poison",
    "ground",
    "flying",
    "psychic",
    "bug",
    "rock",
    "ghost",
    "dragon",
    "dark",
    "steel",
    "fairy",
)

DAMAGE_CLASSES: tuple[str, ...] = ("physical", "special", "status")

GENERATIONS: tuple[str, ...] = (
    "generation-i",
    "generation-ii",
    "generation-iii",
    "generation-iv",
    "generation-v",
    "generation-vi",
    "generation-vii",
    "generation-viii",
    "generation-ix",
)

# Softest to hardest
FIRMNESS_LEVELS: tuple[str, ...] = ("very-soft", "soft", "hard", "very-hard", "super-hard")

# Base stats in the order the API returns them
STAT_NAMES: tuple[str, ...] = (
    "hp",
    "attack",
    "defense",
    "special-attack",
    "special-defense",
    "speed",
)

# RGB header colour per type on the creator card
TYPE_COLORS: dict[str, tuple[int, int, int]] = {
    "normal": (168, 168, 120),
    "fire": (240, 128, 48),
    "water": (104, 144, 240),
    "electric": (248, 208, 48),
    "grass": (120, 200, 80),
    "ice": (152, 216, 216),
    "fighting": (192, 48, 40),
    "poison": (160, 64, 160),
    "ground": (224, 192, 104),
    "flying": (168, 144, 240),
    "psychic": (248, 88, 136),
    "bug": (168, 184, 32),
    "rock": (184, 160, 56),
    "ghost": (112, 88, 152),
    "dragon": (112, 56, 248),
    "dark": (112, 88, 72),
    "steel": (184, 184, 208),
    "fairy": (238, 153, 172),
}


def format_name(name: str) -> str:
    """Turn an API slug into a display name ("fire-punch" -> "Fire Punch")."""
    return " ".join(word.capitalize() for word in name.split("-") if word)
