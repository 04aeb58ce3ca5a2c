"""Validation schemas for the creator and user-edit forms."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, HttpUrl, StringConstraints


class PokemonType(str, Enum):
    """The 18 Pokémon types."""

    NORMAL = "normal"
    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    FLYING = "flying"
    PSYCHIC = "psychic"
    BUG = "bug"
    ROCK = "rock"
    GHOST = "ghost"
    DRAGON = "dragon"
    DARK = "dark"
    STEEL = "steel"
    FAIRY = "fairy"


Stat = Annotated[int, Field(ge=1, le=999)]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class PokemonCreatorForm(BaseModel):
    """
    An invented Pokémon.

    Numeric stats accept strings ("45") since they arrive through the
    flat transport payload.
    """

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
    type: PokemonType
    hp: Stat
    attack: Stat
    defense: Stat
    speed: Stat
    ability: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
    description: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=10, max_length=500)
    ]
    image_url: HttpUrl | Literal[""] = ""


class UserEditForm(BaseModel):
    """Editable fields of a demo user."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    email: Annotated[str, StringConstraints(strip_whitespace=True, pattern=EMAIL_PATTERN)]


class UserCreateForm(UserEditForm):
    """Fields required to create a demo user."""

    password: str | None = None
