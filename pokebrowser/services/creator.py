"""
Pokémon creator: submission target for the "invent a Pokémon" form.

Re-validates the transport payload on the server side and turns it into
a card layout the presentation layer can render (header colour, stat
bars, download filename). Rendering the document itself is left to the
presentation layer.
"""

import logging
import re

from pydantic import BaseModel, Field, ValidationError

from pokebrowser.forms.action import TransportPayload
from pokebrowser.forms.engine import all_errors_per_field
from pokebrowser.forms.schemas import PokemonCreatorForm
from pokebrowser.models.constants import TYPE_COLORS
from pokebrowser.models.forms import SubmissionResult

logger = logging.getLogger(__name__)

# Stat bars are scaled against the highest base stat in the games
MAX_STAT_VALUE = 255

# Values a blank creator form starts with
CREATOR_DEFAULTS: dict[str, str] = {
    "name": "",
    "type": "",
    "hp": "50",
    "attack": "50",
    "defense": "50",
    "speed": "50",
    "ability": "",
    "description": "",
    "image_url": "",
}

STAT_LABELS = {
    "hp": "HP",
    "attack": "Attack",
    "defense": "Defense",
    "speed": "Speed",
}


class StatBar(BaseModel):
    """One stat line of the card."""

    stat: str
    label: str
    value: int
    fill_ratio: float = Field(ge=0.0, le=1.0)


class CreatorCard(BaseModel):
    """Layout data for an invented Pokémon's card."""

    name: str
    type: str
    color: tuple[int, int, int]
    stats: list[StatBar]
    ability: str
    description: str
    image_url: str | None = None
    filename: str


def card_filename(name: str) -> str:
    """pokemon-<lowercase name, whitespace runs as hyphens>.pdf"""
    slug = re.sub(r"\s+", "-", name.strip().lower())
    return f"pokemon-{slug}.pdf"


def build_card(form: PokemonCreatorForm) -> CreatorCard:
    type_name = form.type.value
    stats = [
        StatBar(
            stat=stat,
            label=label,
            value=getattr(form, stat),
            fill_ratio=min(getattr(form, stat) / MAX_STAT_VALUE, 1.0),
        )
        for stat, label in STAT_LABELS.items()
    ]

    return CreatorCard(
        name=form.name,
        type=type_name,
        color=TYPE_COLORS.get(type_name, TYPE_COLORS["normal"]),
        stats=stats,
        ability=form.ability,
        description=form.description,
        image_url=str(form.image_url) if form.image_url else None,
        filename=card_filename(form.name),
    )


async def create_pokemon_card_action(
    _previous_state: SubmissionResult[CreatorCard],
    payload: TransportPayload,
) -> SubmissionResult[CreatorCard]:
    """
    Validate an invented Pokémon and build its card.

    Returns every validation message per field on failure.
    """
    raw = {name: payload.get(name) for name in CREATOR_DEFAULTS}
    raw["image_url"] = payload.get("image_url") or ""

    try:
        form = PokemonCreatorForm.model_validate(raw)
    except ValidationError as e:
        return SubmissionResult(
            success=False,
            message="Please fix the errors in the form",
            field_errors=all_errors_per_field(e),
        )

    card = build_card(form)
    logger.info("Created card for invented pokemon %s (%s)", card.name, card.type)

    return SubmissionResult(
        success=True,
        message=f"The card for {card.name} was created successfully!",
        data=card,
    )
