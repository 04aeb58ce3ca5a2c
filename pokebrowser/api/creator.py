"""
Pokémon creator endpoint.

Runs the same two steps as the creator form: client-side validation of
the raw values, then submission to the creator target, which validates
again and builds the card.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response

from pokebrowser.forms import FormAction, FormEngine, PokemonCreatorForm
from pokebrowser.models.forms import SubmissionResult
from pokebrowser.services.creator import (
    CREATOR_DEFAULTS,
    CreatorCard,
    create_pokemon_card_action,
)

router = APIRouter(prefix="/pokemon", tags=["creator"])


@router.post("/create", response_model=SubmissionResult[CreatorCard])
async def create_pokemon(
    response: Response,
    values: Annotated[dict[str, Any], Body(examples=[{"name": "Flamby", "type": "fire"}])],
) -> SubmissionResult[CreatorCard]:
    """
    Invent a Pokémon and get its card layout.

    Unknown fields are ignored and missing ones take the blank-form
    defaults. Returns 422 with per-field messages when validation fails.
    """
    engine = FormEngine(CREATOR_DEFAULTS, schema=PokemonCreatorForm)
    for name, value in values.items():
        if name in CREATOR_DEFAULTS:
            engine.set_value(name, value)

    action: FormAction[CreatorCard] = FormAction(create_pokemon_card_action)

    if not await engine.handle_submit(action.submit_with_values):
        response.status_code = 422
        return SubmissionResult(
            success=False,
            message="Please fix the errors in the form",
            field_errors={name: [error] for name, error in engine.errors.items()},
        )

    if not action.state.success:
        response.status_code = 422
    return action.state
