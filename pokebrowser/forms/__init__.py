"""
Reusable form state and submission lifecycle.

FormEngine handles values, validation, and touched state; FormAction
drives a submission target and keeps the optimistic overlay apart from
the durable result.
"""

from pokebrowser.forms.action import (
    FormAction,
    SubmissionInProgressError,
    SubmitTarget,
    TransportPayload,
    serialize_values,
)
from pokebrowser.forms.engine import (
    FieldBinding,
    FormEngine,
    InputEvent,
    all_errors_per_field,
    first_error_per_field,
)
from pokebrowser.forms.schemas import PokemonCreatorForm, PokemonType, UserCreateForm, UserEditForm

__all__ = [
    "FieldBinding",
    "FormAction",
    "FormEngine",
    "InputEvent",
    "PokemonCreatorForm",
    "PokemonType",
    "SubmissionInProgressError",
    "SubmitTarget",
    "TransportPayload",
    "UserCreateForm",
    "UserEditForm",
    "all_errors_per_field",
    "first_error_per_field",
    "serialize_values",
]
