from pokebrowser.models.comparison import (
    AbilitySlot,
    ComparisonRecord,
    ComparisonStats,
    StatRow,
)
from pokebrowser.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from pokebrowser.models.forms import FormFieldState, FormState, SubmissionResult
from pokebrowser.models.resource import (
    AbilitySummary,
    BerrySummary,
    DetailRecord,
    MoveSummary,
    NamedResource,
    PokemonSummary,
    ResourcePage,
    project_ability,
    project_berry,
    project_move,
    project_pokemon,
)
from pokebrowser.models.user import User

__all__ = [
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "AbilitySlot",
    "AbilitySummary",
    "ApiResponse",
    "BerrySummary",
    "ComparisonRecord",
    "ComparisonStats",
    "DetailRecord",
    "FailureDetail",
    "FailureKind",
    "FormFieldState",
    "FormState",
    "KnownError",
    "MoveSummary",
    "NamedResource",
    "OutcomeType",
    "PokemonSummary",
    "ResourcePage",
    "StatRow",
    "SubmissionResult",
    "User",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
    "project_ability",
    "project_berry",
    "project_move",
    "project_pokemon",
]
