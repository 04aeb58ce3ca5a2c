from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


@dataclass
class FormFieldState:
    """State of one named field."""

    value: Any
    error: str | None = None
    touched: bool = False
    dirty: bool = False


@dataclass
class FormState:
    """All fields of a form plus submission status."""

    fields: dict[str, FormFieldState] = field(default_factory=dict)
    is_submitting: bool = False

    @property
    def is_valid(self) -> bool:
        return all(f.error is None for f in self.fields.values())


class SubmissionResult(BaseModel, Generic[T]):
    """
    Outcome returned by every submission target.

    Attributes:
        success: Whether the target accepted the submission
        message: Message for the user (pending text, success, or failure)
        data: Opaque result produced by the target
        field_errors: Every message per field, for server-side validation
    """

    success: bool = False
    message: str | None = None
    data: T | None = None
    field_errors: dict[str, list[str]] | None = Field(default=None)
