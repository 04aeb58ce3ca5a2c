"""
Form State Engine.

Tracks values, errors, and touched flags for an arbitrary set of named
fields, validates them against a pydantic model, and runs a submit
callback only when the values are valid.

Error policy:
- Validation failures are data (field -> first message), never raised
- Exceptions thrown by the submit callback are logged, not surfaced
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from pokebrowser.models.forms import FormFieldState, FormState

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[dict[str, Any]], Awaitable[None] | None]


@dataclass
class InputEvent:
    """What an input-like control reports on change."""

    value: Any = None
    checked: bool = False
    type: str = "text"


@dataclass
class FieldBinding:
    """Everything an input-like control needs to wire itself to a field."""

    name: str
    value: Any
    on_change: Callable[[InputEvent], None]
    on_blur: Callable[[], None]


def first_error_per_field(error: ValidationError) -> dict[str, str]:
    """Keep the first message reported for each top-level field."""
    errors: dict[str, str] = {}
    for item in error.errors():
        loc = item.get("loc") or ()
        if not loc:
            continue
        name = str(loc[0])
        if name not in errors:
            errors[name] = item["msg"]
    return errors


def all_errors_per_field(error: ValidationError) -> dict[str, list[str]]:
    """Every message reported for each top-level field, in report order."""
    errors: dict[str, list[str]] = {}
    for item in error.errors():
        loc = item.get("loc") or ()
        if not loc:
            continue
        errors.setdefault(str(loc[0]), []).append(item["msg"])
    return errors


class FormEngine:
    """
    Field registry, validation, and submit lifecycle for one form.

    Args:
        initial_values: Default value per field
        schema: Optional pydantic model the values must satisfy
        on_submit: Default callback used by handle_submit()
    """

    def __init__(
        self,
        initial_values: dict[str, Any],
        schema: type[BaseModel] | None = None,
        on_submit: SubmitHandler | None = None,
    ) -> None:
        self.initial_values = dict(initial_values)
        self.schema = schema
        self.on_submit = on_submit

        self.values: dict[str, Any] = dict(initial_values)
        self.errors: dict[str, str] = {}
        self.touched: dict[str, bool] = {}
        self.is_submitting = False

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def set_value(self, name: str, value: Any) -> None:
        """Update a value. Existing errors for the field are kept."""
        self.values[name] = value

    def set_error(self, name: str, error: str | None) -> None:
        """Override a field error (e.g. one returned by the server)."""
        if error is None:
            self.errors.pop(name, None)
        else:
            self.errors[name] = error

    def set_touched(self, name: str, touched: bool = True) -> None:
        self.touched[name] = touched

    def validate(self) -> bool:
        """
        Validate the current values against the schema.

        Returns:
            True if valid (errors cleared), False otherwise (errors set to
            the first message per field). Always True without a schema.
        """
        if self.schema is None:
            return True

        try:
            self.schema.model_validate(self.values)
        except ValidationError as e:
            self.errors = first_error_per_field(e)
            return False

        self.errors = {}
        return True

    def reset(self, values: dict[str, Any] | None = None) -> None:
        """Restore initial values (merged with overrides) and clear all state."""
        self.values = {**self.initial_values, **(values or {})}
        self.errors = {}
        self.touched = {}
        self.is_submitting = False

    async def handle_submit(self, on_valid: SubmitHandler | None = None) -> bool:
        """
        Validate, then run the submit callback with the current values.

        Exceptions from the callback are logged and swallowed.
        is_submitting is always cleared afterwards.

        Returns:
            Whether the values were valid.
        """
        handler = on_valid or self.on_submit
        self.is_submitting = True
        try:
            valid = self.validate()
            if valid and handler is not None:
                try:
                    result = handler(dict(self.values))
                    if inspect.isawaitable(result):
                        await result
                except Exception:
                    logger.exception("Form submission handler failed")
            return valid
        finally:
            self.is_submitting = False

    def register(self, name: str) -> FieldBinding:
        """Bind a control to a field."""

        def on_change(event: InputEvent) -> None:
            # Checkboxes report `checked`, every other control reports `value`
            value = event.checked if event.type == "checkbox" else event.value
            self.set_value(name, value)

        def on_blur() -> None:
            self.set_touched(name, True)

        return FieldBinding(
            name=name,
            value=self.values.get(name),
            on_change=on_change,
            on_blur=on_blur,
        )

    def field_state(self, name: str) -> FormFieldState:
        value = self.values.get(name)
        return FormFieldState(
            value=value,
            error=self.errors.get(name),
            touched=self.touched.get(name, False),
            dirty=value != self.initial_values.get(name),
        )

    @property
    def state(self) -> FormState:
        names = list(dict.fromkeys([*self.initial_values, *self.values, *self.errors]))
        return FormState(
            fields={name: self.field_state(name) for name in names},
            is_submitting=self.is_submitting,
        )
