"""Tests for the form state engine."""

from typing import Any

import pytest
from pydantic import BaseModel, Field, ValidationError

from pokebrowser.forms import FormEngine, InputEvent, first_error_per_field
from pokebrowser.forms.engine import all_errors_per_field
from pokebrowser.forms.schemas import UserEditForm


class SignupForm(BaseModel):
    name: str = Field(min_length=2)
    age: int = Field(ge=18)
    newsletter: bool = False


@pytest.fixture
def engine() -> FormEngine:
    return FormEngine({"name": "", "age": 0, "newsletter": False}, schema=SignupForm)


class TestValidate:
    def test_invalid_values_set_first_error_per_field(self, engine: FormEngine) -> None:
        assert engine.validate() is False

        assert set(engine.errors) == {"name", "age"}
        assert "at least 2 characters" in engine.errors["name"]
        assert engine.is_valid is False

    def test_valid_values_clear_errors(self, engine: FormEngine) -> None:
        engine.validate()
        engine.set_value("name", "Misty")
        engine.set_value("age", 21)

        assert engine.validate() is True
        assert engine.errors == {}
        assert engine.is_valid is True

    def test_without_schema_always_valid(self) -> None:
        engine = FormEngine({"anything": None})

        assert engine.validate() is True

    def test_set_value_keeps_existing_errors(self, engine: FormEngine) -> None:
        """Errors only change on validate() or set_error()."""
        engine.validate()
        engine.set_value("name", "Brock")

        assert "name" in engine.errors

    def test_set_error_overrides_and_clears(self, engine: FormEngine) -> None:
        engine.set_error("name", "Taken")
        assert engine.errors == {"name": "Taken"}

        engine.set_error("name", None)
        assert engine.errors == {}


class TestHandleSubmit:
    async def test_valid_submit_calls_handler_with_values(self, engine: FormEngine) -> None:
        received: list[dict[str, Any]] = []

        async def on_valid(values: dict[str, Any]) -> None:
            assert engine.is_submitting is True
            received.append(values)

        engine.set_value("name", "Misty")
        engine.set_value("age", 21)

        assert await engine.handle_submit(on_valid) is True
        assert received == [{"name": "Misty", "age": 21, "newsletter": False}]
        assert engine.is_submitting is False

    async def test_invalid_submit_skips_handler(self, engine: FormEngine) -> None:
        calls: list[dict[str, Any]] = []

        assert await engine.handle_submit(calls.append) is False
        assert calls == []
        assert engine.is_submitting is False

    async def test_handler_errors_are_contained(self, engine: FormEngine) -> None:
        """A failing handler never escapes and submitting is cleared."""

        async def on_valid(_values: dict[str, Any]) -> None:
            raise RuntimeError("network down")

        engine.set_value("name", "Misty")
        engine.set_value("age", 21)

        assert await engine.handle_submit(on_valid) is True
        assert engine.is_submitting is False

    async def test_default_handler(self) -> None:
        calls: list[dict[str, Any]] = []
        engine = FormEngine({"q": "pika"}, on_submit=calls.append)

        await engine.handle_submit()

        assert calls == [{"q": "pika"}]


class TestRegister:
    def test_text_input(self, engine: FormEngine) -> None:
        binding = engine.register("name")

        binding.on_change(InputEvent(value="Gary"))

        assert binding.name == "name"
        assert engine.values["name"] == "Gary"

    def test_checkbox_reads_checked(self, engine: FormEngine) -> None:
        binding = engine.register("newsletter")

        binding.on_change(InputEvent(value="on", checked=True, type="checkbox"))

        assert engine.values["newsletter"] is True

    def test_blur_marks_touched(self, engine: FormEngine) -> None:
        binding = engine.register("name")

        binding.on_blur()

        assert engine.touched == {"name": True}
        assert engine.field_state("name").touched is True


class TestReset:
    def test_reset_restores_initial_values(self, engine: FormEngine) -> None:
        engine.set_value("name", "Gary")
        engine.set_touched("name")
        engine.validate()

        engine.reset()

        assert engine.values == {"name": "", "age": 0, "newsletter": False}
        assert engine.errors == {}
        assert engine.touched == {}

    def test_reset_with_overrides(self, engine: FormEngine) -> None:
        engine.reset({"name": "Ash"})

        assert engine.values["name"] == "Ash"
        assert engine.values["age"] == 0


class TestState:
    def test_dirty_tracks_initial_value(self, engine: FormEngine) -> None:
        engine.set_value("name", "Gary")

        state = engine.state

        assert state.fields["name"].dirty is True
        assert state.fields["age"].dirty is False
        assert state.is_valid is True


class TestErrorHelpers:
    def test_first_and_all_errors(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            UserEditForm.model_validate({"name": "A", "email": "not-an-email"})

        first = first_error_per_field(exc_info.value)
        every = all_errors_per_field(exc_info.value)

        assert set(first) == {"name", "email"}
        assert every["name"] == [first["name"]]
