"""Tests for the submission lifecycle and its optimistic overlay."""

import asyncio

import pytest

from pokebrowser.config import settings
from pokebrowser.forms import FormAction, SubmissionInProgressError, serialize_values
from pokebrowser.forms.action import SubmitTarget, TransportPayload
from pokebrowser.models.forms import SubmissionResult


async def echo_action(
    _previous: SubmissionResult[dict], payload: TransportPayload
) -> SubmissionResult[dict]:
    return SubmissionResult(success=True, message="Saved", data=dict(payload))


async def rejecting_action(
    _previous: SubmissionResult[dict], _payload: TransportPayload
) -> SubmissionResult[dict]:
    return SubmissionResult(
        success=False, message="Invalid", field_errors={"name": ["Too short"]}
    )


class TestSubmitTarget:
    def test_target_type_is_parameterized_per_result(self) -> None:
        """Targets are annotated with the type of data their result carries."""
        typed = SubmitTarget[dict]

        assert typed.__args__ == (dict,)

    async def test_plain_coroutine_function_is_a_target(self) -> None:
        target: SubmitTarget[dict] = echo_action
        action: FormAction[dict] = FormAction(target)

        result = await action.submit({"name": "Eevee"})

        assert result.data == {"name": "Eevee"}


class TestSerializeValues:
    def test_flattens_values(self) -> None:
        payload = serialize_values(
            {
                "name": "Pikachu",
                "hp": 35,
                "shiny": True,
                "legendary": False,
                "moves": ["thunderbolt", "quick-attack"],
                "meta": {"gen": 1},
                "nickname": None,
            }
        )

        assert payload == {
            "name": "Pikachu",
            "hp": "35",
            "shiny": "true",
            "legendary": "false",
            "moves": '["thunderbolt", "quick-attack"]',
            "meta": '{"gen": 1}',
        }


class TestSubmit:
    async def test_success_updates_state_and_calls_on_success(self) -> None:
        seen: list[object] = []
        action: FormAction[dict] = FormAction(
            echo_action, on_success=lambda data, state: seen.append(data)
        )

        result = await action.submit({"name": "Pikachu"})

        assert result.success is True
        assert action.state is result
        assert seen == [{"name": "Pikachu"}]
        assert action.is_pending is False

    async def test_failure_result_calls_on_error(self) -> None:
        errors: list[SubmissionResult[dict]] = []
        action: FormAction[dict] = FormAction(rejecting_action, on_error=errors.append)

        result = await action.submit({})

        assert result.success is False
        assert result.field_errors == {"name": ["Too short"]}
        assert errors == [result]

    async def test_raised_error_becomes_failed_result(self) -> None:
        """Exceptions from the target never escape submit()."""

        async def broken(_previous, _payload):
            raise RuntimeError("database unavailable")

        errors: list[SubmissionResult[dict]] = []
        action: FormAction[dict] = FormAction(broken, on_error=errors.append)

        result = await action.submit({})

        assert result.success is False
        assert result.message == "database unavailable"
        assert len(errors) == 1
        assert action.is_pending is False

    async def test_empty_error_message_uses_fallback(self) -> None:
        async def broken(_previous, _payload):
            raise RuntimeError()

        action: FormAction[dict] = FormAction(broken, error_message="Something broke")

        result = await action.submit({})

        assert result.message == "Something broke"

    async def test_async_callbacks_are_awaited(self) -> None:
        seen: list[str] = []

        async def on_success(data, _state) -> None:
            await asyncio.sleep(0)
            seen.append(data["name"])

        action: FormAction[dict] = FormAction(echo_action, on_success=on_success)
        await action.submit({"name": "Eevee"})

        assert seen == ["Eevee"]

    async def test_previous_state_is_passed_to_target(self) -> None:
        previous: list[SubmissionResult[dict]] = []

        async def recording(prev, payload):
            previous.append(prev)
            return SubmissionResult(success=True, data=dict(payload))

        initial: SubmissionResult[dict] = SubmissionResult(message="Fill in the form")
        action: FormAction[dict] = FormAction(recording, initial_state=initial)

        first = await action.submit({"n": "1"})
        await action.submit({"n": "2"})

        assert previous == [initial, first]

    async def test_submit_with_values_uses_transform(self) -> None:
        action: FormAction[dict] = FormAction(
            echo_action, transform_data=lambda values: {"upper": str(values["name"]).upper()}
        )

        result = await action.submit_with_values({"name": "mew"})

        assert result.data == {"upper": "MEW"}

    async def test_submit_with_values_serializes(self) -> None:
        action: FormAction[dict] = FormAction(echo_action)

        result = await action.submit_with_values({"hp": 35, "shiny": True, "gone": None})

        assert result.data == {"hp": "35", "shiny": "true"}


class TestOptimisticState:
    async def test_pending_overlay_until_settled(self) -> None:
        """The pending message shows only while the target runs."""
        gate = asyncio.Event()

        async def slow(_previous, payload):
            await gate.wait()
            return SubmissionResult(success=True, message="Done", data=dict(payload))

        action: FormAction[dict] = FormAction(slow)
        task = asyncio.create_task(action.submit({}))
        await asyncio.sleep(0)

        assert action.is_pending is True
        assert action.optimistic_state.message == settings.pending_message
        assert action.optimistic_state.success is False
        assert action.state.message is None

        gate.set()
        await task

        assert action.optimistic_state is action.state
        assert action.state.message == "Done"

    async def test_custom_pending_message(self) -> None:
        gate = asyncio.Event()

        async def slow(_previous, _payload):
            await gate.wait()
            return SubmissionResult(success=True)

        action: FormAction[dict] = FormAction(slow, pending_message="Generating card...")
        task = asyncio.create_task(action.submit({}))
        await asyncio.sleep(0)

        assert action.optimistic_state.message == "Generating card..."
        gate.set()
        await task

    async def test_double_submit_rejected(self) -> None:
        gate = asyncio.Event()

        async def slow(_previous, _payload):
            await gate.wait()
            return SubmissionResult(success=True)

        action: FormAction[dict] = FormAction(slow)
        task = asyncio.create_task(action.submit({}))
        await asyncio.sleep(0)

        with pytest.raises(SubmissionInProgressError) as exc_info:
            await action.submit({})

        assert exc_info.value.status_code == 409
        gate.set()
        await task
        assert action.is_pending is False

    def test_set_optimistic_overlays_fields(self) -> None:
        action: FormAction[dict] = FormAction(echo_action)

        action.set_optimistic({"message": "Almost there"})

        assert action.optimistic_state.message == "Almost there"
        assert action.state.message is None

    async def test_reset(self) -> None:
        action: FormAction[dict] = FormAction(echo_action)
        await action.submit({"a": "1"})

        action.reset()

        assert action.state == SubmissionResult()
        assert action.optimistic_state.success is False
