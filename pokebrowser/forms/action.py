"""
Form Action — Submission Lifecycle with an Optimistic Overlay.

Two states are kept apart:
- `state`: durable, the last SubmissionResult returned by the target
- `optimistic_state`: `state` overlaid with a transient pending patch

The patch is set when a submission starts and dropped in the same step
that writes the durable result, so readers never see both the pending
message and the settled result.

INVARIANTS:
- Exceptions from the target never escape submit(); they become a
  failed SubmissionResult
- Only one submission may be pending at a time
"""

import inspect
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, Protocol, TypeVar

from pokebrowser.config import settings
from pokebrowser.models.failure import FailureKind, KnownError
from pokebrowser.models.forms import SubmissionResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Flat key -> string transport, the equivalent of a submitted HTML form
TransportPayload = dict[str, str]


class SubmitTarget(Protocol[T]):
    """A server-side processing function: (previous_state, payload) -> result."""

    async def __call__(
        self, previous_state: SubmissionResult[T], payload: TransportPayload, /
    ) -> SubmissionResult[T]: ...


class SubmissionInProgressError(KnownError):
    """Raised when submit() is called while a submission is still pending."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.SUBMISSION_PENDING,
            message="A submission is already in progress.",
            suggestion="Wait for the current submission to finish.",
            status_code=409,
        )


def serialize_values(values: Mapping[str, Any]) -> TransportPayload:
    """
    Flatten form values into the transport payload.

    None is skipped, containers are sent as JSON, booleans as
    "true"/"false", everything else with str().
    """
    payload: TransportPayload = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool):
            payload[key] = "true" if value else "false"
        elif isinstance(value, dict | list | tuple):
            payload[key] = json.dumps(value)
        else:
            payload[key] = str(value)
    return payload


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


class FormAction(Generic[T]):
    """
    Drives one submission target.

    Args:
        action: Target called as action(previous_state, payload)
        initial_state: Durable state before any submission
        on_success: Called with (data, state) when the target succeeds
        on_error: Called with the state when the target fails or raises
        transform_data: Custom values -> payload conversion
        pending_message: Message shown while a submission is pending
        error_message: Fallback message when a raised error has none
    """

    def __init__(
        self,
        action: SubmitTarget[T],
        initial_state: SubmissionResult[T] | None = None,
        on_success: Callable[[T | None, SubmissionResult[T]], Any] | None = None,
        on_error: Callable[[SubmissionResult[T]], Any] | None = None,
        transform_data: Callable[[Mapping[str, Any]], TransportPayload] | None = None,
        pending_message: str | None = None,
        error_message: str | None = None,
    ) -> None:
        self.action = action
        self.initial_state: SubmissionResult[T] = initial_state or SubmissionResult()
        self.on_success = on_success
        self.on_error = on_error
        self.transform_data = transform_data
        self.pending_message = pending_message or settings.pending_message
        self.error_message = error_message or settings.error_message

        self.state: SubmissionResult[T] = self.initial_state
        self._pending_patch: dict[str, Any] | None = None
        self._pending = False

    @property
    def is_pending(self) -> bool:
        return self._pending

    @property
    def optimistic_state(self) -> SubmissionResult[T]:
        """The durable state with the pending patch applied, if any."""
        if self._pending_patch is None:
            return self.state
        return self.state.model_copy(update=self._pending_patch)

    def set_optimistic(self, patch: Mapping[str, Any]) -> None:
        """Overlay extra fields until the durable state next changes."""
        self._pending_patch = {**(self._pending_patch or {}), **patch}

    def _settle(self, result: SubmissionResult[T]) -> None:
        self.state = result
        self._pending_patch = None

    async def submit(self, payload: TransportPayload) -> SubmissionResult[T]:
        """
        Run the target with a transport payload.

        Returns:
            The durable state after settlement.

        Raises:
            SubmissionInProgressError: If a submission is already pending
        """
        if self._pending:
            raise SubmissionInProgressError()

        self._pending = True
        self.set_optimistic({"success": False, "message": self.pending_message})
        try:
            try:
                result = await self.action(self.state, payload)
            except Exception as e:
                logger.exception("Submission target failed")
                failed: SubmissionResult[T] = SubmissionResult(
                    success=False,
                    message=str(e) or self.error_message,
                )
                self._settle(failed)
                if self.on_error is not None:
                    await _maybe_await(self.on_error(failed))
                return failed

            self._settle(result)
            if result.success:
                if self.on_success is not None:
                    await _maybe_await(self.on_success(result.data, result))
            elif self.on_error is not None:
                await _maybe_await(self.on_error(result))
            return result
        finally:
            self._pending = False

    async def submit_with_values(self, values: Mapping[str, Any]) -> SubmissionResult[T]:
        """Serialize values into a payload and submit them."""
        if self.transform_data is not None:
            payload = self.transform_data(values)
        else:
            payload = serialize_values(values)
        return await self.submit(payload)

    def reset(self) -> None:
        """Return to the initial durable state."""
        self._settle(self.initial_state)
