"""
Submission targets for the demo user pages.

Each factory binds a target to a database session and a user id so it
can be handed to FormAction like any other target.
"""

import logging

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from pokebrowser.db.operations import delete_user, find_user_by_email, update_user, user_to_model
from pokebrowser.forms.action import SubmitTarget, TransportPayload
from pokebrowser.forms.engine import all_errors_per_field
from pokebrowser.forms.schemas import UserEditForm
from pokebrowser.models.forms import SubmissionResult
from pokebrowser.models.user import User

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "This email is already in use"


def make_update_user_action(session: AsyncSession, user_id: int) -> SubmitTarget[User]:
    """Target that validates name/email and updates the user."""

    async def update_user_action(
        _previous_state: SubmissionResult[User], payload: TransportPayload
    ) -> SubmissionResult[User]:
        try:
            form = UserEditForm.model_validate(
                {"name": payload.get("name", ""), "email": payload.get("email", "")}
            )
        except ValidationError as e:
            return SubmissionResult(
                success=False,
                message="All fields are required",
                field_errors=all_errors_per_field(e),
            )

        owner = await find_user_by_email(session, form.email)
        if owner is not None and owner.id != user_id:
            return SubmissionResult(
                success=False,
                message=EMAIL_TAKEN,
                field_errors={"email": [EMAIL_TAKEN]},
            )

        user = await update_user(session, user_id, name=form.name, email=form.email)
        if user is None:
            return SubmissionResult(success=False, message="User not found")

        logger.info("User updated", extra={"user_id": user_id})
        return SubmissionResult(success=True, message="User updated", data=user_to_model(user))

    return update_user_action


def make_delete_user_action(session: AsyncSession, user_id: int) -> SubmitTarget[int]:
    """Target that deletes the user. The result data is the deleted id."""

    async def delete_user_action(
        _previous_state: SubmissionResult[int], _payload: TransportPayload
    ) -> SubmissionResult[int]:
        if not await delete_user(session, user_id):
            return SubmissionResult(success=False, message="User not found")

        logger.info("User deleted", extra={"user_id": user_id})
        return SubmissionResult(success=True, message="User deleted", data=user_id)

    return delete_user_action
