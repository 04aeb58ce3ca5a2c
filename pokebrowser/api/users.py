"""
Demo user API endpoints.

List, create, read, update, and delete demo users. Updates and deletes
go through the same submission targets as the user pages.
"""

from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from pokebrowser.db import (
    count_users,
    create_user,
    find_user_by_email,
    find_user_by_id,
    list_users,
    user_to_model,
)
from pokebrowser.db.database import get_session
from pokebrowser.forms import FormAction, UserCreateForm
from pokebrowser.models.failure import FailureKind, KnownError
from pokebrowser.models.forms import SubmissionResult
from pokebrowser.models.user import User
from pokebrowser.services.users import (
    EMAIL_TAKEN,
    make_delete_user_action,
    make_update_user_action,
)

router = APIRouter(prefix="/users", tags=["users"])

SessionDep = Annotated[AsyncSession, Depends(get_session)]


class UserResponse(BaseModel):
    """A demo user, without the password."""

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class UserListResponse(BaseModel):
    """One page of users, newest first."""

    users: list[UserResponse] = Field(default_factory=list)
    total: int = 0
    limit: int
    skip: int


class UserNotFoundError(KnownError):
    def __init__(self, user_id: int):
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
        )


class EmailTakenError(KnownError):
    def __init__(self, email: str):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=EMAIL_TAKEN,
            detail=email,
            status_code=409,
        )


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.get("", response_model=UserListResponse)
async def get_users(
    session: SessionDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    skip: Annotated[int, Query(ge=0)] = 0,
) -> UserListResponse:
    """List users, newest first."""
    users = await list_users(session, limit=limit, skip=skip)
    return UserListResponse(
        users=[_to_response(user_to_model(u)) for u in users],
        total=await count_users(session),
        limit=limit,
        skip=skip,
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def post_user(request: UserCreateForm, session: SessionDep) -> UserResponse:
    """
    Create a user.

    The email is stored normalized; a second user with the same email is
    refused with 409.
    """
    if await find_user_by_email(session, request.email) is not None:
        raise EmailTakenError(request.email)

    user = await create_user(session, request.email, request.name, request.password)
    return _to_response(user_to_model(user))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, session: SessionDep) -> UserResponse:
    user = await find_user_by_id(session, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return _to_response(user_to_model(user))


@router.put("/{user_id}", response_model=SubmissionResult[User])
async def put_user(
    user_id: int,
    response: Response,
    session: SessionDep,
    values: Annotated[dict[str, Any], Body(examples=[{"name": "Ash", "email": "ash@kanto.io"}])],
) -> SubmissionResult[User]:
    """
    Update a user's name and email.

    Returns 404 for an unknown user and 422 with per-field messages when
    the values are invalid or the email belongs to someone else.
    """
    if await find_user_by_id(session, user_id) is None:
        raise UserNotFoundError(user_id)

    action: FormAction[User] = FormAction(make_update_user_action(session, user_id))
    result = await action.submit_with_values(values)

    if not result.success:
        response.status_code = 422
    return result


@router.delete("/{user_id}", response_model=SubmissionResult[int])
async def delete_user(user_id: int, session: SessionDep) -> SubmissionResult[int]:
    """Delete a user. Returns 404 if the user does not exist."""
    action: FormAction[int] = FormAction(make_delete_user_action(session, user_id))
    result = await action.submit({})

    if not result.success:
        raise UserNotFoundError(user_id)
    return result
