"""
Database CRUD operations.

Provides async functions for creating, reading, updating, and deleting
demo users.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pokebrowser.models.db import UserDB
from pokebrowser.models.user import User


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address."""
    return email.strip().lower()


async def create_user(
    session: AsyncSession, email: str, name: str, password: str | None = None
) -> UserDB:
    """
    Create a new user.

    Raises IntegrityError if the normalized email is already taken.
    """
    user = UserDB(email=normalize_email(email), name=name.strip(), password=password)
    session.add(user)
    await session.flush()
    return user


async def find_user_by_id(session: AsyncSession, user_id: int) -> UserDB | None:
    """Returns None if no user has this id."""
    return await session.get(UserDB, user_id)


async def find_user_by_email(session: AsyncSession, email: str) -> UserDB | None:
    """Look up a user by email, compared in normalized form."""
    result = await session.execute(select(UserDB).where(UserDB.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def list_users(session: AsyncSession, limit: int = 20, skip: int = 0) -> list[UserDB]:
    """List users, newest first."""
    result = await session.execute(
        select(UserDB)
        .order_by(UserDB.created_at.desc(), UserDB.id.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all())


async def update_user(
    session: AsyncSession,
    user_id: int,
    *,
    name: str | None = None,
    email: str | None = None,
    password: str | None = None,
) -> UserDB | None:
    """
    Update the given fields of a user.

    Returns the updated user, or None if not found.
    """
    user = await find_user_by_id(session, user_id)
    if user is None:
        return None

    if name is not None:
        user.name = name.strip()
    if email is not None:
        user.email = normalize_email(email)
    if password is not None:
        user.password = password

    await session.flush()
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user_id: int) -> bool:
    """
    Delete a user.

    Returns True if deleted, False if not found.
    """
    result = await session.execute(delete(UserDB).where(UserDB.id == user_id))
    return result.rowcount == 1


async def count_users(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(UserDB))
    return int(result.scalar_one())


def user_to_model(user: UserDB) -> User:
    """Convert a database user to a domain model."""
    return User(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
