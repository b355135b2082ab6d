"""User account data access (profile lookups and admin-managed CRUD)."""

import logging
from typing import List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import BadRequestError, NotFoundError
from app.models.notification import UserNotification
from app.models.user import User
from app.services.assignees import prune_assignee
from app.services.auth import hash_password

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


async def get_all_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(User.create_at, User.id))
    return list(result.scalars().all())


async def get_first_user_id(db: AsyncSession) -> Optional[str]:
    """Id of the oldest registered account, or None on an empty store."""
    result = await db.execute(
        select(User.id).order_by(User.create_at, User.id).limit(1)
    )
    return result.scalar_one_or_none()


async def update_user(
    db: AsyncSession,
    user_id: str,
    username: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> User:
    """Update the non-empty fields of an account."""
    user = await get_user(db, user_id)
    email = email.lower() if email else email

    if username or email:
        clash = await db.execute(
            select(User.id).where(
                User.id != user_id,
                or_(User.username == username, User.email == email),
            )
        )
        if clash.first():
            raise BadRequestError("Username or email already registered")

    if username:
        user.username = username
    if email:
        user.email = email
    if password:
        if len(password) < 8:
            raise BadRequestError("Password must be at least 8 characters")
        user.password_hash = hash_password(password)

    await db.flush()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: str) -> None:
    """Delete an account; sessions and memberships cascade, notifications are purged."""
    user = await get_user(db, user_id)
    # Before the delete, while memberships still point at the boards
    await prune_assignee(db, user_id)
    await db.execute(
        delete(UserNotification).where(UserNotification.target_user_id == user_id)
    )
    await db.delete(user)
    await db.flush()
    logger.info(f"User deleted: id={user_id}")
