"""Password hashing, bearer tokens and session lifecycle."""

import logging
from datetime import datetime, timezone
from typing import Tuple

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import BadRequestError, ForbiddenError, UnauthorizedError
from app.models.session import Session
from app.models.user import User
from app.utils.ids import get_millis

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
#  Passwords
# ═══════════════════════════════════════════════════════════════

def hash_password(password: str) -> str:
    # Bcrypt has a 72 byte limit
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        return False


# ═══════════════════════════════════════════════════════════════
#  Tokens
# ═══════════════════════════════════════════════════════════════

def create_access_token(user_id: str, session_id: str, expires_at: int) -> str:
    """Create a signed JWT that points at a session row."""
    to_encode = {
        "sub": user_id,
        "sid": session_id,
        "exp": datetime.fromtimestamp(expires_at / 1000, tz=timezone.utc),
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Tuple[str, str]:
    """Return (user_id, session_id) or raise UnauthorizedError."""
    if not isinstance(token, str):
        raise UnauthorizedError("Invalid token")
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise UnauthorizedError("Invalid or expired token")
    user_id = payload.get("sub")
    session_id = payload.get("sid")
    if not user_id or not session_id:
        raise UnauthorizedError("Invalid token")
    return user_id, session_id


# ═══════════════════════════════════════════════════════════════
#  Registration / login
# ═══════════════════════════════════════════════════════════════

async def register_user(db: AsyncSession, username: str, email: str, password: str) -> User:
    """Create an account. Only the first account bypasses ENABLE_PUBLIC_SIGNUP."""
    user_count, latest_create_at = (
        await db.execute(select(func.count(User.id), func.max(User.create_at)))
    ).one()
    if user_count > 0 and not settings.ENABLE_PUBLIC_SIGNUP:
        raise ForbiddenError("Public sign-up is disabled")

    email = email.lower()
    result = await db.execute(
        select(User).where(or_(User.username == username, User.email == email))
    )
    if result.scalars().first():
        raise BadRequestError("Username or email already registered")

    # Registration order picks the system admin, so create_at never ties
    now = get_millis()
    if latest_create_at is not None and now <= latest_create_at:
        now = latest_create_at + 1

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        create_at=now,
        update_at=now,
    )
    db.add(user)
    await db.flush()
    logger.info(f"User registered: {user.username} ({user.id})")
    return user


async def login(db: AsyncSession, username: str, password: str) -> Tuple[User, str]:
    """Check credentials and open a new session. Returns (user, bearer token)."""
    result = await db.execute(
        select(User).where(or_(User.username == username, User.email == username.lower()))
    )
    user = result.scalars().first()
    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid username or password")

    expires_at = get_millis() + settings.SESSION_EXPIRE_MINUTES * 60 * 1000
    session = Session(user_id=user.id, expires_at=expires_at)
    db.add(session)
    await db.flush()

    logger.info(f"User logged in: {user.username}")
    return user, create_access_token(user.id, session.id, expires_at)


async def get_session_user(db: AsyncSession, token: str) -> Tuple[User, Session]:
    """Resolve a bearer token to its live session and user."""
    user_id, session_id = decode_access_token(token)

    result = await db.execute(
        select(Session).where(
            Session.id == session_id,
            Session.user_id == user_id,
            Session.expires_at > get_millis(),
        )
    )
    session = result.scalar_one_or_none()
    if not session:
        raise UnauthorizedError("Session expired or revoked")

    user = await db.get(User, user_id)
    if not user:
        raise UnauthorizedError("Session user no longer exists")
    return user, session


async def logout(db: AsyncSession, session_id: str) -> None:
    await db.execute(delete(Session).where(Session.id == session_id))


async def change_password(db: AsyncSession, user: User, old_password: str, new_password: str) -> None:
    if not verify_password(old_password, user.password_hash):
        raise BadRequestError("Old password is incorrect")
    user.password_hash = hash_password(new_password)
    await db.flush()


async def cleanup_expired_sessions(db: AsyncSession) -> int:
    """Delete all expired sessions. Returns count deleted."""
    result = await db.execute(delete(Session).where(Session.expires_at <= get_millis()))
    count = result.rowcount or 0
    if count:
        logger.info(f"Cleaned up {count} expired sessions")
    return count
