"""
Authentication router: username/password login with bearer session tokens.

Endpoints:
    POST /register  → create an account
    POST /login     → open a session, return its bearer token
    POST /logout    → revoke the caller's session
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.schemas.user import Token, UserLogin, UserOut, UserRegister
from app.services import auth as auth_service
from app.services.audit import audit

router = APIRouter(tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)


# ═══════════════════════════════════════════════════════════════
#  Dependencies
# ═══════════════════════════════════════════════════════════════

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to a live session and return its User.
    Raises 401 when the header is missing or the session is not live.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user, session = await auth_service.get_session_user(db, credentials.credentials)
    request.state.session_id = session.id
    return user


# ═══════════════════════════════════════════════════════════════
#  Register / login / logout
# ═══════════════════════════════════════════════════════════════

@router.post("/register", response_model=UserOut)
async def register(data: UserRegister, db: AsyncSession = Depends(get_db)):
    async with audit("register", None, username=data.username) as record:
        user = await auth_service.register_user(db, data.username, data.email, data.password)
        await db.commit()
        record.user_id = user.id
        record.success()
    return user


@router.post("/login", response_model=Token)
async def login(data: UserLogin, db: AsyncSession = Depends(get_db)):
    async with audit("login", None, username=data.username) as record:
        user, token = await auth_service.login(db, data.username, data.password)
        await db.commit()
        record.user_id = user.id
        record.success()
    return Token(token=token)


@router.post("/logout")
async def logout(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    async with audit("logout", current_user.id) as record:
        await auth_service.logout(db, request.state.session_id)
        await db.commit()
        record.success()
    return {}
