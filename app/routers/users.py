"""Users router – own profile, password change, public profiles."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.user import MeOut, PasswordChange, UserOut
from app.services import auth as auth_service
from app.services import users as user_service
from app.services.audit import audit
from app.services.permissions import Permission, has_permission_to

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=MeOut)
async def read_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Return the authenticated user's profile."""
    me = MeOut.model_validate(current_user)
    me.is_admin = await has_permission_to(db, current_user.id, Permission.MANAGE_SYSTEM)
    return me


@router.post("/me/password")
async def change_password(
    data: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    async with audit("changePassword", current_user.id) as record:
        await auth_service.change_password(db, current_user, data.old_password, data.new_password)
        await db.commit()
        record.success()
    return {}


@router.get("/{user_id}", response_model=UserOut)
async def read_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a user profile by ID."""
    return await user_service.get_user(db, user_id)
