"""
Admin router: user management for the system admin (first registered user).

Endpoints:
    GET    /admin/users            → all users
    GET    /admin/users/{user_id}  → one user
    PUT    /admin/users/{user_id}  → update username / email / password
    DELETE /admin/users/{user_id}  → delete a user (never yourself)

The capability check runs before the request body is read, so a non-admin
caller is rejected regardless of what they send.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.user import AdminUserUpdate, UserOut
from app.services import users as user_service
from app.services.audit import audit
from app.services.permissions import Permission, has_permission_to

router = APIRouter(prefix="/admin", tags=["admin"])


async def require_system_admin(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> User:
    if not await has_permission_to(db, current_user.id, Permission.MANAGE_SYSTEM):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="not authorized to access admin panel",
        )
    return current_user


@router.get("/users", response_model=List[UserOut])
async def admin_get_all_users(
    admin: User = Depends(require_system_admin),
    db: AsyncSession = Depends(get_db),
):
    async with audit("adminGetAllUsers", admin.id) as record:
        users = await user_service.get_all_users(db)
        record.success()
    return users


@router.get("/users/{user_id}", response_model=UserOut)
async def admin_get_user(
    user_id: str,
    admin: User = Depends(require_system_admin),
    db: AsyncSession = Depends(get_db),
):
    async with audit("adminGetUser", admin.id, userID=user_id) as record:
        user = await user_service.get_user(db, user_id)
        record.success()
    return user


@router.put("/users/{user_id}", response_model=UserOut)
async def admin_update_user(
    user_id: str,
    request: Request,
    admin: User = Depends(require_system_admin),
    db: AsyncSession = Depends(get_db),
):
    raw_body = await request.body()
    try:
        data = AdminUserUpdate.model_validate_json(raw_body or b"{}")
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid body: {e.errors()[0]['msg']}")

    async with audit("adminUpdateUser", admin.id, userID=user_id) as record:
        user = await user_service.update_user(
            db,
            user_id,
            username=data.username or None,
            email=data.email or None,
            password=data.password or None,
        )
        await db.commit()
        record.success()
    return user


@router.delete("/users/{user_id}")
async def admin_delete_user(
    user_id: str,
    admin: User = Depends(require_system_admin),
    db: AsyncSession = Depends(get_db),
):
    async with audit("adminDeleteUser", admin.id, userID=user_id) as record:
        if user_id == admin.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="cannot delete yourself")
        await user_service.delete_user(db, user_id)
        await db.commit()
        record.success()
    return {}
