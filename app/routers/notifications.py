"""Notifications router: list, count, create, read/unread, read-all, delete."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.notification import NotificationCreate, NotificationOut, UnreadCount
from app.services import notifications as notification_service
from app.services.audit import audit
from app.services.permissions import Permission, require_board_permission

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _parse_limit(limit: Optional[str]) -> int:
    """A missing or non-integer limit falls back to the default."""
    if limit is None or limit == "":
        return settings.NOTIFICATIONS_DEFAULT_LIMIT
    try:
        return int(limit)
    except ValueError:
        return settings.NOTIFICATIONS_DEFAULT_LIMIT


@router.get("", response_model=List[NotificationOut])
async def get_notifications(
    limit: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Return the caller's notifications, newest first."""
    return await notification_service.get_notifications(db, current_user.id, _parse_limit(limit))


@router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await notification_service.get_unread_count(db, current_user.id)
    return UnreadCount(count=count)


@router.post("", response_model=NotificationOut)
async def create_notification(
    data: NotificationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a notification from the caller to another user and push it live."""
    await require_board_permission(db, current_user.id, data.board_id, Permission.VIEW_BOARD)

    async with audit("createNotification", current_user.id, targetUserID=data.target_user_id, type=data.type.value) as record:
        notification = notification_service.new_notification(
            target_user_id=data.target_user_id,
            actor_user_id=current_user.id,
            actor_name=current_user.username,
            notif_type=data.type,
            card_id=data.card_id,
            card_title=data.card_title,
            board_id=data.board_id,
        )
        created = await notification_service.create_and_broadcast(db, notification)
        record.success()
    return created


@router.post("/read-all")
async def mark_all_read(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark all notifications as read for the current user."""
    async with audit("markAllNotificationsAsRead", current_user.id) as record:
        await notification_service.mark_all_read(db, current_user.id)
        await db.commit()
        record.success()
    return {}


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    async with audit("markNotificationAsRead", current_user.id, notificationID=notification_id) as record:
        await notification_service.set_read(db, notification_id, current_user.id, read=True)
        await db.commit()
        record.success()
    return {}


@router.post("/{notification_id}/unread")
async def mark_unread(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    async with audit("markNotificationAsUnread", current_user.id, notificationID=notification_id) as record:
        await notification_service.set_read(db, notification_id, current_user.id, read=False)
        await db.commit()
        record.success()
    return {}


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    async with audit("deleteNotification", current_user.id, notificationID=notification_id) as record:
        await notification_service.delete_notification(db, notification_id, current_user.id)
        await db.commit()
        record.success()
    return {}
