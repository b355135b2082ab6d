"""In-app user notifications: storage plus best-effort push to live sockets."""

import logging
from typing import List

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.notification import NotificationType, UserNotification
from app.schemas.notification import NotificationOut
from app.services.broadcast import ACTION_UPDATE_USER_NOTIFICATION, manager
from app.utils.ids import get_millis

logger = logging.getLogger(__name__)


def new_notification(
    target_user_id: str,
    actor_user_id: str,
    actor_name: str,
    notif_type: NotificationType,
    card_id: str,
    card_title: str,
    board_id: str,
) -> UserNotification:
    """Build an unsaved, unread notification."""
    return UserNotification(
        target_user_id=target_user_id,
        actor_user_id=actor_user_id,
        actor_name=actor_name,
        type=NotificationType(notif_type).value,
        card_id=card_id,
        card_title=card_title or "",
        board_id=board_id,
        read=False,
    )


async def create_notification(db: AsyncSession, notification: UserNotification) -> UserNotification:
    now = get_millis()
    notification.create_at = now
    notification.update_at = now
    notification.read = bool(notification.read)
    db.add(notification)
    await db.commit()
    return notification


async def get_notifications(db: AsyncSession, user_id: str, limit: int) -> List[UserNotification]:
    """Newest first; ``limit <= 0`` returns everything."""
    stmt = (
        select(UserNotification)
        .where(UserNotification.target_user_id == user_id)
        .order_by(UserNotification.create_at.desc(), UserNotification.id.desc())
    )
    if limit > 0:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_unread_count(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count(UserNotification.id)).where(
            UserNotification.target_user_id == user_id,
            UserNotification.read == False,  # noqa: E712
        )
    )
    return result.scalar() or 0


async def set_read(db: AsyncSession, notification_id: str, user_id: str, read: bool = True) -> int:
    """Toggle one notification owned by ``user_id``. Zero rows affected is not an error."""
    result = await db.execute(
        update(UserNotification)
        .where(
            UserNotification.id == notification_id,
            UserNotification.target_user_id == user_id,
        )
        .values(read=read, update_at=get_millis())
    )
    count = result.rowcount or 0
    if count == 0:
        logger.warning(
            f"notification not found for user: notification_id={notification_id} user_id={user_id}"
        )
    return count


async def mark_all_read(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        update(UserNotification)
        .where(
            UserNotification.target_user_id == user_id,
            UserNotification.read == False,  # noqa: E712
        )
        .values(read=True, update_at=get_millis())
    )
    return result.rowcount or 0


async def delete_notification(db: AsyncSession, notification_id: str, user_id: str) -> int:
    """Delete scoped by owner, so foreign ids are a no-op."""
    result = await db.execute(
        delete(UserNotification).where(
            UserNotification.id == notification_id,
            UserNotification.target_user_id == user_id,
        )
    )
    return result.rowcount or 0


async def broadcast_notification(notification: UserNotification) -> None:
    """Push to the target's live sockets; failures never reach the caller."""
    payload = {
        "action": ACTION_UPDATE_USER_NOTIFICATION,
        "notification": NotificationOut.model_validate(notification).model_dump(by_alias=True),
    }
    try:
        await manager.send_to_user(notification.target_user_id, payload)
    except Exception as e:
        logger.debug(f"Notification broadcast failed for {notification.target_user_id}: {e}")


async def create_and_broadcast(db: AsyncSession, notification: UserNotification) -> UserNotification:
    """Insert, commit, then push to the target user."""
    created = await create_notification(db, notification)
    await broadcast_notification(created)
    return created
