"""Notification model: in-app notifications for card membership events."""

import enum

from sqlalchemy import BigInteger, Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils.ids import get_millis, new_id


class NotificationType(str, enum.Enum):
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    MENTIONED = "mentioned"


class UserNotification(Base):
    __tablename__ = "user_notifications"
    __table_args__ = (
        Index("idx_user_notifications_target_user", "target_user_id"),
        Index("idx_user_notifications_create_at", "create_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: new_id())
    target_user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    actor_user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    actor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    card_id: Mapped[str] = mapped_column(String(36), nullable=False)
    card_title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    board_id: Mapped[str] = mapped_column(String(36), nullable=False)
    read: Mapped[bool] = mapped_column("is_read", Boolean, nullable=False, default=False)
    create_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=get_millis)
    update_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=get_millis)
