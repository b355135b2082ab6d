"""Notification Pydantic schemas."""

from pydantic import Field

from app.models.notification import NotificationType
from app.schemas.base import CamelModel


class NotificationCreate(CamelModel):
    """Body of POST /notifications; actor fields are taken from the session."""
    target_user_id: str = Field(min_length=1)
    type: NotificationType
    card_id: str = Field(min_length=1)
    card_title: str = Field(default="", max_length=255)
    board_id: str = Field(min_length=1)


class NotificationOut(CamelModel):
    id: str
    target_user_id: str
    actor_user_id: str
    actor_name: str
    type: str
    card_id: str
    card_title: str
    board_id: str
    read: bool
    create_at: int
    update_at: int


class UnreadCount(CamelModel):
    count: int
