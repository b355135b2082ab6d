"""Board, BoardMember and BoardView models."""

import enum
from typing import List, Optional

from sqlalchemy import JSON, BigInteger, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils.ids import IDType, get_millis, new_id


class BoardType(str, enum.Enum):
    OPEN = "O"
    PRIVATE = "P"


class MemberRole(str, enum.Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    COMMENTER = "commenter"
    VIEWER = "viewer"


class ViewType(str, enum.Enum):
    BOARD = "board"
    TABLE = "table"
    GALLERY = "gallery"
    CALENDAR = "calendar"


class Board(Base):
    __tablename__ = "boards"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: new_id(IDType.BOARD)
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    icon: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    type: Mapped[str] = mapped_column(String(1), nullable=False, default=BoardType.PRIVATE.value)

    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    modified_by: Mapped[str] = mapped_column(String(36), nullable=False)

    # List of property templates: {id, name, type, options: [{id, value, color}]}
    card_properties: Mapped[List[dict]] = mapped_column(JSON, nullable=False, default=list)

    create_at: Mapped[int] = mapped_column(BigInteger, default=get_millis)
    update_at: Mapped[int] = mapped_column(
        BigInteger, default=get_millis, onupdate=get_millis
    )


class BoardMember(Base):
    __tablename__ = "board_members"

    board_id: Mapped[str] = mapped_column(
        ForeignKey("boards.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    scheme_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    scheme_editor: Mapped[bool] = mapped_column(Boolean, default=False)
    scheme_commenter: Mapped[bool] = mapped_column(Boolean, default=False)
    scheme_viewer: Mapped[bool] = mapped_column(Boolean, default=False)
    minimum_role: Mapped[Optional[str]] = mapped_column(String(20), default="")


class BoardView(Base):
    __tablename__ = "board_views"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: new_id(IDType.VIEW)
    )
    board_id: Mapped[str] = mapped_column(
        ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    view_type: Mapped[str] = mapped_column(String(20), nullable=False, default=ViewType.BOARD.value)
    fields: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    create_at: Mapped[int] = mapped_column(BigInteger, default=get_millis)
    update_at: Mapped[int] = mapped_column(
        BigInteger, default=get_millis, onupdate=get_millis
    )
