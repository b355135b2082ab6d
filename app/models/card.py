"""Card model: a work item on a board carrying typed property values."""

from typing import List

from sqlalchemy import JSON, BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils.ids import IDType, get_millis, new_id


class Card(Base):
    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: new_id(IDType.CARD)
    )
    board_id: Mapped[str] = mapped_column(
        ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    icon: Mapped[str] = mapped_column(String(32), nullable=False, default="")

    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    modified_by: Mapped[str] = mapped_column(String(36), nullable=False)

    # property template id -> value (str or list of str)
    properties: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    assignees: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    create_at: Mapped[int] = mapped_column(BigInteger, default=get_millis)
    update_at: Mapped[int] = mapped_column(
        BigInteger, default=get_millis, onupdate=get_millis
    )
