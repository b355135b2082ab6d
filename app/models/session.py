"""Session model: one row per login; the bearer token references it by id."""

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils.ids import IDType, get_millis, new_id


class Session(Base):
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: new_id(IDType.SESSION)
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    create_at: Mapped[int] = mapped_column(BigInteger, default=get_millis)
    update_at: Mapped[int] = mapped_column(
        BigInteger, default=get_millis, onupdate=get_millis
    )
