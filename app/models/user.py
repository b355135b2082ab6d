"""User model: standard account entity."""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils.ids import IDType, get_millis, new_id


class User(Base):
    __tablename__ = "users"

    # ── Identity ──
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: new_id(IDType.USER)
    )
    username: Mapped[str] = mapped_column(
        String(100), unique=True, index=True, nullable=False
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # ── Timestamps (ms since epoch) ──
    create_at: Mapped[int] = mapped_column(BigInteger, default=get_millis, index=True)
    update_at: Mapped[int] = mapped_column(
        BigInteger, default=get_millis, onupdate=get_millis
    )
