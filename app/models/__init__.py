"""
Corkboard – SQLAlchemy ORM models package.

Imports all model classes so Alembic and the app can discover them
through a single ``import app.models``.
"""

from app.models.user import User                                 # noqa: F401
from app.models.session import Session                           # noqa: F401
from app.models.board import Board, BoardMember, BoardView       # noqa: F401
from app.models.card import Card                                 # noqa: F401
from app.models.notification import UserNotification             # noqa: F401
