"""
Capability checks.

System scope: the first registered user is the system admin.
Board scope: the caller's membership flags, upgraded by ``minimum_role``.
"""

import enum
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ForbiddenError
from app.models.board import BoardMember, MemberRole
from app.services.users import get_first_user_id


class Permission(str, enum.Enum):
    MANAGE_SYSTEM = "manage_system"
    VIEW_BOARD = "view_board"
    MANAGE_BOARD_TYPE = "manage_board_type"
    DELETE_BOARD = "delete_board"
    MANAGE_BOARD_ROLES = "manage_board_roles"
    SHARE_BOARD = "share_board"
    DELETE_OTHERS_COMMENTS = "delete_others_comments"
    MANAGE_BOARD_CARDS = "manage_board_cards"
    MANAGE_BOARD_PROPERTIES = "manage_board_properties"
    COMMENT_BOARD_CARDS = "comment_board_cards"


ADMIN_ONLY = {
    Permission.MANAGE_BOARD_TYPE,
    Permission.DELETE_BOARD,
    Permission.MANAGE_BOARD_ROLES,
    Permission.SHARE_BOARD,
    Permission.DELETE_OTHERS_COMMENTS,
}
EDITOR_OR_ABOVE = {Permission.MANAGE_BOARD_CARDS, Permission.MANAGE_BOARD_PROPERTIES}
COMMENTER_OR_ABOVE = {Permission.COMMENT_BOARD_CARDS}


async def has_permission_to(db: AsyncSession, user_id: str, permission: Permission) -> bool:
    """System-wide capability check."""
    if not user_id:
        return False
    if permission == Permission.MANAGE_SYSTEM:
        return user_id == await get_first_user_id(db)
    return False


def member_allows(member: BoardMember, permission: Permission) -> bool:
    """Evaluate the role matrix for a single membership row."""
    admin = bool(member.scheme_admin)
    editor = bool(member.scheme_editor)
    commenter = bool(member.scheme_commenter)
    viewer = bool(member.scheme_viewer)

    role = member.minimum_role or ""
    if role == MemberRole.ADMIN.value:
        admin = True
    elif role == MemberRole.EDITOR.value:
        editor = True
    elif role == MemberRole.COMMENTER.value:
        commenter = True
    elif role == MemberRole.VIEWER.value:
        viewer = True

    if permission in ADMIN_ONLY:
        return admin
    if permission in EDITOR_OR_ABOVE:
        return admin or editor
    if permission in COMMENTER_OR_ABOVE:
        return admin or editor or commenter
    if permission == Permission.VIEW_BOARD:
        return admin or editor or commenter or viewer
    return False


async def get_member(db: AsyncSession, board_id: str, user_id: str) -> Optional[BoardMember]:
    result = await db.execute(
        select(BoardMember).where(
            BoardMember.board_id == board_id,
            BoardMember.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def has_permission_to_board(
    db: AsyncSession, user_id: str, board_id: str, permission: Optional[Permission]
) -> bool:
    """Board-scoped capability check; non-members hold nothing."""
    if not user_id or not board_id or permission is None:
        return False

    member = await get_member(db, board_id, user_id)
    if member is None:
        return False
    return member_allows(member, permission)


async def require_board_permission(
    db: AsyncSession, user_id: str, board_id: str, permission: Permission
) -> None:
    if not await has_permission_to_board(db, user_id, board_id, permission):
        raise ForbiddenError(f"permission denied to board: {permission.value}")
