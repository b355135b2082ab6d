"""Board, membership and view data access."""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import BadRequestError, ForbiddenError, NotFoundError
from app.models.board import Board, BoardMember, BoardType, BoardView, MemberRole
from app.models.user import User
from app.schemas.board import BoardCreate, BoardPatch, MemberCreate, MemberUpdate, ViewCreate
from app.services.assignees import prune_assignee
from app.services.permissions import get_member, member_allows, Permission

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
#  Boards
# ═══════════════════════════════════════════════════════════════

async def get_board(db: AsyncSession, board_id: str) -> Board:
    board = await db.get(Board, board_id)
    if not board:
        raise NotFoundError("Board", board_id)
    return board


async def get_boards_for_user(db: AsyncSession, user_id: str) -> List[Board]:
    result = await db.execute(
        select(Board)
        .join(BoardMember, Board.id == BoardMember.board_id)
        .where(BoardMember.user_id == user_id)
        .order_by(Board.create_at)
    )
    return list(result.scalars().all())


async def create_board(db: AsyncSession, data: BoardCreate, user_id: str) -> Board:
    """Create a board; the creator becomes its admin member."""
    board = Board(
        title=data.title,
        description=data.description,
        icon=data.icon,
        type=data.type.value,
        created_by=user_id,
        modified_by=user_id,
        card_properties=[p.model_dump() for p in data.card_properties],
    )
    db.add(board)
    await db.flush()

    db.add(BoardMember(
        board_id=board.id,
        user_id=user_id,
        scheme_admin=True,
        scheme_editor=True,
        scheme_commenter=True,
        scheme_viewer=True,
        minimum_role="",
    ))
    await db.flush()
    logger.info(f"Board created: {board.id} by {user_id}")
    return board


async def patch_board(db: AsyncSession, board: Board, data: BoardPatch, user_id: str) -> Board:
    if data.title is not None:
        board.title = data.title
    if data.description is not None:
        board.description = data.description
    if data.icon is not None:
        board.icon = data.icon
    if data.type is not None:
        board.type = data.type.value
    if data.card_properties is not None:
        board.card_properties = [p.model_dump() for p in data.card_properties]
    board.modified_by = user_id
    await db.flush()
    await db.refresh(board)
    return board


async def delete_board(db: AsyncSession, board: Board) -> None:
    await db.delete(board)
    await db.flush()
    logger.info(f"Board deleted: {board.id}")


# ═══════════════════════════════════════════════════════════════
#  Members
# ═══════════════════════════════════════════════════════════════

async def get_members(db: AsyncSession, board_id: str) -> List[BoardMember]:
    result = await db.execute(
        select(BoardMember).where(BoardMember.board_id == board_id)
    )
    return list(result.scalars().all())


async def get_member_ids(db: AsyncSession, board_id: str) -> List[str]:
    result = await db.execute(
        select(BoardMember.user_id).where(BoardMember.board_id == board_id)
    )
    return list(result.scalars().all())


async def _admin_count(db: AsyncSession, board_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(BoardMember).where(
            BoardMember.board_id == board_id,
            (BoardMember.scheme_admin == True) | (BoardMember.minimum_role == MemberRole.ADMIN.value),  # noqa: E712
        )
    )
    return result.scalar() or 0


async def _ensure_admin_remains(
    db: AsyncSession, board_id: str, member: BoardMember, was_admin: bool, admins_before: int
) -> None:
    if was_admin and not member_allows(member, Permission.MANAGE_BOARD_ROLES) and admins_before <= 1:
        raise BadRequestError("A board must keep at least one admin")


async def add_member(db: AsyncSession, board_id: str, data: MemberCreate) -> BoardMember:
    """Add a member, or overwrite the roles of an existing one."""
    if not await db.get(User, data.user_id):
        raise NotFoundError("User", data.user_id)

    member = await get_member(db, board_id, data.user_id)
    was_admin = False
    admins_before = 0
    if member is None:
        member = BoardMember(board_id=board_id, user_id=data.user_id)
        db.add(member)
    else:
        was_admin = member_allows(member, Permission.MANAGE_BOARD_ROLES)
        admins_before = await _admin_count(db, board_id)

    member.scheme_admin = data.scheme_admin
    member.scheme_editor = data.scheme_editor
    member.scheme_commenter = data.scheme_commenter
    member.scheme_viewer = data.scheme_viewer
    member.minimum_role = data.minimum_role.value if data.minimum_role else ""
    await _ensure_admin_remains(db, board_id, member, was_admin, admins_before)
    await db.flush()
    return member


async def update_member(db: AsyncSession, board_id: str, user_id: str, data: MemberUpdate) -> BoardMember:
    member = await get_member(db, board_id, user_id)
    if member is None:
        raise NotFoundError("Board member", user_id)

    was_admin = member_allows(member, Permission.MANAGE_BOARD_ROLES)
    admins_before = await _admin_count(db, board_id)
    for field in ("scheme_admin", "scheme_editor", "scheme_commenter", "scheme_viewer"):
        value = getattr(data, field)
        if value is not None:
            setattr(member, field, value)
    if data.minimum_role is not None:
        member.minimum_role = data.minimum_role.value

    await _ensure_admin_remains(db, board_id, member, was_admin, admins_before)
    await db.flush()
    return member


async def remove_member(db: AsyncSession, board_id: str, user_id: str) -> None:
    member = await get_member(db, board_id, user_id)
    if member is None:
        raise NotFoundError("Board member", user_id)
    if member_allows(member, Permission.MANAGE_BOARD_ROLES) and await _admin_count(db, board_id) <= 1:
        raise BadRequestError("A board must keep at least one admin")
    await db.delete(member)
    await db.flush()
    await prune_assignee(db, user_id, board_id)


async def join_board(db: AsyncSession, board: Board, user_id: str) -> BoardMember:
    """Self-join an open board with editor rights."""
    if board.type != BoardType.OPEN.value:
        raise ForbiddenError("Only open boards can be joined")

    member = await get_member(db, board.id, user_id)
    if member is not None:
        return member

    member = BoardMember(
        board_id=board.id,
        user_id=user_id,
        scheme_admin=False,
        scheme_editor=True,
        scheme_commenter=True,
        scheme_viewer=True,
        minimum_role="",
    )
    db.add(member)
    await db.flush()
    return member


# ═══════════════════════════════════════════════════════════════
#  Views
# ═══════════════════════════════════════════════════════════════

async def get_views(db: AsyncSession, board_id: str) -> List[BoardView]:
    result = await db.execute(
        select(BoardView).where(BoardView.board_id == board_id).order_by(BoardView.create_at)
    )
    return list(result.scalars().all())


async def create_view(db: AsyncSession, board_id: str, data: ViewCreate) -> BoardView:
    view = BoardView(
        board_id=board_id,
        title=data.title,
        view_type=data.view_type.value,
        fields=data.fields,
    )
    db.add(view)
    await db.flush()
    return view


async def delete_view(db: AsyncSession, board_id: str, view_id: str) -> None:
    view: Optional[BoardView] = await db.get(BoardView, view_id)
    if not view or view.board_id != board_id:
        raise NotFoundError("View", view_id)
    await db.delete(view)
    await db.flush()
