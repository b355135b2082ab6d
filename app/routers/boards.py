"""
Boards router: boards, their members and their views.

Endpoints:
    GET    /boards                               → boards I belong to
    POST   /boards                               → create (caller becomes admin)
    GET    /boards/{board_id}                    → read
    PATCH  /boards/{board_id}                    → update
    DELETE /boards/{board_id}                    → delete
    GET    /boards/{board_id}/members            → list members
    POST   /boards/{board_id}/members            → add member
    PUT    /boards/{board_id}/members/{user_id}  → change roles
    DELETE /boards/{board_id}/members/{user_id}  → remove member / leave
    POST   /boards/{board_id}/join               → join an open board
    GET    /boards/{board_id}/views              → list views
    POST   /boards/{board_id}/views              → create view
    DELETE /boards/{board_id}/views/{view_id}    → delete view
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.board import (
    BoardCreate,
    BoardOut,
    BoardPatch,
    MemberCreate,
    MemberOut,
    MemberUpdate,
    ViewCreate,
    ViewOut,
)
from app.services import boards as board_service
from app.services.audit import audit
from app.services.permissions import Permission, require_board_permission

router = APIRouter(prefix="/boards", tags=["boards"])


# ═══════════════════════════════════════════════════════════════
#  Boards
# ═══════════════════════════════════════════════════════════════

@router.get("", response_model=List[BoardOut])
async def list_boards(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await board_service.get_boards_for_user(db, current_user.id)


@router.post("", response_model=BoardOut)
async def create_board(
    data: BoardCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    async with audit("createBoard", current_user.id) as record:
        board = await board_service.create_board(db, data, current_user.id)
        await db.commit()
        record.add_meta("boardID", board.id)
        record.success()
    return board


@router.get("/{board_id}", response_model=BoardOut)
async def get_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.VIEW_BOARD)
    return await board_service.get_board(db, board_id)


@router.patch("/{board_id}", response_model=BoardOut)
async def patch_board(
    board_id: str,
    data: BoardPatch,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if data.type is not None:
        await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_TYPE)
    if data.model_fields_set - {"type"}:
        await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_PROPERTIES)
    await require_board_permission(db, current_user.id, board_id, Permission.VIEW_BOARD)

    async with audit("patchBoard", current_user.id, boardID=board_id) as record:
        board = await board_service.get_board(db, board_id)
        board = await board_service.patch_board(db, board, data, current_user.id)
        await db.commit()
        record.success()
    return board


@router.delete("/{board_id}")
async def delete_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.DELETE_BOARD)
    async with audit("deleteBoard", current_user.id, boardID=board_id) as record:
        board = await board_service.get_board(db, board_id)
        await board_service.delete_board(db, board)
        await db.commit()
        record.success()
    return {}


# ═══════════════════════════════════════════════════════════════
#  Members
# ═══════════════════════════════════════════════════════════════

@router.get("/{board_id}/members", response_model=List[MemberOut])
async def list_members(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.VIEW_BOARD)
    return await board_service.get_members(db, board_id)


@router.post("/{board_id}/members", response_model=MemberOut)
async def add_member(
    board_id: str,
    data: MemberCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_ROLES)
    async with audit("addBoardMember", current_user.id, boardID=board_id, memberID=data.user_id) as record:
        member = await board_service.add_member(db, board_id, data)
        await db.commit()
        record.success()
    return member


@router.put("/{board_id}/members/{user_id}", response_model=MemberOut)
async def update_member(
    board_id: str,
    user_id: str,
    data: MemberUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_ROLES)
    async with audit("updateBoardMember", current_user.id, boardID=board_id, memberID=user_id) as record:
        member = await board_service.update_member(db, board_id, user_id, data)
        await db.commit()
        record.success()
    return member


@router.delete("/{board_id}/members/{user_id}")
async def remove_member(
    board_id: str,
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if user_id != current_user.id:
        await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_ROLES)
    async with audit("removeBoardMember", current_user.id, boardID=board_id, memberID=user_id) as record:
        await board_service.remove_member(db, board_id, user_id)
        await db.commit()
        record.success()
    return {}


@router.post("/{board_id}/join", response_model=MemberOut)
async def join_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    async with audit("joinBoard", current_user.id, boardID=board_id) as record:
        board = await board_service.get_board(db, board_id)
        member = await board_service.join_board(db, board, current_user.id)
        await db.commit()
        record.success()
    return member


# ═══════════════════════════════════════════════════════════════
#  Views
# ═══════════════════════════════════════════════════════════════

@router.get("/{board_id}/views", response_model=List[ViewOut])
async def list_views(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.VIEW_BOARD)
    return await board_service.get_views(db, board_id)


@router.post("/{board_id}/views", response_model=ViewOut)
async def create_view(
    board_id: str,
    data: ViewCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_PROPERTIES)
    view = await board_service.create_view(db, board_id, data)
    await db.commit()
    return view


@router.delete("/{board_id}/views/{view_id}")
async def delete_view(
    board_id: str,
    view_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_PROPERTIES)
    await board_service.delete_view(db, board_id, view_id)
    await db.commit()
    return {}
