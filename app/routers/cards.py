"""
Cards router: cards on a board and their assignees.

Endpoints:
    GET    /boards/{board_id}/cards              → list cards
    POST   /boards/{board_id}/cards              → create card
    GET    /cards/{card_id}                      → read card
    PATCH  /cards/{card_id}                      → update title / properties
    DELETE /cards/{card_id}                      → delete card
    POST   /cards/{card_id}/assignees            → assign a board member
    DELETE /cards/{card_id}/assignees/{user_id}  → unassign

Assignment changes notify the affected user (stored, then pushed live).
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.card import AssigneeAdd, CardCreate, CardOut, CardPatch
from app.services import boards as board_service
from app.services import cards as card_service
from app.services import notifications as notification_service
from app.services.audit import audit
from app.services.permissions import Permission, require_board_permission

router = APIRouter(tags=["cards"])


@router.get("/boards/{board_id}/cards", response_model=List[CardOut])
async def list_cards(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.VIEW_BOARD)
    return await card_service.get_cards(db, board_id)


@router.post("/boards/{board_id}/cards", response_model=CardOut)
async def create_card(
    board_id: str,
    data: CardCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_CARDS)
    async with audit("createCard", current_user.id, boardID=board_id) as record:
        board = await board_service.get_board(db, board_id)
        card = await card_service.create_card(db, board, data, current_user.id)
        await db.commit()
        record.add_meta("cardID", card.id)
        record.success()

    await card_service.broadcast_card_update(db, card)
    return card


@router.get("/cards/{card_id}", response_model=CardOut)
async def get_card(
    card_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    card = await card_service.get_card(db, card_id)
    await require_board_permission(db, current_user.id, card.board_id, Permission.VIEW_BOARD)
    return card


@router.patch("/cards/{card_id}", response_model=CardOut)
async def patch_card(
    card_id: str,
    data: CardPatch,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    card = await card_service.get_card(db, card_id)
    await require_board_permission(db, current_user.id, card.board_id, Permission.MANAGE_BOARD_CARDS)
    async with audit("patchCard", current_user.id, cardID=card_id) as record:
        board = await board_service.get_board(db, card.board_id)
        card = await card_service.patch_card(db, board, card, data, current_user.id)
        await db.commit()
        record.success()

    await card_service.broadcast_card_update(db, card)
    return card


@router.delete("/cards/{card_id}")
async def delete_card(
    card_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    card = await card_service.get_card(db, card_id)
    board_id = card.board_id
    await require_board_permission(db, current_user.id, board_id, Permission.MANAGE_BOARD_CARDS)
    async with audit("deleteCard", current_user.id, cardID=card_id) as record:
        await card_service.delete_card(db, card)
        await db.commit()
        record.success()

    await card_service.broadcast_card_delete(db, board_id, card_id)
    return {}


@router.post("/cards/{card_id}/assignees", response_model=CardOut)
async def add_assignee(
    card_id: str,
    data: AssigneeAdd,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    card = await card_service.get_card(db, card_id)
    await require_board_permission(db, current_user.id, card.board_id, Permission.MANAGE_BOARD_CARDS)
    async with audit("assignCard", current_user.id, cardID=card_id, assigneeID=data.user_id) as record:
        card, notification = await card_service.add_assignee(db, card, data.user_id, current_user)
        await db.commit()
        record.success()

    if notification is not None:
        await notification_service.create_and_broadcast(db, notification)
    await card_service.broadcast_card_update(db, card)
    return card


@router.delete("/cards/{card_id}/assignees/{user_id}", response_model=CardOut)
async def remove_assignee(
    card_id: str,
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    card = await card_service.get_card(db, card_id)
    await require_board_permission(db, current_user.id, card.board_id, Permission.MANAGE_BOARD_CARDS)
    async with audit("unassignCard", current_user.id, cardID=card_id, assigneeID=user_id) as record:
        card, notification = await card_service.remove_assignee(db, card, user_id, current_user)
        await db.commit()
        record.success()

    if notification is not None:
        await notification_service.create_and_broadcast(db, notification)
    await card_service.broadcast_card_update(db, card)
    return card
