"""Card data access, property validation and card-membership changes."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import BadRequestError, NotFoundError
from app.models.board import Board
from app.models.card import Card
from app.models.notification import NotificationType, UserNotification
from app.models.user import User
from app.schemas.card import CardCreate, CardOut, CardPatch
from app.services import notifications as notification_service
from app.services.boards import get_member_ids
from app.services.broadcast import ACTION_DELETE_CARD, ACTION_UPDATE_CARD, manager
from app.services.permissions import get_member

logger = logging.getLogger(__name__)

BOOLEAN_VALUES = {"true", "false"}


# ═══════════════════════════════════════════════════════════════
#  Property validation
# ═══════════════════════════════════════════════════════════════

def _option_ids(template: Dict[str, Any]) -> set:
    return {option.get("id") for option in template.get("options") or []}


def validate_property_value(template: Dict[str, Any], value: Any) -> None:
    """Raise BadRequestError when ``value`` does not fit the template's type."""
    prop_type = template.get("type", "text")
    name = template.get("name") or template.get("id")

    if prop_type == "multiSelect":
        if not isinstance(value, list):
            raise BadRequestError(f"Property '{name}' expects a list of option ids")
        unknown = set(value) - _option_ids(template)
        if unknown:
            raise BadRequestError(f"Property '{name}' has unknown options: {sorted(unknown)}")
        return

    if not isinstance(value, str):
        raise BadRequestError(f"Property '{name}' expects a string value")

    if prop_type == "select" and value not in _option_ids(template):
        raise BadRequestError(f"Property '{name}' has unknown option '{value}'")
    if prop_type == "number" and value != "":
        try:
            float(value)
        except ValueError:
            raise BadRequestError(f"Property '{name}' expects a number")
    if prop_type == "checkbox" and value not in BOOLEAN_VALUES:
        raise BadRequestError(f"Property '{name}' expects 'true' or 'false'")


def validate_properties(board: Board, properties: Dict[str, Any]) -> None:
    templates = {t.get("id"): t for t in board.card_properties or []}
    for prop_id, value in properties.items():
        template = templates.get(prop_id)
        if template is None:
            raise BadRequestError(f"Unknown card property '{prop_id}'")
        validate_property_value(template, value)


# ═══════════════════════════════════════════════════════════════
#  CRUD
# ═══════════════════════════════════════════════════════════════

async def get_card(db: AsyncSession, card_id: str) -> Card:
    card = await db.get(Card, card_id)
    if not card:
        raise NotFoundError("Card", card_id)
    return card


async def get_cards(db: AsyncSession, board_id: str) -> List[Card]:
    result = await db.execute(
        select(Card).where(Card.board_id == board_id).order_by(Card.sort_order, Card.create_at)
    )
    return list(result.scalars().all())


async def create_card(db: AsyncSession, board: Board, data: CardCreate, user_id: str) -> Card:
    validate_properties(board, data.properties)
    card = Card(
        board_id=board.id,
        title=data.title,
        icon=data.icon,
        created_by=user_id,
        modified_by=user_id,
        properties=dict(data.properties),
        assignees=[],
        sort_order=data.sort_order,
    )
    db.add(card)
    await db.flush()
    return card


async def patch_card(db: AsyncSession, board: Board, card: Card, data: CardPatch, user_id: str) -> Card:
    validate_properties(board, data.updated_properties)

    if data.title is not None:
        card.title = data.title
    if data.icon is not None:
        card.icon = data.icon
    if data.sort_order is not None:
        card.sort_order = data.sort_order

    # JSON columns only register a change on reassignment
    properties = dict(card.properties or {})
    properties.update(data.updated_properties)
    for prop_id in data.deleted_properties:
        properties.pop(prop_id, None)
    card.properties = properties
    card.modified_by = user_id

    await db.flush()
    await db.refresh(card)
    return card


async def delete_card(db: AsyncSession, card: Card) -> None:
    await db.delete(card)
    await db.flush()


# ═══════════════════════════════════════════════════════════════
#  Assignees
# ═══════════════════════════════════════════════════════════════

def _membership_notification(
    card: Card, actor: User, target_user_id: str, notif_type: NotificationType
) -> Optional[UserNotification]:
    if target_user_id == actor.id:
        return None
    return notification_service.new_notification(
        target_user_id=target_user_id,
        actor_user_id=actor.id,
        actor_name=actor.username,
        notif_type=notif_type,
        card_id=card.id,
        card_title=card.title,
        board_id=card.board_id,
    )


async def add_assignee(
    db: AsyncSession, card: Card, user_id: str, actor: User
) -> Tuple[Card, Optional[UserNotification]]:
    """Assign a board member; returns the card and the unsaved notification, if any."""
    if await get_member(db, card.board_id, user_id) is None:
        raise BadRequestError("Assignee must be a member of the board")

    if user_id in (card.assignees or []):
        return card, None

    card.assignees = list(card.assignees or []) + [user_id]
    card.modified_by = actor.id
    await db.flush()
    await db.refresh(card)
    return card, _membership_notification(card, actor, user_id, NotificationType.ASSIGNED)


async def remove_assignee(
    db: AsyncSession, card: Card, user_id: str, actor: User
) -> Tuple[Card, Optional[UserNotification]]:
    if user_id not in (card.assignees or []):
        return card, None

    card.assignees = [a for a in card.assignees if a != user_id]
    card.modified_by = actor.id
    await db.flush()
    await db.refresh(card)
    return card, _membership_notification(card, actor, user_id, NotificationType.UNASSIGNED)


# ═══════════════════════════════════════════════════════════════
#  Broadcast
# ═══════════════════════════════════════════════════════════════

async def broadcast_card_update(db: AsyncSession, card: Card) -> None:
    payload = {
        "action": ACTION_UPDATE_CARD,
        "boardId": card.board_id,
        "card": CardOut.model_validate(card).model_dump(by_alias=True),
    }
    await _broadcast_to_board(db, card.board_id, payload)


async def broadcast_card_delete(db: AsyncSession, board_id: str, card_id: str) -> None:
    payload = {"action": ACTION_DELETE_CARD, "boardId": board_id, "cardId": card_id}
    await _broadcast_to_board(db, board_id, payload)


async def _broadcast_to_board(db: AsyncSession, board_id: str, payload: Dict[str, Any]) -> None:
    try:
        member_ids = await get_member_ids(db, board_id)
        await manager.send_to_users(member_ids, payload)
    except Exception as e:
        logger.debug(f"Board broadcast failed for {board_id}: {e}")
