"""Keep card assignee lists in step with board membership."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.board import BoardMember
from app.models.card import Card

logger = logging.getLogger(__name__)


async def prune_assignee(db: AsyncSession, user_id: str, board_id: Optional[str] = None) -> int:
    """Drop ``user_id`` from card assignees on one board, or on every board they belong to."""
    stmt = select(Card)
    if board_id is not None:
        stmt = stmt.where(Card.board_id == board_id)
    else:
        stmt = stmt.join(BoardMember, BoardMember.board_id == Card.board_id).where(
            BoardMember.user_id == user_id
        )

    pruned = 0
    for card in (await db.execute(stmt)).scalars().all():
        if user_id in (card.assignees or []):
            # JSON columns only register a change on reassignment
            card.assignees = [a for a in card.assignees if a != user_id]
            pruned += 1
    if pruned:
        await db.flush()
        logger.info(f"Unassigned {user_id} from {pruned} card(s)")
    return pruned
