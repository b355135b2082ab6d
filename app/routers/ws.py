"""
WebSocket router: live push channel for notifications and card updates.

Clients authenticate either with ``?token=<bearer>`` on the handshake or by
sending ``{"action": "AUTH", "token": "..."}`` as the first message.
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from app.database import async_session
from app.errors import AppError
from app.services import auth as auth_service
from app.services.broadcast import manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])

ACTION_AUTH = "AUTH"
ACTION_PING = "PING"
ACTION_PONG = "PONG"


async def _resolve_user_id(token: str) -> Optional[str]:
    async with async_session() as db:
        try:
            user, _session = await auth_service.get_session_user(db, token)
        except AppError:
            return None
        return user.id


def _parse(raw: str) -> dict:
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, token: Optional[str] = None):
    await websocket.accept()

    try:
        if not token:
            first = _parse(await websocket.receive_text())
            if first.get("action") == ACTION_AUTH and isinstance(first.get("token"), str):
                token = first["token"]

        user_id = await _resolve_user_id(token) if token else None
        if user_id is None:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return
    except WebSocketDisconnect:
        return

    manager.register(websocket, user_id)
    try:
        # Receive loop
        while True:
            message = _parse(await websocket.receive_text())
            if message.get("action") == ACTION_PING:
                await websocket.send_json({"action": ACTION_PONG})
    except WebSocketDisconnect:
        logger.debug(f"WebSocket closed for user {user_id}")
    finally:
        manager.disconnect(websocket, user_id)
