"""
WebSocket fan-out: live connections keyed by user id.

Delivery is best-effort: a message for a user with no live socket is simply
not delivered, and a socket that fails to accept a write is dropped.
"""

import logging
from typing import Any, Dict, Iterable, List

from fastapi import WebSocket

logger = logging.getLogger(__name__)

ACTION_UPDATE_USER_NOTIFICATION = "UPDATE_USER_NOTIFICATION"
ACTION_UPDATE_CARD = "UPDATE_CARD"
ACTION_DELETE_CARD = "DELETE_CARD"


class ConnectionManager:
    def __init__(self):
        # Maps user_id (str) to a list of active WebSockets
        self.active_connections: Dict[str, List[WebSocket]] = {}

    def register(self, websocket: WebSocket, user_id: str):
        self.active_connections.setdefault(user_id, []).append(websocket)
        logger.debug(f"WebSocket registered for user {user_id}")

    def disconnect(self, websocket: WebSocket, user_id: str):
        if user_id in self.active_connections:
            if websocket in self.active_connections[user_id]:
                self.active_connections[user_id].remove(websocket)
            if not self.active_connections[user_id]:
                del self.active_connections[user_id]

    def connection_count(self, user_id: str) -> int:
        return len(self.active_connections.get(user_id, []))

    async def send_to_user(self, user_id: str, message: Dict[str, Any]) -> int:
        """Write ``message`` to every socket of ``user_id``. Returns sockets reached."""
        delivered = 0
        for connection in list(self.active_connections.get(user_id, [])):
            try:
                await connection.send_json(message)
                delivered += 1
            except Exception as e:
                logger.debug(f"Dropping dead WebSocket for user {user_id}: {e}")
                self.disconnect(connection, user_id)
        return delivered

    async def send_to_users(self, user_ids: Iterable[str], message: Dict[str, Any]) -> int:
        delivered = 0
        for user_id in set(user_ids):
            delivered += await self.send_to_user(user_id, message)
        return delivered


manager = ConnectionManager()
