"""
WebSocket refresh broadcaster.

Keeps the set of connected dashboard pages and pushes a payload-less
refresh event to all of them.
"""

import logging
from typing import Any, Dict, List

from fastapi import WebSocket

logger = logging.getLogger("beads_dashboard.notifier")

REFRESH_MESSAGE: Dict[str, Any] = {"type": "refresh"}


class RefreshBroadcaster:
    """Tracks active WebSocket connections for refresh delivery."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"Client connected ({self.connection_count} active)")

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info(f"Client disconnected ({self.connection_count} active)")

    async def broadcast_refresh(self) -> int:
        """
        Send the refresh event to every connection.

        Returns:
            Number of clients the event was delivered to
        """
        delivered = 0
        disconnected = []
        for connection in list(self.active_connections):
            try:
                await connection.send_json(REFRESH_MESSAGE)
                delivered += 1
            except Exception as e:
                logger.debug(f"Dropping connection after failed send: {e}")
                disconnected.append(connection)

        for connection in disconnected:
            self.disconnect(connection)

        logger.debug(f"Refresh broadcast to {delivered} client(s)")
        return delivered

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)
