"""
WebSocket transport adapter.

Wraps a FastAPI/Starlette ``WebSocket`` as a ``Session`` and tracks the
connection's lifecycle: CONNECTING until the handshake is accepted, OPEN
while frames flow, CLOSED once either side closes.
"""

from enum import Enum
from typing import Optional, Union

from fastapi import WebSocket, status

from device_sync.errors import SessionClosed


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class WebSocketSession:
    """One client connection as seen by the registry and router."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket
        self.state = ConnectionState.CONNECTING

    def __repr__(self) -> str:
        client = self.websocket.client
        peer = f"{client.host}:{client.port}" if client else "unknown"
        return f"<WebSocketSession {peer} {self.state.value}>"

    async def open(self) -> None:
        """Accept the handshake."""
        if self.state is not ConnectionState.CONNECTING:
            raise SessionClosed(f"Cannot open a session that is {self.state.value}")
        await self.websocket.accept()
        self.state = ConnectionState.OPEN

    async def receive(self) -> Optional[Union[str, bytes]]:
        """
        Wait for the next inbound frame.

        Returns the frame payload, or None once the peer has disconnected.
        """
        message = await self.websocket.receive()
        if message["type"] == "websocket.disconnect":
            self.mark_closed()
            return None

        text = message.get("text")
        if text is not None:
            return text
        return message.get("bytes") or b""

    async def send_text(self, data: str) -> None:
        self._ensure_open()
        await self.websocket.send_text(data)

    async def send_ping(self) -> None:
        # ASGI has no ping primitive; an empty binary frame serves as the probe
        self._ensure_open()
        await self.websocket.send_bytes(b"")

    async def close(self, code: int = status.WS_1001_GOING_AWAY) -> None:
        if self.state is ConnectionState.CLOSED:
            return
        self.state = ConnectionState.CLOSED
        await self.websocket.close(code=code)

    def mark_closed(self) -> None:
        self.state = ConnectionState.CLOSED

    def _ensure_open(self) -> None:
        if self.state is not ConnectionState.OPEN:
            raise SessionClosed(f"Session is {self.state.value}")
