"""
Device routes - the WebSocket endpoint that keeps clients in sync
"""

import logging

from fastapi import APIRouter, Depends, WebSocket

from device_sync.core import DeviceSyncCore
from device_sync.dependencies import get_core
from device_sync.transport import WebSocketSession

router = APIRouter(tags=["Devices"])
logger = logging.getLogger(__name__)


@router.websocket("/devices")
async def devices_socket(
    websocket: WebSocket,
    core: DeviceSyncCore = Depends(get_core),
) -> None:
    """
    Shared device list.

    On connect the client receives one ``create`` message per existing
    device, then every change made by any client as it happens.

    Liveness probes (after each handled request and every keep-alive
    tick) arrive as empty binary frames, since ASGI has no WebSocket
    ping. Clients should ignore empty binary messages.
    """
    session = WebSocketSession(websocket)
    await session.open()
    await core.router.on_open(session)

    try:
        while True:
            raw = await session.receive()
            if raw is None:
                break
            await core.router.on_message(session, raw)
    finally:
        session.mark_closed()
        await core.router.on_close(session)
