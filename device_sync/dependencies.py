"""
FastAPI dependencies
"""

from fastapi import HTTPException, Request, WebSocket, WebSocketException, status

from device_sync.core import DeviceSyncCore


def _core_from_state(state) -> DeviceSyncCore:
    core = getattr(state, "core", None)
    if core is None:
        raise RuntimeError("Device sync core is not running")
    return core


async def get_core(websocket: WebSocket) -> DeviceSyncCore:
    """Return the running core for a WebSocket connection."""
    try:
        return _core_from_state(websocket.app.state)
    except RuntimeError as e:
        raise WebSocketException(
            code=status.WS_1011_INTERNAL_ERROR, reason=str(e)
        ) from e


async def get_core_for_request(request: Request) -> DeviceSyncCore:
    """Return the running core for a plain HTTP request."""
    try:
        return _core_from_state(request.app.state)
    except RuntimeError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        ) from e
