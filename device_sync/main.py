"""
Device Sync

Keeps a shared, in-memory list of devices synchronized in real time
between every client connected to the ``/devices`` WebSocket endpoint.
Device data lives only in memory and is lost on restart.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI

from device_sync import __version__
from device_sync.config import Settings
from device_sync.core import DeviceSyncCore
from device_sync.dependencies import get_core_for_request
from device_sync.routers import devices_router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup: build shared state and start pinging clients
        core = DeviceSyncCore(settings)
        await core.start()
        app.state.core = core
        yield
        # Shutdown: stop pinging, close remaining sessions
        app.state.core = None
        await core.shutdown()

    app = FastAPI(
        title="Device Sync",
        version=__version__,
        description="""
Real-time shared device registry. Clients connect to the `/devices`
WebSocket, receive the current devices, and see every create, update
and remove made by any client.
        """,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.core = None

    # Include routers
    app.include_router(devices_router)

    @app.get("/health", tags=["Health"])
    async def health_check(core: DeviceSyncCore = Depends(get_core_for_request)) -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "sessions": len(core.registry),
            "devices": len(core.store),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()

    uvicorn.run(
        "device_sync.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level,
    )
