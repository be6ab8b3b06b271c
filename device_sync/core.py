"""
Process-wide wiring of the registry, store, router and keep-alive loop.
"""

import logging
from typing import Optional

from device_sync.config import Settings
from device_sync.keepalive import KeepAliveLoop
from device_sync.protocol import MessageRouter
from device_sync.sessions import SessionRegistry
from device_sync.store import DeviceStore

logger = logging.getLogger(__name__)


class DeviceSyncCore:
    """
    Owns all shared state for one running service.

    Built once at startup and handed to each connection handler. Use
    ``start()``/``shutdown()`` or ``async with``.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.registry = SessionRegistry()
        self.store = DeviceStore()
        self.router = MessageRouter(self.store, self.registry)
        self.keepalive = KeepAliveLoop(
            self.registry, interval=self.settings.keepalive_interval
        )

    async def start(self) -> None:
        self.keepalive.start()

    async def shutdown(self) -> None:
        """Stop pinging, then close whatever sessions are still registered."""
        await self.keepalive.stop()
        remaining = len(self.registry)
        await self.registry.close_all()
        logger.info(f"Device sync core shut down ({remaining} sessions closed)")

    async def __aenter__(self) -> "DeviceSyncCore":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.shutdown()
