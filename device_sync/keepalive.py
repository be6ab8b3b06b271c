"""
Background keep-alive pings for every registered session.
"""

import asyncio
import logging
from typing import Optional

from device_sync.sessions import SessionRegistry

logger = logging.getLogger(__name__)


class KeepAliveLoop:
    """Pings all sessions every ``interval`` seconds until stopped."""

    def __init__(self, registry: SessionRegistry, interval: float = 10.0):
        if interval <= 0:
            raise ValueError("Keep-alive interval must be positive")
        self.registry = registry
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="device-sync-keepalive")
        logger.info(f"Keep-alive loop started (every {self.interval}s)")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # only swallow the loop's own cancellation, not one aimed at us
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        logger.info("Keep-alive loop stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.registry.ping_all()
