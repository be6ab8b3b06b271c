"""
Registry of the sessions that currently receive broadcasts.
"""

import asyncio
import logging
from typing import Iterator, List, Protocol, Set

logger = logging.getLogger(__name__)


class Session(Protocol):
    """What the core needs from one connected client."""

    async def send_text(self, data: str) -> None: ...

    async def send_ping(self) -> None: ...

    async def close(self) -> None: ...


class SessionRegistry:
    """
    Set of active sessions.

    All methods run on the event loop. Broadcasts iterate over a copy of
    the set, so sessions may register or unregister while a broadcast is
    in flight. Send failures are logged and dropped; they never remove a
    session and never reach the caller.
    """

    def __init__(self) -> None:
        self._sessions: Set[Session] = set()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session: object) -> bool:
        return session in self._sessions

    def __iter__(self) -> Iterator[Session]:
        return iter(self._copy())

    def _copy(self) -> List[Session]:
        return list(self._sessions)

    def register(self, session: Session) -> None:
        self._sessions.add(session)

    def unregister(self, session: Session) -> None:
        self._sessions.discard(session)

    async def broadcast(self, message: str) -> None:
        """Send ``message`` to every registered session."""
        await asyncio.gather(
            *(self._send_text(session, message) for session in self._copy())
        )

    async def ping_all(self) -> None:
        """Send an empty-payload ping to every registered session."""
        await asyncio.gather(*(send_ping(session) for session in self._copy()))

    async def close_all(self) -> None:
        """Close and forget every registered session."""
        sessions = self._copy()
        self._sessions.clear()
        for session in sessions:
            try:
                await session.close()
            except Exception as e:
                logger.debug(f"Error closing session {session!r}: {e}")

    @staticmethod
    async def _send_text(session: Session, message: str) -> None:
        try:
            await session.send_text(message)
        except Exception as e:
            logger.debug(f"Dropped message to session {session!r}: {e}")


async def send_ping(session: Session) -> None:
    """Ping one session, discarding any send failure."""
    try:
        await session.send_ping()
    except Exception as e:
        logger.debug(f"Dropped ping to session {session!r}: {e}")
