"""
Message protocol - decodes inbound envelopes and drives store + broadcasts.

Every device-affecting request runs as one unit under the mutation lock:
mutate the store, then broadcast the outcome to all sessions. Opening a
session takes the same lock while it replays the current devices, so a
new client always sees its snapshot before any later change.
"""

import asyncio
import logging
from typing import Union

from pydantic import ValidationError

from device_sync.errors import BadRequest, DeviceNotFound, ProtocolError, UnknownAction
from device_sync.models import (
    REQUEST_MODELS,
    CreateDeviceRequest,
    CreateMessage,
    Envelope,
    InboundMessage,
    OutboundMessage,
    RemoveDeviceRequest,
    RemoveMessage,
    UnloadRequest,
    UpdateDeviceRequest,
    UpdateFailureMessage,
    UpdateSuccessMessage,
    encode,
)
from device_sync.sessions import Session, SessionRegistry, send_ping
from device_sync.store import DeviceStore

logger = logging.getLogger(__name__)


def decode(raw: Union[str, bytes]) -> InboundMessage:
    """
    Parse one inbound frame into a typed request.

    Raises:
        BadRequest: payload is not UTF-8 JSON, has no string ``action``, or
            misses / mistypes a field the action requires.
        UnknownAction: ``action`` is not one we handle.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BadRequest(f"Message is not valid UTF-8: {e}") from e

    try:
        envelope = Envelope.model_validate_json(raw)
    except ValidationError as e:
        raise BadRequest(f"Malformed message: {e.errors()[0]['msg']}") from e

    request_model = REQUEST_MODELS.get(envelope.action)
    if request_model is None:
        raise UnknownAction(envelope.action)

    try:
        return request_model.model_validate(envelope.model_dump())
    except ValidationError as e:
        raise BadRequest(f"Invalid {envelope.action!r} message: {e}") from e


class MessageRouter:
    """Contract the transport calls: on_open, on_message, on_close."""

    def __init__(self, store: DeviceStore, registry: SessionRegistry):
        self.store = store
        self.registry = registry
        self._mutation_lock = asyncio.Lock()

    async def on_open(self, session: Session) -> None:
        """Replay every existing device to ``session``, then register it."""
        async with self._mutation_lock:
            for device in self.store.snapshot():
                try:
                    await session.send_text(encode(CreateMessage.for_device(device)))
                except Exception as e:
                    logger.debug(f"Dropped snapshot entry for session {session!r}: {e}")
            self.registry.register(session)
        logger.info(f"Session opened ({len(self.registry)} active)")

    async def on_close(self, session: Session) -> None:
        self.registry.unregister(session)
        logger.info(f"Session closed ({len(self.registry)} active)")

    async def on_message(self, session: Session, raw: Union[str, bytes]) -> None:
        """
        Handle one inbound frame from ``session``.

        Malformed messages and unknown actions are dropped without any
        reply. Anything dispatched is followed by a ping to the sender.
        """
        try:
            request = decode(raw)
        except ProtocolError as e:
            logger.warning(f"Dropping message from session {session!r}: {e}")
            return

        await self.dispatch(session, request)
        await send_ping(session)

    async def dispatch(self, session: Session, request: InboundMessage) -> None:
        if isinstance(request, UnloadRequest):
            self.registry.unregister(session)
            logger.info(f"Session unloaded ({len(self.registry)} active)")
            return

        async with self._mutation_lock:
            outcome = self._apply(request)
            await self.registry.broadcast(encode(outcome))

    def _apply(self, request: InboundMessage) -> OutboundMessage:
        """Run ``request`` against the store and describe what happened."""
        if isinstance(request, CreateDeviceRequest):
            device = self.store.create(
                request.device_name, request.device_description, request.device_status
            )
            logger.info(f"Created device {device.id} ({device.name!r})")
            return CreateMessage.for_device(device)

        if isinstance(request, UpdateDeviceRequest):
            try:
                device = self.store.update(
                    request.device_id,
                    request.device_name,
                    request.device_description,
                    request.device_status,
                )
            except DeviceNotFound:
                return UpdateFailureMessage.for_id(request.device_id)
            return UpdateSuccessMessage.for_device(device)

        if isinstance(request, RemoveDeviceRequest):
            try:
                device = self.store.remove(request.device_id)
            except DeviceNotFound:
                return RemoveMessage.failure(request.device_id)
            logger.info(f"Removed device {device.id} ({device.name!r})")
            return RemoveMessage.success(device)

        raise UnknownAction(request.action)
