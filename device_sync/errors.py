"""
Error types raised by the device store and the message protocol.
"""


class ProtocolError(Exception):
    """Base class for inbound messages that cannot be dispatched."""


class BadRequest(ProtocolError):
    """Message body is malformed or misses a required field."""


class UnknownAction(ProtocolError):
    """Envelope is well formed but carries an action we do not handle."""

    def __init__(self, action: str):
        super().__init__(f"Unknown action: {action!r}")
        self.action = action


class DeviceNotFound(Exception):
    """No device with the given id exists in the store."""

    def __init__(self, device_id: int):
        super().__init__(f"Device {device_id} not found")
        self.device_id = device_id


class SessionClosed(Exception):
    """Attempt to send on a session that is not open."""
