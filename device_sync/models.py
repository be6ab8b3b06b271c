"""
Device Sync - Pydantic models for devices and the WebSocket wire format
"""

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel


# Enums
class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"
    UNLOAD = "unload"


class CamelModel(BaseModel):
    """Base model whose JSON keys are the camelCase form of its field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Device Models
class Device(BaseModel):
    """A device record held by the store. Only ``id`` is immutable."""

    id: int = Field(ge=0)
    name: str
    description: str
    status: bool


# ============================================================
# Inbound (client -> server)
# ============================================================


class Envelope(BaseModel):
    """Outer shape every inbound message must have."""

    model_config = ConfigDict(extra="allow")

    action: StrictStr


class InboundRequest(CamelModel):
    """Action payloads are validated strictly: no str->bool or bool->int coercion."""

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=False)


class CreateDeviceRequest(InboundRequest):
    action: Literal["create"]
    device_name: str
    device_description: str
    device_status: bool


class UpdateDeviceRequest(InboundRequest):
    action: Literal["update"]
    device_id: int
    device_name: str
    device_description: str
    device_status: bool


class RemoveDeviceRequest(InboundRequest):
    action: Literal["remove"]
    device_id: int


class UnloadRequest(InboundRequest):
    action: Literal["unload"]


InboundMessage = Union[
    CreateDeviceRequest, UpdateDeviceRequest, RemoveDeviceRequest, UnloadRequest
]

REQUEST_MODELS = {
    Action.CREATE.value: CreateDeviceRequest,
    Action.UPDATE.value: UpdateDeviceRequest,
    Action.REMOVE.value: RemoveDeviceRequest,
    Action.UNLOAD.value: UnloadRequest,
}


# ============================================================
# Outbound (server -> clients)
# ============================================================


class CreateMessage(CamelModel):
    """Broadcast after a device is created, and replayed to new sessions."""

    succeeded: Literal[True] = True
    message: str
    action: Literal["create"] = "create"
    device_id: int
    device_name: str
    device_description: str
    device_status: bool

    @classmethod
    def for_device(cls, device: Device) -> "CreateMessage":
        return cls(
            message=f'A device "{device.name}" is successfully added.',
            device_id=device.id,
            device_name=device.name,
            device_description=device.description,
            device_status=device.status,
        )


class UpdateSuccessMessage(CamelModel):
    succeeded: Literal[True] = True
    message: str
    action: Literal["update"] = "update"
    device_id: int
    device_name: str
    device_description: str
    device_status: bool

    @classmethod
    def for_device(cls, device: Device) -> "UpdateSuccessMessage":
        return cls(
            message=(
                f'Information of the device "{device.name}" is successfully updated.'
            ),
            device_id=device.id,
            device_name=device.name,
            device_description=device.description,
            device_status=device.status,
        )


class UpdateFailureMessage(CamelModel):
    succeeded: Literal[False] = False
    message: str
    action: Literal["update"] = "update"
    device_id: int

    @classmethod
    def for_id(cls, device_id: int) -> "UpdateFailureMessage":
        return cls(
            message=f"There is no device with ID {device_id}.",
            device_id=device_id,
        )


class RemoveMessage(CamelModel):
    """Outcome of a remove request; ``succeeded`` tells which."""

    succeeded: bool
    message: str
    action: Literal["remove"] = "remove"
    device_id: int

    @classmethod
    def success(cls, device: Device) -> "RemoveMessage":
        return cls(
            succeeded=True,
            message=f'Device "{device.name}" is successfully removed.',
            device_id=device.id,
        )

    @classmethod
    def failure(cls, device_id: int) -> "RemoveMessage":
        return cls(
            succeeded=False,
            message=f"No device with ID {device_id}.",
            device_id=device_id,
        )


OutboundMessage = Union[
    CreateMessage, UpdateSuccessMessage, UpdateFailureMessage, RemoveMessage
]


def encode(message: OutboundMessage) -> str:
    """Serialize an outbound message to its JSON wire form."""
    return message.model_dump_json(by_alias=True)
