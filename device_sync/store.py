"""
In-memory device storage.

Nothing here survives a restart. The store does no locking of its own:
callers must serialize writers (see ``MessageRouter``).
"""

import itertools
from typing import Dict, List, Optional

from device_sync.errors import DeviceNotFound
from device_sync.models import Device


class DeviceStore:
    """Maps device id -> Device, handing out ids from a counter starting at 0."""

    def __init__(self) -> None:
        # device_id -> Device
        self._devices: Dict[int, Device] = {}
        # ids are never reused, even after a removal
        self._ids = itertools.count()

    def __len__(self) -> int:
        return len(self._devices)

    def get(self, device_id: int) -> Optional[Device]:
        return self._devices.get(device_id)

    def create(self, name: str, description: str, status: bool) -> Device:
        """Store a new device under the next free id and return it."""
        device = Device(
            id=next(self._ids),
            name=name,
            description=description,
            status=status,
        )
        self._devices[device.id] = device
        return device

    def update(
        self, device_id: int, name: str, description: str, status: bool
    ) -> Device:
        """
        Overwrite the mutable fields of an existing device in place.

        Raises:
            DeviceNotFound: if no device has ``device_id``.
        """
        device = self._devices.get(device_id)
        if device is None:
            raise DeviceNotFound(device_id)

        device.name = name
        device.description = description
        device.status = status
        return device

    def remove(self, device_id: int) -> Device:
        """
        Delete a device and return the removed record.

        Raises:
            DeviceNotFound: if no device has ``device_id``.
        """
        try:
            return self._devices.pop(device_id)
        except KeyError:
            raise DeviceNotFound(device_id) from None

    def snapshot(self) -> List[Device]:
        """Return every current device. Order is unspecified."""
        return list(self._devices.values())
