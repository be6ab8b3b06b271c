"""
Tests for the outbound wire format
"""

import json

from device_sync.models import (
    CreateMessage,
    Device,
    RemoveMessage,
    UpdateFailureMessage,
    UpdateSuccessMessage,
    encode,
)

DEVICE = Device(id=10, name="Your device name", description="Your device description", status=True)


def test_create_message_keys():
    data = json.loads(encode(CreateMessage.for_device(DEVICE)))
    assert data == {
        "succeeded": True,
        "message": 'A device "Your device name" is successfully added.',
        "action": "create",
        "deviceId": 10,
        "deviceName": "Your device name",
        "deviceDescription": "Your device description",
        "deviceStatus": True,
    }


def test_update_success_message_keys():
    data = json.loads(encode(UpdateSuccessMessage.for_device(DEVICE)))
    assert data["succeeded"] is True
    assert data["action"] == "update"
    assert set(data) == {
        "succeeded",
        "message",
        "action",
        "deviceId",
        "deviceName",
        "deviceDescription",
        "deviceStatus",
    }


def test_update_failure_message():
    data = json.loads(encode(UpdateFailureMessage.for_id(11)))
    assert data == {
        "succeeded": False,
        "message": "There is no device with ID 11.",
        "action": "update",
        "deviceId": 11,
    }


def test_remove_messages():
    assert json.loads(encode(RemoveMessage.success(DEVICE))) == {
        "succeeded": True,
        "message": 'Device "Your device name" is successfully removed.',
        "action": "remove",
        "deviceId": 10,
    }
    assert json.loads(encode(RemoveMessage.failure(11))) == {
        "succeeded": False,
        "message": "No device with ID 11.",
        "action": "remove",
        "deviceId": 11,
    }


def test_names_with_quotes_and_backslashes_stay_valid_json():
    device = Device(id=0, name='Say "hi" \\ bye', description="line\nbreak", status=False)
    data = json.loads(encode(CreateMessage.for_device(device)))
    assert data["deviceName"] == 'Say "hi" \\ bye'
    assert data["deviceDescription"] == "line\nbreak"
