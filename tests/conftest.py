"""
Shared fixtures
"""

import json

import pytest


class FakeSession:
    """In-memory stand-in for a client connection."""

    def __init__(self, name: str = "session", fail: bool = False):
        self.name = name
        self.fail = fail
        self.texts = []
        self.pings = 0
        self.closed = False

    def __repr__(self) -> str:
        return f"<FakeSession {self.name}>"

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise ConnectionError(f"{self.name} is gone")
        self.texts.append(data)

    async def send_ping(self) -> None:
        if self.fail:
            raise ConnectionError(f"{self.name} is gone")
        self.pings += 1

    async def close(self) -> None:
        self.closed = True

    def messages(self) -> list:
        return [json.loads(text) for text in self.texts]


@pytest.fixture
def make_session():
    return FakeSession
