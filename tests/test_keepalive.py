"""
Tests for the keep-alive loop and core teardown
"""

import asyncio

import pytest

from device_sync.config import Settings
from device_sync.core import DeviceSyncCore
from device_sync.keepalive import KeepAliveLoop
from device_sync.sessions import SessionRegistry


def _run(coro):
    """Helper to run an async coroutine in a new event loop."""
    return asyncio.run(coro)


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        KeepAliveLoop(SessionRegistry(), interval=0)


def test_pings_every_session_each_tick(make_session):
    registry = SessionRegistry()
    alive, dead = make_session("alive"), make_session("dead", fail=True)
    registry.register(alive)
    registry.register(dead)
    loop = KeepAliveLoop(registry, interval=0.01)

    async def scenario():
        loop.start()
        await asyncio.sleep(0.1)
        await loop.stop()

    _run(scenario())

    assert alive.pings >= 2
    assert dead in registry
    assert not loop.running


def test_stop_halts_future_ticks(make_session):
    registry = SessionRegistry()
    session = make_session()
    registry.register(session)
    loop = KeepAliveLoop(registry, interval=0.01)

    async def scenario():
        loop.start()
        await asyncio.sleep(0.05)
        await loop.stop()
        pings = session.pings
        await asyncio.sleep(0.05)
        return pings

    pings_at_stop = _run(scenario())
    assert session.pings == pings_at_stop


def test_start_twice_keeps_one_task():
    loop = KeepAliveLoop(SessionRegistry(), interval=10)

    async def scenario():
        loop.start()
        first = loop._task
        loop.start()
        second = loop._task
        await loop.stop()
        return first, second

    first, second = _run(scenario())
    assert first is second


def test_stop_without_start_is_noop():
    _run(KeepAliveLoop(SessionRegistry()).stop())


def test_cancelling_the_caller_of_stop_propagates():
    loop = KeepAliveLoop(SessionRegistry(), interval=10)

    async def scenario():
        loop.start()
        await asyncio.sleep(0)
        stopper = asyncio.create_task(loop.stop())
        await asyncio.sleep(0)
        stopper.cancel()
        with pytest.raises(asyncio.CancelledError):
            await stopper
        return stopper

    stopper = _run(scenario())
    assert stopper.cancelled()
    assert not loop.running


def test_core_shutdown_stops_loop_then_closes_sessions(make_session):
    session = make_session()

    async def scenario():
        async with DeviceSyncCore(Settings(keepalive_interval=0.01)) as core:
            await core.router.on_open(session)
            assert core.keepalive.running
            await asyncio.sleep(0.1)
        return core

    core = _run(scenario())

    assert not core.keepalive.running
    assert session.closed
    assert session.pings >= 1
    assert len(core.registry) == 0
