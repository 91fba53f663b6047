"""
Unit tests for the refresh broadcaster.
"""

import json

import pytest

from deepwork.services.realtime_service import SCHEDULE_INVALIDATION_KEYS, RealtimeManager


@pytest.mark.asyncio
async def test_publish_refresh_reaches_every_connection():
    manager = RealtimeManager()
    first = await manager.connect()
    second = await manager.connect()

    await manager.publish_refresh()

    for queue in (first, second):
        message = json.loads(queue.get_nowait())
        assert message == {"type": "refresh", "keys": list(SCHEDULE_INVALIDATION_KEYS)}


@pytest.mark.asyncio
async def test_disconnected_queue_receives_nothing():
    manager = RealtimeManager()
    queue = await manager.connect()
    assert manager.connection_count == 1

    await manager.disconnect(queue)
    await manager.publish({"type": "refresh", "keys": ["tasks"]})

    assert manager.connection_count == 0
    assert queue.empty()
