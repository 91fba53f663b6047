import asyncio
import json
from typing import Any

# Cached views the host should refetch after a scheduling mutation
SCHEDULE_INVALIDATION_KEYS = ("tasks", "days/today")


class RealtimeManager:
    def __init__(self) -> None:
        self._connections: set[asyncio.Queue[str]] = set()
        self._lock = asyncio.Lock()

    async def connect(self) -> asyncio.Queue[str]:
        queue: asyncio.Queue[str] = asyncio.Queue()
        async with self._lock:
            self._connections.add(queue)
        return queue

    async def disconnect(self, queue: asyncio.Queue[str]) -> None:
        async with self._lock:
            self._connections.discard(queue)

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def publish(self, payload: dict[str, Any]) -> None:
        message = json.dumps(payload, separators=(",", ":"))
        async with self._lock:
            queues = list(self._connections)
        for queue in queues:
            queue.put_nowait(message)

    async def publish_refresh(self, keys: tuple[str, ...] = SCHEDULE_INVALIDATION_KEYS) -> None:
        await self.publish({"type": "refresh", "keys": list(keys)})


realtime_manager = RealtimeManager()
