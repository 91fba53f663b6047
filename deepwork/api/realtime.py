import asyncio
from typing import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from deepwork.services.realtime_service import realtime_manager

router = APIRouter()

KEEP_ALIVE_SECONDS = 15


@router.get("/stream")
async def stream_realtime(request: Request) -> StreamingResponse:
    queue = await realtime_manager.connect()

    async def event_generator() -> AsyncGenerator[str, None]:
        try:
            yield 'data: {"type":"connected"}\n\n'
            while True:
                if await request.is_disconnected():
                    break
                try:
                    data = await asyncio.wait_for(queue.get(), timeout=KEEP_ALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield f"data: {data}\n\n"
        finally:
            await realtime_manager.disconnect(queue)

    return StreamingResponse(event_generator(), media_type="text/event-stream")
