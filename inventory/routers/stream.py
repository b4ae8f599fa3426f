# inventory/routers/stream.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ..deps import get_hub, get_store
from ..realtime import Hub, StreamSession
from ..services.inventory import ItemStore

router = APIRouter(tags=["events"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


# ---------- Real-time stream (SSE) ----------
@router.get("/events")
async def events_stream(store: ItemStore = Depends(get_store), hub: Hub = Depends(get_hub)):
    session = StreamSession(store, hub)

    async def gen():
        # первый «комментарий» держит канал открытым даже за прокси
        yield ": ok\n\n"
        # при обрыве соединения Starlette отменяет задачу: сессия сама отпишется
        async for event in session.events():
            yield event.sse()

    return StreamingResponse(gen(), media_type="text/event-stream", headers=SSE_HEADERS)
