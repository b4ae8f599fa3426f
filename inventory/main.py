# inventory/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, settings as default_settings
from .exceptions import InvalidInput
from .realtime import Hub
from .services.inventory import DEMO_ITEMS, ItemStore

from .routers import (
    items as items_router,
    stream as stream_router,
    meta as meta_router,
)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    # склад и хаб: явные объекты приложения, без глобальных переменных
    store = ItemStore()
    if settings.SEED_DEMO_ITEMS:
        store.seed(DEMO_ITEMS)
    hub = Hub(queue_size=settings.SUBSCRIBER_QUEUE_SIZE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # закрываем каналы, чтобы открытые SSE-стримы не держали остановку
        hub.close()

    app = FastAPI(title="Inventory", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.hub = hub

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    # --- Подключение роутеров ---
    app.include_router(meta_router.router)
    app.include_router(items_router.router)
    app.include_router(stream_router.router)     # /events (SSE)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    logging.basicConfig(
        level=default_settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server listening on %s:%d", default_settings.HOST, default_settings.PORT)
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
