# inventory/deps.py
from __future__ import annotations

from typing import Any

from fastapi import Request

from .exceptions import InvalidInput
from .models.item import ItemIn, parse_item_payload
from .realtime import Hub
from .services.inventory import ItemStore


# ------------------ Состояние приложения ------------------
# склад и хаб создаются один раз в create_app() и живут в app.state

def get_store(request: Request) -> ItemStore:
    return request.app.state.store


def get_hub(request: Request) -> Hub:
    return request.app.state.hub


# ------------------ Тело запроса ------------------

async def get_item_payload(request: Request) -> ItemIn:
    """
    Разбираем JSON сами: на кривое тело отвечаем 400 (InvalidInput),
    а не стандартным 422 от FastAPI.
    """
    try:
        payload: Any = await request.json()
    except ValueError as e:
        raise InvalidInput("invalid JSON") from e
    return parse_item_payload(payload)
