# inventory/events.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Literal

from .models.item import Item

Action = Literal["create", "update", "delete", "init"]


@dataclass(frozen=True)
class Event:
    """Уже сериализованное уведомление; после создания не меняется."""
    action: Action
    data: str

    def sse(self) -> str:
        # формат SSE: data: <json>\n\n (без event:, клиенты слушают onmessage)
        return f"data: {self.data}\n\n"


def _make(action: Action, payload: dict[str, Any]) -> Event:
    body = {"action": action, **payload}
    return Event(action=action, data=json.dumps(body, ensure_ascii=False, separators=(",", ":")))


def item_created(item: Item) -> Event:
    return _make("create", {"item": item.model_dump()})


def item_updated(item: Item) -> Event:
    return _make("update", {"item": item.model_dump()})


def item_deleted(item_id: int) -> Event:
    return _make("delete", {"id": item_id})


def snapshot(items: Iterable[Item]) -> Event:
    return _make("init", {"items": [it.model_dump() for it in items]})
