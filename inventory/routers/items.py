# inventory/routers/items.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from .. import events
from ..deps import get_hub, get_item_payload, get_store
from ..exceptions import NotFound
from ..models.item import Item, ItemIn
from ..realtime import Hub
from ..services.inventory import ItemStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/items", tags=["items"])

# маршруты async: publish должен идти в потоке event loop'а, где живут очереди SSE


def _item_id(raw: str) -> int:
    # нечисловой id просто не найдётся
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")


@router.get("", response_model=list[Item])
async def list_items(store: ItemStore = Depends(get_store)):
    return store.list()


@router.get("/{item_id}", response_model=Item)
async def get_item(item_id: str, store: ItemStore = Depends(get_store)):
    try:
        return store.get(_item_id(item_id))
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=Item, status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: ItemIn = Depends(get_item_payload),
    store: ItemStore = Depends(get_store),
    hub: Hub = Depends(get_hub),
):
    item = store.create(payload.name, payload.price)
    # рассылка уже вне блокировки склада
    hub.publish(events.item_created(item))
    logger.debug("Created item %s", item.id)
    return item


@router.put("/{item_id}", response_model=Item)
async def update_item(
    item_id: str,
    payload: ItemIn = Depends(get_item_payload),
    store: ItemStore = Depends(get_store),
    hub: Hub = Depends(get_hub),
):
    try:
        item = store.update(_item_id(item_id), payload.name, payload.price)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    hub.publish(events.item_updated(item))
    logger.debug("Updated item %s", item.id)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: str,
    store: ItemStore = Depends(get_store),
    hub: Hub = Depends(get_hub),
):
    iid = _item_id(item_id)
    try:
        store.delete(iid)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    hub.publish(events.item_deleted(iid))
    logger.debug("Deleted item %s", iid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
