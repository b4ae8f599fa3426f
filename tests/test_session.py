from __future__ import annotations

import asyncio
import json

import pytest

from inventory import events
from inventory.realtime import Hub, StreamSession
from inventory.services.inventory import ItemStore


def _payload(event: events.Event) -> dict:
    return json.loads(event.data)


@pytest.mark.asyncio
async def test_session_opens_with_init_snapshot(store: ItemStore, hub: Hub) -> None:
    session = StreamSession(store, hub)
    stream = session.events()

    first = await stream.__anext__()

    assert first.action == "init"
    assert _payload(first)["items"] == [it.model_dump() for it in store.list()]
    assert session.subscriber in hub
    await stream.aclose()
    assert len(hub) == 0


@pytest.mark.asyncio
async def test_session_relays_mutations_in_order(store: ItemStore, hub: Hub) -> None:
    session = StreamSession(store, hub)
    stream = session.events()
    await stream.__anext__()

    lapiz = store.create("Lapiz", 5)
    hub.publish(events.item_created(lapiz))
    got = await stream.__anext__()
    assert _payload(got) == {"action": "create", "item": {"id": 3, "name": "Lapiz", "price": 5}}

    store.delete(1)
    hub.publish(events.item_deleted(1))
    assert _payload(await stream.__anext__()) == {"action": "delete", "id": 1}

    await stream.aclose()


@pytest.mark.asyncio
async def test_close_ends_waiting_session_and_unsubscribes(store: ItemStore, hub: Hub) -> None:
    session = StreamSession(store, hub)
    stream = session.events()
    await stream.__anext__()

    pending = asyncio.create_task(stream.__anext__())
    await asyncio.sleep(0)
    assert not pending.done()

    session.close()

    with pytest.raises(StopAsyncIteration):
        await asyncio.wait_for(pending, 1)
    assert len(hub) == 0
    assert session.subscriber.closed


@pytest.mark.asyncio
async def test_cancelled_task_unsubscribes(store: ItemStore, hub: Hub) -> None:
    session = StreamSession(store, hub)
    stream = session.events()
    await stream.__anext__()

    pending = asyncio.create_task(stream.__anext__())
    await asyncio.sleep(0)
    pending.cancel()

    with pytest.raises(asyncio.CancelledError):
        await pending
    assert len(hub) == 0


@pytest.mark.asyncio
async def test_evicted_session_ends_after_buffered_event(store: ItemStore, hub: Hub) -> None:
    session = StreamSession(store, hub)
    stream = session.events()
    await stream.__anext__()

    buffered = events.item_deleted(1)
    hub.publish(buffered)
    hub.publish(events.item_deleted(2))  # slot still taken: evicted

    assert session.subscriber not in hub
    assert await stream.__anext__() == buffered
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()


@pytest.mark.asyncio
async def test_two_sessions_isolated_from_slow_peer(store: ItemStore, hub: Hub) -> None:
    slow = StreamSession(store, hub)
    fast = StreamSession(store, hub)
    slow_stream, fast_stream = slow.events(), fast.events()
    await slow_stream.__anext__()
    await fast_stream.__anext__()

    seen = []
    for name in ("a", "b", "c"):
        item = store.create(name, 1)
        hub.publish(events.item_created(item))
        seen.append(_payload(await fast_stream.__anext__())["item"]["name"])

    assert seen == ["a", "b", "c"]
    assert slow.subscriber not in hub
    assert fast.subscriber in hub

    await slow_stream.aclose()
    await fast_stream.aclose()
    assert len(hub) == 0
