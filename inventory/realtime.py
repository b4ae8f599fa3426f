# inventory/realtime.py
from __future__ import annotations

import asyncio
import logging
import threading
from typing import AsyncIterator, Optional

from . import events
from .events import Event
from .services.inventory import ItemStore

logger = logging.getLogger(__name__)


class Subscriber:
    """
    Канал доставки одного SSE-клиента: очередь ограниченной глубины (по умолчанию 1).
    Закрытый канал больше ничего не принимает и обратно в хаб не попадает.
    """

    def __init__(self, maxsize: int = 1) -> None:
        self._queue: "asyncio.Queue[Event]" = asyncio.Queue(maxsize=maxsize)
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def offer(self, event: Event) -> bool:
        """Неблокирующая попытка положить событие. False: канал полон или закрыт."""
        if self.closed:
            return False
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            return False
        return True

    def close(self) -> None:
        self._closed.set()

    async def receive(self, cancel: Optional[asyncio.Event] = None) -> Optional[Event]:
        """
        Ждёт следующее событие. None: канал закрыт (после выдачи уже лежащего
        в очереди) или сработал cancel.
        """
        if not self._queue.empty():
            return self._queue.get_nowait()
        if self.closed or (cancel is not None and cancel.is_set()):
            return None

        getter = asyncio.ensure_future(self._queue.get())
        waiters = {getter, asyncio.ensure_future(self._closed.wait())}
        if cancel is not None:
            waiters.add(asyncio.ensure_future(cancel.wait()))
        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for w in waiters:
                if not w.done():
                    w.cancel()
        if getter.done() and not getter.cancelled():
            return getter.result()
        return None


class Hub:
    """
    Реестр живых подписчиков и рассылка событий.

    publish никогда не ждёт медленного клиента: если его канал ещё занят
    предыдущим событием, клиент считается зависшим, снимается с учёта и
    канал закрывается. Доставка не более одного раза, без повторов.

    Вызывать из потока event loop'а, которому принадлежат очереди.
    """

    def __init__(self, queue_size: int = 1) -> None:
        self._queue_size = queue_size
        self._subscribers: set[Subscriber] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def __contains__(self, sub: Subscriber) -> bool:
        with self._lock:
            return sub in self._subscribers

    def subscribe(self) -> Subscriber:
        sub = Subscriber(self._queue_size)
        with self._lock:
            self._subscribers.add(sub)
            total = len(self._subscribers)
        logger.info("SSE subscriber connected (%d active)", total)
        return sub

    def unsubscribe(self, sub: Subscriber) -> None:
        with self._lock:
            known = sub in self._subscribers
            self._subscribers.discard(sub)
            total = len(self._subscribers)
        sub.close()
        if known:
            logger.info("SSE subscriber disconnected (%d active)", total)

    def publish(self, event: Event) -> int:
        """Разослать событие всем текущим подписчикам. Возвращает число доставок."""
        delivered = evicted = 0
        with self._lock:
            for sub in list(self._subscribers):
                if sub.offer(event):
                    delivered += 1
                    continue
                # клиент не успел забрать прошлое событие: выкидываем
                self._subscribers.discard(sub)
                sub.close()
                evicted += 1
        if evicted:
            logger.info("Evicted %d unresponsive subscriber(s) on %s", evicted, event.action)
        logger.debug("Published %s to %d subscriber(s)", event.action, delivered)
        return delivered

    def close(self) -> None:
        """Закрыть все каналы (остановка сервера): открытые стримы завершатся."""
        with self._lock:
            subs = list(self._subscribers)
            self._subscribers.clear()
        for sub in subs:
            sub.close()


class StreamSession:
    """
    Одна SSE-сессия: регистрация в хабе, снимок init, затем ретрансляция
    событий, пока клиент не отключится (close() или отмена задачи) либо хаб
    не закроет канал.
    """

    def __init__(self, store: ItemStore, hub: Hub) -> None:
        self._store = store
        self._hub = hub
        self._disconnected = asyncio.Event()
        self.subscriber: Optional[Subscriber] = None

    def close(self) -> None:
        self._disconnected.set()

    async def events(self) -> AsyncIterator[Event]:
        sub = self._hub.subscribe()
        self.subscriber = sub
        try:
            yield events.snapshot(self._store.list())
            while True:
                event = await sub.receive(self._disconnected)
                if event is None:
                    return
                yield event
        finally:
            self._hub.unsubscribe(sub)
