# inventory/services/inventory.py
from __future__ import annotations

import threading
from typing import Iterable, List, Tuple

from ..exceptions import NotFound
from ..models.item import Item

# стартовые данные демо-склада
DEMO_ITEMS: Tuple[Tuple[str, int], ...] = (
    ("Lapicera", 10),
    ("Cuaderno", 50),
)


class ItemStore:
    """
    Единственный владелец коллекции товаров и счётчика id.

    Все операции идут под одной блокировкой (и чтение, и запись). Под ней не
    делается ничего, кроме работы со списком: никаких уведомлений и I/O.
    Рассылку событий вызывающий делает уже после выхода из метода.
    """

    def __init__(self) -> None:
        self._items: List[Item] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def list(self) -> List[Item]:
        with self._lock:
            return list(self._items)

    def get(self, item_id: int) -> Item:
        with self._lock:
            return self._items[self._index(item_id)]

    def create(self, name: str, price: int) -> Item:
        with self._lock:
            item = Item(id=self._next_id, name=name, price=price)
            self._next_id += 1
            self._items.append(item)
            return item

    def update(self, item_id: int, name: str, price: int) -> Item:
        with self._lock:
            i = self._index(item_id)
            item = Item(id=item_id, name=name, price=price)
            self._items[i] = item
            return item

    def delete(self, item_id: int) -> None:
        with self._lock:
            del self._items[self._index(item_id)]

    def seed(self, rows: Iterable[Tuple[str, int]]) -> List[Item]:
        return [self.create(name, price) for name, price in rows]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    # вызывать только под self._lock
    def _index(self, item_id: int) -> int:
        for i, it in enumerate(self._items):
            if it.id == item_id:
                return i
        raise NotFound(item_id)
