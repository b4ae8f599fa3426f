# inventory/exceptions.py
from __future__ import annotations


class InventoryError(Exception):
    """Базовая ошибка инвентаря."""


class NotFound(InventoryError, LookupError):
    """Нет товара с таким id."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found")


class InvalidInput(InventoryError, ValueError):
    """Тело запроса не похоже на товар."""
