# inventory/models/item.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from ..exceptions import InvalidInput


class Item(BaseModel):
    # запись неизменяемая: update кладёт на то же место новую
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: int


class ItemIn(BaseModel):
    """
    Тело POST/PUT. Поле id клиента игнорируется: при создании id выдаёт склад,
    при обновлении главный id: из пути.
    """
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    price: StrictInt


def parse_item_payload(payload: Any) -> ItemIn:
    if not isinstance(payload, dict):
        raise InvalidInput("JSON object expected")
    try:
        return ItemIn.model_validate(payload)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidInput(errors) from e
