from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from inventory.config import Settings
from inventory.main import create_app
from inventory.realtime import Hub
from inventory.services.inventory import DEMO_ITEMS, ItemStore


@pytest.fixture
def store() -> ItemStore:
    s = ItemStore()
    s.seed(DEMO_ITEMS)
    return s


@pytest.fixture
def empty_store() -> ItemStore:
    return ItemStore()


@pytest.fixture
def hub() -> Hub:
    return Hub()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, SEED_DEMO_ITEMS=True, SUBSCRIBER_QUEUE_SIZE=1, ALLOWED_ORIGINS="*")


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c
