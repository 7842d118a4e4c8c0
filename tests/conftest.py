# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest

from inventory.store import InventoryStore


class TickingClock:
    """Returns a strictly increasing timestamp on every call."""

    def __init__(self, start=datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "inventory.json"


@pytest.fixture
def store(data_file, clock):
    return InventoryStore(data_file, clock=clock)
