import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from unittest.mock import AsyncMock, MagicMock

import pytest

from roster.config import clear_settings_cache
from roster.controller import EventRosterController


RAW_USERS = [
    {"_id": "A", "username": "alice", "gmail": "alice@example.com"},
    {"_id": "B", "username": "bob"},
    {"_id": "C", "username": "carol"},
]

RAW_EVENTS = [
    {
        "_id": "E1",
        "name": "Old",
        "address": "Office",
        "schedule": ["2024-05-01 10:00"],
        "participantes": ["A"],
    },
    {
        "_id": "E2",
        "name": "Standup",
        "address": "Room 2",
        "schedule": "2024-06-02T09:30:00.000Z",
        "participantes": [{"_id": "B", "username": "bob"}],
    },
    {
        "_id": "E7",
        "name": "Retro",
        "address": "Cafeteria",
        "schedule": None,
    },
]


@pytest.fixture(autouse=True)
def fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def store():
    client = MagicMock()
    client.list_events = AsyncMock(return_value=[dict(e) for e in RAW_EVENTS])
    client.get_event = AsyncMock()
    client.create_event = AsyncMock()
    client.update_event = AsyncMock(return_value={"acknowledged": True})
    client.delete_event = AsyncMock(return_value=None)
    return client


@pytest.fixture
def directory():
    client = MagicMock()
    client.list_users = AsyncMock(return_value=[dict(u) for u in RAW_USERS])
    return client


@pytest.fixture
def controller(store, directory):
    return EventRosterController(store, directory)
