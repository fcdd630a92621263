"""Shared fixtures for the PvP tests."""

import pytest

from fakes import RecordingSocketIO, entry
from pvp_arena.profiles import InMemoryProfileStore
from pvp_arena.publisher import ResultPublisher
from pvp_arena.state import SessionRegistry


@pytest.fixture
def socketio():
    return RecordingSocketIO()


@pytest.fixture
def profiles():
    store = InMemoryProfileStore()
    store.add_player("alice", "Alice", 120)
    store.add_player("bob", "Bob", 80)
    store.add_player("carol", "Carol", 40)
    store.add_player("dave", "Dave", 300)
    return store


@pytest.fixture
def publisher(socketio, profiles):
    return ResultPublisher(socketio, profiles, run_async=False)


@pytest.fixture
def registry(publisher, profiles):
    return SessionRegistry(publisher, profiles, seed_source=lambda: 42)


@pytest.fixture
def make_entry():
    return entry
