"""Tests for the application startup and shutdown hooks."""

import pytest

from shorturl import main
from shorturl.store.base import StoreError
from shorturl.store.memory import InMemoryMappingStore


class RecordingStore(InMemoryMappingStore):
    """In-memory store recording lifecycle calls."""

    def __init__(self, reachable: bool = True, broken_schema: bool = False):
        super().__init__()
        self.reachable = reachable
        self.broken_schema = broken_schema
        self.closed = False

    async def ping(self) -> bool:
        return self.reachable

    async def initialize(self) -> None:
        if self.broken_schema:
            raise StoreError("cannot create tables")

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def restore_state():
    previous = getattr(main.app.state, "store", None)
    yield
    main.app.state.store = previous


class TestStartup:

    @pytest.mark.asyncio
    async def test_store_is_attached(self, monkeypatch, restore_state):
        store = RecordingStore()
        monkeypatch.setattr(main, "build_store", lambda settings: store)

        await main.startup_event()

        assert main.app.state.store is store
        assert store.closed is False

    @pytest.mark.asyncio
    async def test_unreachable_store_is_closed(self, monkeypatch, restore_state):
        store = RecordingStore(reachable=False)
        monkeypatch.setattr(main, "build_store", lambda settings: store)

        with pytest.raises(RuntimeError):
            await main.startup_event()

        assert store.closed is True

    @pytest.mark.asyncio
    async def test_failed_initialization_closes_store(self, monkeypatch, restore_state):
        store = RecordingStore(broken_schema=True)
        monkeypatch.setattr(main, "build_store", lambda settings: store)

        with pytest.raises(StoreError):
            await main.startup_event()

        assert store.closed is True

    @pytest.mark.asyncio
    async def test_shutdown_closes_store(self, restore_state):
        store = RecordingStore()
        main.app.state.store = store

        await main.shutdown_event()

        assert store.closed is True
