"""Tests for freight_ui/engine/registry.py."""

import pytest

from freight_ui.engine.registry import ScreenRegistry
from freight_ui.engine.screen import ListScreen
from freight_ui.models.records import RESOURCES

DEBOUNCE = 0.05


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def factory(service):
    def build(resource_name: str) -> ListScreen:
        return ListScreen(service, RESOURCES[resource_name], debounce=DEBOUNCE)

    return build


@pytest.fixture
def registry(clock) -> ScreenRegistry:
    return ScreenRegistry(max_screens=3, idle_seconds=60, clock=clock)


class TestOpen:
    async def test_same_resource_reuses_screen(self, registry, factory):
        first, created = await registry.open("a", "gc", factory)
        assert created
        second, created = await registry.open("a", "gc", factory)
        assert not created
        assert second is first

    async def test_other_resource_replaces_screen(self, registry, factory):
        first, _ = await registry.open("a", "gc", factory)
        second, created = await registry.open("a", "tripsheet", factory)
        assert created
        assert first.closed
        assert registry.get("a") is second
        assert len(registry) == 1

    async def test_close_removes_screen(self, registry, factory):
        screen, _ = await registry.open("a", "gc", factory)
        await registry.close("a")
        assert screen.closed
        assert "a" not in registry
        assert registry.get("a") is None


class TestEviction:
    async def test_vanished_client_is_evicted_when_idle(
        self, registry, factory, clock
    ):
        """A client that never unmounts does not stay open forever."""
        abandoned, _ = await registry.open("a", "gc", factory)
        clock.now = 61
        await registry.open("b", "gc", factory)
        assert abandoned.closed
        assert "a" not in registry
        assert len(registry) == 1

    async def test_use_keeps_screen_alive(self, registry, factory, clock):
        screen, _ = await registry.open("a", "gc", factory)
        clock.now = 50
        assert registry.get("a") is screen
        clock.now = 100
        await registry.open("b", "gc", factory)
        assert not screen.closed
        assert len(registry) == 2

    async def test_least_recently_used_is_evicted_when_full(
        self, registry, factory, clock
    ):
        screens = {}
        for token in ("a", "b", "c"):
            screens[token], _ = await registry.open(token, "gc", factory)
        registry.get("a")
        await registry.open("d", "gc", factory)
        assert screens["b"].closed
        assert not screens["a"].closed
        assert len(registry) == 3

    async def test_sweep_and_close_all(self, registry, factory, clock):
        await registry.open("a", "gc", factory)
        clock.now = 30
        await registry.open("b", "gc", factory)
        clock.now = 70
        assert await registry.sweep() == 1
        assert "b" in registry
        await registry.close_all()
        assert len(registry) == 0
