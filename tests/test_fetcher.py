"""Tests for freight_ui/engine/fetcher.py."""

import asyncio

import pytest

from freight_ui.engine.errors import NetworkFailure
from freight_ui.engine.fetcher import CancellationToken, PageFetcher
from freight_ui.models.common import PageResult
from freight_ui.models.filters import FilterCriteria
from freight_ui.services.search_service import SearchService


class ScriptedService(SearchService):
    """Answers each search after a per-query delay, optionally failing."""

    def __init__(self, delays=None, failures=None):
        self.delays = delays or {}
        self.failures = failures or {}

    async def search(self, resource, criteria, page=1, page_size=10):
        await asyncio.sleep(self.delays.get(criteria.search, 0))
        if criteria.search in self.failures:
            raise self.failures[criteria.search]
        return PageResult.of([criteria.search], 1, page, page_size)

    async def list_ids(self, resource, criteria):
        raise NotImplementedError

    async def fetch_bulk(self, resource, request):
        raise NotImplementedError

    async def delete(self, resource, record_id):
        raise NotImplementedError


def _search(text: str) -> FilterCriteria:
    return FilterCriteria(search=text)


class TestCancellationToken:
    def test_cancel(self):
        token = CancellationToken(1)
        assert not token.canceled
        token.cancel()
        assert token.canceled


class TestPageFetcher:
    async def test_fetch_returns_page(self, gc):
        fetcher = PageFetcher(ScriptedService(), gc)
        page = await fetcher.fetch(_search("a"), 2, 5)
        assert page.items == ("a",)
        assert page.page == 2
        assert not fetcher.in_flight

    async def test_late_response_is_dropped(self, gc):
        """A slow request answered after a newer one never applies."""
        fetcher = PageFetcher(ScriptedService(delays={"a": 0.2, "b": 0.01}), gc)
        slow = asyncio.create_task(fetcher.fetch(_search("a"), 1, 10))
        await asyncio.sleep(0.02)
        fast = await fetcher.fetch(_search("b"), 1, 10)
        assert fast.items == ("b",)
        assert await slow is None

    async def test_late_failure_is_dropped(self, gc):
        service = ScriptedService(
            delays={"a": 0.1},
            failures={"a": NetworkFailure("backend down")},
        )
        fetcher = PageFetcher(service, gc)
        slow = asyncio.create_task(fetcher.fetch(_search("a"), 1, 10))
        await asyncio.sleep(0.02)
        assert (await fetcher.fetch(_search("b"), 1, 10)).items == ("b",)
        assert await slow is None

    async def test_current_failure_raises(self, gc):
        service = ScriptedService(failures={"a": NetworkFailure("down", status=503)})
        fetcher = PageFetcher(service, gc)
        with pytest.raises(NetworkFailure) as exc_info:
            await fetcher.fetch(_search("a"), 1, 10)
        assert exc_info.value.status == 503

    async def test_unexpected_error_becomes_network_failure(self, gc):
        service = ScriptedService(failures={"a": RuntimeError("socket closed")})
        fetcher = PageFetcher(service, gc)
        with pytest.raises(NetworkFailure, match="socket closed"):
            await fetcher.fetch(_search("a"), 1, 10)

    async def test_cancel_aborts_in_flight_request(self, gc):
        fetcher = PageFetcher(ScriptedService(delays={"a": 1}), gc)
        pending = asyncio.create_task(fetcher.fetch(_search("a"), 1, 10))
        await asyncio.sleep(0.01)
        assert fetcher.in_flight
        fetcher.cancel()
        assert await pending is None
        assert not fetcher.in_flight
