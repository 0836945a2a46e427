"""Tests for freight_ui/services/search_service_http.py against a local aiohttp app."""

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from freight_ui.engine.errors import NetworkFailure
from freight_ui.models.common import BulkRequest
from freight_ui.models.filters import FilterCriteria
from freight_ui.models.records import RESOURCES
from freight_ui.services.search_service_http import (
    HttpSearchService,
    encode_params,
    parse_page,
)

GC_PAYLOADS = [
    {"gcNo": "1001", "gcDate": "2024-06-01T00:00:00.000Z", "consignorId": "C001"},
    {"gcNo": "1006", "gcDate": "2024-06-02T00:00:00.000Z", "consignorId": "C001"},
]


class Backend:
    """Records requests made to the fake operations API."""

    def __init__(self):
        self.requests: list[tuple[str, str, list, object]] = []
        self.search_status = 200

    async def search(self, request: web.Request) -> web.Response:
        self.requests.append(("GET", request.path, list(request.query.items()), None))
        if self.search_status != 200:
            return web.Response(status=self.search_status, text="boom")
        return web.json_response({"data": GC_PAYLOADS, "page": 1, "total": 2})

    async def print_data(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.requests.append(("POST", request.path, [], body))
        return web.json_response(GC_PAYLOADS)

    async def delete(self, request: web.Request) -> web.Response:
        self.requests.append(("DELETE", request.path, [], None))
        if request.match_info["gc_no"] == "missing":
            return web.json_response({"message": "not found"}, status=404)
        return web.Response(status=204)


@pytest_asyncio.fixture
async def backend():
    backend = Backend()
    app = web.Application()
    app.router.add_get("/api/operations/gc", backend.search)
    app.router.add_post("/api/operations/gc/print-data", backend.print_data)
    app.router.add_delete("/api/operations/gc/{gc_no}", backend.delete)
    server = TestServer(app)
    await server.start_server()
    service = HttpSearchService(str(server.make_url("/api")))
    yield backend, service
    await service.close()
    await server.close()


class TestEncoding:
    def test_encode_params(self):
        pairs = encode_params(
            {"search": "x", "consignee": ["E001", "E002"], "skip": None, "all": True}
        )
        assert pairs == [
            ("search", "x"),
            ("consignee", "E001"),
            ("consignee", "E002"),
            ("all", "true"),
        ]

    def test_parse_page_derives_pages(self):
        body = {"data": GC_PAYLOADS, "total": 21, "page": 2}
        page = parse_page(RESOURCES["gc"], body, 2, 10)
        assert page.total_pages == 3
        assert [r.record_id for r in page.items] == ["1001", "1006"]

    def test_parse_page_keeps_reported_pages(self):
        page = parse_page(RESOURCES["gc"], {"data": [], "total": 0, "pages": 0}, 1, 10)
        assert page.total_pages == 0
        assert page.items == ()


class TestHttpSearchService:
    async def test_search_params(self, backend):
        backend, service = backend
        criteria = FilterCriteria(consignor="C001", consignees=("E002", "E001"))
        page = await service.search(RESOURCES["gc"], criteria, 1, 10)
        assert page.total_items == 2
        assert page.items[0].consignor_id == "C001"
        method, path, query, _ = backend.requests[0]
        assert (method, path) == ("GET", "/api/operations/gc")
        assert query == [
            ("consignor", "C001"),
            ("consignee", "E001"),
            ("consignee", "E002"),
            ("page", "1"),
            ("limit", "10"),
        ]

    async def test_fetch_bulk_select_all_payload(self, backend):
        backend, service = backend
        request = BulkRequest(
            filter_criteria=FilterCriteria(consignor="C001"),
            exclude_ids=frozenset({"1011"}),
            expected_count=2,
        )
        records = await service.fetch_bulk(RESOURCES["gc"], request)
        assert len(records) == 2
        assert backend.requests[0][3] == {
            "gcNos": [],
            "selectAll": True,
            "filters": {"consignor": "C001", "excludeIds": ["1011"]},
        }

    async def test_list_ids(self, backend):
        backend, service = backend
        ids = await service.list_ids(RESOURCES["gc"], FilterCriteria(consignor="C001"))
        assert ids == ["1001", "1006"]
        payload = backend.requests[0][3]
        assert payload["selectAll"] is True
        assert payload["filters"]["perPage"] == 0

    async def test_delete(self, backend):
        backend, service = backend
        await service.delete(RESOURCES["gc"], "1001")
        assert backend.requests[0][:2] == ("DELETE", "/api/operations/gc/1001")

    async def test_delete_not_found(self, backend):
        backend, service = backend
        with pytest.raises(NetworkFailure) as exc_info:
            await service.delete(RESOURCES["gc"], "missing")
        assert exc_info.value.status == 404

    async def test_server_error(self, backend):
        backend, service = backend
        backend.search_status = 500
        with pytest.raises(NetworkFailure) as exc_info:
            await service.search(RESOURCES["gc"], FilterCriteria())
        assert exc_info.value.status == 500
        assert exc_info.value.retryable

    async def test_connection_refused(self):
        service = HttpSearchService("http://127.0.0.1:9", timeout=2)
        try:
            with pytest.raises(NetworkFailure):
                await service.search(RESOURCES["gc"], FilterCriteria())
        finally:
            await service.close()
