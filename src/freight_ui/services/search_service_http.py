"""
aiohttp implementation of SearchService for the operations REST backend.

Endpoints (relative to FREIGHT_UI_API_URL):
- GET    {path}?{filters}&page=P&limit=N      -> {data, page, pages, total}
- POST   {path}/print-data                    -> [record, ...]
- DELETE {path}/{id}

The id enumeration reuses the print-data endpoint with selectAll and a
zero page size, collecting only the identifier field of each record.

Query parameters with a None value are dropped and list values are sent as
repeated parameters (consignee=a&consignee=b). Non-2xx responses and
transport errors raise NetworkFailure.
"""

import asyncio
from typing import Any, Mapping, Sequence

import aiohttp

from freight_ui.engine.errors import NetworkFailure
from freight_ui.lib import logs, objects
from freight_ui.models.common import BulkRequest, PageResult
from freight_ui.models.filters import FilterCriteria
from freight_ui.models.records import ListResource, Record
from freight_ui.services.search_service import SearchService

LOG = logs.logger(__file__)

_USER_AGENT = "freight-ui/0.1.0"


def encode_params(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """
    Flatten query parameters into key/value pairs.

    None values are skipped and sequences become repeated keys.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, str(v)) for v in value)
        elif isinstance(value, bool):
            pairs.append((key, "true" if value else "false"))
        else:
            pairs.append((key, str(value)))
    return pairs


def parse_page(
    resource: ListResource, body: Mapping[str, Any], page: int, page_size: int
) -> PageResult[Record]:
    """Convert a paged search response body into a PageResult."""
    items = [resource.parse(item) for item in body.get("data") or []]
    pages = body.get("pages")
    return PageResult.of(
        items=items,
        total_items=int(body.get("total") or 0),
        page=int(body.get("page") or page),
        page_size=page_size,
        total_pages=int(pages) if pages is not None else None,
    )


def _records_from(body: Any) -> list[Mapping[str, Any]]:
    """Bulk endpoints answer with a bare list or with {data: [...]}."""
    if isinstance(body, list):
        return body
    if isinstance(body, Mapping):
        return list(body.get("data") or [])
    return []


class HttpSearchService(SearchService):
    """
    Search service backed by the operations REST API.

    Attributes:
        base_url: API root, e.g. https://host/api.
        timeout: Total timeout in seconds for each request.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"User-Agent": _USER_AGENT, **(headers or {})}
        self._session: aiohttp.ClientSession | None = None

    async def search(
        self,
        resource: ListResource,
        criteria: FilterCriteria,
        page: int = 1,
        page_size: int = 10,
    ) -> PageResult[Record]:
        params = {**criteria.to_params(), "page": page, "limit": page_size}
        body = await self._request("GET", resource.path, params=params)
        return parse_page(resource, body or {}, page, page_size)

    async def list_ids(
        self, resource: ListResource, criteria: FilterCriteria
    ) -> list[str]:
        payload = {
            resource.ids_key: [],
            "selectAll": True,
            "filters": {**criteria.to_params(), "page": 1, "perPage": 0},
        }
        body = await self._request("POST", resource.bulk_path, json_data=payload)
        ids = []
        for item in _records_from(body):
            value = item.get(resource.id_field)
            if value is not None and value != "":
                ids.append(str(value))
        return ids

    async def fetch_bulk(
        self, resource: ListResource, request: BulkRequest
    ) -> Sequence[Record]:
        payload = request.to_payload(resource.ids_key)
        LOG.info("Bulk request %s: %s", resource.name, objects.to_json(payload))
        body = await self._request("POST", resource.bulk_path, json_data=payload)
        return [resource.parse(item) for item in _records_from(body)]

    async def delete(self, resource: ListResource, record_id: str) -> None:
        await self._request("DELETE", resource.item_path(record_id))

    async def close(self) -> None:
        """Close the shared session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def _request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        json_data: Any = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with self._get_session().request(
                method,
                url,
                params=encode_params(params or {}),
                json=json_data,
            ) as resp:
                if resp.status >= 400:
                    text = await resp.text()
                    raise NetworkFailure(
                        f"HTTP {resp.status} from {method} {path}: {text[:200]}",
                        status=resp.status,
                    )
                if resp.status == 204 or resp.content_length == 0:
                    return None
                return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            LOG.warning(
                "Request failed %s %s: %s: %s", method, path, type(e).__name__, e
            )
            raise NetworkFailure(f"Request failed {method} {path}: {e}") from e
