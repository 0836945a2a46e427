"""
Demo implementation of SearchService using in-memory records.

This service is useful for:
- Local development without the operations backend
- Testing the list screens with realistic data
- Exercising request races through simulated latency

It applies the same filter semantics the backend does: free-text search
over searchable terms, an inclusive date range, destination and consignor
equality, consignee membership, and excludeIds for select-all bulk requests.
"""

import asyncio
from typing import Sequence

from freight_ui.data import DEMO_CONSIGNMENTS, DEMO_TRIP_SHEETS
from freight_ui.engine.errors import NetworkFailure
from freight_ui.lib import logs
from freight_ui.models.common import BulkRequest, PageResult
from freight_ui.models.filters import FilterCriteria
from freight_ui.models.records import ListResource, Record
from freight_ui.services.search_service import SearchService
from freight_ui.utils import matches_query

LOG = logs.logger(__file__)


def matches_criteria(record: Record, criteria: FilterCriteria) -> bool:
    """Return True when a record falls inside the criteria's universe."""
    if not matches_query(record.searchable_terms(), criteria.search):
        return False
    record_date = record.record_date
    if criteria.start_date and (
        record_date is None or record_date < criteria.start_date
    ):
        return False
    if criteria.end_date and (record_date is None or record_date > criteria.end_date):
        return False
    if (
        criteria.destination
        and record.destination.lower() != criteria.destination.lower()
    ):
        return False
    if criteria.consignor and record.consignor_id != criteria.consignor:
        return False
    if criteria.consignees and record.consignee_id not in criteria.consignees:
        return False
    return True


class DemoSearchService(SearchService):
    """
    In-memory search service backed by seeded demo records.

    Attributes:
        latency: Seconds to sleep before answering each call.
    """

    def __init__(
        self,
        consignments: Sequence[Record] | None = None,
        trip_sheets: Sequence[Record] | None = None,
        latency: float = 0.0,
    ) -> None:
        """
        Initialize with record data.

        Args:
            consignments: Records for the gc and loading resources, or None
                to use DEMO_CONSIGNMENTS.
            trip_sheets: Records for the tripsheet resource, or None to use
                DEMO_TRIP_SHEETS.
            latency: Simulated response delay in seconds.
        """
        self.latency = latency
        self._consignments = list(
            DEMO_CONSIGNMENTS if consignments is None else consignments
        )
        self._trip_sheets = list(
            DEMO_TRIP_SHEETS if trip_sheets is None else trip_sheets
        )
        self.calls: list[tuple[str, str]] = []

    async def search(
        self,
        resource: ListResource,
        criteria: FilterCriteria,
        page: int = 1,
        page_size: int = 10,
    ) -> PageResult[Record]:
        """Return a slice of the records matching the criteria."""
        await self._respond("search", resource)
        page, page_size = max(page, 1), max(page_size, 1)
        matched = self._apply_filter(resource, criteria)
        start = (page - 1) * page_size
        return PageResult.of(
            items=matched[start : start + page_size],
            total_items=len(matched),
            page=page,
            page_size=page_size,
        )

    async def list_ids(
        self, resource: ListResource, criteria: FilterCriteria
    ) -> list[str]:
        """Return every identifier matching the criteria."""
        await self._respond("list_ids", resource)
        return [record.record_id for record in self._apply_filter(resource, criteria)]

    async def fetch_bulk(
        self, resource: ListResource, request: BulkRequest
    ) -> Sequence[Record]:
        """Return the records a resolved bulk selection stands for."""
        await self._respond("fetch_bulk", resource)
        if request.select_all:
            return [
                record
                for record in self._apply_filter(resource, request.filter_criteria)
                if record.record_id not in request.exclude_ids
            ]
        wanted = set(request.ids or ())
        return [r for r in self._records(resource) if r.record_id in wanted]

    async def delete(self, resource: ListResource, record_id: str) -> None:
        """Remove a record from the in-memory store."""
        await self._respond("delete", resource)
        records = self._records(resource)
        for index, record in enumerate(records):
            if record.record_id == record_id:
                del records[index]
                LOG.info("Deleted %s %s", resource.name, record_id)
                return
        raise NetworkFailure(f"{resource.title} #{record_id} not found", status=404)

    def _records(self, resource: ListResource) -> list[Record]:
        return self._trip_sheets if resource.name == "tripsheet" else self._consignments

    def _apply_filter(
        self, resource: ListResource, criteria: FilterCriteria
    ) -> list[Record]:
        """Filter then order newest first, as the backend does."""
        matched = [r for r in self._records(resource) if matches_criteria(r, criteria)]
        matched.sort(key=lambda r: r.record_id)
        matched.sort(
            key=lambda r: r.record_date.toordinal() if r.record_date else 0,
            reverse=True,
        )
        return matched

    async def _respond(self, operation: str, resource: ListResource) -> None:
        self.calls.append((operation, resource.name))
        if self.latency:
            await asyncio.sleep(self.latency)
