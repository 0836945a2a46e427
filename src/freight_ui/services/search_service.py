"""
Abstract base class defining the backend search contract.

Every list screen talks to the backend only through these operations:

- search(): one page of records for a filter (paged search)
- list_ids(): every identifier matching a filter (unpaged id enumeration)
- fetch_bulk(): full records for a resolved bulk selection
- delete(): remove a single record

Implementations:
- DemoSearchService: in-memory seeded records for development and tests
- HttpSearchService: aiohttp client for the operations REST backend
"""

from abc import ABC, abstractmethod
from typing import Sequence

from freight_ui.models.common import BulkRequest, PageResult
from freight_ui.models.filters import FilterCriteria
from freight_ui.models.records import ListResource, Record


class SearchService(ABC):
    """
    Abstract base class for list-resource data access.

    All methods are coroutines so callers can cancel them; implementations
    raise NetworkFailure for transport and backend errors.
    """

    @abstractmethod
    async def search(
        self,
        resource: ListResource,
        criteria: FilterCriteria,
        page: int = 1,
        page_size: int = 10,
    ) -> PageResult[Record]:
        """
        Return one page of records matching the criteria.

        Args:
            resource: List resource to query.
            criteria: Filter criteria; default dimensions are not sent.
            page: Page number (1-indexed).
            page_size: Number of records per page.
        """

    @abstractmethod
    async def list_ids(
        self, resource: ListResource, criteria: FilterCriteria
    ) -> list[str]:
        """
        Return the identifiers of every record matching the criteria.

        Args:
            resource: List resource to query.
            criteria: Filter criteria scoping the enumeration.
        """

    @abstractmethod
    async def fetch_bulk(
        self, resource: ListResource, request: BulkRequest
    ) -> Sequence[Record]:
        """
        Return full records for a resolved bulk selection.

        For explicit id lists the backend returns exactly those records; for
        select-all requests it re-runs the filter and subtracts exclude_ids.

        Args:
            resource: List resource to query.
            request: Resolved bulk selection.
        """

    @abstractmethod
    async def delete(self, resource: ListResource, record_id: str) -> None:
        """
        Delete one record.

        Args:
            resource: List resource owning the record.
            record_id: Identifier of the record.
        """

    async def close(self) -> None:
        """Release any network resources. Default implementation does nothing."""
        return None
