"""
Cancellable page fetching.

PageFetcher keeps at most one request in flight. Starting a new fetch
cancels the previous request's token and task; a request whose token was
cancelled never produces a result or an error for its caller, even if the
backend answers after the cancellation.
"""

import asyncio

from freight_ui.engine.errors import NetworkFailure, RequestCanceled
from freight_ui.lib import logs
from freight_ui.models.common import PageResult
from freight_ui.models.filters import FilterCriteria
from freight_ui.models.records import ListResource, Record
from freight_ui.services.search_service import SearchService

LOG = logs.logger(__file__)


class CancellationToken:
    """Marks a single request as superseded."""

    __slots__ = ("request_id", "_canceled")

    def __init__(self, request_id: int) -> None:
        self.request_id = request_id
        self._canceled = False

    @property
    def canceled(self) -> bool:
        return self._canceled

    def cancel(self) -> None:
        self._canceled = True


class PageFetcher:
    """
    Fetches one page of a list resource at a time.

    Attributes:
        service: Backend search service.
        resource: The list resource being paged.
    """

    def __init__(self, service: SearchService, resource: ListResource) -> None:
        self.service = service
        self.resource = resource
        self._request_seq = 0
        self._token: CancellationToken | None = None
        self._task: asyncio.Task | None = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Cancel the current request, if any."""
        if self._token is not None:
            self._token.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def fetch(
        self, criteria: FilterCriteria, page: int, page_size: int
    ) -> PageResult[Record] | None:
        """
        Fetch a page, superseding any request still in flight.

        Args:
            criteria: Committed filter criteria.
            page: Page number (1-indexed).
            page_size: Number of records per page.

        Returns:
            The page, or None when this request was superseded before it
            completed.

        Raises:
            NetworkFailure: The request is still current and the backend failed.
        """
        self.cancel()
        self._request_seq += 1
        token = CancellationToken(self._request_seq)
        task = asyncio.ensure_future(
            self.service.search(
                self.resource, criteria, max(page, 1), max(page_size, 1)
            )
        )
        self._token, self._task = token, task
        LOG.debug(
            "Fetch #%s %s page:%s size:%s filters:%s",
            token.request_id,
            self.resource.name,
            page,
            page_size,
            criteria.key(),
        )

        try:
            return await self._await_current(token, task)
        except RequestCanceled:
            LOG.debug("Fetch #%s superseded", token.request_id)
            return None
        finally:
            if self._task is task:
                self._task = None

    async def _await_current(
        self, token: CancellationToken, task: asyncio.Future
    ) -> PageResult[Record]:
        try:
            result = await task
        except asyncio.CancelledError:
            if token.canceled:
                raise RequestCanceled(token.request_id) from None
            raise
        except NetworkFailure:
            if token.canceled:
                raise RequestCanceled(token.request_id) from None
            raise
        except Exception as e:
            if token.canceled:
                raise RequestCanceled(token.request_id) from None
            LOG.error("Fetch #%s failed: %s", token.request_id, e, exc_info=True)
            raise NetworkFailure(str(e) or type(e).__name__) from e
        if token.canceled:
            raise RequestCanceled(token.request_id)
        return result
