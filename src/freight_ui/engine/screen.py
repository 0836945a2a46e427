"""
Per-screen state for a freight list screen.

ListScreen is the single object a list screen owns: the raw filter state,
the debounced committed filter, the page fetcher, the selection engine and
the bulk resolver. One is constructed when a screen mounts and closed when
it unmounts, which cancels the debounce timer, the page fetch and every
other backend call still pending. Results that arrive after teardown are
dropped.

Control flow:

    set_filters() -> DebouncedQuery -> commit -> page 1 -> PageFetcher
    SelectionEngine <- committed filter + server total + visible ids
    BulkResolver    <- SelectionState -> SearchService.fetch_bulk()

Precondition failures become transient notices and leave the selection as
it was. Network failures empty the page and produce a retryable notice.
"""

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

from freight_ui.engine.bulk import BulkResolver
from freight_ui.engine.debounce import DebouncedQuery
from freight_ui.engine.errors import (
    CountMismatch,
    NetworkFailure,
    RequestCanceled,
    SelectionError,
)
from freight_ui.engine.fetcher import PageFetcher
from freight_ui.engine.selection import SelectionEngine
from freight_ui.lib import logs
from freight_ui.models.common import (
    BulkRequest,
    Notice,
    PageResult,
    PaginationState,
    ScreenSummary,
)
from freight_ui.models.filters import FilterCriteria
from freight_ui.models.records import ListResource, Record
from freight_ui.services.search_service import SearchService

LOG = logs.logger(__file__)

T = TypeVar("T")


class ListScreen:
    """
    Filter, page and selection state of one list screen instance.

    Attributes:
        service: Backend search service.
        resource: List resource shown by the screen.
        filters: Raw filter criteria as edited by the user.
        pagination: Current page, page size and totals.
        page: The rendered page.
        notice: Last transient notice for the user.
        print_jobs: Records prepared by the last print action.
    """

    def __init__(
        self,
        service: SearchService,
        resource: ListResource,
        page_size: int = 10,
        debounce: float = 0.5,
    ) -> None:
        self.service = service
        self.resource = resource
        self.filters = FilterCriteria()
        self.pagination = PaginationState(page_size=max(page_size, 1))
        self.page: PageResult[Record] = PageResult.empty(1, self.pagination.page_size)
        self.notice: Notice | None = None
        self.print_jobs: list[Record] = []
        self.loading = False

        self._closed = False
        self._pending: set[asyncio.Future] = set()
        self._page_criteria: FilterCriteria | None = None
        self.query = DebouncedQuery(self.filters, self._on_commit, delay=debounce)
        self.fetcher = PageFetcher(service, resource)
        self.selection = SelectionEngine(
            committed_criteria=lambda: self.query.committed,
            total_items=self._committed_total,
            enumerate_ids=self._enumerate_ids,
        )
        self.resolver = BulkResolver(service, resource)

    @property
    def committed(self) -> FilterCriteria:
        return self.query.committed

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def visible_ids(self) -> list[str]:
        return [record.record_id for record in self.page.items]

    # Filters

    def set_filters(self, **changes: Any) -> None:
        """Edit filter dimensions; the change commits after the quiet period."""
        self.set_criteria(self.filters.replace(**changes))

    def set_date_preset(self, kind: str) -> None:
        self.set_criteria(self.filters.with_date_preset(kind))

    def set_criteria(self, criteria: FilterCriteria) -> None:
        self.filters = criteria
        self.query.update(criteria)

    async def apply_filters(self) -> None:
        """Commit pending filter edits immediately."""
        await self.query.flush()

    async def clear_filters(self) -> None:
        """Reset every filter, commit at once and start a fresh selection."""
        self.filters = FilterCriteria()
        self.selection.clear()
        self.query.update(self.filters)
        await self.query.flush()

    async def _on_commit(self, criteria: FilterCriteria) -> None:
        self.pagination.page = 1
        await self.load()

    # Paging

    async def load(self) -> bool:
        """
        Fetch the current page for the committed filter.

        Returns:
            True if a page was applied, False if the request was superseded
            or failed.
        """
        if self._closed:
            return False
        criteria = self.query.committed
        page, page_size = self.pagination.page, self.pagination.page_size
        self.loading = True
        try:
            result = await self.fetcher.fetch(criteria, page, page_size)
        except NetworkFailure as e:
            LOG.warning("Load %s page %s failed: %s", self.resource.name, page, e)
            self._apply_page(PageResult.empty(page, page_size), criteria)
            self.notice = Notice("error", str(e), retryable=True)
            return False
        finally:
            self.loading = self.fetcher.in_flight
        if result is None:
            return False
        self._apply_page(result, criteria)
        return True

    async def refresh(self) -> bool:
        """Re-fetch the current page (also the retry action)."""
        return await self.load()

    async def go_to_page(self, page: int) -> bool:
        self.pagination.page = self.pagination.clamp(page)
        return await self.load()

    async def set_page_size(self, page_size: int) -> bool:
        self.pagination.page_size = max(page_size, 1)
        self.pagination.page = 1
        return await self.load()

    def _apply_page(self, result: PageResult[Record], criteria: FilterCriteria) -> None:
        self.page = result
        self._page_criteria = criteria
        self.pagination.total = result.total_items
        self.pagination.pages = result.total_pages

    def _committed_total(self) -> int:
        # The total only describes the committed filter once its page arrived.
        if self._page_criteria != self.query.committed:
            return 0
        return self.page.total_items

    async def _enumerate_ids(self, criteria: FilterCriteria) -> list[str]:
        return await self._call(self.service.list_ids, self.resource, criteria)

    async def _call(self, fn: Callable[..., Awaitable[T]], *args: Any) -> T:
        """
        Run a backend call that close() can abort.

        Raises:
            RequestCanceled: The screen was closed before the call finished.
        """
        if self._closed:
            raise RequestCanceled(f"{self.resource.name} screen closed")
        task = asyncio.ensure_future(fn(*args))
        self._pending.add(task)
        try:
            result = await task
        except (asyncio.CancelledError, NetworkFailure):
            if self._closed:
                raise RequestCanceled(f"{self.resource.name} screen closed") from None
            raise
        finally:
            self._pending.discard(task)
        if self._closed:
            raise RequestCanceled(f"{self.resource.name} screen closed")
        return result

    # Selection

    def toggle_row(self, item_id: str, checked: bool) -> None:
        self.selection.toggle(item_id, checked)

    def toggle_visible_page(self, checked: bool) -> None:
        self.selection.toggle_visible_page(self.visible_ids, checked)

    def select_all_matching(self) -> bool:
        """Select every item matching the committed filter."""
        try:
            snapshot = self.selection.enter_all_matching()
        except SelectionError as e:
            self.notice = Notice("error", str(e))
            return False
        self.notice = Notice("info", f"Selected all {snapshot.total_at_capture} items.")
        return True

    def clear_selection(self) -> None:
        self.selection.clear()

    async def exclude_by_active_criteria(self) -> int:
        """
        Exclude the items scoped by the active filter (or the visible page).

        Returns:
            Number of identifiers excluded, 0 on failure.
        """
        try:
            count = await self.selection.exclude_by_active_criteria(self.visible_ids)
        except SelectionError as e:
            self.notice = Notice("info", str(e))
            return 0
        except NetworkFailure as e:
            self.notice = Notice("error", str(e), retryable=True)
            return 0
        except RequestCanceled:
            return 0
        self.notice = Notice("success", f"Excluded {count} items from bulk selection.")
        return count

    # Bulk actions

    async def print_selected(self) -> list[Record]:
        """Fetch the records of the current selection for printing."""
        if not self.selection.can_bulk:
            self.notice = Notice(
                "error", f"No {self.resource.title} selected for printing."
            )
            return []
        try:
            records = list(
                await self._call(self.resolver.fetch_records, self.selection.state)
            )
        except NetworkFailure as e:
            self.notice = Notice(
                "error", f"Error loading print data: {e}", retryable=True
            )
            return []
        except CountMismatch as e:
            self.notice = Notice("error", f"Print refused: {e}.")
            return []
        except RequestCanceled:
            return []
        if not records:
            self.notice = Notice(
                "error", f"No {self.resource.title} matched the selection."
            )
            return []
        self.print_jobs = records
        self.notice = Notice("success", f"Prepared {len(records)} print job(s).")
        return records

    async def print_single(self, item_id: str) -> list[Record]:
        """Fetch one record for printing, independent of the selection."""
        request = BulkRequest(ids=(item_id,), expected_count=1)
        try:
            records = list(
                await self._call(self.service.fetch_bulk, self.resource, request)
            )
        except NetworkFailure as e:
            self.notice = Notice(
                "error", f"Error loading print data: {e}", retryable=True
            )
            return []
        except RequestCanceled:
            return []
        if not records:
            self.notice = Notice("error", "Failed to load data for printing.")
            return []
        self.print_jobs = records
        return records

    async def delete(self, item_id: str) -> bool:
        """Delete one record, drop it from the selection and reload the page."""
        try:
            await self._call(self.service.delete, self.resource, item_id)
        except NetworkFailure as e:
            LOG.error("Delete %s %s failed: %s", self.resource.name, item_id, e)
            self.notice = Notice("error", f"Failed to delete #{item_id}.")
            return False
        except RequestCanceled:
            return False
        self.selection.forget(item_id)
        self.notice = Notice("success", f"#{item_id} deleted successfully.")
        await self.load()
        return True

    async def delete_selected(self) -> int:
        """
        Delete every selected record.

        All-matching selections are expanded by the backend bulk endpoint
        first. Nothing is deleted when the backend returns a different
        number of records than selected. Deletion stops at the first failure.

        Returns:
            Number of records deleted.
        """
        if not self.selection.can_bulk:
            self.notice = Notice("error", "Nothing is selected.")
            return 0
        try:
            records = await self._call(
                self.resolver.fetch_records, self.selection.state
            )
        except NetworkFailure as e:
            self.notice = Notice("error", str(e), retryable=True)
            return 0
        except CountMismatch as e:
            self.notice = Notice("error", f"Delete refused: {e}.")
            return 0
        except RequestCanceled:
            return 0

        deleted: list[str] = []
        failure: NetworkFailure | None = None
        for record in records:
            try:
                await self._call(self.service.delete, self.resource, record.record_id)
            except NetworkFailure as e:
                failure = e
                break
            except RequestCanceled:
                return len(deleted)
            deleted.append(record.record_id)

        if failure is None:
            self.selection.clear()
            self.notice = Notice("success", f"Deleted {len(deleted)} records.")
        else:
            for item_id in deleted:
                self.selection.forget(item_id)
            self.notice = Notice(
                "error", f"Deleted {len(deleted)} records, then failed: {failure}"
            )
        await self.load()
        return len(deleted)

    def dismiss_notice(self) -> None:
        self.notice = None

    # Rendering

    def summary(self) -> ScreenSummary:
        """Build the read-only view consumed by the UI."""
        visible = self.visible_ids
        snapshot = self.selection.snapshot
        return ScreenSummary(
            rows=[record.to_row() for record in self.page.items],
            visible_selected=[i for i in visible if self.selection.is_selected(i)],
            pagination=PaginationState(
                page=self.pagination.page,
                page_size=self.pagination.page_size,
                total=self.pagination.total,
                pages=self.pagination.pages,
            ),
            selected_count=self.selection.final_count(),
            all_selected=self.selection.is_all_selected,
            page_checked=self.selection.is_all_visible_selected(visible),
            page_indeterminate=self.selection.is_indeterminate_for_visible_page(
                visible
            ),
            all_matching=self.selection.state.is_all_matching,
            snapshot_total=snapshot.total_at_capture if snapshot else 0,
            filters_active=self.committed.is_active(),
            loading=self.loading,
            banner=self.selection.banner,
            notice=self.notice,
        )

    async def close(self) -> None:
        """Tear down: cancel the debounce timer and every pending request."""
        self._closed = True
        self.query.cancel()
        self.fetcher.cancel()
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self.loading = False
        LOG.debug("Closed %s screen", self.resource.name)


async def open_screen(
    service: SearchService, resource: ListResource, **kwargs: Any
) -> ListScreen:
    """Construct a screen and load its first page."""
    screen = ListScreen(service, resource, **kwargs)
    await screen.load()
    return screen
