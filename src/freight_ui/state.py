"""
Reflex state management for the freight list screens.

This module binds one ListScreen per client session to the Reflex state that
renders it. The screen owns every piece of fetch and selection logic; the
state class only forwards UI events and copies the screen summary into
Reflex vars.

Filter edits run as background events: they update the screen, wait for the
debounced commit, and sync the vars only when their edit is the one that
committed, so a superseded keystroke never overwrites a newer page.
"""

import os
from typing import Awaitable, Callable

import reflex as rx

from freight_ui.engine.registry import ScreenRegistry
from freight_ui.engine.screen import ListScreen
from freight_ui.lib import logs
from freight_ui.models.records import RESOURCES, get_resource
from freight_ui.services import get_search_service

LOG = logs.logger(__file__)

# Configuration from environment
PAGE_SIZE = int(os.getenv("FREIGHT_UI_PAGE_SIZE", "10"))
DEBOUNCE_SECONDS = int(os.getenv("FREIGHT_UI_DEBOUNCE_MS", "500")) / 1000
PAGE_SIZE_OPTIONS = ["10", "25", "50", "100"]

DEFAULT_RESOURCE = "gc"

# One screen per client token; idle or surplus screens are evicted
_SCREENS = ScreenRegistry(
    max_screens=int(os.getenv("FREIGHT_UI_MAX_SCREENS", "256")),
    idle_seconds=float(os.getenv("FREIGHT_UI_SCREEN_IDLE_S", "1800")),
)


def _new_screen(resource_name: str) -> ListScreen:
    return ListScreen(
        get_search_service(),
        get_resource(resource_name),
        page_size=PAGE_SIZE,
        debounce=DEBOUNCE_SECONDS,
    )


async def _open(token: str, resource_name: str) -> ListScreen:
    screen, created = await _SCREENS.open(token, resource_name, _new_screen)
    if created:
        LOG.info("Opened %s screen for client %s", resource_name, token)
        await screen.load()
    return screen


async def _close(token: str) -> None:
    await _SCREENS.close(token)


def _consignees(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(","))


class ListScreenState(rx.State):
    """
    Rendered state of the active list screen.

    Vars mirror ListScreen.summary(); filter inputs mirror the raw (not yet
    committed) filter criteria.
    """

    resource_name: str = DEFAULT_RESOURCE
    title: str = RESOURCES[DEFAULT_RESOURCE].title

    # Raw filter inputs
    search: str = ""
    date_filter: str = "all"
    start_date: str = ""
    end_date: str = ""
    destination: str = ""
    consignor: str = ""
    consignee: str = ""

    # Page
    rows: list[dict[str, str]] = []
    page: int = 1
    pages: int = 0
    total: int = 0
    page_size: int = PAGE_SIZE
    is_loading: bool = True
    filters_active: bool = False

    # Selection
    selected_ids: list[str] = []
    selected_count: int = 0
    all_selected: bool = False
    page_checked: bool = False
    page_indeterminate: bool = False
    all_matching: bool = False
    snapshot_total: int = 0
    banner_active: bool = False
    banner_label: str = ""
    banner_count: int = 0

    # Notices and print jobs
    notice_level: str = ""
    notice_message: str = ""
    notice_retryable: bool = False
    print_rows: list[dict[str, str]] = []

    @rx.var
    def result_summary(self) -> str:
        """Generate summary text for the rendered page."""
        noun = "item" if self.total == 1 else "items"
        if self.pages <= 0:
            return f"{self.total} {noun} found"
        return f"{self.total} {noun} found - page {self.page} of {self.pages}"

    @rx.var
    def is_empty(self) -> bool:
        return not self.is_loading and len(self.rows) == 0

    @rx.var
    def has_previous(self) -> bool:
        return self.page > 1

    @rx.var
    def has_next(self) -> bool:
        return self.page < self.pages

    @rx.var
    def bulk_label(self) -> str:
        return f"Print Selected ({self.selected_count})"

    @rx.var
    def is_custom_range(self) -> bool:
        return self.date_filter == "custom"

    def _token(self) -> str:
        return self.router.session.client_token

    def _screen(self) -> ListScreen | None:
        return _SCREENS.get(self._token())

    def _sync(self, screen: ListScreen) -> None:
        """Copy the screen summary into vars."""
        summary = screen.summary()
        self.rows = summary.rows
        self.page = summary.pagination.page
        self.pages = summary.pagination.pages
        self.total = summary.pagination.total
        self.page_size = summary.pagination.page_size
        self.is_loading = summary.loading
        self.filters_active = summary.filters_active
        self.selected_ids = summary.visible_selected
        self.selected_count = summary.selected_count
        self.all_selected = summary.all_selected
        self.page_checked = summary.page_checked
        self.page_indeterminate = summary.page_indeterminate
        self.all_matching = summary.all_matching
        self.snapshot_total = summary.snapshot_total
        self.banner_active = summary.banner.active
        self.banner_label = summary.banner.label or ""
        self.banner_count = summary.banner.count
        notice = summary.notice
        self.notice_level = notice.level if notice else ""
        self.notice_message = notice.message if notice else ""
        self.notice_retryable = notice.retryable if notice else False

    def _sync_filters(self, screen: ListScreen) -> None:
        criteria = screen.filters
        self.search = criteria.search
        self.date_filter = criteria.date_filter
        self.start_date = criteria.start_date.isoformat() if criteria.start_date else ""
        self.end_date = criteria.end_date.isoformat() if criteria.end_date else ""
        self.destination = criteria.destination
        self.consignor = criteria.consignor
        self.consignee = ", ".join(criteria.consignees)

    async def _edit(self, edit: Callable[[ListScreen], None]) -> None:
        """Apply a filter edit and sync once the debounced commit lands."""
        async with self:
            screen = self._screen()
            if screen is None:
                return
            edit(screen)
            self._sync_filters(screen)
            self.is_loading = True
        if await screen.query.wait():
            async with self:
                self._sync(screen)

    async def _run(self, action: Callable[[ListScreen], Awaitable[object]]) -> None:
        """Run a screen coroutine from a background event and sync."""
        async with self:
            screen = self._screen()
            if screen is None:
                return
            self.is_loading = True
        await action(screen)
        async with self:
            self._sync(screen)

    # Lifecycle

    @rx.event(background=True)
    async def open_resource(self, resource_name: str):
        """Mount the list screen for a resource (page on_load)."""
        async with self:
            resource = get_resource(resource_name)
            token = self._token()
            self.resource_name = resource.name
            self.title = resource.title
            self.rows = []
            self.print_rows = []
            self.is_loading = True
        screen = await _open(token, resource.name)
        async with self:
            self._sync_filters(screen)
            self._sync(screen)

    @rx.event(background=True)
    async def close_resource(self):
        """Tear down the client's screen (page on_unmount)."""
        async with self:
            token = self._token()
        await _close(token)

    # Filters

    @rx.event(background=True)
    async def set_search(self, value: str):
        await self._edit(lambda screen: screen.set_filters(search=value))

    @rx.event(background=True)
    async def set_destination(self, value: str):
        await self._edit(lambda screen: screen.set_filters(destination=value.strip()))

    @rx.event(background=True)
    async def set_consignor(self, value: str):
        await self._edit(lambda screen: screen.set_filters(consignor=value.strip()))

    @rx.event(background=True)
    async def set_consignee(self, value: str):
        consignees = _consignees(value)
        await self._edit(lambda screen: screen.set_filters(consignees=consignees))

    @rx.event(background=True)
    async def set_date_filter(self, kind: str):
        if kind == "custom":
            await self._edit(
                lambda screen: screen.set_criteria(
                    screen.filters.with_custom_range(
                        screen.filters.start_date, screen.filters.end_date
                    )
                )
            )
        else:
            await self._edit(lambda screen: screen.set_date_preset(kind))

    @rx.event(background=True)
    async def set_start_date(self, value: str):
        await self._edit(
            lambda screen: screen.set_criteria(
                screen.filters.with_custom_range(value or None, screen.filters.end_date)
            )
        )

    @rx.event(background=True)
    async def set_end_date(self, value: str):
        await self._edit(
            lambda screen: screen.set_criteria(
                screen.filters.with_custom_range(
                    screen.filters.start_date, value or None
                )
            )
        )

    @rx.event(background=True)
    async def apply_filters(self):
        await self._run(lambda screen: screen.apply_filters())

    @rx.event(background=True)
    async def clear_filters(self):
        await self._run(lambda screen: screen.clear_filters())
        async with self:
            screen = self._screen()
            if screen is not None:
                self._sync_filters(screen)

    # Paging

    @rx.event(background=True)
    async def refresh(self):
        await self._run(lambda screen: screen.refresh())

    @rx.event(background=True)
    async def next_page(self):
        await self._run(lambda screen: screen.go_to_page(screen.pagination.page + 1))

    @rx.event(background=True)
    async def previous_page(self):
        await self._run(lambda screen: screen.go_to_page(screen.pagination.page - 1))

    @rx.event(background=True)
    async def set_page_size(self, value: str):
        await self._run(lambda screen: screen.set_page_size(int(value)))

    # Selection

    @rx.event
    def toggle_row(self, item_id: str, checked: bool):
        screen = self._screen()
        if screen is not None:
            screen.toggle_row(item_id, checked)
            self._sync(screen)

    @rx.event
    def toggle_page(self, checked: bool):
        screen = self._screen()
        if screen is not None:
            screen.toggle_visible_page(checked)
            self._sync(screen)

    @rx.event
    def select_all_matching(self):
        screen = self._screen()
        if screen is not None:
            screen.select_all_matching()
            self._sync(screen)

    @rx.event
    def clear_selection(self):
        screen = self._screen()
        if screen is not None:
            screen.clear_selection()
            self._sync(screen)

    @rx.event(background=True)
    async def exclude_filtered(self):
        await self._run(lambda screen: screen.exclude_by_active_criteria())

    # Bulk actions

    @rx.event(background=True)
    async def print_selected(self):
        await self._run(lambda screen: screen.print_selected())
        async with self:
            self._sync_print_rows()

    @rx.event(background=True)
    async def print_single(self, item_id: str):
        await self._run(lambda screen: screen.print_single(item_id))
        async with self:
            self._sync_print_rows()

    @rx.event(background=True)
    async def delete_row(self, item_id: str):
        await self._run(lambda screen: screen.delete(item_id))

    @rx.event(background=True)
    async def delete_selected(self):
        await self._run(lambda screen: screen.delete_selected())

    def _sync_print_rows(self) -> None:
        screen = self._screen()
        self.print_rows = [r.to_row() for r in screen.print_jobs] if screen else []

    @rx.event
    def close_print_preview(self):
        self.print_rows = []

    @rx.event
    def dismiss_notice(self):
        screen = self._screen()
        if screen is not None:
            screen.dismiss_notice()
            self._sync(screen)
