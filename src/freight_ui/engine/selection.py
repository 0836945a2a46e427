"""
Bulk-selection engine for the freight list screens.

The engine tracks which logical items are selected independently of the
page currently rendered. It never holds records, only identifiers and
counts:

- Manual mode keeps the identifiers the user ticked.
- AllMatching mode keeps a frozen snapshot of the filter and its total at
  select-all time plus the identifiers carved out of that universe.

Every operation computes a complete new SelectionState and assigns it in one
step, so a failed precondition or a failed request leaves the previous
state untouched.
"""

from typing import Awaitable, Callable, Iterable

from freight_ui.engine.bulk import resolve_selection
from freight_ui.engine.errors import (
    AlreadyAllMatching,
    EmptyUniverse,
    NoMatches,
    NothingToExclude,
)
from freight_ui.lib import logs
from freight_ui.models.common import (
    BulkRequest,
    ExclusionBanner,
    SelectionSnapshot,
    SelectionState,
)
from freight_ui.models.filters import FilterCriteria

LOG = logs.logger(__file__)

MANUAL_EXCLUSION_LABEL = "Manual Selection"
PAGE_EXCLUSION_LABEL = "Visible Page"


class SelectionEngine:
    """
    Selection model for one list screen.

    Attributes:
        manual_exclusions: Identifiers excluded while in Manual mode. They
            are kept for display only and never affect selection, counts or
            resolution.
        banner: Exclusion banner state shown above the table.
    """

    def __init__(
        self,
        committed_criteria: Callable[[], FilterCriteria],
        total_items: Callable[[], int],
        enumerate_ids: Callable[[FilterCriteria], Awaitable[list[str]]],
    ) -> None:
        """
        Args:
            committed_criteria: Returns the currently committed filter.
            total_items: Returns the server-reported total for that filter.
            enumerate_ids: Unpaged id query for a filter.
        """
        self._committed_criteria = committed_criteria
        self._total_items = total_items
        self._enumerate_ids = enumerate_ids
        self._state = SelectionState()
        self.manual_exclusions: frozenset[str] = frozenset()
        self.banner = ExclusionBanner()

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def snapshot(self) -> SelectionSnapshot | None:
        return self._state.snapshot

    def is_selected(self, item_id: str) -> bool:
        return self._state.contains(item_id)

    def final_count(self) -> int:
        """Logical number of selected items."""
        return self._state.logical_count

    @property
    def can_bulk(self) -> bool:
        """True when a bulk action has something to act on."""
        return self.final_count() > 0

    @property
    def is_all_selected(self) -> bool:
        """True when every item of the universe is selected."""
        if self._state.is_all_matching:
            return not self._state.excluded_ids
        total = self._total_items()
        return total > 0 and len(self._state.included_ids) == total

    def is_all_visible_selected(self, visible_ids: Iterable[str]) -> bool:
        """Checked state of the page-level checkbox."""
        ids = list(visible_ids)
        return bool(ids) and all(self.is_selected(i) for i in ids)

    def is_indeterminate_for_visible_page(self, visible_ids: Iterable[str]) -> bool:
        """Indeterminate state of the page-level checkbox."""
        ids = list(visible_ids)
        selected = sum(1 for i in ids if self.is_selected(i))
        return 0 < selected < len(ids)

    def toggle(self, item_id: str, checked: bool) -> None:
        """Tick or untick a single row."""
        self._state = self._toggled(self._state, [item_id], checked)

    def toggle_visible_page(self, visible_ids: Iterable[str], checked: bool) -> None:
        """Tick or untick every row of the rendered page."""
        self._state = self._toggled(self._state, list(visible_ids), checked)

    def enter_all_matching(self) -> SelectionSnapshot:
        """
        Select every item matching the committed filter.

        The snapshot stays frozen until clear(); a second select-all in
        AllMatching mode is refused.

        Raises:
            AlreadyAllMatching: The selection is already in AllMatching mode.
            EmptyUniverse: The committed filter matches nothing.
        """
        if self._state.is_all_matching:
            raise AlreadyAllMatching()
        total = self._total_items()
        if total <= 0:
            raise EmptyUniverse()
        snapshot = SelectionSnapshot(
            filter_criteria=self._committed_criteria(),
            total_at_capture=total,
        )
        self._state = SelectionState.all_matching(snapshot)
        self.manual_exclusions = frozenset()
        self.banner = ExclusionBanner()
        LOG.info(
            "Select all - total:%s filters:%s",
            total,
            snapshot.filter_criteria.to_params(),
        )
        return snapshot

    def clear(self) -> None:
        """Reset to an empty Manual selection."""
        self._state = SelectionState()
        self.manual_exclusions = frozenset()
        self.banner = ExclusionBanner()

    async def exclude_by_active_criteria(self, visible_ids: Iterable[str]) -> int:
        """
        Carve items out of the selection.

        With any filter dimension active, every identifier matching the live
        committed filter is excluded (enumerated server side). Without an
        active filter only the rendered page can be scoped: all of it in
        AllMatching mode, its selected rows in Manual mode.

        Args:
            visible_ids: Identifiers of the rendered page.

        Returns:
            Number of identifiers newly excluded.

        Raises:
            NoMatches: The active filter matched no identifiers.
            NothingToExclude: Every scoped identifier is already out of the
                selection, or no filter is active and no eligible row is visible.
        """
        criteria = self._committed_criteria()
        if criteria.is_active():
            ids = frozenset(await self._enumerate_ids(criteria))
            if not ids:
                raise NoMatches()
            label = criteria.active_dimension_label()
        else:
            visible = list(visible_ids)
            if not self._state.is_all_matching:
                visible = [i for i in visible if i in self._state.included_ids]
            ids = frozenset(visible)
            if not ids:
                raise NothingToExclude()
            label = (
                PAGE_EXCLUSION_LABEL
                if self._state.is_all_matching
                else MANUAL_EXCLUSION_LABEL
            )

        state = self._state
        if state.is_all_matching:
            newly = ids - state.excluded_ids
        else:
            newly = ids & state.included_ids
        if not newly:
            raise NothingToExclude("The scoped items are already excluded.")
        if state.is_all_matching:
            self._state = SelectionState.all_matching(
                state.snapshot, state.excluded_ids | newly
            )
        else:
            self._state = SelectionState.manual(state.included_ids - newly)
            self.manual_exclusions = self.manual_exclusions | newly
        self.banner = ExclusionBanner(
            active=True,
            label=label,
            count=self.banner.count + len(newly),
        )
        LOG.info("Excluded %s ids (%s)", len(newly), self.banner.label)
        return len(newly)

    def forget(self, item_id: str) -> None:
        """
        Update the selection after a record was deleted.

        In AllMatching mode the deleted record is recorded as excluded when
        the committed filter is still the snapshot filter, which keeps the
        logical count equal to what the backend will return.
        """
        state = self._state
        if state.is_all_matching:
            if self._committed_criteria() == state.snapshot.filter_criteria:
                self._state = SelectionState.all_matching(
                    state.snapshot, state.excluded_ids | {item_id}
                )
        else:
            self._state = SelectionState.manual(state.included_ids - {item_id})
        self.manual_exclusions = self.manual_exclusions - {item_id}

    def resolve(self) -> BulkRequest:
        """Resolve the current selection into a bulk request."""
        return resolve_selection(self._state)

    @staticmethod
    def _toggled(
        state: SelectionState, ids: list[str], checked: bool
    ) -> SelectionState:
        if not ids:
            return state
        if state.is_all_matching:
            # Checked means "in the universe and not excluded".
            if checked:
                return SelectionState.all_matching(
                    state.snapshot, state.excluded_ids - set(ids)
                )
            return SelectionState.all_matching(
                state.snapshot, state.excluded_ids | set(ids)
            )
        if checked:
            return SelectionState.manual(state.included_ids | set(ids))
        return SelectionState.manual(state.included_ids - set(ids))
