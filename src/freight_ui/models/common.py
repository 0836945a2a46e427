"""
Common state models for the freight list screens.

This module defines the value objects shared by the fetch layer, the
selection engine and the UI:

- PageResult: one page of records plus the server-reported totals
- SelectionSnapshot / SelectionState: the authoritative selection model
- BulkRequest: the resolved payload a bulk action sends to the backend
- Notice / ExclusionBanner: transient user-visible feedback

Selection values are frozen; every transition builds a new SelectionState
so a failed operation can never leave a partially mutated selection behind.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Sequence, TypeVar

from freight_ui.models.filters import FilterCriteria
from freight_ui.utils import page_count

T = TypeVar("T")


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """
    A single page of results in server-determined order.

    Attributes:
        items: Records on this page.
        total_items: Total number of records matching the filter.
        total_pages: Number of pages at this page size.
        page: Page number (1-indexed).
        page_size: Number of records per page.
    """

    items: Sequence[T] = ()
    total_items: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int = 10

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "total_items", max(int(self.total_items), 0))
        object.__setattr__(self, "total_pages", max(int(self.total_pages), 0))

    @classmethod
    def of(
        cls,
        items: Sequence[T],
        total_items: int,
        page: int,
        page_size: int,
        total_pages: int | None = None,
    ) -> "PageResult[T]":
        """Build a page, deriving total_pages when the backend omitted it."""
        if total_pages is None:
            total_pages = page_count(total_items, page_size)
        return cls(
            items=items,
            total_items=total_items,
            total_pages=total_pages,
            page=page,
            page_size=page_size,
        )

    @classmethod
    def empty(cls, page: int = 1, page_size: int = 10) -> "PageResult[T]":
        """The page shown after a failed fetch."""
        return cls(page=page, page_size=page_size)

    @property
    def has_more(self) -> bool:
        """Return True when additional pages are available."""
        return self.page < self.total_pages


@dataclass
class PaginationState:
    """
    Tracks pagination state for a list screen.

    Attributes:
        page: Current page number (1-indexed).
        page_size: Number of items per page.
        total: Total number of items available.
        pages: Total number of pages available.
    """

    page: int = 1
    page_size: int = 10
    total: int = 0
    pages: int = 0

    def clamp(self, page: int) -> int:
        """Clamp a requested page into the valid range."""
        return min(max(page, 1), max(self.pages, 1))


class SelectionMode(str, Enum):
    MANUAL = "manual"
    ALL_MATCHING = "all_matching"


@dataclass(frozen=True)
class SelectionSnapshot:
    """
    Frozen copy of the filter and total captured at select-all time.

    Later filter edits do not touch it; it is only replaced by clearing the
    selection and selecting all again.
    """

    filter_criteria: FilterCriteria
    total_at_capture: int

    def to_dict(self) -> dict:
        return {
            "filter_criteria": self.filter_criteria.to_dict(),
            "total_at_capture": self.total_at_capture,
        }


@dataclass(frozen=True)
class SelectionState:
    """
    The authoritative selection model.

    Manual mode tracks explicitly included identifiers. AllMatching mode
    selects the whole universe of a snapshot minus explicitly excluded
    identifiers. Construction enforces that the two modes never mix.

    Attributes:
        mode: Current selection mode.
        included_ids: Selected identifiers (Manual mode only).
        excluded_ids: Carved-out identifiers (AllMatching mode only).
        snapshot: Select-all snapshot (AllMatching mode only).
    """

    mode: SelectionMode = SelectionMode.MANUAL
    included_ids: frozenset[str] = frozenset()
    excluded_ids: frozenset[str] = frozenset()
    snapshot: SelectionSnapshot | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "included_ids", frozenset(self.included_ids))
        object.__setattr__(self, "excluded_ids", frozenset(self.excluded_ids))
        if self.mode is SelectionMode.MANUAL:
            if self.snapshot is not None or self.excluded_ids:
                raise ValueError(
                    "Manual selection cannot carry a snapshot or exclusions"
                )
        elif self.snapshot is None or self.included_ids:
            raise ValueError(
                "All-matching selection needs a snapshot and no inclusions"
            )

    @classmethod
    def manual(cls, included_ids: frozenset[str] = frozenset()) -> "SelectionState":
        return cls(mode=SelectionMode.MANUAL, included_ids=included_ids)

    @classmethod
    def all_matching(
        cls,
        snapshot: SelectionSnapshot,
        excluded_ids: frozenset[str] = frozenset(),
    ) -> "SelectionState":
        return cls(
            mode=SelectionMode.ALL_MATCHING,
            excluded_ids=excluded_ids,
            snapshot=snapshot,
        )

    @property
    def is_all_matching(self) -> bool:
        return self.mode is SelectionMode.ALL_MATCHING

    @property
    def logical_count(self) -> int:
        """Number of logically selected items, recomputed on every access."""
        if self.is_all_matching:
            return max(0, self.snapshot.total_at_capture - len(self.excluded_ids))
        return len(self.included_ids)

    def contains(self, item_id: str) -> bool:
        if self.is_all_matching:
            return item_id not in self.excluded_ids
        return item_id in self.included_ids

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        return {
            "mode": self.mode.value,
            "included_ids": sorted(self.included_ids),
            "excluded_ids": sorted(self.excluded_ids),
            "snapshot": self.snapshot.to_dict() if self.snapshot else None,
        }


@dataclass(frozen=True)
class BulkRequest:
    """
    Resolved payload for a bulk action.

    Manual selections carry the literal identifier list. All-matching
    selections carry the snapshot filter plus the excluded identifiers; the
    backend re-runs the filter and subtracts the exclusions.

    Attributes:
        ids: Explicit identifiers (Manual mode), else None.
        filter_criteria: Snapshot filter (AllMatching mode), else None.
        exclude_ids: Identifiers to subtract from the filter result.
        expected_count: Logical count computed just before resolution.
    """

    ids: tuple[str, ...] | None = None
    filter_criteria: FilterCriteria | None = None
    exclude_ids: frozenset[str] = frozenset()
    expected_count: int = 0

    @property
    def select_all(self) -> bool:
        return self.filter_criteria is not None

    def to_payload(self, ids_key: str) -> dict[str, Any]:
        """
        Render the body of a bulk request.

        Args:
            ids_key: Key the endpoint expects explicit ids under (gcNos, mfNos).
        """
        if not self.select_all:
            return {ids_key: list(self.ids or ()), "selectAll": False}
        filters = self.filter_criteria.to_params()
        if self.exclude_ids:
            filters["excludeIds"] = sorted(self.exclude_ids)
        return {ids_key: [], "selectAll": True, "filters": filters}


@dataclass(frozen=True)
class Notice:
    """Transient user-visible message."""

    level: str = "info"
    message: str = ""
    retryable: bool = False


@dataclass(frozen=True)
class ExclusionBanner:
    """Banner shown after rows were excluded from a bulk selection."""

    active: bool = False
    label: str | None = None
    count: int = 0


@dataclass
class ScreenSummary:
    """
    Read-only view of a list screen used for rendering.

    Attributes:
        rows: Display rows of the rendered page.
        visible_selected: Identifiers on the rendered page that are selected.
        pagination: Page, size and totals.
        selected_count: Logical selected count (bulk button label).
        all_selected: Whole universe selected.
        page_checked: Page checkbox checked.
        page_indeterminate: Page checkbox indeterminate.
        all_matching: Selection is in AllMatching mode.
        snapshot_total: Total captured at select-all time, else 0.
        filters_active: Any committed filter dimension is set.
        loading: A page request is in flight.
        banner: Exclusion banner.
        notice: Last transient notice.
    """

    rows: list[dict[str, str]] = field(default_factory=list)
    visible_selected: list[str] = field(default_factory=list)
    pagination: PaginationState = field(default_factory=PaginationState)
    selected_count: int = 0
    all_selected: bool = False
    page_checked: bool = False
    page_indeterminate: bool = False
    all_matching: bool = False
    snapshot_total: int = 0
    filters_active: bool = False
    loading: bool = False
    banner: ExclusionBanner = field(default_factory=ExclusionBanner)
    notice: Notice | None = None
