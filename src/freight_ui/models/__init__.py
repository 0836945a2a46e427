"""
Data models for the freight list screens.

This package provides:
- Filter criteria (FilterCriteria, date presets)
- Record types (Consignment, TripSheet) and list resources
- Page, selection and bulk-request state

All models use Python dataclasses; selection values are frozen.
"""

from freight_ui.models.common import (
    BulkRequest,
    ExclusionBanner,
    Notice,
    PageResult,
    PaginationState,
    ScreenSummary,
    SelectionMode,
    SelectionSnapshot,
    SelectionState,
)
from freight_ui.models.filters import DATE_PRESETS, FilterCriteria
from freight_ui.models.records import (
    RESOURCES,
    Consignment,
    ListResource,
    Record,
    TripSheet,
    get_resource,
)

__all__ = [
    "BulkRequest",
    "Consignment",
    "DATE_PRESETS",
    "ExclusionBanner",
    "FilterCriteria",
    "ListResource",
    "Notice",
    "PageResult",
    "PaginationState",
    "RESOURCES",
    "Record",
    "ScreenSummary",
    "SelectionMode",
    "SelectionSnapshot",
    "SelectionState",
    "TripSheet",
    "get_resource",
]
