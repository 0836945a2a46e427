"""
Data-fetch and bulk-selection engine shared by the freight list screens.

Modules:
- errors: Error taxonomy (selection preconditions, network, cancellation)
- debounce: DebouncedQuery, trailing-edge debounce of filter criteria
- fetcher: PageFetcher, one cancellable page request at a time
- selection: SelectionEngine, Manual and AllMatching selection
- bulk: BulkResolver, selection to bulk-action payloads
- screen: ListScreen, the per-screen owner of all of the above
- registry: ScreenRegistry, open screens per client with idle eviction
"""

from freight_ui.engine.errors import (
    AlreadyAllMatching,
    CountMismatch,
    EmptyUniverse,
    FreightUiError,
    NetworkFailure,
    NoMatches,
    NothingSelected,
    NothingToExclude,
    RequestCanceled,
    SelectionError,
)
from freight_ui.engine.debounce import DebouncedQuery
from freight_ui.engine.fetcher import CancellationToken, PageFetcher
from freight_ui.engine.bulk import BulkResolver, resolve_selection
from freight_ui.engine.selection import SelectionEngine
from freight_ui.engine.screen import ListScreen, open_screen
from freight_ui.engine.registry import ScreenRegistry

__all__ = [
    "AlreadyAllMatching",
    "BulkResolver",
    "CancellationToken",
    "CountMismatch",
    "DebouncedQuery",
    "EmptyUniverse",
    "FreightUiError",
    "ListScreen",
    "NetworkFailure",
    "NoMatches",
    "NothingSelected",
    "NothingToExclude",
    "PageFetcher",
    "RequestCanceled",
    "ScreenRegistry",
    "SelectionEngine",
    "SelectionError",
    "open_screen",
    "resolve_selection",
]
