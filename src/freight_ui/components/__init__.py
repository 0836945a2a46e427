"""
Reflex UI components for the freight list screens.

This package provides modular, composable components:
- search_panel: Search input, date presets and categorical filters
- selection_bar: Select-all, exclusion and bulk action controls
- results: Paged results table with row and page checkboxes

All components are pure functions that return Reflex components bound to
ListScreenState.
"""

from freight_ui.components.results import list_results
from freight_ui.components.search_panel import search_panel
from freight_ui.components.selection_bar import notice_bar, selection_bar

__all__ = [
    "list_results",
    "notice_bar",
    "search_panel",
    "selection_bar",
]
