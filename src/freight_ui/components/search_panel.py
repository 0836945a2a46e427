"""
Search panel component for the freight list screens.

Provides the search input, date presets, custom date range and the
destination, consignor and consignee filters. Every edit is forwarded to
the screen's debounced query; Apply commits at once.
"""

import reflex as rx

from freight_ui.models.filters import DATE_PRESETS
from freight_ui.state import ListScreenState


def search_panel() -> rx.Component:
    """
    Build the search panel with text search and filters.

    Returns:
        The search panel component.
    """
    return rx.box(
        rx.box(
            rx.icon("search", class_name="input-icon"),
            rx.input(
                placeholder="Search by GC number, party, place, contents...",
                value=ListScreenState.search,
                on_change=ListScreenState.set_search,
                class_name="search-input",
                width="100%",
            ),
            class_name="input-with-icon",
        ),
        rx.hstack(
            rx.select(
                list(DATE_PRESETS),
                value=ListScreenState.date_filter,
                on_change=ListScreenState.set_date_filter,
            ),
            rx.cond(
                ListScreenState.is_custom_range,
                rx.hstack(
                    rx.input(
                        type="date",
                        value=ListScreenState.start_date,
                        on_change=ListScreenState.set_start_date,
                    ),
                    rx.input(
                        type="date",
                        value=ListScreenState.end_date,
                        on_change=ListScreenState.set_end_date,
                    ),
                ),
            ),
            _filter_input(
                "Destination",
                ListScreenState.destination,
                ListScreenState.set_destination,
            ),
            _filter_input(
                "Consignor id",
                ListScreenState.consignor,
                ListScreenState.set_consignor,
            ),
            _filter_input(
                "Consignee ids",
                ListScreenState.consignee,
                ListScreenState.set_consignee,
            ),
            rx.button("Apply", on_click=ListScreenState.apply_filters, variant="soft"),
            rx.cond(
                ListScreenState.filters_active,
                rx.button(
                    "Clear",
                    on_click=ListScreenState.clear_filters,
                    variant="outline",
                ),
            ),
            spacing="2",
            wrap="wrap",
            margin_top="0.75rem",
        ),
        class_name="card search-card",
    )


def _filter_input(placeholder: str, value, on_change) -> rx.Component:
    return rx.input(
        placeholder=placeholder, value=value, on_change=on_change, width="10rem"
    )
