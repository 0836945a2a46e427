"""
Results table component for the freight list screens.

Handles the paged table, the page and row checkboxes, the empty and loading
states, pagination controls and the print preview.
"""

import reflex as rx

from freight_ui.state import PAGE_SIZE_OPTIONS, ListScreenState

_COLUMNS = [
    ("number", "No."),
    ("date", "Date"),
    ("route", "Route"),
    ("party", "Party"),
    ("detail", "Detail"),
    ("amount", "Amount"),
]


def list_results() -> rx.Component:
    """
    Build the results container.

    Displays loading state, empty state, or the results table based on the
    current state.

    Returns:
        The results container component.
    """
    return rx.box(
        rx.cond(
            ListScreenState.is_empty,
            _empty(),
            _results(),
        ),
        _print_preview(),
        id="results-container",
    )


def _results() -> rx.Component:
    return rx.box(
        rx.hstack(
            rx.text(ListScreenState.result_summary, class_name="muted"),
            rx.cond(ListScreenState.is_loading, rx.spinner(size="1")),
            spacing="2",
            align="center",
            class_name="results-summary",
        ),
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    rx.table.column_header_cell(_page_checkbox(), width="2.5rem"),
                    *[rx.table.column_header_cell(label) for _, label in _COLUMNS],
                    rx.table.column_header_cell(""),
                ),
            ),
            rx.table.body(rx.foreach(ListScreenState.rows, _row)),
            variant="surface",
            width="100%",
        ),
        _pagination(),
        class_name="results",
    )


def _page_checkbox() -> rx.Component:
    """Page checkbox; an indeterminate page shows a dash that selects the page."""
    return rx.cond(
        ListScreenState.page_indeterminate,
        rx.icon_button(
            rx.icon("minus", size=12),
            on_click=ListScreenState.toggle_page(True),
            size="1",
            variant="soft",
        ),
        rx.checkbox(
            checked=ListScreenState.page_checked,
            on_change=ListScreenState.toggle_page,
        ),
    )


def _row(row: rx.Var[dict[str, str]]) -> rx.Component:
    return rx.table.row(
        rx.table.cell(
            rx.checkbox(
                checked=ListScreenState.selected_ids.contains(row["id"]),
                on_change=lambda checked: ListScreenState.toggle_row(
                    row["id"], checked
                ),
            ),
        ),
        *[rx.table.cell(row[key]) for key, _ in _COLUMNS],
        rx.table.cell(
            rx.hstack(
                rx.icon_button(
                    rx.icon("printer", size=14),
                    on_click=ListScreenState.print_single(row["id"]),
                    size="1",
                    variant="ghost",
                ),
                rx.icon_button(
                    rx.icon("trash-2", size=14),
                    on_click=ListScreenState.delete_row(row["id"]),
                    size="1",
                    variant="ghost",
                    color_scheme="red",
                ),
                spacing="1",
            ),
        ),
    )


def _pagination() -> rx.Component:
    return rx.hstack(
        rx.button(
            rx.icon("chevron-left", size=14),
            "Previous",
            on_click=ListScreenState.previous_page,
            disabled=~ListScreenState.has_previous,
            variant="soft",
        ),
        rx.text("Page ", ListScreenState.page, " of ", ListScreenState.pages),
        rx.button(
            "Next",
            rx.icon("chevron-right", size=14),
            on_click=ListScreenState.next_page,
            disabled=~ListScreenState.has_next,
            variant="soft",
        ),
        rx.spacer(),
        rx.select(
            PAGE_SIZE_OPTIONS,
            value=ListScreenState.page_size.to_string(),
            on_change=ListScreenState.set_page_size,
            size="1",
        ),
        align="center",
        spacing="3",
        margin_top="0.75rem",
    )


def _empty() -> rx.Component:
    """Build the empty state when nothing matches."""
    return rx.box(
        rx.icon("file-x", class_name="empty-icon", size=60),
        rx.heading("No items found", size="3", as_="h3"),
        rx.cond(
            ListScreenState.filters_active,
            rx.text("No results match the current filters.", class_name="muted"),
            rx.text("No items available.", class_name="muted"),
        ),
        class_name="card empty-state",
    )


def _print_preview() -> rx.Component:
    return rx.cond(
        ListScreenState.print_rows.length() > 0,
        rx.box(
            rx.hstack(
                rx.heading("Print jobs", size="3", as_="h3"),
                rx.spacer(),
                rx.button(
                    "Close",
                    on_click=ListScreenState.close_print_preview,
                    variant="outline",
                    size="1",
                ),
                align="center",
            ),
            rx.foreach(
                ListScreenState.print_rows,
                lambda row: rx.text(
                    row["number"], " - ", row["route"], " - ", row["amount"]
                ),
            ),
            class_name="card print-preview",
        ),
    )
