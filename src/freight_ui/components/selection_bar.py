"""
Selection and notice bars for the freight list screens.

The selection bar shows the logical selected count, the select-all and
exclusion controls and the bulk actions. The notice bar shows the last
transient notice with a retry button for network failures.
"""

import reflex as rx

from freight_ui.state import ListScreenState

_NOTICE_COLORS = {"success": "green", "error": "red", "info": "blue"}


def selection_bar() -> rx.Component:
    """
    Build the bulk selection toolbar.

    Returns:
        The selection bar component.
    """
    return rx.box(
        rx.hstack(
            rx.cond(
                ListScreenState.all_matching,
                rx.text(
                    "All ",
                    ListScreenState.snapshot_total,
                    " matching items selected, ",
                    ListScreenState.selected_count,
                    " after exclusions.",
                ),
                rx.text(ListScreenState.selected_count, " selected."),
            ),
            rx.spacer(),
            rx.cond(
                ListScreenState.all_matching | ListScreenState.all_selected,
                rx.button(
                    "Clear selection",
                    on_click=ListScreenState.clear_selection,
                    variant="outline",
                ),
                rx.button(
                    "Select all matching",
                    on_click=ListScreenState.select_all_matching,
                    variant="soft",
                ),
            ),
            rx.button(
                "Exclude filtered",
                on_click=ListScreenState.exclude_filtered,
                variant="soft",
                color_scheme="orange",
            ),
            rx.button(
                ListScreenState.bulk_label,
                on_click=ListScreenState.print_selected,
                disabled=ListScreenState.selected_count == 0,
            ),
            rx.button(
                "Delete selected",
                on_click=ListScreenState.delete_selected,
                disabled=ListScreenState.selected_count == 0,
                color_scheme="red",
                variant="outline",
            ),
            spacing="2",
            align="center",
            wrap="wrap",
        ),
        rx.cond(
            ListScreenState.banner_active,
            rx.callout(
                rx.text(
                    "Excluded by ",
                    ListScreenState.banner_label,
                    ": ",
                    ListScreenState.banner_count,
                    " items.",
                ),
                icon="filter-x",
                color_scheme="orange",
                size="1",
                margin_top="0.5rem",
            ),
        ),
        class_name="card selection-bar",
    )


def notice_bar() -> rx.Component:
    """Build the transient notice callout, hidden when there is no notice."""
    return rx.cond(
        ListScreenState.notice_message != "",
        rx.callout.root(
            rx.hstack(
                rx.callout.text(ListScreenState.notice_message),
                rx.spacer(),
                rx.cond(
                    ListScreenState.notice_retryable,
                    rx.button("Retry", on_click=ListScreenState.refresh, size="1"),
                ),
                rx.icon_button(
                    rx.icon("x", size=14),
                    on_click=ListScreenState.dismiss_notice,
                    size="1",
                    variant="ghost",
                ),
                align="center",
                width="100%",
            ),
            color_scheme=rx.match(
                ListScreenState.notice_level,
                *_NOTICE_COLORS.items(),
                "gray",
            ),
            class_name="notice",
        ),
    )
