"""
Reflex application entry point for the freight back-office list screens.

This module initializes the Reflex app and registers one page per list
resource. Each page mounts the client's ListScreen on load and tears it down
on unmount.
"""

import os

import reflex as rx

from freight_ui.components.results import list_results
from freight_ui.components.search_panel import search_panel
from freight_ui.components.selection_bar import notice_bar, selection_bar
from freight_ui.lib import logs
from freight_ui.models.records import RESOURCES
from freight_ui.state import DEFAULT_RESOURCE, ListScreenState

LOG = logs.logger(__file__)

# Configuration from environment
APP_PORT = int(os.getenv("FREIGHT_UI_PORT", "8000"))
LOG.info("FREIGHT_UI_SERVICE: %s", os.getenv("FREIGHT_UI_SERVICE", "demo"))

_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"


def page_header() -> rx.Component:
    """Build the title and the navigation between list screens."""
    return rx.box(
        rx.heading(ListScreenState.title, size="6", as_="h1"),
        rx.hstack(
            *[
                rx.link(resource.title, href=f"/{name}")
                for name, resource in RESOURCES.items()
            ],
            spacing="4",
        ),
        class_name="page-header",
    )


def index() -> rx.Component:
    """
    Build the list screen layout shared by every resource page.

    Returns:
        The complete page component with header, filters, selection and results.
    """
    return rx.box(
        rx.box(
            page_header(),
            search_panel(),
            notice_bar(),
            selection_bar(),
            list_results(),
            class_name="app-container",
        ),
        class_name="app-shell",
        on_unmount=ListScreenState.close_resource,
    )


# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[_FONT_URL],
)

app.add_page(
    index,
    route="/",
    title=RESOURCES[DEFAULT_RESOURCE].title,
    on_load=ListScreenState.open_resource(DEFAULT_RESOURCE),
)
for _name, _resource in RESOURCES.items():
    app.add_page(
        index,
        route=f"/{_name}",
        title=_resource.title,
        on_load=ListScreenState.open_resource(_name),
    )


def main() -> None:
    """Entrypoint used by the `freight-ui` console script."""
    # In production, use `reflex run` instead
    import subprocess
    import sys

    subprocess.run(
        [sys.executable, "-m", "reflex", "run", "--frontend-port", str(APP_PORT)]
    )


if __name__ == "__main__":
    main()
