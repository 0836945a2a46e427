"""
Pytest configuration and fixtures for freight-ui tests.
"""

import pytest
import pytest_asyncio

from freight_ui.engine.screen import ListScreen
from freight_ui.models.records import RESOURCES, ListResource
from freight_ui.services.search_service_demo import DemoSearchService

# Short quiet period so debounce tests stay fast
DEBOUNCE = 0.05


@pytest.fixture
def gc() -> ListResource:
    return RESOURCES["gc"]


@pytest.fixture
def tripsheet() -> ListResource:
    return RESOURCES["tripsheet"]


@pytest.fixture
def service() -> DemoSearchService:
    """A fresh demo service; deletes never leak between tests."""
    return DemoSearchService()


@pytest_asyncio.fixture
async def screen(service: DemoSearchService, gc: ListResource):
    """A loaded gc screen over the demo service, closed after the test."""
    screen = ListScreen(service, gc, page_size=10, debounce=DEBOUNCE)
    await screen.load()
    yield screen
    await screen.close()
