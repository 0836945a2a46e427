"""
Service factory for the freight list screens.

This module provides the get_search_service() factory that returns the
SearchService implementation selected by configuration.

Available Implementations:
- demo: In-memory service with seeded consignments and trip sheets
- http: aiohttp client for the operations REST backend

Configure via environment variables:
- FREIGHT_UI_SERVICE: demo (default) or http
- FREIGHT_UI_API_URL: API root used by the http service
- FREIGHT_UI_DEMO_LATENCY_MS: simulated latency of the demo service
"""

import os
from functools import cache
from typing import Callable, Dict

from freight_ui.lib import logs
from freight_ui.services.search_service import SearchService
from freight_ui.services.search_service_demo import DemoSearchService
from freight_ui.services.search_service_http import HttpSearchService

LOG = logs.logger(__file__)

_DEFAULT_API_URL = "http://localhost:5000/api"


def _demo() -> SearchService:
    latency_ms = int(os.getenv("FREIGHT_UI_DEMO_LATENCY_MS", "0"))
    return DemoSearchService(latency=latency_ms / 1000)


def _http() -> SearchService:
    return HttpSearchService(os.getenv("FREIGHT_UI_API_URL", _DEFAULT_API_URL))


_SERVICE_REGISTRY: Dict[str, Callable[[], SearchService]] = {
    "demo": _demo,
    "http": _http,
}


@cache
def get_search_service(kind: str | None = None) -> SearchService:
    """Return the configured search service implementation."""
    resolved_kind = (kind or os.getenv("FREIGHT_UI_SERVICE", "demo")).lower()
    LOG.info("get_search_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown search service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "DemoSearchService",
    "HttpSearchService",
    "SearchService",
    "get_search_service",
]
