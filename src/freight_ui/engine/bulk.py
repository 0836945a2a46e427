"""
Resolution of a selection into bulk-action payloads.

A Manual selection resolves to its literal identifiers. An AllMatching
selection resolves to the snapshot filter plus the excluded identifiers and
is expanded by the backend; the universe is never enumerated client side.
"""

from typing import Sequence

from freight_ui.engine.errors import CountMismatch, NothingSelected
from freight_ui.lib import logs, objects
from freight_ui.models.common import BulkRequest, SelectionState
from freight_ui.models.records import ListResource, Record
from freight_ui.services.search_service import SearchService

LOG = logs.logger(__file__)


def resolve_selection(state: SelectionState) -> BulkRequest:
    """
    Turn a selection state into a BulkRequest.

    Args:
        state: Selection to resolve.

    Returns:
        BulkRequest carrying either explicit ids or a filter descriptor, and
        the logical count the backend is expected to return.
    """
    expected = state.logical_count
    if state.is_all_matching:
        return BulkRequest(
            filter_criteria=state.snapshot.filter_criteria,
            exclude_ids=state.excluded_ids,
            expected_count=expected,
        )
    return BulkRequest(ids=tuple(sorted(state.included_ids)), expected_count=expected)


class BulkResolver:
    """
    Executes resolved selections against the backend bulk endpoint.

    Attributes:
        service: Backend search service.
        resource: The list resource the selection belongs to.
    """

    def __init__(self, service: SearchService, resource: ListResource) -> None:
        self.service = service
        self.resource = resource

    def resolve(self, state: SelectionState) -> BulkRequest:
        """
        Resolve a selection, refusing empty ones.

        Raises:
            NothingSelected: The logical count is zero.
        """
        if state.logical_count <= 0:
            raise NothingSelected()
        return resolve_selection(state)

    async def fetch_records(
        self, state: SelectionState, strict: bool = True
    ) -> Sequence[Record]:
        """
        Fetch the full records a selection stands for.

        Args:
            state: Selection to resolve.
            strict: Raise CountMismatch when the backend returns a different
                number of records than the logical count. When False the
                mismatch is only logged.

        Returns:
            Records in backend order.

        Raises:
            CountMismatch: The record count differs and strict is set.
        """
        request = self.resolve(state)
        LOG.debug(
            "Resolving %s selection %s: %s",
            self.resource.name,
            objects.to_json(state.to_dict()),
            objects.to_json(request.to_payload(self.resource.ids_key)),
        )
        records = await self.service.fetch_bulk(self.resource, request)
        if len(records) != request.expected_count:
            LOG.warning(
                "Bulk %s count mismatch - expected:%s returned:%s",
                self.resource.name,
                request.expected_count,
                len(records),
            )
            if strict:
                raise CountMismatch(request.expected_count, len(records))
        return records
