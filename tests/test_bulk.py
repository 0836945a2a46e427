"""Tests for freight_ui/engine/bulk.py."""

import pytest

from freight_ui.engine.bulk import BulkResolver, resolve_selection
from freight_ui.engine.errors import CountMismatch, NothingSelected
from freight_ui.models.common import SelectionSnapshot, SelectionState
from freight_ui.models.filters import FilterCriteria

C001 = FilterCriteria(consignor="C001")


class TestResolveSelection:
    def test_manual_resolves_to_sorted_ids(self):
        request = resolve_selection(SelectionState.manual(frozenset({"1003", "1001"})))
        assert request.ids == ("1001", "1003")
        assert not request.select_all
        assert request.expected_count == 2
        assert request.to_payload("gcNos") == {
            "gcNos": ["1001", "1003"],
            "selectAll": False,
        }

    def test_all_matching_resolves_to_filter(self):
        state = SelectionState.all_matching(
            SelectionSnapshot(C001, 48), frozenset({"1006", "1001"})
        )
        request = resolve_selection(state)
        assert request.ids is None
        assert request.select_all
        assert request.expected_count == 46
        assert request.to_payload("gcNos") == {
            "gcNos": [],
            "selectAll": True,
            "filters": {"consignor": "C001", "excludeIds": ["1001", "1006"]},
        }

    def test_all_matching_without_exclusions_omits_exclude_ids(self):
        state = SelectionState.all_matching(SelectionSnapshot(FilterCriteria(), 240))
        payload = resolve_selection(state).to_payload("mfNos")
        assert payload == {"mfNos": [], "selectAll": True, "filters": {}}


class TestBulkResolver:
    def test_empty_selection_is_refused(self, service, gc):
        with pytest.raises(NothingSelected):
            BulkResolver(service, gc).resolve(SelectionState())

    async def test_manual_records_match_count(self, service, gc):
        state = SelectionState.manual(frozenset({"1001", "1002", "1240"}))
        records = await BulkResolver(service, gc).fetch_records(state, strict=True)
        assert sorted(r.record_id for r in records) == ["1001", "1002", "1240"]

    async def test_all_matching_records_match_count(self, service, gc):
        """The backend returns exactly the logical count for a quiescent dataset."""
        state = SelectionState.all_matching(
            SelectionSnapshot(C001, 48), frozenset({"1001", "1006"})
        )
        records = await BulkResolver(service, gc).fetch_records(state, strict=True)
        assert len(records) == state.logical_count == 46
        assert {"1001", "1006"}.isdisjoint(r.record_id for r in records)
        assert all(r.consignor_id == "C001" for r in records)

    async def test_count_mismatch_raises_by_default(self, service, gc):
        """A stale snapshot total is reported rather than silently accepted."""
        state = SelectionState.all_matching(SelectionSnapshot(C001, 999))
        resolver = BulkResolver(service, gc)
        with pytest.raises(CountMismatch) as exc_info:
            await resolver.fetch_records(state)
        assert (exc_info.value.expected, exc_info.value.actual) == (999, 48)

    async def test_count_mismatch_tolerated_when_not_strict(self, service, gc):
        state = SelectionState.all_matching(SelectionSnapshot(C001, 50))
        records = await BulkResolver(service, gc).fetch_records(state, strict=False)
        assert len(records) == 48
