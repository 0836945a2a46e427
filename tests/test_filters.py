"""Tests for freight_ui/models/filters.py."""

from datetime import date

import pytest

from freight_ui.models.filters import FilterCriteria


class TestFilterParams:
    """Outgoing query parameters."""

    def test_default_criteria_is_inactive(self):
        criteria = FilterCriteria()
        assert not criteria.is_active()
        assert criteria.to_params() == {}

    def test_default_dimensions_are_omitted(self):
        """Only dimensions with a non-default value are sent."""
        criteria = FilterCriteria(search="  cotton   yarn ", consignor="C001")
        assert criteria.to_params() == {"search": "cotton yarn", "consignor": "C001"}

    def test_whitespace_search_is_inactive(self):
        assert not FilterCriteria(search="   ").is_active()

    def test_consignees_are_a_sorted_unique_list(self):
        criteria = FilterCriteria(consignees=("E002", "E001", "E002", " "))
        assert criteria.consignees == ("E001", "E002")
        assert criteria.to_params() == {"consignee": ["E001", "E002"]}

    def test_date_range_is_iso(self):
        criteria = FilterCriteria().with_custom_range("01/06/2024", date(2024, 6, 30))
        assert criteria.to_params() == {
            "filterType": "custom",
            "startDate": "2024-06-01",
            "endDate": "2024-06-30",
        }

    def test_unknown_date_filter_rejected(self):
        with pytest.raises(ValueError):
            FilterCriteria(date_filter="month")


class TestDatePresets:
    TODAY = date(2024, 6, 10)

    def test_today(self):
        criteria = FilterCriteria().with_date_preset("today", today=self.TODAY)
        assert (criteria.start_date, criteria.end_date) == (self.TODAY, self.TODAY)

    def test_yesterday(self):
        criteria = FilterCriteria().with_date_preset("yesterday", today=self.TODAY)
        assert criteria.start_date == criteria.end_date == date(2024, 6, 9)

    def test_week_covers_the_last_seven_days(self):
        criteria = FilterCriteria().with_date_preset("week", today=self.TODAY)
        assert criteria.start_date == date(2024, 6, 3)
        assert criteria.end_date == self.TODAY
        assert criteria.date_filter == "week"

    def test_all_clears_the_range(self):
        criteria = FilterCriteria().with_date_preset("week", today=self.TODAY)
        cleared = criteria.with_date_preset("all")
        assert cleared == FilterCriteria()
        assert not cleared.is_active()

    def test_custom_is_not_a_preset(self):
        with pytest.raises(ValueError):
            FilterCriteria().with_date_preset("custom")


class TestCriteriaIdentity:
    def test_equality_ignores_consignee_order(self):
        a = FilterCriteria(consignees=("E001", "E002"))
        b = FilterCriteria(consignees=["E002", "E001"])
        assert a == b
        assert a.key() == b.key()

    def test_key_changes_with_filters(self):
        assert FilterCriteria().key() != FilterCriteria(destination="Salem").key()

    def test_dict_round_trip(self):
        criteria = FilterCriteria(
            search="rice",
            date_filter="custom",
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 5),
            destination="Salem",
            consignor="C002",
            consignees=("E003",),
        )
        assert FilterCriteria.from_dict(criteria.to_dict()) == criteria

    def test_from_empty_dict(self):
        assert FilterCriteria.from_dict(None) == FilterCriteria()


class TestActiveDimensionLabel:
    @pytest.mark.parametrize(
        "criteria,label",
        [
            (FilterCriteria(), None),
            (FilterCriteria(search="rice"), "Search"),
            (FilterCriteria(destination="Salem", search="rice"), "Destination"),
            (FilterCriteria(consignor="C001", destination="Salem"), "Consignor"),
            (FilterCriteria(consignees=("E001",), search="x"), "Consignee"),
            (FilterCriteria(date_filter="today"), "Date"),
        ],
    )
    def test_label(self, criteria, label):
        assert criteria.active_dimension_label() == label
