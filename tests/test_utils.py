"""Tests for freight_ui/utils.py and freight_ui/lib."""

import logging
from datetime import date

import pytest

from freight_ui.lib import logs, objects
from freight_ui.models.common import SelectionMode, SelectionSnapshot
from freight_ui.models.filters import FilterCriteria
from freight_ui.utils import format_currency, matches_query, page_count, parse_date


class TestParseDate:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-12-25", date(2024, 12, 25)),
            ("2024-12-25T00:00:00.000Z", date(2024, 12, 25)),
            ("25/12/2024", date(2024, 12, 25)),
            (date(2024, 12, 25), date(2024, 12, 25)),
            ("", None),
            (None, None),
            ("not a date", None),
        ],
    )
    def test_parse(self, value, expected):
        assert parse_date(value) == expected


class TestFormatting:
    def test_currency(self):
        assert format_currency(1234.5) == "INR 1,234.50"

    def test_matches_query(self):
        terms = ["sri murugan textiles", "salem"]
        assert matches_query(terms, "  MURUGAN ")
        assert matches_query(terms, "")
        assert not matches_query(terms, "chennai")

    @pytest.mark.parametrize(
        "total,size,pages", [(0, 10, 0), (1, 10, 1), (240, 10, 24), (241, 10, 25)]
    )
    def test_page_count(self, total, size, pages):
        assert page_count(total, size) == pages


class TestObjects:
    def test_hash_is_stable(self):
        a = objects.hash({"b": 1, "a": [1, 2]}).hexdigest()
        b = objects.hash({"a": [1, 2], "b": 1}).hexdigest()
        assert a == b

    def test_to_json_handles_models(self):
        snapshot = SelectionSnapshot(FilterCriteria(start_date=date(2024, 6, 1)), 3)
        text = objects.to_json({"mode": SelectionMode.ALL_MATCHING, "s": snapshot})
        assert '"all_matching"' in text
        assert '"2024-06-01"' in text


class TestLogs:
    def test_file_path_names_logger(self):
        log = logs.logger("/src/freight_ui/engine/screen.py")
        assert log.name == "freight_ui.engine.screen"
        assert not log.handlers
        assert log.propagate

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/app/src/freight_ui/state.py", "freight_ui.state"),
            ("/app/src/freight_ui/engine/__init__.py", "freight_ui.engine"),
            ("/tmp/scratch/tool.py", "freight_ui.tool"),
        ],
    )
    def test_module_name(self, path, expected):
        assert logs.module_name(path) == expected

    def test_plain_names_are_prefixed(self):
        assert logs.logger("tests").name == "freight_ui.tests"
        assert logs.logger("freight_ui.tests").name == "freight_ui.tests"

    def test_package_handler_added_once(self):
        logs.logger("freight_ui.tests")
        root = logs.configure("debug")
        assert root.level == logging.DEBUG
        assert logs.configure("warning") is root
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        logs.configure()
