"""Unit tests for DashboardController and template helpers

Tests the page data preparation in isolation from routing and templates.
"""
from datetime import date, datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from beads_dashboard.dashboard.config import format_card_value, get_priority_label
from beads_dashboard.dashboard.controller import DashboardController
from beads_dashboard.web.template_helpers import (
    format_date,
    format_datetime,
    format_days,
    setup_template_filters,
)

from conftest import NOW, days_ago, make_issue

PROJECT = Path("/work/my-project")


class TestGetDashboardData:

    def test_empty_project(self):
        data = DashboardController().get_dashboard_data([], NOW, PROJECT)

        assert data["has_data"] is False
        assert data["snapshot"] is None
        assert data["cards"] == []
        assert data["project_name"] == "my-project"
        assert data["error"] is None

    def test_cards_and_tiers(self):
        issues = [
            make_issue("c", status="closed", created=days_ago(6), updated=days_ago(2)),
            make_issue("fresh", created=days_ago(1), priority=1),
            make_issue("aging", created=days_ago(10), priority=1),
            make_issue("stale", created=days_ago(45), priority=3),
            make_issue("gone", status="tombstone", created=days_ago(3)),
        ]

        data = DashboardController().get_dashboard_data(issues, NOW, PROJECT)

        assert data["has_data"] is True
        cards = {card["label"]: card["value"] for card in data["cards"]}
        assert cards["Open Issues"] == "3"
        assert cards["Avg Age"] == "18.7d"
        assert cards["Cycle Time P50"] == "4d"
        assert data["tier_counts"] == {"green": 1, "orange": 1, "red": 1}
        assert data["priority_counts"] == [
            {"priority": 1, "count": 2},
            {"priority": 3, "count": 1},
        ]
        assert data["snapshot"]["open_count"] == 3
        assert data["total_records"] == 5

    def test_error_context(self):
        data = DashboardController().error_context("disk on fire", PROJECT)

        assert data["error"] == "disk on fire"
        assert data["has_data"] is False


class TestDashboardConfig:

    @pytest.mark.parametrize("priority,label", [
        (0, "P0 Critical"),
        (2, "P2 Medium"),
        ("4", "P4 Lowest"),
        (9, "—"),
        (None, "—"),
    ])
    def test_priority_label(self, priority, label):
        assert get_priority_label(priority) == label

    def test_format_card_value(self):
        assert format_card_value(3, "d") == "3d"
        assert format_card_value(None, "d") == "—"


class TestTemplateHelpers:

    def test_format_days(self):
        assert format_days(3) == "3d"
        assert format_days(2.0) == "2d"
        assert format_days(1.25) == "1.2d"
        assert format_days(None) == "—"

    def test_format_date(self):
        assert format_date(date(2024, 1, 3)) == "2024-01-03"
        assert format_date("2024-01-03T10:00:00Z") == "2024-01-03"
        assert format_date("") == ""

    def test_format_datetime(self):
        value = datetime(2024, 1, 3, 10, 5, 9, tzinfo=timezone.utc)

        assert format_datetime(value) == "2024-01-03 10:05:09"
        assert format_datetime("garbage") == "garbage"

    def test_setup_template_filters(self):
        templates = MagicMock()
        templates.env.filters = {}

        setup_template_filters(templates)

        assert set(templates.env.filters) == {
            "format_days", "format_date", "format_datetime", "priority_label",
        }
