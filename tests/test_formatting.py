"""Tests for alert number and duration formatting."""

from datetime import timedelta

import pytest

from loop_alerts.notifications.formatting import AlertFormatter

formatter = AlertFormatter()


class TestNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (80, "80"),
            (80.0, "80"),
            (4.5, "4.5"),
            (0.05, "0.05"),
            (1234.5, "1,234.5"),
            (1.23456, "1.235"),
            (-0.0001, "0"),
        ],
    )
    def test_decimal_style(self, value, expected):
        assert formatter.number(value) == expected


class TestDuration:
    @pytest.mark.parametrize(
        ("interval", "expected"),
        [
            (timedelta(minutes=20), "20 minutes"),
            (timedelta(minutes=1), "1 minute"),
            (timedelta(seconds=30), "0 minutes"),
            (timedelta(hours=1), "1 hour"),
            (timedelta(hours=1, minutes=20), "1 hour"),
            (timedelta(hours=2), "2 hours"),
            (5400, "1 hour"),
            (59 * 60, "59 minutes"),
        ],
    )
    def test_single_largest_unit(self, interval, expected):
        assert formatter.duration(interval) == expected

    @pytest.mark.parametrize(
        "interval",
        [timedelta(seconds=-1), float("nan"), float("inf"), "soon"],
    )
    def test_unformattable_returns_none(self, interval):
        assert formatter.duration(interval) is None


class TestTimeRemaining:
    def test_approximate_phrase(self):
        assert formatter.time_remaining(3600) == "About 1 hour remaining"

    def test_unformattable(self):
        assert formatter.time_remaining(-10) is None
