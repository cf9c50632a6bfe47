"""Tests for MonthWindow."""

from datetime import date

import pytest

from biblechallenge.leaderboard.schemas import MonthWindow


class TestMonthWindow:
    """Tests for month date ranges."""

    def test_first_and_last_day(self):
        """Test the inclusive range of a 31-day month."""
        window = MonthWindow(2026, 1)

        assert window.first_day == date(2026, 1, 1)
        assert window.last_day == date(2026, 1, 31)

    @pytest.mark.parametrize(
        "year,expected",
        [(2026, date(2026, 2, 28)), (2028, date(2028, 2, 29))],
    )
    def test_february_last_day(self, year, expected):
        """Test leap years are respected."""
        assert MonthWindow(year, 2).last_day == expected

    def test_contains(self):
        """Test membership at and around the boundaries."""
        window = MonthWindow(2026, 3)

        assert window.contains(date(2026, 3, 1))
        assert window.contains(date(2026, 3, 31))
        assert not window.contains(date(2026, 2, 28))
        assert not window.contains(date(2026, 4, 1))

    def test_invalid_month(self):
        """Test months outside 1-12 are rejected."""
        with pytest.raises(ValueError):
            MonthWindow(2026, 13)
        with pytest.raises(ValueError):
            MonthWindow(2026, 0)

    def test_previous_and_next_wrap_years(self):
        """Test navigation across year boundaries."""
        assert MonthWindow(2026, 1).previous() == MonthWindow(2025, 12)
        assert MonthWindow(2026, 12).next() == MonthWindow(2027, 1)
        assert MonthWindow(2026, 5).next() == MonthWindow(2026, 6)

    def test_current(self):
        """Test the window for a given day."""
        assert MonthWindow.current(date(2026, 10, 19)) == MonthWindow(2026, 10)
        assert MonthWindow.for_date(date(2026, 2, 3)) == MonthWindow(2026, 2)

    def test_label(self):
        """Test the Korean month label."""
        assert MonthWindow(2026, 1).label == "2026년 1월"
