"""Tests for ftracker.dates pure functions."""

from datetime import date, datetime

import pytest

from ftracker.dates import month_key, month_label, month_range, parse_date, parse_month
from ftracker.domain.models import Month


class TestParseDate:
    """Tests for parse_date."""

    def test_parses_iso_date(self) -> None:
        """Should parse YYYY-MM-DD."""
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_drops_time_of_day(self) -> None:
        """Should ignore any time portion of an ISO timestamp."""
        assert parse_date("2024-01-15T23:59:59.000Z") == date(2024, 1, 15)

    def test_strips_whitespace(self) -> None:
        """Should strip surrounding whitespace."""
        assert parse_date("  2024-01-15  ") == date(2024, 1, 15)

    def test_accepts_date_and_datetime(self) -> None:
        """Should pass dates through and truncate datetimes."""
        assert parse_date(date(2024, 1, 15)) == date(2024, 1, 15)
        assert parse_date(datetime(2024, 1, 15, 18, 30)) == date(2024, 1, 15)

    def test_parses_day_first_format(self) -> None:
        """Should read DD/MM/YYYY as day first."""
        assert parse_date("15/01/2024") == date(2024, 1, 15)

    def test_rejects_impossible_date(self) -> None:
        """Should raise ValueError for a day that does not exist."""
        with pytest.raises(ValueError):
            parse_date("2024-02-30")

    def test_rejects_empty_string(self) -> None:
        """Should raise ValueError for empty input."""
        with pytest.raises(ValueError):
            parse_date("   ")

    def test_rejects_garbage(self) -> None:
        """Should raise ValueError for text that is not a date."""
        with pytest.raises(ValueError):
            parse_date("not a date")

    @pytest.mark.parametrize("value", ["2024-01-15garbage", "2024-01-15 extra", "2024-01-15T25:00"])
    def test_rejects_trailing_text_after_iso_date(self, value: str) -> None:
        """Should require the whole ISO string to parse."""
        with pytest.raises(ValueError):
            parse_date(value)

    @pytest.mark.parametrize("value", ["now", "today", " Today ", "tomorrow", "yesterday"])
    def test_rejects_relative_words(self, value: str) -> None:
        """Should not resolve words against the current day."""
        with pytest.raises(ValueError):
            parse_date(value)

    def test_rejects_non_string(self) -> None:
        """Should raise ValueError for unsupported types."""
        with pytest.raises(ValueError):
            parse_date(20240115)


class TestMonthHelpers:
    """Tests for month_key, parse_month and month_label."""

    def test_month_key_pads(self) -> None:
        """Should zero-pad the month."""
        assert month_key(date(2024, 3, 9)) == "2024-03"

    def test_parse_month_normalizes(self) -> None:
        """Should accept an unpadded month and normalize it."""
        assert parse_month("2024-3") == "2024-03"

    def test_parse_month_rejects_invalid(self) -> None:
        """Should raise ValueError for an invalid month."""
        with pytest.raises(ValueError):
            parse_month("2024-13")

    def test_month_label(self) -> None:
        """Should format a readable label."""
        assert month_label(Month("2024-01")) == "January 2024"


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        first, last, label = month_range(Month("2025-01"))

        assert first == date(2025, 1, 1)
        assert last == date(2025, 1, 31)
        assert label == "January 2025"

    def test_december_range_stays_in_year(self) -> None:
        """Should end December on the 31st of the same year."""
        first, last, label = month_range(Month("2025-12"))

        assert first == date(2025, 12, 1)
        assert last == date(2025, 12, 31)
        assert label == "December 2025"

    def test_february_non_leap_year(self) -> None:
        """Should handle February in non-leap year."""
        _, last, _ = month_range(Month("2025-02"))

        assert last == date(2025, 2, 28)

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        _, last, _ = month_range(Month("2024-02"))

        assert last == date(2024, 2, 29)

    def test_thirty_day_month(self) -> None:
        """Should handle 30-day months."""
        _, last, _ = month_range(Month("2025-04"))

        assert last == date(2025, 4, 30)

    def test_invalid_month_format_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month format."""
        with pytest.raises(ValueError):
            month_range(Month("invalid"))

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_range(Month("2025-13"))
