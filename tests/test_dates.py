"""Tests for lana.dates pure functions."""

from datetime import date, datetime, timedelta, timezone

import pytest

from lana.dates import clamp_day, day_key, local_date, month_of, month_range, parse_timestamp, parse_year_month
from lana.domain.models import Month


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range(Month("2025-01"))

        assert since == "2025-01-01"
        assert until == "2025-02-01"
        assert label == "January 2025"

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        since, until, label = month_range(Month("2025-12"))

        assert since == "2025-12-01"
        assert until == "2026-01-01"
        assert label == "December 2025"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        since, until, _ = month_range(Month("2024-02"))

        assert since == "2024-02-01"
        assert until == "2024-03-01"

    def test_invalid_month_raises_valueerror(self) -> None:
        with pytest.raises(ValueError):
            month_range(Month("2025-13"))


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_utc_suffix(self) -> None:
        parsed = parse_timestamp("2025-05-26T10:00:00Z")

        assert parsed == datetime(2025, 5, 26, 10, 0, tzinfo=timezone.utc)

    def test_naive(self) -> None:
        assert parse_timestamp("2025-05-26T10:00:00") == datetime(2025, 5, 26, 10, 0)

    @pytest.mark.parametrize("value", ["", "yesterday", None, 12345])
    def test_invalid_raises_valueerror(self, value) -> None:
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestLocalDate:
    """Tests for local_date and day keys."""

    def test_aware_converted_to_zone(self) -> None:
        """Should use the calendar date in the given zone."""
        moment = datetime(2025, 5, 26, 2, 0, tzinfo=timezone.utc)
        mexico_city = timezone(timedelta(hours=-6))

        assert local_date(moment, mexico_city) == date(2025, 5, 25)

    def test_naive_taken_as_local(self) -> None:
        assert local_date(datetime(2025, 5, 26, 23, 59)) == date(2025, 5, 26)

    def test_day_key_zero_pads(self) -> None:
        assert day_key(date(2025, 3, 7)) == "2025-03-07"

    def test_month_of(self) -> None:
        assert month_of(date(2025, 3, 7)) == "2025-03"


class TestParseYearMonth:
    """Tests for parse_year_month."""

    @pytest.mark.parametrize("text", ["2025-05", "2025-5", " 2025-5 "])
    def test_zero_pads_month(self, text: str) -> None:
        assert parse_year_month(text) == "2025-05"

    @pytest.mark.parametrize("text", ["2025-13", "May", "2025"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_year_month(text)


class TestClampDay:
    """Tests for clamp_day."""

    def test_day_in_range(self) -> None:
        assert clamp_day(2025, 5, 15) == date(2025, 5, 15)

    def test_day_past_month_end(self) -> None:
        assert clamp_day(2025, 2, 31) == date(2025, 2, 28)
        assert clamp_day(2024, 2, 31) == date(2024, 2, 29)

    def test_day_below_one(self) -> None:
        assert clamp_day(2025, 4, 0) == date(2025, 4, 1)
