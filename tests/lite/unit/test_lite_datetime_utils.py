"""Tests for bandsync_lite.lite_datetime_utils."""

from datetime import UTC, date, datetime, time, timedelta, timezone
from types import SimpleNamespace

import pytest

from bandsync_lite.lite_datetime_utils import (
    add_months,
    add_years,
    end_date_bound,
    end_of_day,
    ensure_timezone_aware,
    months_between,
    start_of_week,
    to_datetime,
)

pytestmark = pytest.mark.unit

NEW_YEAR_2024 = 1704067200


class TestToDatetime:
    def test_aware_datetime_is_unchanged(self):
        plus_two = timezone(timedelta(hours=2))
        dt = datetime(2024, 1, 5, 19, 30, tzinfo=plus_two)
        assert to_datetime(dt) is dt

    def test_naive_datetime_becomes_utc(self):
        assert to_datetime(datetime(2024, 1, 5, 19, 30)).tzinfo is UTC

    def test_date_becomes_midnight_utc(self):
        assert to_datetime(date(2024, 1, 5)) == datetime(2024, 1, 5, tzinfo=UTC)

    def test_epoch_seconds(self):
        assert to_datetime(NEW_YEAR_2024) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_seconds_mapping(self):
        value = {"seconds": NEW_YEAR_2024, "nanoseconds": 0}
        assert to_datetime(value) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_underscored_seconds_mapping(self):
        value = {"_seconds": NEW_YEAR_2024, "_nanoseconds": 500_000_000}
        assert to_datetime(value) == datetime(2024, 1, 1, 0, 0, 0, 500_000, tzinfo=UTC)

    def test_timestamp_like_object(self):
        value = SimpleNamespace(seconds=NEW_YEAR_2024 + 3600, nanoseconds=0)
        assert to_datetime(value) == datetime(2024, 1, 1, 1, tzinfo=UTC)

    def test_iso_string_keeps_offset(self):
        dt = to_datetime("2024-01-05T19:30:00+01:00")
        assert dt.utcoffset() == timedelta(hours=1)
        assert dt.hour == 19

    def test_loose_string(self):
        assert to_datetime("Jan 5 2024 19:30") == datetime(2024, 1, 5, 19, 30, tzinfo=UTC)

    @pytest.mark.parametrize("bad", [None, True, "", "not a date", {"nanoseconds": 5}, ["2024"]])
    def test_rejects_non_timestamps(self, bad):
        with pytest.raises(ValueError):
            to_datetime(bad)

    @pytest.mark.parametrize(
        "bad",
        [
            float("inf"),
            float("nan"),
            10**20,
            -(10**20),
            {"seconds": 10**20},
            {"seconds": 1, "nanoseconds": "5"},
            SimpleNamespace(seconds=1, nanoseconds="5"),
        ],
    )
    def test_out_of_range_epochs_raise_value_error(self, bad):
        with pytest.raises(ValueError):
            to_datetime(bad)


class TestCalendarArithmetic:
    def test_add_months_clamps_to_month_end(self):
        assert add_months(datetime(2023, 1, 31, 20, tzinfo=UTC), 1) == datetime(2023, 2, 28, 20, tzinfo=UTC)

    def test_add_months_negative(self):
        assert add_months(datetime(2024, 5, 31, tzinfo=UTC), -3) == datetime(2024, 2, 29, tzinfo=UTC)

    def test_add_months_across_year(self):
        assert add_months(datetime(2024, 11, 15, tzinfo=UTC), 3) == datetime(2025, 2, 15, tzinfo=UTC)

    def test_add_years_leap_day(self):
        assert add_years(datetime(2024, 2, 29, tzinfo=UTC), 1) == datetime(2025, 2, 28, tzinfo=UTC)
        assert add_years(datetime(2024, 2, 29, tzinfo=UTC), 4) == datetime(2028, 2, 29, tzinfo=UTC)

    def test_months_between_ignores_day(self):
        earlier = datetime(2023, 11, 30, tzinfo=UTC)
        assert months_between(earlier, datetime(2024, 2, 1, tzinfo=UTC)) == 3
        assert months_between(earlier, datetime(2023, 10, 1, tzinfo=UTC)) == -1

    def test_start_of_week_is_monday_same_time(self):
        sunday = datetime(2024, 1, 7, 18, 45, tzinfo=UTC)
        assert start_of_week(sunday) == datetime(2024, 1, 1, 18, 45, tzinfo=UTC)
        monday = datetime(2024, 1, 8, 9, tzinfo=UTC)
        assert start_of_week(monday) == monday


class TestEndOfDay:
    def test_same_zone(self):
        result = end_of_day(datetime(2024, 3, 5, 2, tzinfo=UTC))
        assert result == datetime.combine(date(2024, 3, 5), time.max, tzinfo=UTC)

    def test_read_in_event_zone(self):
        new_york_winter = timezone(timedelta(hours=-5))
        # 02:00 UTC on Mar 5 is still Mar 4 in New York
        result = end_of_day(datetime(2024, 3, 5, 2, tzinfo=UTC), new_york_winter)
        assert result.date() == date(2024, 3, 4)
        assert result.tzinfo is new_york_winter

    def test_naive_value_is_utc(self):
        assert end_of_day(datetime(2024, 3, 5)).tzinfo is UTC


class TestEndDateBound:
    def test_midnight_keeps_its_calendar_day(self):
        new_york_winter = timezone(timedelta(hours=-5))
        result = end_date_bound(datetime(2024, 3, 5, tzinfo=UTC), new_york_winter)
        assert result == datetime.combine(date(2024, 3, 5), time.max, tzinfo=new_york_winter)

    def test_other_instants_are_read_in_event_zone(self):
        new_york_winter = timezone(timedelta(hours=-5))
        result = end_date_bound(datetime(2024, 3, 5, 2, tzinfo=UTC), new_york_winter)
        assert result.date() == date(2024, 3, 4)

    def test_without_zone_uses_own_zone(self):
        result = end_date_bound(datetime(2024, 3, 5))
        assert result == datetime.combine(date(2024, 3, 5), time.max, tzinfo=UTC)


def test_ensure_timezone_aware():
    naive = datetime(2024, 1, 1)
    assert ensure_timezone_aware(naive) == datetime(2024, 1, 1, tzinfo=UTC)
