import os
import time

import pytest
from datetime import date

from cleanops.services.scheduling.dates import (
    add_hours_to_time,
    add_months,
    as_date,
    format_canonical_date,
    is_valid_time_of_day,
    parse_canonical_date,
    sunday_based_weekday,
    week_bucket_key,
    weekday_name,
)


class TestCanonicalDates:
    def test_parse(self):
        assert parse_canonical_date("2024-02-29") == date(2024, 2, 29)

    def test_format_pads(self):
        assert format_canonical_date(date(2024, 1, 5)) == "2024-01-05"

    def test_roundtrip(self):
        for value in ["2024-01-01", "2024-02-29", "2023-12-31", "2024-03-10", "2024-11-03"]:
            assert format_canonical_date(parse_canonical_date(value)) == value

    def test_rejects_non_canonical(self):
        with pytest.raises(ValueError):
            parse_canonical_date("2024-1-5")
        with pytest.raises(ValueError):
            parse_canonical_date("01/05/2024")

    def test_rejects_impossible_date(self):
        with pytest.raises(ValueError):
            parse_canonical_date("2023-02-29")

    def test_rejects_non_string(self):
        with pytest.raises(ValueError):
            parse_canonical_date(20240101)

    def test_as_date_accepts_both(self):
        assert as_date("2024-01-02") == date(2024, 1, 2)
        assert as_date(date(2024, 1, 2)) == date(2024, 1, 2)

    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="tzset not available")
    def test_roundtrip_independent_of_timezone(self):
        original_tz = os.environ.get("TZ")
        try:
            # DST change days in the US, and a UTC+14 zone
            for tz in ["America/Los_Angeles", "Pacific/Kiritimati", "UTC"]:
                os.environ["TZ"] = tz
                time.tzset()
                for value in ["2024-03-10", "2024-11-03", "2024-12-31"]:
                    parsed = parse_canonical_date(value)
                    assert format_canonical_date(parsed) == value
                    assert weekday_name(parsed) == weekday_name(date.fromisoformat(value))
        finally:
            if original_tz is None:
                os.environ.pop("TZ", None)
            else:
                os.environ["TZ"] = original_tz
            time.tzset()


class TestWeekdays:
    def test_sunday_is_zero(self):
        assert sunday_based_weekday(date(2024, 1, 7)) == 0
        assert sunday_based_weekday(date(2024, 1, 6)) == 6

    def test_weekday_name(self):
        assert weekday_name(date(2024, 1, 1)) == "monday"
        assert weekday_name(date(2024, 1, 7)) == "sunday"


class TestWeekBucketKey:
    def test_monday_is_own_key(self):
        assert week_bucket_key(date(2024, 1, 1)) == "2024-01-01"

    def test_sunday_belongs_to_previous_monday(self):
        assert week_bucket_key(date(2024, 1, 7)) == "2024-01-01"
        assert week_bucket_key(date(2023, 12, 31)) == "2023-12-25"

    def test_same_week_same_key(self):
        keys = {week_bucket_key(date(2024, 1, d)) for d in range(8, 15)}
        assert keys == {"2024-01-08"}


class TestAddMonths:
    def test_clamps_to_leap_february(self):
        assert add_months(date(2024, 1, 31), 1, 31) == date(2024, 2, 29)

    def test_clamps_to_common_february(self):
        assert add_months(date(2023, 1, 31), 1, 31) == date(2023, 2, 28)

    def test_clamps_to_thirty_day_month(self):
        assert add_months(date(2024, 3, 31), 1, 31) == date(2024, 4, 30)

    def test_rolls_over_year(self):
        assert add_months(date(2024, 11, 15), 3, 15) == date(2025, 2, 15)


class TestTimeOfDay:
    def test_valid_times(self):
        assert is_valid_time_of_day("07:05") is True
        assert is_valid_time_of_day("7:05") is True
        assert is_valid_time_of_day("23:59") is True

    def test_invalid_times(self):
        assert is_valid_time_of_day("24:00") is False
        assert is_valid_time_of_day("12:60") is False
        assert is_valid_time_of_day("noon") is False
        assert is_valid_time_of_day(None) is False

    def test_add_hours_wraps_midnight(self):
        assert add_hours_to_time("22:00", 5) == "03:00"

    def test_add_fractional_hours(self):
        assert add_hours_to_time("09:30", 2.5) == "12:00"
        assert add_hours_to_time("23:45", 0.25) == "00:00"

    def test_add_hours_rejects_bad_time(self):
        with pytest.raises(ValueError):
            add_hours_to_time("25:00", 1)
