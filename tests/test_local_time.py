"""Tests for local-time field arithmetic in a named zone, including DST changes.

New York springs forward on 2023-03-12 (02:00 -> 03:00) and falls back on
2023-11-05 (02:00 -> 01:00).
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from calshift import Instant, Options, diff, end_of, is_same, shift, start_of

NEW_YORK = ZoneInfo("America/New_York")
NY = Options(tz="America/New_York")


def ny(*args: int) -> Instant:
    return Instant.from_datetime(datetime(*args, tzinfo=NEW_YORK))


def utc(*args: int) -> Instant:
    return Instant.from_datetime(datetime(*args, tzinfo=timezone.utc))


def test_day_shift_follows_wall_clock_across_spring_forward():
    before = ny(2023, 3, 11, 12)
    after = shift(before, 1, "day", NY)

    assert after == ny(2023, 3, 12, 12)
    assert diff(before, after, "hour") == 23


def test_day_shift_follows_wall_clock_across_fall_back():
    before = ny(2023, 11, 4, 12)
    after = shift(before, 1, "day", NY)

    assert after == ny(2023, 11, 5, 12)
    assert diff(before, after, "hour") == 25


def test_utc_day_shift_is_always_24_hours():
    before = ny(2023, 3, 11, 12)
    assert diff(before, shift(before, 1, "day", Options(utc=True)), "hour") == 24


def test_day_bounds_on_short_and_long_days():
    spring = ny(2023, 3, 12, 15)
    start = start_of(spring, "day", NY)
    end = end_of(spring, "day", NY)
    assert start == ny(2023, 3, 12)
    assert end == ny(2023, 3, 12, 23, 59, 59, 999000)
    assert diff(start, shift(end, 1, "millisecond", NY), "hour") == 23

    autumn = ny(2023, 11, 5, 15)
    start = start_of(autumn, "day", NY)
    end = end_of(autumn, "day", NY)
    assert diff(start, shift(end, 1, "millisecond", NY), "hour") == 25


def test_wall_time_in_gap_moves_forward():
    """Test that 01:30 + 1 hour lands on 03:30, since 02:30 does not exist."""
    result = shift(ny(2023, 3, 12, 1, 30), 1, "hour", NY)
    assert result == ny(2023, 3, 12, 3, 30)
    assert diff(ny(2023, 3, 12, 1, 30), result, "hour") == 1


def test_ambiguous_wall_time_uses_first_occurrence():
    result = shift(ny(2023, 11, 5, 0, 30), 1, "hour", NY)
    assert result == ny(2023, 11, 5, 1, 30)
    assert result == utc(2023, 11, 5, 5, 30)


def test_local_and_utc_fields_disagree_near_midnight():
    # 02:00 UTC on the 15th is still the 14th in New York
    instant = utc(2023, 6, 15, 2)
    assert start_of(instant, "day", NY) == utc(2023, 6, 14, 4)
    assert start_of(instant, "day", Options(utc=True)) == utc(2023, 6, 15)
    assert not is_same(instant, utc(2023, 6, 15, 12), "day", NY)
    assert is_same(instant, utc(2023, 6, 15, 12), "day", Options(utc=True))


def test_utc_flag_overrides_zone():
    instant = utc(2023, 6, 15, 2)
    options = Options(utc=True, tz="America/New_York")
    assert start_of(instant, "day", options) == utc(2023, 6, 15)


def test_week_reads_weekday_from_local_fields():
    # Sunday 02:00 UTC is Saturday evening in New York
    instant = utc(2023, 6, 18, 2)
    assert start_of(instant, "week", NY) == ny(2023, 6, 11)
    assert start_of(instant, "week", Options(utc=True)) == utc(2023, 6, 18)


def test_month_shift_keeps_local_wall_time_across_dst():
    result = shift(ny(2023, 2, 15, 9), 1, "month", NY)
    assert result == ny(2023, 3, 15, 9)
    assert result == utc(2023, 3, 15, 13)
