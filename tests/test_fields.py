from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from dateutil import tz as dateutil_tz

from calshift import Instant, Options, UtcFields, ZoneFields
from calshift.fields import UTC_FIELDS, resolve_zone

SAMPLE_MS = 1686835475123  # 2023-06-15T13:24:35.123Z


def test_utc_fields_round_trip():
    wall = UTC_FIELDS.wall(SAMPLE_MS)
    assert wall == datetime(2023, 6, 15, 13, 24, 35, 123000)
    assert wall.tzinfo is None
    assert UTC_FIELDS.instant(wall) == SAMPLE_MS


def test_utc_fields_before_epoch():
    assert UTC_FIELDS.wall(-1) == datetime(1969, 12, 31, 23, 59, 59, 999000)
    assert UTC_FIELDS.instant(datetime(1969, 12, 31, 23, 59, 59, 999000)) == -1


def test_zone_fields_round_trip():
    fields = ZoneFields(ZoneInfo("Asia/Kolkata"))
    wall = fields.wall(SAMPLE_MS)
    assert wall == datetime(2023, 6, 15, 18, 54, 35, 123000)
    assert fields.instant(wall) == SAMPLE_MS


def test_weekday_is_sunday_based():
    assert UTC_FIELDS.weekday(datetime(2023, 6, 18)) == 0
    assert UTC_FIELDS.weekday(datetime(2023, 6, 19)) == 1
    assert UTC_FIELDS.weekday(datetime(2023, 6, 17)) == 6


def test_options_select_field_set():
    assert isinstance(Options(utc=True).fields, UtcFields)
    assert Options(utc=True).fields.tzinfo is timezone.utc

    zoned = Options(tz="Europe/London").fields
    assert isinstance(zoned, ZoneFields)
    assert zoned.tzinfo == ZoneInfo("Europe/London")

    host = Options().fields
    assert isinstance(host, ZoneFields)
    assert isinstance(host.tzinfo, dateutil_tz.tzlocal)


def test_host_zone_matches_system_conversion():
    instant = Instant(ms=SAMPLE_MS)
    expected = instant.to_datetime().astimezone().replace(tzinfo=None)
    assert Options().fields.wall(SAMPLE_MS) == expected


def test_resolve_zone_rejects_unknown_names():
    with pytest.raises(ValueError, match="Unknown time zone: 'Mars/Olympus_Mons'"):
        resolve_zone("Mars/Olympus_Mons")
