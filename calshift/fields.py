"""Calendar field views of an instant.

A FieldSet turns an instant into naive wall-clock fields and back again.
Every unit-aware operation is written once against this interface; the UTC
and local-time behaviours come from picking UtcFields or ZoneFields.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz as dateutil_tz
from typing_extensions import override

from calshift.instant import EPOCH

logger = logging.getLogger(__name__)

_ONE_MS = timedelta(milliseconds=1)
_NAIVE_EPOCH = datetime(1970, 1, 1)


class FieldSet(ABC):

    @property
    @abstractmethod
    def tzinfo(self) -> tzinfo:
        """The zone whose calendar fields this set reads and writes."""
        pass

    @abstractmethod
    def wall(self, ms: int) -> datetime:
        """Return the naive wall-clock fields of the instant at ms."""
        pass

    @abstractmethod
    def instant(self, wall: datetime) -> int:
        """Return the instant (in ms) that the naive wall-clock fields name."""
        pass

    def weekday(self, wall: datetime) -> int:
        """Weekday index of wall, 0 = Sunday through 6 = Saturday."""
        return (wall.weekday() + 1) % 7


class UtcFields(FieldSet):

    @property
    @override
    def tzinfo(self) -> tzinfo:
        return timezone.utc

    @override
    def wall(self, ms: int) -> datetime:
        return _NAIVE_EPOCH + ms * _ONE_MS

    @override
    def instant(self, wall: datetime) -> int:
        return (wall - _NAIVE_EPOCH) // _ONE_MS

    def __repr__(self) -> str:
        return "UtcFields()"


class ZoneFields(FieldSet):
    """Calendar fields in a named or host time zone.

    Wall times that fall in a DST gap are pushed forward by the size of the
    gap, and ambiguous wall times resolve to their earlier occurrence.
    """

    def __init__(self, zone: tzinfo):
        self.zone: tzinfo = zone

    @property
    @override
    def tzinfo(self) -> tzinfo:
        return self.zone

    @override
    def wall(self, ms: int) -> datetime:
        return (EPOCH + ms * _ONE_MS).astimezone(self.zone).replace(tzinfo=None)

    @override
    def instant(self, wall: datetime) -> int:
        local = wall.replace(tzinfo=self.zone, fold=0)
        if not dateutil_tz.datetime_exists(local):
            resolved = dateutil_tz.resolve_imaginary(local)
            logger.debug("Wall time %s falls in a DST gap, using %s", local, resolved)
            local = resolved
        return (local - EPOCH) // _ONE_MS

    def __repr__(self) -> str:
        return f"ZoneFields({self.zone!r})"


UTC_FIELDS = UtcFields()


def resolve_zone(name: str | None) -> tzinfo:
    """Return the tzinfo for an IANA zone name, or the host zone for None."""
    if name is None:
        return dateutil_tz.tzlocal()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(
            f"Unknown time zone: {name!r}\n"
            f"Use an IANA zone name such as 'UTC', 'US/Pacific' or "
            f"'Europe/London', or tz=None for the host zone."
        ) from exc
