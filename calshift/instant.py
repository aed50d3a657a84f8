from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True, kw_only=True, order=True)
class Instant:
    """A point in time as whole milliseconds since the Unix epoch."""

    ms: int

    def __post_init__(self) -> None:
        if isinstance(self.ms, bool) or not isinstance(self.ms, int):
            raise TypeError(
                f"Instant ms must be an int, got {type(self.ms).__name__!r}: "
                f"{self.ms!r}\n"
                f"Hint: use calshift.parse() to convert floats, strings or datetimes"
            )

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Convert a timezone-aware datetime, flooring to whole milliseconds."""
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise TypeError(
                f"Instant.from_datetime() requires a timezone-aware datetime.\n"
                f"Got naive datetime: {dt!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
                f"# or 'US/Pacific', etc.\n"
                f"  # Or let parse() read it as wall-clock time:\n"
                f"  parse(dt, Options(tz='US/Pacific'))"
            )
        return cls(ms=(dt - EPOCH) // _ONE_MS)

    def to_datetime(self, tz: tzinfo = timezone.utc) -> datetime:
        return (EPOCH + self.ms * _ONE_MS).astimezone(tz)

    def __str__(self) -> str:
        """ISO-8601 in UTC with millisecond precision."""
        iso = (EPOCH + self.ms * _ONE_MS).isoformat(timespec="milliseconds")
        return iso.replace("+00:00", "Z")
