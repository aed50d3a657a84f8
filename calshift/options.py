from dataclasses import dataclass

from calshift.fields import UTC_FIELDS, FieldSet, ZoneFields, resolve_zone

# Weekday indices, Sunday first
_DAY_MAP = {
    "sunday": 0,
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
}


@dataclass(frozen=True, kw_only=True)
class Options:
    """Settings shared by the unit-aware operations.

    Attributes:
        utc: Read and write UTC calendar fields instead of local ones
        week_start: Weekday that begins a week, 0 = Sunday ... 6 = Saturday.
            A day name such as "monday" is accepted and stored as its index.
        tz: IANA zone providing the local fields (default: the host zone).
            Ignored when utc is True.
    """

    utc: bool = False
    week_start: int | str = 0
    tz: str | None = None

    def __post_init__(self) -> None:
        week_start = self.week_start
        if isinstance(week_start, str):
            key = week_start.lower()
            if key not in _DAY_MAP:
                valid = ", ".join(_DAY_MAP.keys())
                raise ValueError(
                    f"Invalid week_start day '{week_start}'. Valid days: {valid}"
                )
            object.__setattr__(self, "week_start", _DAY_MAP[key])
        elif (
            isinstance(week_start, bool)
            or not isinstance(week_start, int)
            or not 0 <= week_start <= 6
        ):
            raise ValueError(
                f"week_start must be 0-6 (0 = Sunday) or a day name, "
                f"got {week_start!r}\n"
                f"Example: Options(week_start=1) or Options(week_start='monday')"
            )

        if self.tz is not None and not self.utc:
            resolve_zone(self.tz)

    @property
    def fields(self) -> FieldSet:
        """The field accessor set these options select."""
        if self.utc:
            return UTC_FIELDS
        return ZoneFields(resolve_zone(self.tz))


DEFAULT_OPTIONS = Options()


def resolve_options(options: Options | None) -> Options:
    return DEFAULT_OPTIONS if options is None else options
