"""Calendar arithmetic over instants.

Every operation reads and writes calendar fields through the FieldSet picked
by Options, so one implementation serves both UTC and local time. Inputs are
never modified; each call returns a new Instant (or a number).
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, NoReturn

from calshift.errors import UnsupportedUnitError
from calshift.fields import FieldSet
from calshift.instant import Instant
from calshift.options import Options, resolve_options
from calshift.util import FIXED_LENGTHS, Unit


def _unsupported_unit(unit: Any) -> NoReturn:
    raise UnsupportedUnitError(unit)


def _add_months(wall: datetime, months: int) -> datetime:
    """Add months to the month field, carrying day-of-month overflow forward.

    2023-01-31 plus one month names 2023-02-31, which carries to 2023-03-03.
    """
    total = wall.year * 12 + wall.month - 1 + months
    year, month = divmod(total, 12)
    first = wall.replace(year=year, month=month + 1, day=1)
    return first + timedelta(days=wall.day - 1)


def _shift(ms: int, amount: float, unit: Unit, fields: FieldSet) -> int:
    wall = fields.wall(ms)

    if unit == "month":
        shifted = _add_months(wall, int(amount))
    elif unit == "year":
        shifted = _add_months(wall, int(amount) * 12)
    elif isinstance(unit, str) and unit in FIXED_LENGTHS:
        # Wall-clock arithmetic; a week is seven wall-clock days
        step = round(amount * FIXED_LENGTHS[unit])
        shifted = wall + timedelta(milliseconds=step)
    else:
        _unsupported_unit(unit)

    return fields.instant(shifted)


def _start_of(ms: int, unit: Unit, fields: FieldSet, week_start: int) -> int:
    if unit == "millisecond":
        return ms

    wall = fields.wall(ms)

    if unit == "second":
        wall = wall.replace(microsecond=0)
    elif unit == "minute":
        wall = wall.replace(second=0, microsecond=0)
    elif unit == "hour":
        wall = wall.replace(minute=0, second=0, microsecond=0)
    elif unit == "day":
        wall = wall.replace(hour=0, minute=0, second=0, microsecond=0)
    elif unit == "week":
        day = _start_of(ms, "day", fields, week_start)
        offset = (fields.weekday(fields.wall(day)) - week_start + 7) % 7
        return _shift(day, -offset, "day", fields)
    elif unit == "month":
        wall = wall.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    elif unit == "year":
        wall = wall.replace(
            month=1, day=1, hour=0, minute=0, second=0, microsecond=0
        )
    else:
        _unsupported_unit(unit)

    return fields.instant(wall)


def _diff_months(start: int, end: int, fields: FieldSet) -> float:
    """Whole months between start and end plus the fraction of the boundary month."""
    if start == end:
        return 0

    sign = 1 if end > start else -1
    start_wall = fields.wall(start)
    end_wall = fields.wall(end)
    months = (end_wall.year - start_wall.year) * 12 + (
        end_wall.month - start_wall.month
    )

    anchor = _shift(start, months, "month", fields)
    # Day-of-month carry can land the anchor beyond end
    if (sign > 0 and anchor > end) or (sign < 0 and anchor < end):
        months -= sign
        anchor = _shift(start, months, "month", fields)

    following = _shift(anchor, sign, "month", fields)
    interval = following - anchor
    if interval == 0:
        return months

    return months + ((end - anchor) / interval) * sign


def shift(
    instant: Instant, amount: float, unit: Unit, options: Options | None = None
) -> Instant:
    """
    Return instant moved by amount of unit.

    The selected calendar field is advanced and any overflow carries into the
    larger fields, exactly as a calendar setter would. Sub-month units follow
    the wall clock, so in local time a one-day shift across a DST change is
    23 or 25 hours long. Months and years keep the day of month and carry any
    overflow into the next month.

    Args:
        instant: Starting point
        amount: Signed quantity. Fractional amounts are honoured to the
            millisecond for fixed-length units and truncated for month/year.
        unit: One of the calshift units
        options: Field set selection (UTC or local zone)

    Returns:
        A new Instant

    Raises:
        UnsupportedUnitError: If unit is not a calshift unit

    Example:
        >>> jan31 = parse("2023-01-31T00:00:00Z")
        >>> str(shift(jan31, 1, "month", Options(utc=True)))
        '2023-03-03T00:00:00.000Z'
    """
    fields = resolve_options(options).fields
    return Instant(ms=_shift(instant.ms, amount, unit, fields))


def diff(
    start: Instant, end: Instant, unit: Unit, options: Options | None = None
) -> float:
    """
    Return end - start measured in unit.

    Fixed-length units divide the millisecond delta by the unit length.
    Months walk the calendar: the whole number of months that fit, plus the
    position of end inside the following (or, going backwards, preceding)
    month. Years are months divided by 12.

    Example:
        >>> a = parse("2023-01-01T00:00:00Z")
        >>> b = parse("2023-01-02T12:00:00Z")
        >>> diff(a, b, "day")
        1.5
    """
    delta = end.ms - start.ms

    if unit == "millisecond":
        return delta
    if unit == "month":
        return _diff_months(start.ms, end.ms, resolve_options(options).fields)
    if unit == "year":
        return _diff_months(start.ms, end.ms, resolve_options(options).fields) / 12
    if isinstance(unit, str) and unit in FIXED_LENGTHS:
        return delta / FIXED_LENGTHS[unit]

    _unsupported_unit(unit)


def start_of(instant: Instant, unit: Unit, options: Options | None = None) -> Instant:
    """
    Return the first instant of the unit bucket containing instant.

    Weeks begin on options.week_start; the result is the latest such weekday
    at or before instant.
    """
    opts = resolve_options(options)
    if unit == "millisecond":
        return replace(instant)
    return Instant(ms=_start_of(instant.ms, unit, opts.fields, int(opts.week_start)))


def end_of(instant: Instant, unit: Unit, options: Options | None = None) -> Instant:
    """Return the last millisecond of the unit bucket containing instant."""
    if unit == "millisecond":
        return replace(instant)

    opts = resolve_options(options)
    fields = opts.fields
    start = _start_of(instant.ms, unit, fields, int(opts.week_start))
    following = _shift(start, 1, unit, fields)
    return Instant(ms=_shift(following, -1, "millisecond", fields))


def is_same(
    a: Instant, b: Instant, unit: Unit, options: Options | None = None
) -> bool:
    """True if a and b fall in the same unit bucket."""
    opts = resolve_options(options)
    fields = opts.fields
    week_start = int(opts.week_start)
    return _start_of(a.ms, unit, fields, week_start) == _start_of(
        b.ms, unit, fields, week_start
    )
