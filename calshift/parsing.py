"""Getting instants in and out: the clock, parsing and display formatting.

Parsing is backed by python-dateutil's ISO-8601 parser, with one extra rule:
a date-time string without an offset is read as UTC when Options.utc is set
and as local wall-clock time otherwise.
"""

import locale as _locale
import logging
import math
import re
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import TypeAlias

from dateutil.parser import isoparse

from calshift.core import shift
from calshift.fields import UTC_FIELDS
from calshift.instant import Instant
from calshift.options import Options, resolve_options
from calshift.util import Unit

logger = logging.getLogger(__name__)

# Zero-argument callable returning nanoseconds since the epoch
Clock: TypeAlias = Callable[[], int]

_TIMEZONE_SUFFIX = re.compile(r"(?:Z|[+-]\d{2}:?\d{2})$", re.IGNORECASE)
# Date and time joined by "T" or a space
_TIME_SEPARATOR = re.compile(r"\d[T ]\d", re.IGNORECASE)

# setlocale() changes process-wide state
_locale_lock = threading.Lock()


def now(clock: Clock = time.time_ns) -> Instant:
    """Return the current instant as reported by clock."""
    return Instant(ms=clock() // 1_000_000)


def modify(
    amount: float,
    unit: Unit,
    instant: Instant | None = None,
    options: Options | None = None,
    clock: Clock = time.time_ns,
) -> Instant:
    """Shift instant (default: now) by amount of unit."""
    base = now(clock) if instant is None else instant
    return shift(base, amount, unit, options)


def parse(
    value: "str | int | float | datetime | date | Instant",
    options: Options | None = None,
) -> Instant:
    """
    Convert a user-supplied value to an Instant.

    Accepts:
    - Instant: returned as an equal copy
    - int/float: milliseconds since the epoch (floats truncate toward zero)
    - datetime: aware datetimes are converted directly; naive ones are read
      as wall-clock time in the selected field set
    - date: midnight in the selected field set
    - str: ISO-8601. Offsets are honoured. Date-time strings without an
      offset are UTC when options.utc is set and local otherwise. Date-only
      strings are UTC midnight.

    Raises:
        TypeError: If value is of an unsupported type
        ValueError: If a string is not ISO-8601 or a float is not finite
    """
    opts = resolve_options(options)

    if isinstance(value, Instant):
        return replace(value)
    if isinstance(value, bool):
        raise TypeError(f"Cannot parse a bool as an instant: {value!r}")
    if isinstance(value, int):
        return Instant(ms=value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Timestamp must be finite, got {value!r}")
        return Instant(ms=int(value))
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return Instant(ms=opts.fields.instant(value.replace(tzinfo=None)))
        return Instant.from_datetime(value)
    if isinstance(value, date):
        midnight = datetime(value.year, value.month, value.day)
        return Instant(ms=opts.fields.instant(midnight))
    if isinstance(value, str):
        return _parse_string(value, opts)

    raise TypeError(
        f"parse() accepts str, int, float, datetime, date or Instant.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  parse('2023-06-15T13:24:35.123Z')\n"
        f"  parse(1686835475123)  # milliseconds since the epoch"
    )


def _parse_string(value: str, options: Options) -> Instant:
    text = value.strip()
    has_time = _TIME_SEPARATOR.search(text) is not None
    has_offset = _TIMEZONE_SUFFIX.search(text) is not None

    if options.utc and has_time and not has_offset:
        logger.debug("Reading timezone-less value %r as UTC", text)
        text = f"{text}Z"

    try:
        parsed = isoparse(text)
    except ValueError as exc:
        raise ValueError(
            f"Cannot parse {value!r} as an ISO-8601 date or date-time.\n"
            f"Examples: '2023-06-15', '2023-06-15T13:24:35', "
            f"'2023-06-15T13:24:35.123Z'"
        ) from exc

    if parsed.tzinfo is not None:
        return Instant.from_datetime(parsed)
    if not has_time:
        return Instant(ms=UTC_FIELDS.instant(parsed))
    return Instant(ms=options.fields.instant(parsed))


@contextmanager
def _time_locale(name: str) -> Iterator[None]:
    with _locale_lock:
        previous = _locale.setlocale(_locale.LC_TIME)
        _locale.setlocale(_locale.LC_TIME, name)
        try:
            yield
        finally:
            _locale.setlocale(_locale.LC_TIME, previous)


def format_instant(
    instant: Instant,
    pattern: str = "%c",
    locale: str | None = None,
    options: Options | None = None,
) -> str:
    """
    Render instant with strftime in the selected field set.

    Args:
        instant: Instant to render
        pattern: strftime pattern (default "%c", the locale's preferred format)
        locale: LC_TIME locale to format under, e.g. "en_US.UTF-8".
            Defaults to the process locale.
        options: Field set selection (UTC or local zone)

    Raises:
        locale.Error: If the requested locale is not available on the host

    Example:
        >>> jan15 = parse("2024-01-15T10:05:00Z")
        >>> format_instant(jan15, "%b %d, %Y", locale="C", options=Options(utc=True))
        'Jan 15, 2024'
    """
    dt = instant.to_datetime(resolve_options(options).fields.tzinfo)
    if locale is None:
        return dt.strftime(pattern)
    with _time_locale(locale):
        return dt.strftime(pattern)
