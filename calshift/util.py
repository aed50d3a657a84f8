"""Unit names and constants for calshift.

Time unit constants represent fixed durations in milliseconds.
Months and years have no fixed length and are handled with field arithmetic.
"""

from typing import Literal, TypeAlias

Unit: TypeAlias = Literal[
    "millisecond", "second", "minute", "hour", "day", "week", "month", "year"
]

UNITS: tuple[Unit, ...] = (
    "millisecond",
    "second",
    "minute",
    "hour",
    "day",
    "week",
    "month",
    "year",
)

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60000
HOUR = 3600000
DAY = 86400000
WEEK = 604800000

FIXED_LENGTHS: dict[str, int] = {
    "millisecond": MILLISECOND,
    "second": SECOND,
    "minute": MINUTE,
    "hour": HOUR,
    "day": DAY,
    "week": WEEK,
}
