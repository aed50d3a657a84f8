import logging

from .core import diff, end_of, is_same, shift, start_of
from .errors import CalshiftError, UnsupportedUnitError
from .fields import FieldSet, UtcFields, ZoneFields
from .instant import Instant
from .options import Options
from .parsing import Clock, format_instant, modify, now, parse
from .util import DAY, HOUR, MILLISECOND, MINUTE, SECOND, UNITS, WEEK, Unit

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Instant",
    "Options",
    "Unit",
    "UNITS",
    "Clock",
    "FieldSet",
    "UtcFields",
    "ZoneFields",
    "shift",
    "diff",
    "start_of",
    "end_of",
    "is_same",
    "now",
    "modify",
    "parse",
    "format_instant",
    "CalshiftError",
    "UnsupportedUnitError",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
]
