from typing import Any

from calshift.util import UNITS


class CalshiftError(Exception):
    """Base class for errors raised by calshift."""


class UnsupportedUnitError(CalshiftError, ValueError):
    """Raised when a unit outside the supported set reaches a unit-aware operation."""

    def __init__(self, unit: Any):
        self.unit: Any = unit
        super().__init__(
            f"Unsupported unit: {unit!r}\n"
            f"Valid units: {', '.join(UNITS)}\n"
            f"Example: shift(instant, 2, 'week')"
        )
