"""Exceptions raised by the campaign analytics library.

Only malformed input raises. Degenerate input (empty series, constant series,
fields with no values) always resolves to a documented default instead.
"""


class AnalyticsError(Exception):
    """Base class for all errors raised by this package."""


class LengthMismatchError(AnalyticsError, ValueError):
    """Two series that must be aligned have different lengths."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Series must have equal length (got {left} and {right})")
        self.left = left
        self.right = right


class InvalidWindowError(AnalyticsError, ValueError):
    """A window or sequence length is smaller than one."""


class UnknownPeriodError(AnalyticsError, ValueError):
    """A time bucket other than day, week or month was requested."""


class ReservedFieldError(AnalyticsError, ValueError):
    """An aggregated field would overwrite a bucket's own ``period`` or ``count``."""
