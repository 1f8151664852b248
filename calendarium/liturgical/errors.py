class CalendarError(Exception):
    """Base error for the liturgical engine."""


class InvalidInput(CalendarError, ValueError):
    """Raised when a date, year or region cannot be resolved.

    Reported to the caller before any computation starts; never retried.
    """


class DataLoadDegraded(CalendarError):
    """Raised by the feast-table loader when a backing table is missing or malformed.

    The registry catches it, logs a warning and falls back to the built-in
    minimal feast set.
    """


class InternalInvariantViolation(CalendarError, AssertionError):
    """A defect in the engine: a date outside every season, or an unbreakable tie."""
