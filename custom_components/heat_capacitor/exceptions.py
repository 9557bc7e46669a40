"""Tagged failures raised by the Heat Capacitor engine.

Every failure names the offending field so callers can report it without
parsing the message. The engine never recovers from these locally: keeping
the previous target, alerting or refetching prices is up to the caller.
"""

from .const import ERROR_INVALID_CONFIG, ERROR_INVALID_SCHEDULE, ERROR_NO_COVERAGE


class HeatCapacitorError(ValueError):
    """Base class for all engine failures."""

    code: str = "error"

    def __init__(self, field: str, message: str):
        """Initialize error.

        Args:
            field: Dotted path of the offending input (e.g. "bounds.hysteresis")
            message: Human-readable explanation
        """
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InvalidSchedule(HeatCapacitorError):
    """Price schedule is empty, unsorted or has duplicate starts."""

    code = ERROR_INVALID_SCHEDULE


class NoCoverage(HeatCapacitorError):
    """Requested time is not covered by the price schedule."""

    code = ERROR_NO_COVERAGE


class InvalidConfig(HeatCapacitorError):
    """Thermal rates, bounds or adjustments are out of range."""

    code = ERROR_INVALID_CONFIG


class EmptySchedule(InvalidSchedule, NoCoverage):
    """Schedule without any segment: invalid, and covers no time at all."""

    code = ERROR_NO_COVERAGE
