"""Immutable input snapshot for one evaluation tick.

Every entity here is created, used and discarded within a single evaluation
and never mutated after construction, so a snapshot can be shared read-only
between storage units evaluated concurrently.
"""

import math
from dataclasses import dataclass
from datetime import datetime

from ..exceptions import InvalidConfig, InvalidSchedule


def _require_finite(field: str, value: float, error=InvalidConfig) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error(field, f"must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise error(field, f"must be finite, got {value}")


def _require_non_negative(field: str, value: float) -> None:
    _require_finite(field, value)
    if value < 0:
        raise InvalidConfig(field, f"must be >= 0, got {value}")


def _require_positive(field: str, value: float) -> None:
    _require_finite(field, value)
    if value <= 0:
        raise InvalidConfig(field, f"must be > 0, got {value}")


@dataclass(frozen=True)
class PricePoint:
    """Single price segment starting at `start`.

    The segment is valid until the next segment's start; the last one of a
    schedule extends indefinitely unless the caller bounds it.
    """

    start: datetime
    unit_price: float  # Provider unit (öre/kWh, EUR/kWh, ...), used as-is

    def __post_init__(self):
        """Validate segment."""
        if not isinstance(self.start, datetime):
            raise InvalidSchedule("start", f"must be a datetime, got {type(self.start).__name__}")
        _require_finite("unit_price", self.unit_price, InvalidSchedule)


@dataclass(frozen=True)
class ThermalRates:
    """Minutes needed to move the storage temperature by one degree."""

    heat_minutes_per_degree: float  # While actively heating
    cool_minutes_per_degree: float  # While passively cooling (standing losses, tapping)

    def __post_init__(self):
        """Validate rates."""
        _require_positive("rates.heat_minutes_per_degree", self.heat_minutes_per_degree)
        _require_positive("rates.cool_minutes_per_degree", self.cool_minutes_per_degree)


@dataclass(frozen=True)
class Bounds:
    """Comfort and safety bounds around the setpoint."""

    setpoint: float  # °C
    hysteresis: float  # °C - allowed drift below setpoint before forced heating
    max_adjustment: float  # °C - maximum deviation of the target from setpoint
    min_savings: float  # Price difference required before boosting

    def __post_init__(self):
        """Validate bounds."""
        _require_finite("bounds.setpoint", self.setpoint)
        _require_non_negative("bounds.hysteresis", self.hysteresis)
        _require_non_negative("bounds.max_adjustment", self.max_adjustment)
        _require_non_negative("bounds.min_savings", self.min_savings)
        if self.hysteresis > self.max_adjustment:
            raise InvalidConfig(
                "bounds.hysteresis",
                f"must not exceed max_adjustment ({self.hysteresis} > {self.max_adjustment})",
            )

    @property
    def floor(self) -> float:
        """Safety floor: lowest temperature before heating is forced."""
        return self.setpoint - self.hysteresis

    @property
    def lowest_target(self) -> float:
        """Lowest target the engine may output."""
        return self.setpoint - self.max_adjustment

    @property
    def highest_target(self) -> float:
        """Highest target the engine may output."""
        return self.setpoint + self.max_adjustment


@dataclass(frozen=True)
class BoostAdjustments:
    """Per-tick adjustments derived from the live storage temperature.

    heat_boost: how far the storage is below setpoint (0 at/above setpoint).
    cool_slack: how far the storage has cooled below setpoint; exceeding the
    hysteresis means the safety floor is breached.
    """

    heat_boost: float = 0.0
    cool_slack: float = 0.0

    def __post_init__(self):
        """Validate adjustments."""
        _require_non_negative("boost.heat_boost", self.heat_boost)
        _require_non_negative("boost.cool_slack", self.cool_slack)


@dataclass(frozen=True)
class ReachWindow:
    """Time span within which a boost or coast remains effective."""

    earliest: datetime
    latest: datetime


@dataclass(frozen=True)
class EvaluationRequest:
    """Full input of one tick, constructed fresh and never persisted."""

    current_time: datetime
    bounds: Bounds
    rates: ThermalRates
    adjustments: BoostAdjustments
    schedule: tuple[PricePoint, ...]
    schedule_end: datetime | None = None  # Bounds the last segment (None = open-ended)

    def __post_init__(self):
        """Freeze schedule and check the timestamp types."""
        if not isinstance(self.current_time, datetime):
            raise InvalidConfig(
                "current_time",
                f"must be a datetime, got {type(self.current_time).__name__}",
            )
        if self.schedule_end is not None and not isinstance(self.schedule_end, datetime):
            raise InvalidConfig(
                "schedule_end",
                f"must be a datetime, got {type(self.schedule_end).__name__}",
            )
        # Lists are accepted for convenience but stored as an immutable tuple
        object.__setattr__(self, "schedule", tuple(self.schedule))
