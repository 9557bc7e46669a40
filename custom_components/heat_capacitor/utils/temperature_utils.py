"""Derive per-tick boost adjustments from a storage temperature reading."""

import math

from ..exceptions import InvalidConfig
from ..models import BoostAdjustments


def derive_boost_adjustments(current_temp: float, setpoint: float) -> BoostAdjustments:
    """Compute heat_boost and cool_slack from the live storage temperature.

    Both measure the deficit below setpoint: heat_boost is added on top of
    the setpoint when heating, cool_slack is compared against the hysteresis
    to detect a breached safety floor.

    Example (setpoint 48°C, hysteresis 3°C):
        46°C → heat_boost 2, cool_slack 2 (inside band, price decides)
        44°C → heat_boost 4, cool_slack 4 (below 45°C floor, forced heat)
        49°C → heat_boost 0, cool_slack 0

    Raises:
        InvalidConfig: Temperature or setpoint is not a finite number
    """
    for field, value in (("current_temp", current_temp), ("bounds.setpoint", setpoint)):
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        if not is_number or not math.isfinite(value):
            raise InvalidConfig(field, f"must be a finite number, got {value!r}")

    deficit = max(setpoint - current_temp, 0.0)
    return BoostAdjustments(heat_boost=deficit, cool_slack=deficit)
