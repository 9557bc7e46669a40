"""Reach window calculation.

Converts the storage's thermal rates and the allowed temperature adjustment
into the time span a boost (or a coast) can reach.

If the storage can absorb max_adjustment degrees of boost within the ahead
span, preheating now only pays off when no cheaper slot arrives before the
banked heat has dissipated. The window bounds that comparison horizon:

    ahead  = max_adjustment × heat_minutes_per_degree
    behind = max_adjustment × cool_minutes_per_degree
    window = [now - behind, now + ahead]
"""

import logging
import math
from datetime import datetime

from ..exceptions import InvalidConfig
from ..models import ReachWindow, ThermalRates
from ..utils.time_utils import minutes_to_timedelta, to_epoch

_LOGGER = logging.getLogger(__name__)


def compute_window(
    current_time: datetime,
    rates: ThermalRates,
    max_adjustment: float,
) -> ReachWindow:
    """Compute the reach window around the current time.

    Args:
        current_time: Tick time
        rates: Minutes per degree while heating and while cooling
        max_adjustment: Maximum deviation from setpoint (°C)

    Returns:
        ReachWindow [current_time - behind, current_time + ahead]

    Raises:
        InvalidConfig: A rate is not positive, max_adjustment is negative, or
            the window falls outside the representable time range
    """
    # Duck-typed rates bypass ThermalRates validation
    for field, rate in (
        ("rates.heat_minutes_per_degree", rates.heat_minutes_per_degree),
        ("rates.cool_minutes_per_degree", rates.cool_minutes_per_degree),
    ):
        if not math.isfinite(rate) or rate <= 0:
            raise InvalidConfig(field, f"must be > 0, got {rate}")
    if not math.isfinite(max_adjustment) or max_adjustment < 0:
        raise InvalidConfig("bounds.max_adjustment", f"must be >= 0, got {max_adjustment}")

    ahead_minutes = max_adjustment * rates.heat_minutes_per_degree
    behind_minutes = max_adjustment * rates.cool_minutes_per_degree

    try:
        earliest = current_time - minutes_to_timedelta(behind_minutes)
        to_epoch(earliest)  # Index lookups need the UTC instant too
    except OverflowError as err:
        raise InvalidConfig(
            "rates.cool_minutes_per_degree",
            f"reach window of {behind_minutes:g} min behind exceeds the representable time range",
        ) from err
    try:
        latest = current_time + minutes_to_timedelta(ahead_minutes)
        to_epoch(latest)
    except OverflowError as err:
        raise InvalidConfig(
            "rates.heat_minutes_per_degree",
            f"reach window of {ahead_minutes:g} min ahead exceeds the representable time range",
        ) from err

    window = ReachWindow(earliest=earliest, latest=latest)

    _LOGGER.debug(
        "Reach window %.1f min behind, %.1f min ahead: %s → %s",
        behind_minutes,
        ahead_minutes,
        window.earliest.isoformat(),
        window.latest.isoformat(),
    )
    return window
