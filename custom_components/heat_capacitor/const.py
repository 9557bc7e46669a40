"""Constants for Heat Capacitor."""

from enum import StrEnum
from typing import Final

# Domain
DOMAIN: Final = "heat_capacitor"

# Payload keys (tick input)
CONF_CURRENT_TIME: Final = "currentTime"
CONF_BOUNDS: Final = "bounds"
CONF_SETPOINT: Final = "setpoint"
CONF_HYSTERESIS: Final = "hysteresis"
CONF_MAX_ADJUSTMENT: Final = "maxAdjustment"
CONF_MIN_SAVINGS: Final = "minSavings"
CONF_RATES: Final = "rates"
CONF_HEAT_MINUTES_PER_DEGREE: Final = "heatMinutesPerDegree"
CONF_COOL_MINUTES_PER_DEGREE: Final = "coolMinutesPerDegree"
CONF_BOOST: Final = "boost"
CONF_HEAT_BOOST: Final = "heatBoost"
CONF_COOL_SLACK: Final = "coolSlack"
CONF_SCHEDULE: Final = "schedule"
CONF_SCHEDULE_END: Final = "scheduleEnd"

# Provider price curve keys (Tibber/Nord Pool style)
PRICE_KEY_DATA: Final = "priceData"
PRICE_KEY_SOURCE: Final = "source"
PRICE_KEY_START: Final = "start"
PRICE_KEY_VALUE: Final = "value"
PRICE_KEY_PRICE: Final = "price"  # Accepted alias for value

# Payload keys (tick output)
OUTPUT_TARGET_TEMPERATURE: Final = "targetTemperature"
OUTPUT_ACTION: Final = "action"
OUTPUT_REASON: Final = "reason"
OUTPUT_ERROR: Final = "error"

# Error codes (tagged failures)
ERROR_INVALID_SCHEDULE: Final = "invalid_schedule"
ERROR_NO_COVERAGE: Final = "no_coverage"
ERROR_INVALID_CONFIG: Final = "invalid_config"


class TemperatureAction(StrEnum):
    """Decision states of the temperature state machine."""

    FORCED_HEAT = "forced_heat"  # Below safety floor, heat regardless of price
    BOOST = "boost"  # Cheapest point of the reach window, bank heat
    HOLD = "hold"  # Coast down to the lower edge of the hysteresis band


class BaselineMode(StrEnum):
    """Which window price acting now is compared against."""

    WINDOW_PEAK = "window_peak"  # Most expensive segment in the reach window
    HORIZON_EDGE = "horizon_edge"  # Segment at the latest edge of the reach window


DEFAULT_BASELINE_MODE: Final = BaselineMode.WINDOW_PEAK

# Hot water reference scenario (used by scripts/simulate_hot_water_day.py)
HOT_WATER_SETPOINT: Final = 48.0  # °C
HOT_WATER_HYSTERESIS: Final = 3.0  # °C
HOT_WATER_MIN_SAVINGS: Final = 1.0  # Price units per kWh
HOT_WATER_HEAT_MINUTES_PER_DEGREE: Final = 45 / 4  # 45 min to heat 4°C
HOT_WATER_COOL_MINUTES_IDLE: Final = 60 * 24 / 3  # 3°C per day without tapping
HOT_WATER_COOL_MINUTES_SHOWER: Final = 10 / 4  # 4°C in 10 min during a shower
