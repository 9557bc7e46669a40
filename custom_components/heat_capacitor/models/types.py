"""Type definitions for Heat Capacitor payloads.

TypedDicts for the dict contract exchanged with the runtime that delivers
ticks, to avoid using Any type at the adapter boundary.
"""

from datetime import datetime
from typing import TypedDict


class PriceEntryDict(TypedDict, total=False):
    """One raw price entry from a provider."""

    start: str | datetime
    value: float
    price: float  # Alias for value used by some providers


class BoundsDict(TypedDict):
    """Comfort and safety bounds."""

    setpoint: float
    hysteresis: float
    maxAdjustment: float
    minSavings: float


class RatesDict(TypedDict):
    """Thermal response of the storage."""

    heatMinutesPerDegree: float
    coolMinutesPerDegree: float


class BoostDict(TypedDict, total=False):
    """Adjustments derived from the live storage temperature."""

    heatBoost: float
    coolSlack: float


class RequestPayloadDict(TypedDict, total=False):
    """Input of one tick.

    Using total=False because currentTime, boost and scheduleEnd are
    optional; bounds, rates and schedule are enforced by the payload schema.
    """

    currentTime: str | datetime
    bounds: BoundsDict
    rates: RatesDict
    boost: BoostDict
    schedule: list[PriceEntryDict] | dict
    scheduleEnd: str | datetime


class DecisionPayloadDict(TypedDict):
    """Successful tick output."""

    targetTemperature: float
    action: str
    reason: str


class ErrorDetailDict(TypedDict):
    """Tagged failure details."""

    code: str
    field: str
    message: str


class ErrorPayloadDict(TypedDict):
    """Failed tick output, never carries a target temperature."""

    error: ErrorDetailDict
