"""Heat Capacitor.

Uses the thermal mass of a heat storage (hot water tank, heated slab) as an
energy buffer: on every control tick it decides the target temperature from
a spot price forecast and the storage's thermal response, pre-heating in
cheap windows and coasting through expensive ones without leaving the
comfort/safety band.

The engine is a pure, synchronous function over an immutable snapshot.
Reading sensors, fetching prices and applying the target belong to the
runtime that wraps it (a Home Assistant automation, a flow runtime, a script).
"""

from .adapters import evaluate_payload, parse_price_data, parse_request
from .const import BaselineMode, TemperatureAction
from .exceptions import (
    EmptySchedule,
    HeatCapacitorError,
    InvalidConfig,
    InvalidSchedule,
    NoCoverage,
)
from .models import (
    BoostAdjustments,
    Bounds,
    EvaluationRequest,
    PricePoint,
    ReachWindow,
    ThermalRates,
)
from .optimization import Decision, Evaluator, PriceScheduleIndex, evaluate
from .utils.temperature_utils import derive_boost_adjustments

__all__ = [
    "BaselineMode",
    "BoostAdjustments",
    "Bounds",
    "Decision",
    "EmptySchedule",
    "EvaluationRequest",
    "Evaluator",
    "HeatCapacitorError",
    "InvalidConfig",
    "InvalidSchedule",
    "NoCoverage",
    "PricePoint",
    "PriceScheduleIndex",
    "ReachWindow",
    "TemperatureAction",
    "ThermalRates",
    "derive_boost_adjustments",
    "evaluate",
    "evaluate_payload",
    "parse_price_data",
    "parse_request",
]
