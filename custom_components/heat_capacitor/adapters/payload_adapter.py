"""Tick payload adapter.

Turns the dict a runtime delivers on every tick into an EvaluationRequest,
and turns the resulting Decision, or a failure, back into a dict:

    in:  {currentTime, bounds: {setpoint, hysteresis, maxAdjustment, minSavings},
          rates: {heatMinutesPerDegree, coolMinutesPerDegree},
          boost: {heatBoost, coolSlack}, schedule: [{start, value}, ...]}
    out: {targetTemperature, action, reason}
     or  {error: {code, field, message}}

A failed tick never yields a target temperature; keeping the previous target
is the caller's call.
"""

import logging
import math
from datetime import datetime
from typing import Any

import voluptuous as vol

from homeassistant.util import dt as dt_util

from ..const import (
    CONF_BOOST,
    CONF_BOUNDS,
    CONF_COOL_MINUTES_PER_DEGREE,
    CONF_COOL_SLACK,
    CONF_CURRENT_TIME,
    CONF_HEAT_BOOST,
    CONF_HEAT_MINUTES_PER_DEGREE,
    CONF_HYSTERESIS,
    CONF_MAX_ADJUSTMENT,
    CONF_MIN_SAVINGS,
    CONF_RATES,
    CONF_SCHEDULE,
    CONF_SCHEDULE_END,
    CONF_SETPOINT,
    OUTPUT_ACTION,
    OUTPUT_ERROR,
    OUTPUT_REASON,
    OUTPUT_TARGET_TEMPERATURE,
)
from ..exceptions import HeatCapacitorError, InvalidConfig, InvalidSchedule
from ..models import BoostAdjustments, Bounds, EvaluationRequest, ThermalRates
from ..models.types import DecisionPayloadDict, ErrorPayloadDict
from ..optimization import Decision, Evaluator
from ..utils.time_utils import parse_timestamp
from .price_adapter import parse_price_data

_LOGGER = logging.getLogger(__name__)

# Entity field names → payload field names, so errors point at what the caller sent
_PAYLOAD_FIELDS = {
    "current_time": CONF_CURRENT_TIME,
    "schedule_end": CONF_SCHEDULE_END,
    "bounds.setpoint": f"{CONF_BOUNDS}.{CONF_SETPOINT}",
    "bounds.hysteresis": f"{CONF_BOUNDS}.{CONF_HYSTERESIS}",
    "bounds.max_adjustment": f"{CONF_BOUNDS}.{CONF_MAX_ADJUSTMENT}",
    "bounds.min_savings": f"{CONF_BOUNDS}.{CONF_MIN_SAVINGS}",
    "rates.heat_minutes_per_degree": f"{CONF_RATES}.{CONF_HEAT_MINUTES_PER_DEGREE}",
    "rates.cool_minutes_per_degree": f"{CONF_RATES}.{CONF_COOL_MINUTES_PER_DEGREE}",
    "boost.heat_boost": f"{CONF_BOOST}.{CONF_HEAT_BOOST}",
    "boost.cool_slack": f"{CONF_BOOST}.{CONF_COOL_SLACK}",
}


def _finite_number(value: Any) -> float:
    """Coerce to a finite float; bools are rejected."""
    if isinstance(value, bool):
        raise vol.Invalid("expected a number, got bool")
    try:
        number = float(value)
    except (TypeError, ValueError) as err:
        raise vol.Invalid(f"expected a number, got {value!r}") from err
    if not math.isfinite(number):
        raise vol.Invalid(f"must be finite, got {number}")
    return number


def _timestamp(value: Any) -> datetime:
    """Coerce ISO 8601 strings and datetimes to datetime."""
    try:
        parsed = parse_timestamp(value)
    except ValueError as err:
        raise vol.Invalid(str(err)) from err
    if parsed is None:
        raise vol.Invalid(f"expected an ISO 8601 timestamp, got {value!r}")
    return parsed


BOUNDS_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_SETPOINT): _finite_number,
        vol.Required(CONF_HYSTERESIS): _finite_number,
        vol.Required(CONF_MAX_ADJUSTMENT): _finite_number,
        vol.Required(CONF_MIN_SAVINGS): _finite_number,
    },
    extra=vol.REMOVE_EXTRA,
)

RATES_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HEAT_MINUTES_PER_DEGREE): _finite_number,
        vol.Required(CONF_COOL_MINUTES_PER_DEGREE): _finite_number,
    },
    extra=vol.REMOVE_EXTRA,
)

BOOST_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_HEAT_BOOST, default=0.0): _finite_number,
        vol.Optional(CONF_COOL_SLACK, default=0.0): _finite_number,
    },
    extra=vol.REMOVE_EXTRA,
)

REQUEST_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_CURRENT_TIME): _timestamp,
        vol.Required(CONF_BOUNDS): BOUNDS_SCHEMA,
        vol.Required(CONF_RATES): RATES_SCHEMA,
        vol.Optional(CONF_BOOST): BOOST_SCHEMA,
        # Entry-level validation happens in parse_price_data for indexed field names
        vol.Required(CONF_SCHEDULE): vol.Any(list, dict),
        vol.Optional(CONF_SCHEDULE_END): _timestamp,
    },
    extra=vol.ALLOW_EXTRA,
)


def _from_invalid(err: vol.Invalid) -> HeatCapacitorError:
    """Map a voluptuous failure to a tagged engine error."""
    path = [str(part) for part in err.path]
    field = ".".join(path) if path else "payload"
    if path and path[0] == CONF_SCHEDULE:
        return InvalidSchedule(field, err.msg)
    return InvalidConfig(field, err.msg)


def parse_request(payload: Any, now: datetime | None = None) -> EvaluationRequest:
    """Validate a tick payload and build the request.

    Args:
        payload: Raw tick dict
        now: Tick time used when the payload carries no currentTime
            (defaults to Home Assistant's current time)

    Returns:
        EvaluationRequest snapshot

    Raises:
        InvalidConfig: Bounds, rates or boost missing or out of range
        InvalidSchedule: Schedule missing or malformed
    """
    try:
        data = REQUEST_SCHEMA(payload)
    except vol.Invalid as err:
        raise _from_invalid(err) from err

    current_time = data.get(CONF_CURRENT_TIME)
    if current_time is None:
        current_time = now if now is not None else dt_util.now()

    bounds = data[CONF_BOUNDS]
    rates = data[CONF_RATES]
    boost = data.get(CONF_BOOST, {})

    return EvaluationRequest(
        current_time=current_time,
        bounds=Bounds(
            setpoint=bounds[CONF_SETPOINT],
            hysteresis=bounds[CONF_HYSTERESIS],
            max_adjustment=bounds[CONF_MAX_ADJUSTMENT],
            min_savings=bounds[CONF_MIN_SAVINGS],
        ),
        rates=ThermalRates(
            heat_minutes_per_degree=rates[CONF_HEAT_MINUTES_PER_DEGREE],
            cool_minutes_per_degree=rates[CONF_COOL_MINUTES_PER_DEGREE],
        ),
        adjustments=BoostAdjustments(
            heat_boost=boost.get(CONF_HEAT_BOOST, 0.0),
            cool_slack=boost.get(CONF_COOL_SLACK, 0.0),
        ),
        schedule=tuple(parse_price_data(data[CONF_SCHEDULE])),
        schedule_end=data.get(CONF_SCHEDULE_END),
    )


def format_decision(decision: Decision) -> DecisionPayloadDict:
    """Convert a decision to the output payload."""
    return {
        OUTPUT_TARGET_TEMPERATURE: decision.target_temperature,
        OUTPUT_ACTION: str(decision.action),
        OUTPUT_REASON: decision.reason,
    }


def format_error(err: HeatCapacitorError) -> ErrorPayloadDict:
    """Convert a failure to the tagged error payload."""
    return {
        OUTPUT_ERROR: {
            "code": err.code,
            "field": _PAYLOAD_FIELDS.get(err.field, err.field),
            "message": err.message,
        }
    }


def evaluate_payload(
    payload: Any,
    evaluator: Evaluator | None = None,
    now: datetime | None = None,
) -> DecisionPayloadDict | ErrorPayloadDict:
    """Evaluate one tick payload end to end.

    Args:
        payload: Raw tick dict
        evaluator: Evaluator to use (a default one is created if omitted)
        now: Tick time used when the payload carries no currentTime

    Returns:
        Decision payload, or tagged error payload on failure
    """
    if evaluator is None:
        evaluator = Evaluator()

    try:
        request = parse_request(payload, now)
        decision = evaluator.evaluate(request)
    except HeatCapacitorError as err:
        _LOGGER.warning("Tick rejected (%s): %s", err.code, err)
        return format_error(err)

    return format_decision(decision)
