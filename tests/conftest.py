"""Pytest configuration for Heat Capacitor tests."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add repository root to path for custom_components imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from custom_components.heat_capacitor.models import (  # noqa: E402
    BoostAdjustments,
    Bounds,
    EvaluationRequest,
    PricePoint,
    ThermalRates,
)

# Reference day of the hot water scenario (prices published in CEST)
CEST = timezone(timedelta(hours=2))
REFERENCE_DAY = datetime(2021, 10, 11, tzinfo=CEST)


def at(clock: str, day: datetime = REFERENCE_DAY) -> datetime:
    """Build a timestamp on the reference day from "HH:MM"."""
    hours, minutes = (int(part) for part in clock.split(":"))
    return day + timedelta(hours=hours, minutes=minutes)


def create_schedule(prices, step_minutes: int = 60, start: datetime = REFERENCE_DAY):
    """Create consecutive price segments starting at midnight.

    Args:
        prices: Price per segment
        step_minutes: Segment length (60 = hourly, 15 = quarterly)
        start: Start of the first segment

    Returns:
        Tuple of PricePoint objects
    """
    return tuple(
        PricePoint(start=start + timedelta(minutes=i * step_minutes), unit_price=price)
        for i, price in enumerate(prices)
    )


def create_request(
    current_time: datetime,
    prices=(10.0, 8.0),
    *,
    setpoint: float = 48.0,
    hysteresis: float = 3.0,
    max_adjustment: float = 3.0,
    min_savings: float = 1.0,
    heat_minutes_per_degree: float = 45 / 4,
    cool_minutes_per_degree: float = 20.0,
    heat_boost: float = 0.0,
    cool_slack: float = 0.0,
    schedule=None,
    schedule_end: datetime | None = None,
) -> EvaluationRequest:
    """Create an evaluation request for the hot water reference scenario.

    Defaults give a reach window of 60 min behind and 33.75 min ahead, which
    spans both hourly segments at 00:30 and at 01:30.
    """
    return EvaluationRequest(
        current_time=current_time,
        bounds=Bounds(
            setpoint=setpoint,
            hysteresis=hysteresis,
            max_adjustment=max_adjustment,
            min_savings=min_savings,
        ),
        rates=ThermalRates(
            heat_minutes_per_degree=heat_minutes_per_degree,
            cool_minutes_per_degree=cool_minutes_per_degree,
        ),
        adjustments=BoostAdjustments(heat_boost=heat_boost, cool_slack=cool_slack),
        schedule=create_schedule(prices) if schedule is None else schedule,
        schedule_end=schedule_end,
    )


@pytest.fixture
def make_request():
    """Factory fixture for evaluation requests."""
    return create_request


@pytest.fixture
def make_schedule():
    """Factory fixture for price schedules."""
    return create_schedule


@pytest.fixture
def clock():
    """Factory fixture for reference-day timestamps."""
    return at


@pytest.fixture
def tick_payload():
    """Raw tick payload for 00:30 on the reference day."""
    return {
        "currentTime": "2021-10-11T00:30:00.000+02:00",
        "bounds": {"setpoint": 48, "hysteresis": 3, "maxAdjustment": 3, "minSavings": 1},
        "rates": {"heatMinutesPerDegree": 45 / 4, "coolMinutesPerDegree": 20},
        "boost": {"heatBoost": 0, "coolSlack": 0},
        "schedule": [
            {"start": "2021-10-11T00:00:00.000+02:00", "value": 10},
            {"start": "2021-10-11T01:00:00.000+02:00", "value": 8},
        ],
    }
