#!/usr/bin/env python3
"""Hot water tank simulation for the Heat Capacitor engine.

Replays the reference hot water scenario over every combination of
tick time, cooling behaviour and tank temperature, and prints one
semicolon-separated row per decision.

SCENARIO:
---------
- Setpoint 48°C, hysteresis 3°C (safety floor 45°C), minimum savings 1
- Heating: 45 min for 4°C
- Cooling: idle (3°C per day) or shower (4°C in 10 min)
- Prices: 10 from 00:00, 8 from 01:00
- Ticks: 00:30 (expensive) and 01:30 (cheap)
- Tank temperatures: 44-48°C

Expected behaviour:
  a) Tank inside the band (45-48°C): target >= setpoint in the cheap
     segment, setpoint - hysteresis in the expensive one
  b) Tank below the floor (44°C): target >= setpoint in every segment

USAGE EXAMPLES:
---------------
    python3 scripts/simulate_hot_water_day.py
    python3 scripts/simulate_hot_water_day.py --baseline-mode horizon_edge
    python3 scripts/simulate_hot_water_day.py --prices 10,8,12 --times 00:30,01:30,02:30
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Make the integration importable when run from a checkout
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from custom_components.heat_capacitor.const import (  # noqa: E402
    HOT_WATER_COOL_MINUTES_IDLE,
    HOT_WATER_COOL_MINUTES_SHOWER,
    HOT_WATER_HEAT_MINUTES_PER_DEGREE,
    HOT_WATER_HYSTERESIS,
    HOT_WATER_MIN_SAVINGS,
    HOT_WATER_SETPOINT,
    BaselineMode,
)
from custom_components.heat_capacitor.exceptions import HeatCapacitorError  # noqa: E402
from custom_components.heat_capacitor.models import (  # noqa: E402
    Bounds,
    EvaluationRequest,
    PricePoint,
    ThermalRates,
)
from custom_components.heat_capacitor.optimization import Evaluator  # noqa: E402
from custom_components.heat_capacitor.utils.temperature_utils import (  # noqa: E402
    derive_boost_adjustments,
)

DAY = datetime(2021, 10, 11, tzinfo=timezone(timedelta(hours=2)))
TANK_TEMPERATURES = (44.0, 45.0, 46.0, 47.0, 48.0)
COOLING_PROFILES = {
    "idle": HOT_WATER_COOL_MINUTES_IDLE,
    "shower": HOT_WATER_COOL_MINUTES_SHOWER,
}
CSV_HEADER = "tick;target;tank;setpoint;floor;heat_boost;cool_slack;cooling;price;action"


def _at(clock: str) -> datetime:
    hours, minutes = (int(part) for part in clock.split(":"))
    return DAY + timedelta(hours=hours, minutes=minutes)


def build_schedule(prices: list[float]) -> tuple[PricePoint, ...]:
    """Hourly price segments starting at midnight."""
    return tuple(
        PricePoint(start=DAY + timedelta(hours=hour), unit_price=price)
        for hour, price in enumerate(prices)
    )


def simulate(
    prices: list[float],
    times: list[str],
    max_adjustment: float,
    baseline_mode: BaselineMode,
) -> list[str]:
    """Evaluate every tick/cooling/temperature combination.

    Returns:
        CSV rows (without header). A failed tick keeps the previous target
        and reports the error code instead of an action.
    """
    evaluator = Evaluator(baseline_mode)
    schedule = build_schedule(prices)
    bounds = Bounds(
        setpoint=HOT_WATER_SETPOINT,
        hysteresis=HOT_WATER_HYSTERESIS,
        max_adjustment=max_adjustment,
        min_savings=HOT_WATER_MIN_SAVINGS,
    )

    rows = []
    tick = 0
    previous_target = bounds.setpoint
    for clock in times:
        current_time = _at(clock)
        for cooling_name, cool_minutes in COOLING_PROFILES.items():
            rates = ThermalRates(
                heat_minutes_per_degree=HOT_WATER_HEAT_MINUTES_PER_DEGREE,
                cool_minutes_per_degree=cool_minutes,
            )
            for tank_temp in TANK_TEMPERATURES:
                adjustments = derive_boost_adjustments(tank_temp, bounds.setpoint)
                request = EvaluationRequest(
                    current_time=current_time,
                    bounds=bounds,
                    rates=rates,
                    adjustments=adjustments,
                    schedule=schedule,
                )
                try:
                    decision = evaluator.evaluate(request)
                except HeatCapacitorError as err:
                    target, outcome, price = previous_target, err.code, ""
                else:
                    target = decision.target_temperature
                    outcome = str(decision.action)
                    price = f"{decision.savings.current.unit_price:g}"
                    previous_target = target

                rows.append(
                    f"{tick};{target:g};{tank_temp:g};{bounds.setpoint:g};{bounds.floor:g};"
                    f"{adjustments.heat_boost:g};{adjustments.cool_slack:g};{cooling_name};"
                    f"{price};{outcome}"
                )
                tick += 1

    return rows


def main():
    """Run the simulation and print the CSV trace."""
    parser = argparse.ArgumentParser(
        description="Simulate Heat Capacitor decisions for a hot water tank",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--prices",
        default="10,8",
        help="Comma-separated hourly prices starting at 00:00 (default: 10,8)",
    )
    parser.add_argument(
        "--times",
        default="00:30,01:30",
        help="Comma-separated tick times HH:MM (default: 00:30,01:30)",
    )
    parser.add_argument(
        "--max-adjustment",
        type=float,
        default=4.0,
        help="Maximum deviation from setpoint in °C (default: 4.0)",
    )
    parser.add_argument(
        "--baseline-mode",
        choices=[mode.value for mode in BaselineMode],
        default=BaselineMode.WINDOW_PEAK.value,
    )
    parser.add_argument("--debug", action="store_true", help="Log every decision step")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        rows = simulate(
            prices=[float(price) for price in args.prices.split(",")],
            times=args.times.split(","),
            max_adjustment=args.max_adjustment,
            baseline_mode=BaselineMode(args.baseline_mode),
        )
    except HeatCapacitorError as err:
        print(f"Invalid scenario: {err}", file=sys.stderr)
        return 1

    print(CSV_HEADER)
    for row in rows:
        print(row)
    return 0


if __name__ == "__main__":
    sys.exit(main())
