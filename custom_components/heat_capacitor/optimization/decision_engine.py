"""Temperature decision engine.

Small state machine turning bounds, live adjustments and the savings outcome
into the target temperature. Stateless across ticks: every call is computed
from its inputs only.

Priority order:
1. FORCED_HEAT - storage below safety floor (cool_slack > hysteresis):
   target = setpoint + heat_boost, whatever the price
2. BOOST - current segment is the cheapest and saves enough:
   target = setpoint + heat_boost
3. HOLD - coast: target = setpoint - hysteresis

Every target is clamped to [setpoint - max_adjustment, setpoint + max_adjustment].
"""

import logging
from dataclasses import dataclass

from ..const import TemperatureAction
from ..models import BoostAdjustments, Bounds, ReachWindow
from .savings_evaluator import SavingsResult

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    """Result of one tick.

    target_temperature is the contract output; the remaining fields explain
    how it was reached (for sensors, traces and logs).
    """

    target_temperature: float  # °C
    action: TemperatureAction
    reason: str  # Human-readable explanation
    window: ReachWindow | None = None
    savings: SavingsResult | None = None


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class TemperatureDecisionEngine:
    """Decide the target temperature from bounds, adjustments and savings."""

    def decide(
        self,
        bounds: Bounds,
        adjustments: BoostAdjustments,
        savings: SavingsResult,
        window: ReachWindow | None = None,
    ) -> Decision:
        """Select state and target temperature.

        Args:
            bounds: Setpoint, hysteresis and limits
            adjustments: heat_boost/cool_slack derived from the live temperature
            savings: Savings evaluation for the current segment
            window: Reach window used, attached to the decision for diagnostics

        Returns:
            Decision with a target inside the adjustment bounds
        """
        if adjustments.cool_slack > bounds.hysteresis:
            action = TemperatureAction.FORCED_HEAT
            target = _clamp(
                bounds.setpoint + adjustments.heat_boost,
                bounds.lowest_target,
                bounds.highest_target,
            )
            reason = (
                f"FORCED_HEAT: cooled {adjustments.cool_slack:.1f}°C below setpoint, "
                f"beyond hysteresis {bounds.hysteresis:.1f}°C (floor {bounds.floor:.1f}°C)"
            )
            _LOGGER.info(
                "Safety floor breached (slack %.1f > hysteresis %.1f), forcing target %.1f°C",
                adjustments.cool_slack,
                bounds.hysteresis,
                target,
            )
        elif savings.action == TemperatureAction.BOOST:
            action = TemperatureAction.BOOST
            target = _clamp(
                bounds.setpoint + adjustments.heat_boost,
                bounds.lowest_target,
                bounds.highest_target,
            )
            reason = (
                f"BOOST: cheapest price {savings.current.unit_price:.3f} in reach window, "
                f"saves {savings.savings:.3f} vs baseline {savings.baseline.unit_price:.3f}"
            )
        else:
            action = TemperatureAction.HOLD
            target = max(bounds.floor, bounds.lowest_target)
            if savings.is_cheapest:
                reason = (
                    f"HOLD: savings {savings.savings:.3f} below minimum "
                    f"vs baseline {savings.baseline.unit_price:.3f}"
                )
            else:
                reason = (
                    f"HOLD: cheaper price {savings.cheapest.unit_price:.3f} at "
                    f"{savings.cheapest.start.isoformat()} within reach"
                )

        _LOGGER.debug("%s → target %.1f°C", reason, target)

        return Decision(
            target_temperature=target,
            action=action,
            reason=reason,
            window=window,
            savings=savings,
        )
