"""Per-tick orchestrator.

Composes schedule index, reach window, savings evaluation and decision
engine. Validation runs first (entities validate on construction, the index
validates the schedule), so no decision logic runs on bad input. Failures
propagate unchanged; the evaluator never substitutes a default target.
"""

import logging

from ..const import DEFAULT_BASELINE_MODE, BaselineMode
from ..models import EvaluationRequest
from .decision_engine import Decision, TemperatureDecisionEngine
from .reach_window import compute_window
from .savings_evaluator import SavingsEvaluator
from .schedule_index import PriceScheduleIndex

_LOGGER = logging.getLogger(__name__)


class Evaluator:
    """Evaluate one tick at a time.

    Holds only immutable options, so one instance can serve any number of
    storage units and ticks concurrently.
    """

    def __init__(self, baseline_mode: BaselineMode = DEFAULT_BASELINE_MODE):
        """Initialize evaluator.

        Args:
            baseline_mode: Price the current segment is compared against
        """
        self._savings_evaluator = SavingsEvaluator(baseline_mode)
        self._decision_engine = TemperatureDecisionEngine()

    @property
    def baseline_mode(self) -> BaselineMode:
        """Configured baseline mode."""
        return self._savings_evaluator.baseline_mode

    def evaluate(self, request: EvaluationRequest) -> Decision:
        """Decide the target temperature for one tick.

        Args:
            request: Immutable input snapshot

        Returns:
            Decision with target temperature and diagnostics

        Raises:
            InvalidSchedule: Schedule empty, unsorted or with duplicate starts
            NoCoverage: current_time not covered by the schedule
            InvalidConfig: Rates, bounds or adjustments out of range
        """
        index = PriceScheduleIndex.build(request.schedule, request.schedule_end)
        current_segment = index.segment_at(request.current_time)
        window = compute_window(
            request.current_time,
            request.rates,
            request.bounds.max_adjustment,
        )
        savings = self._savings_evaluator.evaluate(
            current_segment,
            window,
            index,
            request.bounds.min_savings,
        )
        decision = self._decision_engine.decide(
            request.bounds,
            request.adjustments,
            savings,
            window,
        )

        _LOGGER.debug(
            "Tick %s: price %.3f, %s → %.1f°C",
            request.current_time.isoformat(),
            current_segment.unit_price,
            decision.action,
            decision.target_temperature,
        )
        return decision


def evaluate(
    request: EvaluationRequest,
    baseline_mode: BaselineMode = DEFAULT_BASELINE_MODE,
) -> Decision:
    """Evaluate a single request with a throwaway Evaluator."""
    return Evaluator(baseline_mode).evaluate(request)
