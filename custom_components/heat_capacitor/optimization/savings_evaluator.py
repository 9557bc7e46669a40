"""Savings evaluator.

Decides whether the current price segment is the cheapest point of the reach
window and whether banking heat now saves at least the configured minimum
compared with the price the storage would otherwise face.

Algorithm:
1. Collect all segments overlapping the reach window
2. Cheapest = minimal price, ties broken by earliest start
3. Current counts as cheapest when it is that segment OR shares its price,
   so adjacent slots with the same price do not starve each other
4. Baseline = price compared against (see BaselineMode)
5. BOOST iff cheapest AND baseline - current >= min_savings, else HOLD
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from ..const import DEFAULT_BASELINE_MODE, BaselineMode, TemperatureAction
from ..exceptions import InvalidConfig, NoCoverage
from ..models import PricePoint, ReachWindow
from ..utils.time_utils import to_epoch
from .schedule_index import PriceScheduleIndex

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavingsResult:
    """Outcome of the savings evaluation for one tick."""

    action: TemperatureAction  # BOOST or HOLD
    current: PricePoint
    cheapest: PricePoint
    baseline: PricePoint
    savings: float  # baseline price - current price
    is_cheapest: bool
    segment_count: int  # Segments overlapping the reach window


class SavingsEvaluator:
    """Compare the current price against the rest of the reach window."""

    def __init__(self, baseline_mode: BaselineMode = DEFAULT_BASELINE_MODE):
        """Initialize evaluator.

        Args:
            baseline_mode: WINDOW_PEAK compares against the most expensive
                segment in the window, HORIZON_EDGE against the segment at
                the window's latest edge

        Raises:
            InvalidConfig: Unknown baseline mode
        """
        try:
            self.baseline_mode = BaselineMode(baseline_mode)
        except ValueError as err:
            choices = ", ".join(mode.value for mode in BaselineMode)
            raise InvalidConfig(
                "baseline_mode",
                f"must be one of {choices}, got {baseline_mode!r}",
            ) from err

    def evaluate(
        self,
        current_segment: PricePoint,
        window: ReachWindow,
        index: PriceScheduleIndex,
        min_savings: float,
    ) -> SavingsResult:
        """Evaluate whether boosting now is worthwhile.

        Args:
            current_segment: Segment valid at the tick time
            window: Reach window around the tick time
            index: Price schedule index
            min_savings: Minimum price difference required to boost

        Returns:
            SavingsResult with BOOST or HOLD

        Raises:
            InvalidConfig: min_savings is negative
            NoCoverage: No segment overlaps the window
        """
        if not math.isfinite(min_savings) or min_savings < 0:
            raise InvalidConfig("bounds.min_savings", f"must be >= 0, got {min_savings}")

        segments = list(index.segments_between(window.earliest, window.latest))
        if not segments:
            raise NoCoverage(
                "window",
                f"no price segment overlaps {window.earliest.isoformat()} → "
                f"{window.latest.isoformat()}",
            )

        prices = np.array([segment.unit_price for segment in segments], dtype=float)

        # argmin/argmax return the first occurrence, i.e. the earliest start
        cheapest = segments[int(np.argmin(prices))]
        if self.baseline_mode == BaselineMode.HORIZON_EDGE:
            baseline = segments[-1]
        else:
            baseline = segments[int(np.argmax(prices))]

        is_cheapest = (
            to_epoch(current_segment.start) == to_epoch(cheapest.start)
            or current_segment.unit_price == cheapest.unit_price
        )
        savings = baseline.unit_price - current_segment.unit_price

        if is_cheapest and savings >= min_savings:
            action = TemperatureAction.BOOST
        else:
            action = TemperatureAction.HOLD

        _LOGGER.debug(
            "Savings: current %.3f, cheapest %.3f @ %s, baseline %.3f (%s), "
            "savings %.3f (min %.3f) over %d segments → %s",
            current_segment.unit_price,
            cheapest.unit_price,
            cheapest.start.isoformat(),
            baseline.unit_price,
            self.baseline_mode,
            savings,
            min_savings,
            len(segments),
            action,
        )

        return SavingsResult(
            action=action,
            current=current_segment,
            cheapest=cheapest,
            baseline=baseline,
            savings=savings,
            is_cheapest=is_cheapest,
            segment_count=len(segments),
        )
