"""Decision engine for Heat Capacitor.

Pure Python decision logic over an immutable input snapshot: price window
resolution, savings evaluation and the temperature state machine.
"""

from .decision_engine import Decision, TemperatureDecisionEngine
from .evaluator import Evaluator, evaluate
from .reach_window import compute_window
from .savings_evaluator import SavingsEvaluator, SavingsResult
from .schedule_index import PriceScheduleIndex, SegmentRange

__all__ = [
    "Decision",
    "Evaluator",
    "PriceScheduleIndex",
    "SavingsEvaluator",
    "SavingsResult",
    "SegmentRange",
    "TemperatureDecisionEngine",
    "compute_window",
    "evaluate",
]
