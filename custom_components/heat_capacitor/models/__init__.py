"""Input snapshot entities and payload types."""

from .entities import (
    BoostAdjustments,
    Bounds,
    EvaluationRequest,
    PricePoint,
    ReachWindow,
    ThermalRates,
)

__all__ = [
    "BoostAdjustments",
    "Bounds",
    "EvaluationRequest",
    "PricePoint",
    "ReachWindow",
    "ThermalRates",
]
