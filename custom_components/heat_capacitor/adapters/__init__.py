"""Adapters between raw runtime payloads and the decision engine."""

from .payload_adapter import evaluate_payload, format_decision, format_error, parse_request
from .price_adapter import parse_price_data

__all__ = [
    "evaluate_payload",
    "format_decision",
    "format_error",
    "parse_price_data",
    "parse_request",
]
