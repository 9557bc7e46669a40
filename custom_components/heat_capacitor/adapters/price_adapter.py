"""Price curve adapter.

Parses provider price curves into PricePoint objects. Accepts either a plain
list of entries or a provider payload wrapping them:

    [{"start": "2021-10-11T00:00:00.000+02:00", "value": 10}, ...]
    {"source": "Tibber", "priceData": [{"start": ..., "value": ...}, ...]}

Prices are used exactly as the provider delivers them (no unit conversion).
Unlike a display integration, malformed entries are NOT skipped: a hole in
the curve would shift which segment is considered cheapest, so the whole
schedule is rejected with the offending entry named. Ordering is left
untouched and checked by PriceScheduleIndex.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from ..const import (
    PRICE_KEY_DATA,
    PRICE_KEY_PRICE,
    PRICE_KEY_SOURCE,
    PRICE_KEY_START,
    PRICE_KEY_VALUE,
)
from ..exceptions import InvalidSchedule
from ..models import PricePoint
from ..utils.time_utils import parse_timestamp

_LOGGER = logging.getLogger(__name__)


def _unwrap(raw: Any) -> tuple[list[Any], str | None]:
    """Get the entry list and source name from a raw price payload."""
    if isinstance(raw, Mapping):
        entries = raw.get(PRICE_KEY_DATA)
        if not isinstance(entries, (list, tuple)):
            raise InvalidSchedule(
                f"schedule.{PRICE_KEY_DATA}",
                f"must be a list of price entries, got {type(entries).__name__}",
            )
        return list(entries), raw.get(PRICE_KEY_SOURCE)
    if isinstance(raw, (list, tuple)):
        return list(raw), None
    raise InvalidSchedule(
        "schedule",
        f"must be a list of price entries or a provider payload, got {type(raw).__name__}",
    )


def parse_price_data(raw: Any) -> list[PricePoint]:
    """Parse a raw price curve.

    Args:
        raw: List of {start, value} dicts, or a dict with a priceData list

    Returns:
        PricePoints in input order

    Raises:
        InvalidSchedule: Payload shape is wrong or an entry cannot be parsed
    """
    entries, source = _unwrap(raw)
    points: list[PricePoint] = []

    for position, item in enumerate(entries):
        if not isinstance(item, Mapping):
            raise InvalidSchedule(
                f"schedule[{position}]",
                f"must be an object with start and value, got {type(item).__name__}",
            )

        raw_start = item.get(PRICE_KEY_START)
        try:
            start = parse_timestamp(raw_start)
        except ValueError as err:
            raise InvalidSchedule(f"schedule[{position}].start", str(err)) from err
        if start is None:
            raise InvalidSchedule(
                f"schedule[{position}].start",
                f"expected an ISO 8601 timestamp, got {raw_start!r}",
            )

        raw_value = item.get(PRICE_KEY_VALUE, item.get(PRICE_KEY_PRICE))
        if isinstance(raw_value, bool):
            raise InvalidSchedule(f"schedule[{position}].value", "expected a number, got bool")
        try:
            price = float(raw_value)
        except (TypeError, ValueError) as err:
            raise InvalidSchedule(
                f"schedule[{position}].value",
                f"expected a number, got {raw_value!r}",
            ) from err
        if not math.isfinite(price):
            raise InvalidSchedule(f"schedule[{position}].value", f"must be finite, got {price}")

        points.append(PricePoint(start=start, unit_price=price))

    _LOGGER.debug("Parsed %d price segments from %s", len(points), source or "payload")
    return points
