"""Price schedule index.

Validates a price forecast and indexes its segments for lookup by time.
Segment i is valid on [start_i, start_i+1); the last segment extends
indefinitely unless the caller bounds the schedule with an explicit end.

Lookups are binary searches over UTC epoch seconds, so naive and aware
datetimes can be mixed and the cost per tick stays logarithmic in the
schedule length.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime

import numpy as np

from ..exceptions import EmptySchedule, InvalidConfig, InvalidSchedule, NoCoverage
from ..models import PricePoint
from ..utils.time_utils import to_epoch

_LOGGER = logging.getLogger(__name__)


class SegmentRange:
    """Lazy, finite and restartable view over consecutive segments.

    Each iteration starts from the first segment again, so the same range
    can be scanned several times (cheapest search, baseline lookup).
    """

    def __init__(self, points: Sequence[PricePoint], first: int, stop: int):
        """Initialize range over points[first:stop]."""
        self._points = points
        self._first = first
        self._stop = max(first, stop)

    def __iter__(self) -> Iterator[PricePoint]:
        for position in range(self._first, self._stop):
            yield self._points[position]

    def __len__(self) -> int:
        return self._stop - self._first

    def __bool__(self) -> bool:
        return self._stop > self._first

    def __repr__(self) -> str:
        return f"SegmentRange(first={self._first}, stop={self._stop})"


class PriceScheduleIndex:
    """Immutable, validated index over a price schedule."""

    def __init__(
        self,
        points: tuple[PricePoint, ...],
        starts: np.ndarray,
        end: float | None = None,
    ):
        """Initialize index. Use build() to validate raw input."""
        self._points = points
        self._starts = starts
        self._end = end

    @classmethod
    def build(
        cls,
        schedule: Iterable[PricePoint],
        end: datetime | None = None,
    ) -> "PriceScheduleIndex":
        """Validate a schedule and build the index.

        Args:
            schedule: Price segments ordered by strictly increasing start
            end: Optional end of the last segment (None = open-ended)

        Returns:
            PriceScheduleIndex ready for lookups

        Raises:
            EmptySchedule: Schedule has no segments
            InvalidSchedule: Entry is not a PricePoint, starts are unsorted or
                duplicated, or end is not after the last start
        """
        points = tuple(schedule)
        if not points:
            raise EmptySchedule("schedule", "must contain at least one price segment")

        for position, point in enumerate(points):
            if not isinstance(point, PricePoint):
                raise InvalidSchedule(
                    f"schedule[{position}]",
                    f"must be a PricePoint, got {type(point).__name__}",
                )

        starts = np.array([to_epoch(point.start) for point in points], dtype=float)
        steps = np.diff(starts)
        offending = np.flatnonzero(steps <= 0)
        if offending.size:
            position = int(offending[0]) + 1
            problem = "duplicate" if steps[offending[0]] == 0 else "out of order"
            raise InvalidSchedule(
                f"schedule[{position}].start",
                f"{problem} start {points[position].start.isoformat()}",
            )

        end_epoch = None
        if end is not None:
            end_epoch = to_epoch(end)
            if end_epoch <= starts[-1]:
                raise InvalidSchedule(
                    "schedule_end",
                    f"{end.isoformat()} is not after the last segment start "
                    f"{points[-1].start.isoformat()}",
                )

        _LOGGER.debug(
            "Indexed %d price segments from %s (%s)",
            len(points),
            points[0].start.isoformat(),
            "open-ended" if end is None else f"until {end.isoformat()}",
        )
        return cls(points, starts, end_epoch)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> tuple[PricePoint, ...]:
        """All segments in start order."""
        return self._points

    @property
    def first_start(self) -> datetime:
        """Start of the earliest segment."""
        return self._points[0].start

    def segment_at(self, moment: datetime, field: str = "current_time") -> PricePoint:
        """Get the segment whose validity interval contains a moment.

        Args:
            moment: Time to look up
            field: Input name reported if the moment is not covered

        Returns:
            PricePoint valid at the moment

        Raises:
            NoCoverage: Moment precedes the first segment or is past a bounded end
        """
        epoch = to_epoch(moment)
        position = int(np.searchsorted(self._starts, epoch, side="right")) - 1
        if position < 0:
            raise NoCoverage(
                field,
                f"{moment.isoformat()} precedes the first price segment "
                f"{self.first_start.isoformat()}",
            )
        if self._end is not None and epoch >= self._end:
            raise NoCoverage(field, f"{moment.isoformat()} is past the end of the price schedule")
        return self._points[position]

    def segments_between(self, start: datetime, end: datetime) -> SegmentRange:
        """Get the segments overlapping the closed span [start, end].

        Segments only partially inside the span are included. Parts of the
        span outside the schedule simply contribute no segments.

        Raises:
            InvalidConfig: end precedes start
        """
        start_epoch = to_epoch(start)
        end_epoch = to_epoch(end)
        if end_epoch < start_epoch:
            raise InvalidConfig(
                "window",
                f"end {end.isoformat()} precedes start {start.isoformat()}",
            )

        if self._end is not None and start_epoch >= self._end:
            return SegmentRange(self._points, 0, 0)

        first = max(int(np.searchsorted(self._starts, start_epoch, side="right")) - 1, 0)
        stop = int(np.searchsorted(self._starts, end_epoch, side="right"))
        return SegmentRange(self._points, first, stop)
