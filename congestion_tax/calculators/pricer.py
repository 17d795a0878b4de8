"""Time-of-day pricing.

The price table is an ordered list of TimeSegment rows. A time of day is
priced by the first segment, in table order, whose closed interval contains
it. Comparisons are made at minute granularity; seconds are ignored.
"""

import datetime as dt
import logging
from decimal import Decimal
from typing import List, Sequence, Tuple, Union

from congestion_tax.calculators.time_utils import (
    MINUTES_PER_DAY,
    convert_time_to_minutes,
    parse_time_of_day,
)
from congestion_tax.exceptions import NoMatchingSegmentError
from congestion_tax.models.tariff import TimeSegment

logger = logging.getLogger(__name__)


def segment_contains(segment: TimeSegment, time: dt.time) -> bool:
    """Check whether a time of day falls inside a segment.

    A segment that wraps past midnight has 24 hours added to its end. A query
    earlier than the segment start is treated as belonging to the next day
    and gets 24 hours added too, so 05:30 lands inside 18:30 to 05:59.

    Args:
        segment: The price band
        time: Time of day to test

    Returns:
        True if start <= time <= end at minute granularity
    """
    start = convert_time_to_minutes(segment.start)
    end = convert_time_to_minutes(segment.end)
    query = convert_time_to_minutes(time)

    if segment.wraps_midnight:
        end += MINUTES_PER_DAY
    if time < segment.start:
        query += MINUTES_PER_DAY

    return start <= query <= end


class TimeOfDayPricer:
    """Looks up the price of a passage by its time of day.

    The table is copied into a tuple on construction and never modified.

    Example:
        >>> pricer = TimeOfDayPricer([
        ...     TimeSegment(id="1", start="06:00:00", end="17:59:59", price=8),
        ...     TimeSegment(id="2", start="18:00:00", end="05:59:59", price=0),
        ... ])
        >>> pricer.price_at("06:15")
        Decimal('8')
        >>> pricer.price_at(dt.time(23, 0))
        Decimal('0')
    """

    def __init__(self, segments: Sequence[TimeSegment]):
        self._segments: Tuple[TimeSegment, ...] = tuple(segments)

    @property
    def segments(self) -> Tuple[TimeSegment, ...]:
        return self._segments

    def segment_at(self, time: Union[str, dt.time]) -> TimeSegment:
        """Return the first segment covering the given time.

        Raises:
            NoMatchingSegmentError: If no segment covers the time
        """
        query = parse_time_of_day(time)
        for segment in self._segments:
            if segment_contains(segment, query):
                return segment
        logger.error(f"No price segment covers {query.isoformat()}")
        raise NoMatchingSegmentError(query.isoformat())

    def price_at(self, time: Union[str, dt.time]) -> Decimal:
        """Return the fee for a passage at the given time of day.

        Args:
            time: Time of day (dt.time, "HH:MM:SS" or "HH:MM")

        Returns:
            The price of the first matching segment

        Raises:
            NoMatchingSegmentError: If the table has a gap at this time
        """
        return self.segment_at(time).price

    def segments_covering(self, time: Union[str, dt.time]) -> List[TimeSegment]:
        """All segments covering the given time, in table order."""
        query = parse_time_of_day(time)
        return [s for s in self._segments if segment_contains(s, query)]

    def uncovered_minutes(self) -> List[int]:
        """Minutes since midnight that no segment covers."""
        return [
            minute
            for minute in range(MINUTES_PER_DAY)
            if not self.segments_covering(dt.time(minute // 60, minute % 60))
        ]
