"""Passage classification.

Turns raw passage timestamps into PassageEvent values carrying their toll
fee, sorted chronologically for the clustering stage.
"""

import datetime as dt
import logging
from decimal import Decimal
from typing import Iterable, List, Union

from congestion_tax.calculators.exemptions import ExemptionFilter
from congestion_tax.calculators.pricer import TimeOfDayPricer
from congestion_tax.calculators.time_utils import parse_timestamp
from congestion_tax.models.passage import PassageEvent

logger = logging.getLogger(__name__)


def classify_passages(
    timestamps: Iterable[Union[str, dt.datetime]],
    pricer: TimeOfDayPricer,
    exemption_filter: ExemptionFilter,
) -> List[PassageEvent]:
    """Price each passage and sort the result chronologically.

    Passages on toll-free dates get a fee of 0; all others are priced by
    their time of day. The input order does not matter.

    Args:
        timestamps: Passage timestamps as YYYY-MM-DD HH:MM:SS strings or
            datetimes
        pricer: Time-of-day price lookup
        exemption_filter: Toll-free date rules

    Returns:
        PassageEvent list sorted by timestamp (stable for equal timestamps)

    Raises:
        ValueError: If a timestamp string is malformed
        NoMatchingSegmentError: If the price table has a gap

    Example:
        >>> events = classify_passages(
        ...     ["2013-02-07 15:27:00", "2013-02-07 06:23:27"], pricer, exemptions
        ... )
        >>> [str(e.toll_fee) for e in events]
        ['8', '13']
    """
    events = []
    for raw in timestamps:
        timestamp = parse_timestamp(raw)
        reason = exemption_filter.exemption_reason(timestamp)
        if reason is not None:
            logger.debug(f"Passage at {timestamp} is toll-free ({reason})")
            toll_fee = Decimal("0")
        else:
            toll_fee = pricer.price_at(timestamp.time())
        events.append(PassageEvent(timestamp=timestamp, toll_fee=toll_fee))

    return sorted(events, key=lambda e: e.sort_key)
