"""Single-charge window clustering.

Groups chronologically sorted passages into windows that are charged once.
A window is anchored at its first passage; later passages join while they
are on the anchor's calendar day and no more than the threshold minutes
after the anchor. Windows never slide and never cross midnight.
"""

from typing import List, Sequence

from congestion_tax.calculators.time_utils import is_same_day, minutes_between
from congestion_tax.models.passage import PassageEvent


def cluster_by_interval(
    events: Sequence[PassageEvent], threshold_minutes: int
) -> List[List[PassageEvent]]:
    """Partition sorted passages into single-charge windows.

    Args:
        events: Passages sorted by timestamp
        threshold_minutes: Maximum minutes between a window's anchor and any
            passage in the window

    Returns:
        List of windows, each a non-empty list of passages in input order

    Raises:
        ValueError: If threshold_minutes is negative

    Example:
        >>> # 15:47, 16:01 and 16:48 with a 60 minute threshold
        >>> [len(c) for c in cluster_by_interval(events, 60)]
        [2, 1]
    """
    if threshold_minutes < 0:
        raise ValueError(f"threshold_minutes must be >= 0, got {threshold_minutes}")

    clusters: List[List[PassageEvent]] = []
    current: List[PassageEvent] = []

    for event in events:
        if not current:
            current.append(event)
            continue

        anchor = current[0]
        joins_window = (
            is_same_day(anchor.timestamp, event.timestamp)
            and minutes_between(anchor.timestamp, event.timestamp) <= threshold_minutes
        )

        if joins_window:
            current.append(event)
        else:
            clusters.append(current)
            current = [event]

    if current:
        clusters.append(current)

    return clusters
