"""Single-charge reduction and daily aggregation.

This module implements the last two pipeline stages:
- Reducing each single-charge window to one charge (its highest fee)
- Grouping charges by calendar day and capping each day's total
"""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

from congestion_tax.models.passage import ChargeCluster, PassageEvent


@dataclass(frozen=True)
class DailyCharge:
    """Charges for one calendar day.

    Attributes:
        day: The calendar date
        clusters: Single-charge windows starting on this day
        subtotal: Sum of the windows' charges before the cap
        charge: Amount due for the day, min(subtotal, max_daily_charge)

    Example:
        >>> daily = DailyCharge(
        ...     day=dt.date(2013, 2, 8),
        ...     clusters=(),
        ...     subtotal=Decimal("70"),
        ...     charge=Decimal("60"),
        ... )
        >>> daily.capped
        True
    """

    day: dt.date
    clusters: Tuple[ChargeCluster, ...]
    subtotal: Decimal
    charge: Decimal

    @property
    def capped(self) -> bool:
        return self.charge < self.subtotal


def reduce_cluster(cluster: Sequence[PassageEvent]) -> ChargeCluster:
    """Reduce a single-charge window to one charge.

    Args:
        cluster: Passages in chronological order

    Returns:
        ChargeCluster spanning the first to last passage, charged at the
        highest fee in the window

    Raises:
        ValueError: If the cluster is empty
    """
    if not cluster:
        raise ValueError("Cannot reduce an empty cluster")

    return ChargeCluster(
        start=cluster[0].timestamp,
        end=cluster[-1].timestamp,
        charge=max(event.toll_fee for event in cluster),
        passage_count=len(cluster),
    )


def apply_single_charge(
    clusters: Sequence[Sequence[PassageEvent]],
) -> List[ChargeCluster]:
    """Reduce every window, keeping their order."""
    return [reduce_cluster(cluster) for cluster in clusters]


def group_by_day(
    charge_clusters: Sequence[ChargeCluster],
) -> Dict[dt.date, List[ChargeCluster]]:
    """Group charges by the date their window starts on.

    Days appear in the order they are first seen.
    """
    grouped: Dict[dt.date, List[ChargeCluster]] = {}
    for cluster in charge_clusters:
        grouped.setdefault(cluster.day, []).append(cluster)
    return grouped


def calculate_daily_charges(
    charge_clusters: Sequence[ChargeCluster], max_daily_charge: Decimal
) -> List[DailyCharge]:
    """Sum the charges of each day and cap them independently.

    Args:
        charge_clusters: Reduced single-charge windows
        max_daily_charge: Cap applied to each day's sum

    Returns:
        One DailyCharge per day, in first-seen order

    Raises:
        ValueError: If max_daily_charge is negative
    """
    if max_daily_charge < 0:
        raise ValueError(f"max_daily_charge must be >= 0, got {max_daily_charge}")

    daily_charges = []
    for day, clusters in group_by_day(charge_clusters).items():
        subtotal = sum((c.charge for c in clusters), Decimal("0"))
        daily_charges.append(
            DailyCharge(
                day=day,
                clusters=tuple(clusters),
                subtotal=subtotal,
                charge=min(subtotal, max_daily_charge),
            )
        )
    return daily_charges


def aggregate_daily_charges(
    charge_clusters: Sequence[ChargeCluster], max_daily_charge: Decimal
) -> Decimal:
    """Total charge over all days, each day capped at max_daily_charge.

    Example:
        >>> # 70 on one day and 21 on another, capped at 60
        >>> aggregate_daily_charges(clusters, Decimal("60"))
        Decimal('81')
    """
    daily_charges = calculate_daily_charges(charge_clusters, max_daily_charge)
    return sum((d.charge for d in daily_charges), Decimal("0"))
