"""Transient values produced while a charge is being calculated."""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PassageEvent:
    """A single toll passage annotated with its raw fee.

    Attributes:
        timestamp: When the vehicle passed the toll station
        toll_fee: Fee for this passage before single-charge and daily cap
            rules (0 on toll-free dates)
    """

    timestamp: dt.datetime
    toll_fee: Decimal

    @property
    def sort_key(self) -> dt.datetime:
        """Chronological ordering key."""
        return self.timestamp

    @property
    def day(self) -> dt.date:
        return self.timestamp.date()


@dataclass(frozen=True)
class ChargeCluster:
    """Passages charged once under the single-charge rule.

    Attributes:
        start: Timestamp of the first passage in the cluster
        end: Timestamp of the last passage in the cluster
        charge: Highest fee among the cluster's passages
        passage_count: Number of passages folded into this charge
    """

    start: dt.datetime
    end: dt.datetime
    charge: Decimal
    passage_count: int = 1

    @property
    def day(self) -> dt.date:
        return self.start.date()
