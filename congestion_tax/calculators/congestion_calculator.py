"""Congestion tax calculator.

This module wires the pipeline stages together:

1. Exempt vehicles are charged nothing and skip all other stages
2. Passages are priced and sorted (classifier)
3. Passages are grouped into single-charge windows (clustering)
4. Each window is charged once at its highest fee (charges)
5. Charges are summed per day and capped (charges)

The price table and tax rules are injected, so tests and callers can run
the calculator against substitute tables.
"""

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple, Union

from congestion_tax.calculators.charges import (
    DailyCharge,
    aggregate_daily_charges,
    apply_single_charge,
    calculate_daily_charges,
)
from congestion_tax.calculators.classifier import classify_passages
from congestion_tax.calculators.clustering import cluster_by_interval
from congestion_tax.calculators.exemptions import ExemptionFilter
from congestion_tax.calculators.pricer import TimeOfDayPricer
from congestion_tax.models.passage import ChargeCluster
from congestion_tax.models.tariff import TaxRules, TimeSegment
from congestion_tax.models.vehicle import VehicleType
from congestion_tax.utils.logging_utils import (
    LogContext,
    generate_correlation_id,
    log_function_call,
)

if TYPE_CHECKING:
    from congestion_tax.config.settings import CongestionTaxConfig

logger = logging.getLogger(__name__)

Timestamp = Union[str, dt.datetime]


@dataclass(frozen=True)
class ChargeBreakdown:
    """Full result of a calculation.

    Attributes:
        vehicle_type: The vehicle the charge was calculated for
        exempt: True if the vehicle type is toll-free
        daily_charges: Per-day charges in chronological order
        total: Sum of the capped daily charges

    Example:
        >>> breakdown = calculator.breakdown(VehicleType.CAR, passages)
        >>> breakdown.total == sum(d.charge for d in breakdown.daily_charges)
        True
    """

    vehicle_type: VehicleType
    exempt: bool
    daily_charges: Tuple[DailyCharge, ...]
    total: Decimal


class CongestionTaxCalculator:
    """Calculates the congestion tax owed for a vehicle's passages.

    Calculations share no mutable state, so one calculator can serve
    concurrent callers.

    Attributes:
        pricer: Time-of-day price lookup
        rules: Tax rules (single-charge threshold, daily cap, exemptions)
        exemption_filter: Toll-free date and vehicle checks built from rules

    Example:
        >>> calculator = CongestionTaxCalculator.from_tables(segments, rules)
        >>> calculator.calculate(
        ...     VehicleType.CAR, ["2010-08-25 15:00:28", "2010-08-25 15:35:08"]
        ... )
        Decimal('18')
    """

    def __init__(
        self,
        pricer: TimeOfDayPricer,
        rules: TaxRules,
        exemption_filter: Optional[ExemptionFilter] = None,
    ):
        self.pricer = pricer
        self.rules = rules
        self.exemption_filter = exemption_filter or ExemptionFilter(rules)

    @classmethod
    def from_tables(
        cls, segments: Sequence[TimeSegment], rules: TaxRules
    ) -> "CongestionTaxCalculator":
        """Build a calculator from a price table and a rule set."""
        return cls(TimeOfDayPricer(segments), rules)

    @classmethod
    def from_config(
        cls, config: Optional["CongestionTaxConfig"] = None
    ) -> "CongestionTaxCalculator":
        """Build a calculator from the tariff files named in the configuration.

        Args:
            config: Configuration to use; the global configuration if None

        Raises:
            TariffConfigurationError: If a tariff file is missing or invalid
        """
        from congestion_tax.config.settings import get_config
        from congestion_tax.readers.tariff_reader import TariffReader

        config = config or get_config()
        reader = TariffReader(config.prices_file, config.rules_file)
        return cls.from_tables(reader.read_time_segments(), reader.read_tax_rules())

    @log_function_call
    def calculate(
        self, vehicle_type: Union[str, VehicleType], timestamps: Iterable[Timestamp]
    ) -> Decimal:
        """Calculate the total congestion tax for a vehicle.

        Args:
            vehicle_type: Vehicle category (VehicleType or its string value)
            timestamps: Passage timestamps in any order

        Returns:
            Total charge; 0 for exempt vehicles and for no passages

        Raises:
            ValueError: If the vehicle type is unknown or a timestamp is
                malformed
            NoMatchingSegmentError: If the price table has a gap
        """
        vehicle_type = VehicleType(vehicle_type)
        if self.exemption_filter.is_toll_free_vehicle(vehicle_type):
            return Decimal("0")

        with LogContext(
            correlation_id=generate_correlation_id(), vehicle_type=vehicle_type.value
        ):
            charge_clusters = self._charge_clusters(timestamps)
            total = aggregate_daily_charges(
                charge_clusters, self.rules.max_daily_charge
            )
            logger.debug(
                f"Charged {total} for {len(charge_clusters)} single-charge window(s)"
            )
            return total

    def breakdown(
        self, vehicle_type: Union[str, VehicleType], timestamps: Iterable[Timestamp]
    ) -> ChargeBreakdown:
        """Calculate the charge together with its per-day breakdown.

        Same rules as calculate(); the total always equals calculate()'s
        result for the same input.
        """
        vehicle_type = VehicleType(vehicle_type)
        if self.exemption_filter.is_toll_free_vehicle(vehicle_type):
            return ChargeBreakdown(
                vehicle_type=vehicle_type,
                exempt=True,
                daily_charges=(),
                total=Decimal("0"),
            )

        with LogContext(
            correlation_id=generate_correlation_id(), vehicle_type=vehicle_type.value
        ):
            daily_charges = calculate_daily_charges(
                self._charge_clusters(timestamps), self.rules.max_daily_charge
            )
            total = sum((d.charge for d in daily_charges), Decimal("0"))
            logger.debug(f"Charged {total} over {len(daily_charges)} day(s)")

        return ChargeBreakdown(
            vehicle_type=vehicle_type,
            exempt=False,
            daily_charges=tuple(daily_charges),
            total=total,
        )

    def _charge_clusters(self, timestamps: Iterable[Timestamp]) -> List[ChargeCluster]:
        events = classify_passages(timestamps, self.pricer, self.exemption_filter)
        windows = cluster_by_interval(events, self.rules.single_charge.time_threshold)
        return apply_single_charge(windows)
