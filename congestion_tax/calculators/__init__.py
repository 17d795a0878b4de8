"""Calculator modules for the congestion tax pipeline."""

from congestion_tax.calculators.charges import (
    DailyCharge,
    aggregate_daily_charges,
    apply_single_charge,
    calculate_daily_charges,
    group_by_day,
    reduce_cluster,
)
from congestion_tax.calculators.classifier import classify_passages
from congestion_tax.calculators.clustering import cluster_by_interval
from congestion_tax.calculators.congestion_calculator import (
    ChargeBreakdown,
    CongestionTaxCalculator,
)
from congestion_tax.calculators.exemptions import ExemptionFilter
from congestion_tax.calculators.pricer import TimeOfDayPricer, segment_contains

__all__ = [
    # charges
    "DailyCharge",
    "aggregate_daily_charges",
    "apply_single_charge",
    "calculate_daily_charges",
    "group_by_day",
    "reduce_cluster",
    # classifier
    "classify_passages",
    # clustering
    "cluster_by_interval",
    # congestion_calculator
    "ChargeBreakdown",
    "CongestionTaxCalculator",
    # exemptions
    "ExemptionFilter",
    # pricer
    "TimeOfDayPricer",
    "segment_contains",
]
