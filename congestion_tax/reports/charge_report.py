"""Charge report generator for many vehicles at once.

Runs the calculator over a table of passages and returns the results as
pandas DataFrames:
- summary: one row per vehicle with its total
- daily: one row per vehicle and charged day

Input table columns: vehicle_id, vehicle_type, timestamp.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

import pandas as pd

from congestion_tax.calculators.congestion_calculator import CongestionTaxCalculator

logger = logging.getLogger(__name__)

PASSAGE_COLUMNS = ["vehicle_id", "vehicle_type", "timestamp"]
SUMMARY_COLUMNS = [
    "vehicle_id",
    "vehicle_type",
    "exempt",
    "passages",
    "days_charged",
    "total",
]
DAILY_COLUMNS = [
    "vehicle_id",
    "vehicle_type",
    "date",
    "passages",
    "windows",
    "subtotal",
    "charge",
    "capped",
]


@dataclass
class ChargeReportData:
    """Container for the report DataFrames.

    Attributes:
        summary: Per-vehicle totals
        daily: Per-vehicle, per-day charges
    """

    summary: pd.DataFrame
    daily: pd.DataFrame


def read_passages_csv(path: Union[str, Path]) -> pd.DataFrame:
    """Read a passages CSV file, keeping every value as a string.

    Raises:
        ValueError: If a required column is missing
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower() for c in df.columns]
    missing = [c for c in PASSAGE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Passages file is missing column(s): {', '.join(missing)}")
    for column in PASSAGE_COLUMNS:
        df[column] = df[column].str.strip()
    return df


class ChargeReportGenerator:
    """Generate per-vehicle charge reports.

    Example:
        >>> generator = ChargeReportGenerator(calculator)
        >>> report = generator.generate(passages_df)
        >>> report.summary["total"].sum()
        Decimal('115')
    """

    def __init__(self, calculator: CongestionTaxCalculator):
        self.calculator = calculator

    def generate(self, passages: pd.DataFrame) -> ChargeReportData:
        """Calculate charges for every vehicle in the passages table.

        Vehicles appear in the order they first occur in the input.

        Raises:
            ValueError: If a vehicle is listed with more than one type, a
                vehicle type is unknown or a timestamp is malformed
        """
        missing = [c for c in PASSAGE_COLUMNS if c not in passages.columns]
        if missing:
            raise ValueError(f"Passages table is missing column(s): {', '.join(missing)}")

        if passages.empty:
            return ChargeReportData(
                summary=pd.DataFrame(columns=SUMMARY_COLUMNS),
                daily=pd.DataFrame(columns=DAILY_COLUMNS),
            )

        summary_rows: List[dict] = []
        daily_rows: List[dict] = []

        for vehicle_id, group in passages.groupby("vehicle_id", sort=False):
            vehicle_types = group["vehicle_type"].str.lower().unique()
            if len(vehicle_types) != 1:
                raise ValueError(
                    f"Vehicle {vehicle_id} is listed with several types: "
                    f"{', '.join(sorted(vehicle_types))}"
                )

            breakdown = self.calculator.breakdown(
                vehicle_types[0], group["timestamp"].tolist()
            )

            for daily in breakdown.daily_charges:
                daily_rows.append(
                    {
                        "vehicle_id": vehicle_id,
                        "vehicle_type": breakdown.vehicle_type.value,
                        "date": daily.day.isoformat(),
                        "passages": sum(c.passage_count for c in daily.clusters),
                        "windows": len(daily.clusters),
                        "subtotal": daily.subtotal,
                        "charge": daily.charge,
                        "capped": daily.capped,
                    }
                )

            summary_rows.append(
                {
                    "vehicle_id": vehicle_id,
                    "vehicle_type": breakdown.vehicle_type.value,
                    "exempt": breakdown.exempt,
                    "passages": len(group),
                    "days_charged": sum(
                        1 for d in breakdown.daily_charges if d.charge > 0
                    ),
                    "total": breakdown.total,
                }
            )

        logger.info(
            f"Calculated charges for {len(summary_rows)} vehicle(s) "
            f"from {len(passages)} passage(s)"
        )

        return ChargeReportData(
            summary=pd.DataFrame(summary_rows, columns=SUMMARY_COLUMNS),
            daily=pd.DataFrame(daily_rows, columns=DAILY_COLUMNS),
        )
