"""Tabular reports built on top of the calculator."""

from congestion_tax.reports.charge_report import (
    ChargeReportData,
    ChargeReportGenerator,
    read_passages_csv,
)

__all__ = ["ChargeReportData", "ChargeReportGenerator", "read_passages_csv"]
