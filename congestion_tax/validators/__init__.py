"""Validation of tariff tables."""

from congestion_tax.validators.tariff_validator import TariffValidator
from congestion_tax.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "TariffValidator",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
]
