"""Data models for the congestion tax calculator.

This package contains:
- BaseDataModel: Immutable pydantic base class
- VehicleType: Closed enumeration of vehicle categories
- TimeSegment: One row of the time-of-day price table
- TaxRules: Exemption rules, single-charge rule and daily cap
- PassageEvent / ChargeCluster: Transient values used during a calculation
"""

from congestion_tax.models.base import BaseDataModel
from congestion_tax.models.passage import ChargeCluster, PassageEvent
from congestion_tax.models.tariff import (
    PublicHoliday,
    SingleCharge,
    TaxRules,
    TimeSegment,
    TollFreeDays,
)
from congestion_tax.models.vehicle import VehicleType

__all__ = [
    "BaseDataModel",
    "ChargeCluster",
    "PassageEvent",
    "PublicHoliday",
    "SingleCharge",
    "TaxRules",
    "TimeSegment",
    "TollFreeDays",
    "VehicleType",
]
