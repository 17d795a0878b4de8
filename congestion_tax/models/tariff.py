"""Tariff data models for the congestion tax calculator.

This module defines the static tables the calculator runs against:
- TimeSegment: one time-of-day price band
- TaxRules: toll-free days, toll-free vehicles, single-charge rule and the
  maximum daily charge

JSON field names follow the camelCase keys of the tariff files; the models
can also be built from their snake_case Python names.
"""

import datetime as dt
from decimal import Decimal
from typing import FrozenSet, Optional, Tuple, Union

from pydantic import Field, field_validator

from congestion_tax.models.base import BaseDataModel
from congestion_tax.models.vehicle import VehicleType


def _to_decimal(v: Union[str, int, float, Decimal]) -> Decimal:
    """Convert a numeric value to Decimal without float artefacts.

    Raises:
        ValueError: If the value cannot be converted
    """
    if isinstance(v, Decimal):
        return v
    if isinstance(v, bool):
        raise ValueError(f"Cannot convert {v} to Decimal")
    try:
        return Decimal(str(v))
    except (ArithmeticError, ValueError, TypeError) as e:
        raise ValueError(f"Cannot convert {v} to Decimal: {e}") from e


class TimeSegment(BaseDataModel):
    """A band of the day with a fixed price.

    Both bounds are inclusive. A segment whose end is earlier than its start
    wraps past midnight (e.g. 18:30:00 to 05:59:59).

    Attributes:
        id: Identifier of the segment in the price table
        start: First time of day covered
        end: Last time of day covered
        price: Fee charged for a passage inside the band

    Example:
        >>> segment = TimeSegment(id="1", start="06:00:00", end="06:29:59", price=8)
        >>> segment.price
        Decimal('8')
        >>> segment.wraps_midnight
        False
    """

    id: str = Field(..., min_length=1, description="Segment identifier")
    start: dt.time = Field(..., description="First covered time of day")
    end: dt.time = Field(..., description="Last covered time of day")
    price: Decimal = Field(..., ge=0, description="Fee for a passage in this band")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("price", mode="before")
    @classmethod
    def convert_price(cls, v):
        return _to_decimal(v)

    @property
    def wraps_midnight(self) -> bool:
        """True if the segment continues into the next day."""
        return self.end < self.start


class PublicHoliday(BaseDataModel):
    """A toll-free calendar date.

    Attributes:
        date: The holiday itself
        name: Optional human readable name
    """

    date: dt.date = Field(..., description="Toll-free date")
    name: Optional[str] = Field(None, description="Holiday name")

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        """Accept plain dates as well as full timestamps.

        Tariff files may list holidays as "2021-04-02" or as
        "2021-04-02 00:00:00"; only the date part is kept.
        """
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str):
            try:
                return dt.datetime.strptime(v.strip()[:10], "%Y-%m-%d").date()
            except ValueError as e:
                raise ValueError(f"Invalid holiday date: {v!r}") from e
        return v


class TollFreeDays(BaseDataModel):
    """Calendar rules that make a whole date toll-free.

    Attributes:
        description: Free text describing the rule set
        dow: Toll-free weekday names (e.g. "Sat", "Sunday"), case-insensitive
        months: Toll-free month names (e.g. "Jul"), case-insensitive
        public_holidays: Toll-free dates
        public_holiday_eve: Number of days before each holiday that are
            also toll-free
    """

    description: Optional[str] = None
    dow: Tuple[str, ...] = Field(default=())
    months: Tuple[str, ...] = Field(default=())
    public_holidays: Tuple[PublicHoliday, ...] = Field(
        default=(), alias="publicHolidays"
    )
    public_holiday_eve: int = Field(default=0, ge=0, alias="publicHolidayEve")

    @field_validator("dow", "months")
    @classmethod
    def strip_names(cls, v: Tuple[str, ...], info) -> Tuple[str, ...]:
        names = tuple(name.strip() for name in v)
        if any(not name for name in names):
            raise ValueError(f"{info.field_name} cannot contain empty names")
        return names


class SingleCharge(BaseDataModel):
    """The single-charge rule.

    Passages within `time_threshold` minutes of the first passage of a
    window, on the same day, are charged once at the highest fee.
    """

    time_threshold: int = Field(..., gt=0, alias="timeThreshold")
    type: str = Field(default="highest", min_length=1)


class TaxRules(BaseDataModel):
    """Rule set applied on top of the time-of-day price table.

    Example:
        >>> rules = TaxRules.model_validate({
        ...     "maxDailyCharge": 60,
        ...     "tollFreeDays": {"dow": ["Sat", "Sun"], "months": ["Jul"]},
        ...     "tollFreeVehicles": ["bus", "emergency"],
        ...     "singleCharge": {"timeThreshold": 60},
        ... })
        >>> rules.max_daily_charge
        Decimal('60')
    """

    max_daily_charge: Decimal = Field(..., gt=0, alias="maxDailyCharge")
    toll_free_days: TollFreeDays = Field(
        default_factory=TollFreeDays, alias="tollFreeDays"
    )
    toll_free_vehicles: FrozenSet[VehicleType] = Field(
        default=frozenset(), alias="tollFreeVehicles"
    )
    single_charge: SingleCharge = Field(..., alias="singleCharge")

    @field_validator("max_daily_charge", mode="before")
    @classmethod
    def convert_max_daily_charge(cls, v):
        return _to_decimal(v)

    @field_validator("toll_free_vehicles", mode="before")
    @classmethod
    def normalize_vehicles(cls, v):
        """Vehicle tags are matched case-insensitively."""
        if isinstance(v, (list, tuple, set, frozenset)):
            return [item.strip().lower() if isinstance(item, str) else item for item in v]
        return v
