"""Toll-free date and vehicle checks.

A date is toll-free if any of these hold, checked in this order:
1. Its weekday is listed in the rules (e.g. Saturday, Sunday)
2. Its month is listed in the rules (e.g. July)
3. It is a public holiday
4. It lies within `public_holiday_eve` days before a public holiday

Weekday and month names are compared case-insensitively and may be given
either abbreviated ("Sat", "Jul") or in full ("Saturday", "July").
"""

import datetime as dt
from typing import FrozenSet, Iterable, Optional, Union

from congestion_tax.calculators.time_utils import (
    month_name,
    name_forms,
    parse_timestamp,
    weekday_name,
)
from congestion_tax.models.tariff import TaxRules
from congestion_tax.models.vehicle import VehicleType

REASON_WEEKDAY = "weekday"
REASON_MONTH = "month"
REASON_PUBLIC_HOLIDAY = "public_holiday"
REASON_PUBLIC_HOLIDAY_EVE = "public_holiday_eve"


def _lowercase_set(names: Iterable[str]) -> FrozenSet[str]:
    return frozenset(name.strip().lower() for name in names)


def _as_date(moment: Union[str, dt.date, dt.datetime]) -> dt.date:
    if isinstance(moment, str):
        return parse_timestamp(moment).date()
    if isinstance(moment, dt.datetime):
        return moment.date()
    return moment


class ExemptionFilter:
    """Decides whether a date or a vehicle is exempt from the tax.

    The lookup sets are built once from the rules on construction.

    Example:
        >>> exemptions = ExemptionFilter(rules)
        >>> exemptions.is_toll_free_date("2019-04-06 12:18:53")  # a Saturday
        True
        >>> exemptions.is_toll_free_vehicle(VehicleType.CAR)
        False
    """

    def __init__(self, rules: TaxRules):
        days = rules.toll_free_days
        self._exempt_weekdays = _lowercase_set(days.dow)
        self._exempt_months = _lowercase_set(days.months)
        self._holidays = tuple(holiday.date for holiday in days.public_holidays)
        self._holiday_set = frozenset(self._holidays)
        self._eve_window = dt.timedelta(days=days.public_holiday_eve)
        self._exempt_vehicles = frozenset(rules.toll_free_vehicles)

    def exemption_reason(
        self, moment: Union[str, dt.date, dt.datetime]
    ) -> Optional[str]:
        """Name the first rule that makes a date toll-free.

        Args:
            moment: Timestamp string, datetime or date

        Returns:
            One of "weekday", "month", "public_holiday", "public_holiday_eve",
            or None if the date is taxed
        """
        day = _as_date(moment)

        if not self._exempt_weekdays.isdisjoint(name_forms(weekday_name(day))):
            return REASON_WEEKDAY

        if not self._exempt_months.isdisjoint(name_forms(month_name(day))):
            return REASON_MONTH

        if day in self._holiday_set:
            return REASON_PUBLIC_HOLIDAY

        if self._is_holiday_eve(day):
            return REASON_PUBLIC_HOLIDAY_EVE

        return None

    def is_toll_free_date(self, moment: Union[str, dt.date, dt.datetime]) -> bool:
        """True if no tax is charged on this date."""
        return self.exemption_reason(moment) is not None

    def is_toll_free_vehicle(self, vehicle_type: Union[str, VehicleType]) -> bool:
        """True if the vehicle type is listed as toll-free.

        Raises:
            ValueError: If vehicle_type is not a known VehicleType value
        """
        return VehicleType(vehicle_type) in self._exempt_vehicles

    def _is_holiday_eve(self, day: dt.date) -> bool:
        # Inclusive on both ends, so the holiday itself also matches.
        return any(
            holiday - self._eve_window <= day <= holiday for holiday in self._holidays
        )
