"""Consistency checks for the price table and tax rules.

Pydantic already rejects malformed rows. This validator looks at the tables
as a whole:
- Every minute of the day must be covered by a price segment
- Overlapping segments are reported, since only the first one is used
- Weekday and month names must be recognisable
- Public holidays should be unique and in chronological order
"""

import datetime as dt
import logging
from collections import Counter
from typing import List, Sequence, Tuple

from congestion_tax.calculators.pricer import TimeOfDayPricer
from congestion_tax.calculators.time_utils import (
    MINUTES_PER_DAY,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    format_minutes,
    name_forms,
)
from congestion_tax.models.tariff import TaxRules, TimeSegment
from congestion_tax.models.vehicle import VehicleType
from congestion_tax.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

SUPPORTED_SINGLE_CHARGE_TYPES = ("highest",)

_KNOWN_WEEKDAYS = frozenset(form for n in WEEKDAY_NAMES for form in name_forms(n))
_KNOWN_MONTHS = frozenset(form for n in MONTH_NAMES for form in name_forms(n))


def _minute_ranges(minutes: Sequence[int]) -> List[Tuple[int, int]]:
    """Collapse sorted minutes into inclusive (first, last) runs.

    A run touching midnight on both sides is reported as one wrapping run,
    e.g. (1110, 359) for 18:30-05:59.
    """
    ranges: List[Tuple[int, int]] = []
    for minute in minutes:
        if ranges and minute == ranges[-1][1] + 1:
            ranges[-1] = (ranges[-1][0], minute)
        else:
            ranges.append((minute, minute))
    if len(ranges) > 1 and ranges[0][0] == 0 and ranges[-1][1] == MINUTES_PER_DAY - 1:
        ranges[0] = (ranges.pop()[0], ranges[0][1])
    return ranges


class TariffValidator:
    """Validates a price table and a rule set.

    Example:
        >>> validator = TariffValidator()
        >>> report = validator.validate(segments, rules)
        >>> report.is_valid()
        True
    """

    def validate(
        self, segments: Sequence[TimeSegment], rules: TaxRules
    ) -> ValidationReport:
        """Run all checks and return a merged report."""
        report = self.validate_time_segments(segments)
        report.merge(self.validate_tax_rules(rules))
        logger.info(f"Tariff validation finished: {report.summary()}")
        return report

    def validate_time_segments(
        self, segments: Sequence[TimeSegment]
    ) -> ValidationReport:
        report = ValidationReport()

        if not segments:
            report.add_error("segments", "Price table is empty", [])
            return report

        for segment_id, count in Counter(s.id for s in segments).items():
            if count > 1:
                report.add_error(
                    "segments.id",
                    f"Segment id is used {count} times",
                    segment_id,
                )

        pricer = TimeOfDayPricer(segments)
        for first, last in _minute_ranges(pricer.uncovered_minutes()):
            report.add_error(
                "segments",
                f"No segment covers {format_minutes(first)}-{format_minutes(last)}",
                format_minutes(first),
            )

        overlaps: List[int] = []
        for minute in range(MINUTES_PER_DAY):
            covering = pricer.segments_covering(dt.time(minute // 60, minute % 60))
            if len(covering) > 1:
                overlaps.append(minute)
        for first, last in _minute_ranges(overlaps):
            covering = pricer.segments_covering(dt.time(first // 60, first % 60))
            report.add_warning(
                "segments",
                f"Segments overlap at {format_minutes(first)}-{format_minutes(last)}; "
                f"segment {covering[0].id} takes precedence",
                format_minutes(first),
                context={"segments": ", ".join(s.id for s in covering)},
            )

        return report

    def validate_tax_rules(self, rules: TaxRules) -> ValidationReport:
        report = ValidationReport()
        days = rules.toll_free_days

        for name in days.dow:
            if name.lower() not in _KNOWN_WEEKDAYS:
                report.add_error("tollFreeDays.dow", "Unknown weekday name", name)

        for name in days.months:
            if name.lower() not in _KNOWN_MONTHS:
                report.add_error("tollFreeDays.months", "Unknown month name", name)

        holiday_dates = [h.date for h in days.public_holidays]
        for day, count in Counter(holiday_dates).items():
            if count > 1:
                report.add_warning(
                    "tollFreeDays.publicHolidays",
                    f"Holiday listed {count} times",
                    day.isoformat(),
                )
        if holiday_dates != sorted(holiday_dates):
            report.add_warning(
                "tollFreeDays.publicHolidays",
                "Holidays are not in chronological order",
                None,
            )

        if rules.single_charge.type.lower() not in SUPPORTED_SINGLE_CHARGE_TYPES:
            report.add_warning(
                "singleCharge.type",
                "Only the 'highest' single-charge rule is applied",
                rules.single_charge.type,
            )

        if VehicleType.CAR in rules.toll_free_vehicles:
            report.add_info(
                "tollFreeVehicles",
                "Cars are listed as toll-free vehicles",
                VehicleType.CAR.value,
            )

        return report
