"""Unit tests for the congestion tax calculator."""

import datetime as dt
from decimal import Decimal

import pytest

from congestion_tax.calculators.congestion_calculator import (
    ChargeBreakdown,
    CongestionTaxCalculator,
)
from congestion_tax.exceptions import NoMatchingSegmentError, TariffConfigurationError
from congestion_tax.models.tariff import TimeSegment
from congestion_tax.models.vehicle import VehicleType

GOTHENBURG_2013 = [
    "2013-01-14 21:00:00",
    "2013-01-15 21:00:00",
    "2013-02-07 06:23:27",
    "2013-02-07 15:27:00",
    "2013-02-08 06:27:00",
    "2013-02-08 06:20:27",
    "2013-02-08 14:35:00",
    "2013-02-08 15:29:00",
    "2013-02-08 15:47:00",
    "2013-02-08 16:01:00",
    "2013-02-08 16:48:00",
    "2013-02-08 17:49:00",
    "2013-02-08 18:29:00",
    "2013-02-08 18:35:00",
    "2013-03-26 14:25:00",
    "2013-03-28 14:07:27",
]

BUSY_DAY = [
    "2010-08-25 06:30:28",
    "2010-08-25 08:00:28",
    "2010-08-25 10:05:18",
    "2010-08-25 12:15:25",
    "2010-08-25 14:05:11",
    "2010-08-25 16:35:08",
    "2010-08-25 18:08:21",
]


class TestCalculate:
    """Test complete calculations with the Gothenburg tables."""

    def test_weekend_passages(self, calculator):
        total = calculator.calculate(
            VehicleType.CAR, ["2019-04-06 12:18:53", "2018-09-23 17:12:35"]
        )

        assert total == Decimal("0")

    def test_public_holidays(self, calculator):
        total = calculator.calculate(
            VehicleType.CAR, ["2021-04-02 00:00:15", "2021-04-05 15:30:10"]
        )

        assert total == Decimal("0")

    def test_single_charge_window(self, calculator):
        """Test that 13 and 18 within one hour are charged once at 18."""
        total = calculator.calculate(
            VehicleType.CAR, ["2010-08-25 15:00:28", "2010-08-25 15:35:08"]
        )

        assert total == Decimal("18")

    def test_daily_maximum(self, calculator):
        """Test that 76 in one day is capped at 60."""
        assert calculator.calculate(VehicleType.CAR, BUSY_DAY) == Decimal("60")

    def test_several_days(self, calculator):
        """Test clustering and capping across a quarter of passages."""
        assert calculator.calculate(VehicleType.CAR, GOTHENBURG_2013) == Decimal("97")

    def test_input_order_does_not_matter(self, calculator):
        assert calculator.calculate(
            VehicleType.CAR, list(reversed(GOTHENBURG_2013))
        ) == Decimal("97")

    def test_no_passages(self, calculator):
        assert calculator.calculate(VehicleType.CAR, []) == Decimal("0")

    def test_string_vehicle_type(self, calculator):
        total = calculator.calculate(
            "car", ["2010-08-25 15:00:28", "2010-08-25 15:35:08"]
        )

        assert total == Decimal("18")

    def test_accepts_datetimes(self, calculator):
        total = calculator.calculate(
            VehicleType.CAR, [dt.datetime(2010, 8, 25, 7, 15)]
        )

        assert total == Decimal("18")

    @pytest.mark.parametrize(
        "vehicle_type",
        ["emergency", "bus", "diplomat", "motorcycle", "military", "foreign"],
    )
    def test_exempt_vehicles_pay_nothing(self, calculator, vehicle_type):
        assert calculator.calculate(vehicle_type, BUSY_DAY) == Decimal("0")

    def test_exempt_vehicle_skips_timestamp_parsing(self, calculator):
        """Test that exempt vehicles return before any passage is looked at."""
        assert calculator.calculate(VehicleType.BUS, ["garbage"]) == Decimal("0")

    def test_unknown_vehicle_raises(self, calculator):
        with pytest.raises(ValueError):
            calculator.calculate("tractor", BUSY_DAY)

    def test_malformed_timestamp_raises(self, calculator):
        with pytest.raises(ValueError, match="Invalid timestamp"):
            calculator.calculate(VehicleType.CAR, ["25/08/2010 06:30"])

    def test_gap_in_price_table_raises(self, tax_rules):
        calculator = CongestionTaxCalculator.from_tables(
            [TimeSegment(id="1", start="06:00:00", end="18:29:59", price=8)],
            tax_rules,
        )

        with pytest.raises(NoMatchingSegmentError):
            calculator.calculate(VehicleType.CAR, ["2010-08-25 19:00:00"])

    def test_substitute_rules(self, price_table, tax_rules_data):
        """Test that the calculator only uses the tables it is given."""
        from congestion_tax.models.tariff import TaxRules

        rules = TaxRules.model_validate(
            {
                **tax_rules_data,
                "maxDailyCharge": 100,
                "singleCharge": {"timeThreshold": 30, "type": "highest"},
            }
        )
        calculator = CongestionTaxCalculator.from_tables(price_table, rules)

        # 15:00:28 (13) and 15:35:08 (18) are more than 30 minutes apart
        total = calculator.calculate(
            VehicleType.CAR, ["2010-08-25 15:00:28", "2010-08-25 15:35:08"]
        )
        assert total == Decimal("31")
        assert calculator.calculate(VehicleType.CAR, BUSY_DAY) == Decimal("76")


class TestBreakdown:
    """Test the per-day breakdown."""

    def test_total_matches_calculate(self, calculator):
        breakdown = calculator.breakdown(VehicleType.CAR, GOTHENBURG_2013)

        assert isinstance(breakdown, ChargeBreakdown)
        assert breakdown.total == calculator.calculate(VehicleType.CAR, GOTHENBURG_2013)
        assert not breakdown.exempt
        assert breakdown.vehicle_type == VehicleType.CAR

    def test_daily_charges(self, calculator):
        breakdown = calculator.breakdown(VehicleType.CAR, GOTHENBURG_2013)
        by_day = {d.day: d for d in breakdown.daily_charges}

        assert list(by_day) == [
            dt.date(2013, 1, 14),
            dt.date(2013, 1, 15),
            dt.date(2013, 2, 7),
            dt.date(2013, 2, 8),
            dt.date(2013, 3, 26),
            dt.date(2013, 3, 28),
        ]
        assert by_day[dt.date(2013, 2, 7)].charge == Decimal("21")
        assert by_day[dt.date(2013, 2, 8)].subtotal == Decimal("70")
        assert by_day[dt.date(2013, 2, 8)].charge == Decimal("60")
        assert by_day[dt.date(2013, 2, 8)].capped
        assert by_day[dt.date(2013, 1, 14)].charge == Decimal("0")

    def test_windows_of_a_day(self, calculator):
        breakdown = calculator.breakdown(VehicleType.CAR, GOTHENBURG_2013)
        day = next(d for d in breakdown.daily_charges if d.day == dt.date(2013, 2, 8))

        assert [c.charge for c in day.clusters] == [
            Decimal("8"),
            Decimal("13"),
            Decimal("18"),
            Decimal("18"),
            Decimal("13"),
        ]
        assert [c.passage_count for c in day.clusters] == [2, 2, 2, 1, 3]
        assert day.clusters[-1].end == dt.datetime(2013, 2, 8, 18, 35)

    def test_exempt_vehicle(self, calculator):
        breakdown = calculator.breakdown("diplomat", BUSY_DAY)

        assert breakdown == ChargeBreakdown(
            vehicle_type=VehicleType.DIPLOMAT,
            exempt=True,
            daily_charges=(),
            total=Decimal("0"),
        )


class TestFromConfig:
    """Test building the calculator from the bundled tariff files."""

    def test_bundled_tables(self, test_config):
        calculator = CongestionTaxCalculator.from_config(test_config)

        assert calculator.calculate(VehicleType.CAR, GOTHENBURG_2013) == Decimal("97")
        assert calculator.calculate(VehicleType.CAR, BUSY_DAY) == Decimal("60")
        assert calculator.calculate(
            VehicleType.CAR, ["2021-04-02 00:00:15", "2021-04-05 15:30:10"]
        ) == Decimal("0")

    def test_global_config(self, mock_env):
        calculator = CongestionTaxCalculator.from_config()

        assert len(calculator.pricer.segments) == 10

    @pytest.mark.parametrize(
        "timestamp,total",
        [
            ("2021-12-23 07:15:00", "18"),  # two days before Christmas Day
            ("2021-12-24 07:15:00", "0"),  # day before Christmas Day
            ("2021-06-24 07:15:00", "18"),  # two days before Midsummer Day
            ("2021-11-05 07:15:00", "0"),  # day before All Saints' Day
            ("2021-04-30 07:15:00", "0"),  # day before May Day
            ("2021-12-31 07:15:00", "0"),  # day before New Year's Day 2022
            ("2021-12-30 07:15:00", "18"),
        ],
    )
    def test_bundled_holidays(self, test_config, timestamp, total):
        calculator = CongestionTaxCalculator.from_config(test_config)

        assert calculator.calculate(VehicleType.CAR, [timestamp]) == Decimal(total)

    def test_missing_file(self, mock_env, monkeypatch, tmp_path):
        monkeypatch.setenv("CONGESTION_PRICES_FILE", str(tmp_path / "missing.json"))

        from congestion_tax.config import reload_config

        with pytest.raises(TariffConfigurationError, match="not found"):
            CongestionTaxCalculator.from_config(reload_config())
