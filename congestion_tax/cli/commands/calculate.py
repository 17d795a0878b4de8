"""Calculate command."""

from pathlib import Path
from typing import List, Optional, Tuple

import click

from congestion_tax.calculators.congestion_calculator import (
    ChargeBreakdown,
    CongestionTaxCalculator,
)
from congestion_tax.cli.error_handlers import DataValidationError, with_error_handling
from congestion_tax.cli.utils.formatters import format_charge, format_info, format_table
from congestion_tax.config.settings import get_config
from congestion_tax.models.vehicle import VehicleType

VEHICLE_CHOICES = [v.value for v in VehicleType]


def read_timestamp_file(path: Path) -> List[str]:
    """Read one timestamp per line, skipping blank lines and # comments."""
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.lstrip().startswith("#")]


def _print_breakdown(breakdown: ChargeBreakdown, currency_symbol: str) -> None:
    if breakdown.exempt:
        click.echo(format_info(f"Vehicle type '{breakdown.vehicle_type.value}' is toll-free"))
        return

    rows = []
    for daily in breakdown.daily_charges:
        for cluster in daily.clusters:
            rows.append(
                [
                    daily.day.isoformat(),
                    f"{cluster.start:%H:%M:%S}-{cluster.end:%H:%M:%S}",
                    cluster.passage_count,
                    format_charge(cluster.charge, currency_symbol),
                ]
            )
        if daily.capped:
            rows.append(
                [
                    daily.day.isoformat(),
                    "daily maximum",
                    "",
                    format_charge(daily.charge, currency_symbol),
                ]
            )

    click.echo(format_table(["Date", "Window", "Passages", "Charge"], rows))


@click.command(name="calculate")
@click.option(
    "--vehicle",
    "vehicle_type",
    required=True,
    type=click.Choice(VEHICLE_CHOICES, case_sensitive=False),
    help="Vehicle type",
)
@click.option(
    "--timestamp",
    "-t",
    "timestamps",
    multiple=True,
    help="Passage timestamp (YYYY-MM-DD HH:MM:SS); repeat for several passages",
)
@click.option(
    "--file",
    "timestamp_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File with one passage timestamp per line",
)
@click.option("--breakdown", is_flag=True, help="Show the charge per day and window")
@click.pass_context
def calculate_charge(
    ctx: click.Context,
    vehicle_type: str,
    timestamps: Tuple[str, ...],
    timestamp_file: Optional[Path],
    breakdown: bool,
):
    """Calculate the congestion tax for one vehicle.

    Example:
        congestion-tax calculate --vehicle car -t "2013-02-08 06:27:00" -t "2013-02-08 15:29:00"
        congestion-tax calculate --vehicle car --file passages.txt --breakdown
    """
    debug = bool(ctx.obj and ctx.obj.get("debug"))
    with with_error_handling(debug):
        settings = get_config()

        calculator = CongestionTaxCalculator.from_config(settings)
        try:
            passages = list(timestamps)
            if timestamp_file is not None:
                passages.extend(read_timestamp_file(timestamp_file))
            result = calculator.breakdown(vehicle_type, passages)
        except ValueError as e:
            raise DataValidationError(
                str(e), recovery_hint="Timestamps must look like 2013-02-08 06:27:00"
            ) from e

        if breakdown:
            _print_breakdown(result, settings.currency_symbol)
        click.echo(format_charge(result.total, settings.currency_symbol))
