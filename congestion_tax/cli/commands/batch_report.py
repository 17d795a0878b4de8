"""Batch report command."""

from pathlib import Path
from typing import Optional

import click

from congestion_tax.calculators.congestion_calculator import CongestionTaxCalculator
from congestion_tax.cli.error_handlers import (
    DataValidationError,
    ProcessingError,
    with_error_handling,
)
from congestion_tax.cli.utils.formatters import (
    format_charge,
    format_info,
    format_success,
    format_table,
)
from congestion_tax.config.settings import get_config
from congestion_tax.reports.charge_report import (
    ChargeReportGenerator,
    read_passages_csv,
)


@click.command(name="batch-report")
@click.argument(
    "passages_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the per-vehicle summary to this CSV file",
)
@click.option(
    "--daily-output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the per-day charges to this CSV file",
)
@click.pass_context
def batch_report(
    ctx: click.Context,
    passages_file: Path,
    output: Optional[Path],
    daily_output: Optional[Path],
):
    """Calculate charges for every vehicle in a passages CSV file.

    The file needs the columns vehicle_id, vehicle_type and timestamp.

    Example:
        congestion-tax batch-report passages.csv --output totals.csv
    """
    debug = bool(ctx.obj and ctx.obj.get("debug"))
    with with_error_handling(debug):
        settings = get_config()
        calculator = CongestionTaxCalculator.from_config(settings)

        try:
            passages = read_passages_csv(passages_file)
            report = ChargeReportGenerator(calculator).generate(passages)
        except ValueError as e:
            raise DataValidationError(
                str(e),
                recovery_hint="Columns: vehicle_id, vehicle_type, timestamp "
                "(YYYY-MM-DD HH:MM:SS)",
            ) from e

        click.echo(format_info(f"Read {len(passages)} passage(s) from {passages_file}"))
        rows = [
            [
                row.vehicle_id,
                row.vehicle_type,
                row.passages,
                format_charge(row.total, settings.currency_symbol),
            ]
            for row in report.summary.itertuples(index=False)
        ]
        click.echo(format_table(["Vehicle", "Type", "Passages", "Total"], rows))

        try:
            if output is not None:
                report.summary.to_csv(output, index=False)
                click.echo(format_success(f"Summary written to {output}"))
            if daily_output is not None:
                report.daily.to_csv(daily_output, index=False)
                click.echo(format_success(f"Daily charges written to {daily_output}"))
        except OSError as e:
            raise ProcessingError(f"Cannot write report: {e}") from e
