"""Validate config command."""

import sys

import click

from congestion_tax.cli.error_handlers import with_error_handling
from congestion_tax.cli.utils.formatters import (
    format_error,
    format_info,
    format_success,
    format_warning,
)
from congestion_tax.config.settings import get_config
from congestion_tax.readers.tariff_reader import TariffReader
from congestion_tax.validators.tariff_validator import TariffValidator
from congestion_tax.validators.validation_report import ValidationSeverity

_STYLES = {
    ValidationSeverity.ERROR: format_error,
    ValidationSeverity.WARNING: format_warning,
    ValidationSeverity.INFO: format_info,
}


@click.command(name="validate-config")
@click.option(
    "--severity",
    type=click.Choice(["error", "warning", "info"], case_sensitive=False),
    default="warning",
    help="Minimum severity level to display (default: warning)",
)
@click.pass_context
def validate_config(ctx: click.Context, severity: str):
    """Check the price table and tax rules for gaps and mistakes.

    Exits with code 1 if errors are found.

    Example:
        congestion-tax validate-config
        congestion-tax validate-config --severity info
    """
    debug = bool(ctx.obj and ctx.obj.get("debug"))
    with with_error_handling(debug):
        settings = get_config()
        click.echo(format_info(f"Price table: {settings.prices_file}"))
        click.echo(format_info(f"Tax rules:   {settings.rules_file}"))

        reader = TariffReader(settings.prices_file, settings.rules_file)
        report = TariffValidator().validate(
            reader.read_time_segments(), reader.read_tax_rules()
        )

        for issue in report.filter(ValidationSeverity[severity.upper()]):
            click.echo(_STYLES[issue.severity](f"  {issue}"))

        click.echo()
        if not report.is_valid():
            click.echo(format_error(f"Validation failed: {report.summary()}"))
            sys.exit(1)
        click.echo(format_success(f"Validation passed: {report.summary()}"))
