"""Price table command."""

import click

from congestion_tax.cli.error_handlers import with_error_handling
from congestion_tax.cli.utils.formatters import format_charge, format_table
from congestion_tax.config.settings import get_config
from congestion_tax.readers.tariff_reader import TariffReader


@click.command(name="price-table")
@click.pass_context
def price_table(ctx: click.Context):
    """Show the time-of-day price table.

    Example:
        congestion-tax price-table
    """
    debug = bool(ctx.obj and ctx.obj.get("debug"))
    with with_error_handling(debug):
        settings = get_config()
        segments = TariffReader(settings.prices_file, settings.rules_file).read_time_segments()

        rows = [
            [
                segment.id,
                segment.start.isoformat(),
                segment.end.isoformat(),
                format_charge(segment.price, settings.currency_symbol),
            ]
            for segment in segments
        ]
        click.echo(format_table(["ID", "Start", "End", "Price"], rows))
