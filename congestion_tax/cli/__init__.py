"""Congestion Tax CLI.

Command-line interface for calculating congestion tax charges, inspecting
the price table and validating tariff configuration.
"""

import click

from congestion_tax import __version__
from congestion_tax.cli.commands.batch_report import batch_report
from congestion_tax.cli.commands.calculate import calculate_charge
from congestion_tax.cli.commands.price_table import price_table
from congestion_tax.cli.commands.validate import validate_config
from congestion_tax.config.logging_config import LoggingConfig, configure_logging


@click.group(help="Congestion Tax CLI - Calculate congestion tax for toll passages")
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Verbose logging and full stack traces")
@click.option(
    "--log-format",
    type=click.Choice(["standard", "json"]),
    default=None,
    help="Log output format (default: LOG_FORMAT or standard)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, log_format):
    """Congestion Tax CLI main entry point."""
    logging_config = LoggingConfig.from_env(default_level="WARNING")
    if debug:
        logging_config.log_level = "DEBUG"
    if log_format:
        logging_config.log_format = log_format
    configure_logging(logging_config)

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


cli.add_command(calculate_charge)
cli.add_command(price_table)
cli.add_command(validate_config)
cli.add_command(batch_report)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
