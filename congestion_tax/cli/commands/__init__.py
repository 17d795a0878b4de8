"""CLI commands."""

from congestion_tax.cli.commands.batch_report import batch_report
from congestion_tax.cli.commands.calculate import calculate_charge
from congestion_tax.cli.commands.price_table import price_table
from congestion_tax.cli.commands.validate import validate_config

__all__ = ["batch_report", "calculate_charge", "price_table", "validate_config"]
