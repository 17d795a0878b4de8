"""CLI utility functions."""

from congestion_tax.cli.utils.formatters import (
    format_charge,
    format_error,
    format_info,
    format_success,
    format_table,
    format_warning,
)

__all__ = [
    "format_charge",
    "format_error",
    "format_info",
    "format_success",
    "format_table",
    "format_warning",
]
