"""Output formatting utilities for CLI."""

from decimal import Decimal
from typing import List, Sequence

import click


def format_charge(amount: Decimal, currency_symbol: str) -> str:
    """Format an amount the way charges are reported, e.g. "kr 97.00"."""
    return f"{currency_symbol} {Decimal(amount):.2f}"


def format_success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    return click.style(f"ℹ {message}", fg="blue")


def format_table(headers: List[str], rows: Sequence[Sequence[object]]) -> str:
    """Format rows as a plain-text table.

    Args:
        headers: Column headers
        rows: Data rows; cells are converted with str()

    Returns:
        The table, or an empty string if there are no headers
    """
    if not headers:
        return ""

    cells = [[str(cell) for cell in row[: len(headers)]] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def render(values: Sequence[str]) -> str:
        padded = list(values) + [""] * (len(headers) - len(values))
        return "|" + "|".join(f" {v:<{widths[i]}} " for i, v in enumerate(padded)) + "|"

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [separator, render(headers), separator]
    if cells:
        lines.extend(render(row) for row in cells)
        lines.append(separator)
    return "\n".join(lines)
