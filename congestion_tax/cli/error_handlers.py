"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from congestion_tax.cli.utils.formatters import format_error, format_warning
from congestion_tax.exceptions import TariffConfigurationError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Configuration or tariff files are unusable."""


class DataValidationError(CLIError):
    """Input passages are invalid."""


class ProcessingError(CLIError):
    """Calculation or report output failed."""


_EXIT_CODES = (
    (ConfigurationError, "Configuration Error", 1),
    (DataValidationError, "Data Validation Error", 3),
    (ProcessingError, "Processing Error", 4),
)


def handle_cli_error(error: BaseException, debug: bool = False) -> int:
    """
    Print a user-friendly message for an error.

    Args:
        error: The exception that occurred
        debug: Whether to print the full stack trace for unexpected errors

    Returns:
        Exit code: 1 configuration, 3 invalid input, 4 processing,
        130 cancelled, 255 unexpected
    """
    for error_type, title, exit_code in _EXIT_CODES:
        if isinstance(error, error_type):
            click.echo(format_error(f"{title}: {error.message}"), err=True)
            if error.recovery_hint:
                click.echo(format_warning(f"Hint: {error.recovery_hint}"), err=True)
            return exit_code

    if isinstance(error, TariffConfigurationError):
        click.echo(format_error(f"Configuration Error: {error}"), err=True)
        click.echo(
            format_warning(
                "Hint: Check CONGESTION_PRICES_FILE and CONGESTION_RULES_FILE, "
                "then run 'congestion-tax validate-config'"
            ),
            err=True,
        )
        return 1

    if isinstance(error, ValidationError):
        click.echo(format_error("Configuration Error: invalid settings"), err=True)
        click.echo(str(error), err=True)
        return 1

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return 130

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"), err=True)
    click.echo(str(error), err=True)
    if debug:
        click.echo("\nFull stack trace:", err=True)
        click.echo(
            "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
            err=True,
        )
    else:
        click.echo(format_warning("\nRun with --debug for the full stack trace"), err=True)
    return 255


class ErrorHandler:
    """Context manager turning exceptions into exit codes."""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def __enter__(self) -> "ErrorHandler":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is None or isinstance(exc_val, (click.exceptions.Exit, SystemExit)):
            return False
        sys.exit(handle_cli_error(exc_val, self.debug))


def with_error_handling(debug: bool = False) -> ErrorHandler:
    """
    Standard error handling for a command body.

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                ...
    """
    return ErrorHandler(debug)
