"""
Error handling for the CLI.

Maps library exceptions to a user-facing message and exit code. Every
failure in single-command mode exits with EXIT_FAILURE.
"""

import sys
from collections.abc import Callable

import click

from claysculptor import (
    APIError,
    ConfigurationError,
    FilesystemError,
    GenerationError,
    MissingCredentialError,
    NetworkError,
    RequestTimeoutError,
    SculptorError,
    ValidationError,
)
from claysculptor.cli import progress
from claysculptor.cli.utils import API_KEY_REMEDIATION, EXIT_FAILURE


def describe_exception(exc: BaseException) -> str:
    """Return a readable one-line message for exc."""
    if isinstance(exc, ValidationError):
        msg = exc.args[0] if exc.args else "Validation failed."
        if getattr(exc, "field", None):
            msg = f"{msg} (field: {exc.field})"
        return msg
    if isinstance(exc, MissingCredentialError):
        return f"Error: {exc.args[0]}" if exc.args else "Error: API key is required."
    if isinstance(exc, ConfigurationError):
        return exc.args[0] if exc.args else "Invalid configuration."
    if isinstance(exc, FilesystemError):
        return exc.args[0] if exc.args else "Could not write the generated image."
    if isinstance(exc, GenerationError):
        return f"Error generating clay image: {exc.args[0]}" if exc.args else "Generation failed."
    if isinstance(exc, (APIError, NetworkError, RequestTimeoutError)):
        return exc.args[0] if exc.args else "API or network error."
    if isinstance(exc, SculptorError):
        return exc.args[0] if exc.args else "An error occurred."
    # Unhandled
    return str(exc) if exc.args else "An unexpected error occurred."


def report_error(exc: BaseException, *, quiet: bool = False) -> None:
    """Print exc for the user, adding the credential hint where it applies."""
    msg = describe_exception(exc)
    if quiet:
        click.echo(msg, err=True)
    else:
        progress.print_error(msg)
    if isinstance(exc, MissingCredentialError):
        if quiet:
            click.echo(API_KEY_REMEDIATION, err=True)
        else:
            progress.print_info(API_KEY_REMEDIATION)


def run_with_error_handling(
    fn: Callable[[], None],
    *,
    quiet: bool = False,
    debug: bool = False,
) -> None:
    """
    Run fn(); on exception print a message and exit with EXIT_FAILURE.

    With debug, exceptions outside the SculptorError hierarchy propagate so
    their traceback is shown.
    """
    try:
        fn()
    except SculptorError as e:
        report_error(e, quiet=quiet)
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        if debug:
            raise
        report_error(e, quiet=quiet)
        sys.exit(EXIT_FAILURE)


__all__ = [
    "describe_exception",
    "report_error",
    "run_with_error_handling",
]
