"""
Unified CLI Error Handling
==========================

Provides consistent error reporting and exit codes for the CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes for the CLI."""
    SUCCESS = 0
    FAILURE = 1     # Usage, I/O, scan or internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised during a CLI run and exit.

    Scanner errors are already formatted with location and "error:"
    prefix. Anything else is reported as an internal error, with a
    traceback in verbose mode.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always, with ExitCode.FAILURE
    """
    from pasvm.errors import PasvmError

    if isinstance(error, PasvmError):
        click.echo(str(error), err=True)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(ExitCode.FAILURE)
