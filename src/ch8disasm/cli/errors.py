"""
CLI Error Handling
==================

Maps the failures the ch8disasm command can hit to exit codes.

Argument problems (missing input file, bad option) are rejected by click
itself before the command body runs, with click's usage exit code 2. The
command body can only fail in three ways: a decoding diagnostic promoted to
an error by --strict, an OS error while writing the listing, or a bug.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from ch8disasm.errors import Chip8Error


class ExitCode(IntEnum):
    """Exit codes of the ch8disasm command."""
    SUCCESS = 0
    DECODE_ERROR = 1     # --strict and the program had a diagnostic
    INVALID_ARGS = 2     # Unreadable input or unwritable output (same code click uses for usage errors)
    INTERNAL_ERROR = 3   # Unexpected internal error


def exit_code_for(error: Exception) -> ExitCode:
    """Return the exit code an exception escaping the command maps to."""
    if isinstance(error, Chip8Error):
        return ExitCode.DECODE_ERROR
    if isinstance(error, OSError):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
) -> NoReturn:
    """
    Report an exception that escaped the command body and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with the code from exit_code_for()
    """
    code = exit_code_for(error)

    if code == ExitCode.DECODE_ERROR:
        # Message already carries "word N: error:"
        click.echo(str(error), err=True)
    elif code == ExitCode.INVALID_ARGS:
        click.echo(f"Error: {error}", err=True)
    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(code)
