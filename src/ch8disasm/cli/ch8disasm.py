"""
ch8disasm - CHIP-8 Disassembler Command-Line Interface
======================================================

This module implements the command-line interface for the CHIP-8
disassembler. It reads a ROM image, decodes every 16-bit instruction word
and writes one mnemonic per line.

Usage Examples
--------------
Disassemble to stdout:
    $ ch8disasm pong.ch8

Output to file:
    $ ch8disasm pong.ch8 -o pong.asm

Read from standard input:
    $ cat pong.ch8 | ch8disasm -

JSON output:
    $ ch8disasm pong.ch8 --json

Stop on the first problem:
    $ ch8disasm pong.ch8 --strict

Unknown words and a trailing odd byte do not stop the run: they are
reported as warnings on stderr, the listing is still written in full, and
the exit code is 0. With --strict the first such problem is reported as an
error and the run exits with code 1 without writing a listing.
"""

import json
import logging
from pathlib import Path
from typing import BinaryIO, Optional

import click

from ch8disasm import __version__
from ch8disasm.cli.errors import handle_cli_exception
from ch8disasm.disassembler import Chip8Disassembler

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.File("rb"),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Emit a JSON array of decoded instructions instead of a listing",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail with exit code 1 on the first unknown instruction or truncated input",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ch8disasm")
def main(
    input_file: BinaryIO,
    output: Optional[Path],
    as_json: bool,
    strict: bool,
    verbose: bool,
) -> None:
    """
    Disassemble a CHIP-8 program.

    INPUT_FILE is the ROM image to disassemble, or - for standard input.

    Examples:

        ch8disasm pong.ch8

        ch8disasm pong.ch8 -o pong.asm
    """
    setup_logging(verbose)

    try:
        data = input_file.read()
        # Streams such as in-memory stdin may have no name
        source = getattr(input_file, "name", "<stdin>")
        logger.debug(f"Read {len(data)} bytes from {source}")

        result = Chip8Disassembler().disassemble(data)

        if strict:
            result.raise_for_diagnostics()

        if result.diagnostics:
            click.echo(result.report(), err=True)

        if as_json:
            text = json.dumps(
                [instr.to_dict() for instr in result.instructions], indent=2
            ) + "\n"
        else:
            text = result.to_text()

        if output:
            output.write_text(text, encoding="utf-8")
            logger.debug(f"Output written to: {output}")
        else:
            click.echo(text, nl=False)

        if verbose:
            click.echo(
                f"Instructions disassembled: {len(result.instructions)}",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
