"""
ch8disasm - CHIP-8 Disassembler
===============================

This package decodes CHIP-8 programs (ROM images of 16-bit big-endian
instruction words) into assembly mnemonics, one instruction per line.

Main Components
---------------
- **cpu**: CHIP-8 instruction set
    The ordered opcode pattern table and operand field layouts

- **disassembler**: Decoding engine
    Pure functions and a stateless Chip8Disassembler class that turn bytes
    into mnemonic lines, suitable for reuse inside an interpreter

- **cli**: Command-line tool (ch8disasm)
    Reads a ROM file or standard input and writes the listing

Quick Start
-----------
Disassemble bytes in memory:
    >>> from ch8disasm import disassemble
    >>> disassemble(bytes([0x00, 0xE0, 0x12, 0x34]))
    ['CLS', 'JP 0x234']

Inspect diagnostics:
    >>> from ch8disasm import Chip8Disassembler
    >>> result = Chip8Disassembler().disassemble(bytes([0x5A, 0xBC]))
    >>> result.lines
    ['ERR: 5ABC']
    >>> result.unknown_instructions[0].word_index
    0

Or use the command-line tool:
    $ ch8disasm pong.ch8 -o pong.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from ch8disasm.disassembler import (
    Chip8Disassembler,
    DisassembledInstruction,
    DisassemblyResult,
    decode_word,
    disassemble,
    disassemble_to_text,
    read_words,
)
from ch8disasm.errors import (
    Chip8Error,
    DisassemblerError,
    TruncatedInputError,
    UnknownInstructionError,
)

__all__ = [
    # Version info
    "__version__",
    # Disassembler
    "Chip8Disassembler",
    "DisassembledInstruction",
    "DisassemblyResult",
    "decode_word",
    "disassemble",
    "disassemble_to_text",
    "read_words",
    # Exception hierarchy
    "Chip8Error",
    "DisassemblerError",
    "TruncatedInputError",
    "UnknownInstructionError",
]
