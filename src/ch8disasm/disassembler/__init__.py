"""
ch8disasm Disassembler Module
=============================

This module provides disassembly of CHIP-8 programs:
- Word reading (pairing raw bytes into big-endian 16-bit words)
- Instruction decoding (matching words against the opcode table)

The decoder performs no I/O and keeps no state between words, so it can be
embedded in an interpreter as easily as in the command-line tool.

Usage:
    from ch8disasm.disassembler import Chip8Disassembler

    disasm = Chip8Disassembler()
    result = disasm.disassemble(rom_bytes)
    print(result.to_text(), end="")
"""

from .chip8 import (
    Chip8Disassembler,
    DisassembledInstruction,
    DisassemblyResult,
    decode_word,
    disassemble,
    disassemble_to_text,
)
from .words import iter_words, read_words, has_trailing_byte

__all__ = [
    "Chip8Disassembler",
    "DisassembledInstruction",
    "DisassemblyResult",
    "decode_word",
    "disassemble",
    "disassemble_to_text",
    "iter_words",
    "read_words",
    "has_trailing_byte",
]
