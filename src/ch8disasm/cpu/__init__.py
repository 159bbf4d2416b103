"""
ch8disasm CPU Package
=====================

This package contains the CHIP-8 instruction set definition shared by the
disassembler and any future tool that needs to decode CHIP-8 words (an
interpreter, for instance).

Modules:
    chip8: Ordered opcode pattern table, operand field layouts, and lookup
           helpers.

Usage:
    from ch8disasm.cpu import OPCODE_TABLE, match_pattern

    pattern = match_pattern(0x6A0A)
    print(pattern.mnemonic, pattern.format_operands(0x6A0A))  # LD VA, 0x0A
"""

# =============================================================================
# Public API Exports
# =============================================================================

from ch8disasm.cpu.chip8 import (
    # Core types
    OperandField,
    OpcodePattern,
    # Master instruction table
    OPCODE_TABLE,
    MNEMONICS,
    # Lookup functions
    match_pattern,
    find_matching_patterns,
    get_pattern,
    is_valid_instruction,
    overlaps,
)

__all__ = [
    "OperandField",
    "OpcodePattern",
    "OPCODE_TABLE",
    "MNEMONICS",
    "match_pattern",
    "find_matching_patterns",
    "get_pattern",
    "is_valid_instruction",
    "overlaps",
]
