"""
CHIP-8 Instruction Set Definition
=================================

This module defines the complete CHIP-8 instruction set as an ordered table
of bit patterns. Every CHIP-8 instruction is exactly one 16-bit big-endian
word, so decoding is a matter of finding the pattern whose fixed bits agree
with the word and pulling the variable fields out of the remaining nibbles.

Instruction Layout
------------------
A word is four nibbles. The top nibble selects the instruction family; the
remaining twelve bits hold operands in one of these layouts:

1. **_NNN**: 12-bit address in the low three nibbles
   - Example: JP 0x234 -> $1234

2. **_XKK**: register X in nibble 2, 8-bit immediate in the low byte
   - Example: LD V0, 0x0A -> $600A

3. **_XY_**: registers X and Y in nibbles 2 and 3, low nibble selects the
   operation within the family
   - Example: ADD V1, V2 -> $8124

4. **_XYN**: registers X and Y plus a 4-bit immediate
   - Example: DRW V1, V2, 0x5 -> $D125

5. **_X__**: register X, low byte selects the operation
   - Example: LD DT, V3 -> $F315

Priority
--------
Some patterns overlap: $00E0 (CLS) also satisfies the $0NNN (SYS) pattern.
The table is ordered so that a pattern always appears before any more
general pattern that could match the same word, and decoding takes the
first match.

Reference
---------
- Cowgod's CHIP-8 Technical Reference v1.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Operand Field Enumeration
# =============================================================================

class OperandField(Enum):
    """
    Variable fields of a CHIP-8 instruction word.

    Each member carries (mask, shift, hex_width, prefix). The rendered text
    is the prefix followed by the field value in uppercase hex, zero-padded
    to hex_width digits, so a field always renders at a fixed width.
    """
    ADDR = (0x0FFF, 0, 3, "0x")    # _NNN
    X = (0x0F00, 8, 1, "V")        # _X__ register
    Y = (0x00F0, 4, 1, "V")        # __Y_ register
    BYTE = (0x00FF, 0, 2, "0x")    # __KK
    NIBBLE = (0x000F, 0, 1, "0x")  # ___N

    def __init__(self, mask: int, shift: int, hex_width: int, prefix: str):
        self.mask = mask
        self.shift = shift
        self.hex_width = hex_width
        self.prefix = prefix

    @property
    def placeholder(self) -> str:
        """Name used for this field inside pattern templates."""
        return self.name.lower()

    def extract(self, word: int) -> int:
        """Return the raw value of this field in word."""
        return (word & self.mask) >> self.shift

    def render(self, word: int) -> str:
        """Return the canonical text for this field of word."""
        return f"{self.prefix}{self.extract(word):0{self.hex_width}X}"


# =============================================================================
# Opcode Pattern
# =============================================================================

@dataclass(frozen=True)
class OpcodePattern:
    """
    One entry of the opcode table.

    This dataclass is immutable (frozen) to prevent accidental modification
    of the opcode table at runtime.

    Attributes:
        signature: Conventional name of the encoding (e.g., "8XY4")
        mask: Bits of the word that are fixed for this instruction
        match: Required value of the fixed bits
        mnemonic: Operation name (e.g., "ADD")
        template: Operand text with {field} placeholders (may be empty)
        operands: Fields substituted into template
        description: Short description of the operation
    """
    signature: str
    mask: int
    match: int
    mnemonic: str
    template: str
    operands: tuple[OperandField, ...]
    description: str

    def matches(self, word: int) -> bool:
        """Return True if word belongs to this pattern."""
        return word & self.mask == self.match

    def format_operands(self, word: int) -> str:
        """Render the operand text of word using this pattern's template."""
        if not self.template:
            return ""
        fields = {field.placeholder: field.render(word) for field in self.operands}
        return self.template.format(**fields)

    def specificity(self) -> int:
        """Number of fixed bits; higher means more constrained."""
        return bin(self.mask).count("1")

    def __repr__(self) -> str:
        return (
            f"OpcodePattern({self.signature}, mask=${self.mask:04X}, "
            f"match=${self.match:04X}, {self.mnemonic!r})"
        )


def _pattern(
    signature: str,
    mask: int,
    match: int,
    mnemonic: str,
    template: str = "",
    operands: tuple[OperandField, ...] = (),
    description: str = "",
) -> OpcodePattern:
    return OpcodePattern(signature, mask, match, mnemonic, template, operands, description)


_ADDR = (OperandField.ADDR,)
_X = (OperandField.X,)
_XY = (OperandField.X, OperandField.Y)
_XKK = (OperandField.X, OperandField.BYTE)
_XYN = (OperandField.X, OperandField.Y, OperandField.NIBBLE)


# =============================================================================
# Opcode Table
# =============================================================================
# This is the master table of all 35 CHIP-8 instructions, in priority order.
# Entries: signature, mask, match, mnemonic, operand template, operand fields
# =============================================================================

OPCODE_TABLE: tuple[OpcodePattern, ...] = (
    # =========================================================================
    # 0 FAMILY - exact words must precede the catch-all SYS
    # =========================================================================
    _pattern("00E0", 0xFFFF, 0x00E0, "CLS", description="Clear the display"),
    _pattern("00EE", 0xFFFF, 0x00EE, "RET", description="Return from subroutine"),
    _pattern("0NNN", 0xF000, 0x0000, "SYS", "{addr}", _ADDR,
             "Jump to machine code routine"),

    # =========================================================================
    # ADDRESS INSTRUCTIONS (_NNN)
    # =========================================================================
    _pattern("1NNN", 0xF000, 0x1000, "JP", "{addr}", _ADDR, "Jump to address"),
    _pattern("2NNN", 0xF000, 0x2000, "CALL", "{addr}", _ADDR, "Call subroutine"),

    # =========================================================================
    # REGISTER / IMMEDIATE INSTRUCTIONS (_XKK)
    # =========================================================================
    _pattern("3XKK", 0xF000, 0x3000, "SE", "{x}, {byte}", _XKK,
             "Skip next if VX == KK"),
    _pattern("4XKK", 0xF000, 0x4000, "SNE", "{x}, {byte}", _XKK,
             "Skip next if VX != KK"),

    _pattern("5XY0", 0xF00F, 0x5000, "SE", "{x}, {y}", _XY,
             "Skip next if VX == VY"),

    _pattern("6XKK", 0xF000, 0x6000, "LD", "{x}, {byte}", _XKK, "Set VX = KK"),
    _pattern("7XKK", 0xF000, 0x7000, "ADD", "{x}, {byte}", _XKK, "Set VX = VX + KK"),

    # =========================================================================
    # ARITHMETIC / LOGIC (8XY_)
    # =========================================================================
    _pattern("8XY0", 0xF00F, 0x8000, "LD", "{x}, {y}", _XY, "Set VX = VY"),
    _pattern("8XY1", 0xF00F, 0x8001, "OR", "{x}, {y}", _XY, "Set VX = VX OR VY"),
    _pattern("8XY2", 0xF00F, 0x8002, "AND", "{x}, {y}", _XY, "Set VX = VX AND VY"),
    _pattern("8XY3", 0xF00F, 0x8003, "XOR", "{x}, {y}", _XY, "Set VX = VX XOR VY"),
    _pattern("8XY4", 0xF00F, 0x8004, "ADD", "{x}, {y}", _XY,
             "Set VX = VX + VY, VF = carry"),
    _pattern("8XY5", 0xF00F, 0x8005, "SUB", "{x}, {y}", _XY,
             "Set VX = VX - VY, VF = NOT borrow"),
    # Y is ignored by the shifts
    _pattern("8XY6", 0xF00F, 0x8006, "SHR", "{x}", _X, "Set VX = VX >> 1"),
    _pattern("8XY7", 0xF00F, 0x8007, "SUBN", "{x}, {y}", _XY,
             "Set VX = VY - VX, VF = NOT borrow"),
    _pattern("8XYE", 0xF00F, 0x800E, "SHL", "{x}", _X, "Set VX = VX << 1"),

    _pattern("9XY0", 0xF00F, 0x9000, "SNE", "{x}, {y}", _XY,
             "Skip next if VX != VY"),

    # =========================================================================
    # INDEX / JUMP / RANDOM / DRAW
    # =========================================================================
    _pattern("ANNN", 0xF000, 0xA000, "LD", "I, {addr}", _ADDR, "Set I = NNN"),
    _pattern("BNNN", 0xF000, 0xB000, "JP", "V0, {addr}", _ADDR,
             "Jump to NNN + V0"),
    _pattern("CXKK", 0xF000, 0xC000, "RND", "{x}, {byte}", _XKK,
             "Set VX = random byte AND KK"),
    _pattern("DXYN", 0xF000, 0xD000, "DRW", "{x}, {y}, {nibble}", _XYN,
             "Draw N-byte sprite at (VX, VY)"),

    # =========================================================================
    # KEYBOARD (EX__)
    # =========================================================================
    _pattern("EX9E", 0xF0FF, 0xE09E, "SKP", "{x}", _X,
             "Skip next if key VX is pressed"),
    _pattern("EXA1", 0xF0FF, 0xE0A1, "SKNP", "{x}", _X,
             "Skip next if key VX is not pressed"),

    # =========================================================================
    # TIMERS / MEMORY (FX__)
    # =========================================================================
    _pattern("FX07", 0xF0FF, 0xF007, "LD", "{x}, DT", _X, "Set VX = delay timer"),
    _pattern("FX0A", 0xF0FF, 0xF00A, "LD", "{x}, K", _X, "Wait for key, store in VX"),
    _pattern("FX15", 0xF0FF, 0xF015, "LD", "DT, {x}", _X, "Set delay timer = VX"),
    _pattern("FX18", 0xF0FF, 0xF018, "LD", "ST, {x}", _X, "Set sound timer = VX"),
    _pattern("FX1E", 0xF0FF, 0xF01E, "ADD", "I, {x}", _X, "Set I = I + VX"),
    _pattern("FX29", 0xF0FF, 0xF029, "LD", "F, {x}", _X,
             "Set I = location of sprite for digit VX"),
    _pattern("FX33", 0xF0FF, 0xF033, "LD", "B, {x}", _X,
             "Store BCD of VX at I, I+1, I+2"),
    _pattern("FX55", 0xF0FF, 0xF055, "LD", "[I], {x}", _X,
             "Store V0..VX at I"),
    _pattern("FX65", 0xF0FF, 0xF065, "LD", "{x}, [I]", _X,
             "Read V0..VX from I"),
)

MNEMONICS: frozenset[str] = frozenset(p.mnemonic for p in OPCODE_TABLE)


# =============================================================================
# Lookup Functions
# =============================================================================

def match_pattern(word: int) -> Optional[OpcodePattern]:
    """
    Find the pattern that decodes a word.

    Patterns are tried in table order and the first match wins.

    Args:
        word: 16-bit instruction word

    Returns:
        The matching OpcodePattern, or None if the word is not a valid
        instruction
    """
    for pattern in OPCODE_TABLE:
        if pattern.matches(word):
            return pattern
    return None


def find_matching_patterns(word: int) -> list[OpcodePattern]:
    """
    Return every pattern that matches a word, in table order.

    Used to check the table for overlaps; decoding only needs the first.
    """
    return [pattern for pattern in OPCODE_TABLE if pattern.matches(word)]


def get_pattern(signature: str) -> Optional[OpcodePattern]:
    """
    Look up a pattern by its signature (e.g., "8XY4").

    Args:
        signature: The encoding name, case-insensitive

    Returns:
        OpcodePattern if found, None otherwise
    """
    signature = signature.upper()
    for pattern in OPCODE_TABLE:
        if pattern.signature == signature:
            return pattern
    return None


def is_valid_instruction(word: int) -> bool:
    """Check if a word decodes to a known CHIP-8 instruction."""
    return match_pattern(word) is not None


def overlaps(first: OpcodePattern, second: OpcodePattern) -> bool:
    """
    Check whether two patterns can match the same word.

    Two patterns overlap when their match values agree on every bit that
    both masks fix.
    """
    common = first.mask & second.mask
    return first.match & common == second.match & common
