"""
CHIP-8 Disassembler
===================

Disassembles CHIP-8 programs into human-readable assembly language, one
instruction per line.

CHIP-8 instructions are fixed-width 16-bit big-endian words, so every pair
of input bytes yields exactly one output line. Decoding is stateless: each
word is matched against the ordered opcode table on its own, without any
knowledge of the words around it. That keeps the decoder usable from an
interpreter loop as well as from the command-line tool.

Malformed Input
---------------
The disassembler never aborts part way through a program:

    - An unknown word is rendered as "ERR: XXXX" and recorded as an
      UnknownInstructionError with its word index.
    - A trailing odd byte is dropped and recorded once as a
      TruncatedInputError.

Both are collected on the DisassemblyResult. Callers that prefer to stop on
the first problem call result.raise_for_diagnostics().

Usage:
    disasm = Chip8Disassembler()

    # Disassemble a program
    result = disasm.disassemble(rom_bytes)
    for instr in result.instructions:
        print(instr)

    # Decode a single word
    instr = disasm.decode(0x6A0A)
    print(instr.mnemonic, instr.operand_str)   # LD VA, 0x0A
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import logging

from ch8disasm.cpu import OpcodePattern, match_pattern
from ch8disasm.disassembler.words import has_trailing_byte, iter_words
from ch8disasm.errors import (
    DiagnosticCollector,
    DisassemblerError,
    TruncatedInputError,
    UnknownInstructionError,
)

# Logger for this module
logger = logging.getLogger(__name__)

# Mnemonic used for words that match no opcode pattern
UNKNOWN_MNEMONIC = "ERR"


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class DisassembledInstruction:
    """
    Represents a single decoded CHIP-8 instruction word.

    Attributes:
        index: 0-based position of the word in the input stream
        word: The raw 16-bit instruction word
        mnemonic: The instruction mnemonic (e.g., "LD", "DRW")
        operand_str: Formatted operand text (may be empty)
        pattern: The opcode pattern that matched, or None for unknown words
    """
    index: int
    word: int
    mnemonic: str
    operand_str: str
    pattern: Optional[OpcodePattern] = None

    @property
    def is_known(self) -> bool:
        """True if the word decoded to a real instruction."""
        return self.pattern is not None

    def __str__(self) -> str:
        """Format as assembly line: MNEMONIC OPERANDS, or ERR: XXXX for unknown words"""
        if self.mnemonic == UNKNOWN_MNEMONIC:
            return f"{self.mnemonic}: {self.operand_str}"
        if self.operand_str:
            return f"{self.mnemonic} {self.operand_str}"
        return self.mnemonic

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "word": f"0x{self.word:04X}",
            "mnemonic": self.mnemonic,
            "operands": self.operand_str,
            "text": str(self),
            "signature": self.pattern.signature if self.pattern else None,
            "known": self.is_known,
        }


@dataclass
class DisassemblyResult:
    """
    Output of disassembling a byte stream.

    Attributes:
        instructions: One decoded instruction per complete input word, in
                      input order
        diagnostics: Recoverable problems found while decoding
    """
    instructions: List[DisassembledInstruction] = field(default_factory=list)
    diagnostics: List[DisassemblerError] = field(default_factory=list)

    @property
    def lines(self) -> List[str]:
        """Mnemonic lines, without line terminators."""
        return [str(instr) for instr in self.instructions]

    @property
    def truncated(self) -> bool:
        """True if a trailing odd byte was dropped."""
        return any(isinstance(d, TruncatedInputError) for d in self.diagnostics)

    @property
    def unknown_instructions(self) -> List[UnknownInstructionError]:
        return [d for d in self.diagnostics if isinstance(d, UnknownInstructionError)]

    def to_text(self) -> str:
        """
        Join the lines into a listing.

        Every line is terminated with a newline; an empty program gives an
        empty string.
        """
        return "".join(f"{line}\n" for line in self.lines)

    def report(self) -> str:
        """Format the diagnostics as warnings with a summary line."""
        return DiagnosticCollector(self.diagnostics).report()

    def raise_for_diagnostics(self) -> None:
        """
        Raise the first recorded diagnostic, if any.

        Raises:
            DisassemblerError: The earliest problem found while decoding
        """
        if self.diagnostics:
            raise self.diagnostics[0]


# =============================================================================
# CHIP-8 Disassembler
# =============================================================================

class Chip8Disassembler:
    """
    Disassembler for CHIP-8 programs.

    The disassembler has no mutable state of its own; the opcode table it
    reads is a module-level constant. A single instance can be shared and
    reused for any number of programs.
    """

    def decode(self, word: int, index: int = 0) -> DisassembledInstruction:
        """
        Decode a single instruction word.

        Args:
            word: 16-bit instruction word
            index: Position of the word in its stream (carried through to
                   the result for diagnostics)

        Returns:
            DisassembledInstruction; unknown words produce the "ERR"
            placeholder with pattern=None

        Raises:
            ValueError: If word is outside 0x0000-0xFFFF
        """
        if not 0 <= word <= 0xFFFF:
            raise ValueError(f"Instruction word {word!r} out of range 0x0000-0xFFFF")

        pattern = match_pattern(word)

        if pattern is None:
            return DisassembledInstruction(
                index=index,
                word=word,
                mnemonic=UNKNOWN_MNEMONIC,
                operand_str=f"{word:04X}",
            )

        return DisassembledInstruction(
            index=index,
            word=word,
            mnemonic=pattern.mnemonic,
            operand_str=pattern.format_operands(word),
            pattern=pattern,
        )

    def disassemble(self, data: Sequence[int]) -> DisassemblyResult:
        """
        Disassemble a complete byte stream.

        Args:
            data: Byte buffer containing CHIP-8 instruction words

        Returns:
            DisassemblyResult with one instruction per complete word and any
            diagnostics raised along the way
        """
        collector = DiagnosticCollector()
        instructions = []

        for index, word in enumerate(iter_words(data)):
            instr = self.decode(word, index)
            if not instr.is_known:
                logger.warning(f"Unknown instruction 0x{word:04X} at word {index}")
                collector.add(UnknownInstructionError(word, word_index=index))
            instructions.append(instr)

        if has_trailing_byte(data):
            logger.warning(f"Ignoring trailing byte at offset {len(data) - 1}")
            collector.add(TruncatedInputError(len(data), data[-1]))

        logger.debug(
            f"Disassembled {len(instructions)} words "
            f"({collector.count()} diagnostics)"
        )

        return DisassemblyResult(
            instructions=instructions,
            diagnostics=list(collector.diagnostics),
        )

    def disassemble_to_text(self, data: Sequence[int]) -> str:
        """
        Disassemble and return the listing text.

        This is a convenience method; diagnostics are logged but not
        returned. Use disassemble() to inspect them.
        """
        return self.disassemble(data).to_text()


# =============================================================================
# Module-Level Convenience Functions
# =============================================================================

_DEFAULT_DISASSEMBLER = Chip8Disassembler()


def decode_word(word: int) -> str:
    """
    Decode one instruction word to its mnemonic line.

    >>> decode_word(0x1234)
    'JP 0x234'
    """
    return str(_DEFAULT_DISASSEMBLER.decode(word))


def disassemble(data: Sequence[int]) -> List[str]:
    """Disassemble a byte stream into mnemonic lines."""
    return _DEFAULT_DISASSEMBLER.disassemble(data).lines


def disassemble_to_text(data: Sequence[int]) -> str:
    """Disassemble a byte stream into newline-terminated listing text."""
    return _DEFAULT_DISASSEMBLER.disassemble_to_text(data)
