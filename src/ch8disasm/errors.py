"""
ch8disasm Error Hierarchy
=========================

This module defines the exception hierarchy for the CHIP-8 disassembler.
All exceptions inherit from Chip8Error, allowing callers to catch every
disassembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
Chip8Error (base)
└── DisassemblerError (decoding-related)
    ├── TruncatedInputError - odd byte count, trailing byte cannot form a word
    └── UnknownInstructionError - word matches no opcode pattern

Design Philosophy
-----------------
Decoding problems are recoverable. The disassembler does not raise them
while it runs; it records them in a DiagnosticCollector and keeps going so
that output line N always corresponds to input word N. Callers that want
fail-fast behaviour can raise the recorded diagnostic afterwards.

Each diagnostic captures the 0-based word index it applies to. Messages
follow this format:
    word 3: error: unknown instruction 0x5ABC
    hint: suggestion (when available)

When reported as recorded diagnostics, "error" becomes "warning".
"""

from typing import Iterable, Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Chip8Error(Exception):
    """
    Base exception for all ch8disasm errors.

        try:
            result.raise_for_diagnostics()
        except Chip8Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Disassembler Exceptions
# =============================================================================

class DisassemblerError(Chip8Error):
    """
    Base exception for all decoding errors.

    Attributes:
        message: The error description
        word_index: 0-based index of the instruction word concerned (optional)
        hint: A suggestion for fixing the problem (optional)
    """

    def __init__(
        self,
        message: str,
        word_index: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.word_index = word_index
        self.hint = hint
        super().__init__(self.format())

    def format(self, severity: str = "error") -> str:
        """
        Format the message with word position, severity and hint.

        The exception text uses severity "error"; a diagnostic that was
        recorded and skipped over is reported with severity "warning".

        Example output:
            word 0: warning: unknown instruction 0x5ABC
            hint: 5XY0 requires the low nibble to be 0
        """
        parts = []

        if self.word_index is not None:
            parts.append(f"word {self.word_index}: {severity}: {self.message}")
        else:
            parts.append(f"{severity}: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class TruncatedInputError(DisassemblerError):
    """
    The byte stream has an odd length.

    Instructions are 16 bits wide, so the final byte of an odd-length
    stream cannot form a complete word. The disassembler drops that byte
    and records this error once; all complete words before it are decoded
    normally.

    The word index is the position the incomplete word would have had,
    which is also the number of complete words decoded.
    """

    def __init__(self, length: int, trailing_byte: int):
        self.length = length
        self.trailing_byte = trailing_byte

        super().__init__(
            f"uneven number of bytes ({length}), "
            f"trailing byte 0x{trailing_byte:02X} ignored",
            word_index=length // 2,
            hint="CHIP-8 programs consist of 2-byte instructions; "
                 "the file may be truncated",
        )


class UnknownInstructionError(DisassemblerError):
    """
    An instruction word matches no pattern in the opcode table.

    The disassembler emits a placeholder line for the word (so the listing
    stays aligned with the input) and records this error with the word's
    index.
    """

    def __init__(self, word: int, word_index: Optional[int] = None):
        self.word = word

        super().__init__(
            f"unknown instruction 0x{word:04X}",
            word_index=word_index,
        )


# =============================================================================
# Diagnostic Collection for Multiple Error Reporting
# =============================================================================

class DiagnosticCollector:
    """
    Collects recoverable decoding errors for batch reporting.

    The disassembler uses this to continue after an unknown instruction or
    a truncated stream, collecting every diagnostic before reporting them
    together.

    Diagnostics are reported as warnings, since decoding carried on past
    them.

    Example:
        collector = DiagnosticCollector()
        collector.add(UnknownInstructionError(0x5ABC, word_index=0))

        if collector.has_diagnostics():
            print(collector.report())
    """

    def __init__(self, diagnostics: Optional[Iterable[DisassemblerError]] = None) -> None:
        self.diagnostics: list[DisassemblerError] = list(diagnostics or [])

    def add(self, error: DisassemblerError) -> None:
        """Add a diagnostic to the collection."""
        self.diagnostics.append(error)

    def has_diagnostics(self) -> bool:
        """Return True if any diagnostics have been collected."""
        return len(self.diagnostics) > 0

    def count(self) -> int:
        """Return the number of collected diagnostics."""
        return len(self.diagnostics)

    def report(self) -> str:
        """
        Format all diagnostics for display.

        Returns:
            Formatted string with every diagnostic and a summary line
        """
        lines = [diagnostic.format("warning") for diagnostic in self.diagnostics]

        word = "warning" if len(self.diagnostics) == 1 else "warnings"
        lines.append(f"{len(self.diagnostics)} {word}")

        return "\n".join(lines)
