"""
Unit Tests for the Disassembler Module
======================================

This module contains tests for the CHIP-8 disassembler.

Test coverage includes:
- Every instruction of the 35-opcode set
- Overlapping patterns (CLS/RET vs SYS)
- Fixed-width operand rendering
- Unknown words and odd-length input
- Ordering of output lines
- JSON serialization
"""

import pytest
from ch8disasm.disassembler import (
    Chip8Disassembler,
    DisassembledInstruction,
    DisassemblyResult,
    decode_word,
    disassemble,
    disassemble_to_text,
)
from ch8disasm.errors import (
    TruncatedInputError,
    UnknownInstructionError,
)


# =============================================================================
# Single Word Decoding
# =============================================================================

class TestDecodeWord:
    """Tests for decoding individual instruction words."""

    def setup_method(self):
        """Create disassembler instance for each test."""
        self.disasm = Chip8Disassembler()

    @pytest.mark.parametrize("word,expected", [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x0123, "SYS 0x123"),
        (0x1234, "JP 0x234"),
        (0x2ABC, "CALL 0xABC"),
        (0x3A42, "SE VA, 0x42"),
        (0x4B07, "SNE VB, 0x07"),
        (0x5120, "SE V1, V2"),
        (0x600A, "LD V0, 0x0A"),
        (0x7CFF, "ADD VC, 0xFF"),
        (0x8120, "LD V1, V2"),
        (0x8121, "OR V1, V2"),
        (0x8122, "AND V1, V2"),
        (0x8123, "XOR V1, V2"),
        (0x8124, "ADD V1, V2"),
        (0x8125, "SUB V1, V2"),
        (0x8126, "SHR V1"),
        (0x8127, "SUBN V1, V2"),
        (0x812E, "SHL V1"),
        (0x9DE0, "SNE VD, VE"),
        (0xA2F0, "LD I, 0x2F0"),
        (0xB300, "JP V0, 0x300"),
        (0xC50F, "RND V5, 0x0F"),
        (0xD125, "DRW V1, V2, 0x5"),
        (0xE39E, "SKP V3"),
        (0xE4A1, "SKNP V4"),
        (0xF507, "LD V5, DT"),
        (0xF60A, "LD V6, K"),
        (0xF715, "LD DT, V7"),
        (0xF818, "LD ST, V8"),
        (0xF91E, "ADD I, V9"),
        (0xFA29, "LD F, VA"),
        (0xFB33, "LD B, VB"),
        (0xFC55, "LD [I], VC"),
        (0xFD65, "LD VD, [I]"),
    ])
    def test_all_instructions(self, word, expected):
        """Every instruction of the set decodes to its mnemonic."""
        assert str(self.disasm.decode(word)) == expected

    def test_clear_screen(self):
        """Test CLS has no operands."""
        instr = self.disasm.decode(0x00E0)

        assert instr.mnemonic == "CLS"
        assert instr.operand_str == ""
        assert instr.is_known

    def test_cls_takes_priority_over_sys(self):
        """00E0 also matches 0NNN; the exact pattern wins."""
        assert self.disasm.decode(0x00E0).pattern.signature == "00E0"
        assert self.disasm.decode(0x00EE).pattern.signature == "00EE"
        assert self.disasm.decode(0x00E1).pattern.signature == "0NNN"

    def test_jump_address(self):
        """Test JP carries the 12-bit address."""
        instr = self.disasm.decode(0x1234)

        assert instr.mnemonic == "JP"
        assert instr.operand_str == "0x234"

    def test_load_immediate(self):
        """Test LD with register and byte immediate."""
        instr = self.disasm.decode(0x600A)

        assert instr.mnemonic == "LD"
        assert instr.operand_str == "V0, 0x0A"

    def test_shift_ignores_y(self):
        """SHR and SHL do not render the Y register."""
        assert str(self.disasm.decode(0x8F06)) == str(self.disasm.decode(0x8FA6))
        assert str(self.disasm.decode(0x8F0E)) == "SHL VF"

    def test_decode_is_deterministic(self):
        """Repeated decoding of a word gives identical text."""
        first = str(self.disasm.decode(0xD125))
        for _ in range(10):
            assert str(Chip8Disassembler().decode(0xD125)) == first

    def test_index_carried_through(self):
        """The word index is stored on the result."""
        instr = self.disasm.decode(0x1234, index=7)
        assert instr.index == 7
        assert instr.word == 0x1234

    def test_out_of_range_word(self):
        """Words outside 16 bits are rejected."""
        with pytest.raises(ValueError):
            self.disasm.decode(0x10000)
        with pytest.raises(ValueError):
            self.disasm.decode(-1)

    def test_module_level_decode_word(self):
        """decode_word() returns the mnemonic line."""
        assert decode_word(0x1234) == "JP 0x234"


# =============================================================================
# Operand Width Tests
# =============================================================================

class TestOperandWidths:
    """Operands always render at the width of their bit field."""

    def setup_method(self):
        self.disasm = Chip8Disassembler()

    def test_address_three_digits(self):
        assert self.disasm.decode(0x1000).operand_str == "0x000"
        assert self.disasm.decode(0x1005).operand_str == "0x005"
        assert self.disasm.decode(0x1FFF).operand_str == "0xFFF"

    def test_byte_two_digits(self):
        assert self.disasm.decode(0x6000).operand_str == "V0, 0x00"
        assert self.disasm.decode(0x6001).operand_str == "V0, 0x01"

    def test_nibble_one_digit(self):
        assert self.disasm.decode(0xD000).operand_str == "V0, V0, 0x0"
        assert self.disasm.decode(0xD00F).operand_str == "V0, V0, 0xF"

    def test_uppercase_hex(self):
        assert str(self.disasm.decode(0xAABC)) == "LD I, 0xABC"
        assert str(self.disasm.decode(0xFE15)) == "LD DT, VE"


# =============================================================================
# Unknown Instruction Tests
# =============================================================================

class TestUnknownInstructions:
    """Words matching no pattern produce a placeholder and a diagnostic."""

    def setup_method(self):
        self.disasm = Chip8Disassembler()

    @pytest.mark.parametrize("word", [0x5ABC, 0x8008, 0x800F, 0x9001, 0xE000, 0xF000, 0xF0FF])
    def test_unknown_words(self, word):
        instr = self.disasm.decode(word)

        assert not instr.is_known
        assert instr.pattern is None
        assert str(instr) == f"ERR: {word:04X}"

    def test_unknown_recorded_with_index(self):
        """5ABC has a non-zero low nibble, so it is not SE VX, VY."""
        result = self.disasm.disassemble(bytes([0x5A, 0xBC]))

        assert result.lines == ["ERR: 5ABC"]
        assert len(result.diagnostics) == 1
        error = result.diagnostics[0]
        assert isinstance(error, UnknownInstructionError)
        assert error.word_index == 0
        assert error.word == 0x5ABC

    def test_unknown_does_not_stop_decoding(self):
        """Words after an unknown word are still decoded."""
        data = bytes([0x00, 0xE0, 0x5A, 0xBC, 0x00, 0xEE])
        result = self.disasm.disassemble(data)

        assert result.lines == ["CLS", "ERR: 5ABC", "RET"]
        assert [e.word_index for e in result.unknown_instructions] == [1]

    def test_raise_for_diagnostics(self):
        """Callers can turn diagnostics into a fail-fast error."""
        result = self.disasm.disassemble(bytes([0x12, 0x00, 0x5A, 0xBC]))

        with pytest.raises(UnknownInstructionError) as exc_info:
            result.raise_for_diagnostics()

        assert exc_info.value.word_index == 1
        assert "word 1" in str(exc_info.value)

    def test_report_uses_warning_severity(self):
        """Recorded diagnostics are reported as warnings, raised ones as errors."""
        result = self.disasm.disassemble(bytes([0x5A, 0xBC, 0x01]))
        report = result.report()

        assert "word 0: warning: unknown instruction 0x5ABC" in report
        assert "word 1: warning: uneven number of bytes (3)" in report
        assert report.endswith("2 warnings")
        assert str(result.diagnostics[0]) == "word 0: error: unknown instruction 0x5ABC"

    def test_raise_for_diagnostics_clean(self):
        """A clean result does not raise."""
        result = self.disasm.disassemble(bytes([0x00, 0xE0]))
        result.raise_for_diagnostics()


# =============================================================================
# Stream Disassembly Tests
# =============================================================================

class TestDisassemble:
    """Tests for disassembling whole byte streams."""

    def setup_method(self):
        self.disasm = Chip8Disassembler()

    def test_empty_input(self):
        """Empty input gives no lines and no diagnostics."""
        result = self.disasm.disassemble(b"")

        assert isinstance(result, DisassemblyResult)
        assert result.instructions == []
        assert result.diagnostics == []
        assert result.to_text() == ""

    def test_order_preserved(self):
        """Lines come out in input order."""
        result = self.disasm.disassemble(bytes([0x00, 0xE0, 0x00, 0xEE]))

        assert result.lines == ["CLS", "RET"]
        assert [instr.index for instr in result.instructions] == [0, 1]

    def test_single_trailing_byte(self):
        """A lone byte produces no words and one truncation diagnostic."""
        result = self.disasm.disassemble(bytes([0xFF]))

        assert result.instructions == []
        assert result.truncated
        assert len(result.diagnostics) == 1
        error = result.diagnostics[0]
        assert isinstance(error, TruncatedInputError)
        assert error.trailing_byte == 0xFF
        assert error.word_index == 0

    def test_trailing_byte_after_words(self):
        """Complete words before the trailing byte decode normally."""
        result = self.disasm.disassemble(bytes([0x12, 0x34, 0x60, 0x0A, 0xAB]))

        assert result.lines == ["JP 0x234", "LD V0, 0x0A"]
        truncated = [d for d in result.diagnostics if isinstance(d, TruncatedInputError)]
        assert len(truncated) == 1
        assert truncated[0].word_index == 2
        assert truncated[0].length == 5

    def test_accepts_bytearray_and_list(self):
        assert self.disasm.disassemble(bytearray([0x00, 0xE0])).lines == ["CLS"]
        assert self.disasm.disassemble([0x00, 0xE0]).lines == ["CLS"]

    def test_to_text_newline_terminated(self):
        """Every line of the listing ends with a newline."""
        text = self.disasm.disassemble_to_text(bytes([0x00, 0xE0, 0x12, 0x00]))
        assert text == "CLS\nJP 0x200\n"

    def test_module_level_functions(self):
        data = bytes([0x00, 0xE0, 0x00, 0xEE])
        assert disassemble(data) == ["CLS", "RET"]
        assert disassemble_to_text(data) == "CLS\nRET\n"

    def test_instance_is_reusable(self):
        """Decoding one program does not affect the next."""
        first = self.disasm.disassemble(bytes([0x5A, 0xBC, 0x01]))
        second = self.disasm.disassemble(bytes([0x00, 0xE0]))

        assert len(first.diagnostics) == 2
        assert second.diagnostics == []
        assert second.lines == ["CLS"]

    def test_small_program(self):
        """A short program disassembles line for line."""
        program = bytes([
            0x6A, 0x02,  # LD VA, 0x02
            0x6B, 0x0C,  # LD VB, 0x0C
            0xA2, 0xEA,  # LD I, 0x2EA
            0xDA, 0xB6,  # DRW VA, VB, 0x6
            0xF0, 0x0A,  # LD V0, K
            0x12, 0x00,  # JP 0x200
        ])
        assert disassemble(program) == [
            "LD VA, 0x02",
            "LD VB, 0x0C",
            "LD I, 0x2EA",
            "DRW VA, VB, 0x6",
            "LD V0, K",
            "JP 0x200",
        ]


# =============================================================================
# Serialization Tests
# =============================================================================

class TestSerialization:
    """Tests for DisassembledInstruction serialization."""

    def test_to_dict(self):
        instr = Chip8Disassembler().decode(0xD125, index=3)
        d = instr.to_dict()

        assert d["index"] == 3
        assert d["word"] == "0xD125"
        assert d["mnemonic"] == "DRW"
        assert d["operands"] == "V1, V2, 0x5"
        assert d["text"] == "DRW V1, V2, 0x5"
        assert d["signature"] == "DXYN"
        assert d["known"] is True

    def test_to_dict_unknown(self):
        d = Chip8Disassembler().decode(0x5ABC).to_dict()

        assert d["mnemonic"] == "ERR"
        assert d["operands"] == "5ABC"
        assert d["text"] == "ERR: 5ABC"
        assert d["signature"] is None
        assert d["known"] is False

    def test_str_without_operands(self):
        instr = DisassembledInstruction(index=0, word=0x00E0, mnemonic="CLS", operand_str="")
        assert str(instr) == "CLS"
