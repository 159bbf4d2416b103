"""
ch8disasm Command-Line Interface
================================

This package provides the command-line tool:

- **ch8disasm**: CHIP-8 disassembler

The tool is a Click-based CLI application with help text and unified
error reporting (see errors.py).
"""

__all__ = ["ch8disasm"]
