"""
Instruction Word Reader
=======================

Groups a raw byte stream into 16-bit CHIP-8 instruction words.

Words are big-endian: the first byte of each pair is the high-order byte.
Bytes are consumed strictly in pairs from offset 0. A trailing byte in an
odd-length stream never becomes a word; reporting it is left to the caller
(see has_trailing_byte).
"""

from typing import Iterator, Sequence


def iter_words(data: Sequence[int]) -> Iterator[int]:
    """
    Yield the instruction words of a byte stream in order.

    Args:
        data: Byte buffer (bytes, bytearray, or a sequence of ints 0-255)

    Yields:
        16-bit words, (data[2i] << 8) | data[2i+1]
    """
    for offset in range(0, len(data) - 1, 2):
        yield (data[offset] << 8) | data[offset + 1]


def read_words(data: Sequence[int]) -> list[int]:
    """Return all complete instruction words of a byte stream."""
    return list(iter_words(data))


def has_trailing_byte(data: Sequence[int]) -> bool:
    """True if the stream ends with a byte that cannot form a full word."""
    return len(data) % 2 != 0
