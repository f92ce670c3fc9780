"""Built-in hexadecimal font preloaded at the bottom of memory."""

from __future__ import annotations

from typing import List, Tuple

from ..constants import FONT_BASE, GLYPH_COUNT, GLYPH_HEIGHT

FONTSET: bytes = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)


def glyph_address(digit: int) -> int:
    """Return the memory address of the glyph for hex ``digit``."""
    if not (0 <= digit < GLYPH_COUNT):
        raise ValueError(f"Glyph digit out of range: {digit}")
    return FONT_BASE + digit * GLYPH_HEIGHT


def glyph_rows(digit: int) -> Tuple[int, ...]:
    """Return the five row bytes of a glyph as embedded in the font table."""
    start = glyph_address(digit) - FONT_BASE
    return tuple(FONTSET[start:start + GLYPH_HEIGHT])


def glyph_bitmap(digit: int) -> List[List[int]]:
    """Decode a glyph into a 5x4 bitmap (1 = pixel on).

    Only the high nibble of each row byte carries pixels.
    """
    return [[(row >> (7 - bit)) & 1 for bit in range(4)] for row in glyph_rows(digit)]
