"""Shared architecture constants for the CHIP-8 core.

This module centralizes the fixed machine dimensions used by the
machine, the display and the tests.
"""

# Total addressable memory: 4 KB.
MEMORY_SIZE = 0x1000

# Programs are loaded (and execution starts) here. Everything below is
# reserved for the interpreter; only the font lives in it.
PROGRAM_START = 0x200

# Largest program that fits between PROGRAM_START and the top of memory.
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF

STACK_DEPTH = 16
NUM_KEYS = 16

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# Built-in hexadecimal font: 16 glyphs, 5 rows each, starting at address 0.
FONT_BASE = 0x000
GLYPH_HEIGHT = 5
GLYPH_COUNT = 16
FONTSET_SIZE = GLYPH_HEIGHT * GLYPH_COUNT

# Instructions are always two bytes wide.
INSTRUCTION_SIZE = 2

BYTE_MASK = 0xFF
WORD_MASK = 0xFFFF
ADDR_MASK = 0x0FFF
