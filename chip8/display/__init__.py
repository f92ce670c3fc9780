"""Display subsystem for the CHIP-8 core."""

from .font import FONTSET, glyph_address, glyph_bitmap, glyph_rows
from .framebuffer import FrameBuffer

__all__ = [
    "FrameBuffer",
    "FONTSET",
    "glyph_address",
    "glyph_bitmap",
    "glyph_rows",
]
