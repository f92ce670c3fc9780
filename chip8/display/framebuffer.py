"""Monochrome 64x32 frame buffer backed by a numpy boolean array."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from ..constants import SCREEN_HEIGHT, SCREEN_WIDTH


class FrameBuffer:
    """XOR-drawn pixel grid.

    Pixels are stored row-major as ``pixels[y, x]``, so the flat view
    addresses cell ``x + width * y``.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=bool)

    def clear(self) -> None:
        """Turn every pixel off (in place)."""
        self.pixels.fill(False)

    def is_set(self, x: int, y: int) -> bool:
        return bool(self.pixels[y % self.height, x % self.width])

    def toggle(self, x: int, y: int) -> bool:
        """Flip one pixel, wrapping both coordinates.

        Returns True if the pixel was set before the flip (a collision).
        """
        x %= self.width
        y %= self.height
        was_set = bool(self.pixels[y, x])
        self.pixels[y, x] = not was_set
        return was_set

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR sprite rows onto the grid with wraparound on both axes.

        Each row byte covers 8 columns starting at ``x`` (MSB leftmost);
        successive rows go down from ``y``. Returns True if any set pixel
        was turned off.
        """
        collided = False
        offsets = np.arange(8)
        for row_offset, byte in enumerate(rows):
            bits = np.unpackbits(np.array([byte & 0xFF], dtype=np.uint8)).astype(bool)
            if not bits.any():
                continue
            row = (y + row_offset) % self.height
            cols = (x + offsets[bits]) % self.width
            if self.pixels[row, cols].any():
                collided = True
            self.pixels[row, cols] ^= True
        return collided

    def get_display_buffer(self) -> np.ndarray:
        """Read-only view of the (height, width) pixel array."""
        view = self.pixels.view()
        view.flags.writeable = False
        return view

    def flat(self) -> np.ndarray:
        """Read-only flat view indexed by ``x + width * y``."""
        view = self.pixels.reshape(-1)
        view.flags.writeable = False
        return view

    def packed(self) -> bytes:
        """Bit-packed rows, 8 pixels per byte, MSB first."""
        return np.packbits(self.pixels, axis=1).tobytes()

    def lit_count(self) -> int:
        return int(np.count_nonzero(self.pixels))
