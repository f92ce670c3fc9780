"""Unit tests for the frame buffer."""

import numpy as np
import pytest

from . import FrameBuffer


class TestToggle:
    """Single-pixel XOR behaviour."""

    def test_toggle_reports_collision(self):
        fb = FrameBuffer()
        assert fb.toggle(3, 4) is False
        assert fb.is_set(3, 4)
        assert fb.toggle(3, 4) is True
        assert not fb.is_set(3, 4)

    def test_toggle_wraps_coordinates(self):
        fb = FrameBuffer()
        fb.toggle(64 + 2, 32 + 1)
        assert fb.pixels[1, 2]

    def test_flat_index_is_row_major(self):
        fb = FrameBuffer()
        fb.toggle(5, 7)
        assert np.flatnonzero(fb.flat()).tolist() == [5 + 64 * 7]


class TestDrawSprite:
    """Whole-sprite XOR drawing."""

    def test_draw_msb_first(self):
        fb = FrameBuffer()
        collided = fb.draw_sprite(0, 0, [0b10100000])
        assert not collided
        assert fb.pixels[0, :4].tolist() == [True, False, True, False]

    def test_draw_twice_erases(self):
        fb = FrameBuffer()
        fb.draw_sprite(10, 10, [0xFF, 0x81, 0xFF])
        assert fb.lit_count() == 18
        assert fb.draw_sprite(10, 10, [0xFF, 0x81, 0xFF])
        assert fb.lit_count() == 0

    def test_draw_wraps_right_and_bottom(self):
        fb = FrameBuffer()
        fb.draw_sprite(60, 31, [0xFF, 0xFF])
        for row in (31, 0):
            assert fb.pixels[row, 60:].all()
            assert fb.pixels[row, :4].all()
        assert fb.lit_count() == 16

    def test_empty_rows_do_not_collide(self):
        fb = FrameBuffer()
        fb.draw_sprite(0, 0, [0xFF])
        assert not fb.draw_sprite(0, 0, [0x00])


class TestBufferAccess:
    """Host-facing views of the pixel grid."""

    def test_packed_layout(self):
        fb = FrameBuffer()
        fb.toggle(0, 0)
        fb.toggle(15, 1)
        packed = fb.packed()
        assert len(packed) == 256
        assert packed[0] == 0x80
        assert packed[8 + 1] == 0x01

    def test_display_buffer_is_read_only_view(self):
        fb = FrameBuffer()
        view = fb.get_display_buffer()
        assert view.shape == (32, 64)
        with pytest.raises(ValueError):
            view[0, 0] = True
        fb.toggle(0, 0)
        assert view[0, 0]

    def test_clear_keeps_same_array(self):
        fb = FrameBuffer()
        pixels = fb.pixels
        fb.toggle(1, 1)
        fb.clear()
        assert fb.pixels is pixels
        assert fb.lit_count() == 0
