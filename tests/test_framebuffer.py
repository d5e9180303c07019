"""Tests for Framebuffer."""

from chip8vm.framebuffer import Framebuffer, byte_to_bits, SCREEN_HEIGHT, SCREEN_WIDTH


def lit_pixels(framebuffer):
    return {(index % SCREEN_WIDTH, index // SCREEN_WIDTH)
            for index, pixel in enumerate(framebuffer.snapshot()) if pixel}


class TestByteToBits:

    def test_most_significant_bit_first(self):
        assert byte_to_bits(0x80) == [1, 0, 0, 0, 0, 0, 0, 0]
        assert byte_to_bits(0x01) == [0, 0, 0, 0, 0, 0, 0, 1]
        assert byte_to_bits(0xA5) == [1, 0, 1, 0, 0, 1, 0, 1]


class TestDrawRow:

    def test_starts_blank(self):
        framebuffer = Framebuffer()
        assert len(framebuffer.snapshot()) == SCREEN_WIDTH * SCREEN_HEIGHT
        assert not any(framebuffer.snapshot())

    def test_draw_sets_pixels_at_row_major_index(self):
        framebuffer = Framebuffer()
        collided = framebuffer.draw_row(10, 3, byte_to_bits(0xC0))
        assert collided is False
        assert framebuffer.pixels[3 * 64 + 10]
        assert framebuffer.pixels[3 * 64 + 11]
        assert lit_pixels(framebuffer) == {(10, 3), (11, 3)}

    def test_xor_clears_and_reports_collision(self):
        framebuffer = Framebuffer()
        framebuffer.draw_row(0, 0, byte_to_bits(0xF0))
        collided = framebuffer.draw_row(0, 0, byte_to_bits(0x30))
        assert collided is True
        assert lit_pixels(framebuffer) == {(0, 0), (1, 0)}

    def test_zero_bits_do_not_collide(self):
        framebuffer = Framebuffer()
        framebuffer.draw_row(0, 0, byte_to_bits(0xFF))
        assert framebuffer.draw_row(0, 0, byte_to_bits(0x00)) is False
        assert len(lit_pixels(framebuffer)) == 8

    def test_wraps_horizontally(self):
        framebuffer = Framebuffer()
        framebuffer.draw_row(62, 5, byte_to_bits(0xF0))
        assert lit_pixels(framebuffer) == {(62, 5), (63, 5), (0, 5), (1, 5)}

    def test_wraps_vertically(self):
        framebuffer = Framebuffer()
        framebuffer.draw_row(0, 33, byte_to_bits(0x80))
        assert lit_pixels(framebuffer) == {(0, 1)}

    def test_clear(self):
        framebuffer = Framebuffer()
        framebuffer.draw_row(0, 0, byte_to_bits(0xFF))
        framebuffer.clear()
        assert not any(framebuffer.snapshot())

    def test_rows(self):
        framebuffer = Framebuffer()
        framebuffer.draw_row(63, 31, byte_to_bits(0x80))
        rows = framebuffer.rows()
        assert len(rows) == SCREEN_HEIGHT
        assert rows[31][63] is True
        assert framebuffer.get_pixel(63, 31) is True

    def test_snapshot_is_a_copy(self):
        framebuffer = Framebuffer()
        snapshot = framebuffer.snapshot()
        framebuffer.draw_row(0, 0, byte_to_bits(0x80))
        assert snapshot[0] is False
