# The width and height of the screen in pixels
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32


def byte_to_bits(sprite_byte):
    """
    Split a sprite byte into 8 pixels, most significant bit first.

    :param sprite_byte: the byte to split
    :return: a list of 8 ints, each 0 or 1
    """
    return [(sprite_byte >> (7 - bit)) & 0x1 for bit in range(8)]


class Framebuffer(object):
    """
    The 64 x 32 monochrome display. Pixels are kept in a flat list of booleans
    where the pixel at (x, y) lives at y * width + x. There is no double
    buffering; draws are applied in place.
    """
    def __init__(self, width=SCREEN_WIDTH, height=SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = [False] * (width * height)

    def clear(self):
        """
        Turns off all the pixels.
        """
        self.pixels = [False] * (self.width * self.height)

    def get_pixel(self, x_pos, y_pos):
        return self.pixels[(y_pos % self.height) * self.width + (x_pos % self.width)]

    def draw_row(self, x_pos, y_pos, bits):
        """
        XOR one 8 pixel sprite row onto the display, starting at (x_pos,
        y_pos). Coordinates that run off an edge wrap around to the opposite
        edge.

        :param x_pos: the x coordinate of the leftmost pixel
        :param y_pos: the y coordinate of the row
        :param bits: the 8 pixels of the row, leftmost first
        :return: True if a pixel that was on has been turned off
        """
        collided = False
        row_offset = (y_pos % self.height) * self.width
        for x_index, bit in enumerate(bits):
            if not bit:
                continue
            pixel = row_offset + (x_pos + x_index) % self.width
            if self.pixels[pixel]:
                collided = True
            self.pixels[pixel] = not self.pixels[pixel]
        return collided

    def snapshot(self):
        return tuple(self.pixels)

    def rows(self):
        """
        Returns the display as a list of rows, each a tuple of booleans.
        """
        return [tuple(self.pixels[y_pos * self.width:(y_pos + 1) * self.width])
                for y_pos in range(self.height)]
