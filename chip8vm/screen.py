from pygame import display, HWSURFACE, DOUBLEBUF, Color, draw

from chip8vm.framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH

SCREEN_NAME = 'CHIP8 Emulator'

# The depth of the screen is the number of bits used to represent the color
# of a pixel.
SCREEN_DEPTH = 8

# The colors of the pixels to draw. The Chip 8 supports two colors: 0 (off)
# and 1 (on). The format of the colors is in RGBA format.
PIXEL_COLORS = {
    0: Color(0, 0, 0, 255),
    1: Color(250, 250, 250, 255)
}


class Screen(object):
    """
    Draws a framebuffer snapshot to a pygame window. The original Chip 8
    screen was 64 x 32 with 2 colors, which is scaled up by scaling_ratio
    so it can be seen on a modern display.
    """
    def __init__(self, ratio, screen_height=SCREEN_HEIGHT, screen_width=SCREEN_WIDTH):
        """
        :param ratio: the scaling factor to apply to the screen
        :param screen_height: the height of the screen in Chip 8 pixels
        :param screen_width: the width of the screen in Chip 8 pixels
        """
        self.screen_height = screen_height
        self.screen_width = screen_width
        self.scaling_ratio = ratio
        self.screen_surface = None
        self.last_snapshot = None

    def init_display(self):
        """
        Attempts to initialize a window with the specified height and width.
        The window will by default be of depth SCREEN_DEPTH, and will be
        double-buffered in hardware (if possible).
        """
        display.init()
        self.screen_surface = display.set_mode(
            ((self.screen_width * self.scaling_ratio),
             (self.screen_height * self.scaling_ratio)),
            HWSURFACE | DOUBLEBUF,
            SCREEN_DEPTH)
        display.set_caption(SCREEN_NAME)
        self.screen_surface.fill(PIXEL_COLORS[0])
        display.flip()

    def draw_screen_pixel(self, x_axis_position, y_axis_position, pixel_color):
        """
        Paint one Chip 8 pixel as a scaling_ratio sized square. The pixel is
        not shown until update_screen is called.

        :param x_axis_position: the x coordinate of the pixel
        :param y_axis_position: the y coordinate of the pixel
        :param pixel_color: the color of the pixel to draw (0 or 1)
        """
        x_axis_base_position = x_axis_position * self.scaling_ratio
        y_axis_base_position = y_axis_position * self.scaling_ratio
        draw.rect(self.screen_surface,
                  PIXEL_COLORS[pixel_color],
                  (x_axis_base_position, y_axis_base_position, self.scaling_ratio, self.scaling_ratio))

    def render(self, snapshot):
        """
        Paint a framebuffer snapshot and flip it to the window. Nothing is
        painted if the snapshot is the same as the last one rendered.

        :param snapshot: the flat tuple of pixels from Machine.snapshot()
        """
        if snapshot == self.last_snapshot:
            return
        for pixel, pixel_on in enumerate(snapshot):
            if self.last_snapshot is not None and self.last_snapshot[pixel] == pixel_on:
                continue
            self.draw_screen_pixel(pixel % self.screen_width, pixel // self.screen_width,
                                   1 if pixel_on else 0)
        self.last_snapshot = snapshot
        self.update_screen()

    @staticmethod
    def update_screen():
        """
        Updates the display by swapping the back buffer and screen buffer.
        According to the pygame documentation, the flip should wait for a
        vertical retrace when both HWSURFACE and DOUBLEBUF are set on the
        surface.
        """
        display.flip()
