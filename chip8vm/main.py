import argparse
import logging

import pygame

from chip8vm.cpu import step_instruction, step_timer
from chip8vm.exception import Chip8Exception
from chip8vm.fonts import FONT_SPRITES
from chip8vm.machine import Machine
from chip8vm.screen import Screen

logger = logging.getLogger(__name__)

# A simple timer event used for the delay and sound timers
TIMER = pygame.USEREVENT + 1
# Delay timer decrement interval (in ms), roughly 60Hz
DELAY_INTERVAL = 17
# How often the instruction rate is reported (in ms)
RATE_INTERVAL = 1000

# Sets which keys on the keyboard map to the Chip 8 keys
KEY_MAPPINGS = {
    pygame.K_KP0: 0x0,
    pygame.K_KP1: 0x1,
    pygame.K_KP2: 0x2,
    pygame.K_KP3: 0x3,
    pygame.K_KP4: 0x4,
    pygame.K_KP5: 0x5,
    pygame.K_KP6: 0x6,
    pygame.K_KP7: 0x7,
    pygame.K_KP8: 0x8,
    pygame.K_KP9: 0x9,
    pygame.K_a: 0xA,
    pygame.K_b: 0xB,
    pygame.K_c: 0xC,
    pygame.K_d: 0xD,
    pygame.K_e: 0xE,
    pygame.K_f: 0xF,
}


def load_font(filename):
    """
    Read a replacement font file. It must hold the 16 digit sprites, 5 bytes
    each.
    """
    with open(filename, 'rb') as font_file:
        font = font_file.read()
    if len(font) != len(FONT_SPRITES):
        raise ValueError("Font file {} must be {} bytes, not {}".format(
            filename, len(FONT_SPRITES), len(font)))
    return font


def handle_events(machine):
    """
    Drain the pygame event queue: tick the timers, forward key transitions
    and watch for a request to quit.

    :return: False once the user has asked to quit
    """
    running = True
    for event in pygame.event.get():
        if event.type == TIMER:
            step_timer(machine)
        elif event.type == pygame.QUIT:
            running = False
        elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
            if event.key == pygame.K_q:
                running = False
            elif event.key in KEY_MAPPINGS:
                machine.set_key(KEY_MAPPINGS[event.key], event.type == pygame.KEYDOWN)
    return running


class StatusMonitor(object):
    """
    Watches a running machine from the host loop. Logs the number of
    instructions executed per second once every RATE_INTERVAL, and a record
    each time the sound timer starts or stops the tone.
    """
    def __init__(self, machine, now):
        """
        :param machine: the machine to watch
        :param now: the current time in milliseconds
        """
        self.machine = machine
        self.window_start = now
        self.window_cycles = machine.cycles
        self.tone_on = False

    def update(self, now):
        """
        :param now: the current time in milliseconds
        :return: the instruction rate if one was reported, otherwise None
        """
        if self.machine.sound_active != self.tone_on:
            self.tone_on = self.machine.sound_active
            logger.info("Tone %s", "on" if self.tone_on else "off")

        elapsed = now - self.window_start
        if elapsed < RATE_INTERVAL:
            return None
        rate = (self.machine.cycles - self.window_cycles) * 1000 // elapsed
        logger.info("%d instructions per second", rate)
        self.window_start = now
        self.window_cycles = self.machine.cycles
        return rate


def screen_cpu_connector(args):
    """
    Runs the main emulator loop with the specified arguments.

    :param args: the parsed command-line arguments
    """
    font = load_font(args.font) if args.font else FONT_SPRITES
    machine = Machine(font=font)
    rom_size = machine.load_rom(args.rom)
    logger.info("Loaded %s (%d bytes)", args.rom, rom_size)

    pygame.init()
    project_screen = Screen(ratio=args.scale)
    project_screen.init_display()
    pygame.time.set_timer(TIMER, DELAY_INTERVAL)
    monitor = StatusMonitor(machine, pygame.time.get_ticks())
    running = True

    try:
        while running:
            pygame.time.wait(args.op_delay)
            try:
                step_instruction(machine)
            except Chip8Exception:
                logger.error("Stopped at cycle %d\n%s", machine.cycles, machine)
                running = False
            project_screen.render(machine.snapshot())
            monitor.update(pygame.time.get_ticks())
            if running:
                running = handle_events(machine)
    finally:
        pygame.quit()
    return 1 if machine.error else 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Starts a simple Chip 8 emulator"
                    )
    parser.add_argument(
        "rom", help="the ROM file to load on startup")
    parser.add_argument(
        "-s", help="the scale factor to apply to the display "
                   "(default is 10)", type=int, default=10, dest="scale")
    parser.add_argument(
        "-d", help="sets the CPU operation to take at least "
                   "the specified number of milliseconds to execute (default is 2)",
        type=int, default=2, dest="op_delay")
    parser.add_argument(
        "-f", help="a font file to use instead of the built-in digit sprites",
        default=None, dest="font")
    parser.add_argument(
        "-t", help="log every instruction executed", action="store_true",
        dest="trace")
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.trace else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    return screen_cpu_connector(args)


if __name__ == "__main__":
    raise SystemExit(main())
