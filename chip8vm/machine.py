import threading

from chip8vm.addresses import (
    FONT_START, NUM_KEYS, NUM_REGISTERS, PROGRAM_COUNTER_START, STACK_END,
    STACK_POINTER_START
)
from chip8vm.exception import StackOverflowException, StackUnderflowException
from chip8vm.fonts import FONT_SPRITES
from chip8vm.framebuffer import Framebuffer
from chip8vm.memory import Memory

# The states of the execution engine
STATE_RUNNING = 'running'
STATE_WAITING = 'waiting'
STATE_HALTED = 'halted'


class Registers(object):
    """
    The Chip 8 register file:

        * 16 x 8-bit general purpose registers (V0 - VF**)
        * 1 x 12-bit index register (I)
        * 1 x 16-bit stack pointer (SP)
        * 1 x 16-bit program counter (PC)
        * 1 x 8-bit delay timer (DT)
        * 1 x 8-bit sound timer (ST)

    ** VF is a special register - it is used to store the carry, borrow and
    collision flags
    """
    def __init__(self):
        self.v = []
        self.index = 0
        self.sp = 0
        self.pc = 0
        self.delay = 0
        self.sound = 0
        self.reset()

    def reset(self):
        """
        Blank out all registers, and reset the stack pointer and program
        counter to their starting values.
        """
        self.v = [0] * NUM_REGISTERS
        self.index = 0
        self.sp = STACK_POINTER_START
        self.pc = PROGRAM_COUNTER_START
        self.delay = 0
        self.sound = 0

    def __str__(self):
        val = 'PC: {:4X}  SP: {:4X}  I: {:4X}\n'.format(self.pc, self.sp, self.index)
        for index in range(NUM_REGISTERS):
            val += 'V{:X}: {:2X}\n'.format(index, self.v[index])
        val += 'DELAY: {:2X}  SOUND: {:2X}\n'.format(self.delay, self.sound)
        return val


class Machine(object):
    """
    Everything the Chip 8 program can see: registers, memory, the display and
    the keypad, plus the state of the execution engine. A machine is created
    once, mutated in place by the engine and the timer, and thrown away as a
    unit.

    All public entry points serialize on a single re-entrant lock, so the
    instruction clock, the timer clock, the renderer and the input source may
    be driven from different threads.
    """
    def __init__(self, font=FONT_SPRITES):
        self.lock = threading.RLock()
        self.registers = Registers()
        self.memory = Memory()
        self.framebuffer = Framebuffer()
        self.keys = [False] * NUM_KEYS
        self.state = STATE_RUNNING
        self.key_target = None
        self.error = None
        self.cycles = 0
        self.memory.load(FONT_START, font)

    def reset(self):
        """
        Reset registers, keys, display and engine state. The memory image is
        left as it is so a loaded program can be restarted.
        """
        with self.lock:
            self.registers.reset()
            self.framebuffer.clear()
            self.keys = [False] * NUM_KEYS
            self.state = STATE_RUNNING
            self.key_target = None
            self.error = None
            self.cycles = 0

    def load_rom(self, filename, offset=PROGRAM_COUNTER_START):
        """
        Load the ROM indicated by the filename into memory.

        :param filename: the name of the file to load
        :param offset: the location in memory at which to load the ROM
        :return: the number of bytes loaded
        """
        with open(filename, 'rb') as rom_file:
            rom_data = rom_file.read()
        return self.load_bytes(rom_data, offset)

    def load_bytes(self, data, offset=PROGRAM_COUNTER_START):
        with self.lock:
            return self.memory.load(offset, data)

    @property
    def halted(self):
        return self.state == STATE_HALTED

    @property
    def waiting(self):
        return self.state == STATE_WAITING

    @property
    def sound_active(self):
        return self.registers.sound > 0

    def halt(self, error=None):
        with self.lock:
            self.state = STATE_HALTED
            self.error = error

    def set_key(self, key, pressed):
        """
        Record a key transition from the input source.

        :param key: the keypad index (0x0 - 0xF)
        :param pressed: whether the key is now down
        """
        if not 0 <= key < NUM_KEYS:
            raise ValueError("Invalid key: {}".format(key))
        with self.lock:
            self.keys[key] = bool(pressed)

    def pressed_key(self):
        """
        Returns the lowest numbered key that is down, or None.
        """
        for key, pressed in enumerate(self.keys):
            if pressed:
                return key
        return None

    def push(self, address):
        """
        Push a return address onto the stack. The address is stored high byte
        first at SP, and SP moves up by 2.

        :param address: the address to save
        """
        sp = self.registers.sp
        if sp < STACK_POINTER_START or sp + 2 > STACK_END:
            raise StackOverflowException(sp)
        self.memory.write_byte(sp, (address >> 8) & 0xFF)
        self.memory.write_byte(sp + 1, address & 0xFF)
        self.registers.sp = sp + 2

    def pop(self):
        """
        Pop the most recently pushed return address off the stack.

        :return: the address
        """
        sp = self.registers.sp
        if sp - 2 < STACK_POINTER_START or sp > STACK_END:
            raise StackUnderflowException(sp)
        address = self.memory.read_word(sp - 2)
        self.registers.sp = sp - 2
        return address

    def snapshot(self):
        """
        Returns a read-only copy of the display for a renderer.
        """
        with self.lock:
            return self.framebuffer.snapshot()

    def __str__(self):
        return 'STATE: {}  CYCLES: {}\n{}'.format(self.state, self.cycles, self.registers)
