"""
The Chip 8 instruction set. Every operation is a plain function taking the
machine to act on and the decoded instruction. By the time an operation runs
the program counter already points at the next instruction, so skips add 2
more and jumps overwrite it.

Good descriptions of the instruction set are available at:

    http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
    http://michael.toren.net/mirrors/chip8/chip8def.htm
"""
from random import randint

from chip8vm.addresses import BYTE_MASK, FLAG_REGISTER, FONT_SPRITE_SIZE, FONT_START, INDEX_MASK
from chip8vm.framebuffer import byte_to_bits
from chip8vm.machine import STATE_WAITING


def clear_screen(machine, instruction):
    """
    00E0 - CLS

    Turn off every pixel on the display.
    """
    machine.framebuffer.clear()


def return_from_subroutine(machine, instruction):
    """
    00EE - RTS

    Return from subroutine. Pop the return address off the stack and load it
    into the program counter.
    """
    machine.registers.pc = machine.pop()


def jump_to_address(machine, instruction):
    """
    1nnn - JUMP nnn

    Jump to address. The address to jump to is calculated using the bits
    taken from the operand as follows:

       Bits:  15-12    11-8      7-4      3-0
              unused  address  address  address
    """
    machine.registers.pc = instruction.nnn


def jump_to_subroutine(machine, instruction):
    """
    2nnn - CALL nnn

    Jump to subroutine. Save the address of the instruction following the
    call on the stack, then jump to the address taken from the operand:

       Bits:  15-12    11-8      7-4      3-0
              unused  address  address  address
    """
    machine.push(machine.registers.pc)
    machine.registers.pc = instruction.nnn


def skip_if_reg_equal_val(machine, instruction):
    """
    3snn - SKE Vs, nn

    Skip if register contents equal to constant value. The calculation for
    the register and constant is performed on the operand:

       Bits:  15-12     11-8      7-4       3-0
              unused   source  constant  constant
    """
    if machine.registers.v[instruction.x] == instruction.nn:
        machine.registers.pc += 2


def skip_if_reg_not_equal_val(machine, instruction):
    """
    4snn - SKNE Vs, nn

    Skip if register contents not equal to constant value.

       Bits:  15-12     11-8      7-4       3-0
              unused   source  constant  constant
    """
    if machine.registers.v[instruction.x] != instruction.nn:
        machine.registers.pc += 2


def skip_if_reg_equal_reg(machine, instruction):
    """
    5st0 - SKE Vs, Vt

    Skip if source register is equal to target register. The low nibble is
    not examined.

       Bits:  15-12     11-8      7-4       3-0
              unused   source    target      0
    """
    registers = machine.registers
    if registers.v[instruction.x] == registers.v[instruction.y]:
        registers.pc += 2


def move_value_to_reg(machine, instruction):
    """
    6snn - LOAD Vs, nn

    Move the constant value into the specified register.

       Bits:  15-12     11-8      7-4       3-0
              unused   target    value     value
    """
    machine.registers.v[instruction.x] = instruction.nn


def add_value_to_reg(machine, instruction):
    """
    7snn - ADD Vs, nn

    Add the constant value to the specified register. The result wraps at
    8 bits and the flag register is left alone.

       Bits:  15-12     11-8      7-4       3-0
              unused   target    value     value
    """
    v = machine.registers.v
    v[instruction.x] = (v[instruction.x] + instruction.nn) & BYTE_MASK


def move_reg_into_reg(machine, instruction):
    """
    8st0 - LOAD Vs, Vt

    Move the value of the source register into the target register.

       Bits:  15-12     11-8      7-4       3-0
              unused   target    source      0
    """
    v = machine.registers.v
    v[instruction.x] = v[instruction.y]


def logical_or(machine, instruction):
    """
    8ts1 - OR   Vs, Vt
    """
    v = machine.registers.v
    v[instruction.x] |= v[instruction.y]


def logical_and(machine, instruction):
    """
    8ts2 - AND  Vs, Vt
    """
    v = machine.registers.v
    v[instruction.x] &= v[instruction.y]


def exclusive_or(machine, instruction):
    """
    8ts3 - XOR  Vs, Vt
    """
    v = machine.registers.v
    v[instruction.x] ^= v[instruction.y]


def _store_with_flag(machine, target, result, flag):
    # The flag is written last, so it wins when the target is VF
    v = machine.registers.v
    v[target] = result & BYTE_MASK
    v[FLAG_REGISTER] = flag


def add_reg_to_reg(machine, instruction):
    """
    8ts4 - ADD  Vt, Vs

    Add the value in the source register to the value in the target
    register, and store the result in the target register.

       Bits:  15-12     11-8      7-4       3-0
              unused   target    source      4

    If a carry is generated, set a carry flag in register VF.
    """
    v = machine.registers.v
    total = v[instruction.x] + v[instruction.y]
    _store_with_flag(machine, instruction.x, total, 1 if total > BYTE_MASK else 0)


def subtract_reg_from_reg(machine, instruction):
    """
    8ts5 - SUB  Vt, Vs

    Subtract the value in the source register from the value in the target
    register, and store the result in the target register.

       Bits:  15-12     11-8      7-4       3-0
              unused   target    source      5

    If a borrow is NOT generated, set a carry flag in register VF.
    """
    v = machine.registers.v
    target_reg = v[instruction.x]
    source_reg = v[instruction.y]
    _store_with_flag(machine, instruction.x, target_reg - source_reg,
                     1 if target_reg > source_reg else 0)


def right_shift_reg(machine, instruction):
    """
    8s06 - SHR  Vs

    Shift the bits in the specified register 1 bit to the right. Bit 0 will
    be shifted into register VF.

       Bits:  15-12     11-8      7-4       3-0
              unused   source      0         6
    """
    value = machine.registers.v[instruction.x]
    _store_with_flag(machine, instruction.x, value >> 1, value & 0x1)


def subtract_reg_from_reg1(machine, instruction):
    """
    8ts7 - SUBN Vt, Vs

    Subtract the value in the target register from the value in the source
    register, and store the result in the target register.

       Bits:  15-12     11-8      7-4       3-0
              unused   target    source      7

    If a borrow is NOT generated, set a carry flag in register VF.
    """
    v = machine.registers.v
    target_reg = v[instruction.x]
    source_reg = v[instruction.y]
    _store_with_flag(machine, instruction.x, source_reg - target_reg,
                     1 if source_reg > target_reg else 0)


def left_shift_reg(machine, instruction):
    """
    8s0E - SHL  Vs

    Shift the bits in the specified register 1 bit to the left. Bit 7 will
    be shifted into register VF.

       Bits:  15-12     11-8      7-4       3-0
              unused   source      0         E
    """
    value = machine.registers.v[instruction.x]
    _store_with_flag(machine, instruction.x, value << 1, (value >> 7) & 0x1)


def skip_if_reg_not_equal_reg(machine, instruction):
    """
    9st0 - SKNE Vs, Vt

    Skip if source register is not equal to target register.

       Bits:  15-12     11-8      7-4       3-0
              unused   source    target    unused
    """
    registers = machine.registers
    if registers.v[instruction.x] != registers.v[instruction.y]:
        registers.pc += 2


def load_index_reg_with_value(machine, instruction):
    """
    Annn - LOAD I, nnn

    Load index register with constant value.

       Bits:  15-12     11-8      7-4       3-0
              unused   constant  constant  constant
    """
    machine.registers.index = instruction.nnn


def jump_to_v0_plus_value(machine, instruction):
    """
    Bnnn - JUMP V0 + nnn

    Load the program counter with the address in the operand plus the value
    of register V0.

       Bits:  15-12     11-8      7-4       3-0
              unused   address  address  address
    """
    machine.registers.pc = machine.registers.v[0] + instruction.nnn


def generate_random_number(machine, instruction):
    """
    Ctnn - RAND Vt, nn

    A random number between 0 and 255 is generated. The contents of it are
    then ANDed with the constant value passed in the operand. The result is
    stored in the target register.

       Bits:  15-12     11-8      7-4       3-0
              unused    target    value    value
    """
    machine.registers.v[instruction.x] = instruction.nn & randint(0, 255)


def draw_sprite(machine, instruction):
    """
    Dxyn - DRAW x, y, num_bytes

    Draws the sprite pointed to in the index register at the specified
    x and y coordinates. Drawing is done via an XOR routine, meaning that
    if the target pixel is already turned on, and a pixel is set to be
    turned on at that same location via the draw, then the pixel is turned
    off. Pixels drawn off the edge of the screen wrap around to the opposite
    edge. Each sprite is 8 bits (1 byte) wide. The num_bytes parameter sets
    how tall the sprite is. For example, assume that the index register
    pointed to the following 7 bytes:

                   bit 0 1 2 3 4 5 6 7

       byte 0          0 1 1 1 1 1 0 0
       byte 1          0 1 0 0 0 0 0 0
       byte 2          0 1 0 0 0 0 0 0
       byte 3          0 1 1 1 1 1 0 0
       byte 4          0 1 0 0 0 0 0 0
       byte 5          0 1 0 0 0 0 0 0
       byte 6          0 1 1 1 1 1 0 0

    This would draw a character on the screen that looks like an 'E'. If
    writing a pixel to a location causes that pixel to be turned off, then
    VF will be set to 1, otherwise it is set to 0.

       Bits:  15-12     11-8      7-4       3-0
              unused    x_source  y_source  num_bytes
    """
    registers = machine.registers
    x_pos = registers.v[instruction.x]
    y_pos = registers.v[instruction.y]

    # Read the whole sprite first so a bad index leaves the display alone
    sprite = machine.memory.read_bytes(registers.index, instruction.n)

    collided = False
    for y_index, sprite_byte in enumerate(sprite):
        if machine.framebuffer.draw_row(x_pos, y_pos + y_index, byte_to_bits(sprite_byte)):
            collided = True
    registers.v[FLAG_REGISTER] = 1 if collided else 0


def skip_if_key_pressed(machine, instruction):
    """
    Es9E - SKPR Vs

    Skip the next instruction if the key named by the source register is
    down. Only the low nibble of the register selects the key.

       Bits:  15-12    11-8      7-4      3-0
              unused   source     9        E
    """
    key = machine.registers.v[instruction.x] & 0xF
    if machine.keys[key]:
        machine.registers.pc += 2


def skip_if_key_not_pressed(machine, instruction):
    """
    EsA1 - SKUP Vs

    Skip the next instruction if the key named by the source register is up.

       Bits:  15-12    11-8      7-4      3-0
              unused   source     A        1
    """
    key = machine.registers.v[instruction.x] & 0xF
    if not machine.keys[key]:
        machine.registers.pc += 2


def move_delay_timer_into_reg(machine, instruction):
    """
    Ft07 - LOAD Vt, DELAY

       Bits:  15-12     11-8      7-4       3-0
              unused    target     0         7
    """
    machine.registers.v[instruction.x] = machine.registers.delay


def wait_for_keypress(machine, instruction):
    """
    Ft0A - KEYD Vt

    Stop execution until a key is pressed, then move the value of the key
    pressed into the target register. This does not block: if no key is
    down the program counter is wound back onto this instruction and the
    machine is put in the waiting state, which the engine polls on every
    following step.

       Bits:  15-12     11-8      7-4       3-0
              unused    target     0         A
    """
    key = machine.pressed_key()
    if key is not None:
        machine.registers.v[instruction.x] = key
        return
    machine.registers.pc -= 2
    machine.key_target = instruction.x
    machine.state = STATE_WAITING


def move_reg_into_delay_timer(machine, instruction):
    """
    Fs15 - LOAD DELAY, Vs

       Bits:  15-12     11-8      7-4       3-0
              unused    source     1         5
    """
    machine.registers.delay = machine.registers.v[instruction.x]


def move_reg_into_sound_timer(machine, instruction):
    """
    Fs18 - LOAD SOUND, Vs

       Bits:  15-12     11-8      7-4       3-0
              unused    source     1         8
    """
    machine.registers.sound = machine.registers.v[instruction.x]


def add_reg_into_index(machine, instruction):
    """
    Fs1E - ADD  I, Vs

    Add the value of the register into the index register. The index stays
    12 bits wide; VF is set to 1 when the sum runs past 0xFFF.

       Bits:  15-12     11-8      7-4       3-0
              unused    source     1         E
    """
    registers = machine.registers
    total = registers.index + registers.v[instruction.x]
    registers.index = total & INDEX_MASK
    registers.v[FLAG_REGISTER] = 1 if total > INDEX_MASK else 0


def load_index_with_reg_sprite(machine, instruction):
    """
    Fs29 - LOAD I, Vs

    Load the index with the font sprite for the digit in the source register.
    All sprites are 5 bytes long, so the location of the specified sprite is
    its index multiplied by 5.

       Bits:  15-12     11-8      7-4       3-0
              unused    source     2         9
    """
    registers = machine.registers
    registers.index = FONT_START + registers.v[instruction.x] * FONT_SPRITE_SIZE


def store_bcd_in_memory(machine, instruction):
    """
    Fs33 - BCD

    Take the value stored in source and place the digits in the following
    locations:

        hundreds   -> memory[index]
        tens       -> memory[index + 1]
        ones       -> memory[index + 2]

    For example, if the value is 123, then 1, 2 and 3 are stored.

       Bits:  15-12     11-8      7-4       3-0
              unused    source     3         3
    """
    index = machine.registers.index
    value = machine.registers.v[instruction.x]
    machine.memory.check_range(index, 3)
    machine.memory.write_byte(index, value // 100)
    machine.memory.write_byte(index + 1, (value // 10) % 10)
    machine.memory.write_byte(index + 2, value % 10)


def store_regs_in_memory(machine, instruction):
    """
    Fs55 - STOR [I], Vs

    Store the V registers V0 through Vs in the memory pointed to by the index
    register. The index register is not changed.

       Bits:  15-12     11-8      7-4       3-0
              unused    source     5         5

    For example, to store all of the V registers, the source would be 'F'.
    """
    registers = machine.registers
    machine.memory.load(registers.index, registers.v[:instruction.x + 1])


def read_regs_from_memory(machine, instruction):
    """
    Fs65 - LOAD Vs, [I]

    Read V0 through Vs from the memory pointed to by the index register. The
    index register is not changed.

       Bits:  15-12     11-8      7-4       3-0
              unused    source     6         5
    """
    registers = machine.registers
    values = machine.memory.read_bytes(registers.index, instruction.x + 1)
    registers.v[:instruction.x + 1] = list(values)
