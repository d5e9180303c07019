from collections import namedtuple

from chip8vm import operations
from chip8vm.addresses import FAMILY_MASK, N_MASK, NN_MASK, NNN_MASK, X_MASK, Y_MASK
from chip8vm.exception import IllegalOpCodeException


class Instruction(namedtuple('Instruction', 'opcode family x y n nn nnn')):
    """
    The fields of a 16-bit operand:

       Bits:  15-12     11-8      7-4       3-0
              family     x         y         n
                                  |---- nn ----|
                         |--------- nnn -------|
    """
    __slots__ = ()

    @classmethod
    def from_opcode(cls, opcode):
        return cls(
            opcode=opcode,
            family=(opcode & FAMILY_MASK) >> 12,
            x=(opcode & X_MASK) >> 8,
            y=(opcode & Y_MASK) >> 4,
            n=opcode & N_MASK,
            nn=opcode & NN_MASK,
            nnn=opcode & NNN_MASK,
        )


# Operands starting with 0 are selected by their low byte
CLEAR_RETURN_LOOKUP = {
    0xE0: operations.clear_screen,                  # 00E0 - CLS
    0xEE: operations.return_from_subroutine,        # 00EE - RTS
}

# Operands starting with 8 are selected by their low nibble (e.g. operand
# 8st0 would call move_reg_into_reg)
LOGICAL_OPERATION_LOOKUP = {
    0x0: operations.move_reg_into_reg,              # 8st0 - LOAD Vs, Vt
    0x1: operations.logical_or,                     # 8st1 - OR   Vs, Vt
    0x2: operations.logical_and,                    # 8st2 - AND  Vs, Vt
    0x3: operations.exclusive_or,                   # 8st3 - XOR  Vs, Vt
    0x4: operations.add_reg_to_reg,                 # 8st4 - ADD  Vs, Vt
    0x5: operations.subtract_reg_from_reg,          # 8st5 - SUB  Vs, Vt
    0x6: operations.right_shift_reg,                # 8s06 - SHR  Vs
    0x7: operations.subtract_reg_from_reg1,         # 8st7 - SUBN Vs, Vt
    0xE: operations.left_shift_reg,                 # 8s0E - SHL  Vs
}

# Operands starting with E are selected by their low byte
KEYBOARD_ROUTINE_LOOKUP = {
    0x9E: operations.skip_if_key_pressed,           # Es9E - SKPR Vs
    0xA1: operations.skip_if_key_not_pressed,       # EsA1 - SKUP Vs
}

# Operands starting with F are selected by their low byte (e.g. operand
# Ft07 would call move_delay_timer_into_reg)
MISC_ROUTINE_LOOKUP = {
    0x07: operations.move_delay_timer_into_reg,     # Ft07 - LOAD Vt, DELAY
    0x0A: operations.wait_for_keypress,             # Ft0A - KEYD Vt
    0x15: operations.move_reg_into_delay_timer,     # Fs15 - LOAD DELAY, Vs
    0x18: operations.move_reg_into_sound_timer,     # Fs18 - LOAD SOUND, Vs
    0x1E: operations.add_reg_into_index,            # Fs1E - ADD  I, Vs
    0x29: operations.load_index_with_reg_sprite,    # Fs29 - LOAD I, Vs
    0x33: operations.store_bcd_in_memory,           # Fs33 - BCD
    0x55: operations.store_regs_in_memory,          # Fs55 - STOR [I], Vs
    0x65: operations.read_regs_from_memory,         # Fs65 - LOAD Vs, [I]
}

# Families that multiplex several operations map to the table that selects
# between them, and the field of the operand used as the key
SUB_OPERATION_LOOKUP = {
    0x0: (CLEAR_RETURN_LOOKUP, 'nn'),
    0x8: (LOGICAL_OPERATION_LOOKUP, 'n'),
    0xE: (KEYBOARD_ROUTINE_LOOKUP, 'nn'),
    0xF: (MISC_ROUTINE_LOOKUP, 'nn'),
}

# The remaining families have a single handler each for their whole range
OPERATION_LOOKUP = {
    0x1: operations.jump_to_address,                # 1nnn - JUMP nnn
    0x2: operations.jump_to_subroutine,             # 2nnn - CALL nnn
    0x3: operations.skip_if_reg_equal_val,          # 3snn - SKE  Vs, nn
    0x4: operations.skip_if_reg_not_equal_val,      # 4snn - SKNE Vs, nn
    0x5: operations.skip_if_reg_equal_reg,          # 5st0 - SKE  Vs, Vt
    0x6: operations.move_value_to_reg,              # 6snn - LOAD Vs, nn
    0x7: operations.add_value_to_reg,               # 7snn - ADD  Vs, nn
    0x9: operations.skip_if_reg_not_equal_reg,      # 9st0 - SKNE Vs, Vt
    0xA: operations.load_index_reg_with_value,      # Annn - LOAD I, nnn
    0xB: operations.jump_to_v0_plus_value,          # Bnnn - JUMP V0 + nnn
    0xC: operations.generate_random_number,         # Ctnn - RAND Vt, nn
    0xD: operations.draw_sprite,                    # Dstn - DRAW Vs, Vt, n
}


def decode(opcode, pc=None):
    """
    Resolve an operand to the function that executes it.

    :param opcode: the 16-bit operand
    :param pc: the address the operand was fetched from, for error reports
    :return: a (handler, instruction) tuple
    """
    instruction = Instruction.from_opcode(opcode)
    if instruction.family in OPERATION_LOOKUP:
        return OPERATION_LOOKUP[instruction.family], instruction

    lookup, field = SUB_OPERATION_LOOKUP[instruction.family]
    try:
        return lookup[getattr(instruction, field)], instruction
    except KeyError:
        raise IllegalOpCodeException(opcode, pc)
