from chip8vm.decoder import Instruction

# Mnemonic templates, keyed the same way as the dispatch tables in decoder
FAMILY_MNEMONICS = {
    0x1: 'JUMP {nnn:03X}',
    0x2: 'CALL {nnn:03X}',
    0x3: 'SKE  V{x:X}, {nn:02X}',
    0x4: 'SKNE V{x:X}, {nn:02X}',
    0x5: 'SKE  V{x:X}, V{y:X}',
    0x6: 'LOAD V{x:X}, {nn:02X}',
    0x7: 'ADD  V{x:X}, {nn:02X}',
    0x9: 'SKNE V{x:X}, V{y:X}',
    0xA: 'LOAD I, {nnn:03X}',
    0xB: 'JUMP V0 + {nnn:03X}',
    0xC: 'RAND V{x:X}, {nn:02X}',
    0xD: 'DRAW V{x:X}, V{y:X}, {n:X}',
}

SUB_MNEMONICS = {
    0x0: ('nn', {
        0xE0: 'CLS',
        0xEE: 'RTS',
    }),
    0x8: ('n', {
        0x0: 'LOAD V{x:X}, V{y:X}',
        0x1: 'OR   V{x:X}, V{y:X}',
        0x2: 'AND  V{x:X}, V{y:X}',
        0x3: 'XOR  V{x:X}, V{y:X}',
        0x4: 'ADD  V{x:X}, V{y:X}',
        0x5: 'SUB  V{x:X}, V{y:X}',
        0x6: 'SHR  V{x:X}',
        0x7: 'SUBN V{x:X}, V{y:X}',
        0xE: 'SHL  V{x:X}',
    }),
    0xE: ('nn', {
        0x9E: 'SKPR V{x:X}',
        0xA1: 'SKUP V{x:X}',
    }),
    0xF: ('nn', {
        0x07: 'LOAD V{x:X}, DELAY',
        0x0A: 'KEYD V{x:X}',
        0x15: 'LOAD DELAY, V{x:X}',
        0x18: 'LOAD SOUND, V{x:X}',
        0x1E: 'ADD  I, V{x:X}',
        0x29: 'LOAD I, FONT V{x:X}',
        0x33: 'BCD  V{x:X}',
        0x55: 'STOR [I], V{x:X}',
        0x65: 'LOAD V{x:X}, [I]',
    }),
}


def disassemble(opcode):
    """
    Turn an operand into a human readable mnemonic, e.g. 0x6A2F becomes
    'LOAD VA, 2F'. Operands with no matching instruction come back as
    'UNKNOWN' followed by the operand.

    :param opcode: the 16-bit operand
    :return: the mnemonic string
    """
    instruction = Instruction.from_opcode(opcode)
    template = FAMILY_MNEMONICS.get(instruction.family)
    if template is None:
        field, templates = SUB_MNEMONICS[instruction.family]
        template = templates.get(getattr(instruction, field))
    if template is None:
        return 'UNKNOWN {:04X}'.format(opcode)
    return template.format(**instruction._asdict())
