"""
The fetch-decode-execute cycle and the timer subsystem.

The engine has no sense of time. The host calls step_instruction at the
instruction rate it wants (around 500 per second for most programs) and
step_timer at 60 per second, from one loop or from separate threads.
"""
import logging

from chip8vm.decoder import decode
from chip8vm.exception import Chip8Exception
from chip8vm.machine import STATE_HALTED, STATE_RUNNING, STATE_WAITING
from chip8vm.mnemonics import disassemble

logger = logging.getLogger(__name__)


def step_instruction(machine):
    """
    Execute the next instruction pointed to by the program counter.

    While the machine is waiting for a key the step only polls the keypad.
    Once the machine has halted the step does nothing. Any Chip8Exception
    halts the machine, leaves the program counter on the failing instruction
    and is raised again for the host to report.

    :param machine: the machine to step
    :return: the operand executed, or None if nothing was executed
    """
    with machine.lock:
        if machine.state == STATE_HALTED:
            return None

        if machine.state == STATE_WAITING:
            _poll_keypad(machine)
            return None

        registers = machine.registers
        pc = registers.pc
        try:
            opcode = machine.memory.read_word(pc)
            handler, instruction = decode(opcode, pc)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug('%04X  %04X  %s', pc, opcode, disassemble(opcode))
            registers.pc = pc + 2
            handler(machine, instruction)
        except Chip8Exception as error:
            registers.pc = pc
            machine.halt(error)
            logger.error('Machine halted: %s', error)
            raise

        machine.cycles += 1
        return opcode


def _poll_keypad(machine):
    key = machine.pressed_key()
    if key is None:
        return
    machine.registers.v[machine.key_target] = key
    machine.registers.pc += 2
    machine.key_target = None
    machine.state = STATE_RUNNING


def step_timer(machine):
    """
    Decrement both the sound and delay timer. Neither goes below zero.
    """
    with machine.lock:
        if machine.state == STATE_HALTED:
            return
        registers = machine.registers
        if registers.delay != 0:
            registers.delay -= 1

        if registers.sound != 0:
            registers.sound -= 1


def run(machine, cycles):
    """
    Call step_instruction up to cycles times, stopping early if the machine
    halts.

    :param machine: the machine to run
    :param cycles: the maximum number of steps
    :return: the number of steps taken
    """
    steps = 0
    while steps < cycles and not machine.halted:
        step_instruction(machine)
        steps += 1
    return steps
