from chip8vm.cpu import run, step_instruction, step_timer
from chip8vm.decoder import Instruction, decode
from chip8vm.exception import (
    AddressOutOfRangeException, Chip8Exception, IllegalOpCodeException,
    StackOverflowException, StackUnderflowException
)
from chip8vm.framebuffer import Framebuffer
from chip8vm.machine import Machine, STATE_HALTED, STATE_RUNNING, STATE_WAITING
from chip8vm.memory import Memory
from chip8vm.mnemonics import disassemble

__version__ = '1.0.0'
