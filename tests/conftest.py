"""Shared fixtures for the chip8vm tests."""

import pytest

from chip8vm.machine import Machine


@pytest.fixture
def machine():
    return Machine()


@pytest.fixture
def load_program(machine):
    """Write a list of 16-bit operands at 0x200 and return the machine."""
    def _load(*opcodes):
        data = bytearray()
        for opcode in opcodes:
            data += bytes([(opcode >> 8) & 0xFF, opcode & 0xFF])
        machine.load_bytes(data)
        return machine
    return _load
