"""Tests for the individual Chip 8 instructions, run through the engine."""

from unittest import mock

import pytest

from chip8vm.cpu import step_instruction
from chip8vm.exception import AddressOutOfRangeException


def execute(load_program, *opcodes):
    machine = load_program(*opcodes)
    for _ in opcodes:
        step_instruction(machine)
    return machine


class TestFlowControl:

    def test_clear_screen(self, load_program):
        machine = load_program(0x00E0)
        machine.framebuffer.draw_row(0, 0, [1] * 8)
        step_instruction(machine)
        assert not any(machine.snapshot())
        assert machine.registers.pc == 0x202

    def test_jump(self, load_program):
        machine = load_program(0x1ABC)
        step_instruction(machine)
        assert machine.registers.pc == 0xABC

    def test_call_and_return(self, load_program):
        machine = load_program(0x2208, 0x0000, 0x0000, 0x0000, 0x00EE)
        step_instruction(machine)
        assert machine.registers.pc == 0x208
        assert machine.registers.sp == 0xEA2
        assert machine.memory.read_word(0xEA0) == 0x202
        step_instruction(machine)
        assert machine.registers.pc == 0x202
        assert machine.registers.sp == 0xEA0

    def test_jump_v0_plus_value(self, load_program):
        machine = load_program(0xB300)
        machine.registers.v[0] = 0x10
        step_instruction(machine)
        assert machine.registers.pc == 0x310


class TestSkips:

    @pytest.mark.parametrize("opcode, value, expected_pc", [
        (0x3142, 0x42, 0x204),
        (0x3142, 0x41, 0x202),
        (0x4142, 0x42, 0x202),
        (0x4142, 0x41, 0x204),
    ])
    def test_register_against_value(self, load_program, opcode, value, expected_pc):
        machine = load_program(opcode)
        machine.registers.v[1] = value
        step_instruction(machine)
        assert machine.registers.pc == expected_pc

    @pytest.mark.parametrize("opcode, other, expected_pc", [
        (0x5120, 7, 0x204),
        (0x5120, 8, 0x202),
        (0x9120, 7, 0x202),
        (0x9120, 8, 0x204),
    ])
    def test_register_against_register(self, load_program, opcode, other, expected_pc):
        machine = load_program(opcode)
        machine.registers.v[1] = 7
        machine.registers.v[2] = other
        step_instruction(machine)
        assert machine.registers.pc == expected_pc

    @pytest.mark.parametrize("opcode, pressed, expected_pc", [
        (0xE39E, True, 0x204),
        (0xE39E, False, 0x202),
        (0xE3A1, True, 0x202),
        (0xE3A1, False, 0x204),
    ])
    def test_keys(self, load_program, opcode, pressed, expected_pc):
        machine = load_program(opcode)
        machine.registers.v[3] = 0xB
        machine.set_key(0xB, pressed)
        step_instruction(machine)
        assert machine.registers.pc == expected_pc


class TestLoadsAndArithmetic:

    @pytest.mark.parametrize("value", [0, 1, 0x7F, 0x80, 0xFF])
    def test_load_value(self, load_program, value):
        machine = load_program(0x6500 | value)
        step_instruction(machine)
        assert machine.registers.v[5] == value
        assert machine.registers.pc == 0x202

    def test_add_value_wraps_without_flag(self, load_program):
        machine = load_program(0x710A)
        machine.registers.v[1] = 250
        machine.registers.v[0xF] = 7
        step_instruction(machine)
        assert machine.registers.v[1] == 4
        assert machine.registers.v[0xF] == 7

    def test_move_reg(self, load_program):
        machine = load_program(0x8120)
        machine.registers.v[2] = 0x33
        step_instruction(machine)
        assert machine.registers.v[1] == 0x33

    @pytest.mark.parametrize("opcode, expected", [
        (0x8121, 0b1110),
        (0x8122, 0b1000),
        (0x8123, 0b0110),
    ])
    def test_bitwise(self, load_program, opcode, expected):
        machine = load_program(opcode)
        machine.registers.v[1] = 0b1100
        machine.registers.v[2] = 0b1010
        step_instruction(machine)
        assert machine.registers.v[1] == expected

    @pytest.mark.parametrize("x_value, y_value, result, flag", [
        (250, 10, 4, 1),
        (10, 5, 15, 0),
        (255, 1, 0, 1),
    ])
    def test_add_registers(self, load_program, x_value, y_value, result, flag):
        machine = load_program(0x8124)
        machine.registers.v[1] = x_value
        machine.registers.v[2] = y_value
        step_instruction(machine)
        assert machine.registers.v[1] == result
        assert machine.registers.v[0xF] == flag

    @pytest.mark.parametrize("x_value, y_value, result, flag", [
        (10, 4, 6, 1),
        (4, 10, 250, 0),
        (5, 5, 0, 0),
    ])
    def test_subtract(self, load_program, x_value, y_value, result, flag):
        machine = load_program(0x8125)
        machine.registers.v[1] = x_value
        machine.registers.v[2] = y_value
        step_instruction(machine)
        assert machine.registers.v[1] == result
        assert machine.registers.v[0xF] == flag

    @pytest.mark.parametrize("x_value, y_value, result, flag", [
        (4, 10, 6, 1),
        (10, 4, 250, 0),
    ])
    def test_subtract_reversed(self, load_program, x_value, y_value, result, flag):
        machine = load_program(0x8127)
        machine.registers.v[1] = x_value
        machine.registers.v[2] = y_value
        step_instruction(machine)
        assert machine.registers.v[1] == result
        assert machine.registers.v[0xF] == flag

    @pytest.mark.parametrize("value, result, flag", [
        (0b101, 0b10, 1),
        (0b100, 0b10, 0),
    ])
    def test_shift_right(self, load_program, value, result, flag):
        machine = load_program(0x8106)
        machine.registers.v[1] = value
        step_instruction(machine)
        assert machine.registers.v[1] == result
        assert machine.registers.v[0xF] == flag

    @pytest.mark.parametrize("value, result, flag", [
        (0x81, 0x02, 1),
        (0x41, 0x82, 0),
    ])
    def test_shift_left(self, load_program, value, result, flag):
        machine = load_program(0x810E)
        machine.registers.v[1] = value
        step_instruction(machine)
        assert machine.registers.v[1] == result
        assert machine.registers.v[0xF] == flag

    def test_flag_wins_when_target_is_vf(self, load_program):
        machine = load_program(0x8F14)
        machine.registers.v[0xF] = 200
        machine.registers.v[1] = 100
        step_instruction(machine)
        assert machine.registers.v[0xF] == 1

    def test_random(self, load_program):
        machine = load_program(0xC30F)
        with mock.patch("chip8vm.operations.randint", return_value=0xAB) as randint:
            step_instruction(machine)
        randint.assert_called_once_with(0, 255)
        assert machine.registers.v[3] == 0x0B


class TestIndex:

    def test_load_index(self, load_program):
        machine = execute(load_program, 0xA123)
        assert machine.registers.index == 0x123

    def test_add_to_index(self, load_program):
        machine = load_program(0xF21E)
        machine.registers.index = 0x100
        machine.registers.v[2] = 0x20
        machine.registers.v[0xF] = 1
        step_instruction(machine)
        assert machine.registers.index == 0x120
        assert machine.registers.v[0xF] == 0

    def test_add_to_index_overflow(self, load_program):
        machine = load_program(0xF21E)
        machine.registers.index = 0xFFF
        machine.registers.v[2] = 2
        step_instruction(machine)
        assert machine.registers.index == 0x001
        assert machine.registers.v[0xF] == 1

    def test_font_sprite(self, load_program):
        machine = load_program(0xF429)
        machine.registers.v[4] = 0xA
        step_instruction(machine)
        assert machine.registers.index == 50


class TestMemoryTransfers:

    @pytest.mark.parametrize("value, digits", [
        (255, [2, 5, 5]),
        (123, [1, 2, 3]),
        (7, [0, 0, 7]),
        (40, [0, 4, 0]),
    ])
    def test_bcd(self, load_program, value, digits):
        machine = load_program(0xF533)
        machine.registers.v[5] = value
        machine.registers.index = 0x300
        step_instruction(machine)
        assert list(machine.memory.read_bytes(0x300, 3)) == digits
        assert machine.registers.index == 0x300

    def test_bcd_past_end_of_memory(self, load_program):
        machine = load_program(0xF533)
        machine.registers.index = 0xFFE
        with pytest.raises(AddressOutOfRangeException):
            step_instruction(machine)
        assert machine.memory.read_bytes(0xFFE, 2) == b"\x00\x00"

    def test_store_registers(self, load_program):
        machine = load_program(0xF355)
        machine.registers.v[:5] = [1, 2, 3, 4, 5]
        machine.registers.index = 0x300
        step_instruction(machine)
        assert list(machine.memory.read_bytes(0x300, 5)) == [1, 2, 3, 4, 0]
        assert machine.registers.index == 0x300

    def test_read_registers(self, load_program):
        machine = load_program(0xF265)
        machine.memory.load(0x300, b"\x09\x08\x07\x06")
        machine.registers.index = 0x300
        step_instruction(machine)
        assert machine.registers.v[:4] == [9, 8, 7, 0]
        assert machine.registers.index == 0x300

    def test_timers(self, load_program):
        machine = load_program(0xF115, 0xF218, 0xF307)
        machine.registers.v[1] = 30
        machine.registers.v[2] = 40
        step_instruction(machine)
        step_instruction(machine)
        assert machine.registers.delay == 30
        assert machine.registers.sound == 40
        step_instruction(machine)
        assert machine.registers.v[3] == 30


class TestDraw:

    def test_draw_font_digit(self, load_program):
        machine = load_program(0xD015)
        machine.registers.index = 0  # digit 0
        step_instruction(machine)
        rows = machine.framebuffer.rows()
        assert rows[0][:4] == (True, True, True, True)
        assert rows[1][:4] == (True, False, False, True)
        assert machine.registers.v[0xF] == 0
        assert machine.registers.pc == 0x202

    def test_draw_at_register_position(self, load_program):
        machine = load_program(0xD121)
        machine.registers.v[1] = 10
        machine.registers.v[2] = 20
        machine.registers.index = 0x300
        machine.memory.write_byte(0x300, 0x80)
        step_instruction(machine)
        assert machine.framebuffer.get_pixel(10, 20) is True
        assert sum(machine.snapshot()) == 1

    def test_draw_twice_restores_display(self, load_program):
        machine = load_program(0xD015, 0xD015)
        machine.framebuffer.draw_row(40, 10, [1] * 8)
        before = machine.snapshot()
        step_instruction(machine)
        assert machine.registers.v[0xF] == 0
        step_instruction(machine)
        assert machine.registers.v[0xF] == 1
        assert machine.snapshot() == before

    def test_draw_wraps(self, load_program):
        machine = load_program(0xD121)
        machine.registers.v[1] = 60
        machine.registers.v[2] = 31
        machine.registers.index = 0x300
        machine.memory.write_byte(0x300, 0xFF)
        step_instruction(machine)
        assert machine.framebuffer.get_pixel(63, 31) is True
        assert machine.framebuffer.get_pixel(0, 31) is True
        assert machine.framebuffer.get_pixel(3, 31) is True
        assert sum(machine.snapshot()) == 8

    def test_draw_past_end_of_memory_leaves_display(self, load_program):
        machine = load_program(0xD01F)
        machine.registers.index = 0xFF8
        with pytest.raises(AddressOutOfRangeException):
            step_instruction(machine)
        assert not any(machine.snapshot())

    def test_draw_zero_rows(self, load_program):
        machine = load_program(0xD010)
        machine.registers.v[0xF] = 1
        step_instruction(machine)
        assert machine.registers.v[0xF] == 0
        assert not any(machine.snapshot())


class TestMemoryTransfersPastEnd:
    """Register range transfers that run off the end of memory change nothing."""

    def test_store_registers(self, load_program):
        machine = load_program(0xFF55)
        machine.registers.v[:] = list(range(1, 17))
        machine.registers.index = 0xFF8
        with pytest.raises(AddressOutOfRangeException):
            step_instruction(machine)
        assert machine.memory.read_bytes(0xFF8, 8) == b"\x00" * 8
        assert machine.registers.v == list(range(1, 17))
        assert machine.registers.index == 0xFF8
        assert machine.registers.pc == 0x200

    def test_read_registers(self, load_program):
        machine = load_program(0xFF65)
        machine.memory.load(0xFF8, b"\xAA" * 8)
        machine.registers.index = 0xFF8
        with pytest.raises(AddressOutOfRangeException):
            step_instruction(machine)
        assert machine.registers.v == [0] * 16
        assert machine.memory.read_bytes(0xFF8, 8) == b"\xAA" * 8
        assert machine.registers.pc == 0x200
