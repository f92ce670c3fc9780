"""Index register, BCD and register dump/load."""

from __future__ import annotations

import pytest

from chip8 import Machine, MachineConfig, MemoryAccessError


def test_load_index_immediate(load_words) -> None:
    machine = load_words(0xA123)
    machine.execute_one()

    assert machine.index == 0x123


def test_add_to_index(load_words) -> None:
    machine = load_words(0xA300, 0x6042, 0xF01E)
    machine.run(3)

    assert machine.index == 0x342
    assert machine.registers[0xF] == 0


def test_add_to_index_wraps_at_16_bits(load_words) -> None:
    machine = load_words(0x6002, 0xF01E)
    machine.index = 0xFFFF
    machine.run(2)

    assert machine.index == 0x0001


@pytest.mark.parametrize(
    "value, digits",
    [(234, (2, 3, 34)), (7, (0, 0, 7)), (100, (1, 0, 0)), (255, (2, 5, 55))],
)
def test_bcd_default_keeps_last_two_digits_in_ones_cell(
    load_words, value: int, digits
) -> None:
    machine = load_words(0x6000 | value, 0xA300, 0xF033)
    machine.run(3)

    assert tuple(machine.memory[0x300:0x303]) == digits
    assert machine.index == 0x300


@pytest.mark.parametrize(
    "value, digits",
    [(234, (2, 3, 4)), (7, (0, 0, 7)), (255, (2, 5, 5))],
)
def test_bcd_with_decimal_modulus(value: int, digits) -> None:
    machine = Machine(MachineConfig.for_model("CHIP-8-BCD"))
    machine.load(bytes([0x60, value, 0xA3, 0x00, 0xF0, 0x33]))
    machine.run(3)

    assert tuple(machine.memory[0x300:0x303]) == digits


def test_bcd_past_top_of_memory_faults(load_words) -> None:
    machine = load_words(0xAFFE, 0xF033)
    machine.execute_one()

    with pytest.raises(MemoryAccessError):
        machine.execute_one()


def test_store_registers_inclusive(load_words) -> None:
    machine = load_words(0x6001, 0x6102, 0x6203, 0x6304, 0xA300, 0xF255)
    machine.run(6)

    assert tuple(machine.memory[0x300:0x304]) == (1, 2, 3, 0)
    assert machine.index == 0x300


def test_load_registers_inclusive(load_words) -> None:
    machine = load_words(0x63EE, 0xA300, 0xF265)
    machine.memory[0x300:0x304] = b"\x0A\x0B\x0C\x0D"
    machine.run(3)

    assert tuple(machine.registers[:4]) == (0x0A, 0x0B, 0x0C, 0xEE)
    assert machine.index == 0x300


def test_store_all_sixteen_registers(load_words) -> None:
    machine = load_words(*(0x6000 | (r << 8) | (r + 1) for r in range(16)), 0xA400, 0xFF55)
    machine.run(18)

    assert tuple(machine.memory[0x400:0x410]) == tuple(range(1, 17))


def test_store_past_top_of_memory_faults_without_writing(load_words) -> None:
    machine = load_words(0xAFF8, 0xFF55)
    machine.execute_one()
    before = bytes(machine.memory)

    with pytest.raises(MemoryAccessError):
        machine.execute_one()
    assert bytes(machine.memory) == before


def test_load_past_top_of_memory_faults(load_words) -> None:
    machine = load_words(0xAFFF, 0xF165)
    machine.execute_one()

    with pytest.raises(MemoryAccessError):
        machine.execute_one()
