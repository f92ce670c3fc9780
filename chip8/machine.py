"""CHIP-8 machine: owned state plus fetch/decode/execute."""

from __future__ import annotations

import functools
import logging
import random
from pathlib import Path
from typing import Callable, Dict, Optional, Union

import numpy as np

from .config import MachineConfig
from .constants import (
    BYTE_MASK,
    FLAG_REGISTER,
    FONT_BASE,
    FONTSET_SIZE,
    GLYPH_HEIGHT,
    INSTRUCTION_SIZE,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    NUM_REGISTERS,
    PROGRAM_START,
    STACK_DEPTH,
    WORD_MASK,
)
from .decoding import DecodedInstr, Opcode, decode
from .display import FONTSET, FrameBuffer
from .errors import (
    MemoryAccessError,
    ProgramTooLargeError,
    StackOverflowError,
    StackUnderflowError,
    UnimplementedInstructionError,
)
from .keypad import Keypad
from .timers import CountdownTimers

logger = logging.getLogger(__name__)

# Zero-argument callable producing a byte; injected so tests can make
# the random opcode deterministic.
RandomSource = Callable[[], int]
ProgramImage = Union[bytes, bytearray, memoryview]


def default_random_source(seed: Optional[int] = None) -> RandomSource:
    return functools.partial(random.Random(seed).getrandbits, 8)


class Machine:
    """Single CHIP-8 instance.

    The host drives it: ``load`` a program, then interleave
    ``execute_one`` (at its chosen instruction rate), ``tick_timers``
    (at 60 Hz) and key updates, reading the display and sound timer
    once per frame. Nothing here blocks, sleeps or reads a clock.
    """

    def __init__(
        self,
        config: Optional[MachineConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.config = config or MachineConfig()
        self._rng = rng or default_random_source(self.config.random_seed)

        self.memory = bytearray(MEMORY_SIZE)
        self.registers = bytearray(NUM_REGISTERS)
        self.stack = [0] * STACK_DEPTH
        self.sp = 0
        self.pc = PROGRAM_START
        self.index = 0
        self.display = FrameBuffer()
        self.keypad = Keypad()
        self.timers = CountdownTimers()
        self.instruction_count = 0

        self._handlers: Dict[Opcode, Callable[[DecodedInstr], None]] = {
            Opcode.NOP: self._op_nop,
            Opcode.CLS: self._op_cls,
            Opcode.RET: self._op_ret,
            Opcode.JP: self._op_jp,
            Opcode.CALL: self._op_call,
            Opcode.SE_IMM: self._op_se_imm,
            Opcode.SNE_IMM: self._op_sne_imm,
            Opcode.SE_REG: self._op_se_reg,
            Opcode.LD_IMM: self._op_ld_imm,
            Opcode.ADD_IMM: self._op_add_imm,
            Opcode.LD_REG: self._op_ld_reg,
            Opcode.OR: self._op_or,
            Opcode.AND: self._op_and,
            Opcode.XOR: self._op_xor,
            Opcode.ADD_REG: self._op_add_reg,
            Opcode.SUB_REG: self._op_sub_reg,
            Opcode.SHR: self._op_shr,
            Opcode.SUBN: self._op_subn,
            Opcode.SHL: self._op_shl,
            Opcode.SNE_REG: self._op_sne_reg,
            Opcode.LD_I: self._op_ld_i,
            Opcode.JP_V0: self._op_jp_v0,
            Opcode.RND: self._op_rnd,
            Opcode.DRW: self._op_drw,
            Opcode.SKP: self._op_skp,
            Opcode.SKNP: self._op_sknp,
            Opcode.LD_VX_DT: self._op_ld_vx_dt,
            Opcode.LD_KEY: self._op_ld_key,
            Opcode.LD_DT_VX: self._op_ld_dt_vx,
            Opcode.LD_ST_VX: self._op_ld_st_vx,
            Opcode.ADD_I: self._op_add_i,
            Opcode.LD_F: self._op_ld_f,
            Opcode.BCD: self._op_bcd,
            Opcode.STORE: self._op_store,
            Opcode.LOAD: self._op_load,
        }

        self.reset()

    # ------------------------------------------------------------------ #
    # Lifecycle

    def reset(self) -> None:
        """Restore the power-on state in place and reload the font."""
        self.memory[:] = bytes(MEMORY_SIZE)
        self.registers[:] = bytes(NUM_REGISTERS)
        for i in range(STACK_DEPTH):
            self.stack[i] = 0
        self.sp = 0
        self.pc = PROGRAM_START
        self.index = 0
        self.display.clear()
        self.keypad.reset()
        self.timers.reset()
        self.instruction_count = 0
        self.memory[FONT_BASE:FONT_BASE + FONTSET_SIZE] = FONTSET
        logger.debug("Machine reset")

    def load(self, program: ProgramImage) -> None:
        """Copy a program image into memory at the load address."""
        data = bytes(program)
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(
                f"Program size {len(data)} exceeds maximum {MAX_PROGRAM_SIZE}"
            )
        self.memory[PROGRAM_START:PROGRAM_START + len(data)] = data
        logger.debug("Loaded %d program bytes at 0x%03X", len(data), PROGRAM_START)

    def load_file(self, path: Union[str, Path]) -> None:
        self.load(Path(path).read_bytes())

    # ------------------------------------------------------------------ #
    # Host inputs

    def set_key(self, index: int, pressed: bool) -> None:
        self.keypad.set_key(index, pressed)

    def press_key(self, index: int) -> None:
        self.keypad.press(index)

    def release_key(self, index: int) -> None:
        self.keypad.release(index)

    def tick_timers(self) -> None:
        """Advance both countdown timers by one 60 Hz tick."""
        self.timers.tick()

    # ------------------------------------------------------------------ #
    # Host outputs

    @property
    def delay_timer(self) -> int:
        return self.timers.delay

    @delay_timer.setter
    def delay_timer(self, value: int) -> None:
        self.timers.delay = value & BYTE_MASK

    @property
    def sound_timer(self) -> int:
        return self.timers.sound

    @sound_timer.setter
    def sound_timer(self, value: int) -> None:
        self.timers.sound = value & BYTE_MASK

    @property
    def sound_active(self) -> bool:
        """True while the host should be emitting a tone."""
        return self.timers.sound_active

    def get_display_buffer(self) -> np.ndarray:
        return self.display.get_display_buffer()

    # ------------------------------------------------------------------ #
    # Execution

    def execute_one(self) -> DecodedInstr:
        """Fetch, decode and execute exactly one instruction."""
        address = self.pc
        word = self._fetch()
        try:
            instr = decode(word)
        except UnimplementedInstructionError:
            logger.error("Unimplemented opcode 0x%04X at 0x%03X", word, address)
            raise UnimplementedInstructionError(word, address) from None
        self._handlers[instr.op](instr)
        self.instruction_count += 1
        return instr

    def run(self, count: int) -> int:
        """Execute ``count`` instructions and return how many ran."""
        for _ in range(count):
            self.execute_one()
        return max(count, 0)

    def _fetch(self) -> int:
        if not 0 <= self.pc <= MEMORY_SIZE - INSTRUCTION_SIZE:
            raise MemoryAccessError(
                self.pc, f"Instruction fetch out of range: pc=0x{self.pc:04X}"
            )
        word = (self.memory[self.pc] << 8) | self.memory[self.pc + 1]
        self.pc += INSTRUCTION_SIZE
        return word

    def _check_range(self, start: int, length: int) -> None:
        if length <= 0:
            return
        end = start + length - 1
        if start < 0 or end >= MEMORY_SIZE:
            bad = start if start < 0 or start >= MEMORY_SIZE else end
            raise MemoryAccessError(bad)

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.pc += INSTRUCTION_SIZE

    def _push(self, value: int) -> None:
        if self.sp >= STACK_DEPTH:
            raise StackOverflowError(f"Call stack overflow (depth {STACK_DEPTH})")
        self.stack[self.sp] = value
        self.sp += 1

    def _pop(self) -> int:
        if self.sp == 0:
            raise StackUnderflowError("Return with empty call stack")
        self.sp -= 1
        return self.stack[self.sp]

    def _set_flag(self, value: bool) -> None:
        self.registers[FLAG_REGISTER] = 1 if value else 0

    # ------------------------------------------------------------------ #
    # Flow control

    def _op_nop(self, instr: DecodedInstr) -> None:
        pass

    def _op_cls(self, instr: DecodedInstr) -> None:
        self.display.clear()

    def _op_ret(self, instr: DecodedInstr) -> None:
        self.pc = self._pop()

    def _op_jp(self, instr: DecodedInstr) -> None:
        self.pc = instr.nnn.value

    def _op_call(self, instr: DecodedInstr) -> None:
        self._push(self.pc)
        self.pc = instr.nnn.value

    def _op_jp_v0(self, instr: DecodedInstr) -> None:
        self.pc = self.registers[0] + instr.nnn.value

    def _op_se_imm(self, instr: DecodedInstr) -> None:
        self._skip_if(self.registers[instr.x] == instr.nn.value)

    def _op_sne_imm(self, instr: DecodedInstr) -> None:
        self._skip_if(self.registers[instr.x] != instr.nn.value)

    def _op_se_reg(self, instr: DecodedInstr) -> None:
        self._skip_if(self.registers[instr.x] == self.registers[instr.y])

    def _op_sne_reg(self, instr: DecodedInstr) -> None:
        self._skip_if(self.registers[instr.x] != self.registers[instr.y])

    # ------------------------------------------------------------------ #
    # Register arithmetic

    def _op_ld_imm(self, instr: DecodedInstr) -> None:
        self.registers[instr.x] = instr.nn.value

    def _op_add_imm(self, instr: DecodedInstr) -> None:
        self.registers[instr.x] = (self.registers[instr.x] + instr.nn.value) & BYTE_MASK

    def _op_ld_reg(self, instr: DecodedInstr) -> None:
        self.registers[instr.x] = self.registers[instr.y]

    def _op_or(self, instr: DecodedInstr) -> None:
        self.registers[instr.x] |= self.registers[instr.y]

    def _op_and(self, instr: DecodedInstr) -> None:
        self.registers[instr.x] &= self.registers[instr.y]

    def _op_xor(self, instr: DecodedInstr) -> None:
        self.registers[instr.x] ^= self.registers[instr.y]

    # The flag is written after the result so that VF as a destination
    # ends up holding the flag.

    def _op_add_reg(self, instr: DecodedInstr) -> None:
        total = self.registers[instr.x] + self.registers[instr.y]
        self.registers[instr.x] = total & BYTE_MASK
        self._set_flag(total > BYTE_MASK)

    def _op_sub_reg(self, instr: DecodedInstr) -> None:
        vx, vy = self.registers[instr.x], self.registers[instr.y]
        self.registers[instr.x] = (vx - vy) & BYTE_MASK
        self._set_flag(vx >= vy)

    def _op_subn(self, instr: DecodedInstr) -> None:
        vx, vy = self.registers[instr.x], self.registers[instr.y]
        self.registers[instr.x] = (vy - vx) & BYTE_MASK
        self._set_flag(vy >= vx)

    def _op_shr(self, instr: DecodedInstr) -> None:
        vx = self.registers[instr.x]
        self.registers[instr.x] = vx >> 1
        self.registers[FLAG_REGISTER] = vx & 1

    def _op_shl(self, instr: DecodedInstr) -> None:
        vx = self.registers[instr.x]
        self.registers[instr.x] = (vx << 1) & BYTE_MASK
        self.registers[FLAG_REGISTER] = (vx >> 7) & 1

    def _op_rnd(self, instr: DecodedInstr) -> None:
        self.registers[instr.x] = (self._rng() & BYTE_MASK) & instr.nn.value

    # ------------------------------------------------------------------ #
    # Display and keypad

    def _op_drw(self, instr: DecodedInstr) -> None:
        height = instr.n.value
        self._check_range(self.index, height)
        rows = self.memory[self.index:self.index + height]
        # Columns start at VY and rows at VX, transposed relative to the
        # usual DXYN reading.
        collided = self.display.draw_sprite(
            x=self.registers[instr.y],
            y=self.registers[instr.x],
            rows=rows,
        )
        self._set_flag(collided)

    def _op_skp(self, instr: DecodedInstr) -> None:
        self._skip_if(self.keypad.is_pressed(self.registers[instr.x]))

    def _op_sknp(self, instr: DecodedInstr) -> None:
        self._skip_if(not self.keypad.is_pressed(self.registers[instr.x]))

    def _op_ld_key(self, instr: DecodedInstr) -> None:
        key = self.keypad.first_pressed()
        if key is None:
            # Re-run this instruction on the next call.
            self.pc -= INSTRUCTION_SIZE
        else:
            self.registers[instr.x] = key

    # ------------------------------------------------------------------ #
    # Timers

    def _op_ld_vx_dt(self, instr: DecodedInstr) -> None:
        self.registers[instr.x] = self.timers.delay

    def _op_ld_dt_vx(self, instr: DecodedInstr) -> None:
        self.timers.delay = self.registers[instr.x]

    def _op_ld_st_vx(self, instr: DecodedInstr) -> None:
        self.timers.sound = self.registers[instr.x]

    # ------------------------------------------------------------------ #
    # Index register and memory

    def _op_ld_i(self, instr: DecodedInstr) -> None:
        self.index = instr.nnn.value

    def _op_add_i(self, instr: DecodedInstr) -> None:
        self.index = (self.index + self.registers[instr.x]) & WORD_MASK

    def _op_ld_f(self, instr: DecodedInstr) -> None:
        self.index = FONT_BASE + self.registers[instr.x] * GLYPH_HEIGHT

    def _op_bcd(self, instr: DecodedInstr) -> None:
        value = self.registers[instr.x]
        self._check_range(self.index, 3)
        self.memory[self.index] = value // 100
        self.memory[self.index + 1] = (value // 10) % 10
        # Modulus 100 (the default) keeps the tens in the last cell for v >= 10.
        self.memory[self.index + 2] = value % self.config.bcd_ones_modulus

    def _op_store(self, instr: DecodedInstr) -> None:
        count = instr.x.value + 1
        self._check_range(self.index, count)
        self.memory[self.index:self.index + count] = self.registers[:count]

    def _op_load(self, instr: DecodedInstr) -> None:
        count = instr.x.value + 1
        self._check_range(self.index, count)
        self.registers[:count] = self.memory[self.index:self.index + count]


__all__ = ["Machine", "RandomSource", "default_random_source"]
