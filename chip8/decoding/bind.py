from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Opcode(str, Enum):
    """Instruction mnemonics of the classic CHIP-8 set."""

    NOP = "NOP"
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE_IMM = "SE_IMM"
    SNE_IMM = "SNE_IMM"
    SE_REG = "SE_REG"
    LD_IMM = "LD_IMM"
    ADD_IMM = "ADD_IMM"
    LD_REG = "LD_REG"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD_REG = "ADD_REG"
    SUB_REG = "SUB_REG"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_REG = "SNE_REG"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_VX_DT = "LD_VX_DT"
    LD_KEY = "LD_KEY"
    LD_DT_VX = "LD_DT_VX"
    LD_ST_VX = "LD_ST_VX"
    ADD_I = "ADD_I"
    LD_F = "LD_F"
    BCD = "BCD"
    STORE = "STORE"
    LOAD = "LOAD"


@dataclass(frozen=True, slots=True)
class RegIndex:
    """Register selector V0..VF; usable directly as a sequence index."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xF:
            raise ValueError(f"Register index out of range: {self.value}")

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"V{self.value:X}"


@dataclass(frozen=True, slots=True)
class Nibble:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xF:
            raise ValueError(f"Nibble out of range: {self.value:#x}")


@dataclass(frozen=True, slots=True)
class Imm8:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"Imm8 out of range: {self.value:#x}")


@dataclass(frozen=True, slots=True)
class Addr12:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFF:
            raise ValueError(f"Addr12 out of range: {self.value:#x}")


@dataclass(frozen=True, slots=True)
class DecodedInstr:
    """A fetched word split into its opcode and every operand view.

    All operand fields are populated regardless of the opcode; handlers
    pick the ones their encoding defines.
    """

    word: int
    op: Opcode
    x: RegIndex
    y: RegIndex
    n: Nibble
    nn: Imm8
    nnn: Addr12

    @property
    def mnemonic(self) -> str:
        return self.op.value

    def __str__(self) -> str:
        return f"{self.word:04X} {self.op.value}"
