from __future__ import annotations

from functools import lru_cache
from typing import Dict, Tuple

from ..errors import UnimplementedInstructionError
from .bind import Addr12, DecodedInstr, Imm8, Nibble, Opcode, RegIndex

# Whole-word encodings (family 0x0).
_FIXED: Dict[int, Opcode] = {
    0x0000: Opcode.NOP,
    0x00E0: Opcode.CLS,
    0x00EE: Opcode.RET,
}

# Families fully determined by the top nibble. 5XYN accepts any low nibble.
_BY_FAMILY: Dict[int, Opcode] = {
    0x1: Opcode.JP,
    0x2: Opcode.CALL,
    0x3: Opcode.SE_IMM,
    0x4: Opcode.SNE_IMM,
    0x5: Opcode.SE_REG,
    0x6: Opcode.LD_IMM,
    0x7: Opcode.ADD_IMM,
    0xA: Opcode.LD_I,
    0xB: Opcode.JP_V0,
    0xC: Opcode.RND,
    0xD: Opcode.DRW,
}

# (family, low nibble)
_BY_LOW_NIBBLE: Dict[Tuple[int, int], Opcode] = {
    (0x8, 0x0): Opcode.LD_REG,
    (0x8, 0x1): Opcode.OR,
    (0x8, 0x2): Opcode.AND,
    (0x8, 0x3): Opcode.XOR,
    (0x8, 0x4): Opcode.ADD_REG,
    (0x8, 0x5): Opcode.SUB_REG,
    (0x8, 0x6): Opcode.SHR,
    (0x8, 0x7): Opcode.SUBN,
    (0x8, 0xE): Opcode.SHL,
    (0x9, 0x0): Opcode.SNE_REG,
}

# (family, low byte)
_BY_LOW_BYTE: Dict[Tuple[int, int], Opcode] = {
    (0xE, 0x9E): Opcode.SKP,
    (0xE, 0xA1): Opcode.SKNP,
    (0xF, 0x07): Opcode.LD_VX_DT,
    (0xF, 0x0A): Opcode.LD_KEY,
    (0xF, 0x15): Opcode.LD_DT_VX,
    (0xF, 0x18): Opcode.LD_ST_VX,
    (0xF, 0x1E): Opcode.ADD_I,
    (0xF, 0x29): Opcode.LD_F,
    (0xF, 0x33): Opcode.BCD,
    (0xF, 0x55): Opcode.STORE,
    (0xF, 0x65): Opcode.LOAD,
}


def split_nibbles(word: int) -> Tuple[int, int, int, int]:
    """Return the four nibbles of ``word``, most significant first."""

    return (
        (word & 0xF000) >> 12,
        (word & 0x0F00) >> 8,
        (word & 0x00F0) >> 4,
        word & 0x000F,
    )


def lookup_opcode(word: int) -> Opcode:
    """Resolve the opcode for ``word`` or raise ``UnimplementedInstructionError``."""

    family, _, _, low = split_nibbles(word)
    op = _FIXED.get(word)
    if op is None:
        op = _BY_FAMILY.get(family)
    if op is None:
        op = _BY_LOW_NIBBLE.get((family, low))
    if op is None:
        op = _BY_LOW_BYTE.get((family, word & 0xFF))
    if op is None:
        raise UnimplementedInstructionError(word)
    return op


@lru_cache(maxsize=4096)
def decode(word: int) -> DecodedInstr:
    """Decode a 16-bit instruction word.

    Results are immutable and cached, so repeated fetches of the same
    word share one ``DecodedInstr``.
    """

    if not 0 <= word <= 0xFFFF:
        raise ValueError(f"Instruction word out of range: {word:#x}")
    op = lookup_opcode(word)
    _, x, y, n = split_nibbles(word)
    return DecodedInstr(
        word=word,
        op=op,
        x=RegIndex(x),
        y=RegIndex(y),
        n=Nibble(n),
        nn=Imm8(word & 0xFF),
        nnn=Addr12(word & 0xFFF),
    )


def encode_words(*words: int) -> bytes:
    """Pack instruction words into a big-endian program image."""

    return b"".join((word & 0xFFFF).to_bytes(2, "big") for word in words)
