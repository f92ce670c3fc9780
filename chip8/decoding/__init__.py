"""
Typed decoding helpers for CHIP-8 instruction words.

Operands are bound to range-checked types so a register or address can
never be built out of range by the decoder or by callers.
"""

from .bind import (  # noqa: F401
    Addr12,
    DecodedInstr,
    Imm8,
    Nibble,
    Opcode,
    RegIndex,
)
from .decode_map import decode, encode_words, lookup_opcode, split_nibbles  # noqa: F401

__all__ = [
    "Addr12",
    "DecodedInstr",
    "Imm8",
    "Nibble",
    "Opcode",
    "RegIndex",
    "decode",
    "encode_words",
    "lookup_opcode",
    "split_nibbles",
]
