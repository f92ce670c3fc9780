"""Fault taxonomy raised by the CHIP-8 core.

Every fault is fatal for the running program: the machine does not
recover by itself and the host is expected to ``reset()`` it.
"""

from __future__ import annotations

from typing import Optional


class Chip8Error(Exception):
    """Base class for all faults raised by the machine."""


class UnimplementedInstructionError(Chip8Error):
    """Raised when an instruction word matches no known opcode."""

    def __init__(self, word: int, address: Optional[int] = None) -> None:
        self.word = word & 0xFFFF
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unimplemented opcode 0x{self.word:04X}{where}")


class StackOverflowError(Chip8Error, IndexError):
    """CALL with all 16 stack slots in use."""


class StackUnderflowError(Chip8Error, IndexError):
    """RET with an empty call stack."""


class MemoryAccessError(Chip8Error, IndexError):
    """Access outside the 4 KB address space."""

    def __init__(self, address: int, message: Optional[str] = None) -> None:
        self.address = address
        super().__init__(message or f"Memory access out of range: 0x{address:04X}")


class ProgramTooLargeError(Chip8Error, ValueError):
    """Program image does not fit between the load address and the top of memory."""


class InvalidKeyError(Chip8Error, ValueError):
    """Key index outside the 16-key keypad."""


__all__ = [
    "Chip8Error",
    "UnimplementedInstructionError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "ProgramTooLargeError",
    "InvalidKeyError",
]
