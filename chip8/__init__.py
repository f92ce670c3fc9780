"""CHIP-8 virtual machine core."""

from .config import MachineConfig
from .decoding import DecodedInstr, Opcode, decode, encode_words
from .display import FONTSET, FrameBuffer
from .errors import (
    Chip8Error,
    InvalidKeyError,
    MemoryAccessError,
    ProgramTooLargeError,
    StackOverflowError,
    StackUnderflowError,
    UnimplementedInstructionError,
)
from .keypad import Keypad
from .machine import Machine
from .orchestrator import FrameInputs, FrameOrchestrator, FrameResult
from .state_model import (
    CPUState,
    FieldDiff,
    MachineState,
    StateDiff,
    TimerState,
    capture_state,
    diff_states,
    empty_state_diff,
)
from .timers import CountdownTimers

__all__ = [
    "Machine",
    "MachineConfig",
    "DecodedInstr",
    "Opcode",
    "decode",
    "encode_words",
    "FONTSET",
    "FrameBuffer",
    "Keypad",
    "CountdownTimers",
    "FrameInputs",
    "FrameOrchestrator",
    "FrameResult",
    "CPUState",
    "TimerState",
    "MachineState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
    "empty_state_diff",
    "Chip8Error",
    "InvalidKeyError",
    "MemoryAccessError",
    "ProgramTooLargeError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnimplementedInstructionError",
]
