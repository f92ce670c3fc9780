"""Canonical machine state snapshots and diff utilities."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

from .machine import Machine


@dataclass(frozen=True)
class CPUState:
    """Program counter, index, stack and general registers."""

    pc: int
    index: int
    sp: int
    registers: Tuple[int, ...]
    stack: Tuple[int, ...]
    instruction_count: int


@dataclass(frozen=True)
class TimerState:
    """Delay and sound countdown values."""

    delay: int
    sound: int


@dataclass(frozen=True)
class MachineState:
    """Composite immutable snapshot of the whole machine."""

    cpu: CPUState
    timers: TimerState
    keys: Tuple[bool, ...]
    memory: bytes
    display: bytes  # bit-packed, 8 pixels per byte


@dataclass(frozen=True)
class FieldDiff:
    """Difference for a single named field."""

    name: str
    before: object
    after: object


@dataclass(frozen=True)
class StateDiff:
    """Aggregated differences between two machine states."""

    cpu: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    timers: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    keys: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    memory_changed: bool = False
    display_changed: bool = False

    def is_empty(self) -> bool:
        """Return True when no differences were recorded."""

        return (
            not self.cpu
            and not self.timers
            and not self.keys
            and not self.memory_changed
            and not self.display_changed
        )


def empty_state_diff() -> StateDiff:
    return StateDiff()


def capture_state(machine: Machine) -> MachineState:
    """Capture the current machine state as canonical snapshot."""

    cpu = CPUState(
        pc=machine.pc,
        index=machine.index,
        sp=machine.sp,
        registers=tuple(machine.registers),
        stack=tuple(machine.stack),
        instruction_count=machine.instruction_count,
    )
    timers = TimerState(delay=machine.timers.delay, sound=machine.timers.sound)
    return MachineState(
        cpu=cpu,
        timers=timers,
        keys=machine.keypad.snapshot(),
        memory=bytes(machine.memory),
        display=machine.display.packed(),
    )


def diff_states(before: Optional[MachineState], after: MachineState) -> StateDiff:
    """Compare two snapshots; ``before=None`` reports everything as changed."""

    if before is None:
        return StateDiff(
            cpu=_all_fields(after.cpu),
            timers=_all_fields(after.timers),
            keys=_key_diffs((False,) * len(after.keys), after.keys),
            memory_changed=True,
            display_changed=True,
        )

    return StateDiff(
        cpu=_field_diffs(before.cpu, after.cpu),
        timers=_field_diffs(before.timers, after.timers),
        keys=_key_diffs(before.keys, after.keys),
        memory_changed=before.memory != after.memory,
        display_changed=before.display != after.display,
    )


def _field_diffs(before: object, after: object) -> Tuple[FieldDiff, ...]:
    diffs = []
    for item in fields(after):
        old = getattr(before, item.name)
        new = getattr(after, item.name)
        if old != new:
            diffs.append(FieldDiff(item.name, old, new))
    return tuple(diffs)


def _all_fields(state: object) -> Tuple[FieldDiff, ...]:
    return tuple(
        FieldDiff(item.name, None, getattr(state, item.name)) for item in fields(state)
    )


def _key_diffs(
    before: Tuple[bool, ...], after: Tuple[bool, ...]
) -> Tuple[FieldDiff, ...]:
    return tuple(
        FieldDiff(f"key_{index:X}", old, new)
        for index, (old, new) in enumerate(zip(before, after))
        if old != new
    )


__all__ = [
    "CPUState",
    "TimerState",
    "MachineState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
    "empty_state_diff",
]
