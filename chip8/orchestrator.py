"""Frame-driven harness wrapping the CHIP-8 machine.

One frame is one 60 Hz period: key changes are applied, a batch of
instructions runs, then the timers tick once. No wall clock is involved,
so a sequence of frames is fully reproducible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .config import MachineConfig
from .machine import Machine
from .state_model import MachineState, capture_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameInputs:
    """Inputs applied before advancing the machine by one frame."""

    press_keys: Sequence[int] = ()
    release_keys: Sequence[int] = ()
    release_all_keys: bool = False
    instructions: Optional[int] = None  # None: use the configured rate


@dataclass(frozen=True)
class FrameResult:
    """Outcome of a single frame."""

    executed: int
    sound_active: bool
    state: MachineState


class FrameOrchestrator:
    """High-level driver that produces deterministic per-frame snapshots."""

    def __init__(
        self,
        *,
        machine: Optional[Machine] = None,
        config: Optional[MachineConfig] = None,
    ) -> None:
        if machine is None:
            machine = Machine(config)
        self._machine = machine
        self._config = config or machine.config
        self._frames = 0

    @property
    def machine(self) -> Machine:
        return self._machine

    @property
    def frame_count(self) -> int:
        return self._frames

    @property
    def instructions_per_frame(self) -> int:
        return self._config.instructions_per_frame

    def run_frame(self, inputs: Optional[FrameInputs] = None) -> FrameResult:
        inputs = inputs or FrameInputs()
        machine = self._machine

        if inputs.release_all_keys:
            machine.keypad.release_all()
        machine.keypad.apply(press=inputs.press_keys, release=inputs.release_keys)

        budget = inputs.instructions
        if budget is None:
            budget = self.instructions_per_frame
        executed = machine.run(budget)
        machine.tick_timers()
        self._frames += 1

        logger.debug(
            "Frame %d: executed %d instructions, pc=0x%03X",
            self._frames,
            executed,
            machine.pc,
        )
        return FrameResult(
            executed=executed,
            sound_active=machine.sound_active,
            state=capture_state(machine),
        )

    def run_frames(self, frames: Iterable[Optional[FrameInputs]]) -> List[FrameResult]:
        return [self.run_frame(inputs) for inputs in frames]


__all__ = ["FrameInputs", "FrameResult", "FrameOrchestrator"]
