"""Delay and sound countdown timers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CountdownTimers:
    """Two 8-bit timers decremented once per external 60 Hz tick."""

    delay: int = 0
    sound: int = 0

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0

    def tick(self) -> None:
        """Decrement each nonzero timer by one."""

        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    @property
    def sound_active(self) -> bool:
        return self.sound > 0


__all__ = ["CountdownTimers"]
